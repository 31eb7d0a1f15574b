"""
Pytest 配置和共享 fixtures
"""
import pytest
from datetime import date
from decimal import Decimal
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from hotel_reservation.database import Base, get_db
from hotel_reservation.models import ontology
from hotel_reservation.models.ontology import (
    Customer, LoginAccount, Reservation, ReservationStatus, Room, RoomType, Service
)
from hotel_reservation.security.auth import get_password_hash, create_access_token
from hotel_reservation.security.permissions import RECEPTIONIST, RESERVATION_STAFF
from hotel_reservation.services.hooks import TransactionHooks
from hotel_reservation.services.permission_service import PermissionService
from hotel_reservation.services.reservation_hooks import build_default_hooks
from hotel_reservation.main import app


@pytest.fixture(scope="function")
def db_engine():
    """创建内存数据库引擎"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """创建数据库会话"""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture(scope="function")
def client(db_session):
    """创建测试客户端"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def hooks() -> TransactionHooks:
    """默认钩子（可用状态单向传播）"""
    return build_default_hooks(restore_availability=False)


@pytest.fixture
def restoring_hooks() -> TransactionHooks:
    """取消/离店/删除时恢复可用状态的钩子"""
    return build_default_hooks(restore_availability=True)


# ============== 认证相关 Fixtures ==============

def _make_account(db_session, username, is_admin=False, roles=()):
    service = PermissionService(db_session)
    account = LoginAccount(
        username=username,
        password_hash=get_password_hash("123456"),
        is_admin=is_admin,
        is_active=True
    )
    db_session.add(account)
    db_session.commit()
    if roles:
        service.seed_default_roles()
        for role_name in roles:
            service.add_role_member(role_name, username)
    db_session.refresh(account)
    return account


@pytest.fixture
def admin_token(db_session):
    """创建管理员账号并返回token"""
    account = _make_account(db_session, "admin", is_admin=True)
    return create_access_token(account.id, account.username, [], True)


@pytest.fixture
def receptionist_token(db_session):
    """创建 receptionist 角色账号并返回token"""
    account = _make_account(db_session, "user_john", roles=[RECEPTIONIST])
    return create_access_token(account.id, account.username, account.role_names)


@pytest.fixture
def staff_token(db_session):
    """创建 reservation_staff 角色账号并返回token"""
    account = _make_account(db_session, "staff1", roles=[RESERVATION_STAFF])
    return create_access_token(account.id, account.username, account.role_names)


@pytest.fixture
def admin_auth_headers(admin_token):
    """返回管理员认证的请求头"""
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def receptionist_auth_headers(receptionist_token):
    """返回 receptionist 认证的请求头"""
    return {"Authorization": f"Bearer {receptionist_token}"}


@pytest.fixture
def staff_auth_headers(staff_token):
    """返回 reservation_staff 认证的请求头"""
    return {"Authorization": f"Bearer {staff_token}"}


# ============== 实体相关 Fixtures ==============

@pytest.fixture
def sample_customer(db_session):
    """创建测试客人"""
    customer = Customer(
        first_name="Ada",
        last_name="Lovelace",
        email="ada@x.com",
        phone="555-0100",
        id_number="12345678901"
    )
    db_session.add(customer)
    db_session.commit()
    db_session.refresh(customer)
    return customer


@pytest.fixture
def sample_room_type(db_session):
    """创建测试房型"""
    room_type = RoomType(type_name="Standard", description="Standard room")
    db_session.add(room_type)
    db_session.commit()
    db_session.refresh(room_type)
    return room_type


@pytest.fixture
def sample_room(db_session, sample_room_type):
    """创建测试房间"""
    room = Room(
        room_number="101",
        floor=1,
        price_per_night=Decimal("100.00"),
        room_type_id=sample_room_type.id,
        is_available=True
    )
    db_session.add(room)
    db_session.commit()
    db_session.refresh(room)
    return room


@pytest.fixture
def sample_room_2(db_session, sample_room_type):
    """创建第二个测试房间"""
    room = Room(
        room_number="102",
        floor=1,
        price_per_night=Decimal("120.00"),
        room_type_id=sample_room_type.id,
        is_available=True
    )
    db_session.add(room)
    db_session.commit()
    db_session.refresh(room)
    return room


@pytest.fixture
def sample_reservation(db_session, sample_customer, sample_room):
    """直接写入一条待确认预订（不经过钩子）"""
    reservation = Reservation(
        customer_id=sample_customer.id,
        room_id=sample_room.id,
        check_in_date=date(2024, 6, 1),
        check_out_date=date(2024, 6, 3),
        status=ReservationStatus.PENDING
    )
    db_session.add(reservation)
    db_session.commit()
    db_session.refresh(reservation)
    return reservation


@pytest.fixture
def sample_service(db_session):
    """创建测试附加服务"""
    service = Service(name="Breakfast", price=Decimal("15.00"))
    db_session.add(service)
    db_session.commit()
    db_session.refresh(service)
    return service
