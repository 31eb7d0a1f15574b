"""
初始化数据脚本
创建：房型、房间、附加服务、员工、默认角色授权、登录账号

默认账号：
  admin        管理员        密码 admin123
  user_john    receptionist  密码 StrongP@ssword123

运行：python -m hotel_reservation.init_data
"""
import logging
from decimal import Decimal

from hotel_reservation.database import SessionLocal, init_db
from hotel_reservation.models.ontology import Employee, Room, RoomType, Service
from hotel_reservation.models.schemas import AccountCreate
from hotel_reservation.security.permissions import RECEPTIONIST
from hotel_reservation.services.permission_service import PermissionService

logger = logging.getLogger(__name__)

ROOM_TYPES = [
    ("Standard", "Standard room with one queen bed"),
    ("Deluxe", "Larger room with city view"),
    ("Suite", "Separate living area and king bed"),
]

# (房号, 楼层, 房型, 价格)
ROOMS = [
    ("101", 1, "Standard", Decimal("100.00")),
    ("102", 1, "Standard", Decimal("100.00")),
    ("201", 2, "Deluxe", Decimal("180.00")),
    ("202", 2, "Deluxe", Decimal("180.00")),
    ("301", 3, "Suite", Decimal("320.00")),
]

SERVICES = [
    ("Breakfast", Decimal("15.00")),
    ("Airport Transfer", Decimal("40.00")),
    ("Spa", Decimal("75.00")),
]

EMPLOYEES = [
    ("Mary", "Smith", "Receptionist", "555-0101"),
    ("Tom", "Brown", "Manager", "555-0102"),
    ("Lisa", "White", "Housekeeping", "555-0103"),
]


def init_room_types(db):
    """初始化房型"""
    room_types = {}
    for type_name, description in ROOM_TYPES:
        room_type = db.query(RoomType).filter(RoomType.type_name == type_name).first()
        if not room_type:
            room_type = RoomType(type_name=type_name, description=description)
            db.add(room_type)
            db.flush()
        room_types[type_name] = room_type
    return room_types


def init_rooms(db, room_types):
    """初始化房间"""
    for room_number, floor, type_name, price in ROOMS:
        if not db.query(Room).filter(Room.room_number == room_number).first():
            db.add(Room(
                room_number=room_number,
                floor=floor,
                room_type_id=room_types[type_name].id,
                price_per_night=price,
                is_available=True
            ))


def init_services(db):
    """初始化附加服务"""
    for name, price in SERVICES:
        if not db.query(Service).filter(Service.name == name).first():
            db.add(Service(name=name, price=price))


def init_employees(db):
    """初始化员工"""
    for first_name, last_name, role, phone in EMPLOYEES:
        exists = db.query(Employee).filter(
            Employee.first_name == first_name, Employee.last_name == last_name
        ).first()
        if not exists:
            db.add(Employee(first_name=first_name, last_name=last_name, role=role, phone=phone))


def init_accounts(db):
    """初始化默认角色和登录账号"""
    service = PermissionService(db)
    service.seed_default_roles()

    if not service.get_account("admin"):
        service.create_account(AccountCreate(username="admin", password="admin123", is_admin=True))

    if not service.get_account("user_john"):
        service.create_account(AccountCreate(username="user_john", password="StrongP@ssword123"))
    service.add_role_member(RECEPTIONIST, "user_john")


def main():
    logging.basicConfig(level=logging.INFO)
    init_db()
    db = SessionLocal()
    try:
        room_types = init_room_types(db)
        init_rooms(db, room_types)
        init_services(db)
        init_employees(db)
        db.commit()
        init_accounts(db)
        logger.info("Sample data initialised")
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
