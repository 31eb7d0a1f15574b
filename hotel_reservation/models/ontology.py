"""
实体对象定义
酒店预订系统的关系模型：客人、房型、房间、预订、支付、附加服务、员工、预订日志，
以及按表授权的角色/账号模型
"""
from datetime import datetime, date
from enum import Enum
from sqlalchemy import (
    Column, Integer, String, DateTime, Date, ForeignKey, Boolean, Numeric,
    CheckConstraint, UniqueConstraint, Enum as SQLEnum, func
)
from sqlalchemy.orm import relationship
from hotel_reservation.database import Base


# ============== 枚举定义 ==============

class ReservationStatus(str, Enum):
    """预订状态枚举"""
    PENDING = "Pending"        # 待确认
    CONFIRMED = "Confirmed"    # 已确认
    CANCELLED = "Cancelled"    # 已取消
    COMPLETED = "Completed"    # 已离店


class Privilege(str, Enum):
    """表级权限"""
    SELECT = "SELECT"
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


# ============== 业务实体 ==============
# 一对多关系均为 passive_deletes="all"：ORM 不会置空子表外键，
# 删除仍被引用的行由数据库外键约束拒绝

class Customer(Base):
    """
    客人对象
    id_number 为身份证号，存在时唯一
    """
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    email = Column(String(100))
    phone = Column(String(20))
    id_number = Column(String(11), unique=True)

    reservations = relationship("Reservation", back_populates="customer", passive_deletes="all")


class RoomType(Base):
    """房型对象"""
    __tablename__ = "room_types"

    id = Column(Integer, primary_key=True, index=True)
    type_name = Column(String(50), nullable=False)
    description = Column(String(255))

    rooms = relationship("Room", back_populates="room_type", passive_deletes="all")


class Room(Base):
    """
    房间对象
    is_available 是派生状态：由已确认预订决定，不应被单独修改
    """
    __tablename__ = "rooms"

    id = Column(Integer, primary_key=True, index=True)
    room_number = Column(String(10), nullable=False)
    floor = Column(Integer)
    price_per_night = Column(Numeric(8, 2), nullable=False)
    room_type_id = Column(Integer, ForeignKey("room_types.id"), nullable=False)
    is_available = Column(Boolean, default=True, nullable=False)

    room_type = relationship("RoomType", back_populates="rooms")
    reservations = relationship("Reservation", back_populates="room", passive_deletes="all")


class Reservation(Base):
    """
    预订对象 - 聚合根
    拥有支付记录和附加服务关联
    """
    __tablename__ = "reservations"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False)
    room_id = Column(Integer, ForeignKey("rooms.id"), nullable=False)
    check_in_date = Column(Date, nullable=False)
    check_out_date = Column(Date, nullable=False)
    reservation_date = Column(Date, default=date.today)
    status = Column(
        SQLEnum(ReservationStatus, values_callable=_enum_values,
                native_enum=False, length=20),
        default=ReservationStatus.PENDING,
        nullable=False
    )

    customer = relationship("Customer", back_populates="reservations")
    room = relationship("Room", back_populates="reservations")
    payments = relationship("Payment", back_populates="reservation", passive_deletes="all")
    services = relationship("ReservationServiceItem", back_populates="reservation", passive_deletes="all")

    __table_args__ = (
        CheckConstraint("check_out_date > check_in_date", name="ck_reservation_stay_dates"),
    )


class Payment(Base):
    """支付记录对象，属于 Reservation"""
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    reservation_id = Column(Integer, ForeignKey("reservations.id"), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    payment_date = Column(Date, default=date.today)
    method = Column(String(30))

    reservation = relationship("Reservation", back_populates="payments")

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_payment_amount_positive"),
    )


class Service(Base):
    """附加服务对象（早餐、接送机等）"""
    __tablename__ = "services"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False)
    price = Column(Numeric(7, 2), nullable=False)

    reservations = relationship("ReservationServiceItem", back_populates="service", passive_deletes="all")


class ReservationServiceItem(Base):
    """预订-附加服务关联（多对多）"""
    __tablename__ = "reservation_services"

    reservation_id = Column(Integer, ForeignKey("reservations.id"), primary_key=True)
    service_id = Column(Integer, ForeignKey("services.id"), primary_key=True)
    quantity = Column(Integer, default=1, nullable=False)

    reservation = relationship("Reservation", back_populates="services")
    service = relationship("Service", back_populates="reservations")


class Employee(Base):
    """员工对象"""
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    role = Column(String(50), nullable=False)
    phone = Column(String(20))


class ReservationLog(Base):
    """
    预订日志
    只追加：由预订插入钩子写入，系统本身从不修改或删除。
    reservation_id 不设外键，预订删除后日志仍保留。
    """
    __tablename__ = "reservation_logs"

    id = Column(Integer, primary_key=True, index=True)
    reservation_id = Column(Integer, index=True)
    log_date = Column(DateTime, server_default=func.now(), nullable=False)
    action = Column(String(100))


# ============== 角色与授权 ==============

class DbRole(Base):
    """数据库角色，例如 receptionist"""
    __tablename__ = "db_roles"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), unique=True, nullable=False)

    grants = relationship("TableGrant", back_populates="role", cascade="all, delete-orphan")
    members = relationship("RoleMember", back_populates="role", cascade="all, delete-orphan")


class TableGrant(Base):
    """角色在某张表上的一项权限"""
    __tablename__ = "table_grants"

    id = Column(Integer, primary_key=True, index=True)
    role_id = Column(Integer, ForeignKey("db_roles.id"), nullable=False)
    table_name = Column(String(50), nullable=False)
    privilege = Column(
        SQLEnum(Privilege, values_callable=_enum_values, native_enum=False, length=10),
        nullable=False
    )

    role = relationship("DbRole", back_populates="grants")

    __table_args__ = (
        UniqueConstraint("role_id", "table_name", "privilege", name="uq_role_table_privilege"),
    )


class LoginAccount(Base):
    """
    登录账号
    is_admin 账号拥有全部表的全部权限
    """
    __tablename__ = "login_accounts"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    is_admin = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    memberships = relationship("RoleMember", back_populates="account", cascade="all, delete-orphan")

    @property
    def role_names(self):
        return sorted(m.role.name for m in self.memberships)


class RoleMember(Base):
    """账号-角色成员关系"""
    __tablename__ = "role_members"

    role_id = Column(Integer, ForeignKey("db_roles.id"), primary_key=True)
    account_id = Column(Integer, ForeignKey("login_accounts.id"), primary_key=True)

    role = relationship("DbRole", back_populates="members")
    account = relationship("LoginAccount", back_populates="memberships")
