"""
Pydantic 模式定义
用于 API 请求/响应验证
"""
from datetime import datetime, date
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict
from hotel_reservation.models.ontology import ReservationStatus, Privilege


# ============== 通用 Schemas ==============

class DeleteResult(BaseModel):
    """删除操作返回的行数"""
    deleted: int


# ============== 客人 Schemas ==============

class CustomerCreate(BaseModel):
    first_name: str = Field(..., max_length=50)
    last_name: str = Field(..., max_length=50)
    email: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)
    id_number: Optional[str] = Field(None, max_length=11)


class CustomerResponse(CustomerCreate):
    id: int
    model_config = ConfigDict(from_attributes=True)


class CustomerCreated(BaseModel):
    id: int


# ============== 房型/房间 Schemas ==============

class RoomTypeCreate(BaseModel):
    type_name: str = Field(..., max_length=50)
    description: Optional[str] = Field(None, max_length=255)


class RoomTypeResponse(RoomTypeCreate):
    id: int
    model_config = ConfigDict(from_attributes=True)


class RoomCreate(BaseModel):
    room_number: str = Field(..., max_length=10)
    floor: Optional[int] = None
    price_per_night: Decimal = Field(..., ge=0, max_digits=8, decimal_places=2)
    room_type_id: int


class RoomResponse(RoomCreate):
    id: int
    is_available: bool
    model_config = ConfigDict(from_attributes=True)


# ============== 预订 Schemas ==============

class ReservationCreate(BaseModel):
    customer_id: int
    room_id: int
    check_in_date: date
    check_out_date: date


class ReservationResponse(ReservationCreate):
    id: int
    reservation_date: Optional[date] = None
    status: ReservationStatus
    model_config = ConfigDict(from_attributes=True)


class ReservationCreated(BaseModel):
    id: int
    status: ReservationStatus
    model_config = ConfigDict(from_attributes=True)


class ReservationStatusUpdate(BaseModel):
    status: ReservationStatus


class ReservationBatchStatusUpdate(BaseModel):
    reservation_ids: List[int] = Field(..., min_length=1)
    status: ReservationStatus


class CustomerReservationRow(BaseModel):
    """按客人查询预订的结果行"""
    reservation_id: int
    room_id: int
    check_in_date: date
    check_out_date: date
    status: ReservationStatus


class ReservationLogResponse(BaseModel):
    id: int
    reservation_id: Optional[int]
    log_date: datetime
    action: Optional[str]
    model_config = ConfigDict(from_attributes=True)


# ============== 支付 Schemas ==============

class PaymentCreate(BaseModel):
    reservation_id: int
    amount: Decimal = Field(..., max_digits=10, decimal_places=2)
    method: Optional[str] = Field(None, max_length=30)
    payment_date: Optional[date] = None


class PaymentResponse(PaymentCreate):
    id: int
    model_config = ConfigDict(from_attributes=True)


# ============== 附加服务 Schemas ==============

class ServiceCreate(BaseModel):
    name: str = Field(..., max_length=50)
    price: Decimal = Field(..., ge=0, max_digits=7, decimal_places=2)


class ServiceResponse(ServiceCreate):
    id: int
    model_config = ConfigDict(from_attributes=True)


class ReservationServiceCreate(BaseModel):
    service_id: int
    quantity: int = Field(default=1, ge=1)


class ReservationServiceResponse(BaseModel):
    reservation_id: int
    service_id: int
    quantity: int
    model_config = ConfigDict(from_attributes=True)


# ============== 员工 Schemas ==============

class EmployeeCreate(BaseModel):
    first_name: str = Field(..., max_length=50)
    last_name: str = Field(..., max_length=50)
    role: str = Field(..., max_length=50)
    phone: Optional[str] = Field(None, max_length=20)


class EmployeeUpdate(BaseModel):
    first_name: Optional[str] = Field(None, max_length=50)
    last_name: Optional[str] = Field(None, max_length=50)
    role: Optional[str] = Field(None, max_length=50)
    phone: Optional[str] = Field(None, max_length=20)


class EmployeeResponse(EmployeeCreate):
    id: int
    model_config = ConfigDict(from_attributes=True)


# ============== 报表 Schemas ==============

class CustomerReservationView(BaseModel):
    reservation_id: int
    customer_name: str
    room_id: int
    check_in_date: date
    check_out_date: date
    status: ReservationStatus


class CustomerRosterRow(BaseModel):
    first_name: str
    last_name: str
    email: Optional[str] = None


class FrequentCustomerRow(BaseModel):
    customer_id: int
    reservation_count: int


class PaymentDescriptionRow(BaseModel):
    payment_id: int
    amount: Decimal
    method: Optional[str] = None
    payment_info: str


class ReportSummary(BaseModel):
    min_room_price: Optional[Decimal] = None
    max_service_price: Optional[Decimal] = None
    avg_payment_amount: Optional[Decimal] = None
    reservation_count: int = 0


# ============== 认证/授权 Schemas ==============

class LoginRequest(BaseModel):
    username: str
    password: str


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    username: str
    is_admin: bool
    roles: List[str] = []


class AccountCreate(BaseModel):
    username: str = Field(..., max_length=50)
    password: str = Field(..., min_length=6)
    is_admin: bool = False


class AccountResponse(BaseModel):
    id: int
    username: str
    is_admin: bool
    is_active: bool
    role_names: List[str] = []
    model_config = ConfigDict(from_attributes=True)


class RoleCreate(BaseModel):
    name: str = Field(..., max_length=50)


class GrantCreate(BaseModel):
    table_name: str = Field(..., max_length=50)
    privilege: Privilege


class GrantResponse(GrantCreate):
    id: int
    model_config = ConfigDict(from_attributes=True)


class RoleResponse(BaseModel):
    id: int
    name: str
    grants: List[GrantResponse] = []
    model_config = ConfigDict(from_attributes=True)


class RoleMemberCreate(BaseModel):
    username: str
