"""
集中定义受保护的表名和默认角色授权
"""
from hotel_reservation.models.ontology import Privilege

# 业务表
CUSTOMERS = "customers"
ROOM_TYPES = "room_types"
ROOMS = "rooms"
RESERVATIONS = "reservations"
PAYMENTS = "payments"
SERVICES = "services"
RESERVATION_SERVICES = "reservation_services"
EMPLOYEES = "employees"
RESERVATION_LOGS = "reservation_logs"

ALL_PRIVILEGES = (Privilege.SELECT, Privilege.INSERT, Privilege.UPDATE, Privilege.DELETE)

# 默认角色
RECEPTIONIST = "receptionist"
RESERVATION_STAFF = "reservation_staff"

DEFAULT_ROLE_GRANTS = {
    RECEPTIONIST: {
        CUSTOMERS: (Privilege.SELECT,),
    },
    RESERVATION_STAFF: {
        CUSTOMERS: ALL_PRIVILEGES,
        RESERVATIONS: ALL_PRIVILEGES,
        PAYMENTS: ALL_PRIVILEGES,
        RESERVATION_SERVICES: ALL_PRIVILEGES,
        ROOMS: (Privilege.SELECT,),
        ROOM_TYPES: (Privilege.SELECT,),
        SERVICES: (Privilege.SELECT,),
    },
}
