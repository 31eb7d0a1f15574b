# Entity Models
from hotel_reservation.models.ontology import (
    Customer, RoomType, Room, Reservation, Payment, Service,
    ReservationServiceItem, Employee, ReservationLog,
    DbRole, TableGrant, LoginAccount, RoleMember,
    ReservationStatus, Privilege
)

__all__ = [
    'Customer', 'RoomType', 'Room', 'Reservation', 'Payment', 'Service',
    'ReservationServiceItem', 'Employee', 'ReservationLog',
    'DbRole', 'TableGrant', 'LoginAccount', 'RoleMember',
    'ReservationStatus', 'Privilege'
]
