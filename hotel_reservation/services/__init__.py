# Business Services
from hotel_reservation.services.customer_service import CustomerService
from hotel_reservation.services.room_service import RoomService
from hotel_reservation.services.reservation_service import ReservationService
from hotel_reservation.services.payment_service import PaymentService
from hotel_reservation.services.catalog_service import CatalogService
from hotel_reservation.services.employee_service import EmployeeService
from hotel_reservation.services.report_service import ReportService
from hotel_reservation.services.schema_service import SchemaService
from hotel_reservation.services.permission_service import PermissionService

__all__ = [
    'CustomerService', 'RoomService', 'ReservationService', 'PaymentService',
    'CatalogService', 'EmployeeService', 'ReportService', 'SchemaService',
    'PermissionService'
]
