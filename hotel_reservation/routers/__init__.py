# API Routers
from hotel_reservation.routers import (
    auth, customers, rooms, reservations, payments, catalog,
    employees, reports, audit_logs, schema, roles
)

__all__ = [
    'auth', 'customers', 'rooms', 'reservations', 'payments', 'catalog',
    'employees', 'reports', 'audit_logs', 'schema', 'roles'
]
