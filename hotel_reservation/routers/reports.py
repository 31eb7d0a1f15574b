"""
报表路由
"""
from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from hotel_reservation.database import get_db
from hotel_reservation.models.ontology import Privilege
from hotel_reservation.models.schemas import (
    CustomerReservationView, CustomerRosterRow, CustomerResponse, FrequentCustomerRow,
    PaymentDescriptionRow, PaymentResponse, ReportSummary, ReservationResponse, RoomResponse
)
from hotel_reservation.security.auth import require_table_permission
from hotel_reservation.security.permissions import (
    CUSTOMERS, PAYMENTS, RESERVATIONS, ROOM_TYPES, ROOMS, SERVICES
)
from hotel_reservation.services.report_service import ReportService

router = APIRouter(prefix="/reports", tags=["报表"])

can_read_customers = Depends(require_table_permission(CUSTOMERS, Privilege.SELECT))
can_read_reservations = Depends(require_table_permission(RESERVATIONS, Privilege.SELECT))
can_read_payments = Depends(require_table_permission(PAYMENTS, Privilege.SELECT))
can_read_rooms = Depends(require_table_permission(ROOMS, Privilege.SELECT))
can_read_room_types = Depends(require_table_permission(ROOM_TYPES, Privilege.SELECT))
can_read_services = Depends(require_table_permission(SERVICES, Privilege.SELECT))


# ============== 视图 ==============

@router.get("/customer-reservations", response_model=List[CustomerReservationView],
            dependencies=[can_read_customers, can_read_reservations])
def customer_reservations(db: Session = Depends(get_db)):
    """客人预订视图"""
    return ReportService(db).customer_reservations()


@router.get("/customer-roster", response_model=List[CustomerRosterRow],
            dependencies=[can_read_customers])
def customer_roster(db: Session = Depends(get_db)):
    """客人名册"""
    return ReportService(db).customer_roster()


@router.get("/upcoming-reservations", response_model=List[ReservationResponse],
            dependencies=[can_read_reservations])
def upcoming_reservations(db: Session = Depends(get_db)):
    """即将到来的预订"""
    return ReportService(db).upcoming_reservations()


# ============== 查询 ==============

@router.get("/top-payments", response_model=List[PaymentResponse],
            dependencies=[can_read_payments])
def top_payments(db: Session = Depends(get_db)):
    """金额最大的支付"""
    return ReportService(db).top_payments()


@router.get("/customers-with-reservations", response_model=List[CustomerResponse],
            dependencies=[can_read_customers, can_read_reservations])
def customers_with_reservations(db: Session = Depends(get_db)):
    """有预订的客人"""
    return ReportService(db).customers_with_reservations()


@router.get("/rooms-by-type", response_model=List[RoomResponse],
            dependencies=[can_read_rooms, can_read_room_types])
def rooms_by_type_name(type_name: str, db: Session = Depends(get_db)):
    """按房型名称查询房间"""
    return ReportService(db).rooms_by_type_name(type_name)


@router.get("/first-names", response_model=List[str],
            dependencies=[can_read_customers])
def distinct_first_names(db: Session = Depends(get_db)):
    return ReportService(db).distinct_first_names()


@router.get("/summary", response_model=ReportSummary,
            dependencies=[can_read_rooms, can_read_services, can_read_payments,
                          can_read_reservations])
def summary(db: Session = Depends(get_db)):
    """汇总统计"""
    return ReportService(db).summary()


@router.get("/frequent-customers", response_model=List[FrequentCustomerRow],
            dependencies=[can_read_reservations])
def frequent_customers(min_reservations: int = Query(2, ge=1), db: Session = Depends(get_db)):
    """常客"""
    return ReportService(db).frequent_customers(min_reservations)


@router.get("/latest-payments", response_model=List[PaymentResponse],
            dependencies=[can_read_payments])
def latest_payments(limit: int = Query(5, ge=1, le=100), db: Session = Depends(get_db)):
    """最近支付"""
    return ReportService(db).latest_payments(limit)


@router.get("/payment-descriptions", response_model=List[PaymentDescriptionRow],
            dependencies=[can_read_payments])
def payment_descriptions(db: Session = Depends(get_db)):
    """支付方式说明"""
    return ReportService(db).payment_descriptions()
