"""
客人管理路由
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from hotel_reservation.database import get_db
from hotel_reservation.models.ontology import Privilege
from hotel_reservation.models.schemas import (
    CustomerCreate, CustomerCreated, CustomerResponse, CustomerReservationRow, DeleteResult
)
from hotel_reservation.routers.errors import to_http_exception
from hotel_reservation.security.auth import require_table_permission
from hotel_reservation.security.permissions import CUSTOMERS, RESERVATIONS
from hotel_reservation.services.customer_service import CustomerService
from hotel_reservation.services.reservation_service import ReservationService

router = APIRouter(prefix="/customers", tags=["客人管理"])


@router.get("", response_model=List[CustomerResponse],
            dependencies=[Depends(require_table_permission(CUSTOMERS, Privilege.SELECT))])
def list_customers(search: Optional[str] = None, db: Session = Depends(get_db)):
    """获取客人列表"""
    return CustomerService(db).get_customers(search)


@router.post("", response_model=CustomerCreated, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_table_permission(CUSTOMERS, Privilege.INSERT))])
def add_customer(data: CustomerCreate, db: Session = Depends(get_db)):
    """新增客人"""
    try:
        customer_id = CustomerService(db).add_customer(data)
    except IntegrityError as e:
        raise to_http_exception(e)
    return {"id": customer_id}


@router.get("/{customer_id}", response_model=CustomerResponse,
            dependencies=[Depends(require_table_permission(CUSTOMERS, Privilege.SELECT))])
def get_customer(customer_id: int, db: Session = Depends(get_db)):
    """获取客人详情"""
    customer = CustomerService(db).get_customer(customer_id)
    if not customer:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Customer {customer_id} not found")
    return customer


@router.get("/{customer_id}/reservations", response_model=List[CustomerReservationRow],
            dependencies=[Depends(require_table_permission(RESERVATIONS, Privilege.SELECT))])
def list_customer_reservations(customer_id: int, db: Session = Depends(get_db)):
    """按客人列出预订"""
    return ReservationService(db).list_by_customer(customer_id)


@router.delete("/{customer_id}", response_model=DeleteResult,
               dependencies=[Depends(require_table_permission(CUSTOMERS, Privilege.DELETE))])
def delete_customer(customer_id: int, db: Session = Depends(get_db)):
    """删除客人（仍有预订时拒绝）"""
    try:
        deleted = CustomerService(db).delete_customer(customer_id)
    except IntegrityError as e:
        raise to_http_exception(e)
    return {"deleted": deleted}
