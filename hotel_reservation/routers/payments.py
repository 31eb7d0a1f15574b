"""
支付路由
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from hotel_reservation.database import get_db
from hotel_reservation.models.ontology import Privilege
from hotel_reservation.models.schemas import PaymentCreate, PaymentResponse
from hotel_reservation.routers.errors import to_http_exception
from hotel_reservation.security.auth import require_table_permission
from hotel_reservation.security.permissions import PAYMENTS
from hotel_reservation.services.payment_service import PaymentService

router = APIRouter(prefix="/payments", tags=["支付"])


@router.get("", response_model=List[PaymentResponse],
            dependencies=[Depends(require_table_permission(PAYMENTS, Privilege.SELECT))])
def list_payments(reservation_id: Optional[int] = None, db: Session = Depends(get_db)):
    """获取支付记录"""
    return PaymentService(db).get_payments(reservation_id)


@router.post("", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_table_permission(PAYMENTS, Privilege.INSERT))])
def record_payment(data: PaymentCreate, db: Session = Depends(get_db)):
    """记录支付"""
    try:
        return PaymentService(db).record_payment(data)
    except (ValueError, IntegrityError) as e:
        raise to_http_exception(e)
