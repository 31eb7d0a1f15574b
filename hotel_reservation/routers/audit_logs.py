"""
预订日志路由（只读）
"""
from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from hotel_reservation.database import get_db
from hotel_reservation.models.ontology import Privilege
from hotel_reservation.models.schemas import ReservationLogResponse
from hotel_reservation.security.auth import require_table_permission
from hotel_reservation.security.permissions import RESERVATION_LOGS
from hotel_reservation.services.reservation_service import ReservationService

router = APIRouter(prefix="/reservation-logs", tags=["预订日志"])


@router.get("", response_model=List[ReservationLogResponse],
            dependencies=[Depends(require_table_permission(RESERVATION_LOGS, Privilege.SELECT))])
def list_reservation_logs(reservation_id: Optional[int] = None, db: Session = Depends(get_db)):
    """获取预订日志"""
    return ReservationService(db).get_logs(reservation_id)
