"""
预订管理路由
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from hotel_reservation.database import get_db
from hotel_reservation.models.ontology import Privilege
from hotel_reservation.models.schemas import (
    ReservationCreate, ReservationCreated, ReservationResponse,
    ReservationStatusUpdate, ReservationBatchStatusUpdate, DeleteResult,
    ReservationServiceCreate, ReservationServiceResponse, PaymentResponse
)
from hotel_reservation.routers.errors import to_http_exception
from hotel_reservation.security.auth import require_table_permission
from hotel_reservation.security.permissions import (
    RESERVATIONS, RESERVATION_SERVICES, PAYMENTS
)
from hotel_reservation.services.catalog_service import CatalogService
from hotel_reservation.services.payment_service import PaymentService
from hotel_reservation.services.reservation_service import ReservationService

router = APIRouter(prefix="/reservations", tags=["预订管理"])


@router.get("", response_model=List[ReservationResponse],
            dependencies=[Depends(require_table_permission(RESERVATIONS, Privilege.SELECT))])
def list_reservations(db: Session = Depends(get_db)):
    """获取预订列表"""
    return ReservationService(db).get_reservations()


@router.post("", response_model=ReservationCreated, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_table_permission(RESERVATIONS, Privilege.INSERT))])
def create_reservation(data: ReservationCreate, db: Session = Depends(get_db)):
    """创建预订（初始状态 Pending）"""
    try:
        return ReservationService(db).create_reservation(data)
    except (ValueError, IntegrityError) as e:
        raise to_http_exception(e)


@router.post("/batch", response_model=List[ReservationCreated], status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_table_permission(RESERVATIONS, Privilege.INSERT))])
def create_reservations(items: List[ReservationCreate], db: Session = Depends(get_db)):
    """批量创建预订（全部成功或全部失败）"""
    try:
        return ReservationService(db).create_reservations(items)
    except (ValueError, IntegrityError) as e:
        raise to_http_exception(e)


@router.put("/status", response_model=List[ReservationResponse],
            dependencies=[Depends(require_table_permission(RESERVATIONS, Privilege.UPDATE))])
def update_reservation_statuses(data: ReservationBatchStatusUpdate, db: Session = Depends(get_db)):
    """批量更新预订状态"""
    try:
        return ReservationService(db).update_reservation_statuses(data.reservation_ids, data.status)
    except (ValueError, IntegrityError) as e:
        raise to_http_exception(e)


@router.get("/{reservation_id}", response_model=ReservationResponse,
            dependencies=[Depends(require_table_permission(RESERVATIONS, Privilege.SELECT))])
def get_reservation(reservation_id: int, db: Session = Depends(get_db)):
    """获取预订详情"""
    reservation = ReservationService(db).get_reservation(reservation_id)
    if not reservation:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Reservation {reservation_id} not found"
        )
    return reservation


@router.put("/{reservation_id}/status", response_model=ReservationResponse,
            dependencies=[Depends(require_table_permission(RESERVATIONS, Privilege.UPDATE))])
def update_reservation_status(reservation_id: int, data: ReservationStatusUpdate,
                              db: Session = Depends(get_db)):
    """更新预订状态"""
    try:
        return ReservationService(db).update_reservation_status(reservation_id, data.status)
    except (ValueError, IntegrityError) as e:
        raise to_http_exception(e)


@router.delete("/{reservation_id}", response_model=DeleteResult,
               dependencies=[Depends(require_table_permission(RESERVATIONS, Privilege.DELETE))])
def delete_reservation(reservation_id: int, db: Session = Depends(get_db)):
    """删除预订（不存在时不报错，返回 0）"""
    try:
        return {"deleted": ReservationService(db).delete_reservation(reservation_id)}
    except IntegrityError as e:
        raise to_http_exception(e)


# ============== 附加服务与支付 ==============

@router.get("/{reservation_id}/services", response_model=List[ReservationServiceResponse],
            dependencies=[Depends(require_table_permission(RESERVATION_SERVICES, Privilege.SELECT))])
def list_reservation_services(reservation_id: int, db: Session = Depends(get_db)):
    """获取预订的附加服务"""
    return CatalogService(db).get_reservation_services(reservation_id)


@router.post("/{reservation_id}/services", response_model=ReservationServiceResponse,
             status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_table_permission(RESERVATION_SERVICES, Privilege.INSERT))])
def add_reservation_service(reservation_id: int, data: ReservationServiceCreate,
                            db: Session = Depends(get_db)):
    """为预订添加附加服务"""
    try:
        return CatalogService(db).add_service_to_reservation(reservation_id, data)
    except IntegrityError as e:
        raise to_http_exception(e)


@router.get("/{reservation_id}/payments", response_model=List[PaymentResponse],
            dependencies=[Depends(require_table_permission(PAYMENTS, Privilege.SELECT))])
def list_reservation_payments(reservation_id: int, db: Session = Depends(get_db)):
    """获取预订的支付记录"""
    return PaymentService(db).get_payments(reservation_id)
