"""
房间管理路由
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from hotel_reservation.database import get_db
from hotel_reservation.errors import DomainRejection, EntityNotFoundError
from hotel_reservation.models.ontology import Privilege
from hotel_reservation.models.schemas import (
    RoomTypeCreate, RoomTypeResponse, RoomCreate, RoomResponse, DeleteResult
)
from hotel_reservation.routers.errors import to_http_exception
from hotel_reservation.security.auth import require_table_permission
from hotel_reservation.security.permissions import ROOMS, ROOM_TYPES
from hotel_reservation.services.room_service import RoomService

router = APIRouter(prefix="/rooms", tags=["房间管理"])


# ============== 房型管理 ==============

@router.get("/types", response_model=List[RoomTypeResponse],
            dependencies=[Depends(require_table_permission(ROOM_TYPES, Privilege.SELECT))])
def list_room_types(db: Session = Depends(get_db)):
    """获取所有房型"""
    return RoomService(db).get_room_types()


@router.post("/types", response_model=RoomTypeResponse, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_table_permission(ROOM_TYPES, Privilege.INSERT))])
def create_room_type(data: RoomTypeCreate, db: Session = Depends(get_db)):
    """创建房型"""
    return RoomService(db).create_room_type(data)


# ============== 房间管理 ==============

@router.get("", response_model=List[RoomResponse],
            dependencies=[Depends(require_table_permission(ROOMS, Privilege.SELECT))])
def list_rooms(
    room_type_id: Optional[int] = None,
    is_available: Optional[bool] = None,
    db: Session = Depends(get_db)
):
    """获取房间列表"""
    return RoomService(db).get_rooms(room_type_id, is_available)


@router.post("", response_model=RoomResponse, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_table_permission(ROOMS, Privilege.INSERT))])
def create_room(data: RoomCreate, db: Session = Depends(get_db)):
    """创建房间"""
    try:
        return RoomService(db).create_room(data)
    except IntegrityError as e:
        raise to_http_exception(e)


@router.delete("", response_model=DeleteResult,
               dependencies=[Depends(require_table_permission(ROOMS, Privilege.DELETE))])
def delete_rooms(ids: List[int] = Query(...), db: Session = Depends(get_db)):
    """批量删除房间：任一房间有预订时整批拒绝"""
    try:
        return {"deleted": RoomService(db).delete_rooms(ids)}
    except DomainRejection as e:
        raise to_http_exception(e)


@router.get("/{room_id}", response_model=RoomResponse,
            dependencies=[Depends(require_table_permission(ROOMS, Privilege.SELECT))])
def get_room(room_id: int, db: Session = Depends(get_db)):
    """获取房间详情"""
    room = RoomService(db).get_room(room_id)
    if not room:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Room {room_id} not found")
    return room


@router.delete("/{room_id}", response_model=DeleteResult,
               dependencies=[Depends(require_table_permission(ROOMS, Privilege.DELETE))])
def delete_room(room_id: int, db: Session = Depends(get_db)):
    """删除房间"""
    try:
        return {"deleted": RoomService(db).delete_room(room_id)}
    except DomainRejection as e:
        raise to_http_exception(e)


@router.post("/{room_id}/reconcile-availability", response_model=RoomResponse,
             dependencies=[Depends(require_table_permission(ROOMS, Privilege.UPDATE))])
def reconcile_room_availability(room_id: int, db: Session = Depends(get_db)):
    """按已确认预订重算房间可用状态"""
    try:
        return RoomService(db).reconcile_availability(room_id)
    except EntityNotFoundError as e:
        raise to_http_exception(e)
