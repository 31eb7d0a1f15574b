"""
房间服务
管理 Room 和 RoomType 对象；房间删除保护与可用状态重算
"""
from typing import Iterable, List, Optional
import logging

from sqlalchemy import exists
from sqlalchemy.orm import Session

from hotel_reservation.errors import EntityNotFoundError, RoomHasReservationsError
from hotel_reservation.models.ontology import Room, RoomType, Reservation, ReservationStatus
from hotel_reservation.models.schemas import RoomCreate, RoomTypeCreate
from hotel_reservation.services.hooks import transaction

logger = logging.getLogger(__name__)


def recompute_room_availability(db: Session, room_ids: Iterable[int]) -> List[Room]:
    """
    按已确认预订重算房间可用状态（只 flush，不提交）

    房间可用 <=> 不存在引用该房间且状态为 Confirmed 的预订
    """
    room_ids = set(room_ids)
    if not room_ids:
        return []

    confirmed_room_ids = {
        room_id for (room_id,) in db.query(Reservation.room_id).filter(
            Reservation.room_id.in_(room_ids),
            Reservation.status == ReservationStatus.CONFIRMED
        ).distinct()
    }

    rooms = db.query(Room).filter(Room.id.in_(room_ids)).all()
    for room in rooms:
        room.is_available = room.id not in confirmed_room_ids
    db.flush()
    return rooms


class RoomService:
    """房间服务"""

    def __init__(self, db: Session):
        self.db = db

    # ============== 房型操作 ==============

    def get_room_types(self) -> List[RoomType]:
        """获取所有房型"""
        return self.db.query(RoomType).order_by(RoomType.id).all()

    def get_room_type(self, room_type_id: int) -> Optional[RoomType]:
        """获取单个房型"""
        return self.db.query(RoomType).filter(RoomType.id == room_type_id).first()

    def create_room_type(self, data: RoomTypeCreate) -> RoomType:
        """创建房型"""
        room_type = RoomType(**data.model_dump())
        with transaction(self.db, f"create room type '{data.type_name}'"):
            self.db.add(room_type)
        self.db.refresh(room_type)
        return room_type

    # ============== 房间操作 ==============

    def get_rooms(self, room_type_id: Optional[int] = None,
                  is_available: Optional[bool] = None) -> List[Room]:
        """获取房间列表"""
        query = self.db.query(Room)

        if room_type_id is not None:
            query = query.filter(Room.room_type_id == room_type_id)
        if is_available is not None:
            query = query.filter(Room.is_available == is_available)

        return query.order_by(Room.id).all()

    def get_room(self, room_id: int) -> Optional[Room]:
        """获取单个房间"""
        return self.db.query(Room).filter(Room.id == room_id).first()

    def create_room(self, data: RoomCreate) -> Room:
        """创建房间（房型外键由数据库校验）"""
        room = Room(**data.model_dump(), is_available=True)
        with transaction(self.db, f"create room '{data.room_number}'"):
            self.db.add(room)
        self.db.refresh(room)
        return room

    def delete_room(self, room_id: int) -> int:
        """删除单个房间"""
        return self.delete_rooms([room_id])

    def delete_rooms(self, room_ids: Iterable[int]) -> int:
        """
        批量删除房间

        先检查再删除，两步在同一事务内：
        任一目标房间被任何预订（不论状态）引用时整批拒绝，一间也不删。

        Returns:
            实际删除的房间数（不存在的 ID 不计入）

        Raises:
            RoomHasReservationsError: 存在引用目标房间的预订
        """
        room_ids = sorted(set(room_ids))
        if not room_ids:
            return 0

        with transaction(self.db, f"delete rooms {room_ids}"):
            referenced = [
                room_id for (room_id,) in self.db.query(Reservation.room_id).filter(
                    Reservation.room_id.in_(room_ids)
                ).distinct()
            ]
            if referenced:
                raise RoomHasReservationsError(referenced)

            rooms = self.db.query(Room).filter(Room.id.in_(room_ids)).all()
            for room in rooms:
                self.db.delete(room)
            self.db.flush()

        return len(rooms)

    def has_reservations(self, room_id: int) -> bool:
        """房间是否被任何预订引用"""
        return self.db.query(
            exists().where(Reservation.room_id == room_id)
        ).scalar()

    # ============== 可用状态 ==============

    def reconcile_availability(self, room_id: int) -> Room:
        """
        重算单个房间的可用状态并提交

        Raises:
            EntityNotFoundError: 房间不存在
        """
        if not self.get_room(room_id):
            raise EntityNotFoundError("Room", room_id)

        with transaction(self.db, f"reconcile availability of room {room_id}"):
            rooms = recompute_room_availability(self.db, [room_id])

        room = rooms[0]
        self.db.refresh(room)
        return room
