"""
预订钩子处理器

- 新建预订写入预订日志（每条预订一条日志）
- 预订更新为已确认时把对应房间置为不可用
- 可选：预订取消/离店/删除后重新计算房间可用状态
"""
from typing import Optional, Sequence
import logging

from sqlalchemy.orm import Session

from hotel_reservation.config import settings
from hotel_reservation.models.ontology import (
    Reservation, ReservationLog, ReservationStatus, Room
)
from hotel_reservation.services.hooks import HookType, TransactionHooks
from hotel_reservation.services.room_service import recompute_room_availability

logger = logging.getLogger(__name__)

NEW_RESERVATION_ACTION = "New reservation created"

RELEASED_STATUSES = (ReservationStatus.CANCELLED, ReservationStatus.COMPLETED)


def log_new_reservations(db: Session, reservations: Sequence[Reservation]) -> None:
    """为每条新插入的预订追加一条日志，时间戳由数据库生成"""
    for reservation in reservations:
        db.add(ReservationLog(
            reservation_id=reservation.id,
            action=NEW_RESERVATION_ACTION
        ))
    db.flush()
    logger.info(f"Logged {len(reservations)} new reservation(s)")


def mark_rooms_unavailable(db: Session, reservations: Sequence[Reservation]) -> None:
    """已确认预订引用的房间置为不可用"""
    room_ids = {r.room_id for r in reservations if r.status == ReservationStatus.CONFIRMED}
    if not room_ids:
        return

    rooms = db.query(Room).filter(Room.id.in_(room_ids)).all()
    for room in rooms:
        room.is_available = False
    db.flush()
    logger.info(f"Rooms {sorted(room_ids)} marked unavailable by confirmed reservation(s)")


def restore_availability_on_release(db: Session, reservations: Sequence[Reservation]) -> None:
    """预订取消或离店后重新计算房间可用状态"""
    room_ids = {r.room_id for r in reservations if r.status in RELEASED_STATUSES}
    if room_ids:
        recompute_room_availability(db, room_ids)


def restore_availability_after_delete(db: Session, reservations: Sequence[Reservation]) -> None:
    """预订删除后重新计算房间可用状态"""
    recompute_room_availability(db, {r.room_id for r in reservations})


def build_default_hooks(restore_availability: Optional[bool] = None) -> TransactionHooks:
    """
    构建默认钩子注册表

    Args:
        restore_availability: 是否在取消/离店/删除时恢复房间可用状态，
            为 None 时取 settings.RESTORE_AVAILABILITY_ON_RELEASE
    """
    if restore_availability is None:
        restore_availability = settings.RESTORE_AVAILABILITY_ON_RELEASE

    hooks = TransactionHooks()
    hooks.register(HookType.RESERVATION_INSERTED, log_new_reservations)
    hooks.register(HookType.RESERVATION_UPDATED, mark_rooms_unavailable)

    if restore_availability:
        hooks.register(HookType.RESERVATION_UPDATED, restore_availability_on_release)
        hooks.register(HookType.RESERVATION_DELETED, restore_availability_after_delete)

    return hooks


default_hooks = build_default_hooks()
