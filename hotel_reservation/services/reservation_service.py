"""
预订服务
管理 Reservation 对象（聚合根）。所有写操作与其钩子在同一事务内执行：
插入 -> 预订日志；更新 -> 房间可用状态；删除 -> （可选）可用状态重算
"""
from typing import Iterable, List, Optional, Sequence
import logging

from sqlalchemy.orm import Session

from hotel_reservation.errors import EntityNotFoundError, InvalidStayDatesError
from hotel_reservation.models.ontology import Reservation, ReservationLog, ReservationStatus
from hotel_reservation.models.schemas import ReservationCreate
from hotel_reservation.services.hooks import HookType, TransactionHooks, transaction
from hotel_reservation.services.reservation_hooks import default_hooks

logger = logging.getLogger(__name__)


class ReservationService:
    """预订服务"""

    def __init__(self, db: Session, hooks: Optional[TransactionHooks] = None):
        self.db = db
        # 支持依赖注入钩子注册表，便于测试
        self.hooks = hooks or default_hooks

    # ============== 查询 ==============

    def get_reservation(self, reservation_id: int) -> Optional[Reservation]:
        """获取单个预订"""
        return self.db.query(Reservation).filter(Reservation.id == reservation_id).first()

    def get_reservations(self, status: Optional[ReservationStatus] = None,
                         room_id: Optional[int] = None) -> List[Reservation]:
        """获取预订列表"""
        query = self.db.query(Reservation)
        if status:
            query = query.filter(Reservation.status == status)
        if room_id is not None:
            query = query.filter(Reservation.room_id == room_id)
        return query.order_by(Reservation.id).all()

    def list_by_customer(self, customer_id: int) -> List[dict]:
        """按客人列出预订，按插入顺序"""
        rows = self.db.query(
            Reservation.id, Reservation.room_id, Reservation.check_in_date,
            Reservation.check_out_date, Reservation.status
        ).filter(
            Reservation.customer_id == customer_id
        ).order_by(Reservation.id).all()

        return [
            {
                'reservation_id': row.id,
                'room_id': row.room_id,
                'check_in_date': row.check_in_date,
                'check_out_date': row.check_out_date,
                'status': row.status,
            }
            for row in rows
        ]

    def get_logs(self, reservation_id: Optional[int] = None) -> List[ReservationLog]:
        """获取预订日志"""
        query = self.db.query(ReservationLog)
        if reservation_id is not None:
            query = query.filter(ReservationLog.reservation_id == reservation_id)
        return query.order_by(ReservationLog.id).all()

    # ============== 写操作 ==============

    def create_reservation(self, data: ReservationCreate) -> Reservation:
        """创建预订，初始状态 Pending"""
        return self.create_reservations([data])[0]

    def create_reservations(self, items: Sequence[ReservationCreate]) -> List[Reservation]:
        """
        批量创建预订（全部成功或全部回滚）

        客人/房间外键由数据库校验，违反时抛出 IntegrityError。

        Raises:
            InvalidStayDatesError: 离店日期不晚于入住日期
        """
        for item in items:
            if item.check_out_date <= item.check_in_date:
                raise InvalidStayDatesError(item.check_in_date, item.check_out_date)

        reservations = [
            Reservation(
                customer_id=item.customer_id,
                room_id=item.room_id,
                check_in_date=item.check_in_date,
                check_out_date=item.check_out_date,
                status=ReservationStatus.PENDING
            )
            for item in items
        ]
        if not reservations:
            return []

        with transaction(self.db, f"create {len(reservations)} reservation(s)"):
            self.db.add_all(reservations)
            self.db.flush()
            self.hooks.fire(HookType.RESERVATION_INSERTED, self.db, reservations)

        for reservation in reservations:
            self.db.refresh(reservation)
        return reservations

    def update_reservation_status(self, reservation_id: int,
                                  status: ReservationStatus) -> Reservation:
        """更新预订状态"""
        return self.update_reservation_statuses([reservation_id], status)[0]

    def update_reservation_statuses(self, reservation_ids: Iterable[int],
                                    status: ReservationStatus) -> List[Reservation]:
        """
        批量更新预订状态（全部成功或全部回滚）

        Raises:
            EntityNotFoundError: 任一预订不存在
        """
        reservation_ids = list(dict.fromkeys(reservation_ids))
        status = ReservationStatus(status)

        with transaction(self.db, f"set status {status.value} on reservations {reservation_ids}"):
            reservations = self.db.query(Reservation).filter(
                Reservation.id.in_(reservation_ids)
            ).order_by(Reservation.id).all()

            found = {r.id for r in reservations}
            missing = [rid for rid in reservation_ids if rid not in found]
            if missing:
                raise EntityNotFoundError("Reservation", missing[0])

            for reservation in reservations:
                reservation.status = status
            self.db.flush()
            self.hooks.fire(HookType.RESERVATION_UPDATED, self.db, reservations)

        for reservation in reservations:
            self.db.refresh(reservation)
        return reservations

    def delete_reservation(self, reservation_id: int) -> int:
        """
        删除预订

        不做存在性检查：删除不存在的 ID 不是错误，返回 0。
        仍有支付或附加服务引用时由数据库外键拒绝（IntegrityError）。

        Returns:
            删除的行数
        """
        with transaction(self.db, f"delete reservation {reservation_id}"):
            reservation = self.get_reservation(reservation_id)
            if reservation is None:
                logger.info(f"Reservation {reservation_id} not found, nothing deleted")
                return 0

            self.db.delete(reservation)
            self.db.flush()
            self.hooks.fire(HookType.RESERVATION_DELETED, self.db, [reservation])

        return 1
