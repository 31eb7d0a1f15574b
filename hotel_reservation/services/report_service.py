"""
报表服务 - 只读查询层
客人预订视图、客人名册、即将到来的预订，以及若干统计查询
"""
from typing import List, Optional

from sqlalchemy import case, func, null, select, union_all
from sqlalchemy.orm import Session

from hotel_reservation.models.ontology import (
    Customer, Payment, Reservation, ReservationStatus, Room, RoomType, Service
)


PAYMENT_METHOD_LABELS = {
    "Credit Card": "Paid by card",
    "Cash": "Paid in cash",
}
OTHER_PAYMENT_LABEL = "Other method"


class ReportService:
    """报表服务"""

    def __init__(self, db: Session):
        self.db = db

    # ============== 视图 ==============

    def customer_reservations(self) -> List[dict]:
        """客人预订视图：每条预订一行，带客人全名"""
        customer_name = (Customer.first_name + " " + Customer.last_name).label("customer_name")
        rows = self.db.query(
            Reservation.id, customer_name, Reservation.room_id,
            Reservation.check_in_date, Reservation.check_out_date, Reservation.status
        ).join(
            Customer, Customer.id == Reservation.customer_id
        ).order_by(Reservation.id).all()

        return [
            {
                'reservation_id': row.id,
                'customer_name': row.customer_name,
                'room_id': row.room_id,
                'check_in_date': row.check_in_date,
                'check_out_date': row.check_out_date,
                'status': row.status,
            }
            for row in rows
        ]

    def customer_roster(self) -> List[dict]:
        """
        客人名册

        有邮箱和无邮箱（显式 NULL）两组分别查询后合并，每位客人一行，按客人 ID 排序。
        使用 UNION ALL，同名客人不会被合并。
        """
        with_email = select(
            Customer.id, Customer.first_name, Customer.last_name, Customer.email
        ).where(Customer.email.isnot(None))

        without_email = select(
            Customer.id, Customer.first_name, Customer.last_name, null().label("email")
        ).where(Customer.email.is_(None))

        roster = union_all(with_email, without_email).subquery()
        rows = self.db.execute(
            select(roster.c.first_name, roster.c.last_name, roster.c.email)
            .order_by(roster.c.id)
        ).all()

        return [
            {'first_name': row.first_name, 'last_name': row.last_name, 'email': row.email}
            for row in rows
        ]

    def upcoming_reservations(self) -> List[Reservation]:
        """
        入住日期晚于所有已取消预订最晚离店日期的预订

        没有已取消预订时上界为 NULL，结果为空。
        """
        latest_cancelled_checkout = self.db.query(
            func.max(Reservation.check_out_date)
        ).filter(
            Reservation.status == ReservationStatus.CANCELLED
        ).scalar_subquery()

        return self.db.query(Reservation).filter(
            Reservation.check_in_date > latest_cancelled_checkout
        ).order_by(Reservation.id).all()

    # ============== 子查询 ==============

    def top_payments(self) -> List[Payment]:
        """金额最大的支付记录"""
        max_amount = self.db.query(func.max(Payment.amount)).scalar_subquery()
        return self.db.query(Payment).filter(
            Payment.amount == max_amount
        ).order_by(Payment.id).all()

    def customers_with_reservations(self) -> List[Customer]:
        """至少有一条预订的客人"""
        has_reservation = self.db.query(Reservation.id).filter(
            Reservation.customer_id == Customer.id
        ).exists()
        return self.db.query(Customer).filter(has_reservation).order_by(Customer.id).all()

    def rooms_by_type_name(self, type_name: str) -> List[Room]:
        """指定房型名称下的房间"""
        type_ids = select(RoomType.id).where(RoomType.type_name == type_name)
        return self.db.query(Room).filter(
            Room.room_type_id.in_(type_ids)
        ).order_by(Room.id).all()

    # ============== 统计 ==============

    def distinct_first_names(self) -> List[str]:
        rows = self.db.query(Customer.first_name).distinct().order_by(Customer.first_name).all()
        return [row.first_name for row in rows]

    def summary(self) -> dict:
        """最低房价、最高服务价、平均支付金额、预订总数"""
        return {
            'min_room_price': self.db.query(func.min(Room.price_per_night)).scalar(),
            'max_service_price': self.db.query(func.max(Service.price)).scalar(),
            'avg_payment_amount': self.db.query(func.avg(Payment.amount)).scalar(),
            'reservation_count': self.db.query(func.count(Reservation.id)).scalar() or 0,
        }

    def frequent_customers(self, min_reservations: int = 2) -> List[dict]:
        """预订次数不少于 min_reservations 的客人"""
        reservation_count = func.count(Reservation.id).label("reservation_count")
        rows = self.db.query(
            Reservation.customer_id, reservation_count
        ).group_by(
            Reservation.customer_id
        ).having(
            func.count(Reservation.id) >= min_reservations
        ).order_by(Reservation.customer_id).all()

        return [
            {'customer_id': row.customer_id, 'reservation_count': row.reservation_count}
            for row in rows
        ]

    def latest_payments(self, limit: Optional[int] = 5) -> List[Payment]:
        """最近的支付记录"""
        query = self.db.query(Payment).order_by(Payment.payment_date.desc(), Payment.id.desc())
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def payment_descriptions(self) -> List[dict]:
        """支付记录及支付方式说明"""
        payment_info = case(
            *[(Payment.method == method, label) for method, label in PAYMENT_METHOD_LABELS.items()],
            else_=OTHER_PAYMENT_LABEL
        ).label("payment_info")

        rows = self.db.query(
            Payment.id, Payment.amount, Payment.method, payment_info
        ).order_by(Payment.id).all()

        return [
            {
                'payment_id': row.id,
                'amount': row.amount,
                'method': row.method,
                'payment_info': row.payment_info,
            }
            for row in rows
        ]
