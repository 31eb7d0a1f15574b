"""
支付服务
管理 Payment 对象（属于 Reservation）
"""
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session

from hotel_reservation.errors import InvalidPaymentAmountError
from hotel_reservation.models.ontology import Payment
from hotel_reservation.models.schemas import PaymentCreate
from hotel_reservation.services.hooks import transaction


class PaymentService:
    """支付服务"""

    def __init__(self, db: Session):
        self.db = db

    def get_payments(self, reservation_id: Optional[int] = None) -> List[Payment]:
        """获取支付记录"""
        query = self.db.query(Payment)
        if reservation_id is not None:
            query = query.filter(Payment.reservation_id == reservation_id)
        return query.order_by(Payment.id).all()

    def record_payment(self, data: PaymentCreate) -> Payment:
        """
        记录一笔支付

        Raises:
            InvalidPaymentAmountError: 金额不大于 0
        """
        if Decimal(data.amount) <= 0:
            raise InvalidPaymentAmountError(data.amount)

        payment = Payment(**data.model_dump(exclude_none=True))
        with transaction(self.db, f"record payment of {data.amount} for reservation {data.reservation_id}"):
            self.db.add(payment)
        self.db.refresh(payment)
        return payment
