"""
领域异常定义

所有领域异常都继承 ValueError，路由层按类型映射为 HTTP 状态码。
存储层的约束冲突（sqlalchemy.exc.IntegrityError）不在此定义，原样向上抛出。
"""
from typing import Iterable, List


class DomainRejection(ValueError):
    """业务规则拒绝（区别于通用的存储约束错误）"""


class RoomHasReservationsError(DomainRejection):
    """房间仍被预订引用，拒绝删除"""

    message = "Cannot delete room with existing reservations."

    def __init__(self, room_ids: Iterable[int]):
        self.room_ids: List[int] = sorted(set(room_ids))
        super().__init__(self.message)


class InvalidStayDatesError(DomainRejection):
    """离店日期必须晚于入住日期"""

    def __init__(self, check_in_date, check_out_date):
        self.check_in_date = check_in_date
        self.check_out_date = check_out_date
        super().__init__(
            f"Check-out date {check_out_date} must be after check-in date {check_in_date}"
        )


class InvalidPaymentAmountError(DomainRejection):
    """支付金额必须大于 0"""

    def __init__(self, amount):
        self.amount = amount
        super().__init__(f"Payment amount must be positive, got {amount}")


class EntityNotFoundError(ValueError):
    """按 ID 查找的实体不存在"""

    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")
