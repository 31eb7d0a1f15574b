"""
事务钩子 - 写操作后的同步处理器

数据访问层在写入并 flush 之后、提交之前调用 fire()，
处理器与触发它的写操作共享同一个会话和事务。
与普通事件总线不同，处理器的异常不会被吞掉：
异常直接向上抛出，由调用方回滚整个事务。
"""
from contextlib import contextmanager
from enum import Enum
from typing import Callable, Dict, List, Sequence
import logging

from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

# handler(db, rows) -> None
HookHandler = Callable[[Session, Sequence], None]


def _handler_name(handler: HookHandler) -> str:
    return getattr(handler, "__name__", repr(handler))


class HookType(str, Enum):
    """钩子类型"""
    RESERVATION_INSERTED = "reservation.inserted"
    RESERVATION_UPDATED = "reservation.updated"
    RESERVATION_DELETED = "reservation.deleted"


class TransactionHooks:
    """
    事务钩子注册表

    使用方式：
    1. 注册：hooks.register(HookType.RESERVATION_INSERTED, handler)
    2. 触发：hooks.fire(HookType.RESERVATION_INSERTED, db, reservations)
    3. 注销：hooks.unregister(HookType.RESERVATION_INSERTED, handler)

    处理器按注册顺序同步执行。
    """

    def __init__(self):
        self._handlers: Dict[HookType, List[HookHandler]] = {}

    def register(self, hook_type: HookType, handler: HookHandler) -> None:
        """注册处理器（同一处理器重复注册只保留一次）"""
        handlers = self._handlers.setdefault(hook_type, [])
        if handler not in handlers:
            handlers.append(handler)
            logger.info(f"Hook {_handler_name(handler)} registered on {hook_type.value}")

    def unregister(self, hook_type: HookType, handler: HookHandler) -> None:
        """注销处理器"""
        handlers = self._handlers.get(hook_type, [])
        if handler in handlers:
            handlers.remove(handler)
            logger.info(f"Hook {_handler_name(handler)} unregistered from {hook_type.value}")

    def handlers(self, hook_type: HookType) -> List[HookHandler]:
        """获取某类钩子的处理器列表（副本）"""
        return list(self._handlers.get(hook_type, []))

    def fire(self, hook_type: HookType, db: Session, rows: Sequence) -> None:
        """
        触发钩子

        Args:
            hook_type: 钩子类型
            db: 当前事务所在的会话
            rows: 本次写操作影响的行（批量）
        """
        if not rows:
            return
        for handler in self.handlers(hook_type):
            logger.debug(f"Running hook {_handler_name(handler)} for {hook_type.value} ({len(rows)} rows)")
            handler(db, rows)


@contextmanager
def transaction(db: Session, operation: str):
    """
    事务边界：块内全部写入（含钩子）一起提交，任何异常都回滚全部写入后原样抛出

    Example:
        >>> with transaction(db, "create reservation"):
        ...     db.add(reservation)
        ...     db.flush()
        ...     hooks.fire(HookType.RESERVATION_INSERTED, db, [reservation])
    """
    try:
        yield db
        db.commit()
    except Exception as e:
        db.rollback()
        logger.warning(f"{operation} rolled back: {e}")
        raise
    logger.info(f"{operation} committed")
