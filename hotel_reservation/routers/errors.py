"""
异常到 HTTP 状态码的映射
"""
from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError

from hotel_reservation.errors import DomainRejection, EntityNotFoundError, RoomHasReservationsError


def to_http_exception(exc: Exception) -> HTTPException:
    """把服务层异常转换为 HTTPException"""
    if isinstance(exc, EntityNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, RoomHasReservationsError):
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"message": str(exc), "room_ids": exc.room_ids}
        )
    if isinstance(exc, DomainRejection):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, IntegrityError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc.orig))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
