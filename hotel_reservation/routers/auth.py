"""
认证路由
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from hotel_reservation.database import get_db
from hotel_reservation.models.ontology import LoginAccount
from hotel_reservation.models.schemas import LoginRequest, Token, AccountResponse
from hotel_reservation.services.permission_service import PermissionService
from hotel_reservation.security.auth import get_current_account

router = APIRouter(prefix="/auth", tags=["认证"])


@router.post("/login", response_model=Token)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    """账号登录"""
    service = PermissionService(db)
    try:
        result = service.authenticate(data.username, data.password)
        if not result:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Incorrect username or password"
            )
        return result
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))


@router.get("/me", response_model=AccountResponse)
def get_current_account_info(current_account: LoginAccount = Depends(get_current_account)):
    """获取当前账号信息"""
    return current_account
