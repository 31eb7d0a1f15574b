"""
认证与授权模块
JWT 登录令牌 + 按表授权（角色在表上的 SELECT/INSERT/UPDATE/DELETE 权限）
"""
import bcrypt
import logging
from datetime import datetime, timedelta, UTC
from typing import List, Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from sqlalchemy.orm import Session
from hotel_reservation.config import settings
from hotel_reservation.database import get_db
from hotel_reservation.models.ontology import LoginAccount, Privilege

logger = logging.getLogger(__name__)

security = HTTPBearer()


def get_password_hash(password: str) -> str:
    """密码哈希"""
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """验证密码"""
    return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8'))


def create_access_token(account_id: int, username: str,
                        roles: Optional[List[str]] = None,
                        is_admin: bool = False) -> str:
    """创建 JWT token"""
    expire = datetime.now(UTC) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = {
        "sub": str(account_id),
        "username": username,
        "roles": roles or [],
        "is_admin": is_admin,
        "exp": expire
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(token: str) -> dict:
    """解码 JWT token"""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials"
        )


async def get_current_account(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
) -> LoginAccount:
    """获取当前登录账号"""
    payload = decode_token(credentials.credentials)

    account_id = int(payload.get("sub"))
    account = db.query(LoginAccount).filter(LoginAccount.id == account_id).first()

    if not account:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Account not found"
        )

    if not account.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Account is disabled"
        )

    return account


async def require_admin(current_account: LoginAccount = Depends(get_current_account)) -> LoginAccount:
    """仅管理员账号"""
    if not current_account.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrator privileges required"
        )
    return current_account


def require_table_permission(table_name: str, privilege: Privilege):
    """
    表级权限检查依赖

    管理员账号始终通过；其他账号需通过所属角色获得该表上的对应权限。

    Example:
        >>> @router.get("", dependencies=[Depends(require_table_permission(CUSTOMERS, Privilege.SELECT))])
    """
    async def permission_checker(
        current_account: LoginAccount = Depends(get_current_account),
        db: Session = Depends(get_db)
    ) -> LoginAccount:
        from hotel_reservation.services.permission_service import PermissionService

        if PermissionService(db).has_permission(current_account, table_name, privilege):
            return current_account

        logger.warning(
            f"Account {current_account.username} denied {privilege.value} on {table_name}"
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Missing permission: {privilege.value} on {table_name}"
        )
    return permission_checker
