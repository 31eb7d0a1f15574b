"""
角色与授权管理路由（仅管理员）
"""
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from hotel_reservation.database import get_db
from hotel_reservation.errors import EntityNotFoundError
from hotel_reservation.models.ontology import Privilege
from hotel_reservation.models.schemas import (
    AccountCreate, AccountResponse, GrantCreate, GrantResponse,
    RoleCreate, RoleMemberCreate, RoleResponse
)
from hotel_reservation.routers.errors import to_http_exception
from hotel_reservation.security.auth import require_admin
from hotel_reservation.services.permission_service import PermissionService

router = APIRouter(prefix="/roles", tags=["角色授权"], dependencies=[Depends(require_admin)])


@router.get("", response_model=List[RoleResponse])
def list_roles(db: Session = Depends(get_db)):
    """获取所有角色及授权"""
    return PermissionService(db).list_roles()


@router.post("", response_model=RoleResponse, status_code=status.HTTP_201_CREATED)
def create_role(data: RoleCreate, db: Session = Depends(get_db)):
    """创建角色"""
    try:
        return PermissionService(db).create_role(data.name)
    except IntegrityError as e:
        raise to_http_exception(e)


@router.post("/{role_name}/grants", response_model=GrantResponse, status_code=status.HTTP_201_CREATED)
def grant(role_name: str, data: GrantCreate, db: Session = Depends(get_db)):
    """授予表级权限"""
    try:
        return PermissionService(db).grant(role_name, data.table_name, data.privilege)
    except EntityNotFoundError as e:
        raise to_http_exception(e)


@router.delete("/{role_name}/grants")
def revoke(role_name: str, table_name: str, privilege: Privilege, db: Session = Depends(get_db)):
    """撤销表级权限"""
    try:
        return {"revoked": PermissionService(db).revoke(role_name, table_name, privilege)}
    except EntityNotFoundError as e:
        raise to_http_exception(e)


@router.post("/{role_name}/members", status_code=status.HTTP_201_CREATED)
def add_role_member(role_name: str, data: RoleMemberCreate, db: Session = Depends(get_db)):
    """把账号加入角色"""
    try:
        PermissionService(db).add_role_member(role_name, data.username)
    except EntityNotFoundError as e:
        raise to_http_exception(e)
    return {"role": role_name, "username": data.username}


# ============== 账号 ==============

@router.get("/accounts", response_model=List[AccountResponse])
def list_accounts(db: Session = Depends(get_db)):
    """获取所有登录账号"""
    return PermissionService(db).list_accounts()


@router.post("/accounts", response_model=AccountResponse, status_code=status.HTTP_201_CREATED)
def create_account(data: AccountCreate, db: Session = Depends(get_db)):
    """创建登录账号"""
    try:
        return PermissionService(db).create_account(data)
    except IntegrityError as e:
        raise to_http_exception(e)
