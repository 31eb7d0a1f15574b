"""
权限服务
管理数据库角色、表级授权、登录账号和角色成员关系
"""
from typing import List, Optional
import logging

from sqlalchemy.orm import Session

from hotel_reservation.database import Base
from hotel_reservation.errors import EntityNotFoundError
from hotel_reservation.models.ontology import (
    DbRole, LoginAccount, Privilege, RoleMember, TableGrant
)
from hotel_reservation.models.schemas import AccountCreate
from hotel_reservation.security.auth import (
    create_access_token, get_password_hash, verify_password
)
from hotel_reservation.security.permissions import DEFAULT_ROLE_GRANTS
from hotel_reservation.services.hooks import transaction

logger = logging.getLogger(__name__)


class PermissionService:
    """权限服务"""

    def __init__(self, db: Session):
        self.db = db

    # ============== 角色与授权 ==============

    def list_roles(self) -> List[DbRole]:
        """获取所有角色"""
        return self.db.query(DbRole).order_by(DbRole.id).all()

    def get_role(self, name: str) -> Optional[DbRole]:
        return self.db.query(DbRole).filter(DbRole.name == name).first()

    def _require_role(self, name: str) -> DbRole:
        role = self.get_role(name)
        if not role:
            raise EntityNotFoundError("Role", name)
        return role

    def create_role(self, name: str) -> DbRole:
        """创建角色，重名时抛出 IntegrityError"""
        role = DbRole(name=name)
        with transaction(self.db, f"create role '{name}'"):
            self.db.add(role)
        self.db.refresh(role)
        return role

    def grant(self, role_name: str, table_name: str, privilege: Privilege) -> TableGrant:
        """
        授予角色表级权限（已存在时直接返回）

        Raises:
            EntityNotFoundError: 角色或表不存在
        """
        role = self._require_role(role_name)
        if table_name not in Base.metadata.tables:
            raise EntityNotFoundError("Table", table_name)
        privilege = Privilege(privilege)

        existing = self.db.query(TableGrant).filter(
            TableGrant.role_id == role.id,
            TableGrant.table_name == table_name,
            TableGrant.privilege == privilege
        ).first()
        if existing:
            return existing

        table_grant = TableGrant(role_id=role.id, table_name=table_name, privilege=privilege)
        with transaction(self.db, f"grant {privilege.value} on {table_name} to {role_name}"):
            self.db.add(table_grant)
        self.db.refresh(table_grant)
        return table_grant

    def revoke(self, role_name: str, table_name: str, privilege: Privilege) -> int:
        """撤销角色表级权限，返回撤销的条数"""
        role = self._require_role(role_name)
        privilege = Privilege(privilege)
        with transaction(self.db, f"revoke {privilege.value} on {table_name} from {role_name}"):
            count = self.db.query(TableGrant).filter(
                TableGrant.role_id == role.id,
                TableGrant.table_name == table_name,
                TableGrant.privilege == privilege
            ).delete(synchronize_session="fetch")
        return count

    def seed_default_roles(self) -> List[DbRole]:
        """创建默认角色及其授权（可重复执行）"""
        roles = []
        for role_name, table_grants in DEFAULT_ROLE_GRANTS.items():
            role = self.get_role(role_name) or self.create_role(role_name)
            for table_name, privileges in table_grants.items():
                for privilege in privileges:
                    self.grant(role_name, table_name, privilege)
            self.db.refresh(role)
            roles.append(role)
        logger.info(f"Default roles ready: {', '.join(DEFAULT_ROLE_GRANTS)}")
        return roles

    # ============== 账号 ==============

    def get_account(self, username: str) -> Optional[LoginAccount]:
        return self.db.query(LoginAccount).filter(LoginAccount.username == username).first()

    def list_accounts(self) -> List[LoginAccount]:
        return self.db.query(LoginAccount).order_by(LoginAccount.id).all()

    def create_account(self, data: AccountCreate) -> LoginAccount:
        """创建登录账号，用户名重复时抛出 IntegrityError"""
        account = LoginAccount(
            username=data.username,
            password_hash=get_password_hash(data.password),
            is_admin=data.is_admin
        )
        with transaction(self.db, f"create account '{data.username}'"):
            self.db.add(account)
        self.db.refresh(account)
        return account

    def add_role_member(self, role_name: str, username: str) -> RoleMember:
        """
        把账号加入角色（已是成员时直接返回）

        Raises:
            EntityNotFoundError: 角色或账号不存在
        """
        role = self._require_role(role_name)
        account = self.get_account(username)
        if not account:
            raise EntityNotFoundError("Account", username)

        member = self.db.query(RoleMember).filter(
            RoleMember.role_id == role.id,
            RoleMember.account_id == account.id
        ).first()
        if member:
            return member

        member = RoleMember(role_id=role.id, account_id=account.id)
        with transaction(self.db, f"add {username} to role {role_name}"):
            self.db.add(member)
        self.db.refresh(member)
        return member

    def has_permission(self, account: LoginAccount, table_name: str,
                       privilege: Privilege) -> bool:
        """账号是否拥有某表上的权限（管理员始终拥有）"""
        if account.is_admin:
            return True

        return self.db.query(TableGrant).join(
            RoleMember, RoleMember.role_id == TableGrant.role_id
        ).filter(
            RoleMember.account_id == account.id,
            TableGrant.table_name == table_name,
            TableGrant.privilege == Privilege(privilege)
        ).first() is not None

    def authenticate(self, username: str, password: str) -> Optional[dict]:
        """
        认证登录

        Returns:
            令牌信息；用户名或密码错误时返回 None

        Raises:
            ValueError: 账号已停用
        """
        account = self.get_account(username)
        if not account:
            return None

        if not account.is_active:
            raise ValueError("Account is disabled")

        if not verify_password(password, account.password_hash):
            return None

        roles = account.role_names
        token = create_access_token(account.id, account.username, roles, account.is_admin)

        return {
            'access_token': token,
            'token_type': 'bearer',
            'username': account.username,
            'is_admin': account.is_admin,
            'roles': roles,
        }
