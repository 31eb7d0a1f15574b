"""
模式自省服务
列出表、列、主外键、索引和数据库服务器信息
"""
from typing import List

from sqlalchemy import inspect
from sqlalchemy.orm import Session

from hotel_reservation.errors import EntityNotFoundError


class SchemaService:
    """模式自省服务"""

    def __init__(self, db: Session):
        self.db = db

    @property
    def _inspector(self):
        return inspect(self.db.connection())

    def list_tables(self) -> List[str]:
        """获取所有表名"""
        return sorted(self._inspector.get_table_names())

    def _require_table(self, table_name: str) -> None:
        if table_name not in self._inspector.get_table_names():
            raise EntityNotFoundError("Table", table_name)

    def describe_columns(self, table_name: str) -> List[dict]:
        """获取表的列定义"""
        self._require_table(table_name)
        return [
            {
                'name': column['name'],
                'type': str(column['type']),
                'nullable': column['nullable'],
                'default': column.get('default'),
            }
            for column in self._inspector.get_columns(table_name)
        ]

    def describe_table(self, table_name: str) -> dict:
        """
        获取表结构概要

        Returns:
            包含列、主键、外键、唯一约束和检查约束的字典
        """
        self._require_table(table_name)
        inspector = self._inspector

        foreign_keys = [
            {
                'columns': fk['constrained_columns'],
                'referred_table': fk['referred_table'],
                'referred_columns': fk['referred_columns'],
            }
            for fk in inspector.get_foreign_keys(table_name)
        ]

        return {
            'name': table_name,
            'columns': self.describe_columns(table_name),
            'primary_key': inspector.get_pk_constraint(table_name).get('constrained_columns', []),
            'foreign_keys': foreign_keys,
            'unique_constraints': [
                uc['column_names'] for uc in inspector.get_unique_constraints(table_name)
            ],
            'check_constraints': [
                cc['sqltext'] for cc in inspector.get_check_constraints(table_name)
            ],
        }

    def list_indexes(self, table_name: str) -> List[dict]:
        """获取表的索引"""
        self._require_table(table_name)
        return [
            {
                'name': index['name'],
                'columns': index['column_names'],
                'unique': bool(index['unique']),
            }
            for index in self._inspector.get_indexes(table_name)
        ]

    def server_info(self) -> dict:
        """数据库服务器信息"""
        bind = self.db.get_bind()
        dialect = bind.dialect
        version = dialect.server_version_info or ()
        return {
            'dialect': dialect.name,
            'driver': dialect.driver,
            'server_version': ".".join(str(part) for part in version),
            'database': bind.url.database,
            'table_count': len(self._inspector.get_table_names()),
        }
