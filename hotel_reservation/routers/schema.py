"""
模式自省路由（仅管理员）
"""
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from hotel_reservation.database import get_db
from hotel_reservation.errors import EntityNotFoundError
from hotel_reservation.routers.errors import to_http_exception
from hotel_reservation.security.auth import require_admin
from hotel_reservation.services.schema_service import SchemaService

router = APIRouter(prefix="/schema", tags=["模式自省"], dependencies=[Depends(require_admin)])


@router.get("/tables", response_model=List[str])
def list_tables(db: Session = Depends(get_db)):
    """列出所有表"""
    return SchemaService(db).list_tables()


@router.get("/server-info")
def server_info(db: Session = Depends(get_db)):
    """数据库服务器信息"""
    return SchemaService(db).server_info()


@router.get("/tables/{table_name}")
def describe_table(table_name: str, db: Session = Depends(get_db)):
    """表结构概要"""
    try:
        return SchemaService(db).describe_table(table_name)
    except EntityNotFoundError as e:
        raise to_http_exception(e)


@router.get("/tables/{table_name}/columns")
def describe_columns(table_name: str, db: Session = Depends(get_db)):
    """表的列定义"""
    try:
        return SchemaService(db).describe_columns(table_name)
    except EntityNotFoundError as e:
        raise to_http_exception(e)


@router.get("/tables/{table_name}/indexes")
def list_indexes(table_name: str, db: Session = Depends(get_db)):
    """表的索引"""
    try:
        return SchemaService(db).list_indexes(table_name)
    except EntityNotFoundError as e:
        raise to_http_exception(e)
