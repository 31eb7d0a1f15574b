"""
附加服务目录路由
"""
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from hotel_reservation.database import get_db
from hotel_reservation.models.ontology import Privilege
from hotel_reservation.models.schemas import ServiceCreate, ServiceResponse
from hotel_reservation.security.auth import require_table_permission
from hotel_reservation.security.permissions import SERVICES
from hotel_reservation.services.catalog_service import CatalogService

router = APIRouter(prefix="/services", tags=["附加服务"])


@router.get("", response_model=List[ServiceResponse],
            dependencies=[Depends(require_table_permission(SERVICES, Privilege.SELECT))])
def list_services(db: Session = Depends(get_db)):
    """获取附加服务目录"""
    return CatalogService(db).get_services()


@router.post("", response_model=ServiceResponse, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_table_permission(SERVICES, Privilege.INSERT))])
def create_service(data: ServiceCreate, db: Session = Depends(get_db)):
    """创建附加服务"""
    return CatalogService(db).create_service(data)
