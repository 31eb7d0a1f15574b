"""
附加服务目录
管理 Service 对象及其与预订的多对多关联
"""
from typing import List, Optional

from sqlalchemy.orm import Session

from hotel_reservation.models.ontology import Service, ReservationServiceItem
from hotel_reservation.models.schemas import ServiceCreate, ReservationServiceCreate
from hotel_reservation.services.hooks import transaction


class CatalogService:
    """附加服务目录"""

    def __init__(self, db: Session):
        self.db = db

    def get_services(self) -> List[Service]:
        """获取所有附加服务"""
        return self.db.query(Service).order_by(Service.id).all()

    def get_service(self, service_id: int) -> Optional[Service]:
        """获取单个附加服务"""
        return self.db.query(Service).filter(Service.id == service_id).first()

    def create_service(self, data: ServiceCreate) -> Service:
        """创建附加服务"""
        service = Service(**data.model_dump())
        with transaction(self.db, f"create service '{data.name}'"):
            self.db.add(service)
        self.db.refresh(service)
        return service

    def add_service_to_reservation(self, reservation_id: int,
                                   data: ReservationServiceCreate) -> ReservationServiceItem:
        """
        为预订添加附加服务

        同一预订重复添加同一服务违反复合主键，抛出 IntegrityError。
        """
        item = ReservationServiceItem(
            reservation_id=reservation_id,
            service_id=data.service_id,
            quantity=data.quantity
        )
        with transaction(self.db, f"add service {data.service_id} to reservation {reservation_id}"):
            self.db.add(item)
        self.db.refresh(item)
        return item

    def get_reservation_services(self, reservation_id: int) -> List[ReservationServiceItem]:
        """获取预订的附加服务"""
        return self.db.query(ReservationServiceItem).filter(
            ReservationServiceItem.reservation_id == reservation_id
        ).order_by(ReservationServiceItem.service_id).all()
