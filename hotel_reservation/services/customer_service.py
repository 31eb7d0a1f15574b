"""
客人服务
管理 Customer 对象
"""
from typing import List, Optional

from sqlalchemy.orm import Session

from hotel_reservation.models.ontology import Customer
from hotel_reservation.models.schemas import CustomerCreate
from hotel_reservation.services.hooks import transaction


class CustomerService:
    """客人服务"""

    def __init__(self, db: Session):
        self.db = db

    def get_customers(self, search: Optional[str] = None) -> List[Customer]:
        """获取客人列表（可按姓名搜索）"""
        query = self.db.query(Customer)
        if search:
            query = query.filter(
                (Customer.first_name.contains(search)) | (Customer.last_name.contains(search))
            )
        return query.order_by(Customer.id).all()

    def get_customer(self, customer_id: int) -> Optional[Customer]:
        """获取单个客人"""
        return self.db.query(Customer).filter(Customer.id == customer_id).first()

    def get_customer_by_id_number(self, id_number: str) -> Optional[Customer]:
        """根据身份证号获取客人"""
        return self.db.query(Customer).filter(Customer.id_number == id_number).first()

    def add_customer(self, data: CustomerCreate) -> int:
        """
        新增客人，返回生成的 ID

        身份证号唯一性由数据库保证，重复时抛出 IntegrityError 且表内容不变。
        """
        customer = Customer(**data.model_dump())
        with transaction(self.db, f"add customer {data.first_name} {data.last_name}"):
            self.db.add(customer)
            self.db.flush()
        return customer.id

    def delete_customer(self, customer_id: int) -> int:
        """删除客人；仍有预订时由数据库外键拒绝。返回删除行数"""
        with transaction(self.db, f"delete customer {customer_id}"):
            customer = self.get_customer(customer_id)
            if customer is None:
                return 0
            self.db.delete(customer)
            self.db.flush()
        return 1
