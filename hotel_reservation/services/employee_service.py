"""
员工服务
管理 Employee 对象
"""
from typing import List, Optional

from sqlalchemy.orm import Session

from hotel_reservation.errors import EntityNotFoundError
from hotel_reservation.models.ontology import Employee
from hotel_reservation.models.schemas import EmployeeCreate, EmployeeUpdate
from hotel_reservation.services.hooks import transaction


class EmployeeService:
    """员工服务"""

    def __init__(self, db: Session):
        self.db = db

    def get_employees(self, role: Optional[str] = None) -> List[Employee]:
        """获取员工列表"""
        query = self.db.query(Employee)
        if role:
            query = query.filter(Employee.role == role)
        return query.order_by(Employee.id).all()

    def get_employee(self, employee_id: int) -> Optional[Employee]:
        """获取单个员工"""
        return self.db.query(Employee).filter(Employee.id == employee_id).first()

    def create_employee(self, data: EmployeeCreate) -> Employee:
        """创建员工"""
        employee = Employee(**data.model_dump())
        with transaction(self.db, f"create employee {data.first_name} {data.last_name}"):
            self.db.add(employee)
        self.db.refresh(employee)
        return employee

    def update_employee(self, employee_id: int, data: EmployeeUpdate) -> Employee:
        """更新员工"""
        employee = self.get_employee(employee_id)
        if not employee:
            raise EntityNotFoundError("Employee", employee_id)

        with transaction(self.db, f"update employee {employee_id}"):
            for key, value in data.model_dump(exclude_unset=True).items():
                setattr(employee, key, value)
        self.db.refresh(employee)
        return employee

    def delete_employee(self, employee_id: int) -> int:
        """删除员工，返回删除行数"""
        employee = self.get_employee(employee_id)
        if not employee:
            return 0
        with transaction(self.db, f"delete employee {employee_id}"):
            self.db.delete(employee)
        return 1
