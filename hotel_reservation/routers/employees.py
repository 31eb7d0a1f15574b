"""
员工管理路由
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from hotel_reservation.database import get_db
from hotel_reservation.errors import EntityNotFoundError
from hotel_reservation.models.ontology import Privilege
from hotel_reservation.models.schemas import DeleteResult, EmployeeCreate, EmployeeUpdate, EmployeeResponse
from hotel_reservation.routers.errors import to_http_exception
from hotel_reservation.security.auth import require_table_permission
from hotel_reservation.security.permissions import EMPLOYEES
from hotel_reservation.services.employee_service import EmployeeService

router = APIRouter(prefix="/employees", tags=["员工管理"])


@router.get("", response_model=List[EmployeeResponse],
            dependencies=[Depends(require_table_permission(EMPLOYEES, Privilege.SELECT))])
def list_employees(role: Optional[str] = None, db: Session = Depends(get_db)):
    """获取员工列表"""
    return EmployeeService(db).get_employees(role)


@router.get("/{employee_id}", response_model=EmployeeResponse,
            dependencies=[Depends(require_table_permission(EMPLOYEES, Privilege.SELECT))])
def get_employee(employee_id: int, db: Session = Depends(get_db)):
    """获取员工详情"""
    employee = EmployeeService(db).get_employee(employee_id)
    if not employee:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Employee {employee_id} not found")
    return employee


@router.post("", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_table_permission(EMPLOYEES, Privilege.INSERT))])
def create_employee(data: EmployeeCreate, db: Session = Depends(get_db)):
    """创建员工"""
    return EmployeeService(db).create_employee(data)


@router.put("/{employee_id}", response_model=EmployeeResponse,
            dependencies=[Depends(require_table_permission(EMPLOYEES, Privilege.UPDATE))])
def update_employee(employee_id: int, data: EmployeeUpdate, db: Session = Depends(get_db)):
    """更新员工"""
    try:
        return EmployeeService(db).update_employee(employee_id, data)
    except EntityNotFoundError as e:
        raise to_http_exception(e)


@router.delete("/{employee_id}", response_model=DeleteResult,
               dependencies=[Depends(require_table_permission(EMPLOYEES, Privilege.DELETE))])
def delete_employee(employee_id: int, db: Session = Depends(get_db)):
    """删除员工"""
    return {"deleted": EmployeeService(db).delete_employee(employee_id)}
