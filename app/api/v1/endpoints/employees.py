# backend-server/app/api/v1/endpoints/employees.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core import security
from app.core.enums import UserStatus
from app.core.permissions import Permission
from app.db import models, session
from app.schemas import user as user_schema
from app.schemas.common import Envelope, Pagination, ok
from app.services import employees as employee_service

router = APIRouter()

@router.get("", response_model=Envelope[user_schema.EmployeeList])
def get_all_employees(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    department: Optional[str] = None,
    status: Optional[UserStatus] = UserStatus.ACTIVE,
    db: Session = Depends(session.get_db),
    manager: models.User = Depends(security.require_permission(Permission.LIST_EMPLOYEES)),
):
    """ Lists HR managers and employees, newest first. """
    employees, total = employee_service.list_employees(db, department=department, status=status, page=page, limit=limit)
    return ok({"employees": employees, "pagination": Pagination.build(page, limit, total)})

@router.get("/departments", response_model=Envelope[user_schema.DepartmentList])
def get_departments(
    db: Session = Depends(session.get_db),
    current_user: models.User = Depends(security.get_current_user),
):
    return ok({"departments": employee_service.list_departments(db)})

@router.get("/{employee_id}", response_model=Envelope[user_schema.EmployeeData])
def get_employee(
    employee_id: int,
    db: Session = Depends(session.get_db),
    current_user: models.User = Depends(security.get_current_user),
):
    """ Managers can read anyone; employees only themselves. """
    return ok({"employee": employee_service.read_employee(db, current_user, employee_id)})

@router.put("/{employee_id}", response_model=Envelope[user_schema.EmployeeData])
def update_employee(
    employee_id: int,
    updates: user_schema.UserUpdate,
    db: Session = Depends(session.get_db),
    manager: models.User = Depends(security.require_permission(Permission.UPDATE_EMPLOYEE)),
):
    employee = employee_service.update_employee(db, manager, employee_id, updates)
    return ok({"employee": employee}, "Employee updated successfully")

@router.patch("/{employee_id}/deactivate", response_model=Envelope[user_schema.EmployeeData])
def deactivate_employee(
    employee_id: int,
    db: Session = Depends(session.get_db),
    manager: models.User = Depends(security.require_permission(Permission.CHANGE_EMPLOYEE_STATUS)),
):
    employee = employee_service.deactivate_employee(db, manager, employee_id)
    return ok({"employee": employee}, "Employee deactivated successfully")

@router.patch("/{employee_id}/activate", response_model=Envelope[user_schema.EmployeeData])
def activate_employee(
    employee_id: int,
    db: Session = Depends(session.get_db),
    manager: models.User = Depends(security.require_permission(Permission.CHANGE_EMPLOYEE_STATUS)),
):
    employee = employee_service.activate_employee(db, manager, employee_id)
    return ok({"employee": employee}, "Employee activated successfully")
