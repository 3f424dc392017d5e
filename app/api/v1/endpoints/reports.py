# backend-server/app/api/v1/endpoints/reports.py
from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core import security
from app.core.enums import ActivityAction, LeaveStatus, LeaveType, TargetType
from app.core.permissions import Permission
from app.db import session
from app.schemas import activity as activity_schema, report as report_schema
from app.schemas.common import Envelope, Pagination, ok
from app.services import reports as report_service

# Every report is restricted to managers.
router = APIRouter(dependencies=[Depends(security.require_permission(Permission.VIEW_REPORTS))])

@router.get("/leave-summary", response_model=Envelope[report_schema.LeaveSummaryReport])
def get_leave_summary(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    department: Optional[str] = None,
    status: Optional[LeaveStatus] = None,
    db: Session = Depends(session.get_db),
):
    return ok(report_service.leave_summary(
        db, start_date=start_date, end_date=end_date, department=department, status=status,
    ))

@router.get("/department-report", response_model=Envelope[report_schema.DepartmentReport])
def get_department_report(
    year: Optional[int] = Query(None, ge=1900, le=9999),
    db: Session = Depends(session.get_db),
):
    """ Per-department leave statistics for one calendar year. """
    return ok(report_service.department_report(db, year or date.today().year))

@router.get("/employee/{employee_id}/leaves", response_model=Envelope[report_schema.EmployeeLeaveHistory])
def get_employee_leave_history(
    employee_id: int,
    year: Optional[int] = Query(None, ge=1900, le=9999),
    status: Optional[LeaveStatus] = None,
    leave_type: Optional[LeaveType] = None,
    db: Session = Depends(session.get_db),
):
    return ok(report_service.employee_leave_history(
        db, employee_id, year=year, status=status, leave_type=leave_type,
    ))

@router.get("/activity-logs", response_model=Envelope[activity_schema.ActivityLogList])
def get_activity_logs(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    action: Optional[ActivityAction] = None,
    target_type: Optional[TargetType] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    db: Session = Depends(session.get_db),
):
    logs, total = report_service.activity_logs(
        db, action=action, target_type=target_type, start=start_date, end=end_date, page=page, limit=limit,
    )
    return ok({"logs": logs, "pagination": Pagination.build(page, limit, total)})
