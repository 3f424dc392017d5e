# backend-server/app/services/reports.py
# Read-only rollups over leave requests and the activity log.
from collections import Counter
from datetime import date, datetime
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from app.core.enums import ActivityAction, LeaveStatus, LeaveType, TargetType, UserStatus
from app.db import models
from app.services.employees import STAFF_ROLES, get_employee

SUMMARY_LEAVE_LIMIT = 50


def _year_bounds(year: int) -> tuple[date, date]:
    return date(year, 1, 1), date(year, 12, 31)


def leave_summary(
    db: Session,
    *,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    department: Optional[str] = None,
    status: Optional[LeaveStatus] = None,
) -> dict:
    query = (
        db.query(models.LeaveRequest)
        .join(models.User, models.LeaveRequest.employee_id == models.User.id)
        .options(joinedload(models.LeaveRequest.employee))
    )
    if start_date:
        query = query.filter(models.LeaveRequest.start_date >= start_date)
    if end_date:
        query = query.filter(models.LeaveRequest.start_date <= end_date)
    if status:
        query = query.filter(models.LeaveRequest.status == status)
    if department:
        query = query.filter(models.User.department == department)
    leaves = query.order_by(models.LeaveRequest.start_date.desc()).all()

    by_status, by_type, by_department = Counter(), Counter(), Counter()
    total_days = 0
    for leave in leaves:
        by_status[leave.status.value] += 1
        by_type[leave.leave_type.value] += 1
        by_department[leave.employee.department or "UNASSIGNED"] += 1
        if leave.status == LeaveStatus.APPROVED:
            total_days += leave.total_days

    summary = {
        "total_requests": len(leaves),
        "by_status": dict(by_status),
        "by_type": dict(by_type),
        "by_department": dict(by_department),
        "total_days": total_days,
    }
    return {"summary": summary, "leaves": leaves[:SUMMARY_LEAVE_LIMIT]}


def department_report(db: Session, year: int) -> dict:
    start, end = _year_bounds(year)
    staff = (
        db.query(models.User)
        .filter(
            models.User.role.in_(STAFF_ROLES),
            models.User.status == UserStatus.ACTIVE,
            models.User.department.isnot(None),
        )
        .all()
    )
    members: dict[str, list[int]] = {}
    for user in staff:
        members.setdefault(user.department, []).append(user.id)

    departments = []
    for department in sorted(members):
        leaves = (
            db.query(models.LeaveRequest)
            .filter(
                models.LeaveRequest.employee_id.in_(members[department]),
                models.LeaveRequest.start_date >= start,
                models.LeaveRequest.start_date <= end,
            )
            .all()
        )
        statuses = Counter(leave.status for leave in leaves)
        types = Counter(leave.leave_type for leave in leaves)
        departments.append({
            "department": department,
            "total_employees": len(members[department]),
            "total_requests": len(leaves),
            "approved_requests": statuses[LeaveStatus.APPROVED],
            "pending_requests": statuses[LeaveStatus.PENDING],
            "rejected_requests": statuses[LeaveStatus.REJECTED],
            "total_days_approved": sum(leave.total_days for leave in leaves if leave.status == LeaveStatus.APPROVED),
            "by_type": {leave_type.value: types[leave_type] for leave_type in LeaveType},
        })
    return {"year": year, "departments": departments}


def employee_leave_history(
    db: Session,
    employee_id: int,
    *,
    year: Optional[int] = None,
    status: Optional[LeaveStatus] = None,
    leave_type: Optional[LeaveType] = None,
) -> dict:
    employee = get_employee(db, employee_id)

    query = db.query(models.LeaveRequest).filter(models.LeaveRequest.employee_id == employee_id)
    if year:
        start, end = _year_bounds(year)
        query = query.filter(models.LeaveRequest.start_date >= start, models.LeaveRequest.start_date <= end)
    if status:
        query = query.filter(models.LeaveRequest.status == status)
    if leave_type:
        query = query.filter(models.LeaveRequest.leave_type == leave_type)
    leaves = query.order_by(models.LeaveRequest.start_date.desc()).all()

    summary = {
        "total_requests": len(leaves),
        "total_days_requested": sum(leave.total_days for leave in leaves),
        "total_days_approved": sum(leave.total_days for leave in leaves if leave.status == LeaveStatus.APPROVED),
        "by_status": dict(Counter(leave.status.value for leave in leaves)),
        "by_type": dict(Counter(leave.leave_type.value for leave in leaves)),
    }
    return {"employee": employee, "summary": summary, "leaves": leaves}


def activity_logs(
    db: Session,
    *,
    action: Optional[ActivityAction] = None,
    target_type: Optional[TargetType] = None,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    page: int = 1,
    limit: int = 20,
) -> tuple[list[models.ActivityLog], int]:
    query = db.query(models.ActivityLog)
    if action:
        query = query.filter(models.ActivityLog.action == action)
    if target_type:
        query = query.filter(models.ActivityLog.target_type == target_type)
    if start:
        query = query.filter(models.ActivityLog.created_at >= start)
    if end:
        query = query.filter(models.ActivityLog.created_at <= end)

    total = query.count()
    logs = (
        query.options(joinedload(models.ActivityLog.actor))
        .order_by(models.ActivityLog.created_at.desc(), models.ActivityLog.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return logs, total
