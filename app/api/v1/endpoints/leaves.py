# backend-server/app/api/v1/endpoints/leaves.py
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core import security
from app.core.enums import LeaveStatus, LeaveType
from app.core.permissions import Permission
from app.db import models, session
from app.schemas import leave as leave_schema
from app.schemas.common import Envelope, Pagination, ok
from app.services import leaves as leave_service

router = APIRouter()

@router.post("", response_model=Envelope[leave_schema.LeaveData], status_code=status.HTTP_201_CREATED)
def create_leave(
    leave_in: leave_schema.LeaveCreate,
    db: Session = Depends(session.get_db),
    employee: models.User = Depends(security.require_permission(Permission.SUBMIT_LEAVE)),
):
    leave = leave_service.submit_leave(
        db, employee, leave_in.leave_type, leave_in.start_date, leave_in.end_date, leave_in.reason,
    )
    return ok({"leave": leave}, "Leave request created successfully")

@router.get("", response_model=Envelope[leave_schema.LeaveList])
def get_leaves(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status: Optional[LeaveStatus] = None,
    leave_type: Optional[LeaveType] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    employee_id: Optional[int] = None,
    db: Session = Depends(session.get_db),
    current_user: models.User = Depends(security.get_current_user),
):
    """ Employees get their own requests; managers get everyone's. """
    leaves, total = leave_service.list_leaves(
        db, current_user, status=status, leave_type=leave_type, start_from=start_date,
        start_to=end_date, employee_id=employee_id, page=page, limit=limit,
    )
    return ok({"leaves": leaves, "pagination": Pagination.build(page, limit, total)})

@router.get("/balance", response_model=Envelope[leave_schema.LeaveBalance])
def get_leave_balance(
    year: Optional[int] = Query(None, ge=1900, le=9999),
    db: Session = Depends(session.get_db),
    employee: models.User = Depends(security.require_permission(Permission.VIEW_LEAVE_BALANCE)),
):
    return ok(leave_service.compute_balance(db, employee.id, year or date.today().year))

@router.get("/{leave_id}", response_model=Envelope[leave_schema.LeaveData])
def get_leave(
    leave_id: int,
    db: Session = Depends(session.get_db),
    current_user: models.User = Depends(security.get_current_user),
):
    return ok({"leave": leave_service.get_leave(db, current_user, leave_id)})

@router.patch("/{leave_id}/status", response_model=Envelope[leave_schema.LeaveData])
def update_leave_status(
    leave_id: int,
    decision: leave_schema.LeaveStatusUpdate,
    db: Session = Depends(session.get_db),
    manager: models.User = Depends(security.require_permission(Permission.DECIDE_LEAVE)),
):
    """ Approves or rejects a pending request. """
    leave = leave_service.decide_leave(db, manager, leave_id, decision.status, decision.approval_comment)
    return ok({"leave": leave}, f"Leave request {leave.status.value.lower()} successfully")

@router.patch("/{leave_id}/cancel", response_model=Envelope[leave_schema.LeaveData])
def cancel_leave(
    leave_id: int,
    db: Session = Depends(session.get_db),
    employee: models.User = Depends(security.require_permission(Permission.CANCEL_LEAVE)),
):
    leave = leave_service.cancel_leave(db, employee, leave_id)
    return ok({"leave": leave}, "Leave request cancelled successfully")
