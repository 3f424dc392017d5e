# backend-server/app/services/leaves.py
"""
Leave request lifecycle.

    PENDING  -> APPROVED | REJECTED   (manager decision)
    PENDING  -> CANCELLED             (owner, before the start date)
    APPROVED -> CANCELLED             (owner, before the start date)

REJECTED and CANCELLED are terminal. Every successful transition writes exactly
one activity log entry; a failed precondition writes nothing.
"""
import logging
from datetime import date, datetime, timezone
from typing import Iterable, Optional

from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from app.core.enums import LeaveStatus, LeaveType, OPEN_LEAVE_STATUSES, Role
from app.core.exceptions import (
    AlreadyCancelledError, ConflictError, ForbiddenError, ForbiddenStateError,
    InvalidStateError, NotFoundError, PastDeadlineError, ValidationError,
)
from app.db import models
from app.services.audit import ActivityLogger

logger = logging.getLogger(__name__)

# Days per calendar year, the same for every employee.
ENTITLEMENTS = {
    LeaveType.CASUAL: 12,
    LeaveType.SICK: 12,
    LeaveType.EARNED: 21,
}
REASON_MIN_LENGTH, REASON_MAX_LENGTH = 10, 500


def count_leave_days(start_date: date, end_date: date) -> int:
    """Inclusive number of calendar days between the two dates."""
    return (end_date - start_date).days + 1


def find_overlap(
    existing: Iterable[models.LeaveRequest], start_date: date, end_date: date
) -> Optional[models.LeaveRequest]:
    """Returns the first request whose [start, end] range touches the candidate range, if any."""
    for leave in existing:
        if leave.start_date <= end_date and leave.end_date >= start_date:
            return leave
    return None


def _commit(db: Session) -> None:
    try:
        db.commit()
    except StaleDataError:
        db.rollback()
        raise ConflictError("Leave request was modified by another request, please retry")


def _load(db: Session, leave_id: int) -> models.LeaveRequest:
    leave = db.get(models.LeaveRequest, leave_id)
    if leave is None:
        raise NotFoundError("Leave request not found")
    return leave


def submit_leave(
    db: Session,
    employee: models.User,
    leave_type: LeaveType,
    start_date: date,
    end_date: date,
    reason: str,
    *,
    today: Optional[date] = None,
    audit: Optional[ActivityLogger] = None,
) -> models.LeaveRequest:
    today = today or date.today()
    reason = (reason or "").strip()

    if end_date <= start_date:
        raise ValidationError("End date must be after start date")
    if start_date < today:
        raise ValidationError("Start date cannot be in the past")
    if not REASON_MIN_LENGTH <= len(reason) <= REASON_MAX_LENGTH:
        raise ValidationError(f"Reason must be between {REASON_MIN_LENGTH} and {REASON_MAX_LENGTH} characters")

    open_leaves = (
        db.query(models.LeaveRequest)
        .filter(
            models.LeaveRequest.employee_id == employee.id,
            models.LeaveRequest.status.in_(OPEN_LEAVE_STATUSES),
        )
        .all()
    )
    if find_overlap(open_leaves, start_date, end_date):
        raise ConflictError("You have overlapping leave requests for the selected dates")

    leave = models.LeaveRequest(
        employee_id=employee.id,
        leave_type=LeaveType(leave_type),
        start_date=start_date,
        end_date=end_date,
        reason=reason,
        status=LeaveStatus.PENDING,
        total_days=count_leave_days(start_date, end_date),
    )
    db.add(leave)
    db.commit()
    db.refresh(leave)
    logger.info("Leave %s submitted by user %s (%s days)", leave.id, employee.id, leave.total_days)

    (audit or ActivityLogger(db)).leave_created(employee.id, leave.id, {
        "leave_type": leave.leave_type.value,
        "start_date": start_date.isoformat(),
        "end_date": end_date.isoformat(),
        "total_days": leave.total_days,
    })
    return leave


def get_leave(db: Session, actor: models.User, leave_id: int) -> models.LeaveRequest:
    leave = _load(db, leave_id)
    if actor.role == Role.EMPLOYEE and leave.employee_id != actor.id:
        raise ForbiddenError("Access denied. You can only view your own leave requests.")
    return leave


def list_leaves(
    db: Session,
    actor: models.User,
    *,
    status: Optional[LeaveStatus] = None,
    leave_type: Optional[LeaveType] = None,
    start_from: Optional[date] = None,
    start_to: Optional[date] = None,
    employee_id: Optional[int] = None,
    page: int = 1,
    limit: int = 10,
) -> tuple[list[models.LeaveRequest], int]:
    """Employees only ever see their own requests; managers may narrow by employee."""
    query = db.query(models.LeaveRequest)
    if actor.role == Role.EMPLOYEE:
        query = query.filter(models.LeaveRequest.employee_id == actor.id)
    elif employee_id is not None:
        query = query.filter(models.LeaveRequest.employee_id == employee_id)

    if status:
        query = query.filter(models.LeaveRequest.status == status)
    if leave_type:
        query = query.filter(models.LeaveRequest.leave_type == leave_type)
    if start_from:
        query = query.filter(models.LeaveRequest.start_date >= start_from)
    if start_to:
        query = query.filter(models.LeaveRequest.start_date <= start_to)

    total = query.count()
    leaves = (
        query.order_by(models.LeaveRequest.created_at.desc(), models.LeaveRequest.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return leaves, total


def decide_leave(
    db: Session,
    approver: models.User,
    leave_id: int,
    decision: LeaveStatus,
    comment: Optional[str] = None,
    *,
    audit: Optional[ActivityLogger] = None,
) -> models.LeaveRequest:
    decision = LeaveStatus(decision)
    if decision not in (LeaveStatus.APPROVED, LeaveStatus.REJECTED):
        raise ValidationError("Status must be APPROVED or REJECTED")

    leave = _load(db, leave_id)
    if leave.status != LeaveStatus.PENDING:
        raise InvalidStateError("Only pending leave requests can be approved or rejected")

    leave.status = decision
    leave.approved_by = approver.id
    leave.approval_comment = comment
    leave.approval_date = datetime.now(timezone.utc)
    _commit(db)
    logger.info("Leave %s %s by user %s", leave.id, decision.value.lower(), approver.id)

    audit = audit or ActivityLogger(db)
    if decision == LeaveStatus.APPROVED:
        audit.leave_approved(approver.id, leave.id, comment)
    else:
        audit.leave_rejected(approver.id, leave.id, comment)
    return leave


def cancel_leave(
    db: Session,
    actor: models.User,
    leave_id: int,
    *,
    today: Optional[date] = None,
    audit: Optional[ActivityLogger] = None,
) -> models.LeaveRequest:
    today = today or date.today()
    leave = _load(db, leave_id)

    if leave.employee_id != actor.id:
        raise ForbiddenError("You can only cancel your own leave requests")
    if leave.status == LeaveStatus.CANCELLED:
        raise AlreadyCancelledError("Leave request is already cancelled")
    if leave.status == LeaveStatus.REJECTED:
        raise ForbiddenStateError("Cannot cancel rejected leave request")
    if today >= leave.start_date:
        raise PastDeadlineError("Cannot cancel leave request after start date")

    leave.status = LeaveStatus.CANCELLED
    _commit(db)
    logger.info("Leave %s cancelled by user %s", leave.id, actor.id)

    (audit or ActivityLogger(db)).leave_cancelled(actor.id, leave.id)
    return leave


def compute_balance(db: Session, employee_id: int, year: int) -> dict:
    approved = (
        db.query(models.LeaveRequest)
        .filter(
            models.LeaveRequest.employee_id == employee_id,
            models.LeaveRequest.status == LeaveStatus.APPROVED,
            models.LeaveRequest.start_date >= date(year, 1, 1),
            models.LeaveRequest.start_date <= date(year, 12, 31),
        )
        .all()
    )
    used = {leave_type: 0 for leave_type in LeaveType}
    for leave in approved:
        used[leave.leave_type] += leave.total_days

    # Not clamped at zero.
    balance = {leave_type: ENTITLEMENTS[leave_type] - used[leave_type] for leave_type in LeaveType}
    return {"year": year, "entitlements": dict(ENTITLEMENTS), "used": used, "balance": balance}
