# backend-server/app/services/employees.py
import logging
from datetime import date
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core import security
from app.core.enums import MANAGER_ROLES, Role, UserStatus
from app.core.exceptions import AlreadyInStateError, ConflictError, ForbiddenError, NotFoundError, ValidationError
from app.db import models
from app.schemas import user as user_schema
from app.services.audit import ActivityLogger

logger = logging.getLogger(__name__)

STAFF_ROLES = (Role.HR_MANAGER, Role.EMPLOYEE)
UPDATABLE_FIELDS = ("name", "phone", "department", "designation", "manager_id")


def _commit_unique(db: Session) -> None:
    """Commits, reporting a unique-constraint violation as a conflict."""
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Name, email or phone already exists")


def _validate_manager(db: Session, manager_id: int) -> models.User:
    manager = db.get(models.User, manager_id)
    if manager is None or manager.role != Role.HR_MANAGER:
        raise ValidationError("Invalid manager ID. Manager must be an HR Manager.")
    return manager


def get_employee(db: Session, employee_id: int) -> models.User:
    employee = db.get(models.User, employee_id)
    if employee is None:
        raise NotFoundError("Employee not found")
    return employee


def register_user(
    db: Session,
    admin: models.User,
    user_in: user_schema.UserCreate,
    *,
    audit: Optional[ActivityLogger] = None,
) -> models.User:
    """ Creates an HR manager or employee account. """
    email = user_in.email.lower()
    existing = db.query(models.User).filter(or_(models.User.email == email, models.User.phone == user_in.phone)).first()
    if existing:
        field = "Email" if existing.email == email else "Phone"
        raise ConflictError(f"{field} already exists")
    if db.query(models.User).filter(models.User.name == user_in.name).first():
        raise ConflictError("Name already exists")

    manager_id = None
    if user_in.role == Role.EMPLOYEE:
        manager_id = _validate_manager(db, user_in.manager_id).id

    user = models.User(
        name=user_in.name,
        email=email,
        hashed_password=security.get_password_hash(user_in.password),
        phone=user_in.phone,
        role=user_in.role,
        department=user_in.department,
        designation=user_in.designation,
        join_date=user_in.join_date or date.today(),
        manager_id=manager_id,
        status=UserStatus.ACTIVE,
    )
    db.add(user)
    _commit_unique(db)
    db.refresh(user)
    logger.info("User %s registered by %s with role %s", user.id, admin.id, user.role.value)

    (audit or ActivityLogger(db)).user_created(admin.id, user.id, {
        "name": user.name,
        "email": user.email,
        "role": user.role.value,
        "department": user.department,
    })
    return user


def list_employees(
    db: Session,
    *,
    department: Optional[str] = None,
    status: Optional[UserStatus] = UserStatus.ACTIVE,
    page: int = 1,
    limit: int = 10,
) -> tuple[list[models.User], int]:
    query = db.query(models.User).filter(models.User.role.in_(STAFF_ROLES))
    if department:
        query = query.filter(models.User.department == department)
    if status:
        query = query.filter(models.User.status == status)

    total = query.count()
    employees = (
        query.order_by(models.User.created_at.desc(), models.User.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return employees, total


def read_employee(db: Session, actor: models.User, employee_id: int) -> models.User:
    if actor.role not in MANAGER_ROLES and actor.id != employee_id:
        raise ForbiddenError("Access denied. You can only access your own data.")
    return get_employee(db, employee_id)


def update_employee(
    db: Session,
    actor: models.User,
    employee_id: int,
    updates: user_schema.UserUpdate,
    *,
    audit: Optional[ActivityLogger] = None,
) -> models.User:
    employee = get_employee(db, employee_id)
    update_data = {k: v for k, v in updates.model_dump(exclude_unset=True).items() if k in UPDATABLE_FIELDS}

    name, phone = update_data.get("name"), update_data.get("phone")
    if name or phone:
        conditions = []
        if name:
            conditions.append(models.User.name == name)
        if phone:
            conditions.append(models.User.phone == phone)
        duplicate = db.query(models.User).filter(models.User.id != employee_id, or_(*conditions)).first()
        if duplicate:
            field = "Name" if duplicate.name == name else "Phone"
            raise ConflictError(f"{field} already exists")

    if update_data.get("manager_id") is not None:
        _validate_manager(db, update_data["manager_id"])

    changes = {}
    for field, value in update_data.items():
        current = getattr(employee, field)
        if current != value:
            changes[field] = {"from": current, "to": value}
            setattr(employee, field, value)

    if not changes:
        return employee

    _commit_unique(db)
    db.refresh(employee)
    (audit or ActivityLogger(db)).user_updated(actor.id, employee.id, changes)
    return employee


def deactivate_employee(
    db: Session, actor: models.User, employee_id: int, *, audit: Optional[ActivityLogger] = None
) -> models.User:
    employee = get_employee(db, employee_id)
    if employee.status == UserStatus.INACTIVE:
        raise AlreadyInStateError("Employee is already inactive")

    employee.status = UserStatus.INACTIVE
    db.commit()
    db.refresh(employee)
    logger.info("User %s deactivated by %s", employee.id, actor.id)

    (audit or ActivityLogger(db)).user_deactivated(actor.id, employee.id, employee.name)
    return employee


def activate_employee(db: Session, actor: models.User, employee_id: int) -> models.User:
    # Activation writes no activity log entry.
    employee = get_employee(db, employee_id)
    if employee.status == UserStatus.ACTIVE:
        raise AlreadyInStateError("Employee is already active")

    employee.status = UserStatus.ACTIVE
    db.commit()
    db.refresh(employee)
    logger.info("User %s activated by %s", employee.id, actor.id)
    return employee


def list_departments(db: Session) -> list[str]:
    rows = (
        db.query(models.User.department)
        .filter(
            models.User.role.in_(STAFF_ROLES),
            models.User.status == UserStatus.ACTIVE,
            models.User.department.isnot(None),
        )
        .distinct()
        .order_by(models.User.department)
        .all()
    )
    return [row[0] for row in rows]
