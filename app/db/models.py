# backend-server/app/db/models.py
from datetime import date, datetime, timezone

from sqlalchemy import (
    Column, Integer, String, ForeignKey, Date, DateTime, Text, JSON, CheckConstraint, Enum as SAEnum,
)
from sqlalchemy.orm import declarative_base, relationship

from app.core.enums import ActivityAction, LeaveStatus, LeaveType, Role, TargetType, UserStatus

Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _enum(enum_cls):
    return SAEnum(enum_cls, native_enum=False, length=20, validate_strings=True)


class User(Base):
    __tablename__ = "users"
    # Unique columns back the duplicate checks in services/employees.py.
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(100), unique=True, nullable=False, index=True)
    phone = Column(String(10), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    role = Column(_enum(Role), nullable=False, default=Role.EMPLOYEE)
    department = Column(String(50), nullable=True, index=True)
    designation = Column(String(50), nullable=True)
    join_date = Column(Date, nullable=True, default=date.today)
    manager_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    status = Column(_enum(UserStatus), nullable=False, default=UserStatus.ACTIVE)
    refresh_token = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    manager = relationship("User", remote_side=[id])
    leaves = relationship("LeaveRequest", back_populates="employee", foreign_keys="LeaveRequest.employee_id")


class LeaveRequest(Base):
    __tablename__ = "leave_requests"
    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    leave_type = Column(_enum(LeaveType), nullable=False)
    start_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date, nullable=False)
    reason = Column(String(500), nullable=False)
    status = Column(_enum(LeaveStatus), nullable=False, default=LeaveStatus.PENDING, index=True)
    approved_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    approval_comment = Column(String(300), nullable=True)
    approval_date = Column(DateTime(timezone=True), nullable=True)
    total_days = Column(Integer, nullable=False)
    version = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
    __table_args__ = ( CheckConstraint("end_date > start_date", name="ck_leave_dates"), )
    # Every UPDATE is guarded by "WHERE version = <version read>".
    __mapper_args__ = {"version_id_col": version}

    employee = relationship("User", back_populates="leaves", foreign_keys=[employee_id])
    approver = relationship("User", foreign_keys=[approved_by])


class ActivityLog(Base):
    __tablename__ = "activity_logs"
    id = Column(Integer, primary_key=True, index=True)
    actor_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    action = Column(_enum(ActivityAction), nullable=False)
    target_type = Column(_enum(TargetType), nullable=False)
    target_id = Column(Integer, nullable=False)
    changes = Column(JSON, nullable=False, default=dict)
    description = Column(String(255), nullable=False)
    meta = Column("metadata", JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)

    actor = relationship("User")
