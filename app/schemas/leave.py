# backend-server/app/schemas/leave.py
from datetime import date, datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from app.core.enums import LeaveStatus, LeaveType
from app.schemas.common import Pagination
from app.schemas.user import UserSummary

class LeaveCreate(BaseModel):
    leave_type: LeaveType
    start_date: date
    end_date: date
    reason: str = Field(min_length=10, max_length=500)

class LeaveStatusUpdate(BaseModel):
    status: LeaveStatus
    approval_comment: Optional[str] = Field(default=None, max_length=300)

class Leave(BaseModel):
    id: int
    employee_id: int
    employee: Optional[UserSummary] = None
    leave_type: LeaveType
    start_date: date
    end_date: date
    reason: str
    status: LeaveStatus
    approved_by: Optional[int] = None
    approver: Optional[UserSummary] = None
    approval_comment: Optional[str] = None
    approval_date: Optional[datetime] = None
    total_days: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class LeaveData(BaseModel):
    leave: Leave

class LeaveList(BaseModel):
    leaves: List[Leave]
    pagination: Pagination

class LeaveBalance(BaseModel):
    year: int
    entitlements: Dict[LeaveType, int]
    used: Dict[LeaveType, int]
    balance: Dict[LeaveType, int]
