# backend-server/app/schemas/report.py
from typing import Dict, List

from pydantic import BaseModel

from app.schemas.leave import Leave
from app.schemas.user import UserSummary

class LeaveSummary(BaseModel):
    total_requests: int = 0
    by_status: Dict[str, int] = {}
    by_type: Dict[str, int] = {}
    by_department: Dict[str, int] = {}
    total_days: int = 0

class LeaveSummaryReport(BaseModel):
    summary: LeaveSummary
    leaves: List[Leave]

class DepartmentStats(BaseModel):
    department: str
    total_employees: int
    total_requests: int
    approved_requests: int
    pending_requests: int
    rejected_requests: int
    total_days_approved: int
    by_type: Dict[str, int]

class DepartmentReport(BaseModel):
    year: int
    departments: List[DepartmentStats]

class EmployeeHistorySummary(BaseModel):
    total_requests: int = 0
    total_days_requested: int = 0
    total_days_approved: int = 0
    by_status: Dict[str, int] = {}
    by_type: Dict[str, int] = {}

class EmployeeLeaveHistory(BaseModel):
    employee: UserSummary
    summary: EmployeeHistorySummary
    leaves: List[Leave]
