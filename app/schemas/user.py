# backend-server/app/schemas/user.py
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from app.core.enums import Role, UserStatus
from app.schemas.common import Pagination

PHONE_PATTERN = r"^\d{10}$"

class UserSummary(BaseModel):
    id: int
    name: str
    email: str
    department: Optional[str] = None
    designation: Optional[str] = None

    class Config:
        from_attributes = True

class User(BaseModel):
    id: int
    name: str
    email: str
    phone: str
    role: Role
    department: Optional[str] = None
    designation: Optional[str] = None
    join_date: Optional[date] = None
    manager_id: Optional[int] = None
    manager: Optional[UserSummary] = None
    status: UserStatus
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class UserCreate(BaseModel):
    name: str = Field(min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6)
    phone: str = Field(pattern=PHONE_PATTERN)
    role: Role
    department: str = Field(min_length=2, max_length=50)
    designation: str = Field(min_length=2, max_length=50)
    join_date: Optional[date] = None
    manager_id: Optional[int] = None

    @field_validator("name", "department", "designation")
    @classmethod
    def strip_text(cls, value: str) -> str:
        return value.strip()

    @field_validator("role")
    @classmethod
    def registrable_role(cls, value: Role) -> Role:
        if value == Role.SUPER_ADMIN:
            raise ValueError("role must be HR_MANAGER or EMPLOYEE")
        return value

    @model_validator(mode="after")
    def employee_needs_manager(self):
        if self.role == Role.EMPLOYEE and self.manager_id is None:
            raise ValueError("manager_id is required for employees")
        return self

class UserUpdate(BaseModel):
    """ Editable profile fields; password, email and role are silently dropped. """
    name: Optional[str] = Field(default=None, min_length=2, max_length=50)
    phone: Optional[str] = Field(default=None, pattern=PHONE_PATTERN)
    department: Optional[str] = Field(default=None, min_length=2, max_length=50)
    designation: Optional[str] = Field(default=None, min_length=2, max_length=50)
    manager_id: Optional[int] = None

    # Fields may be omitted but never cleared.
    @field_validator("name", "phone", "department", "designation", "manager_id", mode="before")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value.strip() if isinstance(value, str) else value

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class UserData(BaseModel):
    user: User

class EmployeeData(BaseModel):
    employee: User

class EmployeeList(BaseModel):
    employees: List[User]
    pagination: Pagination

class DepartmentList(BaseModel):
    departments: List[str]

class LoginData(BaseModel):
    user: User
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
