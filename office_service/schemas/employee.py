from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from office_service.schemas.common import Email, Trimmed

EmployeeStatus = Literal["Active", "On Leave", "Terminated"]
Performance = Literal["Excellent", "Good", "Average", "Poor"]


class EmergencyContact(BaseModel):
    name: str
    phone: str


class EmergencyContactCreate(EmergencyContact):
    name: Trimmed = Field(..., min_length=1)
    phone: Trimmed = Field(..., min_length=1)


class LeaveBalance(BaseModel):
    annual: int = Field(20, ge=0)
    sick: int = Field(10, ge=0)
    personal: int = Field(5, ge=0)


class EmployeeCreate(BaseModel):
    """POST /employees 요청 바디

    password가 있으면 employee 권한의 로그인 계정도 같이 만든다.
    """
    name: Trimmed = Field(..., min_length=1, max_length=100)
    email: Email
    phone: Trimmed = Field(..., min_length=1)
    address: Trimmed = Field(..., min_length=1)
    department: Trimmed = Field(..., min_length=1, max_length=100)
    position: Trimmed = Field(..., min_length=1, max_length=100)
    joinDate: date
    salary: Trimmed = Field(..., min_length=1)
    manager: Optional[Trimmed] = None
    emergencyContact: EmergencyContactCreate
    skills: List[str] = Field(default_factory=list)
    projects: List[str] = Field(default_factory=list)
    status: EmployeeStatus = "Active"
    performance: Performance = "Good"
    leaveBalance: LeaveBalance = Field(default_factory=LeaveBalance)
    password: Optional[str] = Field(None, min_length=1)


# 명시적으로 null을 보내서 지울 수 있는 필드
NULLABLE_FIELDS = {"manager"}


def _reject_nulls(model: BaseModel) -> None:
    for name in model.model_fields_set:
        if name not in NULLABLE_FIELDS and getattr(model, name) is None:
            raise ValueError(f"{name} must not be null")


class EmergencyContactUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[Trimmed] = None
    phone: Optional[Trimmed] = None

    @model_validator(mode="after")
    def reject_explicit_nulls(self) -> "EmergencyContactUpdate":
        _reject_nulls(self)
        return self


class LeaveBalanceUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    annual: Optional[int] = Field(None, ge=0)
    sick: Optional[int] = Field(None, ge=0)
    personal: Optional[int] = Field(None, ge=0)

    @model_validator(mode="after")
    def reject_explicit_nulls(self) -> "LeaveBalanceUpdate":
        _reject_nulls(self)
        return self


class EmployeeUpdate(BaseModel):
    """PUT /employees/{id} 요청 바디

    보낸 필드만 반영한다(빈 문자열, 0, 빈 리스트도 값으로 취급).
    보내지 않은 필드는 model_fields_set에 없으므로 그대로 둔다.
    """
    model_config = ConfigDict(extra="forbid")

    name: Optional[Trimmed] = None
    email: Optional[Email] = None
    phone: Optional[Trimmed] = None
    address: Optional[Trimmed] = None
    department: Optional[Trimmed] = None
    position: Optional[Trimmed] = None
    salary: Optional[Trimmed] = None
    manager: Optional[Trimmed] = None
    status: Optional[EmployeeStatus] = None
    emergencyContact: Optional[EmergencyContactUpdate] = None
    skills: Optional[List[str]] = None
    projects: Optional[List[str]] = None
    performance: Optional[Performance] = None
    leaveBalance: Optional[LeaveBalanceUpdate] = None

    @model_validator(mode="after")
    def reject_explicit_nulls(self) -> "EmployeeUpdate":
        _reject_nulls(self)
        return self


class Employee(BaseModel):
    """응답용 스키마"""
    id: str
    employeeId: str
    name: str
    email: str
    phone: str
    address: str
    department: str
    position: str
    joinDate: date
    status: EmployeeStatus
    salary: str
    manager: Optional[str] = None
    emergencyContact: EmergencyContact
    skills: List[str] = []
    projects: List[str] = []
    performance: Performance
    leaveBalance: LeaveBalance
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
