from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

LeaveType = Literal["Annual Leave", "Sick Leave", "Personal Leave"]
LeaveStatus = Literal["Pending", "Approved", "Rejected"]

# 연차 종류 -> 차감할 leaveBalance 필드
LEAVE_BUCKETS = {
    "Annual Leave": "annual",
    "Sick Leave": "sick",
    "Personal Leave": "personal",
}

_SHORT_LEAVE_TYPES = {
    "Annual": "Annual Leave",
    "Sick": "Sick Leave",
    "Personal": "Personal Leave",
}


class LeaveCreate(BaseModel):
    """POST /leave 요청 바디. 신청자는 토큰으로 결정된다."""
    type: LeaveType
    startDate: date
    endDate: date
    reason: str = Field(..., min_length=1)

    @field_validator("type", mode="before")
    @classmethod
    def expand_short_type(cls, v):
        # "Annual" 같은 짧은 표기도 허용
        if isinstance(v, str):
            return _SHORT_LEAVE_TYPES.get(v, v)
        return v


class LeaveStatusUpdate(BaseModel):
    """PUT /leave/{id} 요청 바디"""
    status: Literal["Approved", "Rejected"]


class LeaveRecordRead(BaseModel):
    id: str
    employee: str
    type: LeaveType
    startDate: date
    endDate: date
    days: int
    reason: str
    status: LeaveStatus
    approvedBy: Optional[str] = None
    approvedAt: Optional[datetime] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class LeaveEmployeeSummary(BaseModel):
    id: str
    name: str
    employeeId: str
    department: str


class LeaveApproverSummary(BaseModel):
    id: str
    email: str


class LeaveRecordDetail(BaseModel):
    """
    관리자 목록 조회용. employee / approvedBy 자리에 요약 정보를 채워서 내려준다.
    참조 대상이 삭제된 경우 None.
    """
    id: str
    employee: Optional[LeaveEmployeeSummary] = None
    type: LeaveType
    startDate: date
    endDate: date
    days: int
    reason: str
    status: LeaveStatus
    approvedBy: Optional[LeaveApproverSummary] = None
    approvedAt: Optional[datetime] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
