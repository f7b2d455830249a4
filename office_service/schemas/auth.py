from typing import Literal, Optional

from pydantic import BaseModel, Field

from office_service.schemas.common import Email
from office_service.schemas.employee import Employee

Role = Literal["admin", "employee"]


class RegisterRequest(BaseModel):
    email: Email
    password: str = Field(..., min_length=1)
    role: Role = "employee"


class LoginRequest(BaseModel):
    email: Email
    password: str = Field(..., min_length=1)


class Caller(BaseModel):
    """
    토큰으로 확인된 현재 요청자. 의존성에서 만들어서 서비스 함수에 그대로 넘긴다.
    """
    id: str
    email: str
    role: Role
    employeeId: Optional[str] = None


class RegisterResponse(BaseModel):
    id: str
    email: str
    role: Role
    token: str


class ProfileResponse(BaseModel):
    id: str
    email: str
    role: Role
    employee: Optional[Employee] = None


class LoginResponse(ProfileResponse):
    token: str
