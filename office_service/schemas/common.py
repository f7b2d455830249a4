from typing import Annotated

from pydantic import AfterValidator, BaseModel, BeforeValidator, EmailStr, StringConstraints


def _strip(value):
    return value.strip() if isinstance(value, str) else value


# 이메일은 항상 trim + 형식 검증 + 소문자로 저장/조회한다.
Email = Annotated[EmailStr, BeforeValidator(_strip), AfterValidator(str.lower)]

# 앞뒤 공백을 떼고 저장하는 문자열 필드
Trimmed = Annotated[str, StringConstraints(strip_whitespace=True)]


class MessageResponse(BaseModel):
    message: str
