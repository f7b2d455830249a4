from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from office_service.core.config import settings


def get_password_hash(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # 저장된 해시 형식이 깨져 있으면 불일치로 본다
        return False


def create_access_token(user_id: str) -> str:
    """
    payload에는 사용자 id만 담는다. 만료는 JWT_EXPIRES_DAYS(기본 30일).
    """
    now = datetime.now(timezone.utc)
    payload = {
        "id": user_id,
        "iat": now,
        "exp": now + timedelta(days=settings.JWT_EXPIRES_DAYS),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> str:
    """
    토큰을 검증하고 subject(id)를 돌려준다.
    서명 불일치/만료/형식 오류는 jwt.InvalidTokenError 계열로 올라간다.
    """
    payload = jwt.decode(
        token,
        settings.JWT_SECRET,
        algorithms=[settings.JWT_ALGORITHM],
        options={"require": ["exp", "id"]},
    )
    return str(payload["id"])
