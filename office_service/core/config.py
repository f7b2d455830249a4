from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # 서명 키는 필수. 없으면 Settings() 생성 단계에서 바로 실패한다.
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_DAYS: int = 30

    BCRYPT_ROUNDS: int = 12

    MONGODB_URI: str = "mongodb://mongodb:27017"
    MONGODB_DB_NAME: str = "office"

    CLIENT_URL: str = "http://localhost:3000"
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"


settings = Settings()
