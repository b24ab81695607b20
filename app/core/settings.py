from pydantic import model_validator
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    ENVIRONMENT: str = "development"

    URL_DATABASE_SQL: str = "sqlite:///./fleet.db"
    URL_DATABASE_REDIS: str = "redis://localhost:6379/0"

    KEY_SECRET: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15
    REFRESH_TOKEN_EXPIRE_SECONDS: int = 604800  # 7 dias

    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_MAX_REQUESTS: int = 1000
    RATE_LIMIT_WINDOW_MS: int = 1000

    CORS_ORIGINS: str = "*"
    DISCORD_WEBHOOK_URL: str = ""

    ADMIN_EMAIL: str = "admin@example.com"
    ADMIN_PASSWORD: str = "admin12345"

    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"


    model_config = {"env_file":".env"}

    @model_validator(mode="after")
    def check_token_lifetimes(self):
        # El access token siempre debe vivir menos que el refresh token
        if self.ACCESS_TOKEN_EXPIRE_MINUTES * 60 >= self.REFRESH_TOKEN_EXPIRE_SECONDS:
            raise ValueError("ACCESS_TOKEN_EXPIRE_MINUTES debe ser menor que REFRESH_TOKEN_EXPIRE_SECONDS")
        return self

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


settings = Settings()
