from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str
    database_echo: bool = False
    jwt_secret: str
    jwt_algorithm: str = "HS256"

    log_level: str = "INFO"

    # Если адрес не задан, уведомления складываются во входящие (inbox)
    notification_webhook_url: Optional[str] = None
    notification_timeout: float = 5.0

    model_config = {"env_file": ".env", "extra": "ignore"}

settings = Settings()
