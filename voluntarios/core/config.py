from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database
    database_url: str = "sqlite:///./voluntarios.db"
    auto_create_db: bool = True

    # ViaCEP
    viacep_base_url: str = "https://viacep.com.br/ws"
    viacep_timeout_seconds: float = 5.0

    # Key-value slots
    volunteers_key: str = "voluntarios"
    session_key: str = "sessionTime"
    session_timeout_seconds: int = 5 * 60

    # Application
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: Optional[str] = None

    # Environment
    environment: str = "development"

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
