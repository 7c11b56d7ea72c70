from typing import List, Optional, Union
from pydantic import PostgresDsn, validator
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Values in .env win over the process environment
load_dotenv(override=True)

class Settings(BaseSettings):
    """Base settings for the dealership API."""

    # API settings
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Dealership Back-Office"
    ENVIRONMENT: str = "production"
    LOG_LEVEL: str = "INFO"

    # CORS settings
    BACKEND_CORS_ORIGINS: Union[List[str], str] = ["*"]

    @validator("BACKEND_CORS_ORIGINS", pre=True)
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",")]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    # Database settings
    # Used only when DATABASE_URL is unset
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "dealership"
    POSTGRES_PORT: int = 5432

    # A full connection string (Postgres or SQLite) takes precedence over the parts above
    DATABASE_URL: Optional[str] = None

    SQLALCHEMY_DATABASE_URI: Optional[str] = None

    @validator("SQLALCHEMY_DATABASE_URI", pre=True, always=True)
    def assemble_db_connection(cls, v: Optional[str], values: dict) -> str:
        if values.get("DATABASE_URL"):
            return values.get("DATABASE_URL")

        if isinstance(v, str):
            return v
        return str(PostgresDsn.build(
            scheme="postgresql",
            username=values.get("POSTGRES_USER"),
            password=values.get("POSTGRES_PASSWORD"),
            host=values.get("POSTGRES_SERVER"),
            port=values.get("POSTGRES_PORT"),
            path=values.get("POSTGRES_DB") or "",
        ))

    # JWT Authentication settings
    # No default: the service refuses to start without an explicit signing key
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7  # 7 days

    @validator("JWT_SECRET_KEY")
    def check_secret_key(cls, v: str) -> str:
        if len(v.strip()) < 16:
            raise ValueError("JWT_SECRET_KEY must be set to at least 16 characters")
        return v

    # Cloudinary image hosting
    CLOUDINARY_CLOUD_NAME: Optional[str] = None
    CLOUDINARY_API_KEY: Optional[str] = None
    CLOUDINARY_API_SECRET: Optional[str] = None
    CLOUDINARY_FOLDER: str = "automotora/vehiculos"
    MAX_UPLOAD_BATCH: int = 10

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"

    model_config = {
        "case_sensitive": True,
        "env_file": ".env"
    }

# Raises at import when JWT_SECRET_KEY is missing
settings = Settings()
