from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./tasktracker.db"
    ENV: str = "local"  # local | prod
    PORT: int = 3001

    LOG_LEVEL: str = "INFO"
    SQL_ECHO: bool = False

    # Comma separated, "*" allows everything
    ALLOWED_ORIGINS: str = "*"

    # Create missing tables at startup. Turn off when Alembic owns the schema.
    AUTO_CREATE_SCHEMA: bool = True

    # Insert the default label set when the labels table is empty
    SEED_DEFAULT_LABELS: bool = True

    class Config:
        env_file = ".env"

    @property
    def cors_origins(self) -> list[str]:
        if self.ALLOWED_ORIGINS.strip() == "*":
            return ["*"]
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]

settings = Settings()
