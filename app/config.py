# app/config.py

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ORIGIN = "http://localhost:5173"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    PROJECT_NAME: str = "Trimmute API"
    ENVIRONMENT: str = "development"
    DATABASE_URL: str = "sqlite:///./trimmute.db"

    # Shared secret for the barber views (TEMP MVP, no accounts yet)
    BARBER_API_KEY: str = ""

    # Comma-separated, on top of the local Vite dev server
    FRONTEND_URLS: str = ""

    ENABLE_DB_TEST: bool = False
    ALLOW_DEBUG: bool = False
    SEED_SHOPS: bool = True

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def debug_enabled(self) -> bool:
        return not self.is_production or self.ALLOW_DEBUG

    @property
    def allowed_origins(self) -> List[str]:
        extra = [o.strip() for o in self.FRONTEND_URLS.split(",")]
        return [DEFAULT_ORIGIN] + [o for o in extra if o]


settings = Settings()
