from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Required for admin operations like seeding the first admin

    # App
    app_name: str = "outmentor-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"

    # Directory search
    search_result_limit: int = 50

    # Meetings (link generation is delegated to the video provider)
    meet_link_url: str = "https://meet.google.com/new"
    meeting_title: str = "Reunião OutMentor"

    # Avatars
    gravatar_size: int = 200
    gravatar_default: str = "identicon"

    # Seed script
    seed_admin_email: str = "admin@example.com"
    seed_admin_password: str = "ChangeMe123!"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
