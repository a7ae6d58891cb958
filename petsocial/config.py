from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    firebase_credentials_path: str = ""
    firebase_project_id: str = ""
    default_page_size: int = 20
    cors_origins: str = "*"
    log_level: str = "INFO"

    # Default search radius per nearby endpoint, in km
    event_radius_km: float = 10.0
    service_radius_km: float = 10.0
    pet_radius_km: float = 5.0
    user_radius_km: float = 5.0

    # Link rendering for hashtags and mentions
    hashtag_path_prefix: str = "/hashtag"
    user_path_prefix: str = "/user"
    pet_path_prefix: str = "/pet"
    link_css_class: str = "text-blue-500 hover:underline"

    model_config = {"env_prefix": "PETSOCIAL_", "env_file": ".env", "extra": "ignore"}

    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        upper = v.upper()
        if upper not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log_level '{v}'")
        return upper


settings = Settings()
