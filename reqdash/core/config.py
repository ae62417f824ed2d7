from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    api_base_url: str = "http://localhost:5000/api"
    backend_cors_origins: str = "http://localhost:3000"
    debounce_seconds: float = 0.5
    jira_push_timeout: float = 30
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "allow"

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.backend_cors_origins.split(",") if origin.strip()]
