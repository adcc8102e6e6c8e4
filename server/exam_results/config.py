from pydantic_settings import BaseSettings
from typing import Literal


class Settings(BaseSettings):
    """Application configuration settings"""
    
    # Application
    app_name: str = "Exam Results Service"
    debug: bool = True
    api_version: str = "v1"
    log_level: str = "INFO"
    
    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    
    # Database
    database_url: str = "sqlite:///./exam_results.db"
    
    # Result store
    result_store_backend: Literal["memory", "database"] = "database"
    result_key_prefix: str = "exam_result_"
    
    # Exam detail lookup (question enrichment)
    exam_details_url: str = "https://olympiad-zynlogic.hardikgarg.me/api/matchsets/{exam_id}/details"
    
    # Scoring
    pass_threshold: float = 50.0
    
    # CORS
    cors_origins: str = "http://localhost:5173,http://localhost:3000"
    
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.cors_origins.split(",")]
    
    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


# Global settings instance
settings = Settings()
