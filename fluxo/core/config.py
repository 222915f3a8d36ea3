from pydantic_settings import BaseSettings
from typing import Optional, List


class Settings(BaseSettings):
    """Application settings with type-safe configuration management."""
    
    # Database Configuration
    DATABASE_URL: str = "postgresql+asyncpg://postgres:postgres@db:5432/fluxo"
    
    # Redis Configuration
    REDIS_URL: str = "redis://redis:6379/0"
    
    # Account store selection: "sql" or "local"
    ACCOUNT_STORE: str = "sql"
    
    # Local storage adapter: "memory" or "redis"
    LOCAL_STORAGE_BACKEND: str = "memory"
    LOCAL_STORAGE_QUOTA_BYTES: Optional[int] = 5 * 1024 * 1024
    
    # Security Configuration
    SECRET_KEY: str
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    ALGORITHM: str = "HS256"
    
    # Bcrypt hash of the platform administrator credential
    SUPER_ADMIN_PASSWORD_HASH: Optional[str] = None
    
    # Approving organizer requests that carry no linked account
    LEGACY_ORGANIZER_RECOVERY: bool = True
    
    # Google identity
    GOOGLE_CLIENT_ID: Optional[str] = None
    GOOGLE_TOKENINFO_URL: str = "https://oauth2.googleapis.com/tokeninfo"
    
    # CORS Configuration
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://localhost:8000"
    
    # Environment
    ENVIRONMENT: str = "development"
    
    # Logging; LOG_LEVEL overrides the environment default
    LOG_LEVEL: Optional[str] = None
    LOG_FILE: Optional[str] = "logs/fluxo.log"
    
    class Config:
        env_file = ".env"
        case_sensitive = True
    
    @property
    def allowed_origins_list(self) -> List[str]:
        """Convert comma-separated ALLOWED_ORIGINS string to list."""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]


# Create a single instance to be imported throughout the app
settings = Settings()
