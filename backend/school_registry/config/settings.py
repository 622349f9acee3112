import os
from typing import Optional
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Load the appropriate environment file
env_file = '.env.local'
load_dotenv(env_file)

class Settings(BaseSettings):
    """Application settings."""
    # App settings
    APP_ENV: str = os.getenv('APP_ENV', 'production')
    PORT: int = int(os.getenv('PORT', 5000))

    # Database settings
    DB_HOST: str = os.getenv('DB_HOST', 'localhost')
    DB_PORT: str = os.getenv('DB_PORT', '5432')
    DB_NAME: str = os.getenv('DB_NAME', 'school_registry')
    DB_USER: str = os.getenv('DB_USER', 'postgres')
    DB_PASSWORD: str = os.getenv('DB_PASSWORD', 'postgres')
    DB_SSL_VERIFY: bool = os.getenv('DB_SSL_VERIFY', 'true').lower() == 'true'
    # Full URL override, e.g. sqlite:///./schools.db for local development
    DATABASE_URL: Optional[str] = os.getenv('DATABASE_URL') or None

    # Connection pool
    DB_POOL_SIZE: int = int(os.getenv('DB_POOL_SIZE', 10))
    DB_POOL_TIMEOUT: int = int(os.getenv('DB_POOL_TIMEOUT', 30))

    # Image uploads
    UPLOAD_DIR: str = os.getenv('UPLOAD_DIR', os.path.join('public', 'schoolImages'))
    IMAGE_URL_PREFIX: str = os.getenv('IMAGE_URL_PREFIX', '/schoolImages')

    # CORS
    FRONTEND_URL: str = os.getenv('FRONTEND_URL', '')
    ALLOW_ALL_ORIGINS: bool = os.getenv('ALLOW_ALL_ORIGINS', 'false').lower() == 'true'

    # API settings
    API_TITLE: str = "School Registry API"
    API_DESCRIPTION: str = "Backend API for registering and browsing schools"
    API_VERSION: str = "1.0.0"
    API_DOCS_URL: str = "/api/docs"
    API_REDOC_URL: str = "/api/redoc"
    API_OPENAPI_URL: str = "/api/openapi.json"

    class Config:
        env_file = env_file
        extra = "ignore"

settings = Settings()
