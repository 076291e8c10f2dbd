import os
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Load the appropriate environment file
env_file = '.env.local' # if local or prod or staging
load_dotenv(env_file)

class Settings(BaseSettings):
    """Application settings."""
    # App settings
    APP_ENV: str = os.getenv('APP_ENV', 'production')
    PORT: int = int(os.getenv('PORT', 3000))

    # AWS settings
    AWS_ACCESS_KEY_ID: str = os.getenv('AWS_ACCESS_KEY_ID', '')
    AWS_SECRET_ACCESS_KEY: str = os.getenv('AWS_SECRET_ACCESS_KEY', '')
    AWS_REGION: str = os.getenv('AWS_REGION', 'ap-south-1')
    AWS_CONNECT_TIMEOUT: int = int(os.getenv('AWS_CONNECT_TIMEOUT', 5))
    AWS_READ_TIMEOUT: int = int(os.getenv('AWS_READ_TIMEOUT', 15))
    AWS_MAX_ATTEMPTS: int = int(os.getenv('AWS_MAX_ATTEMPTS', 2))

    # DynamoDB settings
    DYNAMODB_ENDPOINT_URL: str = os.getenv('DYNAMODB_ENDPOINT_URL', '')  # e.g. http://localhost:8000 for dynamodb-local
    DYNAMODB_TABLE_PREFIX: str = os.getenv('DYNAMODB_TABLE_PREFIX', '')

    # S3 settings
    PHOTO_BUCKET: str = os.getenv('PHOTO_BUCKET', 'erp-s101')
    PHOTO_MAX_BYTES: int = int(os.getenv('PHOTO_MAX_BYTES', 5 * 1024 * 1024))

    # Hostel allocation
    DEFAULT_HOSTEL_ID: str = os.getenv('DEFAULT_HOSTEL_ID', 'H001')

    # Error responses carry the raw store message only when enabled
    EXPOSE_ERROR_DETAILS: bool = os.getenv('EXPOSE_ERROR_DETAILS', 'false').lower() == 'true'

    # CORS
    FRONTEND_URL: str = os.getenv('FRONTEND_URL', '')
    ALLOW_ALL_ORIGINS: bool = os.getenv('ALLOW_ALL_ORIGINS', 'false').lower() == 'true'

    # API settings
    API_TITLE: str = "Campus ERP Gateway"
    API_DESCRIPTION: str = "Student, faculty, hostel and academic records API"
    API_VERSION: str = "1.0.0"
    API_DOCS_URL: str = "/api/docs"
    API_REDOC_URL: str = "/api/redoc"
    API_OPENAPI_URL: str = "/api/openapi.json"

    class Config:
        env_file = env_file

settings = Settings()
