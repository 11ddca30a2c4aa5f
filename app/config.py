import os
from dotenv import load_dotenv
from pydantic_settings import BaseSettings

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application configuration from environment variables"""

    # App
    app_name: str = "Salon Booking API"
    debug: bool = os.getenv("DEBUG", "False").lower() == "true"
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./salon_booking.db")

    # SMTP (email notifications)
    smtp_host: str = os.getenv("SMTP_HOST", "")
    smtp_port: int = int(os.getenv("SMTP_PORT", "2525"))
    smtp_user: str = os.getenv("SMTP_USER", "")
    smtp_password: str = os.getenv("SMTP_PASSWORD", "")
    smtp_use_tls: bool = os.getenv("SMTP_USE_TLS", "True").lower() == "true"
    smtp_timeout: float = float(os.getenv("SMTP_TIMEOUT", "30"))
    email_from_address: str = os.getenv("EMAIL_FROM_ADDRESS", "bookings@salon.local")

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
