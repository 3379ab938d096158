import os
from dotenv import load_dotenv

load_dotenv()

class Settings:
    APP_NAME: str = os.getenv("APP_NAME", "T-K Pension")
    # Core settings
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development").lower()
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    BASE_URL: str = os.getenv("BASE_URL", "http://localhost:8000")

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./tkpension.db")

    # Object storage (Cloudinary if configured, local uploads otherwise)
    CLOUDINARY_URL: str = os.getenv("CLOUDINARY_URL", "")
    SCREENSHOT_BUCKET: str = os.getenv("SCREENSHOT_BUCKET", "transaction-screenshots")
    UPLOAD_DIR: str = os.getenv("UPLOAD_DIR", "app/static/uploads")

    # Upload constraints
    UPLOAD_IMAGE_MAX_MB: int = int(os.getenv("UPLOAD_IMAGE_MAX_MB", "5"))
    UPLOAD_IMAGE_MAX_BYTES: int = UPLOAD_IMAGE_MAX_MB * 1024 * 1024

    # Money
    CURRENCY: str = os.getenv("CURRENCY", "ETB")

    # Bank transfer instructions shown on the booking form
    BANK_ACCOUNT_NAME: str = os.getenv("BANK_ACCOUNT_NAME", "Hotel Booking Ltd")
    BANK_ACCOUNT_NUMBER: str = os.getenv("BANK_ACCOUNT_NUMBER", "1234567890")
    BANK_NAME: str = os.getenv("BANK_NAME", "Commercial Bank of Ethiopia")

    # Mail Settings (Mailgun)
    MAIL_FROM: str = os.getenv("MAIL_FROM", "noreply@tkpension.com")
    MAILGUN_API_KEY: str = os.getenv("MAILGUN_API_KEY", "")
    MAILGUN_DOMAIN: str = os.getenv("MAILGUN_DOMAIN", "")
    ADMIN_NOTIFICATION_EMAIL: str = os.getenv("ADMIN_NOTIFICATION_EMAIL", "")
    ADMIN_NOTIFICATION_EMAIL_ENABLE: bool = os.getenv("ADMIN_NOTIFICATION_EMAIL_ENABLE", "false").lower() == "true"

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
    RATE_LIMIT_DEFAULT: str = os.getenv("RATE_LIMIT_DEFAULT", "100/minute")
    RATE_LIMIT_BOOKING: str = os.getenv("RATE_LIMIT_BOOKING", "5/minute")
    RATE_LIMIT_CONTACT: str = os.getenv("RATE_LIMIT_CONTACT", "5/minute")

settings = Settings()
