"""
Booking Service Configuration

Centralized configuration for the booking service.
All settings can be overridden via environment variables.
"""
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


def load_env_files(project_root: Optional[Path] = None) -> None:
    """
    Load .env and .env.local from the project root.

    .env is loaded first without overriding the process environment,
    then .env.local overrides it.
    """
    root = project_root or Path(__file__).resolve().parent.parent.parent
    env_file = root / ".env"
    env_local_file = root / ".env.local"

    if env_file.exists():
        load_dotenv(env_file, override=False)
    if env_local_file.exists():
        load_dotenv(env_local_file, override=True)


class BookingConfig:
    """
    Central configuration for the booking service.

    Values are read from the environment when an instance is created, so a
    fresh ``BookingConfig()`` picks up overrides set after import.

    Example:
        >>> os.environ["PORT"] = "4000"
        >>> BookingConfig().API_PORT
        4000
    """

    def __init__(self):
        # ====================================================================
        # Environment
        # ====================================================================

        self.ENVIRONMENT: str = os.getenv("APP_ENV", "development").lower()
        """development | production | test"""

        # ====================================================================
        # API Settings
        # ====================================================================

        self.API_HOST: str = os.getenv("HOST", "0.0.0.0")
        self.API_PORT: int = int(os.getenv("PORT", "3008"))

        # ====================================================================
        # DynamoDB
        # ====================================================================

        self.BOOKINGS_TABLE: str = os.getenv("BOOKINGS_TABLE", "bookings")
        self.AWS_REGION: str = os.getenv("AWS_REGION", "us-east-1")
        self.DYNAMODB_ENDPOINT: Optional[str] = os.getenv("AWS_ENDPOINT", "http://localhost:8000") or None
        """Set AWS_ENDPOINT to an empty string to use the real AWS endpoint"""

        self.INIT_TABLE_ON_STARTUP: bool = os.getenv(
            "INIT_TABLE_ON_STARTUP", "true").lower() == "true"
        """Create the bookings table and its indexes at startup if missing"""

        # ====================================================================
        # Upstream services
        # ====================================================================

        self.TIMESLOT_SERVICE_URL: str = os.getenv(
            "TIMESLOT_SERVICE_URL", "http://localhost:3006/api")
        self.TIMESLOT_TIMEOUT: float = float(os.getenv("TIMESLOT_TIMEOUT", "5.0"))

        self.AUTH_SERVICE_URL: str = os.getenv(
            "AUTH_SERVICE_URL", "http://localhost:3000/api/auth")
        self.AUTH_TIMEOUT: float = float(os.getenv("AUTH_TIMEOUT", "5.0"))

        # ====================================================================
        # Logging Settings
        # ====================================================================

        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
        """Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL"""

        self.LOG_FORMAT: str = os.getenv("LOG_FORMAT", "json")
        """Log format: 'json' (structured) or 'pretty' (readable)"""

        self.LOG_FILE: Optional[str] = os.getenv("LOG_FILE")

        self.ENABLE_REQUEST_LOGGING: bool = os.getenv(
            "ENABLE_REQUEST_LOGGING", "true").lower() == "true"
        """Log all HTTP requests/responses with timing"""

    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"
