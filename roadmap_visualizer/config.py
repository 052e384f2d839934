# roadmap_visualizer/config.py

from typing import List
import logging
import sys

from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv
from pythonjsonlogger.json import JsonFormatter

load_dotenv()

# Custom JSON formatter that excludes null/None fields
class CustomJsonFormatter(JsonFormatter):
    """Custom JSON formatter that only includes fields with non-None values."""

    def add_fields(self, log_record, record, message_dict):
        """Override to filter out None values before adding to JSON output."""
        super().add_fields(log_record, record, message_dict)

        for key, value in dict(log_record).items():
            if value is None:
                del log_record[key]


LOGGER_NAME = "roadmap_visualizer"


def setup_json_logging(log_level: int = logging.INFO) -> None:
    """Initialize JSON logging configuration for the application."""
    handler = logging.StreamHandler(sys.stdout)

    # JSON formatter with the context fields used across the application
    formatter = CustomJsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s "
        "%(roadmap_id)s %(roadmap_name)s %(item_id)s %(file_name)s "
        "%(count)s %(total)s %(valid)s %(invalid)s %(reason)s"
    )

    handler.setFormatter(formatter)

    root_logger = logging.getLogger(LOGGER_NAME)
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers = []

    root_logger.addHandler(handler)

    # Prevent propagation to avoid duplicate logs
    root_logger.propagate = False


class Settings(BaseSettings):
    # App
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # Database (SQLite file under ./data by default)
    DATABASE_URL: str = "sqlite:///./data/roadmaps.db"

    # Uploads
    DEFAULT_UPLOAD_FILE_NAME: str = "uploaded.yaml"
    MAX_UPLOAD_BYTES: int = 1_048_576

    # CORS
    CORS_ALLOW_ORIGINS: List[str] = ["*"]
    CORS_ALLOW_METHODS: List[str] = ["GET", "POST", "DELETE", "OPTIONS"]
    CORS_ALLOW_HEADERS: List[str] = ["Content-Type", "X-File-Name"]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


settings = Settings()
