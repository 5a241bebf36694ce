from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Telegram Bot API
    telegram_token: str
    delivery_mode: Literal["polling", "webhook"] = "polling"
    telegram_webhook_url: str = ""
    telegram_webhook_secret: str = ""
    poll_timeout: int = 30  # seconds Telegram holds a getUpdates long poll open
    poll_retry_delay: float = 5.0

    # Google APIs
    google_key_file_path: str
    google_spreadsheet_id: str
    google_scopes: list[str] = [
        "https://www.googleapis.com/auth/spreadsheets",
        "https://www.googleapis.com/auth/drive",
        "https://www.googleapis.com/auth/gmail.readonly",
        "https://www.googleapis.com/auth/calendar",
    ]
    calendar_time_zone: str = "UTC"

    # Vocabulary sheet used by /addenglishword and /words
    vocabulary_range: str = "Vocabulary!A:C"

    # Logging
    log_level: str = "INFO"
    log_json: bool = True
    log_file: str = "data/quicklang.log"

    model_config = {"env_file": ".env"}
