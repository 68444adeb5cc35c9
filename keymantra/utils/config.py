# keymantra/utils/config.py
from typing import Optional
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Load .env file before defining settings
load_dotenv()

class Settings(BaseSettings):
    # Database
    database_url: str = "sqlite+aiosqlite:///./keymantra.db"
    database_echo: bool = False  # Set to True to see SQL queries

    log_level: str = "INFO"
    log_file: Optional[str] = None  # Also write logs here when set

    # Dictation
    default_course_id: int = 1
    auto_advance_delay_s: float = 1.0  # Delay before a fully correct answer moves on
    ignored_punctuation: str = ".,?!"

    # Recitation
    reveal_hold_delay_s: float = 0.3  # How long a card must be held before it flips
    missing_answer_placeholder: str = "No answer yet"  # Shown when a revealed card has no answer

settings = Settings()

# --- Validation of timing values ---
if settings.auto_advance_delay_s < 0:
    raise ValueError("AUTO_ADVANCE_DELAY_S must not be negative")
if settings.reveal_hold_delay_s < 0:
    raise ValueError("REVEAL_HOLD_DELAY_S must not be negative")
