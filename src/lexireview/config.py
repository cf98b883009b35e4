"""Configuration settings for the review engine."""
import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
env_file = ".env.test" if os.getenv("ENV") == "test" else ".env"
load_dotenv(env_file)


# Review settings
SESSION_SIZE = 5  # questions per review session
MIN_VOCABULARY = 4  # words needed before a session may start
MIN_QUESTIONS = 2  # buildable questions needed to present a session


@dataclass
class DatabaseSettings:
    """Database configuration settings."""
    url: str = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///lexireview.db")
    echo: bool = os.getenv("DATABASE_ECHO", "false").lower() == "true"


@dataclass
class LoggingSettings:
    """Logging configuration settings."""
    level: str = os.getenv("LOG_LEVEL", "INFO")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    dir: Optional[str] = os.getenv("LOG_DIR", None)
    max_bytes: int = int(os.getenv("LOG_MAX_BYTES", str(10 * 1024 * 1024)))
    backup_count: int = int(os.getenv("LOG_BACKUP_COUNT", "5"))


@dataclass
class LearningSettings:
    """Review selection and mastery settings."""
    session_size: int = int(os.getenv("SESSION_SIZE", str(SESSION_SIZE)))
    min_vocabulary: int = int(os.getenv("MIN_VOCABULARY", str(MIN_VOCABULARY)))
    min_questions: int = int(os.getenv("MIN_QUESTIONS", str(MIN_QUESTIONS)))
    options_per_question: int = 4
    jitter_amplitude: float = float(os.getenv("JITTER_AMPLITUDE", "5"))
    difficult_bonus: int = 10
    wrong_weight: int = 3
    correct_weight: int = 1
    recency_cap_days: int = 30
    never_reviewed_days: int = 30
    mastery_min_correct: int = 3
    mastery_min_accuracy: float = 0.7


@dataclass
class MonitoringSettings:
    """Metrics exporter settings."""
    enabled: bool = os.getenv("METRICS_ENABLED", "false").lower() == "true"
    port: int = int(os.getenv("METRICS_PORT", "9090"))


def get_database_settings() -> DatabaseSettings:
    """Get database settings."""
    return DatabaseSettings()


def get_logging_settings() -> LoggingSettings:
    """Get logging settings."""
    return LoggingSettings()


def get_learning_settings() -> LearningSettings:
    """Get learning settings."""
    return LearningSettings()


def get_monitoring_settings() -> MonitoringSettings:
    """Get monitoring settings."""
    return MonitoringSettings()


@dataclass
class Settings:
    """Main settings class that combines all configuration settings."""
    database: DatabaseSettings = field(default_factory=get_database_settings)
    logging: LoggingSettings = field(default_factory=get_logging_settings)
    learning: LearningSettings = field(default_factory=get_learning_settings)
    monitoring: MonitoringSettings = field(default_factory=get_monitoring_settings)

    def validate(self) -> None:
        """Validate settings and raise ValueError if invalid."""
        if not self.database.url:
            raise ValueError("DATABASE_URL is required")

        if self.learning.session_size < 1:
            raise ValueError("SESSION_SIZE must be positive")

        if self.learning.min_vocabulary < self.learning.options_per_question:
            raise ValueError("MIN_VOCABULARY cannot be lower than the number of options per question")

        if self.learning.min_questions < 1:
            raise ValueError("MIN_QUESTIONS must be positive")

        if self.learning.jitter_amplitude < 0:
            raise ValueError("JITTER_AMPLITUDE cannot be negative")


# Create global settings instance
settings = Settings()
settings.validate()
