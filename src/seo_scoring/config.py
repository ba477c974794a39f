from dotenv import load_dotenv
from dataclasses import dataclass
from typing import Optional
from pathlib import Path
import json
import logging
import os

load_dotenv()  # Loads variables from .env file

logger = logging.getLogger(__name__)


class Settings:
    """
    Manages application settings loaded from environment variables.
    """
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///seo_scoring.db")  # Default to SQLite
    DB_BACKEND = os.getenv("DB_BACKEND", "local")

    LLM_API_KEY = os.getenv("LLM_API_KEY")
    LLM_MODEL = os.getenv("LLM_MODEL", "gpt-4")
    LLM_PROVIDER = os.getenv("LLM_PROVIDER", "openai")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()


@dataclass
class Config:
    """Configuration for the content scoring core."""
    llm_api_key: Optional[str] = None
    llm_model: str = "gpt-4"
    llm_provider: str = "openai"
    llm_max_retries: int = 3
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables.

        Returns:
            Config: Configuration instance with values from environment
        """
        return cls(
            llm_api_key=os.getenv("LLM_API_KEY"),
            llm_model=os.getenv("LLM_MODEL", "gpt-4"),
            llm_provider=os.getenv("LLM_PROVIDER", "openai"),
            llm_max_retries=int(os.getenv("LLM_MAX_RETRIES", "3")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


@dataclass
class ContentThresholds:
    """Configurable thresholds for content analysis."""

    # Text generator input limits (characters)
    readability_max_chars: int = 3000
    keyword_extraction_max_chars: int = 2000

    # Keyword density (percentage)
    keyword_sparse_density: float = 0.5
    keyword_stuffing_density: float = 3.0

    # Keyword distribution
    distribution_sections: int = 5
    distribution_even_ratio: float = 0.7
    distribution_somewhat_even_ratio: float = 0.4

    # Keyword under-use: fewer occurrences than this on long content
    keyword_min_occurrences: int = 3
    keyword_underuse_min_words: int = 500

    # Paragraphs (words)
    long_paragraph_words: int = 100
    short_paragraph_words: int = 20
    many_paragraphs: int = 10

    # Content longer than this (characters) should carry lists and images
    long_content_chars: int = 1000

    # Structure score penalties
    structure_issue_penalty: int = 10
    heading_hierarchy_penalty: int = 15

    # Keyword score penalties
    keyword_missing_title_penalty: int = 20
    keyword_missing_headings_penalty: int = 15
    keyword_missing_first_paragraph_penalty: int = 15
    keyword_uneven_penalty: int = 15
    keyword_somewhat_even_penalty: int = 5
    keyword_improvement_penalty: int = 5

    # Content score weights
    readability_weight: float = 0.4
    keyword_weight: float = 0.3
    structure_weight: float = 0.3

    @classmethod
    def from_env(cls) -> "ContentThresholds":
        """Load thresholds from environment variables.

        Environment variables should be prefixed with SEO_THRESHOLD_
        e.g., SEO_THRESHOLD_LONG_PARAGRAPH_WORDS=120

        Returns:
            ContentThresholds with values from environment
        """
        thresholds = cls()
        prefix = "SEO_THRESHOLD_"

        for field_name in thresholds.__dataclass_fields__:
            env_key = f"{prefix}{field_name.upper()}"
            env_value = os.getenv(env_key)

            if env_value is not None:
                field_type = thresholds.__dataclass_fields__[field_name].type
                try:
                    if field_type in (int, "int"):
                        setattr(thresholds, field_name, int(env_value))
                    elif field_type in (float, "float"):
                        setattr(thresholds, field_name, float(env_value))
                except ValueError:
                    logger.warning(f"Ignoring invalid value for {env_key}: {env_value!r}")

        return thresholds

    @classmethod
    def from_file(cls, path: str) -> "ContentThresholds":
        """Load thresholds from a JSON configuration file.

        Args:
            path: Path to JSON configuration file

        Returns:
            ContentThresholds with values from file
        """
        thresholds = cls()
        file_path = Path(path)

        if not file_path.exists():
            return thresholds

        with open(file_path, 'r') as f:
            config = json.load(f)

        threshold_config = config.get('thresholds', config)

        for field_name in thresholds.__dataclass_fields__:
            if field_name in threshold_config:
                setattr(thresholds, field_name, threshold_config[field_name])

        return thresholds

    def to_dict(self) -> dict:
        """Convert thresholds to dictionary.

        Returns:
            Dictionary of all threshold values
        """
        return {
            field_name: getattr(self, field_name)
            for field_name in self.__dataclass_fields__
        }

    def save_to_file(self, path: str) -> None:
        """Save current thresholds to a JSON file.

        Args:
            path: Path to save configuration
        """
        with open(path, 'w') as f:
            json.dump({'thresholds': self.to_dict()}, f, indent=2)


# Global default thresholds instance
default_thresholds = ContentThresholds()
