import logging
from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings
from typing import ClassVar, List

from capsule.constants.constants import Category, DRAW_RETRIES, SEARCH_RESULT_LIMIT

# Load environment variables from .env file
load_dotenv(".env", override=False)
logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Class to store all the settings of the Inspiration Capsule."""

    # ------------------------------
    # Database
    # ------------------------------
    DATABASE_URL: str = Field(default="sqlite+aiosqlite:///./capsule.db", env="DATABASE_URL")
    DB_ECHO: bool = Field(False, env="DB_ECHO")
    DB_POOL_SIZE: int = Field(5, env="DB_POOL_SIZE")

    # ------------------------------
    # Retrieval
    # ------------------------------
    SEARCH_RESULT_LIMIT: int = Field(SEARCH_RESULT_LIMIT, env="SEARCH_RESULT_LIMIT")
    DRAW_RETRIES: int = Field(DRAW_RETRIES, env="DRAW_RETRIES")
    DEFAULT_CATEGORY: str = Field(Category.general.value, env="DEFAULT_CATEGORY")

    # ------------------------------
    # Environment
    # ------------------------------
    ENVIRONMENT: str = Field("development", env="ENVIRONMENT")
    LOG_LEVEL: str = Field("INFO", env="LOG_LEVEL")

    # ------------------------------
    # Database models
    # ------------------------------
    DB_MODELS: ClassVar[List[str]] = [
        "capsule.models.inspiration",
    ]

    class Config:
        """Configuration for the settings class."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Instantiate the settings
settings = Settings()
