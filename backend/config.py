"""
Configuration for the Bedrock Addon Generator Backend
"""
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load environment variables
load_dotenv()

# Paths
BASE_DIR = Path(__file__).parent

# Bedrock packaging defaults (override via environment variables to match your client)
DEFAULT_ADDON_VERSION = "1.0.0"
DEFAULT_MIN_ENGINE_VERSION = os.getenv("MIN_ENGINE_VERSION", "1.21.50")
BEHAVIOR_FORMAT_VERSION = os.getenv("BEHAVIOR_FORMAT_VERSION", "1.21.50")
CLIENT_ENTITY_FORMAT_VERSION = "1.10.0"
MANIFEST_FORMAT_VERSION = 2
SCRIPT_SERVER_VERSION = os.getenv("SCRIPT_SERVER_VERSION", "1.17.0")
DEFAULT_AUTHORS = ["Addon Generator"]

# Server Configuration
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]


class ConfigError(Exception):
    """Raised when required configuration is missing"""
    pass


class AIConfig(BaseModel):
    """
    Settings for the content-expansion collaborator.

    Built explicitly and handed to ConceptExpander; nothing in the packaging
    core reads these values.
    """
    api_key: Optional[str] = Field(None, description="Gemini API key")
    model: str = Field("gemini-2.0-flash")
    temperature: float = Field(0.3, ge=0.0, le=2.0)
    max_retries: int = Field(2, ge=0)
    request_timeout: float = Field(60.0, gt=0)

    @classmethod
    def from_env(cls) -> "AIConfig":
        """Read AI settings from the process environment."""
        return cls(
            api_key=os.getenv("GEMINI_API_KEY"),
            model=os.getenv("AI_MODEL", "gemini-2.0-flash"),
            temperature=float(os.getenv("AI_TEMPERATURE", "0.3")),
            max_retries=int(os.getenv("AI_MAX_RETRIES", "2")),
            request_timeout=float(os.getenv("AI_REQUEST_TIMEOUT", "60")),
        )

    def require_api_key(self) -> str:
        if not self.api_key:
            raise ConfigError("GEMINI_API_KEY not found in environment variables")
        return self.api_key
