"""
Omnigage Imports — Configuration
All secrets loaded from environment variables.
Copy .env.example → .env and fill in your credentials.
"""
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env before any os.getenv() calls in dataclass defaults
_ENV_PATH = Path(__file__).parent / ".env"
load_dotenv(_ENV_PATH, override=True)


@dataclass
class OmnigageConfig:
    # Account -> Developer -> API Tokens
    token_key: str = os.getenv("OMNIGAGE_TOKEN_KEY", "")
    token_secret: str = os.getenv("OMNIGAGE_TOKEN_SECRET", "")
    # Account -> Settings -> General -> "Key"
    account_key: str = os.getenv("OMNIGAGE_ACCOUNT_KEY", "")
    # Only change if using sandbox
    host: str = os.getenv("OMNIGAGE_HOST", "https://api.omnigage.io/api/v1/")
    timeout: float = float(os.getenv("OMNIGAGE_TIMEOUT", "30"))

    @property
    def is_configured(self) -> bool:
        return bool(self.token_key and self.token_secret and self.account_key)


@dataclass
class ImportConfig:
    # Local path to a XLSX or CSV, used when the CLI gets no path argument
    file_path: str = os.getenv("OMNIGAGE_IMPORT_PATH", "")


@dataclass
class ImportsSettings:
    omnigage: OmnigageConfig = field(default_factory=OmnigageConfig)
    imports: ImportConfig = field(default_factory=ImportConfig)
    debug: bool = os.getenv("OMNIGAGE_DEBUG", "false").lower() == "true"


# Global config instance
config = ImportsSettings()
