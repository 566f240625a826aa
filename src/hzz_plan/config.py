"""Shared configuration, read from the environment (and ``.env`` at the project root)."""

import os
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).parent.parent.parent.resolve()
load_dotenv(ROOT / ".env")

# Packaged field catalog (sections > fields > options / table row kinds)
DEFAULT_SCHEMA_PATH = Path(__file__).parent / "schema" / "data" / "hzz_structure.json"

# Section holding the applicant's personal data; filled from intake, never generated or validated
PERSONAL_SECTION_KEY = "1"

# OpenAI settings for draft generation
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL", "").rstrip("/")
GENERATION_MODEL = os.getenv("HZZ_GENERATION_MODEL", "gpt-4o")
GENERATION_TEMPERATURE = float(os.getenv("HZZ_GENERATION_TEMPERATURE", "0.7"))
GENERATION_MAX_TOKENS = int(os.getenv("HZZ_GENERATION_MAX_TOKENS", "8000"))
GENERATION_TIMEOUT = float(os.getenv("HZZ_GENERATION_TIMEOUT", "120"))

LOG_LEVEL = os.getenv("HZZ_LOG_LEVEL", "INFO").upper()


def schema_path() -> Path:
    """Return the catalog path, honouring ``HZZ_SCHEMA_PATH`` when set."""
    override = os.getenv("HZZ_SCHEMA_PATH", "")
    return Path(override).expanduser() if override else DEFAULT_SCHEMA_PATH
