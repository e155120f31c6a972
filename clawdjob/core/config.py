"""Runtime configuration loaded from the environment.

Values come from process environment variables, optionally seeded from a
``.env`` file in the working directory.
"""
import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    return float(value) if value else default


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    return int(value) if value else default


class Settings(BaseModel):
    """Resolved application settings."""
    anthropic_api_key: Optional[str] = None
    llm_model: str = 'anthropic:claude-3-haiku-20240307'
    database_url: Optional[str] = None
    data_dir: Path = Path('data')
    email_address: str = 'agent@clawdjob.ai'
    agent_seed: int = 42
    hunt_delay_seconds: float = 1.0
    max_applications_per_cycle: int = 3
    mock_job_count: int = 5
    hunt_interval_seconds: float = 300.0
    http_timeout: float = 30.0
    cors_origins: List[str] = ['*']

    @property
    def llm_enabled(self) -> bool:
        """Whether a model credential is configured."""
        return bool(self.anthropic_api_key)

    @property
    def use_database(self) -> bool:
        """Whether the relational store should be used instead of JSON files."""
        return bool(self.database_url)

    @classmethod
    def from_env(cls) -> 'Settings':
        """Build settings from environment variables."""
        return cls(
            anthropic_api_key=os.getenv('ANTHROPIC_API_KEY') or None,
            llm_model=os.getenv('LLM_MODEL', 'anthropic:claude-3-haiku-20240307'),
            database_url=os.getenv('DATABASE_URL') or None,
            data_dir=Path(os.getenv('DATA_DIR', 'data')),
            email_address=os.getenv('EMAIL_ADDRESS', 'agent@clawdjob.ai'),
            agent_seed=_env_int('AGENT_SEED', 42),
            hunt_delay_seconds=_env_float('HUNT_DELAY_SECONDS', 1.0),
            max_applications_per_cycle=_env_int('MAX_APPLICATIONS_PER_CYCLE', 3),
            mock_job_count=_env_int('MOCK_JOB_COUNT', 5),
            hunt_interval_seconds=_env_float('HUNT_INTERVAL_SECONDS', 300.0),
            http_timeout=_env_float('HTTP_TIMEOUT', 30.0),
            cors_origins=os.getenv('CORS_ORIGINS', '*').split(','),
        )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def override_settings(settings: Optional[Settings]) -> None:
    """Replace the cached settings. Passing None forces a reload."""
    global _settings
    _settings = settings
