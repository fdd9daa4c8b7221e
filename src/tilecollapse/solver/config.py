"""Tile generator configuration."""

from dotenv import find_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine the environment file path, or None if not found
ENV_FILE = find_dotenv() or None


class GeneratorConfig(BaseSettings):
    """Configuration settings for the tile generator.

    Each setting can be overridden with an environment variable of the same name,
    prefixed with `TILECOLLAPSE_` (e.g. `TILECOLLAPSE_MAX_ATTEMPTS=50`).  The value `null`
    sets an optional setting to None (e.g. `TILECOLLAPSE_MAX_ATTEMPTS=null` for unbounded
    retry).
    """

    max_attempts: int | None = Field(default=10, ge=1)
    """Maximum number of attempts before giving up. If None, retry until success. Default: 10."""

    seed: int | None = None
    """Seed for the random generator shared by all attempts. If None (default), unseeded."""

    randomize_ties: bool = False
    """Whether to break entropy ties randomly instead of by insertion order. Default: False."""

    report_interval: int = Field(default=10_000, ge=1)
    """Interval (in number of collapsed cells) at which to report progress. Default: 10,000."""

    log_dir: str = "logs"
    """Directory under which `run()` writes its log files. Default: "logs"."""

    model_config = SettingsConfigDict(
        env_prefix="TILECOLLAPSE_",
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
        env_parse_none_str="null",
    )


config = GeneratorConfig()
