"""
Configuration management for the slot machine.
Supports config.json with environment variable overrides.
All paths are resolved relative to the project root.
"""

import json
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

# Project root directory (parent of the 'slot_machine' package)
PROJECT_ROOT = Path(__file__).parent.parent


def get_env(key: str, default: str = None) -> Optional[str]:
    """Get environment variable with optional default."""
    return os.environ.get(key, default)


def get_env_bool(key: str, default: bool = False) -> bool:
    """Get boolean environment variable."""
    val = os.environ.get(key)
    if val is None:
        return default
    return val.lower() in ("true", "1", "yes", "on")


def get_env_int(key: str, default: int = 0) -> int:
    """Get integer environment variable."""
    val = os.environ.get(key)
    if val is None:
        return default
    try:
        return int(val)
    except ValueError:
        return default


def get_env_float(key: str, default: float = 0.0) -> float:
    """Get float environment variable."""
    val = os.environ.get(key)
    if val is None:
        return default
    try:
        return float(val)
    except ValueError:
        return default


# ==================== Configuration Models ====================

class ServerConfig(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    name: str = "Slot Machine"


class GameConfig(BaseModel):
    starting_credits: int = Field(default=100, ge=1)
    spin_delay_seconds: float = Field(default=0.5, ge=0)  # per animation frame
    spin_frames: int = Field(default=3, ge=0)
    rng_seed: Optional[int] = None  # None -> cryptographic RNG
    session_ttl_seconds: int = Field(default=1800, ge=1)  # idle API sessions are dropped after this


class RateLimitConfig(BaseModel):
    enabled: bool = True
    spin_requests: str = "30/minute"
    session_requests: str = "10/minute"


class LoggingConfig(BaseModel):
    level: str = "INFO"
    log_to_file: bool = False
    formatter: str = "color"


class PathsConfig(BaseModel):
    """All paths are relative to PROJECT_ROOT."""
    log_file: str = "logs/slot_machine.log"

    def get_log_path(self) -> Path:
        return PROJECT_ROOT / self.log_file


class AppConfig(BaseModel):
    """Main application configuration."""
    server: ServerConfig = Field(default_factory=ServerConfig)
    game: GameConfig = Field(default_factory=GameConfig)
    rate_limit: RateLimitConfig = Field(default_factory=RateLimitConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)


# ==================== Configuration Loading ====================

def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """
    Load configuration from config.json with environment variable overrides.
    Environment variables take precedence over config.json values.
    """
    if config_path is None:
        config_path = PROJECT_ROOT / "config.json"

    data = {}
    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)

    if get_env("SERVER_HOST"):
        data.setdefault("server", {})["host"] = get_env("SERVER_HOST")
    if get_env("SERVER_PORT"):
        data.setdefault("server", {})["port"] = get_env_int("SERVER_PORT", 8000)
    if get_env("DEBUG"):
        data.setdefault("server", {})["debug"] = get_env_bool("DEBUG")

    if get_env("STARTING_CREDITS"):
        data.setdefault("game", {})["starting_credits"] = get_env_int("STARTING_CREDITS", 100)
    if get_env("SPIN_DELAY"):
        data.setdefault("game", {})["spin_delay_seconds"] = get_env_float("SPIN_DELAY", 0.5)
    if get_env("RNG_SEED"):
        data.setdefault("game", {})["rng_seed"] = get_env_int("RNG_SEED")
    if get_env("SESSION_TTL"):
        data.setdefault("game", {})["session_ttl_seconds"] = get_env_int("SESSION_TTL", 1800)

    if get_env("LOG_LEVEL"):
        data.setdefault("logging", {})["level"] = get_env("LOG_LEVEL")
    if get_env("LOG_TO_FILE"):
        data.setdefault("logging", {})["log_to_file"] = get_env_bool("LOG_TO_FILE")
    if get_env("LOG_FORMATTER"):
        data.setdefault("logging", {})["formatter"] = get_env("LOG_FORMATTER")

    if get_env("RATE_LIMIT_ENABLED"):
        data.setdefault("rate_limit", {})["enabled"] = get_env_bool("RATE_LIMIT_ENABLED", True)
    if get_env("RATE_LIMIT_SPIN_REQUESTS"):
        data.setdefault("rate_limit", {})["spin_requests"] = get_env("RATE_LIMIT_SPIN_REQUESTS")
    if get_env("RATE_LIMIT_SESSION_REQUESTS"):
        data.setdefault("rate_limit", {})["session_requests"] = get_env("RATE_LIMIT_SESSION_REQUESTS")

    return AppConfig(**data)


def save_config(config: AppConfig, config_path: Optional[Path] = None):
    """Save configuration to config.json."""
    if config_path is None:
        config_path = PROJECT_ROOT / "config.json"

    # Paths are computed, not stored
    data = config.model_dump(exclude={"paths"})

    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=4)


# Global config instance
settings = load_config()
