import logging
import os
import time
from dataclasses import dataclass, field
from typing import Optional

DEFAULT_HTTP_HOST = "0.0.0.0"
DEFAULT_HTTP_PORT = 10000
DEFAULT_FAUCET_AMOUNT = 1_000_000
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


@dataclass
class HostConfig:
    """Runtime settings for the local host and its web interface"""
    http_host: str = DEFAULT_HTTP_HOST
    port: int = DEFAULT_HTTP_PORT
    state_file: Optional[str] = None  # None keeps wallet state in memory
    genesis_time: int = field(default_factory=lambda: int(time.time()))
    faucet_amount: int = DEFAULT_FAUCET_AMOUNT
    log_level: str = "INFO"
    secret_key: str = "dev_secret_key_change_in_production"

    @classmethod
    def from_env(cls) -> 'HostConfig':
        defaults = cls()
        return cls(
            http_host=os.getenv("TIMELOCK_HOST", DEFAULT_HTTP_HOST),
            port=_env_int("PORT", DEFAULT_HTTP_PORT),
            state_file=os.getenv("TIMELOCK_STATE_FILE") or None,
            genesis_time=_env_int("TIMELOCK_GENESIS_TIME", defaults.genesis_time),
            faucet_amount=_env_int("TIMELOCK_FAUCET_AMOUNT", DEFAULT_FAUCET_AMOUNT),
            log_level=os.getenv("TIMELOCK_LOG_LEVEL", "INFO").upper(),
            secret_key=os.getenv("FLASK_SECRET_KEY", defaults.secret_key)
        )


def configure_logging(level: str = "INFO") -> None:
    """Root logger setup for the demo and web entry points"""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
