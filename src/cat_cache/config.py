import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class Settings:
    """Application settings.

    Defaults are read from environment variables; the command line overrides
    them. An instance is passed explicitly to ``create_app``.
    """

    # Server
    host: str = field(default_factory=lambda: os.getenv("CACHE_HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.getenv("CACHE_PORT", "8080")))

    # Cache
    cache_dir: Path = field(default_factory=lambda: Path(os.getenv("CACHE_DIR", "./cache")))
    # When true, a storage read failure on GET is a 500 instead of a cache miss
    strict_reads: bool = field(default_factory=lambda: _env_flag("CACHE_STRICT_READS"))

    # Origin
    origin_base_url: str = field(
        default_factory=lambda: os.getenv("ORIGIN_BASE_URL", "https://http.cat")
    )
    origin_timeout: float = field(
        default_factory=lambda: float(os.getenv("ORIGIN_TIMEOUT", "10.0"))
    )

    # Logging
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    def __post_init__(self) -> None:
        """Validate and normalize settings after initialization."""
        if not 0 < self.port < 65536:
            raise ValueError(f"Port must be between 1 and 65535, got {self.port}")

        if self.origin_timeout <= 0:
            raise ValueError(f"ORIGIN_TIMEOUT must be positive, got {self.origin_timeout}")

        if not self.origin_base_url.startswith(("http://", "https://")):
            raise ValueError(
                f"ORIGIN_BASE_URL must be an http(s) URL, got {self.origin_base_url!r}"
            )

        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"LOG_LEVEL must be a logging level name, got {self.log_level!r}")

        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "cache_dir", Path(self.cache_dir).resolve())
        object.__setattr__(self, "origin_base_url", self.origin_base_url.rstrip("/"))
        object.__setattr__(self, "log_level", self.log_level.upper())


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance built from the environment."""
    return Settings()
