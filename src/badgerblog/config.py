from __future__ import annotations

import os
from dataclasses import dataclass, field, replace

DEFAULT_CORS_ORIGINS: tuple[str, ...] = (
    "http://localhost:5173",
    "http://127.0.0.1:5173",
)

LOG_LEVELS = ("critical", "error", "warning", "info", "debug", "trace")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def _parse_bool(name: str, raw: str) -> bool:
    v = raw.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean (1/0, true/false), got {raw!r}")


def _parse_port(name: str, raw: str) -> int:
    try:
        port = int(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if not 0 <= port <= 65535:
        raise ValueError(f"{name} must be between 0 and 65535, got {port}")
    return port


def _parse_log_level(name: str, raw: str) -> str:
    v = raw.strip().lower()
    if v not in LOG_LEVELS:
        raise ValueError(f"{name} must be one of {', '.join(LOG_LEVELS)}, got {raw!r}")
    return v


@dataclass(frozen=True)
class Settings:
    """Process configuration.

    Read once at startup from `BADGERBLOG_*` environment variables; CLI flags
    override individual fields with `with_overrides`.
    """

    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "info"
    client_validation: bool = True
    cors_origins: tuple[str, ...] = field(default=DEFAULT_CORS_ORIGINS)

    @classmethod
    def from_env(cls) -> "Settings":
        s = cls()
        host = os.getenv("BADGERBLOG_HOST")
        port = os.getenv("BADGERBLOG_PORT")
        log_level = os.getenv("BADGERBLOG_LOG_LEVEL")
        client_validation = os.getenv("BADGERBLOG_CLIENT_VALIDATION")
        origins = os.getenv("BADGERBLOG_CORS_ORIGINS")

        return cls(
            host=host.strip() if host and host.strip() else s.host,
            port=_parse_port("BADGERBLOG_PORT", port) if port is not None else s.port,
            log_level=_parse_log_level("BADGERBLOG_LOG_LEVEL", log_level) if log_level is not None else s.log_level,
            client_validation=(
                _parse_bool("BADGERBLOG_CLIENT_VALIDATION", client_validation)
                if client_validation is not None
                else s.client_validation
            ),
            cors_origins=(
                tuple(o.strip() for o in origins.split(",") if o.strip()) if origins is not None else s.cors_origins
            ),
        )

    def with_overrides(self, **changes: object) -> "Settings":
        """Return a copy with the non-None `changes` applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
