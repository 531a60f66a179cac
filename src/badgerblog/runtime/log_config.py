from __future__ import annotations

import logging

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = "info") -> None:
    """Attach a stream handler to the `badgerblog` logger (once).

    Uvicorn configures its own loggers; this only covers application logs.
    `trace` is a uvicorn-only level and maps to DEBUG here.
    """

    name = level.strip().upper()
    if name == "TRACE":
        name = "DEBUG"
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level!r}")

    logger = logging.getLogger("badgerblog")
    logger.setLevel(numeric)
    if not any(getattr(h, "_badgerblog", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._badgerblog = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
