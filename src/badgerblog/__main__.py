from __future__ import annotations

import argparse
import time

from .config import LOG_LEVELS, Settings
from .runtime.log_config import configure_logging
from .runtime.server import run


def main(argv: list[str] | None = None) -> None:
    p = argparse.ArgumentParser(prog="badgerblog", description="badgerblog: blog forms with client-side validation")
    p.add_argument("--host", default=None, help="bind host (default: BADGERBLOG_HOST or 127.0.0.1)")
    p.add_argument("--port", type=int, default=None, help="bind port (default: BADGERBLOG_PORT or 8000)")
    p.add_argument("--log-level", default=None, choices=LOG_LEVELS)
    p.add_argument(
        "--no-client-validation",
        action="store_true",
        help="skip registering the client-side validation extensions",
    )
    p.add_argument("--open-browser", action="store_true")
    args = p.parse_args(argv)

    try:
        defaults = Settings.from_env()
    except ValueError as e:
        p.error(f"invalid environment: {e}")

    settings = defaults.with_overrides(
        host=args.host,
        port=args.port,
        log_level=args.log_level,
        client_validation=False if args.no_client_validation else None,
    )
    configure_logging(settings.log_level)

    srv = run(
        host=settings.host,
        port=settings.port,
        open_browser=args.open_browser,
        log_level=settings.log_level,
        new_server=True,
        settings=settings,
    )
    print(srv.url)

    # Block forever (so it behaves like a normal CLI server)
    while True:
        time.sleep(3600)


if __name__ == "__main__":
    main()
