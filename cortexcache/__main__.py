"""
Command-line entry point

    python -m cortexcache --addr :4000 --dsn sqlite+aiosqlite:///./cortexcache.db

Flags override the environment / .env configuration.
"""

import argparse
import os

from cortexcache.config import get_settings


def parse_addr(addr: str) -> tuple[str, int]:
    """
    Parse a "host:port" listen address

    An empty host (":4000") listens on all interfaces.

    Raises:
        argparse.ArgumentTypeError: The address is malformed
    """
    host, sep, port = addr.rpartition(":")
    if not sep or not port.isdigit():
        raise argparse.ArgumentTypeError(f"invalid address {addr!r}, expected host:port")
    port_number = int(port)
    if not 0 < port_number < 65536:
        raise argparse.ArgumentTypeError(f"invalid port in address {addr!r}")
    return host.strip("[]") or "0.0.0.0", port_number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cortexcache",
        description="Cortex Cache snippet sharing web application",
    )
    parser.add_argument(
        "--addr",
        type=parse_addr,
        default=None,
        help="HTTP network address (default :4000)",
    )
    parser.add_argument(
        "--dsn",
        default=None,
        help="SQLAlchemy database URL (default sqlite+aiosqlite:///./cortexcache.db)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging and auto-reload",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    # The engine is created when the application module is imported,
    # so flag values must reach the environment before that happens.
    if args.dsn:
        os.environ["DATABASE_URL"] = args.dsn
        if args.dsn.startswith("postgresql"):
            os.environ["DATABASE_TYPE"] = "postgresql"
    if args.debug:
        os.environ["DEBUG"] = "true"
    get_settings.cache_clear()
    settings = get_settings()

    host, port = args.addr if args.addr else (settings.HOST, settings.PORT)

    import uvicorn

    uvicorn.run(
        "cortexcache.main:app",
        host=host,
        port=port,
        reload=settings.DEBUG,
        log_config=None,
    )


if __name__ == "__main__":
    main()
