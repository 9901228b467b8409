from __future__ import annotations

import argparse
import logging
import os
from typing import Any

from .runtime.server import AddrListServer, run

# Levels uvicorn accepts; "trace" has no stdlib counterpart.
LOG_LEVELS = ("critical", "error", "warning", "info", "debug", "trace")


def stdlib_log_level(level: str) -> int:
    name = level.strip().lower()
    if name == "trace":
        return logging.DEBUG
    return logging.getLevelName(name.upper())


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="addrlist", description="addrlist: linked address list server")
    p.add_argument("--host", default="127.0.0.1")
    p.add_argument("--port", type=int, default=8000)
    p.add_argument("--initial", nargs="*", default=None, metavar="ADDRESS", help="initial members, head first")
    p.add_argument("--self-address", default=None, help="the list's own address (random if omitted)")
    p.add_argument(
        "--log-level",
        type=str.lower,
        choices=LOG_LEVELS,
        default=os.getenv("ADDRLIST_LOG_LEVEL", "info").lower(),
    )
    return p


def run_kwargs(args: argparse.Namespace) -> dict[str, Any]:
    return {
        "host": args.host,
        "port": args.port,
        "initial": args.initial,
        "self_address": args.self_address,
        "log_level": args.log_level,
    }


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=stdlib_log_level(args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    srv = run(**run_kwargs(args))
    print(srv.url if isinstance(srv, AddrListServer) else srv.base_url)

    # Block forever (so it behaves like a normal CLI server)
    import time

    while True:
        time.sleep(3600)


if __name__ == "__main__":
    main()
