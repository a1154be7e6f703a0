"""CLI entrypoint: python -m spell_range.server"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from spell_range.core.config import RangeConfig
from spell_range.server.config import ServerConfig


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="spell-range-server",
        description="spell-range server: REST or MCP range checks over a host snapshot",
    )
    p.add_argument("--mode", choices=["rest", "mcp"], default="rest",
                    help="Server mode (default: rest)")
    p.add_argument("--host", default="0.0.0.0", help="Bind host (default: 0.0.0.0)")
    p.add_argument("--port", type=int, default=8421, help="Bind port (default: 8421)")
    p.add_argument("--snapshot", type=Path, default=None,
                    help="Host snapshot JSON to load at startup")
    p.add_argument("--no-direct-queries", action="store_true",
                    help="Without a snapshot, start a host lacking direct range queries")

    # Resolution
    p.add_argument("--tick-interval", type=float, default=0.2,
                    help="Tick interval in seconds (default: 0.2)")
    p.add_argument("--cache-ttl", type=float, default=1.5,
                    help="Result validity window in seconds (default: 1.5)")
    p.add_argument("--sweep-interval", type=float, default=3.0,
                    help="Cache sweep interval in seconds (default: 3.0)")
    p.add_argument("--sweep-budget", type=int, default=50,
                    help="Max cache evictions per sweep (default: 50)")
    p.add_argument("--no-tick-worker", action="store_true",
                    help="Do not tick in the background (use POST /tick)")

    # Logging
    p.add_argument("--log-level", default="INFO",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"])

    return p.parse_args(argv)


def build_config(args: argparse.Namespace) -> ServerConfig:
    range_config = RangeConfig(
        tick_interval=args.tick_interval,
        cache_ttl=args.cache_ttl,
        sweep_interval=args.sweep_interval,
        sweep_budget=args.sweep_budget,
    )
    return ServerConfig(
        host=args.host,
        port=args.port,
        mode=args.mode,
        snapshot_path=args.snapshot,
        direct_queries=not args.no_direct_queries,
        range=range_config,
        tick_worker=not args.no_tick_worker,
    )


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    config = build_config(args)

    if config.mode == "mcp":
        _run_mcp(config)
    else:
        _run_rest(config)


def _run_rest(config: ServerConfig) -> None:
    import uvicorn

    from spell_range.server.rest.app import create_app

    app = create_app(config)
    uvicorn.run(app, host=config.host, port=config.port)


def _run_mcp(config: ServerConfig) -> None:
    from spell_range.server.mcp.server import create_mcp_server

    server = create_mcp_server(config)
    server.run(transport="stdio")


if __name__ == "__main__":
    main()
