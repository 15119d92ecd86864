# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

import argparse
import asyncio
import logging

from .api.server import start_server

# Always use relative imports (run via run.py or python -m convertkit.main)
from .config import Config


def setup_logging(config, override_level=None):
    """Configure logging based on config settings."""
    # Determine log level from override, config, or default
    log_level_str = override_level.lower() if override_level else config.get("log.level").lower()

    # Map string levels to logging constants
    level_map = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "warn": logging.WARNING,  # alias
        "error": logging.ERROR,
        "critical": logging.CRITICAL,
    }

    log_level = level_map.get(log_level_str, logging.INFO)

    # Set root logger level with proper format including logger name and level
    logging.basicConfig(
        level=log_level,
        format="[%(levelname)s] [%(name)s] %(message)s",  # Level first, then logger name
        handlers=[logging.StreamHandler()],
        force=True,  # Reset any existing configuration
    )


async def main():
    """Main entry point for the conversion server."""
    parser = argparse.ArgumentParser(description="Image conversion and SVG sprite server")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8788, help="Port to bind to")
    parser.add_argument("--config", default=None, help="Path to YAML/TOML/JSON config file")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["debug", "info", "warning", "warn", "error", "critical"],
        type=str.lower,
        help="Set logging level (overrides config file)",
    )
    args = parser.parse_args()

    # Load configuration
    config = Config()
    config.load(args.config)

    # Setup logging
    setup_logging(config, override_level=args.log_level)
    logger = logging.getLogger("main")
    logger.info(f"loaded config: {config.get()}")

    runner = await start_server(args.host, args.port)
    try:
        # Keep running until interrupted
        await asyncio.Future()  # run forever
    finally:
        await runner.cleanup()


def run():
    """Entry point for setuptools console scripts."""
    # Use uvloop where installed (not available on Windows)
    try:
        import uvloop  # type: ignore[import-not-found]

        asyncio.set_event_loop_policy(uvloop.EventLoopPolicy())
    except ImportError:
        pass

    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logging.getLogger("main").info("Shutting down...")


if __name__ == "__main__":
    run()
