"""
Main entry point for Feed Relay.

Connects to Discord, then runs the relay loop until a shutdown signal.
"""

import argparse
import asyncio
import logging
import signal
import sys
from urllib.parse import urlparse

import coloredlogs
import discord
from dotenv import load_dotenv

from feed_relay.backend import BackendClient
from feed_relay.config import AppConfig, load_config
from feed_relay.discord_bot import RelayBot
from feed_relay.errors import ConfigError
from feed_relay.feed_reader import check_feeds
from feed_relay.relay import Relay

logger = logging.getLogger(__name__)


def redact_proxy_url(proxy_url: str) -> str:
    """
    Redact credentials from a proxy URL for safe logging.

    Parameters
    ----------
    proxy_url : str
        The proxy URL potentially containing credentials.

    Returns
    -------
    str
        The proxy URL with password redacted.
    """
    try:
        parsed = urlparse(proxy_url)
        if parsed.password:
            netloc = parsed.hostname or ""
            if parsed.port:
                netloc = f"{netloc}:{parsed.port}"
            if parsed.username:
                netloc = f"{parsed.username}:****@{netloc}"
            return f"{parsed.scheme}://{netloc}{parsed.path}"
        return proxy_url
    except ValueError:
        return "<proxy url>"


class FeedRelay:
    """
    Main Feed Relay application.

    Owns the backend client, the Discord client and the relay task.
    """

    def __init__(self, config: AppConfig):
        """
        Initialize the application.

        Parameters
        ----------
        config : AppConfig
            Validated application configuration.
        """
        self.config = config
        self.backend: BackendClient | None = None
        self.bot: RelayBot | None = None
        self.relay: Relay | None = None

    async def start(self) -> None:
        """Connect to Discord and serve until the client is closed."""
        logger.info("Starting bot...")

        proxy_url = self.config.backend.proxy
        if proxy_url:
            logger.info("Using proxy for backend: %s", redact_proxy_url(proxy_url))

        self.backend = BackendClient(
            self.config.backend.api_url,
            timeout=self.config.backend.request_timeout,
            user_agent=self.config.backend.user_agent,
            proxy_url=proxy_url,
        )
        self.bot = RelayBot(self.config.discord, on_ready_callback=self._on_ready)
        self.relay = Relay(
            self.backend,
            self.bot,
            interval=self.config.relay.check_interval,
            send_delay=self.config.relay.send_delay,
        )

        try:
            await self.bot.start(self.config.discord.token)
        except (discord.LoginFailure, discord.PrivilegedIntentsRequired) as e:
            logger.error("Failed to connect to Discord: %s", e)
            await self.stop()
            sys.exit(1)

    def _on_ready(self) -> None:
        """Start the relay once Discord is ready. Reconnects keep the running task."""
        if self.relay is not None:
            self.relay.start()

    async def stop(self) -> None:
        """Stop the relay and close all connections."""
        logger.info("Stopping Feed Relay")

        if self.relay:
            await self.relay.stop()
        if self.bot and not self.bot.is_closed():
            await self.bot.close()
        if self.backend:
            await self.backend.close()

        logger.info("Feed Relay stopped")


def setup_logging(verbose: bool = False) -> None:
    """
    Configure application logging.

    Parameters
    ----------
    verbose : bool
        If True, set log level to DEBUG.
    """
    level = logging.DEBUG if verbose else logging.INFO

    coloredlogs.install(
        level=level,
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Reduce noise from third-party libraries
    logging.getLogger("discord").setLevel(logging.WARNING)
    logging.getLogger("aiohttp").setLevel(logging.WARNING)


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Relay unposted backend feed items to a Discord channel",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help="Path to a YAML configuration file (default: read environment variables)",
    )
    parser.add_argument(
        "--check-feeds",
        action="store_true",
        help="Read feed URLs from stdin, report whether each one parses, and exit",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    args = parser.parse_args()

    setup_logging(args.verbose)

    if args.check_feeds:
        failures = asyncio.run(check_feeds(sys.stdin, sys.stdout))
        sys.exit(1 if failures else 0)

    load_dotenv()

    try:
        config = load_config(args.config)
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        sys.exit(1)

    app = FeedRelay(config)

    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)

    def signal_handler():
        logger.info("Received shutdown signal")
        asyncio.create_task(app.stop())

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, signal_handler)

    try:
        loop.run_until_complete(app.start())
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    finally:
        loop.run_until_complete(app.stop())
        loop.close()


if __name__ == "__main__":
    main()
