"""
Discord client.

Announces readiness, sends feed item embeds to the configured channel and
answers the ``!help`` command.
"""

import asyncio
import logging
from collections.abc import Callable

import aiohttp
import discord

from feed_relay.config import DiscordConfig
from feed_relay.errors import DeliveryError

logger = logging.getLogger(__name__)

HELP_COMMAND = "!help"

HELP_TEXT = (
    "**Feed Relay**\n"
    "I post new feed items to this server as soon as they are published.\n"
    "Commands:\n"
    "`!help` - show this message"
)


class RelayBot(discord.Client):
    """
    Discord client delivering feed items to one channel.

    The channel handle is resolved on first use and cached.
    """

    def __init__(
        self,
        config: DiscordConfig,
        on_ready_callback: Callable[[], object] | None = None,
    ):
        """
        Initialize the Discord client.

        Parameters
        ----------
        config : DiscordConfig
            Discord configuration with token and channel ID.
        on_ready_callback : Callable[[], object] | None
            Called every time the gateway reports ready.
        """
        intents = discord.Intents.default()
        # Reading message text is a privileged intent, only needed for !help
        intents.message_content = config.help_command
        super().__init__(intents=intents)

        self.config = config
        self._on_ready_callback = on_ready_callback
        self._channel: discord.abc.Messageable | None = None

    async def on_ready(self) -> None:
        """Log the connection and notify the owner."""
        logger.info("Bot is connected and ready as %s!", self.user)
        if self._on_ready_callback is not None:
            self._on_ready_callback()

    async def on_message(self, message: discord.Message) -> None:
        """Reply to ``!help`` with a static help text."""
        if not self.config.help_command:
            return
        if message.author == self.user or message.content != HELP_COMMAND:
            return

        try:
            await message.channel.send(HELP_TEXT)
        except discord.HTTPException as e:
            logger.error("Failed to send help reply: %s", e)

    async def send_embed(self, embed: discord.Embed) -> None:
        """
        Send an embed to the configured channel.

        Parameters
        ----------
        embed : discord.Embed
            The message to send.

        Raises
        ------
        DeliveryError
            If the channel is unreachable or the message was rejected.
        """
        channel = await self._resolve_channel()

        try:
            await channel.send(embed=embed)
        except (
            discord.DiscordException,
            aiohttp.ClientError,
            asyncio.TimeoutError,
            # Embed serialization
            ValueError,
            OverflowError,
        ) as e:
            raise DeliveryError(str(e) or type(e).__name__) from e

    async def _resolve_channel(self) -> discord.abc.Messageable:
        """
        Get the target channel from the cache or the API.

        Raises
        ------
        DeliveryError
            If the channel does not exist or is not accessible.
        """
        if self._channel is not None:
            return self._channel

        channel = self.get_channel(self.config.channel_id)
        if channel is None:
            try:
                channel = await self.fetch_channel(self.config.channel_id)
            except (discord.DiscordException, aiohttp.ClientError, asyncio.TimeoutError) as e:
                raise DeliveryError(
                    f"Cannot access channel {self.config.channel_id}: {e}"
                ) from e

        if not isinstance(channel, discord.abc.Messageable):
            raise DeliveryError(f"Channel {self.config.channel_id} cannot receive messages")

        self._channel = channel
        return channel
