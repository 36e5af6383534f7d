"""
Protocol definition for the chat channel the relay delivers to.
"""

from typing import Protocol, runtime_checkable

import discord


@runtime_checkable
class Notifier(Protocol):
    """
    Protocol defining the delivery side of the relay.

    The Discord bot implements it; tests substitute their own doubles.
    """

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
            If the message could not be sent.
        """
        ...
