"""
Discord embed formatting for feed items.
"""

from collections.abc import Callable
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime

import discord

from feed_relay.models import FeedItem

# Green
ACCENT_COLOR = 0x00FF00

# Discord embed limits
MAX_TITLE_LENGTH = 256
MAX_DESCRIPTION_LENGTH = 4096


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_rfc2822(
    value: str, default: Callable[[], datetime] = _utcnow
) -> datetime:
    """
    Parse an RFC-2822 date, falling back to a default on failure.

    The fallback is silent on purpose: a missing or garbled publication
    date must never keep an item from being delivered.

    Parameters
    ----------
    value : str
        Date string such as ``"Wed, 02 Oct 2024 15:00:00 +0000"``.
    default : Callable[[], datetime]
        Produces the value used when parsing fails. Defaults to the
        current UTC time.

    Returns
    -------
    datetime
        Timezone-aware datetime. Dates without a zone are read as UTC.
    """
    try:
        parsed = parsedate_to_datetime(value)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        # Instants outside the datetime range fail here, not at send time
        return parsed.astimezone(timezone.utc)
    except (TypeError, ValueError, OverflowError):
        return default()


def _clip(text: str, limit: int) -> str:
    if len(text) > limit:
        return text[: limit - 3] + "..."
    return text


def build_embed(item: FeedItem) -> discord.Embed:
    """
    Build the Discord embed announcing a feed item.

    Parameters
    ----------
    item : FeedItem
        The item to format.

    Returns
    -------
    discord.Embed
        Embed with title, link, description, timestamp and accent colour.
    """
    return discord.Embed(
        title=_clip(item.title, MAX_TITLE_LENGTH) or None,
        url=item.link or None,
        description=_clip(item.description, MAX_DESCRIPTION_LENGTH) or None,
        timestamp=parse_rfc2822(item.pub_date),
        color=ACCENT_COLOR,
    )
