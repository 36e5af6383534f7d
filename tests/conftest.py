"""
Shared fixtures for Feed Relay tests.

Provides common test fixtures for use across all test modules.
"""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from feed_relay.config import AppConfig, BackendConfig, DiscordConfig, RelayConfig
from feed_relay.models import FeedItem

API_URL = "http://backend.test"

SAMPLE_RSS = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Sample Feed</title>
    <link>https://example.com/</link>
    <description>A sample feed</description>
    <item>
      <title>First Entry</title>
      <link>https://example.com/first</link>
      <description>First description</description>
      <pubDate>Wed, 02 Oct 2024 15:00:00 +0000</pubDate>
    </item>
    <item>
      <title>Second Entry</title>
      <link>https://example.com/second</link>
      <description>Second description</description>
      <pubDate>Thu, 03 Oct 2024 09:30:00 +0000</pubDate>
    </item>
  </channel>
</rss>
"""

SAMPLE_ATOM = """<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Atom Sample</title>
  <id>urn:uuid:60a76c80-d399-11d9-b93C-0003939e0af6</id>
  <updated>2024-10-02T15:00:00Z</updated>
  <entry>
    <title>Atom Entry One</title>
    <link href="https://example.com/atom-one"/>
    <id>urn:uuid:1225c695-cfb8-4ebb-aaaa-80da344efa6a</id>
    <updated>2024-10-02T15:00:00Z</updated>
    <summary>Atom summary</summary>
  </entry>
</feed>
"""


@pytest.fixture
def sample_rss_content() -> str:
    """Return a sample RSS 2.0 document with two items."""
    return SAMPLE_RSS


@pytest.fixture
def sample_atom_content() -> str:
    """Return a sample Atom document with one entry."""
    return SAMPLE_ATOM


@pytest.fixture
def sample_item() -> FeedItem:
    """
    Create a sample feed item for testing.

    Returns
    -------
    FeedItem
        A fully populated feed item.
    """
    return FeedItem(
        title="Test Item Title",
        link="https://example.com/test-item",
        description="This is the test item description.",
        pub_date="Wed, 02 Oct 2024 15:00:00 +0000",
        posted=False,
    )


@pytest.fixture
def make_items():
    """Return a factory building ``count`` distinct feed items."""

    def _make(count: int) -> list[FeedItem]:
        return [
            FeedItem(
                title=f"Item {i}",
                link=f"https://example.com/item-{i}",
                description=f"Description {i}",
                pub_date="Wed, 02 Oct 2024 15:00:00 +0000",
            )
            for i in range(1, count + 1)
        ]

    return _make


@pytest.fixture
def minimal_discord_config() -> DiscordConfig:
    """Create a minimal valid Discord configuration."""
    return DiscordConfig(token="test-token", channel_id=123456789012345678)


@pytest.fixture
def minimal_app_config(minimal_discord_config: DiscordConfig) -> AppConfig:
    """Create a minimal valid app configuration."""
    return AppConfig(
        discord=minimal_discord_config,
        backend=BackendConfig(api_url=API_URL),
        relay=RelayConfig(check_interval=60, send_delay=0),
    )


@pytest.fixture
def minimal_environ() -> dict[str, str]:
    """
    Create a minimal valid environment.

    Returns
    -------
    dict
        Environment variables accepted by ``load_config``.
    """
    return {
        "DISCORD_TOKEN": "test-token",
        "CHANNEL_ID": "123456789012345678",
        "BACKEND_API_URL": API_URL,
    }


@pytest.fixture
def mock_backend() -> MagicMock:
    """
    Create a mock backend client.

    Returns
    -------
    MagicMock
        A mock BackendClient returning no items by default.
    """
    backend = MagicMock()
    backend.fetch_unposted = AsyncMock(return_value=[])
    backend.mark_posted = AsyncMock()
    backend.close = AsyncMock()
    return backend


@pytest.fixture
def mock_notifier() -> MagicMock:
    """Create a mock notifier whose sends succeed."""
    notifier = MagicMock()
    notifier.send_embed = AsyncMock()
    return notifier


@pytest.fixture
def backend_payload() -> list[dict[str, Any]]:
    """Return a JSON payload as served by the backend."""
    return [
        {
            "title": "First",
            "link": "https://example.com/first",
            "description": "First description",
            "pub_date": "Wed, 02 Oct 2024 15:00:00 +0000",
            "posted": False,
        },
        {
            "title": "Second",
            "link": "https://example.com/second",
            "description": "",
            "pub_date": "not-a-date",
            "posted": False,
        },
    ]
