"""
Reconciliation loop between the backend and the Discord channel.

Each tick fetches unposted items, sends them to the channel one by one and
acknowledges the delivered ones back to the backend. Delivery and
acknowledgment are not transactional: if the acknowledgment fails, the
items stay unposted on the backend and are sent again on a later tick.
"""

import asyncio
import logging

from feed_relay.backend import BackendClient
from feed_relay.errors import DeliveryError, RelayError
from feed_relay.formatter import build_embed
from feed_relay.models import AcknowledgmentBatch
from feed_relay.notifier import Notifier

logger = logging.getLogger(__name__)


class Relay:
    """
    Periodic relay of unposted backend items to a chat channel.

    Runs as a single background task, so two ticks never interleave.
    """

    def __init__(
        self,
        backend: BackendClient,
        notifier: Notifier,
        interval: int = 60,
        send_delay: float = 1.0,
    ):
        """
        Initialize the relay.

        Parameters
        ----------
        backend : BackendClient
            Client for the backend API.
        notifier : Notifier
            Destination of the messages.
        interval : int
            Seconds between two ticks.
        send_delay : float
            Pause in seconds after each message, for chat rate limits.
        """
        self.backend = backend
        self.notifier = notifier
        self.interval = interval
        self.send_delay = send_delay
        self._running = False
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        """Whether the background task is alive."""
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        """
        Start the background task.

        Calling it again while the task is alive returns the existing task.

        Returns
        -------
        asyncio.Task
            Handle of the background task.
        """
        if self._task is not None and not self._task.done():
            logger.debug("Relay already running")
            return self._task

        self._running = True
        self._task = asyncio.create_task(self._run(), name="feed-relay")
        return self._task

    async def stop(self) -> None:
        """Cancel the background task and wait for it to finish."""
        self._running = False
        if self._task is None:
            return

        self._task.cancel()
        await asyncio.gather(self._task, return_exceptions=True)
        self._task = None
        logger.info("Relay stopped")

    async def _run(self) -> None:
        """Run ticks on a fixed period. The first tick fires after one interval."""
        loop = asyncio.get_running_loop()
        logger.info("Checker task started. Checking every %d seconds.", self.interval)

        next_tick = loop.time() + self.interval
        while self._running:
            await asyncio.sleep(max(0.0, next_tick - loop.time()))

            try:
                await self.run_tick()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error("Error during check: %s", e)

            # An overrunning tick delays the next one; missed fires collapse.
            next_tick = max(next_tick + self.interval, loop.time())

    async def run_tick(self) -> AcknowledgmentBatch:
        """
        Run one fetch, deliver and acknowledge cycle.

        Returns
        -------
        AcknowledgmentBatch
            Links delivered during this tick, in delivery order.
        """
        batch = AcknowledgmentBatch()
        logger.info("Checking for new posts...")

        try:
            items = await self.backend.fetch_unposted()
        except RelayError as e:
            logger.error("Failed to fetch unposted items: %s", e)
            return batch

        if not items:
            logger.info("No new items to post.")
            return batch

        logger.info(
            "Found %d new item%s to post.",
            len(items),
            "" if len(items) == 1 else "s",
        )

        for item in items:
            logger.info("Posting: %s", item.title)
            try:
                embed = build_embed(item)
                await self.notifier.send_embed(embed)
            except (DeliveryError, ValueError, OverflowError) as e:
                logger.error("Failed to send message for [%s]: %s", item.title, e)
            else:
                batch.add(item.link)

            await asyncio.sleep(self.send_delay)

        if batch:
            try:
                await self.backend.mark_posted(batch.links)
            except RelayError as e:
                logger.error("Failed to mark %d item(s) as posted: %s", len(batch), e)
            else:
                logger.info("Successfully marked %d items as posted.", len(batch))

        return batch
