"""
Data structures exchanged between the backend and the relay loop.
"""

from dataclasses import dataclass, field

from pydantic import BaseModel, TypeAdapter


class FeedItem(BaseModel):
    """
    Feed item as stored by the backend.

    Attributes
    ----------
    title : str
        Display title.
    link : str
        Item URL. Identifies the item when acknowledging delivery.
    description : str
        Display description, possibly empty.
    pub_date : str
        Publication date in RFC-2822 format. Not guaranteed parseable.
    posted : bool
        Posted flag as stored by the backend. Informational only.
    """

    title: str
    link: str
    description: str = ""
    pub_date: str = ""
    posted: bool = False


FEED_ITEMS = TypeAdapter(list[FeedItem])


@dataclass
class AcknowledgmentBatch:
    """
    Links delivered during a single tick, in delivery order.

    Attributes
    ----------
    links : list[str]
        Links of successfully delivered items.
    """

    links: list[str] = field(default_factory=list)

    def add(self, link: str) -> None:
        """Record a delivered item link."""
        self.links.append(link)

    def __len__(self) -> int:
        return len(self.links)

    def __bool__(self) -> bool:
        return bool(self.links)
