"""Data structures returned by the site client."""

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass
class Episode:
    """An episode entry from the episode list."""
    number: str                     # Episode number as shown by the site
    link: str                       # Server list URL (with vrf token)
    title: Optional[str] = None     # Episode title, if present
    is_filler: bool = False


@dataclass
class VideoServer:
    """
    A named video server for an episode.

    The URL is the decoded embed link; headers must be sent when fetching it.
    """
    name: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass
class ShowResponse:
    """A search result."""
    name: str
    link: str
    cover_url: str
