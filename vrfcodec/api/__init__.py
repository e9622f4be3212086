"""
Site client package for vrfcodec.

Builds vrf-signed AJAX requests, parses the HTML fragments the site
returns and decodes stream link tokens.
"""

from .client import NineAnimeClient
from .models import Episode, VideoServer, ShowResponse
from .error_handler import APIError, FatalAPIError, RetryableAPIError, SkippableAPIError
from .response_parser import ResponseError

__all__ = [
    "NineAnimeClient",
    "Episode",
    "VideoServer",
    "ShowResponse",
    "APIError",
    "FatalAPIError",
    "RetryableAPIError",
    "SkippableAPIError",
    "ResponseError",
]
