"""Site client: builds vrf-signed AJAX requests and decodes stream links."""

import logging
import time
import httpx
from typing import Dict, Any, List, Optional

from vrfcodec.codec import encode_token, decode_token, TokenError
from vrfcodec.codec import percent_codec
from vrfcodec.api.error_handler import (
    handle_http_status,
    retry_with_backoff,
    APIError,
    FatalAPIError,
    SkippableAPIError
)
from vrfcodec.api.models import Episode, VideoServer, ShowResponse
from vrfcodec.api.response_parser import (
    parse_result_html,
    parse_link_url,
    parse_anime_id,
    parse_episode_list,
    parse_server_list,
    parse_search_results,
    ResponseError
)

logger = logging.getLogger(__name__)

VIDEOVARD = "VideoVard"


class NineAnimeClient:
    """
    Client for the site's AJAX endpoints.

    Every request carries a ``vrf`` token derived from the id or query it
    targets; stream links come back as tokens and are decoded here.
    """

    def __init__(
        self,
        config: Dict[str, Any],
        client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize site client.

        Args:
            config: Configuration dictionary (see config.loader.DEFAULT_CONFIG)
            client: Optional httpx.AsyncClient for connection pooling
        """
        site = config.get('site', {})
        self.host = site.get('host', '9anime.id')
        self.dub = site.get('dub', False)

        api = config.get('api', {})
        self.request_timeout = api.get('request_timeout', 30)
        self.max_retries = api.get('max_retries', 3)
        self.retry_backoff = api.get('retry_backoff_seconds', 5)
        self._timeout = httpx.Timeout(
            connect=5.0,
            read=self.request_timeout,
            write=5.0,
            pool=5.0
        )

        # HTTP client (use provided or None - caller must provide)
        self.client = client

    @property
    def host_url(self) -> str:
        """Site root URL."""
        return f"https://{self.host}"

    @property
    def embed_headers(self) -> Dict[str, str]:
        """Headers embed hosts expect when following decoded links."""
        return {'referer': f"{self.host_url}/"}

    def episode_list_url(self, anime_id: str) -> str:
        return f"{self.host_url}/ajax/episode/list/{anime_id}?vrf={encode_token(anime_id)}"

    def server_list_url(self, episode_id: str) -> str:
        return f"{self.host_url}/ajax/server/list/{episode_id}?vrf={encode_token(episode_id)}"

    def episode_link_url(self, link_id: str) -> str:
        return f"{self.host_url}/ajax/server/{link_id}?vrf={encode_token(link_id)}"

    def search_url(self, query: str) -> str:
        language = 'dubbed' if self.dub else 'subbed'
        return (
            f"{self.host_url}/filter?language%5B%5D={language}"
            f"&keyword={percent_codec.encode(query)}"
            f"&vrf={encode_token(query)}&page=1"
        )

    async def _get(self, url: str, context: str) -> httpx.Response:
        """
        GET ``url`` with status handling and retry.

        Args:
            url: Fully built URL (query already encoded)
            context: Label for error and log messages

        Returns:
            Successful response

        Raises:
            APIError: Subclass matching the failure
        """
        if self.client is None:
            raise APIError("HTTP client not configured")

        async def make_request():
            logger.debug(f"Request ({context}): {url}")
            start_time = time.time()
            try:
                response = await self.client.get(url, timeout=self._timeout)
            except httpx.TimeoutException:
                raise Exception("Request timeout")
            except httpx.ConnectError:
                raise Exception("Connection error")
            except httpx.HTTPError as e:
                raise Exception(f"Network error: {e}")

            elapsed_time = time.time() - start_time
            logger.debug(f"Response ({context}): {response.status_code} in {elapsed_time:.2f}s")

            handle_http_status(response.status_code, context=context)
            return response

        try:
            return await retry_with_backoff(
                make_request,
                max_attempts=self.max_retries,
                initial_delay=self.retry_backoff,
                backoff_factor=2.0,
                context=context
            )
        except (FatalAPIError, SkippableAPIError):
            raise
        except Exception as e:
            # Convert other errors to skippable
            raise SkippableAPIError(f"API error: {e}")

    async def load_episodes(self, anime_link: str) -> List[Episode]:
        """
        Load the episode list for a show.

        Args:
            anime_link: Show watch page URL

        Returns:
            Episodes whose links point at the server list endpoint

        Raises:
            SkippableAPIError: If the page or list cannot be parsed
        """
        page = await self._get(anime_link, context="watch page")
        anime_id = parse_anime_id(page.text)
        if not anime_id:
            raise SkippableAPIError(f"No anime id found on {anime_link}")

        response = await self._get(self.episode_list_url(anime_id), context=f"episodes {anime_id}")
        try:
            body = parse_result_html(response.content)
            entries = parse_episode_list(body, dub=self.dub)
        except ResponseError as e:
            raise SkippableAPIError(f"Invalid episode list: {e}")

        episodes = [
            Episode(
                number=entry['number'],
                link=self.server_list_url(entry['id']),
                title=entry['title'],
                is_filler=entry['filler'],
            )
            for entry in entries
        ]
        logger.info(f"Loaded {len(episodes)} episodes for anime {anime_id}")
        return episodes

    async def get_episode_link(self, link_id: str) -> Optional[str]:
        """
        Fetch and decode the stream URL for one server entry.

        Returns:
            Decoded embed URL, or None if the site returned no link

        Raises:
            APIError: On request failure
            TokenError: If the returned token is malformed
        """
        response = await self._get(self.episode_link_url(link_id), context=f"link {link_id}")
        try:
            token = parse_link_url(response.content)
        except ResponseError as e:
            raise SkippableAPIError(f"Invalid link response: {e}")
        if token is None:
            return None
        return decode_token(token)

    async def load_video_servers(self, episode_link: str) -> List[VideoServer]:
        """
        Load the video servers for an episode.

        Servers whose link fails to load or decode are skipped. A VideoVard
        server is also offered as a "VideoVard Mp4" download entry.

        Args:
            episode_link: Server list URL from an Episode

        Returns:
            Video servers with decoded URLs
        """
        response = await self._get(episode_link, context="server list")
        try:
            body = parse_result_html(response.content)
            entries = parse_server_list(body)
        except ResponseError as e:
            raise SkippableAPIError(f"Invalid server list: {e}")

        servers = []
        download = None
        for name, link_id in entries:
            try:
                url = await self.get_episode_link(link_id)
            except (SkippableAPIError, TokenError) as e:
                logger.warning(f"Skipping server {name}: {e}")
                continue
            if url is None:
                logger.debug(f"Server {name} returned no link")
                continue

            server = VideoServer(name, url, dict(self.embed_headers))
            if name == VIDEOVARD:
                download = VideoServer(f"{name} Mp4", url, dict(self.embed_headers))
            servers.append(server)

        if download is not None:
            servers.append(download)
        return servers

    async def search(self, query: str) -> List[ShowResponse]:
        """
        Search the catalogue.

        Args:
            query: Free-text search query

        Returns:
            Matching shows
        """
        response = await self._get(self.search_url(query), context=f"search '{query}'")
        try:
            results = parse_search_results(response.text, self.host_url)
        except ResponseError as e:
            raise SkippableAPIError(f"Invalid search page: {e}")
        return [ShowResponse(r['name'], r['link'], r['cover']) for r in results]
