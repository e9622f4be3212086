"""Site AJAX response parsing and HTML fragment extraction."""

import json
from typing import Dict, Any, Optional, List, Tuple

from lxml import etree, html


class ResponseError(Exception):
    """Response parsing errors."""
    pass


def _has_class(name: str) -> str:
    """XPath predicate matching elements carrying CSS class ``name``."""
    return f"contains(concat(' ', normalize-space(@class), ' '), ' {name} ')"


def _text(element) -> str:
    """Element text with whitespace collapsed."""
    return " ".join(element.text_content().split())


def parse_result(response_content: bytes) -> Any:
    """
    Validate a JSON response and return its ``result`` field.

    Args:
        response_content: Raw response bytes

    Returns:
        Value of the ``result`` field

    Raises:
        ResponseError: If the body is empty, not JSON, or has no result
    """
    if not response_content:
        raise ResponseError("Empty response body received")

    try:
        payload = json.loads(response_content)
    except (ValueError, UnicodeDecodeError) as e:
        raise ResponseError(f"Malformed JSON: {e}")

    if not isinstance(payload, dict):
        raise ResponseError(f"Invalid payload: expected object, got {type(payload).__name__}")

    if 'result' not in payload:
        raise ResponseError("Missing 'result' field")

    return payload['result']


def parse_result_html(response_content: bytes) -> str:
    """
    Extract the HTML fragment from a ``{"result": "<html>"}`` response.

    Raises:
        ResponseError: If the result is not a string
    """
    result = parse_result(response_content)
    if not isinstance(result, str):
        raise ResponseError("Expected HTML string in 'result' field")
    return result


def parse_link_url(response_content: bytes) -> Optional[str]:
    """
    Extract the encoded stream URL from a ``{"result": {"url": ...}}`` response.

    Returns:
        Encoded URL token, or None if the response carries no URL
    """
    result = parse_result(response_content)
    if not isinstance(result, dict):
        return None
    url = result.get('url')
    return url if isinstance(url, str) and url else None


def _parse_html(html_text: str):
    """Parse an HTML document or fragment, None when there is nothing to parse."""
    if not html_text or not html_text.strip():
        return None
    try:
        return html.fromstring(html_text)
    except (etree.ParserError, ValueError) as e:
        raise ResponseError(f"Malformed HTML: {e}")


def parse_anime_id(html_text: str) -> Optional[str]:
    """
    Read the anime id from the ``#watch-main`` element of a watch page.

    Args:
        html_text: Watch page HTML

    Returns:
        Anime id or None if the page has no watch container
    """
    root = _parse_html(html_text)
    if root is None:
        return None
    ids = root.xpath('//*[@id="watch-main"]/@data-id')
    if not ids or not ids[0].strip():
        return None
    return ids[0].strip()


def parse_episode_list(html_text: str, dub: bool = False) -> List[Dict[str, Any]]:
    """
    Parse the episode list fragment.

    Each ``ul > li > a`` anchor carries ``data-ids`` as ``"<sub>,<dub>"``;
    anchors without the requested variant are skipped.

    Args:
        html_text: Episode list HTML fragment
        dub: Select dubbed episode ids instead of subbed

    Returns:
        List of dicts with id, number, title and filler keys
    """
    root = _parse_html(html_text)
    if root is None:
        return []

    index = 1 if dub else 0
    episodes = []
    for anchor in root.xpath('//ul/li/a'):
        ids = anchor.get('data-ids', '').split(',')
        if len(ids) <= index or not ids[index].strip():
            continue

        title_spans = anchor.xpath(f'.//span[{_has_class("d-title")}]')
        title = _text(title_spans[0]) if title_spans else None

        episodes.append({
            'id': ids[index].strip(),
            'number': anchor.get('data-num', ''),
            'title': title,
            'filler': 'filler' in anchor.get('class', '').split(),
        })
    return episodes


def parse_server_list(html_text: str) -> List[Tuple[str, str]]:
    """
    Parse the server list fragment.

    Returns:
        List of (server name, link id) tuples; entries without a link id
        are dropped
    """
    root = _parse_html(html_text)
    if root is None:
        return []

    servers = []
    for item in root.xpath('//li'):
        link_id = item.get('data-link-id')
        if not link_id:
            continue
        servers.append((_text(item), link_id))
    return servers


def parse_search_results(html_text: str, host_url: str) -> List[Dict[str, str]]:
    """
    Parse the search results page.

    Args:
        html_text: Filter page HTML
        host_url: Site root used to absolutize result links

    Returns:
        List of dicts with name, link and cover keys
    """
    root = _parse_html(html_text)
    if root is None:
        return []

    cards = (
        f'//*[@id="list-items"]'
        f'//div[{_has_class("ani")} and {_has_class("poster")} and {_has_class("tip")}]/a'
    )
    results = []
    for anchor in root.xpath(cards):
        images = anchor.xpath('.//img')
        image = images[0] if images else None
        results.append({
            'name': image.get('alt', '') if image is not None else '',
            'link': host_url + anchor.get('href', ''),
            'cover': image.get('src', '') if image is not None else '',
        })
    return results
