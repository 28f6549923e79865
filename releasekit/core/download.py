"""
HTTP transport with retry logic for release metadata and artifacts.

This module provides the two network primitives releasekit needs:
- ``fetch_json``: GET a JSON document and decode it
- ``download_file``: stream a binary artifact to disk

Both retry connection errors, timeouts and 5xx responses with exponential
backoff. Client errors (4xx) and undecodable bodies fail immediately.
"""

import logging
import time
from pathlib import Path
from typing import Any, Dict

import requests
from requests.exceptions import ConnectionError, HTTPError, RequestException, Timeout

from releasekit.core.exceptions import TransportError

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "action-setup-hashicorp-tool"

CHUNK_SIZE = 8192


def _is_retryable(error: RequestException) -> bool:
    """Return True for failures a later attempt may not hit."""
    if isinstance(error, (Timeout, ConnectionError)):
        return True
    if isinstance(error, HTTPError) and error.response is not None:
        return error.response.status_code >= 500
    return False


def _with_retries(operation, url: str, max_retries: int):
    """
    Run ``operation`` until it succeeds or retries are exhausted.

    Raises:
        TransportError: When the last attempt fails or the failure is permanent
    """
    max_retries = max(1, max_retries)

    for attempt in range(max_retries):
        try:
            return operation()
        except RequestException as e:
            if not _is_retryable(e) or attempt == max_retries - 1:
                raise TransportError(
                    f"Request to {url} failed after {attempt + 1} attempt(s): {e}"
                ) from e

            # Exponential backoff
            backoff_seconds = 2**attempt
            logger.warning(
                f"Request attempt {attempt + 1} failed: {e}. "
                f"Retrying in {backoff_seconds}s..."
            )
            time.sleep(backoff_seconds)

    # Unreachable: the loop either returns or raises
    raise TransportError(f"Request to {url} failed for unknown reason")


def fetch_json(
    url: str,
    timeout: float = 30,
    max_retries: int = 5,
    user_agent: str = DEFAULT_USER_AGENT,
) -> Any:
    """
    Fetch and decode a JSON document.

    Args:
        url: URL to fetch
        timeout: Request timeout in seconds
        max_retries: Maximum number of attempts
        user_agent: User-Agent header value

    Returns:
        The decoded JSON value

    Raises:
        TransportError: If the request fails or the body is not valid JSON
        ValueError: If URL is empty

    Example:
        >>> index = fetch_json("https://releases.hashicorp.com/index.json")
        >>> sorted(index)[:2]
        ['atlas-upload-cli', 'boundary']
    """
    if not url:
        raise ValueError("URL cannot be empty")

    headers: Dict[str, str] = {"User-Agent": user_agent, "Accept": "application/json"}

    def get():
        logger.debug(f"GET {url}")
        response = requests.get(url, headers=headers, timeout=timeout)
        response.raise_for_status()
        return response

    response = _with_retries(get, url, max_retries)

    try:
        return response.json()
    except ValueError as e:
        raise TransportError(f"Invalid JSON returned by {url}: {e}") from e


def download_file(
    url: str,
    destination: Path,
    timeout: float = 30,
    max_retries: int = 3,
    user_agent: str = DEFAULT_USER_AGENT,
) -> Path:
    """
    Download file from URL to destination with retry logic.

    A failed attempt removes the partial file before the next one starts,
    so the destination only ever holds a complete response body.

    Args:
        url: URL to download from
        destination: Local path to save file
        timeout: Request timeout in seconds
        max_retries: Maximum number of attempts
        user_agent: User-Agent header value

    Returns:
        Path to downloaded file

    Raises:
        TransportError: If download fails after retries
        ValueError: If URL or destination is invalid
    """
    if not url:
        raise ValueError("URL cannot be empty")

    if not destination:
        raise ValueError("Destination path cannot be empty")

    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)

    def attempt() -> Path:
        try:
            return _stream_to_file(url, destination, timeout, user_agent)
        except RequestException:
            destination.unlink(missing_ok=True)
            raise

    return _with_retries(attempt, url, max_retries)


def _stream_to_file(
    url: str, destination: Path, timeout: float, user_agent: str
) -> Path:
    """Perform a single streaming download."""
    logger.info(f"Downloading from {url}")

    with requests.get(
        url,
        headers={"User-Agent": user_agent},
        stream=True,
        timeout=timeout,
        allow_redirects=True,
    ) as response:
        response.raise_for_status()

        downloaded = 0
        with open(destination, "wb") as f:
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if chunk:
                    f.write(chunk)
                    downloaded += len(chunk)

    logger.debug(f"Download complete: {destination} ({downloaded} bytes)")
    return destination


__all__ = [
    "DEFAULT_USER_AGENT",
    "fetch_json",
    "download_file",
]
