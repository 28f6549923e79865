"""
Release catalog client.

The catalog for every product is a single ``index.json`` document. It is
fetched once per client and shared by every lookup afterwards.
"""

import logging
import threading
from typing import Optional

from releasekit.core.download import DEFAULT_USER_AGENT, fetch_json
from releasekit.core.exceptions import MetadataFetchError, TransportError
from releasekit.releases.models import Catalog, ProductIndex

logger = logging.getLogger(__name__)

DEFAULT_RELEASES_URL = "https://releases.hashicorp.com"


class MetadataClient:
    """
    Fetches and memoizes the release catalog.

    The first lookup downloads ``<releases_url>/index.json``; later lookups
    for any product reuse it. Failed fetches are not remembered, so the next
    lookup tries again. Lookups are safe to call from several threads:
    concurrent first lookups share a single request.

    Example:
        >>> client = MetadataClient()
        >>> index = client.get("terraform")
        >>> "1.6.0" in index.version_strings()
        True
    """

    def __init__(
        self,
        releases_url: str = DEFAULT_RELEASES_URL,
        timeout: float = 30,
        max_retries: int = 5,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        """
        Initialize metadata client.

        Args:
            releases_url: Base URL of the release server
            timeout: Request timeout in seconds
            max_retries: Maximum number of fetch attempts
            user_agent: User-Agent header value
        """
        self.releases_url = releases_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.user_agent = user_agent

        self._catalog: Optional[Catalog] = None
        self._lock = threading.Lock()

    @property
    def index_url(self) -> str:
        return f"{self.releases_url}/index.json"

    def catalog(self) -> Catalog:
        """
        Return the catalog, fetching it on first use.

        Raises:
            MetadataFetchError: If the catalog cannot be fetched or decoded
        """
        with self._lock:
            if self._catalog is None:
                self._catalog = self._fetch()
            return self._catalog

    def get(self, product: str) -> Optional[ProductIndex]:
        """
        Look up one product.

        Args:
            product: Product name (e.g., "terraform")

        Returns:
            The product index, or None if the catalog does not list it

        Raises:
            MetadataFetchError: If the catalog cannot be fetched or decoded
        """
        return self.catalog().product(product)

    def clear(self) -> None:
        """Forget the memoized catalog."""
        with self._lock:
            self._catalog = None

    def _fetch(self) -> Catalog:
        logger.debug(f"Downloading release metadata from {self.index_url}")

        try:
            document = fetch_json(
                self.index_url,
                timeout=self.timeout,
                max_retries=self.max_retries,
                user_agent=self.user_agent,
            )
        except TransportError as e:
            raise MetadataFetchError(f"Failed to fetch version metadata file: {e}") from e

        if not isinstance(document, dict):
            raise MetadataFetchError(
                f"Failed to fetch version metadata file: expected a JSON object "
                f"from {self.index_url}, got {type(document).__name__}"
            )

        catalog = Catalog(products=document)
        logger.debug(f"Loaded release metadata for {len(catalog)} products")
        return catalog


__all__ = ["MetadataClient", "DEFAULT_RELEASES_URL"]
