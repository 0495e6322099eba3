"""
Freesound API Client

Async client for Freesound.org API v2.
Implements API key validation, text search and sound details.

API Documentation: https://freesound.org/docs/api/
"""

import asyncio
import json
import logging
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Tuple, Union

import aiohttp

from .models import SearchResponse, Sound
from .query import QueryParams, SearchQueryBuilder

logger = logging.getLogger(__name__)

# Freesound API base URL
DEFAULT_BASE_URL = "https://freesound.org/apiv2"

# Sound fetched by test_api_key(); any public sound works
KEY_CHECK_SOUND_ID = 794253

ParamsLike = Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]


class FreesoundError(Exception):
    """Base exception for Freesound API errors."""
    pass


class FreesoundRequestError(FreesoundError):
    """The HTTP request could not be completed (network error, timeout)."""

    def __init__(self, cause: Union[BaseException, str]):
        super().__init__(f"HTTP request failed: {cause}")
        self.cause = cause


class FreesoundAuthError(FreesoundError):
    """Authentication error (invalid or missing token)."""

    def __init__(self, message: str, status: Optional[int] = None, body: Optional[str] = None):
        super().__init__(f"Authentication error: {message}")
        self.status = status
        self.body = body


class FreesoundApiError(FreesoundError):
    """The API answered with an error status or an unusable body."""

    def __init__(self, message: str, status: Optional[int] = None, body: Optional[str] = None):
        super().__init__(f"API error: {message}")
        self.status = status
        self.body = body


class FreesoundNotFoundError(FreesoundApiError):
    """Resource not found error."""
    pass


class FreesoundRateLimitError(FreesoundApiError):
    """Rate limit exceeded error."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        body: Optional[str] = None,
        retry_after: Optional[int] = None,
    ):
        super().__init__(message, status=status, body=body)
        self.retry_after = retry_after


def _parse_retry_after(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def _raise_for_status(status: int, body: str, headers: Mapping[str, str]) -> None:
    """Map a non-2xx response onto the exception hierarchy."""
    if 200 <= status < 300:
        return

    message = f"API request failed: {status} - {body}"
    if status == 401:
        raise FreesoundAuthError("Invalid API key", status=status, body=body)
    if status == 404:
        raise FreesoundNotFoundError(message, status=status, body=body)
    if status == 429:
        raise FreesoundRateLimitError(
            message,
            status=status,
            body=body,
            retry_after=_parse_retry_after(headers.get('Retry-After')),
        )
    raise FreesoundApiError(message, status=status, body=body)


def _decode_json(body: str, status: int) -> Any:
    try:
        return json.loads(body)
    except ValueError as e:
        raise FreesoundApiError(f"Invalid JSON response: {e} - {body}", status=status, body=body) from e


class FreesoundClient:
    """
    Async client for Freesound API.

    Usage:
        async with FreesoundClient(api_key) as client:
            query = SearchQueryBuilder().query("wind chimes").build()
            results = await client.search(query)
            for sound in results.results:
                print(sound.name)

    The API key is sent as the ``token`` query parameter on every request.
    """

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        timeout: float = 30.0,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Initialize Freesound client.

        Args:
            api_key: Freesound API key
            base_url: Custom API root; None uses DEFAULT_BASE_URL
            timeout: Total request timeout in seconds
            session: Externally managed session; it is not closed by the client
        """
        self._api_key = api_key
        self._base_url = base_url if base_url is not None else DEFAULT_BASE_URL
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = session
        self._owns_session = session is None

    @property
    def api_key(self) -> str:
        """The API key used by the client."""
        return self._api_key

    @property
    def base_url(self) -> str:
        """The API root used by the client."""
        return self._base_url

    async def __aenter__(self) -> 'FreesoundClient':
        """Enter async context."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context."""
        await self.close()

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None or (self._owns_session and self._session.closed):
            self._session = aiohttp.ClientSession(timeout=self.timeout)
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the client session if the client created it."""
        if self._session is not None and self._owns_session:
            await self._session.close()
            self._session = None

    def build_url(self, path: str) -> str:
        """Join an endpoint path (e.g. 'sounds/1234/') onto the base URL."""
        return f"{self._base_url.rstrip('/')}/{path.lstrip('/')}"

    def request(
        self,
        method: str,
        path: str,
        params: Optional[ParamsLike] = None,
        **kwargs,
    ):
        """
        Create an authenticated request to the Freesound API.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: API endpoint path without the base URL
            params: Extra query parameters, as a mapping or ordered pairs
            **kwargs: Additional arguments for aiohttp request

        Returns:
            The aiohttp request context manager, to be used with ``async with``
        """
        query = [('token', self._api_key)]
        if params:
            items = params.items() if isinstance(params, Mapping) else params
            query.extend((str(name), str(value)) for name, value in items)

        url = self.build_url(path)
        # Never log the token
        logger.debug(f"{method} {url} params={[name for name, _ in query[1:]]}")
        kwargs.setdefault('timeout', self.timeout)
        return self.session.request(method, url, params=query, **kwargs)

    async def _fetch(
        self, path: str, params: Optional[ParamsLike] = None
    ) -> Tuple[int, str, Mapping[str, str]]:
        """GET an endpoint and return status, decoded body and headers."""
        try:
            async with self.request('GET', path, params) as response:
                status = response.status
                raw = await response.read()
                headers = response.headers
                # Undecodable bytes are replaced rather than raised
                body = raw.decode(response.get_encoding(), errors='replace')
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"Request to {path} failed: {e!r}")
            raise FreesoundRequestError(e) from e

        if not 200 <= status < 300:
            logger.warning(f"Freesound API returned {status} for {path}")
        return status, body, headers

    async def _get(self, path: str, params: Optional[ParamsLike] = None) -> Dict[str, Any]:
        """
        GET an endpoint and decode its JSON object body.

        Raises:
            FreesoundAuthError: Invalid or missing API key
            FreesoundNotFoundError: Resource not found
            FreesoundRateLimitError: Rate limit exceeded
            FreesoundApiError: Other API errors or a malformed body
            FreesoundRequestError: Network errors and timeouts
        """
        status, body, headers = await self._fetch(path, params)
        _raise_for_status(status, body, headers)
        data = _decode_json(body, status)
        if not isinstance(data, dict):
            raise FreesoundApiError(f"Unexpected JSON response: {body}", status=status, body=body)
        return data

    async def test_api_key(self) -> None:
        """
        Perform a test request to verify the API key is valid.

        Raises:
            FreesoundAuthError: The API rejected the key
            FreesoundApiError: Any other failure, including a response without a sound ID
        """
        status, body, headers = await self._fetch(f'sounds/{KEY_CHECK_SOUND_ID}/')
        _raise_for_status(status, body, headers)
        data = _decode_json(body, status)
        if not isinstance(data, dict) or 'id' not in data:
            raise FreesoundApiError(f"Response missing sound ID: {body}", status=status, body=body)
        logger.info("Freesound API key is valid")

    async def search(
        self,
        query: Union[QueryParams, SearchQueryBuilder, Sequence[Tuple[str, str]]],
    ) -> SearchResponse:
        """
        Search for sounds using a text query.

        Args:
            query: Parameters from SearchQueryBuilder.build(), or the builder itself

        Returns:
            SearchResponse with the requested page of sounds
        """
        if isinstance(query, SearchQueryBuilder):
            query = query.build()
        query = list(query)

        logger.debug(f"Searching Freesound: {dict(query).get('query', '')!r}")

        data = await self._get('search/text/', query)
        result = SearchResponse.from_api_response(data)

        logger.info(f"Freesound search returned {result.count} results")
        return result

    async def get_sound(
        self,
        sound_id: int,
        descriptors: Optional[Iterable[str]] = None,
        normalized: Optional[bool] = None,
    ) -> Sound:
        """
        Get detailed information about a specific sound.

        Args:
            sound_id: Freesound sound ID
            descriptors: Audio descriptors to include, e.g. ['lowlevel.mfcc', 'rhythm.bpm']
            normalized: Whether descriptor values are normalized (only meaningful
                with descriptors)

        Returns:
            Sound with full details
        """
        params: Dict[str, str] = {}
        if descriptors is not None:
            params['descriptors'] = ','.join(descriptors)
        if normalized is not None:
            params['normalized'] = '1' if normalized else '0'

        data = await self._get(f'sounds/{sound_id}/', params)
        return Sound.from_api_response(data)
