"""
Freesound API - Async client for the Freesound.org REST API

Provides a typed client for the Freesound API v2 text search and sound
instance endpoints, plus a query builder for search parameters.

Freesound.org is a collaborative database of Creative Commons licensed
sounds.

API Documentation: https://freesound.org/docs/api/
"""

from .client import (
    DEFAULT_BASE_URL,
    FreesoundClient,
    FreesoundError,
    FreesoundRequestError,
    FreesoundAuthError,
    FreesoundApiError,
    FreesoundNotFoundError,
    FreesoundRateLimitError,
)
from .config import FreesoundSettings, FreesoundConfigError
from .logging_config import setup_logging
from .models import (
    Images,
    License,
    Previews,
    SearchResponse,
    Sound,
)
from .query import SearchFilter, SearchQueryBuilder, SortOption

__version__ = "0.1.0"

__all__ = [
    # Client
    'DEFAULT_BASE_URL',
    'FreesoundClient',
    # Errors
    'FreesoundError',
    'FreesoundRequestError',
    'FreesoundAuthError',
    'FreesoundApiError',
    'FreesoundNotFoundError',
    'FreesoundRateLimitError',
    'FreesoundConfigError',
    # Models
    'Images',
    'License',
    'Previews',
    'SearchResponse',
    'Sound',
    # Queries
    'SearchFilter',
    'SearchQueryBuilder',
    'SortOption',
    # Setup
    'FreesoundSettings',
    'setup_logging',
]
