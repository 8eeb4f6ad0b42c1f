"""Shared fixtures: a fake API client that records every request."""
import sys
from pathlib import Path

import pytest

# Add root to path so we can import services
sys.path.insert(0, str(Path(__file__).parent.parent))

from services.api_client import ApiError, ApiResult


class FakeApiClient:
    """Stands in for ApiClient; answers from a path -> payload (or ApiError) map."""

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls = []

    def fetch(self, path, params=None):
        self.calls.append((path, dict(params or {})))
        response = self.responses.get(path)
        if response is None:
            return ApiResult(error=ApiError(path, status=404))
        if isinstance(response, ApiError):
            return ApiResult(error=response)
        return ApiResult(value=response)


@pytest.fixture
def fake_client():
    return FakeApiClient


@pytest.fixture
def sample_stats():
    """Sample /stats payload."""
    return {
        'date': '2025-03-15',
        'totalItems': 1234,
        'storeCount': 12,
        'priceStats': {'avgPrice': 19.987, 'minPrice': 0.5, 'maxPrice': 299.99},
        'categories': [
            {'_id': 'WHISKEY', 'count': 400, 'avgPrice': 42.5},
            {'_id': None, 'count': 5, 'avgPrice': 1.005},
            {'_id': 'VODKA', 'count': 300, 'avgPrice': '18.1'},
            {'_id': 'WHISKEY', 'count': 1, 'avgPrice': 10},
            {'_id': '', 'count': 2, 'avgPrice': 3},
        ],
    }
