from typing import Any, List, Mapping, Optional, Tuple

from services.api_client import ApiClient
from services.models import TrendRecord
from services.query_state import FetchResult, load_resource

TRENDING_PATH = '/trending'
TRENDING_ERROR = 'Failed to load trending data'


def load_trending(client: ApiClient) -> FetchResult:
    return load_resource(client, TRENDING_PATH, None, TRENDING_ERROR)


def trend_records(payload: Optional[Mapping[str, Any]]) -> List[TrendRecord]:
    return [TrendRecord.from_api(raw) for raw in (payload or {}).get('trending') or []]


def partition_trends(records: List[TrendRecord]) -> Tuple[List[TrendRecord], List[TrendRecord]]:
    """Split into (increasing, decreasing); unchanged records belong to neither."""
    increasing = [r for r in records if r.change is not None and r.change > 0]
    decreasing = [r for r in records if r.change is not None and r.change < 0]
    return increasing, decreasing
