"""
Request lifecycle shared by every dashboard view.

A view keeps its filters and its latest fetch outcome in a QueryState. Each
filter change starts a new generation; a result is only committed when it
carries the current generation, so a slow response to an older query can
never overwrite the newer one. Both halves are plain dicts on the wire so
they can live in dcc.Store components.
"""
import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional

from services.api_client import ApiClient

logger = logging.getLogger(__name__)


class FetchStatus(str, Enum):
    IDLE = 'idle'
    LOADING = 'loading'
    LOADED = 'loaded'
    FAILED = 'failed'


@dataclass(frozen=True)
class FetchResult:
    status: FetchStatus = FetchStatus.IDLE
    data: Any = None
    reason: Optional[str] = None

    @classmethod
    def idle(cls) -> 'FetchResult':
        return cls()

    @classmethod
    def loading(cls) -> 'FetchResult':
        return cls(status=FetchStatus.LOADING)

    @classmethod
    def loaded(cls, data: Any) -> 'FetchResult':
        return cls(status=FetchStatus.LOADED, data=data)

    @classmethod
    def failed(cls, reason: str) -> 'FetchResult':
        return cls(status=FetchStatus.FAILED, reason=reason)

    @property
    def is_loading(self) -> bool:
        return self.status is FetchStatus.LOADING

    @property
    def is_loaded(self) -> bool:
        return self.status is FetchStatus.LOADED

    @property
    def is_failed(self) -> bool:
        return self.status is FetchStatus.FAILED

    def to_dict(self) -> Dict[str, Any]:
        return {'status': self.status.value, 'data': self.data, 'reason': self.reason}

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> 'FetchResult':
        if not data:
            return cls.idle()
        return cls(
            status=FetchStatus(data.get('status', FetchStatus.IDLE.value)),
            data=data.get('data'),
            reason=data.get('reason'),
        )


@dataclass(frozen=True)
class QueryState:
    filters: Dict[str, Any] = field(default_factory=dict)
    generation: int = 0
    result: FetchResult = field(default_factory=FetchResult.idle)

    def restart(self, filters: Optional[Mapping[str, Any]] = None) -> 'QueryState':
        """Start a new generation, optionally with a replacement filter set."""
        return QueryState(
            filters=dict(self.filters if filters is None else filters),
            generation=self.generation + 1,
            result=FetchResult.loading(),
        )

    def set_filter(self, name: str, value: Any) -> 'QueryState':
        filters = dict(self.filters)
        filters[name] = value
        return self.restart(filters)

    def commit(self, generation: int, result: FetchResult) -> 'QueryState':
        if generation != self.generation:
            logger.debug(
                "Discarding result of generation %s (current generation %s)",
                generation,
                self.generation,
            )
            return self
        return replace(self, result=result)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'filters': dict(self.filters),
            'generation': self.generation,
            'result': self.result.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> 'QueryState':
        if not data:
            return cls()
        return cls(
            filters=dict(data.get('filters') or {}),
            generation=int(data.get('generation', 0)),
            result=FetchResult.from_dict(data.get('result')),
        )


def start_query(filters: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Initial store contents for a view that fetches as soon as it is shown."""
    return QueryState().restart(filters).to_dict()


def run_query(
    query_data: Optional[Mapping[str, Any]],
    loader: Callable[[Dict[str, Any]], FetchResult],
) -> Dict[str, Any]:
    state = QueryState.from_dict(query_data)
    return {'generation': state.generation, 'result': loader(state.filters).to_dict()}


def resolve(
    query_data: Optional[Mapping[str, Any]],
    result_data: Optional[Mapping[str, Any]],
) -> QueryState:
    state = QueryState.from_dict(query_data)
    if not result_data:
        return state
    return state.commit(
        int(result_data.get('generation', -1)),
        FetchResult.from_dict(result_data.get('result')),
    )


def load_resource(
    client: ApiClient,
    path: str,
    params: Optional[Mapping[str, Any]],
    error_message: str,
) -> FetchResult:
    result = client.fetch(path, params)
    if not result.ok:
        logger.error("%s: %s", error_message, result.error)
        return FetchResult.failed(error_message)
    logger.info("Loaded %s", path)
    return FetchResult.loaded(result.value)
