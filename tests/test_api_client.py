"""
Tests for the API gateway client.
Run with: python -m pytest tests/test_api_client.py -v
"""
from unittest.mock import MagicMock

import pytest
import requests

from services.api_client import (
    ApiClient,
    ApiError,
    build_query_string,
    build_url,
)


def _response(status_code=200, body=None):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = body if body is not None else {}
    return response


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def client(session):
    return ApiClient(base_url='https://api.example.com/prod/', api_key='', timeout=5, session=session)


def test_query_string_omits_none_values():
    query = build_query_string({'search': 'gin', 'category': None, 'skip': 0, 'limit': 20})
    assert query == 'search=gin&skip=0&limit=20'
    assert 'category' not in query


def test_query_string_percent_encodes_keys_and_values():
    query = build_query_string({'store id': 'a b&c/d', 'name': "Jack's (1L)", 'city': 'Zürich'})
    assert query == "store%20id=a%20b%26c%2Fd&name=Jack's%20(1L)&city=Z%C3%BCrich"


def test_query_string_empty_when_nothing_survives():
    assert build_query_string({'sku': None, 'store_id': None}) == ''
    assert build_query_string(None) == ''


def test_build_url_appends_query_only_when_present():
    assert build_url('https://x', '/stats') == 'https://x/stats'
    assert build_url('https://x', '/stats', {'a': None}) == 'https://x/stats'
    assert build_url('https://x', '/items', {'limit': 20}) == 'https://x/items?limit=20'


def test_call_returns_json_body(client, session):
    session.get.return_value = _response(body={'stores': []})

    assert client.call('/stores') == {'stores': []}
    url = session.get.call_args.args[0]
    assert url == 'https://api.example.com/prod/stores'
    assert session.get.call_args.kwargs['timeout'] == 5


def test_call_sends_json_content_type_without_api_key(client, session):
    session.get.return_value = _response()
    client.call('/stats')

    headers = session.get.call_args.kwargs['headers']
    assert headers == {'Content-Type': 'application/json'}


def test_call_sends_api_key_when_configured(session):
    session.get.return_value = _response()
    client = ApiClient(base_url='https://x', api_key='secret', session=session)
    client.call('/stats')

    assert session.get.call_args.kwargs['headers']['x-api-key'] == 'secret'


def test_non_2xx_raises_api_error_with_status_and_path(client, session):
    session.get.return_value = _response(status_code=503)

    with pytest.raises(ApiError) as excinfo:
        client.call('/trending')

    assert excinfo.value.status == 503
    assert excinfo.value.path == '/trending'


def test_transport_failure_raises_api_error_without_status(client, session):
    session.get.side_effect = requests.exceptions.ConnectionError('connection refused')

    with pytest.raises(ApiError) as excinfo:
        client.call('/items', {'search': 'rum'})

    assert excinfo.value.status is None
    assert excinfo.value.path == '/items'


def test_invalid_json_raises_api_error(client, session):
    response = _response()
    response.json.side_effect = ValueError('Expecting value')
    session.get.return_value = response

    with pytest.raises(ApiError) as excinfo:
        client.call('/stats')
    assert excinfo.value.status == 200


def test_no_retry_on_failure(client, session):
    session.get.return_value = _response(status_code=500)

    with pytest.raises(ApiError):
        client.call('/stats')
    assert session.get.call_count == 1


def test_fetch_wraps_outcome_in_result(client, session):
    session.get.return_value = _response(body={'trending': []})
    ok = client.fetch('/trending')
    assert ok.ok and ok.value == {'trending': []}

    session.get.return_value = _response(status_code=404)
    failed = client.fetch('/trending')
    assert not failed.ok
    assert isinstance(failed.error, ApiError)
    assert failed.error.status == 404
