"""
services/trips_api.py
---------------------
Read/write access to the trips backend.
- GET  /api/trips  → every registered trip
- POST /api/trips  → register a trip (server assigns number, totals, timestamps)
Every failure (network, timeout, unexpected status, bad JSON) surfaces as
TransportFailure.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional

import requests

from core.config import REQUEST_TIMEOUT, api_base_url
from core.errors import TransportFailure

_TRIPS_PATH = "/api/trips"
_SUCCESS = (200, 201)


# ──────────────────────────────────────────────────────────────────────────────
# Internal helpers
# ──────────────────────────────────────────────────────────────────────────────
def _url(base_url: Optional[str]) -> str:
    return f"{(base_url or api_base_url()).rstrip('/')}{_TRIPS_PATH}"


def _decode(r: requests.Response) -> Any:
    if not r.content:
        return None
    try:
        return r.json()
    except ValueError as e:
        raise TransportFailure(f"Invalid JSON from trips API: {e}", r.status_code) from e


def _error_message(r: requests.Response) -> str:
    try:
        body = r.json()
    except ValueError:
        return r.text
    if isinstance(body, dict):
        return body.get("error") or body.get("message") or r.text
    return r.text


# ──────────────────────────────────────────────────────────────────────────────
# Public functions
# ──────────────────────────────────────────────────────────────────────────────
def fetch_trips(base_url: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Return the full list of trips as JSON dicts ([] when the server has none).
    """
    try:
        r = requests.get(_url(base_url), timeout=REQUEST_TIMEOUT)
    except requests.RequestException as e:
        raise TransportFailure(f"Could not reach trips API: {e}") from e

    if r.status_code != 200:
        raise TransportFailure(
            f"trips API {r.status_code}: {_error_message(r)}", r.status_code
        )

    data = _decode(r)
    if data is None:
        return []
    if not isinstance(data, list):
        raise TransportFailure("trips API returned a non-list body.", r.status_code)
    return data


def create_trip(payload: Dict[str, Any], base_url: Optional[str] = None) -> Optional[Dict[str, Any]]:
    """
    POST one trip. 200 and 201 are success; the created record is returned
    when the server sends one back, else None.
    """
    try:
        r = requests.post(_url(base_url), json=payload, timeout=REQUEST_TIMEOUT)
    except requests.RequestException as e:
        raise TransportFailure(f"Could not reach trips API: {e}") from e

    if r.status_code not in _SUCCESS:
        raise TransportFailure(
            f"trips API {r.status_code}: {_error_message(r)}", r.status_code
        )

    data = _decode(r)
    return data if isinstance(data, dict) else None
