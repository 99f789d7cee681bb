import os
import requests
from requests import Response
from requests.exceptions import RequestException

BASE_URL = os.getenv("API_BASE_URL", "http://127.0.0.1:8000/api/v1")
DEFAULT_TIMEOUT = 30


def _error_response(error: Exception) -> Response:
    resp = Response()
    resp.status_code = 503
    resp._content = f"Backend unavailable: {error}".encode("utf-8")
    return resp


def post(path: str, json: dict, params: dict | None = None):
    headers = {"Content-Type": "application/json"}
    try:
        return requests.post(
            f"{BASE_URL}{path}",
            json=json,
            headers=headers,
            params=params,
            timeout=DEFAULT_TIMEOUT,
        )
    except RequestException as exc:
        return _error_response(exc)


def get(path: str, params: dict | None = None):
    try:
        return requests.get(f"{BASE_URL}{path}", params=params, timeout=DEFAULT_TIMEOUT)
    except RequestException as exc:
        return _error_response(exc)
