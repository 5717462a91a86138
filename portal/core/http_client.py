# portal/core/http_client.py
from __future__ import annotations

from typing import Any, Dict, Optional

import requests

from portal.core.config import Settings, get_settings
from portal.core.errors import ApiError, handle_api_error
from portal.core.logger import get_logger
from portal.core.session import PortalSession

logger = get_logger("http")


def _clean_params(params: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    # empty filters are left off the query string
    if not params:
        return None
    cleaned = {k: v for k, v in params.items() if v is not None and v != ""}
    return cleaned or None


class ApiClient:
    """
    Thin JSON client for the college backend.

    Every call returns the decoded response body. Failures are raised as
    ApiError with the backend's `message`, the HTTP status (0 when no answer
    came back) and the raw body.
    """

    def __init__(
        self,
        session: PortalSession | None = None,
        settings: Settings | None = None,
        http: requests.Session | None = None,
    ):
        self.session = session or PortalSession()
        self.settings = settings or get_settings()
        self.http = http or requests.Session()
        self.base_url = self.settings.API_URL.rstrip("/")

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.session.access_token:
            headers["Authorization"] = f"Bearer {self.session.access_token}"
        return headers

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
    ) -> Any:
        url = f"{self.base_url}/{path.lstrip('/')}"
        logger.debug("%s %s params=%s", method, url, params)
        try:
            resp = self.http.request(
                method,
                url,
                params=_clean_params(params),
                json=json,
                headers=self._headers(),
                timeout=self.settings.REQUEST_TIMEOUT,
            )
            resp.raise_for_status()
        except requests.RequestException as e:
            err = handle_api_error(e)
            if err.status == 401:
                # token rejected: force a fresh login
                self.session.clear()
            logger.warning("%s %s failed: %s (status %s)", method, url, err.message, err.status)
            raise err from e

        if resp.status_code == 204 or not resp.content:
            return {}
        try:
            return resp.json()
        except ValueError as e:
            raise ApiError(
                message="Invalid response from server",
                status=resp.status_code,
                data=resp.text,
            ) from e

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Any = None, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("POST", path, params=params, json=json)

    def put(self, path: str, json: Any = None) -> Any:
        return self.request("PUT", path, json=json)

    def patch(self, path: str, json: Any = None) -> Any:
        return self.request("PATCH", path, json=json)

    def delete(self, path: str, json: Any = None) -> Any:
        return self.request("DELETE", path, json=json)
