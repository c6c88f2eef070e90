"""Volunteer Board API client.

A small wrapper around the Volunteer Board REST API built on the
``requests`` library.  It is used by scripts and integrations that
need to read the listing, submit signups or manage opportunities
without going through the web UI.

The client exposes high‑level methods:

* :meth:`list_opportunities` – one page of opportunities.
* :meth:`get_opportunity` – fetch a single opportunity.
* :meth:`submit_signup` – sign a volunteer up for an opportunity.
* :meth:`create_opportunity`, :meth:`update_opportunity`,
  :meth:`archive_opportunity` – admin management.
* :meth:`list_signups` – one page of signups (admin).

Every method returns a tuple ``(data, error)``; exactly one of the two
is meaningful.  List methods always return a page envelope.  Servers
that predate pagination answer with a bare JSON array, which is
wrapped as a single page so callers keep one code path.

Admin calls authenticate with ``api_key`` (sent as a bearer token) or
with the legacy ``admin_token`` (sent as ``X-Admin-Token``).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

import requests

from volunteer_board_api.app.services.pagination import single_page

logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class VolunteerBoardClient:
    """Client for interacting with the Volunteer Board API."""

    def __init__(
        self,
        *,
        base_url: str,
        api_key: Optional[str] = None,
        admin_token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the API including its prefix, e.g.
                ``https://example.com/api/v1``.
            api_key: Optional bearer token for admin endpoints.
            admin_token: Optional legacy shared secret for admin endpoints.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.admin_token = admin_token
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Returns:
            A tuple ``(data, error)``. ``data`` contains the parsed JSON
            response on success and ``error`` is ``None``. On failure,
            ``data`` is ``None`` and ``error`` is a dictionary with keys
            ``status_code`` and ``message`` describing the issue.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        elif self.admin_token:
            headers["X-Admin-Token"] = self.admin_token
        if params:
            params = {key: value for key, value in params.items() if value is not None}
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params or None,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = _error_message(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    def _get_page(self, path: str, params: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", path, params=params)
        if error:
            return None, error
        if isinstance(data, list):
            return single_page(data).model_dump(by_alias=True), None
        return data, None

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------
    def list_opportunities(
        self,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
        *,
        tag: Optional[str] = None,
        available_only: bool = False,
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Retrieve one page of opportunities ordered by date."""
        params: Dict[str, Any] = {"page": page, "perPage": per_page, "tag": tag}
        if available_only:
            params["available"] = "true"
        return self._get_page("/opportunities", params)

    def get_opportunity(self, opportunity_id: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", f"/opportunities/{opportunity_id}")

    def submit_signup(
        self,
        opportunity_id: str,
        volunteer_name: str,
        volunteer_email: str,
        notes: Optional[str] = None,
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Sign a volunteer up.

        Returns the server acknowledgement (``success`` and ``message``).
        A full opportunity comes back as an error with status 409.
        """
        payload: Dict[str, Any] = {
            "opportunityId": opportunity_id,
            "volunteerName": volunteer_name,
            "volunteerEmail": volunteer_email,
        }
        if notes:
            payload["notes"] = notes
        return self._request("POST", f"/opportunities/{opportunity_id}/signups", json_body=payload)

    # ------------------------------------------------------------------
    # Admin operations
    # ------------------------------------------------------------------
    def create_opportunity(self, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("POST", "/opportunities", json_body=payload)

    def update_opportunity(
        self, opportunity_id: str, payload: Dict[str, Any]
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("PATCH", f"/opportunities/{opportunity_id}", json_body=payload)

    def archive_opportunity(self, opportunity_id: str) -> Tuple[bool, Optional[Error]]:
        """Delete an opportunity.  Returns ``(True, None)`` on success."""
        _, error = self._request("DELETE", f"/opportunities/{opportunity_id}")
        if error:
            return False, error
        return True, None

    def list_signups(
        self,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
        *,
        opportunity_id: Optional[str] = None,
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Retrieve one page of signups, newest first."""
        params = {"page": page, "perPage": per_page, "opportunityId": opportunity_id}
        return self._get_page("/signups", params)


def _error_message(body: Any) -> str:
    """Extract a human readable message from an error response body.

    FastAPI answers with ``{"detail": "..."}``, or ``{"detail": [...]}``
    for request validation errors; older deployments used
    ``{"error": "..."}`` or ``{"error": {"message": "..."}}``.
    """
    if not isinstance(body, dict):
        return ""
    for key in ("detail", "error", "message"):
        value = body.get(key)
        if isinstance(value, str):
            return value
        if isinstance(value, dict) and isinstance(value.get("message"), str):
            return value["message"]
        if isinstance(value, list) and value:
            first = value[0]
            if isinstance(first, dict) and isinstance(first.get("msg"), str):
                return first["msg"]
    return ""
