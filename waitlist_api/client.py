"""
HTTP clients for the waitlist API.

``WaitlistClient`` is what the landing page signup form talks through;
``AdminClient`` backs the admin dashboard (listing, CSV export, delete).
Transport failures surface as ``WaitlistConnectionError`` with a generic
retry message; the raw cause is only logged.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

import httpx

from waitlist_api.features.admin.utils.csv_export import export_filename
from waitlist_api.features.waitlist.utils.email import is_valid_email, normalize_email
from waitlist_api.platform.config import settings

logger = logging.getLogger(__name__)

CONNECTION_ERROR_MESSAGE = "Unable to reach the server. Please check your connection and try again."


class WaitlistClientError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class WaitlistConnectionError(WaitlistClientError):
    def __init__(self, message: str = CONNECTION_ERROR_MESSAGE):
        super().__init__(message)


class SignupStatus(str, Enum):
    SUCCESS = "success"
    DUPLICATE = "duplicate"
    INVALID = "invalid"
    ERROR = "error"


@dataclass
class SignupResult:
    status: SignupStatus
    message: str
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == SignupStatus.SUCCESS


class _BaseClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        http: Optional[httpx.Client] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self._http = http or httpx.Client(timeout=timeout or settings.API_TIMEOUT)
        self._owns_http = http is None

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _send(self, method: str, endpoint: str, **kwargs) -> httpx.Response:
        url = f"{self.base_url}{endpoint}"
        try:
            return self._http.request(method, url, **kwargs)
        except httpx.TransportError as e:
            logger.error(f"API request failed: {method} {url}: {e}")
            raise WaitlistConnectionError() from e

    def _request(self, method: str, endpoint: str, **kwargs) -> Dict[str, Any]:
        response = self._send(method, endpoint, **kwargs)
        try:
            payload = response.json()
        except ValueError:
            payload = {}

        if response.is_error:
            message = payload.get("message") or f"HTTP {response.status_code}: {response.reason_phrase}"
            raise WaitlistClientError(message, status_code=response.status_code)
        return payload


class WaitlistClient(_BaseClient):
    def join(self, email: str) -> SignupResult:
        """
        Submit a signup. Duplicate and invalid emails are ordinary outcomes,
        not exceptions; only connection failures raise.
        """
        if not is_valid_email(email):
            return SignupResult(SignupStatus.INVALID, "Please provide a valid email address")

        try:
            payload = self._request("POST", "/waitlist", json={"email": normalize_email(email)})
        except WaitlistConnectionError:
            raise
        except WaitlistClientError as e:
            if e.status_code == 409:
                return SignupResult(SignupStatus.DUPLICATE, e.message)
            if e.status_code == 400:
                return SignupResult(SignupStatus.INVALID, e.message)
            return SignupResult(SignupStatus.ERROR, e.message)

        return SignupResult(
            SignupStatus.SUCCESS,
            payload.get("message", "Successfully added to waitlist"),
            payload.get("data") or {},
        )

    def email_exists(self, email: str) -> bool:
        """Advisory pre-check. Any failure counts as "not registered"."""
        try:
            payload = self._request("POST", "/waitlist/check", json={"email": normalize_email(email)})
        except WaitlistClientError as e:
            logger.warning(f"Error checking email: {e}")
            return False
        return bool(payload.get("exists", False))

    def stats(self) -> Dict[str, Any]:
        return self._request("GET", "/waitlist/stats").get("data", {})

    def health(self) -> Dict[str, Any]:
        return self._request("GET", "/health")


class AdminClient(_BaseClient):
    def list_entries(
        self,
        page: int = 1,
        limit: int = 50,
        sort_by: str = "createdAt",
        sort_order: str = "desc",
    ) -> Dict[str, Any]:
        params = {"page": page, "limit": limit, "sortBy": sort_by, "sortOrder": sort_order}
        return self._request("GET", "/admin/waitlist", params=params).get("data", {})

    def export_csv(self) -> tuple[str, str]:
        """Returns ``(filename, csv_text)``."""
        response = self._send("GET", "/admin/waitlist/export")
        if response.is_error:
            try:
                message = response.json().get("message")
            except ValueError:
                message = None
            raise WaitlistClientError(
                message or f"HTTP {response.status_code}: {response.reason_phrase}",
                status_code=response.status_code,
            )

        disposition = response.headers.get("content-disposition", "")
        if "filename=" in disposition:
            filename = disposition.split("filename=")[1].replace('"', "")
        else:
            filename = export_filename()
        return filename, response.text

    def delete_entry(self, entry_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/admin/waitlist/{entry_id}")

    def stats(self) -> Dict[str, Any]:
        return self._request("GET", "/admin/waitlist/stats").get("data", {})
