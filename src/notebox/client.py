"""
Synchronous HTTP client for the Notebox API.

Every call returns ``Ok(payload)`` or ``Err(kind, message, status_code)``;
callers branch on the result instead of catching exceptions.

    with NoteboxClient("http://localhost:8000") as client:
        result = client.signin("jane@example.com", "securepassword123")
        if isinstance(result, Err):
            ...
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Union
from uuid import UUID

import httpx

from .core.errors import ErrorKind, kind_for_status
from .core.logging import get_logger

logger = get_logger("client")


@dataclass(frozen=True)
class Ok:
    payload: Dict[str, Any]


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    message: str
    status_code: Optional[int] = None


Result = Union[Ok, Err]


def _parse_kind(value: Any, status_code: int) -> ErrorKind:
    try:
        return ErrorKind(value)
    except ValueError:
        return kind_for_status(status_code)


class NoteboxClient:
    """Thin wrapper over ``httpx.Client`` speaking the Notebox API."""

    def __init__(
        self,
        base_url: str,
        *,
        with_credentials: bool = True,
        on_unauthorized: Optional[Callable[[Err], None]] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.with_credentials = with_credentials
        self.on_unauthorized = on_unauthorized
        self._http = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    # context manager

    def __enter__(self) -> "NoteboxClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    @property
    def cookies(self) -> httpx.Cookies:
        return self._http.cookies

    # auth

    def signup(self, username: str, email: str, password: str) -> Result:
        return self._request(
            "POST",
            "/api/auth/signup",
            json={"username": username, "email": email, "password": password},
        )

    def signin(self, email: str, password: str) -> Result:
        return self._request("POST", "/api/auth/signin", json={"email": email, "password": password})

    def signout(self) -> Result:
        return self._request("POST", "/api/auth/signout")

    def me(self) -> Result:
        return self._request("GET", "/api/auth/me")

    # notes

    def list_notes(self) -> Result:
        return self._request("GET", "/api/note/all")

    def add_note(self, title: str, content: str, tags: Optional[List[str]] = None) -> Result:
        return self._request(
            "POST",
            "/api/note/add",
            json={"title": title, "content": content, "tags": list(tags or [])},
        )

    def get_note(self, note_id: Union[UUID, str]) -> Result:
        return self._request("GET", f"/api/note/{note_id}")

    def edit_note(
        self,
        note_id: Union[UUID, str],
        *,
        title: Optional[str] = None,
        content: Optional[str] = None,
        tags: Optional[List[str]] = None,
    ) -> Result:
        patch: Dict[str, Any] = {}
        if title is not None:
            patch["title"] = title
        if content is not None:
            patch["content"] = content
        if tags is not None:
            patch["tags"] = list(tags)
        return self._request("PUT", f"/api/note/edit/{note_id}", json=patch)

    def delete_note(self, note_id: Union[UUID, str]) -> Result:
        return self._request("DELETE", f"/api/note/delete/{note_id}")

    def set_pinned(self, note_id: Union[UUID, str], pinned: bool) -> Result:
        return self._request(
            "PUT", f"/api/note/update-note-pinned/{note_id}", json={"is_pinned": pinned}
        )

    def search_notes(self, query: str) -> Result:
        return self._request("GET", "/api/note/search", params={"query": query})

    def _request(self, method: str, path: str, **kwargs) -> Result:
        try:
            response = self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("Request failed", extra={"method": method, "path": path, "error": str(e)})
            return Err(ErrorKind.TRANSPORT, str(e) or type(e).__name__)
        finally:
            if not self.with_credentials:
                self._http.cookies.clear()

        return self._to_result(response)

    def _to_result(self, response: httpx.Response) -> Result:
        try:
            body = response.json()
        except ValueError:
            body = None

        if response.is_success:
            return Ok(body if isinstance(body, dict) else {"data": body})

        if isinstance(body, dict):
            kind = _parse_kind(body.get("error"), response.status_code)
            message = body.get("message") or response.reason_phrase
        else:
            kind = kind_for_status(response.status_code)
            message = response.reason_phrase or f"HTTP {response.status_code}"

        err = Err(kind, message, response.status_code)
        if response.status_code == 401 and self.on_unauthorized is not None:
            self.on_unauthorized(err)
        return err
