"""HTTP client and shared types for the Cloud Foundry API."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlencode

import requests


class CFError(Exception):
    """Error reported by the Cloud Foundry API or raised while talking to it."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        code: int | None = None,
        error_code: str | None = None,
        description: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.error_code = error_code
        self.description = description


@dataclass
class Meta:
    """The metadata block of a v2 resource."""

    guid: str = ""
    url: str = ""
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Meta:
        data = data or {}
        return cls(
            guid=data.get("guid") or "",
            url=data.get("url") or "",
            created_at=data.get("created_at") or "",
            updated_at=data.get("updated_at") or "",
        )


@dataclass
class Link:
    """A HATEOAS-style link of the v3 API."""

    href: str = ""
    method: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Link:
        data = data or {}
        return cls(href=data.get("href") or "", method=data.get("method") or "")


@dataclass
class Pagination:
    """Paging information returned by the v3 API."""

    total_results: int = 0
    total_pages: int = 0
    first: Link = None  # type: ignore[assignment]
    last: Link = None  # type: ignore[assignment]
    next: Any = None
    previous: Any = None

    def __post_init__(self) -> None:
        if self.first is None:
            self.first = Link()
        if self.last is None:
            self.last = Link()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Pagination:
        data = data or {}
        return cls(
            total_results=data.get("total_results") or 0,
            total_pages=data.get("total_pages") or 0,
            first=Link.from_dict(data.get("first")),
            last=Link.from_dict(data.get("last")),
            next=data.get("next"),
            previous=data.get("previous"),
        )


def encode_query(query: Mapping[str, Any] | Iterable[tuple[str, str]] | None) -> str:
    """Encode query parameters sorted by key; list values repeat the key."""
    if not query:
        return ""
    items = query.items() if isinstance(query, Mapping) else query
    pairs: list[tuple[str, str]] = []
    for key, value in sorted(items, key=lambda item: item[0]):
        if isinstance(value, (list, tuple)):
            pairs.extend((key, str(v)) for v in value)
        else:
            pairs.append((key, str(value)))
    return urlencode(pairs)


def _error_from_response(response: requests.Response) -> CFError:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    status = response.status_code
    if isinstance(payload, dict):
        errors = payload.get("errors")
        if isinstance(errors, list) and errors and isinstance(errors[0], dict):
            first = errors[0]
            title = first.get("title", "")
            code = first.get("code", 0)
            detail = first.get("detail", "")
            return CFError(
                f"cfclient error ({title}|{code}): {detail}",
                status_code=status,
                code=code,
                error_code=title,
                description=detail,
            )
        if "error_code" in payload or "description" in payload:
            error_code = payload.get("error_code", "")
            code = payload.get("code", 0)
            description = payload.get("description", "")
            return CFError(
                f"cfclient error ({error_code}|{code}): {description}",
                status_code=status,
                code=code,
                error_code=error_code,
                description=description,
            )
    return CFError(f"cfclient: HTTP error ({status}): {response.text}", status_code=status)


class Client:
    """A small client for the Cloud Foundry v2 and v3 APIs."""

    def __init__(
        self,
        api_address: str,
        token: str | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.api_address = api_address.rstrip("/")
        self.token = token
        self.session = session if session is not None else requests.Session()

    def _url(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        if not path.startswith("/"):
            path = "/" + path
        return self.api_address + path

    def request(self, method: str, path: str, body: Any = None) -> requests.Response:
        """Send a request; raise CFError for transport failures and error statuses."""
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        kwargs: dict[str, Any] = {"headers": headers}
        if isinstance(body, (bytes, str)):
            kwargs["data"] = body
        elif body is not None:
            kwargs["json"] = body
        try:
            response = self.session.request(method, self._url(path), **kwargs)
        except requests.RequestException as exc:
            raise CFError(str(exc)) from exc
        if response.status_code >= 400:
            raise _error_from_response(response)
        return response

    def get_json(self, path: str) -> Any:
        """GET a path and return its decoded JSON body."""
        response = self.request("GET", path)
        try:
            return response.json()
        except ValueError as exc:
            raise CFError(f"invalid JSON response: {exc}") from exc
        finally:
            response.close()

    def iter_resources(self, path: str) -> Iterator[dict[str, Any]]:
        """Yield the resources of a v2 listing, following next_url across pages."""
        while path:
            page = self.get_json(path)
            if not isinstance(page, dict):
                raise CFError("unexpected response: expected a JSON object")
            yield from page.get("resources") or []
            path = page.get("next_url")

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()