"""Users of the v2 API."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

import requests

from cfclient.core import CFError, Client, Meta, encode_query
from cfclient.spaces import Space, fetch_spaces


@dataclass
class UserRequest:
    """Body of a request that creates a user."""

    guid: str = ""
    default_space_guid: str = ""

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"guid": self.guid}
        if self.default_space_guid:
            payload["default_space_guid"] = self.default_space_guid
        return payload


@dataclass
class User:
    guid: str = ""
    created_at: str = ""
    updated_at: str = ""
    admin: bool = False
    active: bool = False
    default_space_guid: str = ""
    username: str = ""
    spaces_url: str = ""
    orgs_url: str = ""
    managed_orgs_url: str = ""
    billing_managed_orgs_url: str = ""
    audited_orgs_url: str = ""
    managed_spaces_url: str = ""
    audited_spaces_url: str = ""

    @classmethod
    def from_resource(cls, resource: dict[str, Any]) -> User:
        meta = Meta.from_dict(resource.get("metadata"))
        entity = resource.get("entity") or {}

        def text(key: str) -> str:
            return entity.get(key) or ""

        return cls(
            guid=meta.guid,
            created_at=meta.created_at,
            updated_at=meta.updated_at,
            admin=bool(entity.get("admin")),
            active=bool(entity.get("active")),
            default_space_guid=text("default_space_guid"),
            username=text("username"),
            spaces_url=text("spaces_url"),
            orgs_url=text("organizations_url"),
            managed_orgs_url=text("managed_organizations_url"),
            billing_managed_orgs_url=text("billing_managed_organizations_url"),
            audited_orgs_url=text("audited_organizations_url"),
            managed_spaces_url=text("managed_spaces_url"),
            audited_spaces_url=text("audited_spaces_url"),
        )


class Users(list):
    """A list of users with lookup by username."""

    def get_user_by_username(self, username: str) -> User:
        """Return the first user with this username, or an empty User if none matches."""
        return next((user for user in self if user.username == username), User())


def _expect_status(response: requests.Response, expected: int, message: str) -> None:
    if response.status_code != expected:
        response.close()
        raise CFError(message, status_code=response.status_code)


def _read_json(response: requests.Response) -> Any:
    with response:
        try:
            return response.json()
        except ValueError as exc:
            raise CFError(f"invalid JSON response: {exc}") from exc


def fetch_users(client: Client, path: str) -> Users:
    """List every user of a paged v2 listing."""
    try:
        return Users(User.from_resource(r) for r in client.iter_resources(path))
    except CFError as exc:
        raise CFError(f"Error requesting users: {exc}", status_code=exc.status_code) from exc


def get_user_by_guid(client: Client, guid: str) -> User:
    return User.from_resource(client.get_json(f"/v2/users/{guid}"))


def list_users_by_query(client: Client, query: Any = None) -> Users:
    return fetch_users(client, f"/v2/users?{encode_query(query)}")


def list_users(client: Client) -> Users:
    return list_users_by_query(client, None)


def list_user_spaces(client: Client, user_guid: str) -> list[Space]:
    return fetch_spaces(client, f"/v2/users/{user_guid}/spaces")


def list_user_audited_spaces(client: Client, user_guid: str) -> list[Space]:
    return fetch_spaces(client, f"/v2/users/{user_guid}/audited_spaces")


def list_user_managed_spaces(client: Client, user_guid: str) -> list[Space]:
    return fetch_spaces(client, f"/v2/users/{user_guid}/managed_spaces")


def create_user(client: Client, request: UserRequest) -> User:
    """Create a user; the result carries the GUID from the metadata."""
    response = client.request("POST", "/v2/users", request.to_dict())
    _expect_status(
        response, 201, f"Error creating user, response code: {response.status_code}"
    )
    data = _read_json(response)
    if not isinstance(data, dict):
        raise CFError("unexpected response: expected a JSON object")
    entity = data.get("entity") or {}
    return replace(
        User.from_resource(data),
        created_at=entity.get("created_at") or "",
        updated_at=entity.get("updated_at") or "",
    )


def delete_user(client: Client, user_guid: str) -> None:
    response = client.request("DELETE", f"/v2/users/{user_guid}")
    _expect_status(
        response,
        204,
        f"Error deleting user {user_guid}, response code: {response.status_code}",
    )
    response.close()