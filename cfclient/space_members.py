"""Developers, managers and auditors of a space."""

from __future__ import annotations

from enum import Enum
from typing import Any

import requests

from cfclient.core import CFError, Client, encode_query
from cfclient.spaces import Space
from cfclient.users import Users, fetch_users


class SpaceUserRole(str, Enum):
    """The roles a user can hold in a space, named as in the API paths."""

    DEVELOPERS = "developers"
    MANAGERS = "managers"
    AUDITORS = "auditors"


def _role(role: SpaceUserRole | str) -> str:
    return SpaceUserRole(role).value


def _expect_status(response: requests.Response, expected: int, message: str) -> None:
    if response.status_code != expected:
        response.close()
        raise CFError(message, status_code=response.status_code)


def _read_space(response: requests.Response, client: Client) -> Space:
    with response:
        try:
            data = response.json()
        except ValueError as exc:
            raise CFError(f"invalid JSON response: {exc}") from exc
    if not isinstance(data, dict):
        raise CFError("unexpected response: expected a JSON object")
    return Space.from_resource(data, client)


def list_space_users(
    client: Client, space_guid: str, role: SpaceUserRole | str, query: Any = None
) -> Users:
    """List the users holding a role in a space."""
    return fetch_users(
        client, f"/v2/spaces/{space_guid}/{_role(role)}?{encode_query(query)}"
    )


def associate_space_user(
    client: Client, space_guid: str, role: SpaceUserRole | str, user_guid: str
) -> Space:
    """Give a user, named by GUID, a role in a space."""
    name = _role(role)
    response = client.request("PUT", f"/v2/spaces/{space_guid}/{name}/{user_guid}")
    _expect_status(
        response,
        201,
        f"Error associating {name} {user_guid}, response code: {response.status_code}",
    )
    return _read_space(response, client)


def associate_space_user_by_username(
    client: Client,
    space_guid: str,
    role: SpaceUserRole | str,
    username: str,
    origin: str = "",
) -> Space:
    """Give a user, named by username and optional origin, a role in a space."""
    name = _role(role)
    payload = {"username": username}
    if origin:
        payload["origin"] = origin
    response = client.request("PUT", f"/v2/spaces/{space_guid}/{name}", payload)
    _expect_status(
        response,
        201,
        f"Error associating {name} {username}, response code: {response.status_code}",
    )
    return _read_space(response, client)


def remove_space_user(
    client: Client, space_guid: str, role: SpaceUserRole | str, user_guid: str
) -> None:
    """Take a role in a space away from a user named by GUID."""
    name = _role(role)
    response = client.request("DELETE", f"/v2/spaces/{space_guid}/{name}/{user_guid}")
    _expect_status(
        response,
        204,
        f"Error removing {name} {user_guid}, response code: {response.status_code}",
    )
    response.close()


def remove_space_user_by_username(
    client: Client,
    space_guid: str,
    role: SpaceUserRole | str,
    username: str,
    origin: str = "",
) -> None:
    """Take a role in a space away from a user named by username and optional origin."""
    name = _role(role)
    payload = {"username": username}
    if origin:
        payload["origin"] = origin
        method, path = "POST", f"/v2/spaces/{space_guid}/{name}/remove"
    else:
        method, path = "DELETE", f"/v2/spaces/{space_guid}/{name}"
    response = client.request(method, path, payload)
    _expect_status(
        response,
        200,
        f"Error removing {name} {username}, response code: {response.status_code}",
    )
    response.close()