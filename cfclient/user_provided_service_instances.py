"""User-provided service instances of the v2 API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import requests

from cfclient.core import CFError, Client, Meta, encode_query


@dataclass
class UserProvidedServiceInstance:
    guid: str = ""
    name: str = ""
    created_at: str = ""
    updated_at: str = ""
    credentials: dict[str, Any] = field(default_factory=dict)
    space_guid: str = ""
    type: str = ""
    tags: list[str] = field(default_factory=list)
    space_url: str = ""
    service_bindings_url: str = ""
    routes_url: str = ""
    route_service_url: str = ""
    syslog_drain_url: str = ""

    @classmethod
    def from_resource(cls, resource: dict[str, Any]) -> UserProvidedServiceInstance:
        if not isinstance(resource, dict):
            raise CFError("unexpected response: expected a JSON object")
        meta = Meta.from_dict(resource.get("metadata"))
        entity = resource.get("entity") or {}

        def text(key: str) -> str:
            return entity.get(key) or ""

        return cls(
            guid=meta.guid,
            name=text("name"),
            created_at=meta.created_at,
            updated_at=meta.updated_at,
            credentials=dict(entity.get("credentials") or {}),
            space_guid=text("space_guid"),
            type=text("type"),
            tags=list(entity.get("tags") or []),
            space_url=text("space_url"),
            service_bindings_url=text("service_bindings_url"),
            routes_url=text("routes_url"),
            route_service_url=text("route_service_url"),
            syslog_drain_url=text("syslog_drain_url"),
        )


@dataclass
class UserProvidedServiceInstanceRequest:
    """Body of a request that creates or updates a user-provided service instance."""

    name: str = ""
    credentials: dict[str, Any] | None = None
    space_guid: str = ""
    tags: list[str] | None = None
    route_service_url: str = ""
    syslog_drain_url: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "credentials": self.credentials,
            "space_guid": self.space_guid,
            "tags": self.tags,
            "route_service_url": self.route_service_url,
            "syslog_drain_url": self.syslog_drain_url,
        }


def _read_instance(response: requests.Response) -> UserProvidedServiceInstance:
    if response.status_code != 201:
        response.close()
        raise CFError(
            f"CF API returned with status code {response.status_code}",
            status_code=response.status_code,
        )
    with response:
        try:
            data = response.json()
        except ValueError as exc:
            raise CFError(f"invalid JSON response: {exc}") from exc
    return UserProvidedServiceInstance.from_resource(data)


def list_user_provided_service_instances_by_query(
    client: Client, query: Any = None
) -> list[UserProvidedServiceInstance]:
    """List all user-provided service instances matching the query, across every page."""
    path = f"/v2/user_provided_service_instances?{encode_query(query)}"
    try:
        return [
            UserProvidedServiceInstance.from_resource(r) for r in client.iter_resources(path)
        ]
    except CFError as exc:
        raise CFError(
            f"Error requesting user provided service instances: {exc}",
            status_code=exc.status_code,
        ) from exc


def list_user_provided_service_instances(client: Client) -> list[UserProvidedServiceInstance]:
    return list_user_provided_service_instances_by_query(client, None)


def get_user_provided_service_instance_by_guid(
    client: Client, guid: str
) -> UserProvidedServiceInstance:
    try:
        data = client.get_json(f"/v2/user_provided_service_instances/{guid}")
    except CFError as exc:
        raise CFError(
            f"Error requesting user provided service instance: {exc}",
            status_code=exc.status_code,
        ) from exc
    return UserProvidedServiceInstance.from_resource(data)


def create_user_provided_service_instance(
    client: Client, request: UserProvidedServiceInstanceRequest
) -> UserProvidedServiceInstance:
    response = client.request(
        "POST", "/v2/user_provided_service_instances", request.to_dict()
    )
    return _read_instance(response)


def update_user_provided_service_instance(
    client: Client, guid: str, request: UserProvidedServiceInstanceRequest
) -> UserProvidedServiceInstance:
    response = client.request(
        "PUT", f"/v2/user_provided_service_instances/{guid}", request.to_dict()
    )
    return _read_instance(response)


def delete_user_provided_service_instance(client: Client, guid: str) -> None:
    response = client.request("DELETE", f"/v2/user_provided_service_instances/{guid}")
    status = response.status_code
    response.close()
    if status != 204:
        raise CFError(
            f"Error deleting user provided service instance {guid}, response code {status}",
            status_code=status,
        )