"""Space quota definitions of the v2 API."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

import requests

from cfclient.core import CFError, Client, Meta, encode_query

_LIMIT_FIELDS = (
    "total_services",
    "total_routes",
    "memory_limit",
    "instance_memory_limit",
    "app_instance_limit",
    "app_task_limit",
    "total_service_keys",
    "total_reserved_route_ports",
)


@dataclass
class SpaceQuotaRequest:
    """Body of a request that creates or updates a space quota."""

    name: str = ""
    organization_guid: str = ""
    non_basic_services_allowed: bool = False
    total_services: int = 0
    total_routes: int = 0
    memory_limit: int = 0
    instance_memory_limit: int = 0
    app_instance_limit: int = 0
    app_task_limit: int = 0
    total_service_keys: int = 0
    total_reserved_route_ports: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class SpaceQuota:
    guid: str = ""
    created_at: str = ""
    updated_at: str = ""
    name: str = ""
    organization_guid: str = ""
    non_basic_services_allowed: bool = False
    total_services: int = 0
    total_routes: int = 0
    memory_limit: int = 0
    instance_memory_limit: int = 0
    app_instance_limit: int = 0
    app_task_limit: int = 0
    total_service_keys: int = 0
    total_reserved_route_ports: int = 0

    @classmethod
    def from_resource(cls, resource: dict[str, Any]) -> SpaceQuota:
        meta = Meta.from_dict(resource.get("metadata"))
        entity = resource.get("entity") or {}
        limits = {key: int(entity.get(key) or 0) for key in _LIMIT_FIELDS}
        return cls(
            guid=meta.guid,
            created_at=meta.created_at,
            updated_at=meta.updated_at,
            name=entity.get("name") or "",
            organization_guid=entity.get("organization_guid") or "",
            non_basic_services_allowed=bool(entity.get("non_basic_services_allowed")),
            **limits,
        )


def _expect_status(response: requests.Response, expected: int) -> None:
    if response.status_code != expected:
        response.close()
        raise CFError(
            f"CF API returned with status code {response.status_code}",
            status_code=response.status_code,
        )


def _read_quota(response: requests.Response) -> SpaceQuota:
    with response:
        try:
            return SpaceQuota.from_resource(response.json())
        except ValueError as exc:
            raise CFError(f"Error unmarshalling space quota: {exc}") from exc


def list_space_quotas_by_query(client: Client, query: Any = None) -> list[SpaceQuota]:
    """List all space quotas matching the query, across every page."""
    path = f"/v2/space_quota_definitions?{encode_query(query)}"
    try:
        return [SpaceQuota.from_resource(r) for r in client.iter_resources(path)]
    except CFError as exc:
        raise CFError(
            f"Error requesting space quotas: {exc}", status_code=exc.status_code
        ) from exc


def list_space_quotas(client: Client) -> list[SpaceQuota]:
    return list_space_quotas_by_query(client, None)


def get_space_quota_by_name(client: Client, name: str) -> SpaceQuota:
    """Return the single space quota with the given name."""
    quotas = list_space_quotas_by_query(client, {"q": f"name:{name}"})
    if len(quotas) != 1:
        raise CFError(f"Unable to find space quota {name}")
    return quotas[0]


def assign_space_quota(client: Client, quota_guid: str, space_guid: str) -> None:
    response = client.request(
        "PUT", f"/v2/space_quota_definitions/{quota_guid}/spaces/{space_guid}"
    )
    _expect_status(response, 201)
    response.close()


def create_space_quota(client: Client, request: SpaceQuotaRequest) -> SpaceQuota:
    response = client.request("POST", "/v2/space_quota_definitions", request.to_dict())
    _expect_status(response, 201)
    return _read_quota(response)


def update_space_quota(
    client: Client, space_quota_guid: str, request: SpaceQuotaRequest
) -> SpaceQuota:
    response = client.request(
        "PUT", f"/v2/space_quota_definitions/{space_quota_guid}", request.to_dict()
    )
    _expect_status(response, 201)
    return _read_quota(response)