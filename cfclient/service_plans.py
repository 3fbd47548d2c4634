"""Service plans of the v2 API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from cfclient.core import CFError, Client, Meta, encode_query


@dataclass
class ServicePlan:
    name: str = ""
    guid: str = ""
    created_at: str = ""
    updated_at: str = ""
    free: bool = False
    description: str = ""
    service_guid: str = ""
    extra: Any = None
    unique_id: str = ""
    public: bool = False
    active: bool = False
    bindable: bool = False
    service_url: str = ""
    service_instances_url: str = ""

    @classmethod
    def from_resource(cls, resource: dict[str, Any]) -> ServicePlan:
        meta = Meta.from_dict(resource.get("metadata"))
        entity = resource.get("entity") or {}
        return cls(
            name=entity.get("name") or "",
            guid=meta.guid,
            created_at=meta.created_at,
            updated_at=meta.updated_at,
            free=bool(entity.get("free")),
            description=entity.get("description") or "",
            service_guid=entity.get("service_guid") or "",
            extra=entity.get("extra"),
            unique_id=entity.get("unique_id") or "",
            public=bool(entity.get("public")),
            active=bool(entity.get("active")),
            bindable=bool(entity.get("bindable")),
            service_url=entity.get("service_url") or "",
            service_instances_url=entity.get("service_instances_url") or "",
        )


def list_service_plans_by_query(client: Client, query: Any = None) -> list[ServicePlan]:
    """List all service plans matching the query, across every page."""
    try:
        return [
            ServicePlan.from_resource(r)
            for r in client.iter_resources(f"/v2/service_plans?{encode_query(query)}")
        ]
    except CFError as exc:
        raise CFError(
            f"Error requesting service plans: {exc}", status_code=exc.status_code
        ) from exc


def list_service_plans(client: Client) -> list[ServicePlan]:
    return list_service_plans_by_query(client, None)


def get_service_plan_by_guid(client: Client, guid: str) -> ServicePlan:
    return ServicePlan.from_resource(client.get_json(f"/v2/service_plans/{guid}"))


def _set_plan_global_visibility(client: Client, service_plan_guid: str, public: bool) -> None:
    response = client.request("PUT", f"/v2/service_plans/{service_plan_guid}", {"public": public})
    response.close()


def make_service_plan_public(client: Client, service_plan_guid: str) -> None:
    _set_plan_global_visibility(client, service_plan_guid, True)


def make_service_plan_private(client: Client, service_plan_guid: str) -> None:
    _set_plan_global_visibility(client, service_plan_guid, False)