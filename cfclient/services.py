"""Services (offerings) of the v2 API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from cfclient.core import CFError, Client, Meta, encode_query


@dataclass
class Service:
    guid: str = ""
    label: str = ""
    created_at: str = ""
    updated_at: str = ""
    description: str = ""
    active: bool = False
    bindable: bool = False
    service_broker_guid: str = ""
    plan_updateable: bool = False
    tags: list[str] = field(default_factory=list)
    unique_id: str = ""
    extra: str = ""
    requires: list[str] = field(default_factory=list)
    instances_retrievable: bool = False
    bindings_retrievable: bool = False

    @classmethod
    def from_resource(cls, resource: dict[str, Any]) -> Service:
        meta = Meta.from_dict(resource.get("metadata"))
        entity = resource.get("entity") or {}
        return cls(
            guid=meta.guid,
            label=entity.get("label") or "",
            created_at=meta.created_at,
            updated_at=meta.updated_at,
            description=entity.get("description") or "",
            active=bool(entity.get("active")),
            bindable=bool(entity.get("bindable")),
            service_broker_guid=entity.get("service_broker_guid") or "",
            plan_updateable=bool(entity.get("plan_updateable")),
            tags=list(entity.get("tags") or []),
            unique_id=entity.get("unique_id") or "",
            extra=entity.get("extra") or "",
            requires=list(entity.get("requires") or []),
            instances_retrievable=bool(entity.get("instances_retrievable")),
            bindings_retrievable=bool(entity.get("bindings_retrievable")),
        )


@dataclass
class ServiceSummary:
    guid: str = ""
    name: str = ""
    bound_app_count: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ServiceSummary:
        data = data or {}
        return cls(
            guid=data.get("guid") or "",
            name=data.get("name") or "",
            bound_app_count=data.get("bound_app_count") or 0,
        )


def get_service_by_guid(client: Client, guid: str) -> Service:
    return Service.from_resource(client.get_json(f"/v2/services/{guid}"))


def list_services_by_query(client: Client, query: Any = None) -> list[Service]:
    """List all services matching the query, across every page."""
    try:
        return [
            Service.from_resource(r)
            for r in client.iter_resources(f"/v2/services?{encode_query(query)}")
        ]
    except CFError as exc:
        raise CFError(f"Error requesting services: {exc}", status_code=exc.status_code) from exc


def list_services(client: Client) -> list[Service]:
    return list_services_by_query(client, None)