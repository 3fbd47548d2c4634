"""Service usage events of the v2 API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from cfclient.core import CFError, Client, Meta, encode_query


@dataclass
class ServiceUsageEvent:
    guid: str = ""
    created_at: str = ""
    state: str = ""
    org_guid: str = ""
    space_guid: str = ""
    space_name: str = ""
    service_instance_guid: str = ""
    service_instance_name: str = ""
    service_instance_type: str = ""
    service_plan_guid: str = ""
    service_plan_name: str = ""
    service_guid: str = ""
    service_label: str = ""

    @classmethod
    def from_resource(cls, resource: dict[str, Any]) -> ServiceUsageEvent:
        meta = Meta.from_dict(resource.get("metadata"))
        entity = resource.get("entity") or {}

        def text(key: str) -> str:
            return entity.get(key) or ""

        return cls(
            guid=meta.guid,
            created_at=meta.created_at,
            state=text("state"),
            org_guid=text("org_guid"),
            space_guid=text("space_guid"),
            space_name=text("space_name"),
            service_instance_guid=text("service_instance_guid"),
            service_instance_name=text("service_instance_name"),
            service_instance_type=text("service_instance_type"),
            service_plan_guid=text("service_plan_guid"),
            service_plan_name=text("service_plan_name"),
            service_guid=text("service_guid"),
            service_label=text("service_label"),
        )


def list_service_usage_events_by_query(client: Client, query: Any = None) -> list[ServiceUsageEvent]:
    """List all service usage events matching the query, across every page."""
    try:
        return [
            ServiceUsageEvent.from_resource(r)
            for r in client.iter_resources(f"/v2/service_usage_events?{encode_query(query)}")
        ]
    except CFError as exc:
        raise CFError(f"error requesting events: {exc}", status_code=exc.status_code) from exc


def list_service_usage_events(client: Client) -> list[ServiceUsageEvent]:
    return list_service_usage_events_by_query(client, None)