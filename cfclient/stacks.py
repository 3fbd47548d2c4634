"""Stacks of the v2 API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from cfclient.core import CFError, Client, Meta, encode_query


@dataclass
class Stack:
    guid: str = ""
    name: str = ""
    created_at: str = ""
    updated_at: str = ""
    description: str = ""

    @classmethod
    def from_resource(cls, resource: dict[str, Any]) -> Stack:
        meta = Meta.from_dict(resource.get("metadata"))
        entity = resource.get("entity") or {}
        return cls(
            guid=meta.guid,
            name=entity.get("name") or "",
            created_at=meta.created_at,
            updated_at=meta.updated_at,
            description=entity.get("description") or "",
        )


def list_stacks_by_query(client: Client, query: Any = None) -> list[Stack]:
    """List all stacks matching the query, across every page."""
    try:
        return [
            Stack.from_resource(r)
            for r in client.iter_resources(f"/v2/stacks?{encode_query(query)}")
        ]
    except CFError as exc:
        raise CFError(f"Error requesting stacks: {exc}", status_code=exc.status_code) from exc


def list_stacks(client: Client) -> list[Stack]:
    return list_stacks_by_query(client, None)