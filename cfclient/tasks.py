"""Tasks of the v3 API."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import requests

from cfclient.core import CFError, Client, Link, encode_query

_FRACTION = re.compile(r"\.(\d+)")


def _parse_time(value: Any) -> datetime | None:
    """Parse an RFC 3339 timestamp; empty values give None."""
    if not value:
        return None
    if not isinstance(value, str):
        raise CFError(f"invalid timestamp: {value!r}")
    text = value[:-1] + "+00:00" if value.endswith(("Z", "z")) else value
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise CFError(f"invalid timestamp {value!r}: {exc}") from exc


@dataclass
class TaskLinks:
    self: Link = field(default_factory=Link)
    app: Link = field(default_factory=Link)
    droplet: Link = field(default_factory=Link)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> TaskLinks:
        data = data or {}
        return cls(
            self=Link.from_dict(data.get("self")),
            app=Link.from_dict(data.get("app")),
            droplet=Link.from_dict(data.get("droplet")),
        )


@dataclass
class Task:
    guid: str = ""
    sequence_id: int = 0
    name: str = ""
    command: str = ""
    state: str = ""
    memory_in_mb: int = 0
    disk_in_mb: int = 0
    failure_reason: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    droplet_guid: str = ""
    links: TaskLinks = field(default_factory=TaskLinks)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Task:
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise CFError("unexpected response: expected a JSON object")
        result = data.get("result") or {}
        return cls(
            guid=data.get("guid") or "",
            sequence_id=int(data.get("sequence_id") or 0),
            name=data.get("name") or "",
            command=data.get("command") or "",
            state=data.get("state") or "",
            memory_in_mb=int(data.get("memory_in_mb") or 0),
            disk_in_mb=int(data.get("disk_in_mb") or 0),
            failure_reason=result.get("failure_reason") or "",
            created_at=_parse_time(data.get("created_at")),
            updated_at=_parse_time(data.get("updated_at")),
            droplet_guid=data.get("droplet_guid") or "",
            links=TaskLinks.from_dict(data.get("links")),
        )


@dataclass
class TaskRequest:
    """Description of a task to create; droplet_guid names the app it runs in."""

    command: str = ""
    name: str = ""
    memory_in_mb: int = 0
    disk_in_mb: int = 0
    droplet_guid: str = ""

    def to_payload(self) -> dict[str, str]:
        """Build the request body; unset optional fields are left out."""
        payload = {"command": self.command}
        if self.name:
            payload["name"] = self.name
        if self.memory_in_mb:
            payload["memory_in_mb"] = str(self.memory_in_mb)
        if self.disk_in_mb:
            payload["disk_in_mb"] = str(self.disk_in_mb)
        return payload


def _read_json(response: requests.Response, what: str) -> Any:
    with response:
        try:
            return response.json()
        except ValueError as exc:
            raise CFError(f"Error unmarshaling {what}: {exc}") from exc


def _list_tasks(client: Client, base_path: str, query: Any) -> list[Task]:
    try:
        response = client.request("GET", f"{base_path}?{encode_query(query)}")
    except CFError as exc:
        raise CFError(f"Error requesting tasks: {exc}", status_code=exc.status_code) from exc
    if response.status_code != 200:
        response.close()
        raise CFError(
            f"Error requesting tasks: status code not 200, it was {response.status_code}",
            status_code=response.status_code,
        )
    data = _read_json(response, "tasks")
    if not isinstance(data, dict):
        raise CFError("Error reading tasks: expected a JSON object")
    return [Task.from_dict(item) for item in data.get("resources") or []]


def list_tasks(client: Client) -> list[Task]:
    """List all tasks the user has access to."""
    return _list_tasks(client, "/v3/tasks", None)


def list_tasks_by_query(client: Client, query: Any) -> list[Task]:
    """List the tasks the user has access to, filtered by query parameters."""
    return _list_tasks(client, "/v3/tasks", query)


def tasks_by_app(client: Client, guid: str) -> list[Task]:
    """List the tasks of the app with the given GUID."""
    return tasks_by_app_by_query(client, guid, None)


def tasks_by_app_by_query(client: Client, guid: str, query: Any) -> list[Task]:
    """List the tasks of an app, filtered by query parameters."""
    return _list_tasks(client, f"/v3/apps/{guid}/tasks", query)


def create_task(client: Client, request: TaskRequest) -> Task:
    """Create a task in the app named by the request's droplet_guid."""
    try:
        response = client.request(
            "POST", f"/v3/apps/{request.droplet_guid}/tasks", request.to_payload()
        )
    except CFError as exc:
        raise CFError(f"Error creating task: {exc}", status_code=exc.status_code) from exc
    return Task.from_dict(_read_json(response, "task"))


def get_task_by_guid(client: Client, guid: str) -> Task:
    try:
        response = client.request("GET", f"/v3/tasks/{guid}")
    except CFError as exc:
        raise CFError(f"Error requesting task: {exc}", status_code=exc.status_code) from exc
    return Task.from_dict(_read_json(response, "task"))


def terminate_task(client: Client, guid: str) -> None:
    """Cancel the task with the given GUID."""
    try:
        response = client.request("PUT", f"/v3/tasks/{guid}/cancel")
    except CFError as exc:
        raise CFError(f"Error terminating task: {exc}", status_code=exc.status_code) from exc
    status = response.status_code
    response.close()
    if status != 202:
        raise CFError(
            f"Failed terminating task, response status code {status}", status_code=status
        )