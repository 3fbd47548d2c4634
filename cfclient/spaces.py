"""Spaces of the v2 API and their isolation segments."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

import requests

from cfclient.core import CFError, Client, Meta, encode_query
from cfclient.space_quotas import SpaceQuota


@dataclass
class SpaceRequest:
    """Body of a request that creates or updates a space."""

    name: str = ""
    organization_guid: str = ""
    developer_guids: list[str] = field(default_factory=list)
    manager_guids: list[str] = field(default_factory=list)
    auditor_guids: list[str] = field(default_factory=list)
    domain_guids: list[str] = field(default_factory=list)
    security_group_guids: list[str] = field(default_factory=list)
    space_quota_definition_guid: str = ""
    isolation_segment_guid: str = ""
    allow_ssh: bool = False

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": self.name,
            "organization_guid": self.organization_guid,
        }
        optional = {
            "developer_guids": self.developer_guids,
            "manager_guids": self.manager_guids,
            "auditor_guids": self.auditor_guids,
            "domain_guids": self.domain_guids,
            "security_group_guids": self.security_group_guids,
            "space_quota_definition_guid": self.space_quota_definition_guid,
            "isolation_segment_guid": self.isolation_segment_guid,
        }
        payload.update({key: value for key, value in optional.items() if value})
        payload["allow_ssh"] = self.allow_ssh
        return payload


@dataclass
class SpaceRole:
    guid: str = ""
    admin: bool = False
    active: bool = False
    default_space_guid: str = ""
    username: str = ""
    space_roles: list[str] = field(default_factory=list)
    spaces_url: str = ""
    organizations_url: str = ""
    managed_organizations_url: str = ""
    billing_managed_organizations_url: str = ""
    audited_organizations_url: str = ""
    managed_spaces_url: str = ""
    audited_spaces_url: str = ""

    @classmethod
    def from_resource(cls, resource: dict[str, Any]) -> SpaceRole:
        meta = Meta.from_dict(resource.get("metadata"))
        entity = resource.get("entity") or {}

        def text(key: str) -> str:
            return entity.get(key) or ""

        return cls(
            guid=meta.guid,
            admin=bool(entity.get("admin")),
            active=bool(entity.get("active")),
            default_space_guid=text("default_space_guid"),
            username=text("username"),
            space_roles=list(entity.get("space_roles") or []),
            spaces_url=text("spaces_url"),
            organizations_url=text("organizations_url"),
            managed_organizations_url=text("managed_organizations_url"),
            billing_managed_organizations_url=text("billing_managed_organizations_url"),
            audited_organizations_url=text("audited_organizations_url"),
            managed_spaces_url=text("managed_spaces_url"),
            audited_spaces_url=text("audited_spaces_url"),
        )


@dataclass
class ServiceOfferingExtra:
    display_name: str = ""
    documentation_url: str = ""
    long_description: str = ""

    @classmethod
    def from_json(cls, raw: Any) -> ServiceOfferingExtra:
        """Decode the 'extra' field, which the API sends as a JSON-encoded string."""
        if raw is None:
            return cls()
        if not isinstance(raw, str):
            raise CFError(f"service offering extra must be a JSON string, got {raw!r}")
        try:
            data = json.loads(raw)
        except ValueError as exc:
            raise CFError(f"invalid service offering extra: {exc}") from exc
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise CFError("service offering extra must encode a JSON object")
        return cls(
            display_name=data.get("displayName") or "",
            documentation_url=data.get("documentationURL") or "",
            long_description=data.get("longDescription") or "",
        )


@dataclass
class ServiceOfferingEntity:
    label: str = ""
    description: str = ""
    provider: str = ""
    broker_guid: str = ""
    requires: list[str] = field(default_factory=list)
    service_plans: list[Any] = field(default_factory=list)
    extra: ServiceOfferingExtra = field(default_factory=ServiceOfferingExtra)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ServiceOfferingEntity:
        data = data or {}
        return cls(
            label=data.get("label") or "",
            description=data.get("description") or "",
            provider=data.get("provider") or "",
            broker_guid=data.get("service_broker_guid") or "",
            requires=list(data.get("requires") or []),
            service_plans=list(data.get("service_plans") or []),
            extra=ServiceOfferingExtra.from_json(data.get("extra")),
        )


@dataclass
class ServiceOfferingResource:
    metadata: Meta = field(default_factory=Meta)
    entity: ServiceOfferingEntity = field(default_factory=ServiceOfferingEntity)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ServiceOfferingResource:
        data = data or {}
        return cls(
            metadata=Meta.from_dict(data.get("metadata")),
            entity=ServiceOfferingEntity.from_dict(data.get("entity")),
        )


@dataclass
class ServiceOfferingResponse:
    count: int = 0
    pages: int = 0
    next_url: str = ""
    prev_url: str = ""
    resources: list[ServiceOfferingResource] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ServiceOfferingResponse:
        data = data or {}
        return cls(
            count=data.get("total_results") or 0,
            pages=data.get("total_pages") or 0,
            next_url=data.get("next_url") or "",
            prev_url=data.get("prev_url") or "",
            resources=[
                ServiceOfferingResource.from_dict(r) for r in data.get("resources") or []
            ],
        )


def _read_json(response: requests.Response) -> Any:
    with response:
        try:
            return response.json()
        except ValueError as exc:
            raise CFError(f"invalid JSON response: {exc}") from exc


def _expect_status(response: requests.Response, expected: int, message: str) -> None:
    if response.status_code != expected:
        response.close()
        raise CFError(message, status_code=response.status_code)


@dataclass
class Space:
    guid: str = ""
    created_at: str = ""
    updated_at: str = ""
    name: str = ""
    organization_guid: str = ""
    org_url: str = ""
    org_data: dict[str, Any] = field(default_factory=dict)
    quota_definition_guid: str = ""
    isolation_segment_guid: str = ""
    allow_ssh: bool = False
    client: Client | None = field(default=None, repr=False, compare=False)

    @classmethod
    def from_resource(cls, resource: dict[str, Any], client: Client | None = None) -> Space:
        meta = Meta.from_dict(resource.get("metadata"))
        entity = resource.get("entity") or {}
        return cls(
            guid=meta.guid,
            created_at=meta.created_at,
            updated_at=meta.updated_at,
            name=entity.get("name") or "",
            organization_guid=entity.get("organization_guid") or "",
            org_url=entity.get("organization_url") or "",
            org_data=dict(entity.get("organization") or {}),
            quota_definition_guid=entity.get("space_quota_definition_guid") or "",
            isolation_segment_guid=entity.get("isolation_segment_guid") or "",
            allow_ssh=bool(entity.get("allow_ssh")),
            client=client,
        )

    def _client(self) -> Client:
        if self.client is None:
            raise CFError("space is not bound to a client")
        return self.client

    def quota(self) -> SpaceQuota | None:
        """Return the space's quota definition, or None if it has none."""
        if not self.quota_definition_guid:
            return None
        try:
            data = self._client().get_json(
                f"/v2/space_quota_definitions/{self.quota_definition_guid}"
            )
        except CFError as exc:
            raise CFError(
                f"Error requesting space quota: {exc}", status_code=exc.status_code
            ) from exc
        return SpaceQuota.from_resource(data)

    def roles(self) -> list[SpaceRole]:
        """List the users with roles in this space and the roles they hold."""
        try:
            return [
                SpaceRole.from_resource(r)
                for r in self._client().iter_resources(f"/v2/spaces/{self.guid}/user_roles")
            ]
        except CFError as exc:
            raise CFError(
                f"Error requesting space roles: {exc}", status_code=exc.status_code
            ) from exc

    def get_service_offerings(self) -> ServiceOfferingResponse:
        try:
            data = self._client().get_json(f"/v2/spaces/{self.guid}/services")
        except CFError as exc:
            raise CFError(
                f"Error requesting service offerings: {exc}", status_code=exc.status_code
            ) from exc
        return ServiceOfferingResponse.from_dict(data)

    def update(self, request: SpaceRequest) -> Space:
        client = self._client()
        response = client.request("PUT", f"/v2/spaces/{self.guid}", request.to_dict())
        _expect_status(
            response, 201, f"CF API returned with status code {response.status_code}"
        )
        return Space.from_resource(_read_json(response), client)


def create_space(client: Client, request: SpaceRequest) -> Space:
    response = client.request("POST", "/v2/spaces", request.to_dict())
    _expect_status(response, 201, f"CF API returned with status code {response.status_code}")
    return Space.from_resource(_read_json(response), client)


def update_space(client: Client, space_guid: str, request: SpaceRequest) -> Space:
    return Space(guid=space_guid, client=client).update(request)


def delete_space(client: Client, guid: str, recursive: bool = False, async_: bool = False) -> None:
    query = f"recursive={str(recursive).lower()}&async={str(async_).lower()}"
    response = client.request("DELETE", f"/v2/spaces/{guid}?{query}")
    _expect_status(
        response,
        204,
        f"Error deleting space {guid}, response code: {response.status_code}",
    )
    response.close()


def fetch_spaces(client: Client, path: str) -> list[Space]:
    """List every space of a paged v2 listing."""
    try:
        return [Space.from_resource(r, client) for r in client.iter_resources(path)]
    except CFError as exc:
        raise CFError(f"Error requesting spaces: {exc}", status_code=exc.status_code) from exc


def list_spaces_by_query(client: Client, query: Any = None) -> list[Space]:
    return fetch_spaces(client, f"/v2/spaces?{encode_query(query)}")


def list_spaces(client: Client) -> list[Space]:
    return list_spaces_by_query(client, None)


def get_space_by_name(client: Client, space_name: str, org_guid: str) -> Space:
    query = {"q": [f"organization_guid:{org_guid}", f"name:{space_name}"]}
    spaces = list_spaces_by_query(client, query)
    if not spaces:
        raise CFError(
            f"No space found with name: `{space_name}` in org with GUID: `{org_guid}`"
        )
    return spaces[0]


def get_space_by_guid(client: Client, space_guid: str) -> Space:
    try:
        data = client.get_json(f"/v2/spaces/{space_guid}")
    except CFError as exc:
        raise CFError(
            f"Error requesting space info: {exc}", status_code=exc.status_code
        ) from exc
    return Space.from_resource(data, client)


def _update_space_isolation_segment(client: Client, space_guid: str, data: Any) -> None:
    response = client.request(
        "PATCH",
        f"/v3/spaces/{space_guid}/relationships/isolation_segment",
        {"data": data},
    )
    _expect_status(
        response,
        200,
        f"Error setting isolation segment for space {space_guid}, "
        f"response code: {response.status_code}",
    )
    response.close()


def set_space_isolation_segment(
    client: Client, space_guid: str, isolation_segment_guid: str
) -> None:
    _update_space_isolation_segment(client, space_guid, {"guid": isolation_segment_guid})


def reset_space_isolation_segment(client: Client, space_guid: str) -> None:
    _update_space_isolation_segment(client, space_guid, None)