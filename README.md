# cfclient

A small Python client for the Cloud Foundry Cloud Controller API. It covers
spaces and their members, space quotas, services, service plans, service
usage events, user-provided service instances, users, stacks and v3 tasks.

## Installation

```
pip install cfclient
```

To run the test suite:

```
pip install "cfclient[test]"
pytest
```

## Usage

Everything goes through a `cfclient.core.Client`, which holds the API
address, a bearer token and a `requests` session. The client is a context
manager that closes its session on exit.

```python
from cfclient.core import Client
from cfclient.spaces import SpaceRequest, create_space, get_space_by_name
from cfclient.stacks import list_stacks

with Client("https://api.example.com", "token") as client:
    for stack in list_stacks(client):
        print(stack.name, stack.description)

    space = get_space_by_name(client, "dev", "org-guid")
    quota = space.quota()          # None when the space has no quota definition
    for role in space.roles():
        print(role.username, role.space_roles)

    new_space = create_space(
        client, SpaceRequest(name="staging", organization_guid="org-guid")
    )
```

v2 listings follow `next_url` and return every page. Functions named
`..._by_query` take a query mapping such as `{"q": "name:dev"}`; values may be
strings or lists of strings, and keys are encoded in sorted order.

### Modules

- `cfclient.core`: `Client`, `CFError`, `Meta`, `Link`, `Pagination`, `encode_query`.
- `cfclient.stacks`: `list_stacks`, `list_stacks_by_query`.
- `cfclient.services`: `get_service_by_guid`, `list_services`, `list_services_by_query`.
- `cfclient.service_plans`: listing, `get_service_plan_by_guid`,
  `make_service_plan_public`, `make_service_plan_private`.
- `cfclient.service_usage_events`: `list_service_usage_events`,
  `list_service_usage_events_by_query`.
- `cfclient.space_quotas`: listing, `get_space_quota_by_name`,
  `create_space_quota`, `update_space_quota`, `assign_space_quota`.
- `cfclient.spaces`: `Space` (with `quota`, `roles`, `get_service_offerings`,
  `update`), `create_space`, `update_space`, `delete_space`, listing,
  `get_space_by_name`, `get_space_by_guid`, `set_space_isolation_segment`,
  `reset_space_isolation_segment`.
- `cfclient.space_members`: developers, managers and auditors of a space.
- `cfclient.users`: `get_user_by_guid`, `list_users`, `list_user_spaces`,
  `list_user_audited_spaces`, `list_user_managed_spaces`, `create_user`,
  `delete_user`, and `Users.get_user_by_username`.
- `cfclient.user_provided_service_instances`: list, get, create, update and delete.
- `cfclient.tasks`: v3 tasks.

### Space members

```python
from cfclient.space_members import (
    SpaceUserRole,
    associate_space_user_by_username,
    list_space_users,
    remove_space_user_by_username,
)

managers = list_space_users(client, space_guid, SpaceUserRole.MANAGERS)
associate_space_user_by_username(
    client, space_guid, SpaceUserRole.DEVELOPERS, "someone@example.com", "ldap"
)
remove_space_user_by_username(client, space_guid, SpaceUserRole.AUDITORS, "someone@example.com")
```

Removing by username with an origin sends a `POST` to `.../<role>/remove`;
without one it sends a `DELETE` to `.../<role>`.

### Tasks

```python
from cfclient.tasks import TaskRequest, create_task, list_tasks, terminate_task

task = create_task(
    client,
    TaskRequest(command="rake db:migrate", name="migrate", droplet_guid="app-guid"),
)
terminate_task(client, task.guid)
```

`TaskRequest.droplet_guid` names the app the task is created in. Task
timestamps are parsed into `datetime` objects.

## Errors

Every failure, whether a transport error, an unexpected status code, a
malformed response or an API error body, is raised as
`cfclient.core.CFError`. It carries `status_code`, and for API error bodies
also `code`, `error_code` and `description`; its message then reads
`cfclient error (<error_code>|<code>): <description>`.

## What this package does not do

- It does not log in or fetch tokens: the `Client` is given a bearer token.
- It has no calls for organizations, apps or security groups. A space's
  organization is kept only as its GUID, its URL and the raw `org_data` dict.
- It has no command-line tool.