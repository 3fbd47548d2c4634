import pytest
import responses
from responses import matchers

from cfclient.core import CFError, Client
from cfclient.space_quotas import (
    SpaceQuotaRequest,
    assign_space_quota,
    create_space_quota,
    get_space_quota_by_name,
    list_space_quotas,
    update_space_quota,
)

API = "http://api.example.com"

QUOTA_TEST_2 = {
    "metadata": {
        "guid": "9ffd7c5c-d83c-4786-b399-b7bd54883977",
        "url": "/v2/space_quota_definitions/9ffd7c5c-d83c-4786-b399-b7bd54883977",
        "created_at": "2017-01-18T16:43:58Z",
        "updated_at": None,
    },
    "entity": {
        "name": "test-2",
        "organization_guid": "06dcedd4-1f24-49a6-adc1-cce9131a1b2c",
        "non_basic_services_allowed": False,
        "total_services": 10,
        "total_routes": 20,
        "memory_limit": 30,
        "instance_memory_limit": 40,
        "app_instance_limit": 50,
        "app_task_limit": 60,
        "total_service_keys": 70,
        "total_reserved_route_ports": 80,
    },
}

PAGE_1 = {
    "total_results": 2,
    "total_pages": 2,
    "next_url": "/v2/space_quota_definitions_page_2",
    "resources": [
        {
            "metadata": {
                "guid": "889aa2ed-a883-4cc0-abe5-804b2503f15d",
                "created_at": "2017-01-18T16:40:51Z",
            },
            "entity": {
                "name": "test-1",
                "organization_guid": "06dcedd4-1f24-49a6-adc1-cce9131a1b2c",
                "non_basic_services_allowed": True,
                "total_services": -1,
                "total_routes": 100,
                "memory_limit": 102400,
                "instance_memory_limit": -1,
                "app_instance_limit": -1,
                "app_task_limit": -1,
                "total_service_keys": -1,
                "total_reserved_route_ports": -1,
            },
        }
    ],
}

PAGE_2 = {
    "total_results": 2,
    "total_pages": 2,
    "next_url": None,
    "resources": [QUOTA_TEST_2],
}


@pytest.fixture
def rsps():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mock:
        yield mock


@pytest.fixture
def client():
    with Client(API, token="token") as c:
        yield c


def test_list_space_quotas(rsps, client):
    rsps.add(responses.GET, f"{API}/v2/space_quota_definitions", json=PAGE_1)
    rsps.add(responses.GET, f"{API}/v2/space_quota_definitions_page_2", json=PAGE_2)

    quotas = list_space_quotas(client)

    assert len(quotas) == 2
    first = quotas[0]
    assert first.guid == "889aa2ed-a883-4cc0-abe5-804b2503f15d"
    assert first.name == "test-1"
    assert first.non_basic_services_allowed is True
    assert first.total_services == -1
    assert first.total_routes == 100
    assert first.memory_limit == 102400
    assert first.instance_memory_limit == -1
    assert first.app_instance_limit == -1
    assert first.app_task_limit == -1
    assert first.total_service_keys == -1
    assert first.total_reserved_route_ports == -1
    assert quotas[1].guid == "9ffd7c5c-d83c-4786-b399-b7bd54883977"


def test_get_space_quota_by_name(rsps, client):
    rsps.add(
        responses.GET,
        f"{API}/v2/space_quota_definitions",
        json=PAGE_2,
        match=[matchers.query_param_matcher({"q": "name:test-2"})],
    )

    quota = get_space_quota_by_name(client, "test-2")

    assert quota.guid == "9ffd7c5c-d83c-4786-b399-b7bd54883977"
    assert quota.name == "test-2"
    assert quota.non_basic_services_allowed is False
    assert quota.total_services == 10
    assert quota.total_routes == 20
    assert quota.memory_limit == 30
    assert quota.instance_memory_limit == 40
    assert quota.app_instance_limit == 50
    assert quota.app_task_limit == 60
    assert quota.total_service_keys == 70
    assert quota.total_reserved_route_ports == 80


def test_get_space_quota_by_name_not_found(rsps, client):
    rsps.add(
        responses.GET,
        f"{API}/v2/space_quota_definitions",
        json={"next_url": None, "resources": []},
    )

    with pytest.raises(CFError, match="Unable to find space quota missing"):
        get_space_quota_by_name(client, "missing")


def test_create_space_quota(rsps, client):
    request = SpaceQuotaRequest(
        name="test-2", organization_guid="06dcedd4-1f24-49a6-adc1-cce9131a1b2c"
    )
    rsps.add(
        responses.POST,
        f"{API}/v2/space_quota_definitions",
        json=QUOTA_TEST_2,
        status=201,
        match=[matchers.json_params_matcher(request.to_dict())],
    )

    quota = create_space_quota(client, request)

    assert quota.name == "test-2"
    assert quota.organization_guid == "06dcedd4-1f24-49a6-adc1-cce9131a1b2c"


def test_create_space_quota_unexpected_status(rsps, client):
    rsps.add(responses.POST, f"{API}/v2/space_quota_definitions", json=QUOTA_TEST_2, status=200)

    with pytest.raises(CFError, match="CF API returned with status code 200"):
        create_space_quota(client, SpaceQuotaRequest(name="test-2"))


def test_update_space_quota(rsps, client):
    rsps.add(
        responses.PUT,
        f"{API}/v2/space_quota_definitions/9ffd7c5c-d83c-4786-b399-b7bd54883977",
        json=QUOTA_TEST_2,
        status=201,
    )
    request = SpaceQuotaRequest(
        name="test-2", organization_guid="06dcedd4-1f24-49a6-adc1-cce9131a1b2c"
    )

    quota = update_space_quota(client, "9ffd7c5c-d83c-4786-b399-b7bd54883977", request)

    assert quota.name == "test-2"
    assert quota.organization_guid == "06dcedd4-1f24-49a6-adc1-cce9131a1b2c"


def test_assign_space_quota(rsps, client):
    url = (
        f"{API}/v2/space_quota_definitions/9ffd7c5c-d83c-4786-b399-b7bd54883977"
        "/spaces/8efd7c5c-d83c-4786-b399-b7bd548839e1"
    )
    rsps.add(responses.PUT, url, status=201)

    result = assign_space_quota(
        client, "9ffd7c5c-d83c-4786-b399-b7bd54883977", "8efd7c5c-d83c-4786-b399-b7bd548839e1"
    )

    assert result is None
    assert len(rsps.calls) == 1
    assert rsps.calls[0].request.method == "PUT"
    assert rsps.calls[0].request.url == url


def test_assign_space_quota_wrong_status(rsps, client):
    rsps.add(responses.PUT, f"{API}/v2/space_quota_definitions/q/spaces/s", status=200)

    with pytest.raises(CFError) as info:
        assign_space_quota(client, "q", "s")
    assert info.value.status_code == 200


def test_request_to_dict_has_all_fields():
    payload = SpaceQuotaRequest(name="n", memory_limit=512).to_dict()
    assert payload["name"] == "n"
    assert payload["memory_limit"] == 512
    assert payload["total_reserved_route_ports"] == 0
    assert len(payload) == 11