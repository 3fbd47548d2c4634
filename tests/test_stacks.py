import pytest
import responses

from cfclient.core import CFError, Client
from cfclient.stacks import Stack, list_stacks, list_stacks_by_query

API = "http://api.example.com"

PAGE1 = {
    "total_results": 2,
    "total_pages": 2,
    "next_url": "/v2/stacks_page_2",
    "resources": [
        {
            "metadata": {
                "guid": "67e019a3-322a-407a-96e0-178e95bd0e55",
                "url": "/v2/stacks/67e019a3-322a-407a-96e0-178e95bd0e55",
                "created_at": "2016-06-08T16:41:11Z",
                "updated_at": "2016-06-08T16:41:11Z",
            },
            "entity": {"name": "cflinuxfs2", "description": "Cloud Foundry Linux-based filesystem"},
        }
    ],
}

PAGE2 = {
    "total_results": 2,
    "total_pages": 2,
    "next_url": None,
    "resources": [
        {
            "metadata": {
                "guid": "a9be2e10-0164-401d-94e0-88455d614844",
                "url": "/v2/stacks/a9be2e10-0164-401d-94e0-88455d614844",
                "created_at": "2016-06-08T16:41:11Z",
                "updated_at": None,
            },
            "entity": {"name": "windows2012R2", "description": "Experimental Windows runtime"},
        }
    ],
}


@pytest.fixture
def mocked():
    with responses.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def client():
    return Client(API, "token")


def test_list_stacks(mocked, client):
    mocked.add(responses.GET, f"{API}/v2/stacks", json=PAGE1)
    mocked.add(responses.GET, f"{API}/v2/stacks_page_2", json=PAGE2)
    stacks = list_stacks(client)
    assert len(stacks) == 2
    assert stacks[0].guid == "67e019a3-322a-407a-96e0-178e95bd0e55"
    assert stacks[0].name == "cflinuxfs2"
    assert stacks[0].description == "Cloud Foundry Linux-based filesystem"
    assert stacks[1].updated_at == ""


def test_list_stacks_by_query_sends_query(mocked, client):
    mocked.add(responses.GET, f"{API}/v2/stacks", json={**PAGE1, "next_url": None})
    stacks = list_stacks_by_query(client, {"q": "name:cflinuxfs2"})
    assert [s.name for s in stacks] == ["cflinuxfs2"]
    assert "q=name%3Acflinuxfs2" in mocked.calls[0].request.url


def test_stack_from_resource_uses_metadata():
    stack = Stack.from_resource(PAGE1["resources"][0])
    assert stack.created_at == "2016-06-08T16:41:11Z"
    assert stack.guid == PAGE1["resources"][0]["metadata"]["guid"]


def test_list_stacks_error(mocked, client):
    mocked.add(responses.GET, f"{API}/v2/stacks", status=500, body="down")
    with pytest.raises(CFError) as info:
        list_stacks(client)
    assert str(info.value).startswith("Error requesting stacks")