"""
Tests for TaskApiClient, driven through the app's TestClient.
"""

import httpx
import pytest

from app.client import ApiConnectionError, ApiError, TaskApiClient
from tests.conftest import ALICE_EMAIL, TEST_PASSWORD


@pytest.fixture
def api(client):
    return TaskApiClient(http_client=client)


@pytest.mark.db
def test_register_stores_token_for_later_calls(api):
    data = api.register("Alice", ALICE_EMAIL, TEST_PASSWORD)
    assert api.token == data["token"]
    assert api.me()["email"] == ALICE_EMAIL


@pytest.mark.db
def test_task_lifecycle(api):
    api.register("Alice", ALICE_EMAIL, TEST_PASSWORD)

    task = api.create_task("Write client", priority=2, tags='["py"]')
    assert api.get_task(task["id"])["title"] == "Write client"

    updated = api.update_task(task["id"], title="Write client tests", status=1, priority=2)
    assert updated["status"] == 1

    assert api.delete_task(task["id"]) == "Task deleted successfully"
    assert api.list_tasks()["tasks"] == []
    assert len(api.list_tasks(include_deleted=True)["tasks"]) == 1

    assert api.restore_task(task["id"]) == "Task restored successfully"
    assert api.bulk_update([task["id"]], status=2) == "1 tasks updated successfully"
    assert api.list_tasks(status=2)["tasks"][0]["id"] == task["id"]


@pytest.mark.db
def test_login_after_logout(api):
    api.register("Alice", ALICE_EMAIL, TEST_PASSWORD)
    api.logout()
    assert api.token is None

    api.login(ALICE_EMAIL, TEST_PASSWORD)
    assert api.me()["name"] == "Alice"


@pytest.mark.db
def test_error_envelope_becomes_api_error(api):
    api.register("Alice", ALICE_EMAIL, TEST_PASSWORD)

    with pytest.raises(ApiError) as exc_info:
        api.get_task(999)
    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "Task not found"

    with pytest.raises(ApiError) as exc_info:
        api.create_task("")
    assert exc_info.value.status_code == 400
    assert exc_info.value.errors == [{"field": "Title", "message": "Title is required"}]


@pytest.mark.db
def test_missing_token_is_api_error(api):
    with pytest.raises(ApiError) as exc_info:
        api.list_tasks()
    assert exc_info.value.status_code == 401


@pytest.mark.unit
def test_transport_failure_becomes_connection_error():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    http = httpx.Client(base_url="http://tasks.invalid", transport=httpx.MockTransport(refuse))
    with TaskApiClient(http_client=http) as api:
        with pytest.raises(ApiConnectionError):
            api.list_tasks()


@pytest.mark.unit
def test_non_envelope_error_uses_reason_phrase():
    http = httpx.Client(
        base_url="http://tasks.invalid",
        transport=httpx.MockTransport(lambda request: httpx.Response(502, text="bad gateway")),
    )
    with TaskApiClient(http_client=http) as api:
        with pytest.raises(ApiError) as exc_info:
            api.get_task(1)
    assert exc_info.value.status_code == 502
    assert exc_info.value.message == "Bad Gateway"


@pytest.mark.unit
@pytest.mark.parametrize("status_code", [200, 500])
def test_non_object_json_body_is_api_error(status_code):
    http = httpx.Client(
        base_url="http://tasks.invalid",
        transport=httpx.MockTransport(lambda request: httpx.Response(status_code, json=[1, 2, 3])),
    )
    with TaskApiClient(http_client=http) as api:
        with pytest.raises(ApiError) as exc_info:
            api.list_tasks()
    assert exc_info.value.status_code == status_code


@pytest.mark.db
def test_get_deleted_task_with_include_deleted(api):
    api.register("Alice", ALICE_EMAIL, TEST_PASSWORD)
    task = api.create_task("Gone soon")
    api.delete_task(task["id"])

    with pytest.raises(ApiError):
        api.get_task(task["id"])
    assert api.get_task(task["id"], include_deleted=True)["deletedAt"] is not None
