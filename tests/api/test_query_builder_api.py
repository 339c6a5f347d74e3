"""API tests for the custom report types query builder endpoints."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from app.main import app
from app.modules.query_builder.api import get_query_engine
from app.modules.query_builder.exceptions import QueryError
from app.modules.query_builder.execution_registry import (
    QueryExecutionRegistry,
    get_query_execution_registry,
)
from app.modules.query_builder.repository import CustomReportTypesRepository
from tests.helpers import (
    CUSTOM_REPORT_TYPE_ID,
    FILTER_MAP_F1,
    PLATFORM,
    make_custom_report_type_info,
    seed_query_builder_report,
)

BASE_URL = "/api/v1/custom-report-types"
RUNNABLE_F1 = "select (core_user.userid is not null or core_user.userid is null) from core_user"
TYPE_URL = f"{BASE_URL}/{PLATFORM}/{CUSTOM_REPORT_TYPE_ID}"
HEADERS = {"X-User-Id": "42"}


@pytest.fixture
def query_engine(client):
    """Replace the query engine with a mock for the duration of a test."""
    engine = MagicMock()
    engine.execute.return_value = [{"idst": 12301}, {"idst": 12302}]
    app.dependency_overrides[get_query_engine] = lambda: engine
    yield engine
    app.dependency_overrides.pop(get_query_engine, None)


def test_runnable_query(client) -> None:
    response = client.post(
        f"{BASE_URL}/runnable-query",
        json={"sql": "select {f1} from core_user;", "json": FILTER_MAP_F1},
    )

    assert response.status_code == 200
    assert response.json()["data"] == {"sql": RUNNABLE_F1}
    assert response.json()["error"] is None


def test_runnable_query_filter_mismatch(client) -> None:
    response = client.post(
        f"{BASE_URL}/runnable-query",
        json={"sql": "select {f1}, {f2} from core_user", "json": FILTER_MAP_F1},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["data"] is None
    assert body["error"]["code"] == "QUERY_BUILDER_FILTER_NOT_FOUND_IN_JSON"
    assert body["error"]["message"] == "Filter f2 not found in json area"
    assert body["error"]["details"] == {"error_code": 18, "area": "json"}


def test_runnable_query_forbidden_statement(client) -> None:
    response = client.post(f"{BASE_URL}/runnable-query", json={"sql": "drop table core_user"})

    assert response.status_code == 400
    assert response.json()["error"]["details"] == {"error_code": 24, "area": "sql"}


def test_runnable_query_requires_sql(client) -> None:
    response = client.post(f"{BASE_URL}/runnable-query", json={"json": FILTER_MAP_F1})

    assert response.status_code == 422
    body = response.json()
    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert "sql" in body["error"]["details"]


def test_validate(client, query_engine) -> None:
    response = client.post(
        f"{BASE_URL}/validate",
        json={"sql": "select {f1} from core_user", "json": FILTER_MAP_F1},
    )

    assert response.status_code == 200
    assert response.json()["data"] == {"valid": True}
    query_engine.execute.assert_called_once_with(f"select * from ({RUNNABLE_F1}) limit 1")


def test_validate_engine_error(client, query_engine) -> None:
    query_engine.execute.side_effect = QueryError("TABLE_NOT_FOUND: core_usr")

    response = client.post(f"{BASE_URL}/validate", json={"sql": "select idst from core_usr"})

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "QUERY_BUILDER_WRONG_SQL"
    assert error["message"] == "TABLE_NOT_FOUND: core_usr"
    assert error["details"] == {"error_code": 24, "area": "sql"}


def test_preview(client, query_engine) -> None:
    response = client.post(f"{BASE_URL}/preview", json={"sql": "select idst from core_user"})

    assert response.status_code == 200
    assert response.json()["data"] == {"rows": [{"idst": 12301}, {"idst": 12302}], "count": 2}
    assert query_engine.execute.call_args[0][0].endswith("limit 1000")


@pytest.fixture
def registry(client):
    """Replace the query execution registry with a mock for the duration of a test."""
    registry = MagicMock(spec=QueryExecutionRegistry)
    registry.save = AsyncMock()
    registry.is_valid = AsyncMock(return_value=True)
    registry.load_rows = AsyncMock(return_value=[{"idst": 12301}])
    app.dependency_overrides[get_query_execution_registry] = lambda: registry
    yield registry
    app.dependency_overrides.pop(get_query_execution_registry, None)


@pytest.fixture
def custom_report_type(db_session):
    info = make_custom_report_type_info()
    CustomReportTypesRepository(db_session).save(PLATFORM, CUSTOM_REPORT_TYPE_ID, info)
    return info


def test_update_custom_report_type(client, registry, custom_report_type, event_publisher) -> None:
    response = client.put(TYPE_URL, json={"name": "Branch users"}, headers=HEADERS)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["name"] == "Branch users"
    assert data["lastEditBy"] == 42
    event_publisher.publish.assert_awaited_once()


def test_update_missing_custom_report_type(client, registry) -> None:
    response = client.put(TYPE_URL, json={"name": "Branch users"}, headers=HEADERS)

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "CUSTOM_REPORT_TYPE_NOT_FOUND"


def test_update_requires_user_header(client, registry, custom_report_type) -> None:
    response = client.put(TYPE_URL, json={"name": "Branch users"})

    assert response.status_code == 422


def test_deactivation_with_related_reports(client, db_session, registry, query_engine) -> None:
    CustomReportTypesRepository(db_session).save(
        PLATFORM, CUSTOM_REPORT_TYPE_ID, make_custom_report_type_info(status=1)
    )
    seed_query_builder_report(db_session, "11111111-1111-4111-8111-111111111111", "Branch users")

    response = client.put(TYPE_URL, json={"status": 0}, headers=HEADERS)

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "QUERY_BUILDER_RELATED_REPORT"
    assert error["details"] == {"error_code": 15, "area": "sql", "related_reports": ["Branch users"]}


def test_activation_rejected_by_engine(client, registry, custom_report_type, query_engine) -> None:
    query_engine.execute.side_effect = QueryError("TABLE_NOT_FOUND: core_user")

    response = client.put(TYPE_URL, json={"status": 1}, headers=HEADERS)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "QUERY_BUILDER_WRONG_SQL"


def test_launch_preview(client, registry, custom_report_type, query_engine) -> None:
    response = client.post(f"{TYPE_URL}/preview", json={"sql": "select idst from core_user"})

    assert response.status_code == 200
    query_execution_id = response.json()["data"]["query_execution_id"]
    registry.save.assert_awaited_once_with(
        CUSTOM_REPORT_TYPE_ID, query_execution_id, [{"idst": 12301}, {"idst": 12302}]
    )


def test_launch_preview_for_missing_type(client, registry, query_engine) -> None:
    response = client.post(f"{TYPE_URL}/preview", json={"sql": "select idst from core_user"})

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "CUSTOM_REPORT_TYPE_NOT_FOUND"


def test_preview_results(client, registry, custom_report_type) -> None:
    response = client.get(f"{TYPE_URL}/results/exec-9")

    assert response.status_code == 200
    assert response.json()["data"] == {"rows": [{"idst": 12301}], "count": 1}
    registry.is_valid.assert_awaited_once_with(CUSTOM_REPORT_TYPE_ID, "exec-9")


def test_preview_results_of_unknown_execution(client, registry, custom_report_type) -> None:
    registry.is_valid.return_value = False

    response = client.get(f"{TYPE_URL}/results/exec-other")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "QUERY_EXECUTION_NOT_FOUND"
