"""API tests for the health endpoint."""


def test_healthz(client) -> None:
    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_openapi_documents_error_envelope(client) -> None:
    response = client.get("/openapi.json")

    assert response.status_code == 200
    schema = response.json()
    assert "ErrorResponse" in schema["components"]["schemas"]
    assert "/api/v1/reports/{platform}/{report_id}" in schema["paths"]
