import pytest
from fastapi.testclient import TestClient

from kql_spl_translator.api.server import create_app
from kql_spl_translator.doc_refresher import DocRefresher
from kql_spl_translator.translator.engine import QueryTranslator


@pytest.fixture
def client(translator, tmp_path):
    app = create_app(translator=translator, refresher=DocRefresher(tmp_path / "state.json"))
    return TestClient(app)


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_translate(client):
    response = client.post("/api/translate", json={
        "query": "index=main | stats count by host",
        "from": "spl",
        "to": "kql",
    })
    assert response.status_code == 200
    data = response.json()
    assert data["translated_query"] == "main\n| summarize count by host"
    assert data["confidence"] == 100
    assert data["validation"]["output"]["valid"] is True


def test_translate_unsupported_pair(client):
    response = client.post("/api/translate", json={"query": "x", "from": "spl", "to": "sql"})
    assert response.status_code == 400
    assert "Unsupported translation" in response.json()["detail"]


def test_translate_requires_query(client):
    response = client.post("/api/translate", json={"from": "spl", "to": "kql"})
    assert response.status_code == 422


def test_direction_routes(client):
    response = client.post("/api/translate/kql-to-spl", json={"query": "SecurityEvent | take 5"})
    assert response.json()["translated_query"] == 'index=windows sourcetype="WinEventLog:Security" | head 5'

    response = client.post("/api/translate/spl-to-kql", json={"query": "index=main | head 5"})
    assert response.json()["translated_query"] == "main\n| take 5"


def test_explain(client):
    response = client.post("/api/explain", json={"query": "T | take 1", "language": "kql"})
    assert response.status_code == 200
    assert response.json()["explanation"].startswith("This KQL query:")

    response = client.post("/api/explain", json={"query": "T", "language": "sql"})
    assert response.status_code == 400


def test_table_mapping(client):
    response = client.get("/api/table-mapping")
    assert response.status_code == 200
    version = response.json()["version"]
    assert "SecurityEvent" in response.json()["mapping"]

    response = client.post("/api/table-mapping", json={
        "mapping": {"Custom_CL": {"index": "custom", "sourcetype": "custom:json"}},
    })
    assert response.status_code == 200
    assert response.json()["version"] == version + 1
    assert response.json()["mapping"]["Custom_CL"]["index"] == "custom"

    response = client.post("/api/translate/kql-to-spl", json={"query": "Custom_CL | take 1"})
    assert response.json()["translated_query"].startswith("index=custom")


def test_discovery(client):
    response = client.post("/api/discovery", json={"kql_table": "SigninLogs"})
    assert set(response.json()["queries"]) == {"find_SigninLogs", "sample_SigninLogs"}

    response = client.post("/api/discovery", json={})
    assert "all_indexes" in response.json()["queries"]


def test_refresh(client):
    assert client.get("/api/refresh/status").json()["kql_needs_refresh"] is True
    assert client.post("/api/refresh").status_code == 200
    assert client.get("/api/refresh/status").json()["kql_needs_refresh"] is False


def test_reference_failure_is_500(tmp_path):
    translator = QueryTranslator(reference_dir=tmp_path / "missing")
    client = TestClient(create_app(translator=translator))
    response = client.post("/api/translate/spl-to-kql", json={"query": "index=main"})
    assert response.status_code == 500


def test_unreadable_reference_is_500(tmp_path):
    (tmp_path / "splunk_reference.json").write_bytes(b'{"spl_commands": {"\xff": {}}}')
    (tmp_path / "kql_reference.json").write_text('{"kql_operators": {}}')
    client = TestClient(create_app(translator=QueryTranslator(reference_dir=tmp_path)))

    response = client.post("/api/translate/spl-to-kql", json={"query": "index=main"})
    assert response.status_code == 500


def test_numeric_values_from_mapping_file_serialise(tmp_path, vocabulary):
    mapping = {"Custom_CL": {"index": 2024, "sourcetype": 7, "note": 2024}}
    translator = QueryTranslator(table_mapping=mapping, vocabulary=vocabulary)
    client = TestClient(create_app(translator=translator, refresher=DocRefresher(tmp_path / "state.json")))

    response = client.get("/api/table-mapping")
    assert response.status_code == 200
    assert response.json()["mapping"]["Custom_CL"] == {"index": "2024", "sourcetype": "7", "note": "2024"}
