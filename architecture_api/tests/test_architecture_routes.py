"""
Architecture HTTP API tests (engine wired to the demo catalog / in-memory snapshots)
"""

import pytest
from fastapi.testclient import TestClient

from context_discovery.context_map import ContextMapService
from context_discovery.snapshot import EntitySnapshot, InMemorySnapshotAccessor

from architecture_api.features.architecture.context_map_provider import get_context_map_service
from architecture_api.features.catalog.demo_catalog import demo_snapshot_accessor
from architecture_api.main import app


class UnavailableAccessor:
    def load_snapshot(self) -> EntitySnapshot:
        raise ConnectionError("neo4j unavailable")


def _use_accessor(accessor):
    app.dependency_overrides[get_context_map_service] = lambda: ContextMapService(accessor)


@pytest.fixture
def client():
    """TestClient without lifespan (no Neo4j driver is created)"""
    _use_accessor(demo_snapshot_accessor())
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_context_map(client):
    response = client.get("/api/architecture/context-map")

    assert response.status_code == 200
    body = response.json()
    assert [c["id"] for c in body["contexts"]] == [
        "payment-core",
        "account-management",
        "customer-management",
        "loan-origination",
        "transaction-processing",
    ]
    assert body["metadata"]["version"] == "1.0"
    assert body["metadata"]["totalContexts"] == 5
    assert body["metadata"]["totalRelationships"] == 8
    assert [r["id"] for r in body["relationships"]] == [f"rel-{i}" for i in range(1, 9)]
    assert all(r["upstreamContextId"] != r["downstreamContextId"] for r in body["relationships"])
    assert response.headers.get("X-Request-Id")


def test_context_map_classification(client):
    relationships = client.get("/api/architecture/context-map").json()["relationships"]
    by_pair = {(r["upstreamContextId"], r["downstreamContextId"], r["viaApis"][0]): r for r in relationships}

    # account-management and customer-management share the banking-core domain
    assert by_pair[("customer-management", "account-management", "customer-api")]["relationshipType"] == "SHARED_KERNEL"
    assert by_pair[("customer-management", "loan-origination", "kyc-verification-api")]["relationshipType"] == "OPEN_HOST_SERVICE"
    assert by_pair[("account-management", "payment-core", "account-api")]["relationshipType"] == "OPEN_HOST_SERVICE"


def test_list_contexts(client):
    response = client.get("/api/architecture/contexts")

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 5
    payment = body["contexts"][0]
    assert payment == {
        "id": "payment-core",
        "name": "Payment Core",
        "domain": "payments",
        "ownerTeam": "payments-squad",
        "sourceUrl": "https://github.com/mybank/payment-gateway",
        "componentCount": 2,
        "providedApiCount": 2,
        "consumedApiCount": 3,
    }


def test_context_analysis(client):
    response = client.get("/api/architecture/contexts/account-management")

    assert response.status_code == 200
    body = response.json()
    assert body["context"]["id"] == "account-management"
    assert {r["upstreamContextId"] for r in body["upstream"]} == {"customer-management", "transaction-processing"}
    assert {r["downstreamContextId"] for r in body["downstream"]} == {"payment-core", "loan-origination"}
    assert body["metrics"] == {"apiCount": 4, "dependencyCount": 5}


def test_context_dependencies(client):
    response = client.get("/api/architecture/contexts/payment-core/dependencies")

    assert response.status_code == 200
    body = response.json()
    assert body["contextId"] == "payment-core"
    assert body["upstreamCount"] == 3
    assert body["downstreamCount"] == 0
    assert body["downstream"] == []


def test_unknown_context_is_404(client):
    assert client.get("/api/architecture/contexts/ghost").status_code == 404
    response = client.get("/api/architecture/contexts/ghost/dependencies")
    assert response.status_code == 404
    assert response.json()["detail"] == "Context ghost not found"


def test_aggregated_relationships(client):
    body = client.get("/api/architecture/relationships/aggregated").json()

    assert body["total"] == 6
    first = body["edges"][0]
    assert first["upstreamContextId"] == "account-management"
    assert first["downstreamContextId"] == "payment-core"
    assert first["count"] == 2
    assert first["viaApis"] == ["account-api", "balance-inquiry-api"]


def test_empty_catalog_is_not_an_error():
    _use_accessor(InMemorySnapshotAccessor([]))
    try:
        client = TestClient(app)
        body = client.get("/api/architecture/context-map").json()
        assert body["contexts"] == [] and body["relationships"] == []
        assert client.get("/api/architecture/contexts").json() == {"contexts": [], "total": 0}
    finally:
        app.dependency_overrides.clear()


def test_snapshot_failure_is_500():
    _use_accessor(UnavailableAccessor())
    try:
        client = TestClient(app)
        response = client.get("/api/architecture/context-map")
        assert response.status_code == 500
        assert "neo4j unavailable" in response.json()["detail"]
        assert client.get("/api/architecture/contexts/payment-core").status_code == 500
    finally:
        app.dependency_overrides.clear()


def test_health_with_demo_catalog(monkeypatch):
    monkeypatch.setenv("ARCHITECTURE_USE_MOCK_DATA", "true")

    response = TestClient(app).get("/api/architecture/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "message": "Architecture API is running",
        "snapshotSource": "demo",
    }
