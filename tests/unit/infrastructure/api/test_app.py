"""Tests for the application factory."""

from fastapi.testclient import TestClient

from stockroom.core.config import Settings
from stockroom.infrastructure.api.app import create_app
from stockroom.infrastructure.persistence.repositories import InMemoryProductRepository


def make_settings(**overrides):
    values = {"environment": "testing", "log_format": "console"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def test_create_app_seeds_sample_products():
    app = create_app(settings=make_settings(seed_sample_products=True))

    assert app.state.product_repository.count() == 5


def test_create_app_without_seed():
    app = create_app(settings=make_settings(seed_sample_products=False))

    assert app.state.product_repository.count() == 0


def test_create_app_uses_given_repository():
    repository = InMemoryProductRepository([{"id": "x", "name": "Only"}])
    app = create_app(settings=make_settings(), repository=repository)

    assert app.state.product_repository is repository


def test_page_sizes_reach_query_engine():
    app = create_app(settings=make_settings(default_page_size=2, max_page_size=3))

    with TestClient(app) as client:
        default_page = client.get("/api/products").json()
        capped_page = client.get("/api/products", params={"limit": "50"}).json()

    assert default_page["pagination"]["limit"] == 2
    assert len(default_page["data"]) == 2
    assert capped_page["pagination"]["limit"] == 3


def test_custom_api_prefix():
    app = create_app(settings=make_settings(api_prefix="/v2"))

    with TestClient(app) as client:
        assert client.get("/v2/products").status_code == 200
        assert client.get("/v2/health").json()["status"] == "OK"
        assert client.get("/api/products").status_code == 404


def test_custom_api_key_header():
    app = create_app(settings=make_settings(api_key="k", api_key_header="X-Token"))

    with TestClient(app) as client:
        response = client.delete("/api/products/1", headers={"X-Token": "k"})
        rejected = client.delete("/api/products/2", headers={"x-api-key": "k"})

    assert response.status_code == 200
    assert rejected.status_code == 401
    assert rejected.json()["error"] == "API key is required"


def test_docs_disabled_outside_development():
    app = create_app(settings=make_settings(environment="production"))

    with TestClient(app) as client:
        assert client.get("/docs").status_code == 404
