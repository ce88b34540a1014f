"""Tests for the conversion API."""

from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient

from server.main import app


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def test_convert_without_includes(client: TestClient, blog_document: dict[str, Any]) -> None:
    response = client.post("/api/convert", json={"document": blog_document})

    assert response.status_code == 200
    body = response.json()
    assert body["markdown"].startswith("# **Introduction")
    assert body["assets"] == [{"id": "hero-image", "url": None, "title": None, "contentType": None}]


def test_convert_resolves_assets(
    client: TestClient, blog_document: dict[str, Any], contentful_includes: dict[str, Any]
) -> None:
    response = client.post(
        "/api/convert", json={"document": blog_document, "includes": contentful_includes}
    )

    assert response.status_code == 200
    (asset,) = response.json()["assets"]
    assert asset == {
        "id": "hero-image",
        "url": "//images.ctfassets.net/space/hero.png",
        "title": "Hero image",
        "contentType": "image/png",
    }


def test_convert_rejects_non_document(client: TestClient) -> None:
    response = client.post("/api/convert", json={"document": {"content": []}})
    assert response.status_code == 422


def test_convert_requires_document(client: TestClient) -> None:
    response = client.post("/api/convert", json={})
    assert response.status_code == 422


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
