"""Integration tests for the REST API."""

import pytest
from fastapi.testclient import TestClient

from cutplan.web import create_app


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app())


@pytest.fixture
def reference_body() -> dict:
    return {"pieces": [{"width": 47.9, "height": 10, "quantity": 10}]}


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestPack:
    """Tests for POST /api/v1/pack."""

    def test_pack_pieces(self, client: TestClient, reference_body: dict) -> None:
        response = client.post("/api/v1/pack", json=reference_body)
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "done"
        assert data["summary"]["total_sheets"] == 2
        assert [len(sheet["placements"]) for sheet in data["sheets"]] == [9, 1]
        assert data["errors"] == [] and data["warnings"] == []

    def test_pack_cut_list_text(self, client: TestClient, cut_list_text: str) -> None:
        response = client.post(
            "/api/v1/pack",
            json={"cut_list": cut_list_text, "config": {"kerf": 0.125}},
        )
        assert response.status_code == 200
        assert response.json()["summary"]["total_pieces"] == 12

    def test_config_overrides(self, client: TestClient, reference_body: dict) -> None:
        body = {**reference_body, "config": {"strip_mode": {"enabled": True}}}
        data = client.post("/api/v1/pack", json=body).json()
        assert [sheet["source"] for sheet in data["sheets"]] == ["strip", "strip"]

    def test_best_strategy(self, client: TestClient, reference_body: dict) -> None:
        data = client.post("/api/v1/pack", json={**reference_body, "best": True}).json()
        assert data["strategy"] == "longest_side"

    def test_oversized_reported(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/pack", json={"pieces": [{"width": 50, "height": 100}]}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["errors"] == ['50" x 100" (1 PCS) exceeds the 48" x 96" sheet']
        assert data["sheets"] == []

    def test_sheet_limit_reported(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/pack",
            json={
                "pieces": [{"width": 48, "height": 96, "quantity": 3}],
                "config": {"max_sheets": 1},
            },
        )
        data = response.json()
        assert data["status"] == "aborted_limit"
        assert data["unplaced"] == [
            {"request_index": 0, "width": 48.0, "height": 96.0, "quantity": 2}
        ]


class TestPackErrors:
    """Tests for rejected pack requests."""

    def test_requires_one_source(self, client: TestClient) -> None:
        assert client.post("/api/v1/pack", json={}).status_code == 422
        both = {"pieces": [], "cut_list": "10 x 10 = 1PCS"}
        assert client.post("/api/v1/pack", json=both).status_code == 422

    def test_negative_dimension(self, client: TestClient) -> None:
        body = {"pieces": [{"width": -1, "height": 10}]}
        assert client.post("/api/v1/pack", json=body).status_code == 422

    @pytest.mark.parametrize("value", ["Infinity", "-Infinity", "NaN"])
    def test_non_finite_dimension(self, client: TestClient, value: str) -> None:
        body = f'{{"pieces": [{{"width": {value}, "height": 10, "quantity": 1}}]}}'
        response = client.post(
            "/api/v1/pack",
            content=body,
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 422

    def test_quantity_limit(self, client: TestClient) -> None:
        body = {"pieces": [{"width": 10, "height": 10, "quantity": 10**9}]}
        assert client.post("/api/v1/pack", json=body).status_code == 422

    def test_huge_cut_list_dimension(self, client: TestClient) -> None:
        line = "1" + "0" * 400 + " x 10 = 1PCS"
        response = client.post("/api/v1/pack", json={"cut_list": line})
        assert response.status_code == 422
        assert response.json()["error_type"] == "parse"

    def test_parse_error(self, client: TestClient) -> None:
        response = client.post("/api/v1/pack", json={"cut_list": "10 x 10 1PCS"})
        assert response.status_code == 422
        data = response.json()
        assert data["error_type"] == "parse"
        assert data["details"] == [{"line_number": 1, "line": "10 x 10 1PCS"}]

    def test_config_error(self, client: TestClient, reference_body: dict) -> None:
        body = {**reference_body, "config": {"kerf": -2}}
        response = client.post("/api/v1/pack", json=body)
        assert response.status_code == 422
        data = response.json()
        assert data["error_type"] == "config"
        assert data["details"][0]["path"] == "kerf"

    def test_unknown_strategy(self, client: TestClient, reference_body: dict) -> None:
        body = {**reference_body, "strategy": "random"}
        response = client.post("/api/v1/pack", json=body)
        assert response.status_code == 400
        assert response.json()["error_type"] == "unknown_strategy"


class TestPackExports:
    """Tests for the SVG and export endpoints."""

    def test_svg(self, client: TestClient, reference_body: dict) -> None:
        response = client.post("/api/v1/pack/svg", json=reference_body)
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("image/svg+xml")
        assert response.text.startswith("<svg")

    def test_formats(self, client: TestClient) -> None:
        response = client.get("/api/v1/pack/formats")
        assert response.json() == {"formats": ["dxf", "html", "json", "svg"]}

    def test_export_dxf(self, client: TestClient, reference_body: dict) -> None:
        response = client.post("/api/v1/pack/export/dxf", json=reference_body)
        assert response.status_code == 200
        assert "cutplan.dxf" in response.headers["content-disposition"]
        assert "LWPOLYLINE" in response.text

    def test_export_unknown_format(
        self, client: TestClient, reference_body: dict
    ) -> None:
        response = client.post("/api/v1/pack/export/pdf", json=reference_body)
        assert response.status_code == 400
        data = response.json()
        assert data["error_type"] == "unsupported_format"
        assert data["details"]["available"] == ["dxf", "html", "json", "svg"]
