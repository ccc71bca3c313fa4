"""Integration tests for the REST API."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient

from calepinage.web.app import create_app

PLANS = Path(__file__).parent.parent / "fixtures" / "plans"


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app())


def _plan(name: str) -> dict[str, Any]:
    return json.loads((PLANS / name).read_text())


class TestHealth:
    """Tests for the health endpoint."""

    def test_health(self, client: TestClient) -> None:
        """The service reports healthy."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestLayoutEndpoint:
    """Tests for POST /api/v1/layout."""

    def test_rectangle(self, client: TestClient) -> None:
        """The layout response carries counts, tiles and edges."""
        response = client.post("/api/v1/layout", json={"plan": _plan("rectangle.json")})
        assert response.status_code == 200
        body = response.json()
        assert body["is_valid"]
        assert body["area"] == pytest.approx(12.0)
        assert body["corner"] == "top-left"
        assert body["counts"]["full"] == 20
        assert len(body["tiles"]) == 20
        assert len(body["edges"]) == 4

    @pytest.mark.parametrize("key", ["useOffcuts", "use_offcuts"])
    def test_offset_without_offcuts(self, client: TestClient, key: str) -> None:
        """Turning offcut reuse off counts every cut tile as bought."""
        plan = _plan("rectangle.json") | {"pattern": "offset"}
        response = client.post("/api/v1/layout", json={"plan": plan, key: False})
        assert response.status_code == 200
        counts = response.json()["counts"]
        assert counts["offcut_used"] == 0
        assert counts["total"] == 22
        assert counts["gain_percent"] == 0

    def test_offset_with_offcuts_by_default(self, client: TestClient) -> None:
        """Offcut reuse is on unless the request turns it off."""
        plan = _plan("rectangle.json") | {"pattern": "offset"}
        response = client.post("/api/v1/layout", json={"plan": plan})
        counts = response.json()["counts"]
        assert counts["offcut_used"] == 2
        assert counts["total"] == 20

    def test_unknown_option_rejected(self, client: TestClient) -> None:
        """Misspelled options fail instead of being ignored."""
        response = client.post(
            "/api/v1/layout",
            json={"plan": _plan("rectangle.json"), "useOffcut": False},
        )
        assert response.status_code == 422

    def test_outline_errors_in_body(self, client: TestClient) -> None:
        """Outline errors come back as an invalid result, not an error status."""
        response = client.post("/api/v1/layout", json={"plan": _plan("slanted.json")})
        assert response.status_code == 200
        body = response.json()
        assert not body["is_valid"]
        assert body["tiles"] == []

    def test_schema_error(self, client: TestClient) -> None:
        """Plans failing the schema are answered with 422."""
        response = client.post("/api/v1/layout", json={"plan": {"tileW": 0}})
        assert response.status_code == 422
        body = response.json()
        assert body["error_type"] == "validation"
        assert body["details"][0]["path"] == "tileW"


class TestExportEndpoint:
    """Tests for the layout export endpoints."""

    def test_formats(self, client: TestClient) -> None:
        """Registered formats are listed."""
        response = client.get("/api/v1/layout/formats")
        assert response.json() == {"formats": ["json", "svg", "text"]}

    def test_svg(self, client: TestClient) -> None:
        """SVG exports are served as image/svg+xml."""
        response = client.post(
            "/api/v1/layout/export/svg", json={"plan": _plan("l_shape.json")}
        )
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("image/svg+xml")
        assert response.text.startswith("<svg")

    def test_unsupported_format(self, client: TestClient) -> None:
        """Unknown formats are answered with 400."""
        response = client.post(
            "/api/v1/layout/export/dxf", json={"plan": _plan("rectangle.json")}
        )
        assert response.status_code == 400
        assert response.json()["error_type"] == "unsupported_format"

    def test_export_of_invalid_plan(self, client: TestClient) -> None:
        """Exports of plans with outline errors are answered with 422."""
        response = client.post(
            "/api/v1/layout/export/json", json={"plan": _plan("slanted.json")}
        )
        assert response.status_code == 422
        assert response.json()["error_type"] == "layout"


class TestAreaEndpoint:
    """Tests for POST /api/v1/area."""

    def test_closed_outline(self, client: TestClient) -> None:
        """The area of a closed outline is returned."""
        response = client.post("/api/v1/area", json={"plan": _plan("l_shape.json")})
        body = response.json()
        assert body["closed"]
        assert body["area"] == pytest.approx(8.0)
        assert len(body["edges"]) == 6

    def test_open_outline(self, client: TestClient) -> None:
        """An open outline has area 0 but its edges are measured."""
        response = client.post("/api/v1/area", json={"plan": _plan("open_outline.json")})
        body = response.json()
        assert not body["closed"]
        assert body["area"] == 0.0
        assert [e["meters"] for e in body["edges"]] == [4.0, 3.0]


class TestValidateEndpoint:
    """Tests for POST /api/v1/validate."""

    def test_warnings(self, client: TestClient) -> None:
        """Warnings are listed with their path."""
        response = client.post(
            "/api/v1/validate", json={"plan": _plan("no_start_point.json")}
        )
        body = response.json()
        assert body["is_valid"]
        assert body["warnings"][0]["path"] == "startPoint"

    def test_unknown_field(self, client: TestClient) -> None:
        """Schema errors are answered with 422."""
        response = client.post(
            "/api/v1/validate", json={"plan": _plan("unknown_field.json")}
        )
        assert response.status_code == 422


class TestEditorEndpoint:
    """Tests for POST /api/v1/editor/events."""

    def test_draw_and_close(self, client: TestClient) -> None:
        """Posted events build a closed outline from an empty state."""
        response = client.post(
            "/api/v1/editor/events",
            json={
                "scale": 100,
                "events": [
                    {"kind": "click", "x": 0, "y": 0},
                    {"kind": "click", "x": 403, "y": 8},
                    {"kind": "click", "x": 396, "y": 302},
                    {"kind": "finish"},
                ],
            },
        )
        assert response.status_code == 200
        body = response.json()
        assert body["state"]["phase"] == "closed"
        assert body["state"]["points"] == [0, 0, 400, 0, 400, 300, 0, 300, 0, 0]
        assert body["area"] == pytest.approx(12.0)
        assert body["start_corner"] is None

    def test_preview_length(self, client: TestClient) -> None:
        """A move while drawing reports the preview length."""
        response = client.post(
            "/api/v1/editor/events",
            json={
                "scale": 100,
                "state": {"points": [0, 0], "phase": "drawing"},
                "events": [{"kind": "move", "x": 237, "y": 11}],
            },
        )
        body = response.json()
        assert body["preview_length"] == 2.4
        assert body["state"]["hover"] == {"x": 237, "y": 0}

    def test_place_start_on_posted_state(self, client: TestClient) -> None:
        """The start corner is classified once placed."""
        response = client.post(
            "/api/v1/editor/events",
            json={
                "scale": 100,
                "state": {
                    "points": [0, 0, 400, 0, 400, 300, 0, 300, 0, 0],
                    "phase": "closed",
                },
                "events": [{"kind": "place_start"}, {"kind": "click", "x": 399, "y": 1}],
            },
        )
        body = response.json()
        assert body["state"]["startPoint"] == {"x": 400, "y": 0}
        assert body["start_corner"] == "top-right"

    def test_invalid_event(self, client: TestClient) -> None:
        """Pointer events without a position are rejected by request validation."""
        response = client.post(
            "/api/v1/editor/events", json={"events": [{"kind": "click"}]}
        )
        assert response.status_code == 422

    def test_dragged_corner_out_of_range(self, client: TestClient) -> None:
        """A state naming a missing corner is rejected."""
        response = client.post(
            "/api/v1/editor/events",
            json={
                "state": {"points": [0, 0], "phase": "drawing", "draggedCorner": 3},
                "events": [],
            },
        )
        assert response.status_code == 422

    def test_closing_duplicate_is_not_a_draggable_corner(
        self, client: TestClient
    ) -> None:
        """The closing duplicate cannot be dragged on its own."""
        response = client.post(
            "/api/v1/editor/events",
            json={
                "scale": 100,
                "state": {
                    "points": [0, 0, 400, 0, 400, 300, 0, 300, 0, 0],
                    "phase": "closed",
                    "draggedCorner": 4,
                },
                "events": [{"kind": "drag_move", "x": 10, "y": 50}],
            },
        )
        assert response.status_code == 422

    def test_drag_first_corner_keeps_outline_closed(self, client: TestClient) -> None:
        """Dragging the first corner moves the closing point with it."""
        response = client.post(
            "/api/v1/editor/events",
            json={
                "scale": 100,
                "state": {
                    "points": [0, 0, 400, 0, 400, 300, 0, 300, 0, 0],
                    "phase": "closed",
                    "draggedCorner": 0,
                },
                "events": [{"kind": "drag_move", "x": 3, "y": 50}],
            },
        )
        assert response.status_code == 200
        points = response.json()["state"]["points"]
        assert points[:2] == points[-2:]
        assert response.json()["state"]["phase"] == "closed"
