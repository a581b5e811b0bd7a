"""Tests for the development server."""

import pytest

from styleforge.web.app import create_app


@pytest.fixture
def client(tmp_path, button_file):
    app = create_app(
        [str(button_file)], config={"TESTING": True, "STYLEFORGE_ROOT": str(tmp_path)}
    )
    return app.test_client()


@pytest.fixture
def broken_client(tmp_path, broken_file):
    app = create_app(
        [str(broken_file)], config={"TESTING": True, "STYLEFORGE_ROOT": str(tmp_path)}
    )
    return app.test_client()


class TestStylesheet:
    def test_serves_css(self, client):
        response = client.get("/styles.css")
        assert response.status_code == 200
        assert response.mimetype == "text/css"
        assert "padding: 8px;" in response.get_data(as_text=True)
        assert response.headers["Cache-Control"] == "no-store"

    def test_rebuilds_identically(self, client):
        assert client.get("/styles.css").data == client.get("/styles.css").data

    def test_style_error_is_json(self, broken_client):
        response = broken_client.get("/styles.css")
        assert response.status_code == 500
        data = response.get_json()
        assert data["kind"] == "ContractViolation"
        assert "missing b" in data["error"]


class TestExportsAPI:
    def test_exports(self, client):
        response = client.get("/api/exports")
        assert response.status_code == 200
        data = response.get_json()
        assert data["exports"]["button.css.py"]["button"].startswith("button__")
        assert data["rule_count"] == 7


class TestCalcAPI:
    def test_canonical(self, client):
        response = client.get("/api/calc", query_string={"expr": "1px + 2px * 3"})
        assert response.status_code == 200
        assert response.get_json()["calc"] == "calc(1px + (2px * 3))"

    def test_missing_expr(self, client):
        assert client.get("/api/calc").status_code == 400

    def test_invalid_expr(self, client):
        response = client.get("/api/calc", query_string={"expr": "10px / 2px"})
        assert response.status_code == 400
        assert "error" in response.get_json()


class TestSharedThemeServer:
    def test_second_request_rebuilds(self, tmp_path, theme_file, card_file):
        app = create_app(
            [str(card_file), str(theme_file)],
            config={"TESTING": True, "STYLEFORGE_ROOT": str(tmp_path)},
        )
        client = app.test_client()
        first = client.get("/styles.css")
        second = client.get("/styles.css")
        assert second.status_code == 200
        assert first.data == second.data
