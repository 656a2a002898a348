from __future__ import annotations

from fastapi.testclient import TestClient

from task_tracker.app.ui import render_homepage


def test_home_page_serves_html(client: TestClient) -> None:
    response = client.get("/")
    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert "Task Manager" in response.text
    assert "task-tracker-test" in response.text
    assert 'const API_BASE = "/api";' in response.text


def test_render_homepage_uses_configured_api_base() -> None:
    page = render_homepage(app_name="<demo>", api_base="http://localhost:3001/api/")
    assert 'const API_BASE = "http://localhost:3001/api";' in page
    assert "&lt;demo&gt;" in page
    assert "<demo>" not in page


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "task-tracker-test"}


def test_cors_headers_present(client: TestClient) -> None:
    response = client.get("/api/statuses", headers={"Origin": "http://localhost:5173"})
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
