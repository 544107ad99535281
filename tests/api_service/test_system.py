from microdiary import VERSION
from microdiary.api_service.core.settings import settings


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"

def test_categories(client):
    response = client.get("/api/v1/system/categories")
    assert response.status_code == 200
    values = [c["value"] for c in response.json()]
    assert "work" in values
    assert "sleep" in values

def test_system_info(client):
    data = client.get("/api/v1/system/info").json()
    assert data["day_window"] == {"start": "06:00", "end": "23:59"}
    assert data["min_gap_minutes"] == 15

def test_app_version_comes_from_package(client):
    assert settings.APP_VERSION == VERSION
    data = client.get("/api/v1/system/info").json()
    assert data["app_version"] == VERSION
