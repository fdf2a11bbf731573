"""
Tests for health and metadata endpoints.
"""
from closet import __version__


def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": "connected"}


def test_health_check_head(client):
    assert client.head("/health").status_code == 200


def test_root_and_version(client):
    assert client.get("/").json()["version"] == __version__
    assert client.get("/admin/version").json()["env"] == "test"


def test_unknown_route_uses_error_shape(client):
    response = client.get("/does-not-exist")
    assert response.status_code == 404
    assert response.json()["success"] is False


def test_wrong_method_uses_error_shape(client):
    response = client.put("/health")
    assert response.status_code == 405
    assert response.json()["error_code"] == "METHOD_NOT_ALLOWED"
