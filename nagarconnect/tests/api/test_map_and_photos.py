from fastapi.testclient import TestClient

from nagarconnect.main import create_app
from nagarconnect.tests.helpers import auth_header, signup


def test_map_without_token_degrades_but_keeps_markers(client):
    headers = auth_header(signup(client)["access_token"])
    client.post(
        "/issues",
        json={"title": "Water logging", "category": "water", "latitude": 28.6, "longitude": 77.2},
        headers=headers,
    )

    view = client.get("/issues/map", params={"lang": "hi"}).json()

    assert view["configured"] is False
    assert view["token"] is None
    assert "MAPBOX_PUBLIC_TOKEN" in view["error"]
    assert view["center"] == [77.2090, 28.6139]
    assert view["zoom"] == 11
    assert len(view["markers"]) == 1
    assert view["markers"][0]["category_label"] == "पानी"


def test_map_with_token(settings, email_provider):
    settings = settings.model_copy(update={"mapbox_public_token": "pk.test"})

    with TestClient(create_app(settings, email_provider=email_provider)) as client:
        view = client.get("/issues/map").json()

    assert view["configured"] is True
    assert view["token"] == "pk.test"
    assert view["error"] is None
    assert view["markers"] == []


def test_photo_upload_is_served_back(client):
    headers = auth_header(signup(client)["access_token"])

    response = client.post(
        "/issues/photos",
        files={"file": ("pothole.png", b"\x89PNG fake image bytes", "image/png")},
        headers=headers,
    )

    assert response.status_code == 201
    uploaded = response.json()
    assert uploaded["path"].startswith("issue-photos/")
    assert uploaded["path"].endswith(".png")
    assert uploaded["url"] == f"http://testserver/storage/{uploaded['path']}"

    served = client.get(f"/storage/{uploaded['path']}")
    assert served.status_code == 200
    assert served.content == b"\x89PNG fake image bytes"


def test_photo_upload_rejects_non_images(client):
    headers = auth_header(signup(client)["access_token"])

    response = client.post(
        "/issues/photos",
        files={"file": ("notes.txt", b"hello", "text/plain")},
        headers=headers,
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Please upload an image file."
