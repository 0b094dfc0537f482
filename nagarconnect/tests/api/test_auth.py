from nagarconnect.tests.helpers import ADMIN_EMAIL, PASSWORD, auth_header, signup


def test_signup_and_login(client):
    created = signup(client, "Citizen@Example.com", full_name="Ravi Kumar", phone="+91 98765 43210")
    assert created["is_admin"] is False

    response = client.post("/auth/login", json={"email": "citizen@example.com", "password": PASSWORD})
    assert response.status_code == 200
    token = response.json()["access_token"]

    me = client.get("/auth/me", headers=auth_header(token)).json()
    assert me["email"] == "citizen@example.com"
    assert me["phone"] == "+919876543210"
    assert me["language"] == "en"


def test_admin_emails_are_granted_admin(client):
    assert signup(client, ADMIN_EMAIL)["is_admin"] is True


def test_duplicate_signup_conflicts(client):
    signup(client)

    response = client.post("/auth/signup", json={"email": "citizen@example.com", "password": PASSWORD})

    assert response.status_code == 409
    assert response.json()["error"] == "conflict"


def test_wrong_password_is_localized(client):
    signup(client)

    response = client.post(
        "/auth/login?lang=hi",
        json={"email": "citizen@example.com", "password": "not-it"},
    )

    assert response.status_code == 401
    assert response.json() == {
        "error": "authentication_required",
        "message": "अमान्य ईमेल या पासवर्ड।",
    }


def test_me_requires_token(client):
    response = client.get("/auth/me")

    assert response.status_code == 401
    assert response.json()["message"] == "Please login to continue."


def test_invalid_phone_is_rejected(client):
    response = client.post(
        "/auth/signup",
        json={"email": "citizen@example.com", "password": PASSWORD, "phone": "12345"},
    )

    assert response.status_code == 422


def test_update_profile_language(client):
    token = signup(client)["access_token"]

    response = client.patch("/auth/me", headers=auth_header(token), json={"language": "hi"})

    assert response.status_code == 200
    assert response.json()["language"] == "hi"


def test_request_id_is_echoed(client):
    response = client.get("/", headers={"X-Request-Id": "abc-123"})

    assert response.json() == {"status": "ok"}
    assert response.headers["X-Request-Id"] == "abc-123"
