from nagarconnect.tests.helpers import ADMIN_EMAIL, auth_header, signup

POTHOLE = {
    "title": "Pothole on MG Road",
    "description": "Deep pothole near the bus stop",
    "category": "roads",
    "latitude": 28.6139,
    "longitude": 77.2090,
}


def test_pothole_lifecycle(client, email_provider):
    citizen = signup(client, "citizen@example.com")
    admin = signup(client, ADMIN_EMAIL)
    citizen_headers = auth_header(citizen["access_token"])
    admin_headers = auth_header(admin["access_token"])

    # report
    created = client.post("/issues", json=POTHOLE, headers=citizen_headers)
    assert created.status_code == 201
    issue = created.json()
    assert issue["status"] == "submitted"
    assert issue["upvotes"] == 0

    # upvote, then withdraw, then upvote again
    for expected in (1, 0, 1):
        upvote = client.post(f"/issues/{issue['id']}/upvote", headers=citizen_headers).json()
        assert upvote["upvotes"] == expected
    client.post(f"/issues/{issue['id']}/upvote", headers=admin_headers)
    assert client.get(f"/issues/{issue['id']}").json()["upvotes"] == 2

    # resolve
    resolved = client.post(
        f"/admin/issues/{issue['id']}/status",
        json={"status": "resolved"},
        headers=admin_headers,
    )
    assert resolved.status_code == 200
    assert resolved.json()["status"] == "resolved"
    assert resolved.json()["resolved_at"] is not None

    # email went through the send-notification function
    assert len(email_provider.sent) == 1
    sent = email_provider.sent[0]
    assert sent["to"] == ["citizen@example.com"]
    assert "Pothole on MG Road" in sent["subject"]
    assert "Your issue has been resolved!" in sent["html"]

    # in-app notices, newest first
    notices = client.get("/notifications", headers=citizen_headers).json()
    assert [n["title_en"] for n in notices] == ["Status Update: RESOLVED", "Issue Submitted"]

    # feedback after resolution
    feedback = client.post(
        f"/issues/{issue['id']}/feedback",
        json={"rating": 5, "comment": "Fixed within a week"},
        headers=citizen_headers,
    )
    assert feedback.status_code == 201

    stats = client.get("/issues/stats").json()
    assert stats["total"] == 1
    assert stats["resolved"] == 1
    assert stats["pending"] == 0


def test_non_admin_status_change_is_rejected(client, email_provider):
    citizen = auth_header(signup(client)["access_token"])
    issue = client.post("/issues", json=POTHOLE, headers=citizen).json()

    response = client.post(
        f"/admin/issues/{issue['id']}/status",
        json={"status": "resolved"},
        headers=citizen,
    )

    assert response.status_code == 403
    assert response.json()["error"] == "unauthorized"
    assert client.get(f"/issues/{issue['id']}").json()["status"] == "submitted"
    assert email_provider.sent == []


def test_reopening_clears_resolved_at(client):
    citizen = auth_header(signup(client)["access_token"])
    admin = auth_header(signup(client, ADMIN_EMAIL)["access_token"])
    issue = client.post("/issues", json=POTHOLE, headers=citizen).json()
    path = f"/admin/issues/{issue['id']}/status"

    client.post(path, json={"status": "resolved"}, headers=admin)
    reopened = client.post(path, json={"status": "in_progress"}, headers=admin).json()

    assert reopened["status"] == "in_progress"
    assert reopened["resolved_at"] is None


def test_email_failure_does_not_fail_status_change(client, email_provider):
    email_provider.fail = True
    citizen = auth_header(signup(client)["access_token"])
    admin = auth_header(signup(client, ADMIN_EMAIL)["access_token"])
    issue = client.post("/issues", json=POTHOLE, headers=citizen).json()

    response = client.post(
        f"/admin/issues/{issue['id']}/status",
        json={"status": "acknowledged"},
        headers=admin,
    )

    assert response.status_code == 200
    assert response.json()["status"] == "acknowledged"


def test_anonymous_cannot_report_or_upvote(client):
    citizen = auth_header(signup(client)["access_token"])
    issue = client.post("/issues", json=POTHOLE, headers=citizen).json()

    assert client.post("/issues", json=POTHOLE).status_code == 401
    assert client.post(f"/issues/{issue['id']}/upvote").status_code == 401


def test_mark_notifications_read(client):
    headers = auth_header(signup(client)["access_token"])
    client.post("/issues", json=POTHOLE, headers=headers)
    notice = client.get("/notifications", headers=headers).json()[0]

    marked = client.post(f"/notifications/{notice['id']}/read", headers=headers).json()
    assert marked["is_read"] is True

    client.post("/issues", json={**POTHOLE, "title": "Second pothole"}, headers=headers)
    assert client.get("/notifications/unread-count", headers=headers).json() == {"unread": 1}

    assert client.post("/notifications/read-all", headers=headers).json() == {"updated": 1}
    assert client.get("/notifications/unread-count", headers=headers).json() == {"unread": 0}
