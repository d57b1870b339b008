JO = {
    "name": "Jo Lee",
    "email": "Jo@X.com",
    "subject": "Billing question here",
    "message": "Please clarify my invoice amount",
}


def submit(client, **overrides):
    response = client.post("/api/contact", json={**JO, **overrides})
    assert response.status_code == 201, response.text
    return response.json()["contact"]


def test_inquiry_lifecycle(client, admin_headers):
    created = submit(client)
    assert created["name"] == "Jo Lee"
    assert created["email"] == "jo@x.com"

    opened = client.get(f"/api/contact/{created['id']}", headers=admin_headers)
    assert opened.status_code == 200
    assert opened.json()["contact"]["status"] == "read"

    # Opening again does not change the status.
    again = client.get(f"/api/contact/{created['id']}", headers=admin_headers)
    assert again.json()["contact"]["status"] == "read"

    closed = client.put(f"/api/contact/{created['id']}/status", json={"status": "closed"}, headers=admin_headers)
    assert closed.status_code == 200
    assert closed.json()["contact"]["status"] == "closed"
    assert client.get(f"/api/contact/{created['id']}", headers=admin_headers).json()["contact"]["status"] == "closed"


def test_new_inquiry_is_stored_with_defaults(client, admin_headers):
    created = submit(client)

    listing = client.get("/api/contact", headers=admin_headers).json()
    contact = listing["contacts"][0]
    assert contact["id"] == created["id"]
    assert contact["status"] == "new"
    assert contact["priority"] == "medium"
    assert contact["user_agent"] == "testclient"


def test_invalid_submission_reports_each_field(client):
    response = client.post(
        "/api/contact",
        json={"name": "J", "email": "not-an-email", "subject": "Hi", "message": "short"},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert {e["field"] for e in body["errors"]} == {"name", "email", "subject", "message"}


def test_inbox_requires_admin(client, user_headers):
    created = submit(client)
    assert client.get("/api/contact").status_code == 401
    assert client.get("/api/contact", headers=user_headers).status_code == 403
    assert client.get(f"/api/contact/{created['id']}", headers=user_headers).status_code == 403


def test_listing_filters_and_counts(client, admin_headers):
    first = submit(client, name="Ann Smith")
    submit(client, name="Bob Stone")
    submit(client, name="Cid Moore")
    client.put(f"/api/contact/{first['id']}/status", json={"status": "closed", "priority": "high"}, headers=admin_headers)

    new_only = client.get("/api/contact", params={"status": "new"}, headers=admin_headers).json()
    assert new_only["total"] == 2
    assert [c["name"] for c in new_only["contacts"]] == ["Cid Moore", "Bob Stone"]
    assert new_only["status_counts"] == {"new": 2, "closed": 1}

    high = client.get("/api/contact", params={"priority": "high"}, headers=admin_headers).json()
    assert [c["name"] for c in high["contacts"]] == ["Ann Smith"]

    bad = client.get("/api/contact", params={"status": "archived"}, headers=admin_headers)
    assert bad.status_code == 400
    assert bad.json()["errors"][0]["field"] == "status"


def test_reply_records_who_answered(client, admin_headers):
    created = submit(client)

    response = client.post(
        f"/api/contact/{created['id']}/reply",
        json={"message": "Your invoice covers two months of hosting."},
        headers=admin_headers,
    )

    assert response.status_code == 200
    contact = response.json()["contact"]
    assert contact["status"] == "replied"
    assert contact["reply"]["message"] == "Your invoice covers two months of hosting."
    assert contact["reply"]["replied_by"]["email"] == "admin@geed.com"
    assert contact["reply"]["replied_at"] is not None


def test_assigning_to_unknown_user_is_rejected(client, admin_headers):
    created = submit(client)

    response = client.put(
        f"/api/contact/{created['id']}/status",
        json={"status": "read", "assigned_to": "999"},
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.json()["errors"] == [{"field": "assigned_to", "message": "Invalid user ID"}]

    admin_id = client.get("/api/auth/me", headers=admin_headers).json()["user"]["id"]
    assigned = client.put(
        f"/api/contact/{created['id']}/status",
        json={"status": "read", "assigned_to": admin_id},
        headers=admin_headers,
    )
    assert assigned.json()["contact"]["assigned_to"]["id"] == admin_id


def test_delete_and_missing_inquiries(client, admin_headers):
    created = submit(client)

    assert client.delete(f"/api/contact/{created['id']}", headers=admin_headers).status_code == 200
    missing = client.get(f"/api/contact/{created['id']}", headers=admin_headers)
    assert missing.status_code == 404
    assert missing.json() == {"success": False, "message": "Contact message not found"}
    assert client.put("/api/contact/999/status", json={"status": "closed"}, headers=admin_headers).status_code == 404
    assert client.post(
        "/api/contact/999/reply", json={"message": "A reply long enough"}, headers=admin_headers
    ).status_code == 404


def test_missing_inquiry_is_404_even_with_unknown_assignee(client, admin_headers):
    response = client.put(
        "/api/contact/999/status",
        json={"status": "read", "assigned_to": "12345"},
        headers=admin_headers,
    )

    assert response.status_code == 404
    assert response.json()["message"] == "Contact message not found"
