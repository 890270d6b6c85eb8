import csv
import io
import re

import pytest


@pytest.fixture
def seeded_client(client):
    for i in range(120):
        response = client.post("/api/waitlist", json={"email": f"user{i:03d}@example.com"})
        assert response.status_code == 201
    return client


def test_list_waitlist_first_page(seeded_client):
    response = seeded_client.get("/api/admin/waitlist", params={"page": 1, "limit": 50})

    assert response.status_code == 200
    payload = response.json()
    assert payload["success"] is True
    assert len(payload["data"]["entries"]) == 50
    assert payload["data"]["pagination"] == {
        "currentPage": 1,
        "totalPages": 3,
        "totalCount": 120,
        "hasNextPage": True,
        "hasPrevPage": False,
        "limit": 50,
    }
    # Newest first by default
    assert payload["data"]["entries"][0]["email"] == "user119@example.com"


def test_list_waitlist_last_page(seeded_client):
    response = seeded_client.get("/api/admin/waitlist", params={"page": 3, "limit": 50})

    pagination = response.json()["data"]["pagination"]
    assert len(response.json()["data"]["entries"]) == 20
    assert pagination["hasNextPage"] is False
    assert pagination["hasPrevPage"] is True


def test_list_waitlist_page_out_of_range_is_empty(seeded_client):
    response = seeded_client.get("/api/admin/waitlist", params={"page": 10, "limit": 50})

    assert response.status_code == 200
    assert response.json()["data"]["entries"] == []


def test_list_waitlist_sorted_by_email_ascending(client):
    for email in ["carol@example.com", "alice@example.com", "bob@example.com"]:
        client.post("/api/waitlist", json={"email": email})

    response = client.get(
        "/api/admin/waitlist", params={"sortBy": "email", "sortOrder": "asc"}
    )

    emails = [e["email"] for e in response.json()["data"]["entries"]]
    assert emails == ["alice@example.com", "bob@example.com", "carol@example.com"]


def test_list_waitlist_entry_shape(client):
    client.post("/api/waitlist", json={"email": "shape@example.com"})

    entry = client.get("/api/admin/waitlist").json()["data"]["entries"][0]
    assert set(entry) == {"id", "email", "createdAt", "source", "ipAddress", "userAgent"}


def test_list_waitlist_rejects_unknown_sort_field(client):
    response = client.get("/api/admin/waitlist", params={"sortBy": "password"})

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_list_waitlist_rejects_non_positive_page(client):
    response = client.get("/api/admin/waitlist", params={"page": 0})
    assert response.status_code == 400


def test_export_waitlist_csv(client):
    client.post("/api/waitlist", json={"email": "first@example.com"}, headers={"User-Agent": "UA, one"})
    client.post("/api/waitlist", json={"email": "second@example.com"})

    response = client.get("/api/admin/waitlist/export")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert re.fullmatch(
        r'attachment; filename="waitlist-export-\d{4}-\d{2}-\d{2}\.csv"',
        response.headers["content-disposition"],
    )

    lines = response.text.splitlines()
    assert len(lines) == 3
    assert lines[0] == "Email,Created At,Source,IP Address,User Agent"

    rows = list(csv.reader(io.StringIO(response.text)))[1:]
    assert [row[0] for row in rows] == ["second@example.com", "first@example.com"]
    assert rows[1][4] == "UA; one"
    assert rows[1][2] == "landing-page"


def test_delete_entry(client):
    entry_id = client.post("/api/waitlist", json={"email": "gone@example.com"}).json()["data"]["id"]

    response = client.delete(f"/api/admin/waitlist/{entry_id}")
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Entry deleted successfully"}
    assert client.get("/api/waitlist/stats").json()["data"]["totalCount"] == 0

    again = client.delete(f"/api/admin/waitlist/{entry_id}")
    assert again.status_code == 404
    assert again.json() == {"success": False, "message": "Entry not found"}


def test_admin_stats(client):
    client.post("/api/waitlist", json={"email": "one@example.com"})

    response = client.get("/api/admin/waitlist/stats")
    assert response.status_code == 200
    assert response.json()["data"]["totalCount"] == 1


def test_list_waitlist_accepts_trailing_slash(client):
    client.post("/api/waitlist", json={"email": "slash@example.com"})

    response = client.get("/api/admin/waitlist/")
    assert response.status_code == 200
    assert not response.history
    assert response.json()["data"]["pagination"]["totalCount"] == 1
