"""작업 항목 API를 통해 변경 이력이 생성/합치기/조회되는 흐름을 검증하는 자동화 테스트입니다."""

from pathlib import Path

from journaling.config import settings
from tests.conftest import auth_headers


def _create_wp(client, headers, **overrides):
    payload = {"subject": "Write docs", "description": "Hello"}
    payload.update(overrides)
    resp = client.post("/api/work_packages", json=payload, headers=headers)
    assert resp.status_code == 200, resp.text
    return resp.json()


def _journals(client, headers, wp_id):
    resp = client.get(f"/api/work_packages/{wp_id}/journals", headers=headers)
    assert resp.status_code == 200, resp.text
    return resp.json()


def test_create_work_package_writes_first_journal(client, seed_users):
    headers = auth_headers(client, "alice")
    wp = _create_wp(client, headers, notes="Initial import")

    journals = _journals(client, headers, wp["work_package_id"])
    assert len(journals) == 1
    first = journals[0]
    assert first["version"] == 1
    assert first["notes"] == "Initial import"
    assert first["user_id"] == seed_users["alice"].user_id
    assert first["activity_type"] == "work_packages"
    assert first["data"]["subject"] == "Write docs"
    assert first["data"]["description"] == "Hello"


def test_same_user_update_within_window_is_aggregated(client, seed_users):
    headers = auth_headers(client, "alice")
    wp = _create_wp(client, headers)

    resp = client.put(
        f"/api/work_packages/{wp['work_package_id']}",
        json={"subject": "Write better docs"},
        headers=headers,
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["subject"] == "Write better docs"

    journals = _journals(client, headers, wp["work_package_id"])
    assert len(journals) == 1
    assert journals[0]["version"] == 1
    assert journals[0]["data"]["subject"] == "Write better docs"


def test_other_user_update_creates_new_version(client, seed_users):
    alice = auth_headers(client, "alice")
    bob = auth_headers(client, "bob")
    wp = _create_wp(client, alice)

    resp = client.put(
        f"/api/work_packages/{wp['work_package_id']}",
        json={"status": "in_progress"},
        headers=bob,
    )
    assert resp.status_code == 200, resp.text

    journals = _journals(client, alice, wp["work_package_id"])
    assert [j["version"] for j in journals] == [1, 2]
    assert journals[0]["data"]["status"] == "new"
    assert journals[1]["data"]["status"] == "in_progress"
    assert journals[1]["user_id"] == seed_users["bob"].user_id


def test_unchanged_update_without_notes_adds_nothing(client, seed_users):
    alice = auth_headers(client, "alice")
    bob = auth_headers(client, "bob")
    wp = _create_wp(client, alice)

    resp = client.put(
        f"/api/work_packages/{wp['work_package_id']}",
        json={"subject": "Write docs"},
        headers=bob,
    )
    assert resp.status_code == 200, resp.text
    assert len(_journals(client, alice, wp["work_package_id"])) == 1


def test_stale_lock_version_is_rejected(client, seed_users):
    headers = auth_headers(client, "alice")
    wp = _create_wp(client, headers)
    first_lock = wp["lock_version"]

    resp = client.put(
        f"/api/work_packages/{wp['work_package_id']}",
        json={"subject": "v2", "lock_version": first_lock},
        headers=headers,
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["lock_version"] == first_lock + 1

    resp = client.put(
        f"/api/work_packages/{wp['work_package_id']}",
        json={"subject": "v3", "lock_version": first_lock},
        headers=headers,
    )
    assert resp.status_code == 409


def test_post_notes_aggregates_or_creates(client, seed_users):
    alice = auth_headers(client, "alice")
    bob = auth_headers(client, "bob")
    wp = _create_wp(client, alice)
    wp_id = wp["work_package_id"]

    resp = client.post(f"/api/work_packages/{wp_id}/journals", json={"notes": "Looks good"}, headers=alice)
    assert resp.status_code == 200, resp.text
    assert resp.json()["status"] == "aggregated"
    assert resp.json()["journal"]["notes"] == "Looks good"

    resp = client.post(f"/api/work_packages/{wp_id}/journals", json={"notes": "Agreed"}, headers=bob)
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["status"] == "created"
    assert body["journal"]["version"] == 2
    assert body["journal"]["notes"] == "Agreed"

    resp = client.get(f"/api/journals/{body['journal']['journal_id']}", headers=alice)
    assert resp.status_code == 200
    assert resp.json()["journable_type"] == "WorkPackage"
    assert resp.json()["journable_id"] == wp_id


def test_post_blank_notes_without_change_is_noop(client, seed_users):
    alice = auth_headers(client, "alice")
    bob = auth_headers(client, "bob")
    wp = _create_wp(client, alice)

    resp = client.post(f"/api/work_packages/{wp['work_package_id']}/journals", json={"notes": "  "}, headers=bob)
    assert resp.status_code == 200, resp.text
    assert resp.json() == {"status": "noop", "journal": None}


def test_unknown_route_and_missing_records_return_404(client, seed_users):
    headers = auth_headers(client, "alice")
    assert client.get("/api/wikis/1/journals", headers=headers).status_code == 404
    assert client.get("/api/work_packages/999/journals", headers=headers).status_code == 404
    assert client.get("/api/journals/999", headers=headers).status_code == 404


def test_journals_require_authentication(client, seed_users):
    headers = auth_headers(client, "alice")
    wp = _create_wp(client, headers)
    resp = client.get(f"/api/work_packages/{wp['work_package_id']}/journals")
    assert resp.status_code in (401, 403)


def test_custom_values_are_journaled(client, seed_users, custom_fields):
    alice = auth_headers(client, "alice")
    bob = auth_headers(client, "bob")
    customer, criteria = custom_fields
    wp = _create_wp(client, alice, custom_values={str(customer.custom_field_id): "ACME"})
    wp_id = wp["work_package_id"]

    journals = _journals(client, alice, wp_id)
    assert journals[0]["custom_values"] == [{"custom_field_id": customer.custom_field_id, "value": "ACME"}]

    resp = client.put(
        f"/api/work_packages/{wp_id}",
        json={"custom_values": {str(customer.custom_field_id): "", str(criteria.custom_field_id): "Docs\r\nreviewed"}},
        headers=bob,
    )
    assert resp.status_code == 200, resp.text

    journals = _journals(client, alice, wp_id)
    assert len(journals) == 2
    assert journals[1]["custom_values"] == [{"custom_field_id": criteria.custom_field_id, "value": "Docs\nreviewed"}]


def test_unknown_custom_field_is_rejected(client, seed_users):
    headers = auth_headers(client, "alice")
    resp = client.post(
        "/api/work_packages",
        json={"subject": "x", "custom_values": {"999": "y"}},
        headers=headers,
    )
    assert resp.status_code == 400


def test_attachment_upload_and_delete_are_journaled(client, seed_users, monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path))
    alice = auth_headers(client, "alice")
    bob = auth_headers(client, "bob")
    wp = _create_wp(client, alice)
    wp_id = wp["work_package_id"]

    resp = client.post(
        f"/api/work_packages/{wp_id}/attachments",
        files={"file": ("spec.txt", b"hello", "text/plain")},
        headers=bob,
    )
    assert resp.status_code == 200, resp.text
    attachment = resp.json()
    assert attachment["filename"] == "spec.txt"
    assert attachment["filesize"] == 5
    assert any(Path(tmp_path).rglob("*.txt"))

    journals = _journals(client, alice, wp_id)
    assert len(journals) == 2
    assert journals[1]["attachments"] == [
        {"attachment_id": attachment["attachment_id"], "filename": "spec.txt"}
    ]

    resp = client.delete(f"/api/attachments/{attachment['attachment_id']}", headers=alice)
    assert resp.status_code == 200, resp.text

    journals = _journals(client, alice, wp_id)
    assert len(journals) == 3
    assert journals[2]["attachments"] == []
    # 첨부가 지워져도 과거 스냅샷은 남는다.
    assert journals[1]["attachments"][0]["filename"] == "spec.txt"


def test_attachment_rejects_disallowed_extension(client, seed_users, monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path))
    headers = auth_headers(client, "alice")
    wp = _create_wp(client, headers)
    resp = client.post(
        f"/api/work_packages/{wp['work_package_id']}/attachments",
        files={"file": ("tool.exe", b"MZ", "application/octet-stream")},
        headers=headers,
    )
    assert resp.status_code == 400
