import uuid

import anyio

from tests._factories import SFTP_BASIC_INTERFACE, b2b_payload, make_user


def _new_user(store):
    return anyio.run(make_user, store)


def test_create_partner_forces_pending_and_creates_one_approval(client, store):
    user = _new_user(store)
    payload = b2b_payload()
    payload["status"] = "APPROVED"

    r = client.post("/api/v1/partners", json=payload, headers={"X-User-Id": str(user.id)})
    assert r.status_code == 201, r.text

    body = r.json()
    assert body["status"] == "PENDING_APPROVAL"
    assert body["userId"] == str(user.id)
    assert body["host"] == "sftp.acme.example"
    assert body["port"] == "22"
    assert body["submittedAt"]

    approvals = [a for a in client.get("/api/v1/approvals").json() if a["partnerId"] == body["id"]]
    assert len(approvals) == 1
    assert approvals[0]["status"] == "PENDING"
    assert approvals[0]["comments"] == "Pending review by admin"


def test_create_partner_with_user_id_in_body(client, store):
    user = _new_user(store)
    r = client.post("/api/v1/partners", json=b2b_payload(user_id=user.id))
    assert r.status_code == 201
    assert r.json()["userId"] == str(user.id)


def test_create_partner_reports_every_missing_interface_field(client, store):
    user = _new_user(store)
    interface = {"protocol": "sftp", "authType": "basicIdentityKey", "host": "h"}

    r = client.post("/api/v1/partners", json=b2b_payload(user_id=user.id, interface=interface))

    assert r.status_code == 400
    fields = {e["field"] for e in r.json()["errors"]}
    assert fields == {
        f"interfaceConfig.interface.{f}"
        for f in ("port", "sourcePath", "supportFormatType", "fileNamePattern", "archivalPath", "username", "password", "identityKeyId")
    }
    assert client.get("/api/v1/partners").json() == []


def test_create_partner_body_schema_error_is_400(client):
    r = client.post("/api/v1/partners", json={"companyName": "Acme"})
    assert r.status_code == 400
    fields = {e["field"] for e in r.json()["errors"]}
    assert {"contactName", "contactEmail", "contactPhone", "partnerType"} <= fields


def test_create_partner_without_owner_is_rejected(client):
    r = client.post("/api/v1/partners", json=b2b_payload())
    assert r.status_code == 400
    assert r.json()["errors"][0]["field"] == "userId"


def test_get_partner_by_id_user_and_me(client, store):
    user = _new_user(store)
    created = client.post("/api/v1/partners", json=b2b_payload(user_id=user.id)).json()

    assert client.get(f"/api/v1/partners/{created['id']}").json()["companyName"] == "Acme Corp"
    assert [p["id"] for p in client.get("/api/v1/partners", params={"userId": str(user.id)}).json()] == [created["id"]]
    assert client.get("/api/v1/partners/me", headers={"X-User-Id": str(user.id)}).json()["id"] == created["id"]

    assert client.get(f"/api/v1/partners/{uuid.uuid4()}").status_code == 404
    assert client.get("/api/v1/partners/me").status_code == 401


def test_patch_updates_fields_and_revalidates_interface(client, store):
    user = _new_user(store)
    created = client.post("/api/v1/partners", json=b2b_payload(user_id=user.id)).json()
    url = f"/api/v1/partners/{created['id']}"

    r = client.patch(url, json={"notes": "call before noon", "host": "sftp2.acme.example"})
    assert r.status_code == 200
    assert r.json()["notes"] == "call before noon"
    assert r.json()["host"] == "sftp2.acme.example"

    r = client.patch(url, json={"host": ""})
    assert r.status_code == 400
    assert [e["field"] for e in r.json()["errors"]] == ["host"]

    r = client.patch(url, json={"authType": "basicIdentityKey"})
    assert r.status_code == 400
    assert [e["field"] for e in r.json()["errors"]] == ["identityKeyId"]


def test_patch_cannot_approve_or_move_backwards(client, store):
    user = _new_user(store)
    created = client.post("/api/v1/partners", json=b2b_payload(user_id=user.id)).json()
    url = f"/api/v1/partners/{created['id']}"

    assert client.patch(url, json={"status": "APPROVED"}).status_code == 400
    assert client.patch(url, json={"status": "DRAFT"}).status_code == 400
    assert client.patch(url, json={"status": "PENDING_APPROVAL"}).status_code == 200


def test_delete_partner_cascades(client, store, document_objects):
    user = _new_user(store)
    created = client.post("/api/v1/partners", json=b2b_payload(user_id=user.id)).json()
    partner_id = created["id"]

    doc = client.post(
        f"/api/v1/partners/{partner_id}/documents",
        files={"file": ("w9.pdf", b"%PDF-1.4", "application/pdf")},
        data={"documentType": "tax"},
    ).json()
    assert document_objects.objects

    r = client.delete(f"/api/v1/partners/{partner_id}")
    assert r.status_code == 204

    assert client.get(f"/api/v1/partners/{partner_id}").status_code == 404
    assert client.get(f"/api/v1/documents/{doc['id']}").status_code == 404
    assert [a for a in client.get("/api/v1/approvals").json() if a["partnerId"] == partner_id] == []
    assert document_objects.objects == {}


def test_certificate_selection_is_snapshotted(client, store, certificate_objects):
    user = _new_user(store)
    headers = {"X-User-Id": str(user.id)}
    cert = client.post(
        "/api/v1/certificates",
        files={"file": ("acme.pem", b"-----BEGIN CERTIFICATE-----", "application/x-pem-file")},
        data={"alias": "prod"},
        headers=headers,
    ).json()

    payload = b2b_payload()
    payload["interfaceConfig"]["security"] = {"selectedCertificateId": cert["id"]}
    partner = client.post("/api/v1/partners", json=payload, headers=headers).json()

    client.delete(f"/api/v1/certificates/{cert['id']}")

    details = client.get(f"/api/v1/partners/{partner['id']}").json()["interfaceConfig"]["security"]["certificateDetails"]
    assert details["id"] == cert["id"]
    assert details["alias"] == "prod"
    assert details["fileName"] == "acme.pem"


def test_seeded_partner_is_listed(client, seeded):
    partners = client.get("/api/v1/partners").json()
    assert [p["id"] for p in partners] == [str(seeded.sample_partner_id)]
    assert partners[0]["protocol"] == SFTP_BASIC_INTERFACE["protocol"]


def test_patch_rejects_null_for_required_columns(client, store):
    user = _new_user(store)
    created = client.post("/api/v1/partners", json=b2b_payload(user_id=user.id)).json()
    url = f"/api/v1/partners/{created['id']}"

    r = client.patch(url, json={"companyName": None, "status": None, "notes": None})
    assert r.status_code == 400
    assert {e["field"] for e in r.json()["errors"]} == {"companyName", "status"}

    partner = client.get(url).json()
    assert partner["companyName"] == "Acme Corp"
    assert partner["status"] == "PENDING_APPROVAL"


def test_create_partner_reports_rule_fields_alongside_type_errors(client, store):
    user = _new_user(store)
    interface = {"protocol": "sftp", "authType": "basic", "port": {"bad": "type"}}

    r = client.post("/api/v1/partners", json=b2b_payload(user_id=user.id, interface=interface))

    assert r.status_code == 400
    fields = {e["field"] for e in r.json()["errors"]}
    assert "interfaceConfig.interface.port" in fields
    assert {
        f"interfaceConfig.interface.{f}"
        for f in ("host", "sourcePath", "supportFormatType", "fileNamePattern", "archivalPath", "username", "password")
    } <= fields
    assert client.get("/api/v1/partners").json() == []


def test_partner_responses_omit_secrets(client, store):
    user = _new_user(store)
    interface = {"protocol": "https", "authType": "apiKey", "httpHeaderName": "X-Api-Key", "apiKeyValue": "k-123"}
    created = client.post("/api/v1/partners", json=b2b_payload(user_id=user.id, interface=interface))
    assert created.status_code == 201, created.text

    for body in (created.json(), client.get(f"/api/v1/partners/{created.json()['id']}").json()):
        assert body["httpHeaderName"] == "X-Api-Key"
        assert "apiKeyValue" not in body
        assert "password" not in body

    pending = [a for a in client.get("/api/v1/approvals/pending").json() if a["partnerId"] == created.json()["id"]]
    interface_block = pending[0]["interfaceConfig"]["interface"]
    assert interface_block["httpHeaderName"] == "X-Api-Key"
    assert "apiKeyValue" not in interface_block
