import re
import uuid

import pytest

from partner_portal.services.certificate_service import certificate_key


PEM = b"-----BEGIN CERTIFICATE-----\nMIIB\n-----END CERTIFICATE-----\n"


def test_certificate_key_format():
    key = certificate_key("my cert (prod).pem", b"abc", now_ms=1700000000000)
    assert key == "1700000000000-90015098-my-cert--prod-.pem"


@pytest.fixture
def headers(partner_headers):
    return partner_headers


def _upload(client, headers, **data):
    return client.post(
        "/api/v1/certificates",
        files={"file": ("acme prod.pem", PEM, "application/x-pem-file")},
        data=data,
        headers=headers,
    )


def test_upload_certificate(client, headers, seeded, certificate_objects):
    r = _upload(client, headers, alias="prod", description="Production signing cert")
    assert r.status_code == 201, r.text
    cert = r.json()

    assert cert["userId"] == str(seeded.partner_user_id)
    assert cert["alias"] == "prod"
    assert cert["documentType"] == "certificate"
    assert cert["fileSize"] == len(PEM)
    assert re.fullmatch(r"\d{13}-[0-9a-f]{8}-acme-prod\.pem", cert["storagePath"])
    assert cert["storageUrl"].endswith(cert["storagePath"])
    assert certificate_objects.objects[cert["storagePath"]][0] == PEM


def test_upload_with_user_id_form_field(client, seeded):
    r = _upload(client, {}, userId=str(seeded.admin_user_id))
    assert r.status_code == 201
    assert r.json()["userId"] == str(seeded.admin_user_id)


def test_upload_requires_owner(client, seeded):
    assert _upload(client, {}).status_code == 401


def test_list_filter_get_download_delete(client, headers, seeded, certificate_objects):
    mine = _upload(client, headers).json()
    _upload(client, {}, userId=str(seeded.admin_user_id))

    assert len(client.get("/api/v1/certificates").json()) == 2
    listed = client.get("/api/v1/certificates", params={"userId": str(seeded.partner_user_id)}).json()
    assert [c["id"] for c in listed] == [mine["id"]]

    assert client.get(f"/api/v1/certificates/{mine['id']}").json()["fileName"] == "acme prod.pem"

    r = client.get(f"/api/v1/certificates/{mine['id']}/download")
    assert r.status_code == 200
    assert r.content == PEM
    assert "attachment" in r.headers["content-disposition"]

    assert client.delete(f"/api/v1/certificates/{mine['id']}").status_code == 204
    assert client.get(f"/api/v1/certificates/{mine['id']}").status_code == 404
    assert mine["storagePath"] not in certificate_objects.objects


def test_unknown_certificate_is_404(client):
    assert client.get(f"/api/v1/certificates/{uuid.uuid4()}").status_code == 404
    assert client.get(f"/api/v1/certificates/{uuid.uuid4()}/download").status_code == 404
