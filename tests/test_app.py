import io

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from main import create_app
from peacecert.config import load_settings


@pytest.fixture
def client(settings):
    app = create_app(settings)
    app.dependency_overrides[load_settings] = lambda: settings
    return TestClient(app)


def body(*peacemakers):
    return {"peacemakers": list(peacemakers)}


ADA = {"name": "Ada", "wallet": "0xA1", "citizenship": "US", "language": "en"}
BLAISE = {"name": "Blaise", "wallet": "0xB2", "citizenship": "FR", "language": "en"}


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_peace_batch(client, settings):
    resp = client.post("/peace", json=body(ADA, BLAISE))

    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "success"
    assert len(data["identifier"]) == 36
    assert data["files"] == ["ProofOfPeacemaking_Ada_0xA1.pdf", "ProofOfPeacemaking_Blaise_0xB2.pdf"]


def test_recognition_allows_missing_wallet(client):
    resp = client.post("/recognition", json=body({"name": "Ada", "citizenship": "US", "language": "en"}))

    assert resp.status_code == 200
    assert resp.json()["files"] == ["ProofOfRecognition_Ada.pdf"]


def test_peace_requires_wallet(client):
    resp = client.post("/peace", json=body({"name": "Ada", "citizenship": "US", "language": "en"}))

    assert resp.status_code == 422
    assert resp.json()["detail"]["participant"] == "Ada"


@pytest.mark.parametrize(
    "payload",
    [
        {"peacemakers": []},
        {"peacemakers": [{"name": "Ada", "citizenship": "US"}]},
        {"peacemakers": [dict(ADA, citizenship="../US")]},
        {"peacemakers": [dict(ADA, name="Ada\u0000X")]},
        {},
    ],
)
def test_schema_errors(client, payload):
    assert client.post("/peace", json=payload).status_code == 422


def test_pipeline_failure_names_participant(client):
    resp = client.post("/peace", json=body(ADA, dict(BLAISE, language="xx")))

    assert resp.status_code == 500
    assert resp.json()["detail"] == "Error generating certificate for Blaise"


def test_template_upload_and_preview(client, settings):
    png = io.BytesIO()
    Image.new("RGBA", (320, 226), (10, 20, 30, 255)).save(png, format="PNG")

    resp = client.post(
        "/template/recognition/de",
        files={"file": ("template.png", png.getvalue(), "image/png")},
    )
    assert resp.status_code == 200
    assert resp.json()["template"] == "ProofOfRecognition_de.jpg"

    preview = client.get("/template/recognition/de")
    assert preview.status_code == 200
    assert preview.headers["content-type"] == "image/jpeg"
    assert Image.open(io.BytesIO(preview.content)).size == (320, 226)


def test_template_upload_rejects_other_types(client):
    resp = client.post("/template/peace/en", files={"file": ("t.gif", b"GIF89a", "image/gif")})
    assert resp.status_code == 400


def test_template_upload_rejects_corrupt_image(client):
    resp = client.post("/template/peace/en", files={"file": ("t.png", b"\x89PNG broken", "image/png")})
    assert resp.status_code == 400


def test_missing_template_preview(client):
    assert client.get("/template/peace/xx").status_code == 404
