from __future__ import annotations

from collections.abc import Iterator

import pytest

pytest.importorskip("fastapi")
pytest.importorskip("httpx")
pytest.importorskip("segno")

from fastapi.testclient import TestClient

from certtools.api.dependencies import get_token_service
from certtools.core.config import settings
from certtools.main import app
from certtools.services.tokens import TokenService


@pytest.fixture
def client() -> Iterator[TestClient]:
    service = TokenService(b"api-secret", issuer="cert-tools", expires_in="24h", algorithms=["HS256"])
    app.dependency_overrides[get_token_service] = lambda: service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert client.get("/").text.startswith("Certificate Tools API")


def test_jwt_info(client: TestClient) -> None:
    body = client.get("/jwt-info").json()
    assert body["algorithm"] == "HS256"
    assert body["issuer"] == settings.jwt_issuer


def test_generate_and_verify(client: TestClient) -> None:
    generated = client.post("/generate-jwt", json={"certificateId": "CERT-1"})
    assert generated.status_code == 200
    body = generated.json()
    assert body["success"] is True
    assert body["payload"]["certificateId"] == "CERT-1"
    assert body["payload"]["iss"] == "cert-tools"
    assert body["payload"]["exp"] == body["payload"]["iat"] + 86400

    verified = client.post("/verify-jwt", json={"jwt": body["jwt"]})
    assert verified.status_code == 200
    result = verified.json()
    assert result["verified"] is True
    assert result["success"] is True
    assert result["payload"]["certificateId"] == "CERT-1"


def test_generate_rejects_non_object(client: TestClient) -> None:
    response = client.post("/generate-jwt", json=[1, 2, 3])
    assert response.status_code == 400


def test_generate_certificate(client: TestClient) -> None:
    response = client.post(
        "/generate-certificate",
        json={
            "certificate_id": "CERT-7",
            "recipient_name": "Ada",
            "course_name": "Math",
            "issuer_name": "SJCET",
            "issue_date": "2024-05-01T00:00:00Z",
        },
    )
    assert response.status_code == 200
    payload = response.json()["payload"]
    assert payload["certificateId"] == "CERT-7"
    assert payload["type"] == "certificate"


def test_verify_requires_jwt(client: TestClient) -> None:
    response = client.post("/verify-jwt", json={})
    assert response.status_code == 400
    assert response.json()["detail"] == "No JWT provided"


def test_verify_reports_tampering(client: TestClient) -> None:
    token = client.post("/generate-jwt", json={"certificateId": "CERT-1"}).json()["jwt"]
    header, payload, signature = token.split(".")
    tampered = f"{header}.{payload}.{signature[::-1]}"

    response = client.post("/verify-jwt", json={"jwt": tampered})
    assert response.status_code == 400
    body = response.json()
    assert body["verified"] is False
    assert body["success"] is False
    assert body["error"] == "InvalidSignature"
    assert body["payload"] is None


def test_verify_reports_malformed(client: TestClient) -> None:
    response = client.post("/verify-jwt", json={"jwt": "a.b"})
    assert response.status_code == 400
    assert response.json()["error"] == "MalformedToken"


def test_missing_secret_is_server_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "jwt_secret", None)
    with TestClient(app) as test_client:
        response = test_client.post("/generate-jwt", json={"certificateId": "CERT-1"})
    assert response.status_code == 500


def test_qr_png(client: TestClient) -> None:
    token = client.post("/generate-jwt", json={"certificateId": "CERT-1"}).json()["jwt"]
    response = client.post("/qr", json={"jwt": token})
    assert response.status_code == 200
    assert response.headers["content-type"] == "image/png"
    assert response.content.startswith(b"\x89PNG")


def test_qr_svg(client: TestClient) -> None:
    token = client.post("/generate-jwt", json={"certificateId": "CERT-1"}).json()["jwt"]
    response = client.post("/qr", json={"jwt": token, "format": "svg", "error_correction": "Q"})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("image/svg+xml")
    assert "<svg" in response.text


def test_qr_rejects_invalid_token(client: TestClient) -> None:
    response = client.post("/qr", json={"jwt": "not-a-token"})
    assert response.status_code == 400


@pytest.mark.parametrize("qr_format", ["png", "svg"])
def test_qr_rejects_invalid_color(client: TestClient, qr_format: str) -> None:
    token = client.post("/generate-jwt", json={"certificateId": "CERT-1"}).json()["jwt"]
    response = client.post("/qr", json={"jwt": token, "format": qr_format, "dark_color": "not-a-color"})
    assert response.status_code == 400
