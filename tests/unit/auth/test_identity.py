"""
Tests for token extraction and the Firebase-backed verifier.
"""

from __future__ import annotations

import json

import pytest

from portfolio_api.auth import AuthSettings, FirebaseIdentityVerifier, Identity, IdentityError
from portfolio_api.auth import identity as identity_module
from portfolio_api.auth.deps import _extract_token


@pytest.mark.parametrize(
    "authorization,authtoken,expected",
    [
        ("Bearer abc", None, "abc"),
        ("bearer abc", None, "abc"),
        ("Bearer   abc  ", None, "abc"),
        (None, "xyz", "xyz"),
        ("Bearer abc", "xyz", "abc"),
        ("Basic dXNlcg==", "xyz", "xyz"),
        ("Bearer ", None, None),
        (None, "   ", None),
        (None, None, None),
    ],
)
def test_extract_token(authorization, authtoken, expected):
    assert _extract_token(authorization, authtoken) == expected


class TestAuthSettings:
    def test_credentials_from_env_json(self, monkeypatch):
        monkeypatch.setenv("FIREBASE_CREDENTIALS", json.dumps({"project_id": "demo"}))

        assert AuthSettings().load_credentials() == {"project_id": "demo"}

    def test_credentials_from_file(self, monkeypatch, tmp_path):
        monkeypatch.delenv("FIREBASE_CREDENTIALS", raising=False)
        path = tmp_path / "credentials.json"
        path.write_text(json.dumps({"project_id": "from-file"}), encoding="utf-8")

        settings = AuthSettings(credentials_file=path)

        assert settings.load_credentials() == {"project_id": "from-file"}


class TestFirebaseIdentityVerifier:
    @pytest.fixture
    def verifier(self, monkeypatch):
        sentinel_app = object()
        monkeypatch.setattr(identity_module.firebase_admin, "get_app", lambda name: sentinel_app)
        return FirebaseIdentityVerifier(AuthSettings())

    @pytest.mark.asyncio
    async def test_accepts_valid_token(self, verifier, monkeypatch):
        def fake_verify(token, app):
            assert token == "good"
            return {"uid": "u-1", "email": "owner@example.com"}

        monkeypatch.setattr(identity_module.firebase_auth, "verify_id_token", fake_verify)

        identity = await verifier.verify("good")

        assert identity == Identity(uid="u-1", claims={"uid": "u-1", "email": "owner@example.com"})
        assert identity.email == "owner@example.com"

    @pytest.mark.asyncio
    async def test_rejects_invalid_token(self, verifier, monkeypatch):
        def fake_verify(token, app):
            raise ValueError("Illegal ID token provided")

        monkeypatch.setattr(identity_module.firebase_auth, "verify_id_token", fake_verify)

        with pytest.raises(IdentityError, match="Illegal ID token"):
            await verifier.verify("bad")

    def test_initializes_app_once(self, monkeypatch):
        calls = []

        def missing(name):
            raise ValueError("no app")

        monkeypatch.setattr(identity_module.firebase_admin, "get_app", missing)
        monkeypatch.setattr(identity_module.firebase_credentials, "Certificate", lambda data: ("cert", data))
        monkeypatch.setattr(
            identity_module.firebase_admin,
            "initialize_app",
            lambda cred, name: calls.append((cred, name)) or "app",
        )

        FirebaseIdentityVerifier(AuthSettings(credentials=json.dumps({"project_id": "demo"})))

        assert calls == [(("cert", {"project_id": "demo"}), "portfolio-api")]
