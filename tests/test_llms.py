"""
AI provider credential tests — create, list, toggle, delete.

Usage:
    pytest tests/test_llms.py -v --tb=short
"""

import pytest

import core.crypto as crypto
from modules.llms.models import LlmConfig

OPENAI = {"name": "Support bot", "provider": "openai", "api_key": "sk-live-1234567890", "model": "gpt-4o"}
CLAUDE = {"name": "Sales bot", "provider": "anthropic", "api_key": "sk-ant-0987654321", "model": "claude"}


def _create(client, headers, body):
    resp = client.post("/api/llms", json=body, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


class TestCreate:

    def test_create_returns_public_fields_only(self, client, admin_headers):
        body = _create(client, admin_headers, OPENAI)
        assert set(body) == {"id", "name", "provider", "model"}
        assert body["name"] == "Support bot"
        assert body["model"] == "gpt-4o"

    def test_api_key_is_encrypted_at_rest(self, client, admin_headers, db):
        created = _create(client, admin_headers, OPENAI)
        stored = db.get(LlmConfig, created["id"])
        assert stored.api_key != OPENAI["api_key"]
        assert crypto.is_encrypted(stored.api_key)
        assert crypto.decrypt(stored.api_key) == OPENAI["api_key"]

    def test_new_config_is_inactive(self, client, admin_headers):
        created = _create(client, admin_headers, OPENAI)
        listed = {c["id"]: c for c in client.get("/api/llms", headers=admin_headers).json()}
        assert listed[created["id"]]["is_active"] is False

    @pytest.mark.parametrize("missing", ["name", "provider", "api_key", "model"])
    def test_missing_field_is_400(self, client, admin_headers, missing):
        body = {k: v for k, v in OPENAI.items() if k != missing}
        resp = client.post("/api/llms", json=body, headers=admin_headers)
        assert resp.status_code == 400
        assert missing in resp.json()["fields"]

    def test_empty_api_key_is_400(self, client, admin_headers):
        resp = client.post("/api/llms", json={**OPENAI, "api_key": ""}, headers=admin_headers)
        assert resp.status_code == 400

    def test_creation_is_audited(self, client, admin_headers):
        _create(client, admin_headers, OPENAI)
        actions = [e["action"] for e in client.get("/api/audit-logs", headers=admin_headers).json()]
        assert "LLM_CONFIG_CREATED" in actions


class TestList:

    def test_list_never_exposes_api_key(self, client, admin_headers, operator_headers):
        _create(client, admin_headers, OPENAI)
        resp = client.get("/api/llms", headers=operator_headers)
        assert resp.status_code == 200
        assert resp.json()
        for config in resp.json():
            assert "api_key" not in config
        assert OPENAI["api_key"] not in resp.text

    def test_newest_first(self, client, admin_headers):
        _create(client, admin_headers, OPENAI)
        _create(client, admin_headers, CLAUDE)
        names = [c["name"] for c in client.get("/api/llms", headers=admin_headers).json()]
        assert names == ["Sales bot", "Support bot"]


class TestToggle:

    def test_toggle_flips_flag(self, client, admin_headers):
        created = _create(client, admin_headers, OPENAI)
        first = client.post(f"/api/llms/{created['id']}/toggle", headers=admin_headers)
        assert first.json() == {"success": True, "is_active": True}
        second = client.post(f"/api/llms/{created['id']}/toggle", headers=admin_headers)
        assert second.json() == {"success": True, "is_active": False}

    def test_several_configs_can_be_active(self, client, admin_headers):
        a = _create(client, admin_headers, OPENAI)
        b = _create(client, admin_headers, CLAUDE)
        client.post(f"/api/llms/{a['id']}/toggle", headers=admin_headers)
        client.post(f"/api/llms/{b['id']}/toggle", headers=admin_headers)

        listed = client.get("/api/llms", headers=admin_headers).json()
        assert all(c["is_active"] for c in listed)

    def test_toggle_unknown_is_404(self, client, admin_headers):
        resp = client.post("/api/llms/nope/toggle", headers=admin_headers)
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Config not found"


class TestDelete:

    def test_delete(self, client, admin_headers):
        created = _create(client, admin_headers, OPENAI)
        resp = client.delete(f"/api/llms/{created['id']}", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.json() == {"success": True}
        assert client.get("/api/llms", headers=admin_headers).json() == []

    def test_delete_unknown_is_404(self, client, admin_headers):
        resp = client.delete("/api/llms/nope", headers=admin_headers)
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Config not found"
