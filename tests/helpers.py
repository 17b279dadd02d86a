"""
Shared test helpers for the Zap Manager test suite.

Login/header helpers and an in-memory stand-in for the Evolution gateway.
"""

from modules.gateway.client import GatewayResult


def login(client, username, password):
    """Login and return the JWT, or None on failure."""
    resp = client.post("/api/auth/login", json={"username": username, "password": password})
    if resp.status_code == 200:
        return resp.json().get("token")
    return None


def auth_headers(token):
    """Return auth headers dict with Bearer token."""
    return {"Authorization": f"Bearer {token}"}


def remote(name, status="close", owner=None):
    """One fetchInstances entry in the gateway's wrapped format."""
    return {"instance": {"instanceName": name, "status": status, "owner": owner}}


class FakeGateway:
    """Records every call and answers from configurable GatewayResults.

    ``remote`` is the instance list served by fetch_instances. Set an
    attribute such as ``create_result`` or ``delete_result`` to change what an
    operation returns.
    """

    def __init__(self):
        self.remote = []
        self.calls = []
        self.fetch_result = None  # None = serve self.remote
        self.create_result = GatewayResult(ok=True, data={"instance": {"status": "created"}})
        self.connect_result = GatewayResult(ok=True, data={"base64": "data:image/png;base64,QRCODE"})
        self.restart_result = GatewayResult(ok=True, data={})
        self.logout_result = GatewayResult(ok=True, data={})
        self.delete_result = GatewayResult(ok=True, data={})
        self.webhook_result = GatewayResult(ok=True, data={})

    def called(self, op):
        return [c for c in self.calls if c[0] == op]

    async def fetch_instances(self):
        self.calls.append(("fetch_instances",))
        if self.fetch_result is not None:
            return self.fetch_result
        return GatewayResult(ok=True, data=list(self.remote))

    async def create_instance(self, name, token):
        self.calls.append(("create_instance", name, token))
        return self.create_result

    async def connect(self, name):
        self.calls.append(("connect", name))
        return self.connect_result

    async def restart(self, name):
        self.calls.append(("restart", name))
        return self.restart_result

    async def logout(self, name):
        self.calls.append(("logout", name))
        return self.logout_result

    async def delete_instance(self, name):
        self.calls.append(("delete_instance", name))
        return self.delete_result

    async def set_webhook(self, name, url):
        self.calls.append(("set_webhook", name, url))
        return self.webhook_result
