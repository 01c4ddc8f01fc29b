from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from ..core import config

logger = logging.getLogger(__name__)


class FunctionError(RuntimeError):
    pass


# -------------------------
# Client
# -------------------------
class FunctionsClient:
    """
    Single entry point for serverless function calls on the hosted backend.

    Demo mode:
    - USE_ASSISTANT=0 => never calls the backend, returns a deterministic stub
    - USE_ASSISTANT=1 => POST {BACKEND_URL}/functions/v1/{name}

    Auth: the backend's anon key is sent both as bearer token and as "apikey",
    which is what the hosted functions gateway expects.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        *,
        use_stub: Optional[bool] = None,
        timeout_sec: Optional[float] = None,
        verify_ssl: Optional[bool] = None,
        access_token: Optional[str] = None,
    ):
        self.base_url = (base_url if base_url is not None else config.backend_url()).rstrip("/")
        self.api_key = api_key if api_key is not None else config.backend_anon_key()
        self.use_stub = (not config.use_assistant()) if use_stub is None else use_stub
        self.timeout_sec = timeout_sec if timeout_sec is not None else config.assistant_timeout_sec()
        self.verify_ssl = verify_ssl if verify_ssl is not None else config.assistant_verify_ssl()

        # Signed-in user's session token; falls back to the anon key
        self.access_token = access_token

    def function_url(self, name: str) -> str:
        """
        Accepts:
          - BACKEND_URL = https://project.example.co
          - BACKEND_URL = https://project.example.co/functions/v1
        """
        base = self.base_url
        if not base:
            raise FunctionError("BACKEND_URL is required when USE_ASSISTANT=1")
        if base.endswith("/functions/v1"):
            return f"{base}/{name}"
        return f"{base}/functions/v1/{name}"

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        token = self.access_token or self.api_key
        if token:
            headers["Authorization"] = f"Bearer {token}"
        if self.api_key:
            headers["apikey"] = self.api_key
        return headers

    # -------------------------
    # Public API
    # -------------------------
    def invoke(self, name: str, body: Dict[str, Any]) -> Dict[str, Any]:
        """
        Returns the decoded JSON object the function responded with.
        Raises FunctionError on transport errors, non-2xx and non-JSON bodies.
        """
        if self.use_stub:
            return self._stub_response(name, body)

        url = self.function_url(name)
        try:
            r = requests.post(
                url,
                json=body,
                headers=self._headers(),
                timeout=self.timeout_sec,
                verify=self.verify_ssl,
            )
        except requests.RequestException as e:
            raise FunctionError(f"Function {name} unreachable: {e}") from e

        if not r.ok:
            raise FunctionError(f"Function {name} HTTP {r.status_code}: {r.text[:500]}")

        try:
            data = r.json()
        except ValueError as e:
            raise FunctionError(f"Function {name} returned non-JSON body: {r.text[:200]}") from e

        if not isinstance(data, dict):
            raise FunctionError(f"Function {name} returned {type(data).__name__}, expected object")

        # Functions report handled failures in-band
        if data.get("error") and not data.get("response"):
            raise FunctionError(f"Function {name} error: {data['error']}")

        return data

    # -------------------------
    # Stub (demo mode)
    # -------------------------
    def _stub_response(self, name: str, body: Dict[str, Any]) -> Dict[str, Any]:
        last = ""
        messages = body.get("messages") or []
        if messages:
            last = str(messages[-1].get("content", ""))
        elif body.get("message"):
            last = str(body["message"])

        logger.debug("[Assistant] stub response for %s", name)
        return {
            "response": f"(demo mode) I received: {last.strip()}",
            "conversationId": body.get("conversationId") or "demo-conversation",
            "model": "stub",
        }
