from __future__ import annotations

import unittest
from unittest import mock

import requests

from planbuilder.llm.client import FunctionError, FunctionsClient


def _response(status: int = 200, payload=None, text: str = ""):
    r = mock.Mock()
    r.ok = 200 <= status < 300
    r.status_code = status
    r.text = text
    if isinstance(payload, Exception):
        r.json.side_effect = payload
    else:
        r.json.return_value = payload
    return r


class TestFunctionsClient(unittest.TestCase):
    def make_client(self, **kwargs) -> FunctionsClient:
        defaults = dict(
            base_url="https://project.example.co",
            api_key="anon-key",
            use_stub=False,
            timeout_sec=5,
            verify_ssl=True,
        )
        defaults.update(kwargs)
        return FunctionsClient(**defaults)

    def test_function_url(self) -> None:
        self.assertEqual(
            self.make_client().function_url("chat-with-plan-assistant"),
            "https://project.example.co/functions/v1/chat-with-plan-assistant",
        )
        self.assertEqual(
            self.make_client(base_url="https://project.example.co/functions/v1/").function_url("x"),
            "https://project.example.co/functions/v1/x",
        )
        with self.assertRaises(FunctionError):
            self.make_client(base_url="").function_url("x")

    @mock.patch("planbuilder.llm.client.requests.post")
    def test_invoke_posts_json_with_auth_headers(self, post) -> None:
        post.return_value = _response(payload={"response": "hi", "conversationId": "c1"})

        data = self.make_client(access_token="user-token").invoke("fn", {"message": "hello"})

        self.assertEqual(data["conversationId"], "c1")
        args, kwargs = post.call_args
        self.assertEqual(args[0], "https://project.example.co/functions/v1/fn")
        self.assertEqual(kwargs["json"], {"message": "hello"})
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer user-token")
        self.assertEqual(kwargs["headers"]["apikey"], "anon-key")
        self.assertEqual(kwargs["timeout"], 5)

    @mock.patch("planbuilder.llm.client.requests.post")
    def test_transport_error(self, post) -> None:
        post.side_effect = requests.ConnectionError("down")
        with self.assertRaises(FunctionError):
            self.make_client().invoke("fn", {})

    @mock.patch("planbuilder.llm.client.requests.post")
    def test_http_error(self, post) -> None:
        post.return_value = _response(status=500, text="boom")
        with self.assertRaisesRegex(FunctionError, "HTTP 500"):
            self.make_client().invoke("fn", {})

    @mock.patch("planbuilder.llm.client.requests.post")
    def test_bad_bodies(self, post) -> None:
        post.return_value = _response(payload=ValueError("no json"), text="<html>")
        with self.assertRaises(FunctionError):
            self.make_client().invoke("fn", {})

        post.return_value = _response(payload=["not", "an", "object"])
        with self.assertRaises(FunctionError):
            self.make_client().invoke("fn", {})

        post.return_value = _response(payload={"error": "quota exceeded"})
        with self.assertRaisesRegex(FunctionError, "quota exceeded"):
            self.make_client().invoke("fn", {})

    @mock.patch("planbuilder.llm.client.requests.post")
    def test_stub_mode_never_calls_backend(self, post) -> None:
        client = self.make_client(use_stub=True, base_url="")
        data = client.invoke("fn", {"messages": [{"role": "user", "content": "plan my app"}]})

        post.assert_not_called()
        self.assertEqual(data["response"], "(demo mode) I received: plan my app")
        self.assertEqual(data["conversationId"], "demo-conversation")

    def test_defaults_follow_environment(self) -> None:
        env = {"USE_ASSISTANT": "0", "BACKEND_URL": "https://env.example.co/", "ASSISTANT_TIMEOUT_SEC": "12"}
        with mock.patch.dict("os.environ", env):
            client = FunctionsClient()
        self.assertTrue(client.use_stub)
        self.assertEqual(client.base_url, "https://env.example.co")
        self.assertEqual(client.timeout_sec, 12.0)


if __name__ == "__main__":
    unittest.main()
