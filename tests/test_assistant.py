from __future__ import annotations

import unittest
from typing import Any, Dict, List

from planbuilder.llm.assistant import FAILURE_REPLY, AssistantBridge
from planbuilder.llm.client import FunctionError


class FakeClient:
    def __init__(self, responses: List[Any]):
        self.responses = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def invoke(self, name: str, body: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append({"name": name, "body": body})
        result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


class TestSendMessage(unittest.TestCase):
    def test_failure_leaves_one_user_turn_and_one_advisory(self) -> None:
        notices = []
        bridge = AssistantBridge(
            FakeClient([FunctionError("HTTP 502")]),
            notify=lambda title, msg: notices.append((title, msg)),
        )

        self.assertIsNone(bridge.send_message("Plan my store"))

        self.assertEqual([t.role for t in bridge.transcript], ["user", "assistant"])
        self.assertEqual(bridge.transcript[0].content, "Plan my store")
        self.assertEqual(bridge.transcript[1].content, FAILURE_REPLY)
        self.assertFalse(any(t.loading for t in bridge.transcript))
        self.assertFalse(bridge.is_loading)
        self.assertIn("HTTP 502", bridge.error)
        self.assertEqual(len(notices), 1)

    def test_unexpected_errors_degrade_the_same_way(self) -> None:
        bridge = AssistantBridge(FakeClient([KeyError("boom")]))
        self.assertIsNone(bridge.send_message("hello"))
        self.assertEqual(bridge.transcript[-1].content, FAILURE_REPLY)

    def test_success_extracts_structured_data(self) -> None:
        reply = 'Here you go.\n```json\n{"title": "Bakery site"}\n```'
        bridge = AssistantBridge(
            FakeClient([{"response": reply, "conversationId": "conv-1", "model": "m-1"}])
        )

        data = bridge.send_message("Plan a bakery site")

        self.assertEqual(data["conversationId"], "conv-1")
        self.assertEqual(bridge.transcript[-1].content, reply)
        self.assertEqual(bridge.transcript[-1].structured_data, {"title": "Bakery site"})
        self.assertEqual(bridge.latest_structured_data, {"title": "Bakery site"})
        self.assertEqual(bridge.conversation_id, "conv-1")
        self.assertEqual(bridge.last_model, "m-1")
        self.assertIsNone(bridge.error)

    def test_empty_response_gets_fallback_text(self) -> None:
        bridge = AssistantBridge(FakeClient([{"response": "  "}]))
        bridge.send_message("hi")
        self.assertEqual(bridge.transcript[-1].content, "Sorry, I couldn't generate a response.")
        self.assertIsNone(bridge.transcript[-1].structured_data)

    def test_blank_input_is_ignored(self) -> None:
        client = FakeClient([])
        bridge = AssistantBridge(client)
        self.assertIsNone(bridge.send_message("   "))
        self.assertEqual(client.calls, [])
        self.assertEqual(bridge.transcript, [])


class TestRequestBody(unittest.TestCase):
    def test_plan_mode_sends_history_and_conversation(self) -> None:
        client = FakeClient([{"response": "one", "conversationId": "c-9"}, {"response": "two"}])
        bridge = AssistantBridge(client, "plan-fn", project_id="p-1")

        bridge.send_message("first", system_prompt="Be brief", form_context={"features": {}})
        bridge.send_message("second")

        first = client.calls[0]["body"]
        self.assertEqual(client.calls[0]["name"], "plan-fn")
        self.assertEqual(
            first["messages"],
            [{"role": "system", "content": "Be brief"}, {"role": "user", "content": "first"}],
        )
        self.assertEqual(first["projectId"], "p-1")
        self.assertEqual(first["formData"], {"features": {}})
        self.assertNotIn("conversationId", first)

        second = client.calls[1]["body"]
        self.assertEqual(second["conversationId"], "c-9")
        self.assertEqual([m["content"] for m in second["messages"]], ["first", "one", "second"])
        self.assertNotIn("systemPrompt", second)

    def test_simple_mode_sends_single_message(self) -> None:
        client = FakeClient([{"response": "ok"}])
        bridge = AssistantBridge(client, plan_mode=False, user_id="u-1", is_onboarding=True)

        bridge.send_message("hello", system_prompt="sys")

        body = client.calls[0]["body"]
        self.assertEqual(body["message"], "hello")
        self.assertEqual(body["userId"], "u-1")
        self.assertTrue(body["isOnboarding"])
        self.assertNotIn("messages", body)
        self.assertNotIn("projectId", body)

    def test_clear_resets_conversation(self) -> None:
        bridge = AssistantBridge(FakeClient([{"response": "ok", "conversationId": "c"}]))
        bridge.send_message("hi")
        bridge.clear()
        self.assertEqual(bridge.transcript, [])
        self.assertIsNone(bridge.conversation_id)


if __name__ == "__main__":
    unittest.main()
