"""
Remote assistant bridge: in-memory transcript + one function call per turn.

Not re-entrant. The host must not call send_message() again while
is_loading is True; there is no queue and no cancellation.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from ..core.types import ChatTurn
from .client import FunctionError, FunctionsClient
from .json_parser import extract_structured_data

logger = logging.getLogger(__name__)

Notifier = Callable[[str, str], None]

EMPTY_REPLY = "Sorry, I couldn't generate a response."
FAILURE_REPLY = (
    "I'm sorry, I couldn't reach the planning assistant just now. "
    "Please try sending your message again."
)


class AssistantBridge:
    def __init__(
        self,
        client: FunctionsClient,
        function_name: str = "chat-with-plan-assistant",
        *,
        project_id: Optional[str] = None,
        user_id: Optional[str] = None,
        plan_mode: bool = True,
        is_onboarding: bool = False,
        use_web_search: bool = False,
        use_reasoning: bool = False,
        notify: Optional[Notifier] = None,
    ):
        self.client = client
        self.function_name = function_name
        self.project_id = project_id
        self.user_id = user_id
        self.plan_mode = plan_mode
        self.is_onboarding = is_onboarding
        self.use_web_search = use_web_search
        self.use_reasoning = use_reasoning
        self.notify = notify

        self.transcript: List[ChatTurn] = []
        self.is_loading = False
        self.error: Optional[str] = None
        self.conversation_id: Optional[str] = None
        self.last_model: Optional[str] = None
        self.onboarding_progress: Optional[Dict[str, Any]] = None

    # -----------------------------
    # Public API
    # -----------------------------
    def send_message(
        self,
        content: str,
        system_prompt: Optional[str] = None,
        form_context: Optional[Dict[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Returns the function's response payload, or None on blank input/failure.
        Failures never raise: they become an advisory assistant turn.
        """
        if not content or not content.strip():
            return None

        self.is_loading = True
        self.error = None

        self.transcript.append(ChatTurn(role="user", content=content))
        placeholder = ChatTurn(role="assistant", content="", loading=True)
        self.transcript.append(placeholder)

        try:
            body = self._build_request(content, system_prompt, form_context)
            data = self.client.invoke(self.function_name, body)
        except FunctionError as e:
            self._fail(placeholder, str(e))
            return None
        except Exception as e:
            logger.exception("[Assistant] unexpected failure calling %s", self.function_name)
            self._fail(placeholder, f"Something went wrong: {e}")
            return None
        finally:
            self.is_loading = False

        text = str(data.get("response") or "").strip() or EMPTY_REPLY
        extraction = extract_structured_data(text)

        self._replace(
            placeholder,
            ChatTurn(
                role="assistant",
                content=text,
                structured_data=extraction.data if extraction.ok else None,
            ),
        )

        if data.get("conversationId"):
            self.conversation_id = str(data["conversationId"])
        if data.get("model"):
            self.last_model = str(data["model"])
        if isinstance(data.get("onboardingProgress"), dict):
            self.onboarding_progress = data["onboardingProgress"]

        return data

    def clear(self) -> None:
        self.transcript = []
        self.error = None
        self.conversation_id = None
        self.onboarding_progress = None

    @property
    def latest_structured_data(self) -> Optional[Dict[str, Any]]:
        for turn in reversed(self.transcript):
            if turn.role == "assistant" and turn.structured_data:
                return turn.structured_data
        return None

    # -----------------------------
    # Internals
    # -----------------------------
    def _history(self) -> List[Dict[str, str]]:
        return [t.to_message() for t in self.transcript if not t.loading]

    def _build_request(
        self,
        content: str,
        system_prompt: Optional[str],
        form_context: Optional[Dict[str, Any]],
    ) -> Dict[str, Any]:
        if self.plan_mode:
            messages = self._history()
            if system_prompt and not any(m["role"] == "system" for m in messages):
                messages.insert(0, {"role": "system", "content": system_prompt})
            body: Dict[str, Any] = {
                "messages": messages,
                "projectId": self.project_id,
                "conversationId": self.conversation_id,
                "formData": form_context,
                "useWebSearch": self.use_web_search,
                "useReasoning": self.use_reasoning,
                "systemPrompt": system_prompt,
            }
        else:
            body = {
                "message": content,
                "systemPrompt": system_prompt,
                "userId": self.user_id,
                "projectId": self.project_id,
                "isOnboarding": self.is_onboarding,
            }
        return {k: v for k, v in body.items() if v is not None}

    def _replace(self, placeholder: ChatTurn, turn: ChatTurn) -> None:
        for i, t in enumerate(self.transcript):
            if t is placeholder:
                self.transcript[i] = turn
                return
        self.transcript.append(turn)

    def _fail(self, placeholder: ChatTurn, message: str) -> None:
        logger.warning("[Assistant] %s call failed: %s", self.function_name, message)
        self.error = f"Failed to get a response: {message}"
        self._replace(placeholder, ChatTurn(role="assistant", content=FAILURE_REPLY))
        if self.notify is not None:
            self.notify("Error", "Failed to get a response from the assistant.")
