"""
Assistant Service — the boundary to the external language-model chat.

The assistant is opaque to the rest of the app: text in, text out, nothing
written back into any repository. The model client is created lazily so the
app starts fine without the optional dependency or an API key.
"""

from __future__ import annotations

import logging
import os
from typing import List, Tuple

logger = logging.getLogger(__name__)

API_KEY_ENV = "GOOGLE_API_KEY"
SYSTEM_PROMPT = (
    "You are a concise productivity assistant. Help the user plan their day, "
    "break work into tasks, and keep notes short and actionable."
)


class AssistantUnavailable(RuntimeError):
    """Raised when no model client can be built."""


class AssistantService:
    """Keeps the running conversation and forwards it to the chat model."""

    def __init__(self, model: str = "gemini-1.5-flash", client=None) -> None:
        self.model = model
        self._client = client
        self.history: List[Tuple[str, str]] = []  # (role, text)

    def is_available(self) -> bool:
        if self._client is not None:
            return True
        return bool(os.environ.get(API_KEY_ENV)) and _langchain_installed()

    def ask(self, prompt: str) -> str:
        prompt = prompt.strip()
        if not prompt:
            raise ValueError("Prompt is empty.")
        client = self._get_client()
        messages = [("system", SYSTEM_PROMPT), *self.history, ("human", prompt)]
        reply = client.invoke(messages)
        text = getattr(reply, "content", reply)
        if not isinstance(text, str):
            text = str(text)
        self.history.append(("human", prompt))
        self.history.append(("ai", text))
        return text

    def clear(self) -> None:
        self.history.clear()

    def _get_client(self):
        if self._client is not None:
            return self._client
        if not os.environ.get(API_KEY_ENV):
            raise AssistantUnavailable(f"Set {API_KEY_ENV} to enable the assistant.")
        try:
            from langchain_google_genai import ChatGoogleGenerativeAI
        except ImportError as e:
            raise AssistantUnavailable(
                "Install the 'assistant' extra (langchain-google-genai)."
            ) from e
        self._client = ChatGoogleGenerativeAI(model=self.model, temperature=0.3)
        logger.info("Assistant client created for model %s", self.model)
        return self._client


def _langchain_installed() -> bool:
    try:
        import langchain_google_genai  # noqa: F401
    except ImportError:
        return False
    return True


def safe_ask(service: AssistantService, prompt: str) -> Tuple[bool, str]:
    """ask() for worker threads: never raises, returns (ok, text)."""
    try:
        return True, service.ask(prompt)
    except AssistantUnavailable as e:
        return False, str(e)
    except Exception as e:  # network / provider errors end up in the chat
        logger.exception("Assistant request failed.")
        return False, f"Assistant error: {e}"
