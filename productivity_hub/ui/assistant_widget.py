"""
AI Assistant view — a plain chat box in front of AssistantService.

Requests run on the global QThreadPool; replies come back through a signal
so the transcript is only touched on the GUI thread.
"""

from __future__ import annotations

import html
import logging
from typing import Optional

from PySide6.QtCore import QObject, QThreadPool, Signal, Slot
from PySide6.QtWidgets import (
    QHBoxLayout, QLabel, QLineEdit, QPushButton, QTextBrowser, QVBoxLayout,
    QWidget,
)

from productivity_hub.services.assistant_service import AssistantService, safe_ask

logger = logging.getLogger(__name__)


class _ReplyRelay(QObject):
    finished = Signal(bool, str)


class AssistantWidget(QWidget):
    def __init__(self, service: AssistantService,
                 parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.service = service
        self._relay = _ReplyRelay()
        self._relay.finished.connect(self._on_reply)
        self._setup_ui()
        if not service.is_available():
            self._append("system", "The assistant is offline. Set GOOGLE_API_KEY and install "
                                   "the 'assistant' extra to enable it.")

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 20, 24, 20)

        title = QLabel("AI Assistant")
        title.setObjectName("title")
        layout.addWidget(title)

        self.transcript = QTextBrowser()
        layout.addWidget(self.transcript, 1)

        row = QHBoxLayout()
        self.prompt_input = QLineEdit()
        self.prompt_input.setPlaceholderText("Ask for a plan, a breakdown, a summary…")
        self.prompt_input.returnPressed.connect(self._on_send)
        row.addWidget(self.prompt_input, 1)
        self.send_btn = QPushButton("Send")
        self.send_btn.setObjectName("primary")
        self.send_btn.clicked.connect(self._on_send)
        row.addWidget(self.send_btn)
        clear_btn = QPushButton("Clear")
        clear_btn.clicked.connect(self._on_clear)
        row.addWidget(clear_btn)
        layout.addLayout(row)

    @Slot()
    def _on_send(self) -> None:
        prompt = self.prompt_input.text().strip()
        if not prompt:
            return
        self.prompt_input.clear()
        self._append("you", prompt)
        self.send_btn.setEnabled(False)
        relay = self._relay
        service = self.service
        QThreadPool.globalInstance().start(lambda: relay.finished.emit(*safe_ask(service, prompt)))

    @Slot(bool, str)
    def _on_reply(self, ok: bool, text: str) -> None:
        self._append("assistant" if ok else "error", text)
        self.send_btn.setEnabled(True)

    @Slot()
    def _on_clear(self) -> None:
        self.service.clear()
        self.transcript.clear()

    def _append(self, who: str, text: str) -> None:
        body = html.escape(text).replace("\n", "<br>")
        self.transcript.append(f"<p><b>{who}:</b> {body}</p>")
