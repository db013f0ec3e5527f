"""In-memory registry of preview sessions."""

from __future__ import annotations

import threading

from globalonboard.agent.translator import Translator
from globalonboard.common.models import SessionCreateRequest
from globalonboard.common.store import EventBus, new_id
from globalonboard.preview.controller import Dispatch, PreviewController
from globalonboard.preview.qa import LENGTH_ALERT_RATIO


class SessionStore:
    """Holds one PreviewController per session. Nothing is persisted."""

    def __init__(
        self,
        translator: Translator,
        event_bus: EventBus,
        *,
        dispatch: Dispatch | None = None,
        length_alert_ratio: float = LENGTH_ALERT_RATIO,
    ) -> None:
        self.translator = translator
        self.event_bus = event_bus
        self.dispatch = dispatch
        self.length_alert_ratio = length_alert_ratio
        self._sessions: dict[str, PreviewController] = {}
        self._lock = threading.Lock()

    def create(self, request: SessionCreateRequest) -> PreviewController:
        session_id = new_id("ses")
        controller = PreviewController(
            self.translator,
            session_id=session_id,
            event_bus=self.event_bus,
            dispatch=self.dispatch,
            length_alert_ratio=self.length_alert_ratio,
            company_name=request.company_name,
            role=request.role,
            welcome_note=request.welcome_note,
            locale=request.locale,
            view_mode=request.view_mode,
        )
        with self._lock:
            self._sessions[session_id] = controller
        return controller

    def get(self, session_id: str) -> PreviewController:
        with self._lock:
            return self._sessions[session_id]

    def delete(self, session_id: str) -> None:
        with self._lock:
            del self._sessions[session_id]
        self.event_bus.drop(session_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
