"""In-memory event streams for preview sessions."""

from __future__ import annotations

import json
import queue
import uuid
from dataclasses import dataclass
from typing import Any


def new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


@dataclass
class EventBus:
    """In-memory per-session event queues, created when the SSE endpoint subscribes."""

    queues: dict[str, queue.Queue[str]]

    def __init__(self) -> None:
        self.queues = {}

    def publish(self, session_id: str, event: dict[str, Any]) -> None:
        # Only sessions with an open subscription buffer events.
        session_queue = self.queues.get(session_id)
        if session_queue is None:
            return
        session_queue.put(json.dumps(event, default=str))

    def get_queue(self, session_id: str) -> queue.Queue[str]:
        if session_id not in self.queues:
            self.queues[session_id] = queue.Queue()
        return self.queues[session_id]

    def drop(self, session_id: str) -> None:
        self.queues.pop(session_id, None)
