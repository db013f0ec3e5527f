"""FastAPI application exposing locale catalog, preview sessions and SSE events."""

from __future__ import annotations

import logging
import os
import queue
from collections.abc import Generator
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response, StreamingResponse

load_dotenv(dotenv_path=Path(__file__).resolve().parent / ".env")

from globalonboard.agent.translator import build_translator
from globalonboard.common.models import (
    ContentUpdateRequest,
    LocaleDetail,
    LocaleOption,
    LocaleSelectRequest,
    PreviewState,
    SessionCreateRequest,
    TaskUpdateRequest,
    ViewModeRequest,
)
from globalonboard.common.store import EventBus
from globalonboard.locales import UnsupportedLocaleError, get_locale_label, get_template, get_ui, list_locales
from globalonboard.preview.controller import PreviewController
from globalonboard.preview.qa import configured_ratio
from globalonboard.preview.sessions import SessionStore
from globalonboard.preview.views import QaView, SinglePreviewView, render_view
from globalonboard.tools.exporter import EXPORT_MEDIA_TYPE, export_filename, render_onboarding_pack

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Upper bound for ?wait=true.
WAIT_TIMEOUT_SECONDS = 30.0

event_bus = EventBus()
session_store = SessionStore(build_translator(), event_bus, length_alert_ratio=configured_ratio())

app = FastAPI(title="GlobalOnboard API", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _session(session_id: str) -> PreviewController:
    try:
        return session_store.get(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=f"Session not found: {session_id}") from exc


def _settled(controller: PreviewController, wait: bool) -> PreviewState:
    if wait and not controller.wait(WAIT_TIMEOUT_SECONDS):
        logger.warning("Translation for session %s still in flight after %.0fs", controller.session_id, WAIT_TIMEOUT_SECONDS)
    return controller.snapshot()


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/locales", response_model=list[LocaleOption])
def get_locales() -> list[LocaleOption]:
    return list_locales()


@app.get("/locales/{locale}", response_model=LocaleDetail)
def get_locale(locale: str) -> LocaleDetail:
    try:
        return LocaleDetail(
            code=locale,
            label=get_locale_label(locale),
            ui=get_ui(locale),
            template=get_template(locale),
        )
    except UnsupportedLocaleError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@app.post("/sessions", response_model=PreviewState)
def create_session(request: SessionCreateRequest, wait: bool = False) -> PreviewState:
    try:
        controller = session_store.create(request)
    except UnsupportedLocaleError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    logger.info("Created preview session %s", controller.session_id)
    return _settled(controller, wait)


@app.get("/sessions/{session_id}", response_model=PreviewState)
def get_session(session_id: str, wait: bool = False) -> PreviewState:
    return _settled(_session(session_id), wait)


@app.delete("/sessions/{session_id}")
def delete_session(session_id: str) -> dict[str, str]:
    try:
        session_store.delete(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=f"Session not found: {session_id}") from exc
    return {"status": "deleted"}


@app.patch("/sessions/{session_id}/content", response_model=PreviewState)
def update_content(session_id: str, request: ContentUpdateRequest, wait: bool = False) -> PreviewState:
    controller = _session(session_id)
    if request.company_name is not None:
        controller.set_company_name(request.company_name)
    if request.role is not None:
        controller.set_role(request.role)
    if request.welcome_note is not None:
        controller.set_welcome_note(request.welcome_note)
    return _settled(controller, wait)


@app.patch("/sessions/{session_id}/tasks/{index}", response_model=PreviewState)
def update_task(session_id: str, index: int, request: TaskUpdateRequest) -> PreviewState:
    controller = _session(session_id)
    updates: dict[str, Any] = request.model_dump(exclude_none=True)
    if not updates:
        raise HTTPException(status_code=400, detail="title or description is required")
    try:
        for field, value in updates.items():
            controller.update_task(index, field, value)
    except IndexError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return controller.snapshot()


@app.put("/sessions/{session_id}/locale", response_model=PreviewState)
def select_locale(session_id: str, request: LocaleSelectRequest, wait: bool = False) -> PreviewState:
    controller = _session(session_id)
    try:
        controller.select_locale(request.locale)
    except UnsupportedLocaleError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _settled(controller, wait)


@app.put("/sessions/{session_id}/view-mode", response_model=PreviewState)
def set_view_mode(session_id: str, request: ViewModeRequest) -> PreviewState:
    controller = _session(session_id)
    controller.set_view_mode(request.view_mode)
    return controller.snapshot()


@app.get("/sessions/{session_id}/view", response_model=SinglePreviewView | QaView)
def get_view(session_id: str, wait: bool = False) -> SinglePreviewView | QaView:
    return render_view(_settled(_session(session_id), wait))


@app.get("/sessions/{session_id}/export")
def export_pack(session_id: str, wait: bool = True) -> Response:
    state = _settled(_session(session_id), wait)
    filename = export_filename(state.selected_locale)
    return Response(
        render_onboarding_pack(state),
        media_type=EXPORT_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@app.get("/sessions/{session_id}/events")
def stream_events(session_id: str) -> StreamingResponse:
    _session(session_id)
    session_queue = event_bus.get_queue(session_id)

    def gen() -> Generator[str, None, None]:
        while True:
            try:
                event = session_queue.get(timeout=25)
            except queue.Empty:
                yield ": keepalive\n\n"
                continue
            yield f"data: {event}\n\n"

    return StreamingResponse(gen(), media_type="text/event-stream")
