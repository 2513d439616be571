"""FastAPI layer that exposes chat and navigation routing."""
from __future__ import annotations

from fastapi import Depends, FastAPI
from pydantic import BaseModel, Field

from application.use_cases.answer_question import answer_question
from application.use_cases.route_navigation import route_navigation
from domain.entities import NamedTarget
from infrastructure.config import Container, build_default_container
from infrastructure.repositories.catalog_loader import targets_from_labels
from ui.logging_utils import setup_logging

setup_logging()
app = FastAPI(title="FAQ Chatbot API")

_container: Container | None = None


def get_container() -> Container:
    global _container
    if _container is None:
        _container = build_default_container()
    return _container


class ChatRequest(BaseModel):
    question: str = Field(..., min_length=1)
    session_id: str = "default"


class ChatResponse(BaseModel):
    answer: str
    via: str
    id: str | None = None
    score: float | None = None


class RouteRequest(BaseModel):
    question: str = Field(..., min_length=1)
    panoramas: list[str] | None = None
    projects: list[str] | None = None


class RouteResponse(BaseModel):
    intent: str
    target: str | None = None
    url: str | None = None


class ReloadResponse(BaseModel):
    entries: int


def _project_targets(titles: list[str] | None, known: list[NamedTarget]) -> list[NamedTarget]:
    if titles is None:
        return known
    urls = {target.label.lower(): target.url for target in known}
    return [
        NamedTarget(label=target.label, kind="project", url=urls.get(target.label.lower()))
        for target in targets_from_labels(titles, "project")
    ]


@app.get("/")
def health_endpoint() -> dict[str, str]:
    return {"status": "ok", "message": "FAQ chatbot backend running"}


@app.post("/api/chat", response_model=ChatResponse)
def chat_endpoint(payload: ChatRequest, container: Container = Depends(get_container)) -> ChatResponse:
    result = answer_question(
        container.sessions.expand(payload.session_id, payload.question),
        corpus=container.corpus.snapshot(),
        embedder=container.embedder,
        rewriter=container.rewriter,
        cache=container.cache,
        gate=container.gate,
        validator=container.validator,
        weights=container.config.weights,
        limit=container.config.top_k,
    )
    return ChatResponse(answer=result.answer, via=result.via, id=result.entry_id, score=result.score)


@app.post("/api/route", response_model=RouteResponse)
def route_endpoint(payload: RouteRequest, container: Container = Depends(get_container)) -> RouteResponse:
    panoramas = container.panoramas
    if payload.panoramas is not None:
        panoramas = targets_from_labels(payload.panoramas, "pano")
    match = route_navigation(
        payload.question,
        panoramas=panoramas,
        projects=_project_targets(payload.projects, container.projects),
        max_edit_distance=container.config.max_edit_distance,
    )
    if match is None:
        return RouteResponse(intent="school")
    return RouteResponse(intent=match.target.kind, target=match.target.label, url=match.target.url)


@app.post("/api/reload", response_model=ReloadResponse)
def reload_endpoint(container: Container = Depends(get_container)) -> ReloadResponse:
    snapshot = container.corpus.reload()
    return ReloadResponse(entries=len(snapshot.entries))
