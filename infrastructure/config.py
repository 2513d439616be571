"""Dependency wiring for the FAQ chatbot engine."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Literal

from application.services.confidence import ConfidenceGate, GateThresholds
from application.services.corpus import CorpusHandle
from application.services.embedding_cache import EmbeddingCache
from application.services.hybrid_ranker import DEFAULT_WEIGHTS, RankingWeights
from application.services.target_resolver import DEFAULT_MAX_EDIT_DISTANCE
from application.use_cases.answer_question import SessionStore
from domain.entities import NamedTarget
from domain.interfaces import Embedder, MeaningValidator, QueryRewriter
from infrastructure.embedding.gemini_embedder import GeminiEmbedder
from infrastructure.embedding.hash_embedder import HashEmbedder
from infrastructure.llm.gemini_client import GeminiClient, GeminiConfig
from infrastructure.query.gemini_rewriter import GeminiQueryRewriter
from infrastructure.query.gemini_validator import GeminiMeaningValidator
from infrastructure.query.simple_rewriter import SimpleQueryRewriter
from infrastructure.repositories.catalog_loader import load_pano_labels, load_projects
from infrastructure.repositories.json_corpus_repository import JsonCorpusRepository

logger = logging.getLogger(__name__)

EmbedderName = Literal["gemini", "sentence-transformers", "hash"]


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(slots=True)
class EngineConfig:
    """Configuration of the engine; thresholds default to the production tuning."""

    corpus_path: str = "data/embeddings.json"
    pano_labels_path: str | None = None
    projects_path: str | None = None
    embedder: EmbedderName = "gemini"
    models_dir: str = "models"
    sentence_model: str = "sentence-transformers/all-MiniLM-L6-v2"
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-2.0-flash"
    gemini_embed_model: str = "text-embedding-004"
    request_timeout: float = 15.0
    min_score: float = 0.10
    gap: float = 0.05
    top_k: int = 5
    max_edit_distance: int = DEFAULT_MAX_EDIT_DISTANCE
    use_rewriter: bool = True
    use_validator: bool = True
    cache_size: int = 1024
    max_sessions: int = 1000
    weights: RankingWeights = field(default_factory=lambda: DEFAULT_WEIGHTS)

    @classmethod
    def from_env(cls) -> EngineConfig:
        defaults = cls()
        return cls(
            corpus_path=os.getenv("FAQBOT_CORPUS_PATH", defaults.corpus_path),
            pano_labels_path=os.getenv("FAQBOT_PANO_LABELS_PATH") or None,
            projects_path=os.getenv("FAQBOT_PROJECTS_PATH") or None,
            embedder=os.getenv("FAQBOT_EMBEDDER", defaults.embedder),  # type: ignore[arg-type]
            models_dir=os.getenv("FAQBOT_MODELS_DIR", defaults.models_dir),
            sentence_model=os.getenv("FAQBOT_SENTENCE_MODEL", defaults.sentence_model),
            gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
            gemini_model=os.getenv("GEMINI_MODEL", defaults.gemini_model),
            gemini_embed_model=os.getenv("GEMINI_EMBED_MODEL", defaults.gemini_embed_model),
            request_timeout=float(os.getenv("FAQBOT_REQUEST_TIMEOUT", defaults.request_timeout)),
            min_score=float(os.getenv("FAQBOT_MIN_SCORE", defaults.min_score)),
            gap=float(os.getenv("FAQBOT_GAP", defaults.gap)),
            top_k=int(os.getenv("FAQBOT_TOP_K", defaults.top_k)),
            max_edit_distance=int(os.getenv("FAQBOT_MAX_EDIT_DISTANCE", defaults.max_edit_distance)),
            use_rewriter=_env_bool("FAQBOT_USE_REWRITER", defaults.use_rewriter),
            use_validator=_env_bool("FAQBOT_USE_VALIDATOR", defaults.use_validator),
            cache_size=int(os.getenv("FAQBOT_CACHE_SIZE", defaults.cache_size)),
            max_sessions=int(os.getenv("FAQBOT_MAX_SESSIONS", defaults.max_sessions)),
        )


@dataclass(slots=True)
class Container:
    """Bundle of the concrete collaborators used by the use cases."""

    config: EngineConfig
    corpus: CorpusHandle
    embedder: Embedder
    rewriter: QueryRewriter
    validator: MeaningValidator | None
    cache: EmbeddingCache
    gate: ConfidenceGate
    panoramas: list[NamedTarget] = field(default_factory=list)
    projects: list[NamedTarget] = field(default_factory=list)
    sessions: SessionStore = field(default_factory=SessionStore)


def _resolve_model_reference(model_ref: str, config: EngineConfig) -> str:
    """Prefer a copy of the model saved under ``models_dir``."""
    local_path = Path(config.models_dir).expanduser() / model_ref
    if local_path.is_dir():
        return str(local_path)
    return model_ref


def _build_sentence_transformers(config: EngineConfig, client: GeminiClient) -> Embedder:
    from infrastructure.embedding.sentence_transformers_embedder import (  # noqa: PLC0415
        SentenceTransformersConfig,
        SentenceTransformersEmbedder,
    )

    model = _resolve_model_reference(config.sentence_model, config)
    return SentenceTransformersEmbedder(SentenceTransformersConfig(model_name=model))


_EMBEDDER_FACTORIES: dict[str, Callable[[EngineConfig, GeminiClient], Embedder]] = {
    "gemini": lambda _config, client: GeminiEmbedder(client),
    "sentence-transformers": _build_sentence_transformers,
    "hash": lambda _config, _client: HashEmbedder(),
}


def build_default_container(config: EngineConfig | None = None) -> Container:
    """Instantiate the default infrastructure stack."""

    cfg = config or EngineConfig.from_env()
    client = GeminiClient(
        GeminiConfig(
            api_key=cfg.gemini_api_key,
            model=cfg.gemini_model,
            embed_model=cfg.gemini_embed_model,
            timeout=cfg.request_timeout,
        )
    )
    try:
        embedder = _EMBEDDER_FACTORIES[cfg.embedder](cfg, client)
    except KeyError as exc:
        raise ValueError(f"Unknown embedder '{cfg.embedder}'") from exc

    corpus = CorpusHandle(JsonCorpusRepository(cfg.corpus_path))
    rewriter: QueryRewriter = SimpleQueryRewriter()
    if cfg.use_rewriter:
        rewriter = GeminiQueryRewriter(client, vocabulary=lambda: corpus.snapshot().vocabulary)
    validator = GeminiMeaningValidator(client) if cfg.use_validator else None
    panoramas = load_pano_labels(cfg.pano_labels_path) if cfg.pano_labels_path else []
    projects = load_projects(cfg.projects_path) if cfg.projects_path else []
    logger.info("Engine configured: embedder=%s corpus=%s", embedder.model_id, cfg.corpus_path)

    return Container(
        config=cfg,
        corpus=corpus,
        embedder=embedder,
        rewriter=rewriter,
        validator=validator,
        cache=EmbeddingCache(max_entries=cfg.cache_size),
        gate=ConfidenceGate(GateThresholds(min_score=cfg.min_score, gap=cfg.gap)),
        panoramas=panoramas,
        projects=projects,
        sessions=SessionStore(max_sessions=cfg.max_sessions),
    )


__all__ = ["EngineConfig", "Container", "build_default_container"]
