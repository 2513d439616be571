from infrastructure.repositories.catalog_loader import load_pano_labels, load_projects, targets_from_labels
from infrastructure.repositories.json_corpus_repository import JsonCorpusRepository, dump_corpus

__all__ = [
    "JsonCorpusRepository",
    "dump_corpus",
    "load_pano_labels",
    "load_projects",
    "targets_from_labels",
]
