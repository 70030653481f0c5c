from app.registry.exceptions import DocumentNotFoundError, RegistryError
from app.registry.models import (
    Document,
    DocumentStatus,
    DocumentSummary,
    ReconcileReport,
    Selection,
)
from app.registry.registry import DocumentRegistry

__all__ = [
    "Document",
    "DocumentNotFoundError",
    "DocumentRegistry",
    "DocumentStatus",
    "DocumentSummary",
    "ReconcileReport",
    "RegistryError",
    "Selection",
]
