class RegistryError(Exception):
    """Base exception for all document registry errors."""


class DocumentNotFoundError(RegistryError):
    """Raised when no primary record exists for a document id."""
