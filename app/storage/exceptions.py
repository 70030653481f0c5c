class StorageError(Exception):
    """Raised when the underlying key-value store fails a get or put."""
