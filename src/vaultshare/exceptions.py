"""Custom exception hierarchy for vaultshare."""


class VaultShareError(Exception):
    """Base exception for all vaultshare errors."""


class UnknownFileError(VaultShareError):
    """Raised when a file id or alias does not exist."""


class UploadError(VaultShareError):
    """Raised when an upload arrives for a file in the wrong state or with a bad chunk."""


class ConsistencyError(VaultShareError):
    """Raised when data integrity is compromised (e.g. a share pointing at a missing file)."""


class StorageError(VaultShareError):
    """Raised on snapshot persistence failures."""
