from __future__ import annotations


class PasteError(Exception):
    """Base class for errors raised by pastebin components."""


class ConfigError(PasteError):
    pass


class InvalidPath(PasteError):
    def __init__(self, identifier: str, reason: str = "escapes_storage_root") -> None:
        super().__init__(f"invalid path {identifier!r}: {reason}")
        self.identifier = identifier
        self.reason = reason


class StorageError(PasteError):
    """Filesystem failure while creating, reading or writing a blob."""
