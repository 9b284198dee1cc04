"""Typed errors raised by the vault core.

Each error also derives from the closest builtin exception so callers that only
know about ``PermissionError`` or ``FileNotFoundError`` keep working.
"""


class VaultError(Exception):
    """Base class for all vault errors."""


class AccessDeniedError(VaultError, PermissionError):
    """Requested path escapes the vault or touches a hidden segment."""


class VaultNotADirectoryError(VaultError, NotADirectoryError):
    """Vault root exists but is not a directory."""


class VaultNotAccessibleError(VaultError, FileNotFoundError):
    """Vault root is missing or cannot be inspected."""


class NoteNotFoundError(VaultError, FileNotFoundError):
    """Operation targets a note that is neither cached nor on disk."""


class NoteParseError(VaultError, ValueError):
    """Note front-matter could not be parsed."""
