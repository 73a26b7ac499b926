"""Exception hierarchy for Gardisto.

Only file-level failures and configuration problems ever reach the caller.
Node-level failures (UnresolvedNameError, NodeProcessingError) are caught by
the checker, logged, and the traversal moves on.
"""
from typing import Any, Dict, Optional


class GardistoError(Exception):
    """Base error carrying a machine-readable code and optional context."""

    def __init__(self, message: str, code: str = 'GARDISTO_ERROR',
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Structured form for logging.

        Returns:
            Dict with name, message, code and context
        """
        return {
            'name': type(self).__name__,
            'message': self.message,
            'code': self.code,
            'context': self.context,
        }


class ConfigurationError(GardistoError):
    """Invalid CLI options or configuration values."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, 'CONFIG_ERROR', context)


class FileSystemError(GardistoError):
    """Directory scanning failed."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None,
                 code: str = 'FILESYSTEM_ERROR'):
        super().__init__(message, code, context)


class FileReadError(FileSystemError):
    """A single source file could not be read."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context, code='FILE_READ_ERROR')


class ParseError(GardistoError):
    """A source file could not be turned into a syntax tree."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, 'PARSE_ERROR', context)


class UnresolvedNameError(GardistoError):
    """An env access uses a computed key, e.g. process.env[name]."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, 'UNRESOLVED_NAME', context)


class NodeProcessingError(GardistoError):
    """Unexpected failure while classifying one access node."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, 'NODE_PROCESSING_ERROR', context)
