"""Result model for environment variable checks."""
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Tuple


@dataclass(frozen=True)
class CodeLocation:
    """Where an env access occurred. Line and column are 1-based.

    File-level failures use line 0 / column 0.
    """
    file_path: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.file_path}:{self.line}:{self.column}"


@dataclass(frozen=True)
class UsageRecord:
    """Classification of the first occurrence of one env variable."""
    variable: str
    exists: bool
    location: CodeLocation
    current_value: Optional[str] = None
    default_value: Optional[str] = None  # raw source text, never evaluated


class DiagnosticKind(str, Enum):
    ERROR = 'error'
    WARNING = 'warning'


@dataclass(frozen=True)
class Diagnostic:
    """An error (must fix) or warning (should review) tied to a location."""
    kind: DiagnosticKind
    variable: str
    location: CodeLocation
    message: str

    @classmethod
    def error(cls, variable: str, location: CodeLocation, message: str) -> 'Diagnostic':
        return cls(DiagnosticKind.ERROR, variable, location, message)

    @classmethod
    def warning(cls, variable: str, location: CodeLocation, message: str) -> 'Diagnostic':
        return cls(DiagnosticKind.WARNING, variable, location, message)

    @property
    def is_error(self) -> bool:
        return self.kind is DiagnosticKind.ERROR

    def __str__(self) -> str:
        return f"{self.location} {self.message}"


@dataclass(frozen=True)
class ProcessingResult:
    """Everything one run produced. Built once by the checker, never mutated."""
    errors: Tuple[Diagnostic, ...] = ()
    warnings: Tuple[Diagnostic, ...] = ()
    error_count: int = 0
    checked_variables: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def has_errors(self) -> bool:
        return self.error_count > 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0
