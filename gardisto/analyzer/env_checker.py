"""Drive recognition, classification and heuristics across a set of files.

Each file is parsed, its env access nodes are streamed in document order,
and every variable name is classified the first time it is seen in the run.
One unreadable file or one odd node never aborts the run.
"""
from pathlib import Path
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Set, Tuple
from tree_sitter import Node

from gardisto.analyzer.classifier import classify
from gardisto.analyzer.environment import ProcessEnvironment
from gardisto.analyzer.heuristics import check_heuristics
from gardisto.analyzer.models import CodeLocation, Diagnostic, ProcessingResult, UsageRecord
from gardisto.analyzer.parser import SourceFile, parse_file
from gardisto.analyzer.recognizer import extract_variable_name, iter_access_nodes
from gardisto.errors import NodeProcessingError, UnresolvedNameError
from gardisto.utils.logger import LogLevel, Logger, describe_error

# Files per chunk; parsed trees are dropped after every chunk
CHUNK_SIZE = 50

UNKNOWN_VARIABLE = 'unknown'

ParseFn = Callable[[Path], SourceFile]


class ParseCache:
    """Parsed trees for the current run, keyed by resolved file path."""

    def __init__(self, parse: ParseFn):
        self._parse = parse
        self._trees: Dict[str, SourceFile] = {}

    def get(self, file_path: str | Path) -> SourceFile:
        key = str(Path(file_path).resolve())
        if key not in self._trees:
            self._trees[key] = self._parse(Path(file_path))
        return self._trees[key]

    def clear(self) -> None:
        self._trees.clear()

    def __len__(self) -> int:
        return len(self._trees)


def usage_diagnostics(record: UsageRecord, show_default_values: bool) -> List[Diagnostic]:
    """Existence diagnostic for a classified variable (empty when it is set)."""
    if record.exists:
        return []

    if record.default_value is None:
        return [Diagnostic.error(
            record.variable,
            record.location,
            f"Missing required environment variable: {record.variable}"
        )]

    message = f"Environment variable {record.variable} is not set, but has a default value."
    if show_default_values:
        message += f" Default value: {record.default_value}"
    return [Diagnostic.warning(record.variable, record.location, message)]


def _check_access(node: Node, file_path: str, seen: Set[str], log: Logger,
                  show_default_values: bool, environment) -> Optional[Tuple[str, List[Diagnostic]]]:
    """Diagnostics for one access node, or None when it is skipped.

    Nothing is recorded here; the caller commits the name and diagnostics
    together, so a node that fails halfway leaves no trace in the result.
    """
    try:
        name = extract_variable_name(node)
    except UnresolvedNameError as e:
        log(LogLevel.ERROR, f"Skipping access in {file_path}: {e.message}")
        return None

    if name in seen:
        return None

    log(LogLevel.DEBUG, f"Checking environment variable: {name}")
    try:
        record = classify(name, node, file_path, environment)
        diagnostics = usage_diagnostics(record, show_default_values)
        diagnostics.extend(check_heuristics(name, record.current_value, record.location))
    except Exception as e:
        error = NodeProcessingError(
            f"Error processing environment variable {name}: {describe_error(e)}",
            {'file_path': file_path, 'line': node.start_point[0] + 1}
        )
        log(LogLevel.ERROR, error.message)
        return None

    return name, diagnostics


def _check_source(source: SourceFile, file_path: str, seen: Set[str], log: Logger,
                  show_default_values: bool, environment) -> Iterator[Tuple[str, List[Diagnostic]]]:
    """Stream (name, diagnostics) for every first-seen variable in one file."""
    root = source.tree.root_node
    if root.has_error:
        log(LogLevel.DEBUG, f"Syntax errors in {file_path}; checking the recovered tree")

    for node in iter_access_nodes(root):
        outcome = _check_access(node, file_path, seen, log, show_default_values, environment)
        if outcome is not None:
            yield outcome


def process_files(files: Iterable[str | Path], log: Logger, show_default_values: bool,
                  environment=None, parse: Optional[ParseFn] = None) -> ProcessingResult:
    """Check every env variable referenced by the given files.

    Args:
        files: Source files, processed in this order
        log: log(level, message) sink
        show_default_values: Include the fallback source text in warnings
        environment: Lookup with get(name); the live process env by default
        parse: Path -> SourceFile; the tree-sitter adapter by default

    Returns:
        ProcessingResult with errors, warnings and the checked variable names
    """
    if environment is None:
        environment = ProcessEnvironment()
    cache = ParseCache(parse or parse_file)
    files = list(files)

    errors: List[Diagnostic] = []
    warnings: List[Diagnostic] = []
    checked: Set[str] = set()

    try:
        for start in range(0, len(files), CHUNK_SIZE):
            for file_path in files[start:start + CHUNK_SIZE]:
                file_path = str(file_path)
                log(LogLevel.DEBUG, f"Processing file: {file_path}")
                try:
                    source = cache.get(file_path)
                    for name, diagnostics in _check_source(source, file_path, checked, log,
                                                           show_default_values, environment):
                        checked.add(name)
                        for diagnostic in diagnostics:
                            (errors if diagnostic.is_error else warnings).append(diagnostic)
                except Exception as e:
                    reason = describe_error(e)
                    log(LogLevel.ERROR, f"Error processing file {file_path}: {reason}")
                    errors.append(Diagnostic.error(
                        UNKNOWN_VARIABLE,
                        CodeLocation(file_path=file_path, line=0, column=0),
                        f"Failed to process file: {reason}"
                    ))

            cache.clear()
    finally:
        cache.clear()

    return ProcessingResult(
        errors=tuple(errors),
        warnings=tuple(warnings),
        error_count=len(errors),
        checked_variables=frozenset(checked),
    )
