"""Find the JS/TS files to scan under a project root."""
from fnmatch import fnmatch
from pathlib import Path
from typing import List, Optional, Sequence

from gardisto.analyzer.parser import LanguageParser
from gardisto.errors import FileSystemError
from gardisto.utils.logger import LogLevel, Logger, null_logger

EXCLUDED_DIRS = {
    'node_modules', '.git', '.hg', '.svn',
    'dist', 'build', 'out', 'coverage',
    '.next', '.nuxt', '.turbo', '.cache',
    'vendor', '__pycache__',
}


def matches_any(relative_path: str, patterns: Sequence[str]) -> bool:
    """Glob match against the root-relative path or just the file name.

    `*.test.ts` matches at any depth; `src/*` matches by path.
    """
    name = relative_path.rsplit('/', 1)[-1]
    return any(fnmatch(relative_path, pattern) or fnmatch(name, pattern) for pattern in patterns)


def should_check_file(relative_path: str, include: Sequence[str], exclude: Sequence[str]) -> bool:
    if include and not matches_any(relative_path, include):
        return False
    return not matches_any(relative_path, exclude)


def discover_source_files(root: str | Path, include: Optional[Sequence[str]] = None,
                          exclude: Optional[Sequence[str]] = None,
                          log: Logger = null_logger) -> List[Path]:
    """Collect supported source files under root in a stable order.

    Args:
        root: Project directory
        include: Glob patterns a file must match (empty = everything)
        exclude: Glob patterns that drop a file
        log: log(level, message) sink

    Returns:
        Sorted list of file paths

    Raises:
        FileSystemError: If root is not a directory
    """
    root = Path(root)
    include = list(include or [])
    exclude = list(exclude or [])

    if not root.is_dir():
        raise FileSystemError(f"Not a directory: {root}", {'path': str(root)})

    log(LogLevel.DEBUG, f"Scanning directory: {root}")
    files = []
    for file_path in sorted(root.rglob('*')):
        relative = file_path.relative_to(root)
        if any(part in EXCLUDED_DIRS for part in relative.parts[:-1]):
            continue
        if not file_path.is_file() or not LanguageParser.is_supported(file_path):
            continue
        if should_check_file(relative.as_posix(), include, exclude):
            log(LogLevel.DEBUG, f"Adding file: {file_path}")
            files.append(file_path)

    return files
