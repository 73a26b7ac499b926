"""Shared fixtures: parse snippets, write throwaway source files, record log calls."""
from pathlib import Path

import pytest

from gardisto.analyzer.parser import LanguageParser
from gardisto.analyzer.recognizer import iter_access_nodes

FIXTURES_DIR = Path(__file__).parent / 'fixtures'
SAMPLE_PROJECT = FIXTURES_DIR / 'sample_project'


def parse_snippet(code: str, language: str = 'javascript'):
    """Root node of a parsed snippet."""
    return LanguageParser(language).parse_source(code.encode('utf-8')).root_node


def first_access(code: str, language: str = 'javascript'):
    """First process.env access node in a snippet."""
    return next(iter_access_nodes(parse_snippet(code, language)))


class LogRecorder:
    """log(level, message) sink that keeps every call."""

    def __init__(self):
        self.calls = []

    def __call__(self, level, message):
        self.calls.append((str(getattr(level, 'value', level)), message))

    def messages(self, level):
        return [message for logged_level, message in self.calls if logged_level == level]


@pytest.fixture
def log():
    return LogRecorder()


@pytest.fixture
def write_source(tmp_path):
    """Write a source file under tmp_path and return its path."""
    def _write(name: str, code: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(code, encoding='utf-8')
        return path
    return _write
