"""Tree-sitter parser for JavaScript and TypeScript sources."""
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional
from tree_sitter import Language, Parser, Tree
import tree_sitter_javascript as tsjavascript
import tree_sitter_typescript as tstypescript

from gardisto.errors import FileReadError, ParseError


@dataclass
class SourceFile:
    """A parsed file: its path and the tree-sitter Tree built from its bytes."""
    path: Path
    tree: Tree


class LanguageParser:
    """JS/TS parser using tree-sitter v0.22+ API."""

    SUPPORTED_LANGUAGES = {
        '.js': 'javascript',
        '.jsx': 'javascript',
        '.mjs': 'javascript',
        '.cjs': 'javascript',
        '.ts': 'typescript',
        '.mts': 'typescript',
        '.cts': 'typescript',
        '.tsx': 'tsx',
    }

    # Compiled grammars, shared by every parser of the same language
    _languages: Dict[str, Language] = {}

    def __init__(self, language: str):
        """Initialize parser for given language (javascript, typescript, tsx).

        Args:
            language: One of 'javascript', 'typescript', 'tsx'

        Raises:
            ValueError: If language is not supported
        """
        self.language = language
        self.parser = self._create_parser()

    def _create_parser(self) -> Parser:
        """Build a Parser for self.language.

        The grammar modules return PyCapsules that must be wrapped with
        Language() before use.

        Returns:
            Configured Parser instance

        Raises:
            ValueError: If language is not supported
        """
        lang = self._languages.get(self.language)
        if lang is None:
            if self.language == 'javascript':
                lang = Language(tsjavascript.language())
            elif self.language == 'typescript':
                lang = Language(tstypescript.language_typescript())
            elif self.language == 'tsx':
                lang = Language(tstypescript.language_tsx())
            else:
                raise ValueError(f"Unsupported language: {self.language}")
            self._languages[self.language] = lang

        return Parser(lang)

    def parse_source(self, source_code: bytes) -> Tree:
        """Parse raw source bytes.

        Syntax errors do not raise: tree-sitter recovers and marks the
        broken region with ERROR nodes.
        """
        return self.parser.parse(source_code)

    def parse_file(self, file_path: str | Path) -> SourceFile:
        """Read and parse a source file.

        Args:
            file_path: Path to source file to parse

        Returns:
            SourceFile with the parsed tree

        Raises:
            FileReadError: If the file cannot be read
            ParseError: If the file is not valid UTF-8 text
        """
        file_path = Path(file_path)

        try:
            with open(file_path, 'rb') as f:
                source_code = f.read()
        except OSError as e:
            raise FileReadError(
                f"Cannot read {file_path}: {e.strerror or e}",
                {'file_path': str(file_path)}
            ) from e

        try:
            source_code.decode('utf-8')
        except UnicodeDecodeError as e:
            raise ParseError(
                f"{file_path} is not valid UTF-8 text",
                {'file_path': str(file_path), 'position': e.start}
            ) from e

        return SourceFile(path=file_path, tree=self.parse_source(source_code))

    @classmethod
    def from_file_extension(cls, file_path: str | Path) -> Optional['LanguageParser']:
        """Create parser based on file extension.

        Args:
            file_path: Path to determine language from

        Returns:
            LanguageParser instance, or None if extension not supported
        """
        extension = Path(file_path).suffix.lower()

        language = cls.SUPPORTED_LANGUAGES.get(extension)
        if language:
            return cls(language)
        return None

    @classmethod
    def is_supported(cls, file_path: str | Path) -> bool:
        return Path(file_path).suffix.lower() in cls.SUPPORTED_LANGUAGES


def parse_file(file_path: str | Path) -> SourceFile:
    """Parse a file with the grammar matching its extension.

    Raises:
        ParseError: If the extension is not a JS/TS one
        FileReadError: If the file cannot be read
    """
    parser = LanguageParser.from_file_extension(file_path)
    if parser is None:
        raise ParseError(
            f"Unsupported file type: {Path(file_path).suffix or file_path}",
            {'file_path': str(file_path)}
        )
    return parser.parse_file(file_path)
