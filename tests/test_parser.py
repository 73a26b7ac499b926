"""Tests for the tree-sitter parser adapter."""
import pytest

from gardisto.analyzer.parser import LanguageParser, SourceFile, parse_file
from gardisto.errors import FileReadError, ParseError


class TestLanguageSelection:

    @pytest.mark.parametrize('name, language', [
        ('a.js', 'javascript'),
        ('a.jsx', 'javascript'),
        ('a.cjs', 'javascript'),
        ('a.ts', 'typescript'),
        ('A.TS', 'typescript'),
        ('a.tsx', 'tsx'),
    ])
    def test_from_file_extension(self, name, language):
        assert LanguageParser.from_file_extension(name).language == language

    def test_unsupported_extension(self):
        assert LanguageParser.from_file_extension('a.py') is None
        assert not LanguageParser.is_supported('a.py')

    def test_unknown_language(self):
        with pytest.raises(ValueError):
            LanguageParser('cobol')


class TestParseFile:

    def test_parses_typescript(self, write_source):
        path = write_source('config.ts', 'const port: number = Number(process.env.PORT);\n')
        source = parse_file(path)

        assert isinstance(source, SourceFile)
        assert source.path == path
        assert source.tree.root_node.type == 'program'
        assert not source.tree.root_node.has_error

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileReadError) as exc_info:
            parse_file(tmp_path / 'missing.ts')
        assert exc_info.value.code == 'FILE_READ_ERROR'

    def test_directory(self, tmp_path):
        folder = tmp_path / 'folder.js'
        folder.mkdir()
        with pytest.raises(FileReadError):
            parse_file(folder)

    def test_unsupported_type(self, write_source):
        with pytest.raises(ParseError):
            parse_file(write_source('style.css', 'body {}'))

    def test_syntax_errors_do_not_raise(self):
        tree = LanguageParser('javascript').parse_source(b'const = = ;')
        assert tree.root_node.has_error
