"""Tests for process.env access recognition and name extraction."""
import inspect

import pytest

from gardisto.analyzer.recognizer import (
    extract_variable_name,
    is_env_access,
    is_env_root,
    iter_access_nodes,
)
from gardisto.errors import UnresolvedNameError
from conftest import first_access, parse_snippet


def names(code, language='javascript'):
    """Names of every access in document order; None for computed keys."""
    found = []
    for node in iter_access_nodes(parse_snippet(code, language)):
        try:
            found.append(extract_variable_name(node))
        except UnresolvedNameError:
            found.append(None)
    return found


class TestRecognizedForms:
    """Every supported spelling of an env read."""

    def test_dotted_member_access(self):
        assert names('const key = process.env.API_KEY;') == ['API_KEY']

    def test_string_index_access(self):
        code = 'process.env["DB_HOST"]; process.env[\'DB_PORT\'];'
        assert names(code) == ['DB_HOST', 'DB_PORT']

    def test_env_itself_indexed_by_literal(self):
        code = 'process["env"].FIRST; process[\'env\']["SECOND"];'
        assert names(code) == ['FIRST', 'SECOND']

    def test_optional_chaining(self):
        assert names('const v = process.env?.OPTIONAL_VAR;') == ['OPTIONAL_VAR']

    def test_typescript_assertions(self):
        code = 'const a = process.env.TS_VAR as string;\nconst b = process.env.OTHER_VAR!;'
        assert names(code, 'typescript') == ['TS_VAR', 'OTHER_VAR']

    def test_tsx_expression_container(self):
        code = 'const el = <div>{process.env.TSX_VAR}</div>;'
        assert names(code, 'tsx') == ['TSX_VAR']


class TestRejectedForms:
    """Look-alikes that are not env reads."""

    def test_computed_env_object_is_not_recognized(self):
        assert names('process[envKey].A;') == []

    def test_other_namespaces(self):
        assert names('foo.env.A; env.B; process.environ.C; proc.env.D;') == []

    def test_bare_env_object(self):
        assert names('const all = Object.keys(process.env);') == []

    def test_destructuring_is_not_an_access(self):
        assert names('const { A, B } = process.env;') == []

    def test_member_of_env_value_only_counts_once(self):
        # .length reads from the value, not from process.env
        assert names('const n = process.env.NAME.length;') == ['NAME']


class TestNameExtraction:
    """Resolving the key read by an access node."""

    def test_identifier_key_fails(self):
        node = first_access('const v = process.env[name];')
        with pytest.raises(UnresolvedNameError) as exc_info:
            extract_variable_name(node)
        assert exc_info.value.code == 'UNRESOLVED_NAME'
        assert exc_info.value.context['index'] == 'name'

    def test_template_string_key_fails(self):
        node = first_access('const v = process.env[`PREFIX_${suffix}`];')
        with pytest.raises(UnresolvedNameError):
            extract_variable_name(node)

    def test_nested_dynamic_access(self):
        # outer access fails, inner one still resolves
        assert names('const v = process.env[process.env.KEY_NAME];') == [None, 'KEY_NAME']

    def test_non_access_node_fails(self):
        root = parse_snippet('const x = 1;')
        with pytest.raises(UnresolvedNameError):
            extract_variable_name(root)


class TestTraversal:
    """Order and laziness of iter_access_nodes."""

    def test_document_order(self):
        code = 'configure(process.env.B_VAR, process.env.A_VAR);\nprocess.env.C_VAR;'
        assert names(code) == ['B_VAR', 'A_VAR', 'C_VAR']

    def test_duplicates_are_all_yielded(self):
        code = 'process.env.API_KEY; process.env.API_KEY; process.env["API_KEY"];'
        assert names(code) == ['API_KEY', 'API_KEY', 'API_KEY']

    def test_returns_generator(self):
        nodes = iter_access_nodes(parse_snippet('process.env.X;'))
        assert inspect.isgenerator(nodes)

    def test_predicates(self):
        node = first_access('process.env.X;')
        assert is_env_access(node)
        assert not is_env_root(node)
        assert is_env_root(node.child_by_field_name('object'))
