"""Classify one env variable usage: does it exist, and does the code supply a fallback?

Default detection walks up from the access node. At every ancestor the
matchers in DEFAULT_MATCHERS are tried in order; the first one that
recognizes the ancestor decides the outcome:

    1. process.env.X || fallback / process.env.X ?? fallback  -> fallback
    2. <condition on process.env.X> ? a : fallback            -> fallback
    3. const v = expr(process.env.X)                          -> expr(...)
       const v = process.env.X                                -> no default

The walk never leaves the enclosing function, block or program.
"""
from dataclasses import dataclass
from typing import Callable, List, Optional
from tree_sitter import Node

from gardisto.analyzer.models import CodeLocation, UsageRecord
from gardisto.analyzer.recognizer import is_env_access, is_env_root
from gardisto.analyzer.shapes import (
    BinaryLogical,
    Conditional,
    VariableDeclInit,
    contains,
    node_text,
    shape_of,
    unwrap,
)

FALLBACK_OPERATORS = {'||', '??'}

SCOPE_BOUNDARIES = {
    'program',
    'statement_block',
    'class_body',
    'function_declaration',
    'function_expression',
    'function',  # older tree-sitter-javascript name for function expressions
    'generator_function',
    'generator_function_declaration',
    'arrow_function',
    'method_definition',
}


@dataclass(frozen=True)
class FallbackMatch:
    """Outcome of a matcher that recognized an ancestor.

    default_text is None when the ancestor ends the search without a
    fallback (a declaration initialized straight from process.env).
    """
    default_text: Optional[str]


Matcher = Callable[[Node, Node], Optional[FallbackMatch]]


def _match_logical_fallback(ancestor: Node, child: Node) -> Optional[FallbackMatch]:
    shape = shape_of(ancestor)
    if (isinstance(shape, BinaryLogical) and shape.operator in FALLBACK_OPERATORS
            and contains(shape.left, child)):
        return FallbackMatch(node_text(shape.right))
    return None


def _match_conditional_fallback(ancestor: Node, child: Node) -> Optional[FallbackMatch]:
    shape = shape_of(ancestor)
    if isinstance(shape, Conditional) and contains(shape.condition, child):
        return FallbackMatch(node_text(shape.when_false))
    return None


def _match_declaration_fallback(ancestor: Node, child: Node) -> Optional[FallbackMatch]:
    shape = shape_of(ancestor)
    if not isinstance(shape, VariableDeclInit) or not contains(shape.initializer, child):
        return None
    initializer = unwrap(shape.initializer)
    if is_env_access(initializer) or is_env_root(initializer):
        return FallbackMatch(None)
    return FallbackMatch(node_text(shape.initializer))


# Order matters: || / ?? bind tighter than ?:, which binds tighter than a declaration
DEFAULT_MATCHERS: List[Matcher] = [
    _match_logical_fallback,
    _match_conditional_fallback,
    _match_declaration_fallback,
]


def find_default_value(node: Node) -> Optional[str]:
    """Source text of the fallback expression guarding an access node, if any."""
    child = node
    ancestor = node.parent
    while ancestor is not None and ancestor.type not in SCOPE_BOUNDARIES:
        for matcher in DEFAULT_MATCHERS:
            match = matcher(ancestor, child)
            if match is not None:
                return match.default_text
        child, ancestor = ancestor, ancestor.parent
    return None


def character_column(node: Node) -> int:
    """0-based column of the node start, counted in characters.

    tree-sitter reports columns in bytes, which drift right of the real
    position after any multi-byte character earlier on the line.
    """
    root = node
    while root.parent is not None:
        root = root.parent

    line_start = node.start_byte - node.start_point[1]
    # bytes before the root node are leading whitespace
    offset = max(line_start, root.start_byte)
    prefix = root.text[offset - root.start_byte:node.start_byte - root.start_byte]
    return (offset - line_start) + len(prefix.decode('utf-8', 'replace'))


def node_location(node: Node, file_path: str) -> CodeLocation:
    """1-based line/column of the node start."""
    row = node.start_point[0]
    return CodeLocation(file_path=str(file_path), line=row + 1, column=character_column(node) + 1)


def variable_exists(value: Optional[str]) -> bool:
    """Unset and blank values both count as missing."""
    return value is not None and value.strip() != ''


def classify(name: str, node: Node, file_path: str, environment) -> UsageRecord:
    """Build the UsageRecord for the first occurrence of `name`.

    Args:
        name: Variable name read by the access node
        node: The access node (process.env.NAME or similar)
        file_path: File the node belongs to, for the location
        environment: Lookup object exposing get(name) -> Optional[str]

    Returns:
        UsageRecord with existence, current value and raw default text
    """
    value = environment.get(name)
    exists = variable_exists(value)

    return UsageRecord(
        variable=name,
        exists=exists,
        location=node_location(node, file_path),
        current_value=value if exists else None,
        default_value=find_default_value(node),
    )
