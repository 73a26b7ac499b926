"""Closed set of syntax shapes the env checker cares about.

Tree-sitter hands out untyped nodes tagged by `node.type`. `shape_of()`
turns the few kinds we match on into small typed views carrying only the
fields that matter, so the recognizer and classifier never poke at field
names directly.
"""
from dataclasses import dataclass
from typing import Optional, Union
from tree_sitter import Node


# `a || b`, `a ?? b` provide fallbacks; `&&` is kept so callers can tell it apart
LOGICAL_OPERATORS = {'||', '??', '&&'}

# Wrappers that do not change which value an expression reads
TRANSPARENT_WRAPPERS = {
    'parenthesized_expression',
    'non_null_expression',   # TS: expr!
    'as_expression',         # TS: expr as T
    'satisfies_expression',  # TS: expr satisfies T
}


@dataclass(frozen=True)
class MemberAccess:
    """obj.prop / obj?.prop"""
    node: Node
    object: Node
    property: Node


@dataclass(frozen=True)
class IndexAccess:
    """obj[index]"""
    node: Node
    object: Node
    index: Node


@dataclass(frozen=True)
class BinaryLogical:
    """left || right, left ?? right, left && right"""
    node: Node
    operator: str
    left: Node
    right: Node


@dataclass(frozen=True)
class Conditional:
    """condition ? when_true : when_false"""
    node: Node
    condition: Node
    when_true: Node
    when_false: Node


@dataclass(frozen=True)
class VariableDeclInit:
    """const name = initializer (only declarators that have an initializer)"""
    node: Node
    name: Node
    initializer: Node


Shape = Union[MemberAccess, IndexAccess, BinaryLogical, Conditional, VariableDeclInit]


def node_text(node: Node) -> str:
    return node.text.decode('utf-8', errors='replace')


def unwrap(node: Node) -> Node:
    """Strip parentheses and TS type assertions around an expression."""
    while node.type in TRANSPARENT_WRAPPERS:
        inner = node.child_by_field_name('expression')
        if inner is None:
            # parenthesized_expression has no field name in some grammar versions
            inner = next((c for c in node.named_children if c.type != 'comment'), None)
        if inner is None:
            return node
        node = inner
    return node


def shape_of(node: Node) -> Optional[Shape]:
    """Classify a node into one of the known shapes, or None."""
    if node.type == 'member_expression':
        obj = node.child_by_field_name('object')
        prop = node.child_by_field_name('property')
        if obj is not None and prop is not None:
            return MemberAccess(node, obj, prop)

    elif node.type == 'subscript_expression':
        obj = node.child_by_field_name('object')
        index = node.child_by_field_name('index')
        if obj is not None and index is not None:
            return IndexAccess(node, obj, index)

    elif node.type == 'binary_expression':
        operator = node.child_by_field_name('operator')
        left = node.child_by_field_name('left')
        right = node.child_by_field_name('right')
        if operator is not None and left is not None and right is not None:
            op = operator.type
            if op in LOGICAL_OPERATORS:
                return BinaryLogical(node, op, left, right)

    elif node.type == 'ternary_expression':
        condition = node.child_by_field_name('condition')
        consequence = node.child_by_field_name('consequence')
        alternative = node.child_by_field_name('alternative')
        if condition is not None and consequence is not None and alternative is not None:
            return Conditional(node, condition, consequence, alternative)

    elif node.type == 'variable_declarator':
        name = node.child_by_field_name('name')
        value = node.child_by_field_name('value')
        if name is not None and value is not None:
            return VariableDeclInit(node, name, value)

    return None


def string_literal_value(node: Node) -> Optional[str]:
    """Content of a plain string literal ('x' or "x"), else None.

    Template strings are not literals here, even without substitutions.
    """
    if node.type != 'string':
        return None
    text = node_text(node)
    if len(text) >= 2 and text[0] == text[-1] and text[0] in ('"', "'"):
        return text[1:-1]
    return None


def contains(ancestor: Node, node: Node) -> bool:
    """True if node lies inside ancestor's byte span (inclusive)."""
    return ancestor.start_byte <= node.start_byte and node.end_byte <= ancestor.end_byte
