"""Recognize `process.env` reads and resolve the variable names they refer to.

Recognized forms:

    process.env.NAME          process.env?.NAME
    process.env["NAME"]       process.env['NAME']
    process["env"].NAME       process['env']["NAME"]

`process[someVar]` is never treated as the env object, and
`process.env[someVar]` is recognized as an access but its name cannot be
resolved (UnresolvedNameError).
"""
from typing import Iterator
from tree_sitter import Node

from gardisto.analyzer.shapes import (
    IndexAccess,
    MemberAccess,
    node_text,
    shape_of,
    string_literal_value,
    unwrap,
)
from gardisto.errors import UnresolvedNameError

ENV_NAMESPACE = 'process'
ENV_PROPERTY = 'env'


def is_env_root(node: Node) -> bool:
    """True for `process.env`, `process["env"]` and `process['env']`."""
    shape = shape_of(unwrap(node))

    if isinstance(shape, MemberAccess):
        obj = unwrap(shape.object)
        return (obj.type == 'identifier' and node_text(obj) == ENV_NAMESPACE
                and node_text(shape.property) == ENV_PROPERTY)

    if isinstance(shape, IndexAccess):
        obj = unwrap(shape.object)
        return (obj.type == 'identifier' and node_text(obj) == ENV_NAMESPACE
                and string_literal_value(shape.index) == ENV_PROPERTY)

    return False


def is_env_access(node: Node) -> bool:
    """True if node reads one member of the env object."""
    shape = shape_of(node)
    if isinstance(shape, (MemberAccess, IndexAccess)):
        return is_env_root(shape.object)
    return False


def extract_variable_name(node: Node) -> str:
    """Return the variable name read by a recognized access node.

    Raises:
        UnresolvedNameError: If the key is computed rather than a literal
    """
    shape = shape_of(node)

    if isinstance(shape, MemberAccess):
        return node_text(shape.property)

    if isinstance(shape, IndexAccess):
        name = string_literal_value(shape.index)
        if name is not None:
            return name
        raise UnresolvedNameError(
            f"Unable to determine environment variable name from {node_text(node)}",
            {'index': node_text(shape.index), 'line': node.start_point[0] + 1}
        )

    raise UnresolvedNameError(
        f"Not an environment variable access: {node.type}",
        {'line': node.start_point[0] + 1}
    )


def walk(root: Node) -> Iterator[Node]:
    """Pre-order, document-order traversal without recursion."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def iter_access_nodes(root: Node) -> Iterator[Node]:
    """Lazily yield every env access node under root, in document order."""
    for node in walk(root):
        if is_env_access(node):
            yield node
