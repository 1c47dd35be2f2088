"""DOT renderer for rule expressions.

Walks a parsed rule depth-first and streams Graphviz node and edge
declarations to a text sink. Operators and leaf values have no node of
their own in the AST, so they are drawn as synthetic nodes.
"""

import io
from dataclasses import dataclass
from typing import Protocol

from ruledot.core.logging import get_logger

from .ast import (
    Array,
    ArrayComparison,
    BitOperation,
    BooleanExpression,
    Comparison,
    Expression,
    Node,
    Primary,
    Rule,
    ScalarComparison,
    Unary,
)
from .exceptions import DotError, DotWriteError, EmptyPrimaryError, UnsupportedNodeError

logger = get_logger(__name__)

AST_NODE_TYPES = (
    Rule,
    BooleanExpression,
    Expression,
    Comparison,
    ScalarComparison,
    ArrayComparison,
    Array,
    BitOperation,
    Unary,
    Primary,
)


class TextSink(Protocol):
    """Anything accepting text writes, e.g. an open file or io.StringIO."""

    def write(self, s: str, /) -> object: ...


@dataclass(frozen=True)
class SyntheticNode:
    """A graph-only node standing for an operator or a leaf value."""

    id: str
    label: str


class Marshaler:
    """Converts a rule AST to the DOT format."""

    def __init__(self, sink: TextSink):
        self.sink = sink
        self._synthetic_count = 0
        self._node_count = 0
        self._edge_count = 0

    def marshal_rule(self, rule: Rule) -> None:
        """Write the DOT document for a rule to the sink.

        Args:
            rule: Root of the parsed rule.

        Raises:
            DotWriteError: If the sink rejects a write.
            UnsupportedNodeError: If the tree holds an unknown node type.
            EmptyPrimaryError: If a Primary has no alternative set.

        Output already written when an error is raised is left in the
        sink and must be discarded by the caller.
        """
        self._synthetic_count = 0
        self._node_count = 0
        self._edge_count = 0

        try:
            self._write("digraph {\n")
            self._write_node(rule.boolean_expression)
            self._write("}\n")
        except DotError as e:
            logger.warning(
                "DOT rendering aborted",
                error=str(e),
                nodes_written=self._node_count,
            )
            raise

        logger.debug(
            "Rendered rule to DOT",
            nodes=self._node_count,
            edges=self._edge_count,
        )

    def _write(self, s: str) -> None:
        try:
            self.sink.write(s)
        except (OSError, ValueError) as e:
            raise DotWriteError(f"failed to write DOT output: {e}") from e

    def _write_node(self, node: Node | SyntheticNode) -> None:
        """Declare a node, then each edge followed by the child's subtree."""
        node_id = self._node_id(node)
        self._write(f'{node_id}[label="{self._label(node)}"]\n')
        self._node_count += 1

        for child in self._children(node):
            self._write(f"{node_id} -> {self._node_id(child)}\n")
            self._edge_count += 1
            self._write_node(child)

    def _node_id(self, node: object) -> str:
        if isinstance(node, SyntheticNode):
            return node.id
        if isinstance(node, AST_NODE_TYPES):
            return f"{node.kind}{node.pos.offset}"
        raise UnsupportedNodeError(node)

    def _label(self, node: Node | SyntheticNode) -> str:
        if isinstance(node, SyntheticNode):
            return node.label
        return node.kind

    def _synthetic(self, kind: str, label: str) -> SyntheticNode:
        # '_' keeps synthetic ids apart from offset based ones (Array3 vs Array_3)
        self._synthetic_count += 1
        return SyntheticNode(id=f"{kind}_{self._synthetic_count}", label=label)

    def _operator(self, op: str) -> SyntheticNode:
        return self._synthetic("Op", f"Op\\n{op}")

    def _children(self, node: object) -> list[Node | SyntheticNode]:  # noqa: C901
        """List the children of a node in display order."""
        if isinstance(node, SyntheticNode):
            return []

        if isinstance(node, Rule):
            return [node.boolean_expression]

        if isinstance(node, BooleanExpression):
            return [node.expression]

        if isinstance(node, Expression):
            children: list[Node | SyntheticNode] = [node.comparison]
            if node.op is not None:
                children.append(self._operator(node.op))
            if node.next is not None:
                children.append(node.next)
            return children

        if isinstance(node, Comparison):
            children = [node.bit_operation]
            if node.array_comparison is not None:
                children.append(node.array_comparison)
            if node.scalar_comparison is not None:
                children.append(node.scalar_comparison)
            return children

        if isinstance(node, ArrayComparison):
            return [self._operator(node.op), node.array]

        if isinstance(node, ScalarComparison):
            return [self._operator(node.op), node.next]

        if isinstance(node, Array):
            # strings win when both are set; neither gives an empty label
            if node.strings:
                label = ",".join(node.strings)
            else:
                label = ", ".join(str(n) for n in node.numbers)
            return [self._synthetic("Array", label)]

        if isinstance(node, BitOperation):
            children = [node.unary]
            if node.op is not None:
                children.append(self._operator(node.op))
            if node.next is not None:
                children.append(node.next)
            return children

        if isinstance(node, Unary):
            children = []
            if node.op is not None:
                children.append(self._operator(node.op))
            if node.unary is not None:
                children.append(node.unary)
            if node.primary is not None:
                children.append(node.primary)
            return children

        if isinstance(node, Primary):
            return [self._primary_child(node)]

        raise UnsupportedNodeError(node)

    def _primary_child(self, node: Primary) -> Node | SyntheticNode:
        if node.ident is not None:
            return self._synthetic("Ident", f"Ident\\n{node.ident}")
        if node.number is not None:
            return self._synthetic("Number", f"Number\\n{node.number}")
        if node.string is not None:
            return self._synthetic("String", f"String\\n{node.string}")
        if node.sub_expression is not None:
            return node.sub_expression
        raise EmptyPrimaryError(node.pos.offset)


def render_rule(rule: Rule) -> str:
    """Render a rule to a DOT document held in memory.

    Examples:
        >>> print(render_rule(rule))  # doctest: +SKIP
        digraph {
        BooleanExpression0[label="BooleanExpression"]
        ...
        }
    """
    buffer = io.StringIO()
    Marshaler(buffer).marshal_rule(rule)
    return buffer.getvalue()
