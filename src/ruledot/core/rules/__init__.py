"""Rule AST and DOT rendering API."""

from .ast import Node, Rule
from .dot import Marshaler, render_rule
from .exceptions import (
    AstLoadError,
    DotError,
    DotWriteError,
    EmptyPrimaryError,
    RuleError,
    UnsupportedNodeError,
)
from .loader import load_rule, load_rule_file

__all__ = [
    "Marshaler",
    "render_rule",
    "load_rule",
    "load_rule_file",
    "Node",
    "Rule",
    "RuleError",
    "AstLoadError",
    "DotError",
    "DotWriteError",
    "UnsupportedNodeError",
    "EmptyPrimaryError",
]
