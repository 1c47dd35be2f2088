"""Pytest configuration for all tests.

Rule ASTs are built by hand here, the way the external parser would
produce them, with offsets matching the rule text in each docstring.
"""

from typing import Callable

import pytest
import structlog

from ruledot.core.config import get_settings
from ruledot.core.logging import configure_default_logging
from ruledot.core.rules.ast import (
    Array,
    ArrayComparison,
    BitOperation,
    BooleanExpression,
    Comparison,
    Expression,
    Position,
    Primary,
    Rule,
    ScalarComparison,
    Unary,
)


def _operand(offset: int, **primary: object) -> BitOperation:
    pos = Position(offset=offset, column=offset)
    return BitOperation(pos=pos, unary=Unary(pos=pos, primary=Primary(pos=pos, **primary)))


def _rule(expression: Expression, text: str = "") -> Rule:
    pos = Position(offset=0)
    return Rule(
        pos=pos,
        boolean_expression=BooleanExpression(pos=pos, expression=expression),
        expr=text,
    )


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Make every test read settings from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _reset_logging():
    """Restore the package logging defaults after each test."""
    yield
    structlog.reset_defaults()
    configure_default_logging()


@pytest.fixture
def operand() -> Callable[..., BitOperation]:
    """Factory for a BitOperation -> Unary -> Primary chain at an offset."""
    return _operand


@pytest.fixture
def make_rule() -> Callable[..., Rule]:
    """Factory wrapping an Expression into a Rule."""
    return _rule


@pytest.fixture
def scalar_rule() -> Rule:
    """a == 1"""
    pos = Position(offset=0)
    comparison = Comparison(
        pos=pos,
        bit_operation=_operand(0, ident="a"),
        scalar_comparison=ScalarComparison(
            pos=Position(offset=2, column=2), op="==", next=_operand(5, number=1)
        ),
    )
    return _rule(Expression(pos=pos, comparison=comparison), "a == 1")


@pytest.fixture
def array_rule() -> Rule:
    """a in ["x","y"]"""
    pos = Position(offset=0)
    comparison = Comparison(
        pos=pos,
        bit_operation=_operand(0, ident="a"),
        array_comparison=ArrayComparison(
            pos=Position(offset=2, column=2),
            op="in",
            array=Array(pos=Position(offset=5, column=5), strings=["x", "y"]),
        ),
    )
    return _rule(Expression(pos=pos, comparison=comparison), 'a in ["x","y"]')


@pytest.fixture
def chained_rule() -> Rule:
    """a == 1 && b == 1"""
    left = Comparison(
        pos=Position(offset=0),
        bit_operation=_operand(0, ident="a"),
        scalar_comparison=ScalarComparison(
            pos=Position(offset=2), op="==", next=_operand(5, number=1)
        ),
    )
    right = Comparison(
        pos=Position(offset=10),
        bit_operation=_operand(10, ident="b"),
        scalar_comparison=ScalarComparison(
            pos=Position(offset=12), op="==", next=_operand(15, number=1)
        ),
    )
    expression = Expression(
        pos=Position(offset=0),
        comparison=left,
        op="&&",
        next=Expression(pos=Position(offset=10), comparison=right),
    )
    return _rule(expression, "a == 1 && b == 1")


@pytest.fixture
def nested_rule() -> Rule:
    """!(a & 4 == 4) || c in [1, 2]"""
    inner_comparison = Comparison(
        pos=Position(offset=2),
        bit_operation=BitOperation(
            pos=Position(offset=2),
            unary=Unary(pos=Position(offset=2), primary=Primary(pos=Position(offset=2), ident="a")),
            op="&",
            next=_operand(6, number=4),
        ),
        scalar_comparison=ScalarComparison(
            pos=Position(offset=8), op="==", next=_operand(11, number=4)
        ),
    )
    negated = Unary(
        pos=Position(offset=0),
        op="!",
        unary=Unary(
            pos=Position(offset=1),
            primary=Primary(
                pos=Position(offset=1),
                sub_expression=Expression(pos=Position(offset=2), comparison=inner_comparison),
            ),
        ),
    )
    left = Comparison(
        pos=Position(offset=0),
        bit_operation=BitOperation(pos=Position(offset=0), unary=negated),
    )
    right = Comparison(
        pos=Position(offset=17),
        bit_operation=_operand(17, ident="c"),
        array_comparison=ArrayComparison(
            pos=Position(offset=19),
            op="in",
            array=Array(pos=Position(offset=22), numbers=[1, 2]),
        ),
    )
    expression = Expression(
        pos=Position(offset=0),
        comparison=left,
        op="||",
        next=Expression(pos=Position(offset=17), comparison=right),
    )
    return _rule(expression, "!(a & 4 == 4) || c in [1, 2]")
