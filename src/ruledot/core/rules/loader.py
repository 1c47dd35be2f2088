"""Load rule ASTs exchanged as JSON.

The parser lives outside this package, so rules reach the CLI as JSON
documents mirroring the dataclasses in ``ast``: one object per node,
keyed by field name, with ``pos`` holding ``offset`` and optionally
``line`` and ``column``.
"""

import json
from pathlib import Path
from typing import Any

from .ast import (
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
from .exceptions import AstLoadError


class AstLoader:
    """Builds rule nodes from nested mappings."""

    def load(self, data: Any) -> Rule:
        """Build a Rule from its JSON representation.

        Raises:
            AstLoadError: If a node is missing a required field or a
                field holds a value of the wrong type.
        """
        obj = self._object(data, "rule")
        expr = obj.get("expr", "")
        if not isinstance(expr, str):
            raise AstLoadError("expected a string", "rule.expr")
        return Rule(
            pos=self._position(obj, "rule"),
            boolean_expression=self._boolean_expression(
                self._required(obj, "boolean_expression", "rule"), "rule.boolean_expression"
            ),
            expr=expr,
        )

    def _object(self, data: Any, path: str) -> dict[str, Any]:
        if not isinstance(data, dict):
            raise AstLoadError(f"expected an object, got {type(data).__name__}", path)
        return data

    def _required(self, obj: dict[str, Any], key: str, path: str) -> Any:
        if obj.get(key) is None:
            raise AstLoadError(f"missing required field '{key}'", path)
        return obj[key]

    def _str(self, obj: dict[str, Any], key: str, path: str) -> str:
        value = self._required(obj, key, path)
        if not isinstance(value, str):
            raise AstLoadError("expected a string", f"{path}.{key}")
        return value

    def _optional_str(self, obj: dict[str, Any], key: str, path: str) -> str | None:
        value = obj.get(key)
        if value is not None and not isinstance(value, str):
            raise AstLoadError("expected a string", f"{path}.{key}")
        return value

    def _int(self, value: Any, path: str) -> int:
        # bool is an int subclass but never a valid offset or literal
        if isinstance(value, bool) or not isinstance(value, int):
            raise AstLoadError("expected an integer", path)
        return value

    def _position(self, obj: dict[str, Any], path: str) -> Position:
        pos = self._object(self._required(obj, "pos", path), f"{path}.pos")
        return Position(
            offset=self._int(self._required(pos, "offset", f"{path}.pos"), f"{path}.pos.offset"),
            line=self._int(pos.get("line", 1), f"{path}.pos.line"),
            column=self._int(pos.get("column", 0), f"{path}.pos.column"),
        )

    def _boolean_expression(self, data: Any, path: str) -> BooleanExpression:
        obj = self._object(data, path)
        return BooleanExpression(
            pos=self._position(obj, path),
            expression=self._expression(
                self._required(obj, "expression", path), f"{path}.expression"
            ),
        )

    def _expression(self, data: Any, path: str) -> Expression:
        obj = self._object(data, path)
        next_data = obj.get("next")
        return Expression(
            pos=self._position(obj, path),
            comparison=self._comparison(
                self._required(obj, "comparison", path), f"{path}.comparison"
            ),
            op=self._optional_str(obj, "op", path),
            next=self._expression(next_data, f"{path}.next") if next_data is not None else None,
        )

    def _comparison(self, data: Any, path: str) -> Comparison:
        obj = self._object(data, path)
        array_data = obj.get("array_comparison")
        scalar_data = obj.get("scalar_comparison")
        if array_data is not None and scalar_data is not None:
            raise AstLoadError("array_comparison and scalar_comparison are exclusive", path)
        return Comparison(
            pos=self._position(obj, path),
            bit_operation=self._bit_operation(
                self._required(obj, "bit_operation", path), f"{path}.bit_operation"
            ),
            array_comparison=(
                self._array_comparison(array_data, f"{path}.array_comparison")
                if array_data is not None
                else None
            ),
            scalar_comparison=(
                self._scalar_comparison(scalar_data, f"{path}.scalar_comparison")
                if scalar_data is not None
                else None
            ),
        )

    def _scalar_comparison(self, data: Any, path: str) -> ScalarComparison:
        obj = self._object(data, path)
        return ScalarComparison(
            pos=self._position(obj, path),
            op=self._str(obj, "op", path),
            next=self._bit_operation(self._required(obj, "next", path), f"{path}.next"),
        )

    def _array_comparison(self, data: Any, path: str) -> ArrayComparison:
        obj = self._object(data, path)
        return ArrayComparison(
            pos=self._position(obj, path),
            op=self._str(obj, "op", path),
            array=self._array(self._required(obj, "array", path), f"{path}.array"),
        )

    def _array(self, data: Any, path: str) -> Array:
        obj = self._object(data, path)
        strings = obj.get("strings") or []
        numbers = obj.get("numbers") or []
        if not isinstance(strings, list) or not all(isinstance(s, str) for s in strings):
            raise AstLoadError("expected a list of strings", f"{path}.strings")
        if not isinstance(numbers, list):
            raise AstLoadError("expected a list of integers", f"{path}.numbers")
        numbers = [self._int(n, f"{path}.numbers[{i}]") for i, n in enumerate(numbers)]
        if strings and numbers:
            raise AstLoadError("an array holds either strings or numbers, not both", path)
        if not strings and not numbers:
            raise AstLoadError("an array must not be empty", path)
        return Array(pos=self._position(obj, path), strings=strings, numbers=numbers)

    def _bit_operation(self, data: Any, path: str) -> BitOperation:
        obj = self._object(data, path)
        next_data = obj.get("next")
        return BitOperation(
            pos=self._position(obj, path),
            unary=self._unary(self._required(obj, "unary", path), f"{path}.unary"),
            op=self._optional_str(obj, "op", path),
            next=self._bit_operation(next_data, f"{path}.next") if next_data is not None else None,
        )

    def _unary(self, data: Any, path: str) -> Unary:
        obj = self._object(data, path)
        unary_data = obj.get("unary")
        primary_data = obj.get("primary")
        return Unary(
            pos=self._position(obj, path),
            op=self._optional_str(obj, "op", path),
            unary=self._unary(unary_data, f"{path}.unary") if unary_data is not None else None,
            primary=(
                self._primary(primary_data, f"{path}.primary")
                if primary_data is not None
                else None
            ),
        )

    def _primary(self, data: Any, path: str) -> Primary:
        # An empty Primary is passed through; rendering rejects it.
        obj = self._object(data, path)
        number = obj.get("number")
        sub_data = obj.get("sub_expression")
        return Primary(
            pos=self._position(obj, path),
            ident=self._optional_str(obj, "ident", path),
            number=self._int(number, f"{path}.number") if number is not None else None,
            string=self._optional_str(obj, "string", path),
            sub_expression=(
                self._expression(sub_data, f"{path}.sub_expression")
                if sub_data is not None
                else None
            ),
        )


def load_rule(data: Any) -> Rule:
    """Build a Rule from an already decoded JSON document."""
    return AstLoader().load(data)


def load_rule_file(path: str | Path) -> Rule:
    """Read and build a Rule from a JSON file."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise AstLoadError(f"invalid JSON: {e.msg} (line {e.lineno}, column {e.colno})") from e
    except UnicodeDecodeError as e:
        raise AstLoadError(f"invalid UTF-8: {e.reason} at byte {e.start}") from e
    return load_rule(data)
