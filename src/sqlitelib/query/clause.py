"""WHERE condition clauses compiled to SQL fragments with named bindings"""

import warnings
from dataclasses import dataclass
from typing import Any, Sequence, Union

from sqlitelib.exceptions import InvalidArgumentError
from sqlitelib.utils.identifiers import require_identifier

from .binding import WHERE_SCOPE, ParamBinding
from .operators import Arity, Operator


@dataclass(frozen=True)
class CompiledClause:
    """SQL fragment plus the bindings its placeholders refer to"""
    fragment: str
    bindings: tuple[ParamBinding, ...]


def _as_sequence(operator: Operator, value: Any) -> tuple[Any, ...]:
    """Return the value as a tuple, rejecting scalars (str and bytes count as scalars)"""
    if isinstance(value, (list, tuple)):
        return tuple(value)
    raise InvalidArgumentError(
        f"The value for the '{operator.token}' operator must be a list or tuple, "
        f"got {type(value).__name__}."
    )


def _freeze(value: Any) -> Any:
    """Mutable bytes-like values are stored as bytes so clauses stay hashable"""
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    return value


def _normalize_value(operator: Operator, value: Any) -> Any:
    """Validate the value shape against the operator's arity"""
    arity = operator.arity
    if arity is Arity.NONE:
        return None
    if arity is Arity.SINGLE:
        if isinstance(value, (list, tuple, set, dict)):
            raise InvalidArgumentError(
                f"The value for the '{operator.token}' operator must be a single value."
            )
        return _freeze(value)
    values = _as_sequence(operator, value)
    if arity is Arity.PAIR and len(values) != 2:
        raise InvalidArgumentError(
            f"The value for the '{operator.token}' operator must be a pair, "
            f"got {len(values)} values."
        )
    if arity is Arity.MANY and not values:
        raise InvalidArgumentError(
            f"The value for the '{operator.token}' operator must be a non-empty list."
        )
    return tuple(_freeze(item) for item in values)


def compile_condition(
    column: str,
    operator: Operator,
    value: Any,
    clause_index: int = 0,
    scope: str = WHERE_SCOPE,
) -> CompiledClause:
    """Compile one validated condition into a fragment and its bindings

    The value must already match the operator's arity (see WhereClause).

    Example:
        >>> compile_condition("age", Operator.BETWEEN, (18, 30), clause_index=1).fragment
        'age BETWEEN :w1_0_age AND :w1_1_age'
    """
    arity = operator.arity
    if arity is Arity.NONE:
        return CompiledClause(f"{column} {operator.token}", ())

    if arity is Arity.SINGLE:
        binding = ParamBinding.for_column(column, value, clause_index, 0, scope)
        return CompiledClause(f"{column} {operator.token} {binding.placeholder}", (binding,))

    bindings = tuple(
        ParamBinding.for_column(column, item, clause_index, index, scope)
        for index, item in enumerate(value)
    )
    placeholders = [binding.placeholder for binding in bindings]

    if arity is Arity.PAIR:
        low, high = placeholders
        return CompiledClause(f"{column} {operator.token} {low} AND {high}", bindings)

    return CompiledClause(f"{column} {operator.token} ({', '.join(placeholders)})", bindings)


class WhereClause:
    """One column/operator/value condition of a WHERE clause

    The condition is validated and compiled when constructed and is
    immutable afterwards. ``fragment`` and ``bindings`` reflect a
    standalone compilation (clause index 0); statement builders call
    ``compile(index)`` with the clause's position so placeholders stay
    unique when several clauses target the same column.

    Args:
        column: Column name (unquoted identifier)
        operator: Operator member, member name or SQL token (default EQUALS)
        value: Scalar for single-value operators, a 2-item list or tuple
            for BETWEEN, a non-empty list or tuple for IN. Ignored for
            IS NULL / IS NOT NULL.

    Example:
        >>> clause = WhereClause("age", Operator.IN, [18, 21, 30])
        >>> clause.fragment
        'age IN (:w0_0_age, :w0_1_age, :w0_2_age)'
        >>> len(clause.bindings)
        3

    Raises:
        InvalidArgumentError: If the column or value shape is invalid
        UnsupportedOperatorError: If the operator is not supported
    """

    __slots__ = ("_column", "_operator", "_value", "_compiled")

    def __init__(
        self,
        column: str,
        operator: Union[Operator, str] = Operator.EQUALS,
        value: Any = None,
    ) -> None:
        operator = Operator.parse(operator)
        require_identifier(column)

        if operator.arity is Arity.NONE and value is not None:
            msg = (
                f"The value {value!r} is ignored for the '{operator.token}' operator "
                f"on column {column!r}."
            )
            warnings.warn(msg, UserWarning, stacklevel=2)

        self._column = column
        self._operator = operator
        self._value = _normalize_value(operator, value)
        self._compiled = compile_condition(column, operator, self._value)

    @property
    def column(self) -> str:
        """Target column name"""
        return self._column

    @property
    def operator(self) -> Operator:
        """Condition operator"""
        return self._operator

    @property
    def value(self) -> Any:
        """Validated value: None, a scalar, or a tuple of scalars"""
        return self._value

    @property
    def fragment(self) -> str:
        """Standalone SQL fragment (clause index 0)"""
        return self._compiled.fragment

    @property
    def bindings(self) -> tuple[ParamBinding, ...]:
        """Standalone bindings (clause index 0), in value order"""
        return self._compiled.bindings

    def compile(self, clause_index: int = 0) -> CompiledClause:
        """Compile for the given position within a statement"""
        if clause_index == 0:
            return self._compiled
        return compile_condition(self._column, self._operator, self._value, clause_index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WhereClause):
            return NotImplemented
        return (self._column, self._operator, self._value) == (
            other._column, other._operator, other._value
        )

    def __hash__(self) -> int:
        return hash((self._column, self._operator, self._value))

    def __repr__(self) -> str:
        if self._operator.arity is Arity.NONE:
            return f"WhereClause({self._column!r}, {self._operator.name})"
        return f"WhereClause({self._column!r}, {self._operator.name}, {self._value!r})"

    def __str__(self) -> str:
        return self.fragment


def compile_where(clauses: Sequence[WhereClause]) -> CompiledClause:
    """Join clauses with AND, giving each its position as clause index

    Returns an empty fragment and no bindings for an empty sequence.
    """
    fragments: list[str] = []
    bindings: list[ParamBinding] = []
    for index, clause in enumerate(clauses):
        if not isinstance(clause, WhereClause):
            raise InvalidArgumentError(
                f"WhereClause expected, got {type(clause).__name__}."
            )
        compiled = clause.compile(index)
        fragments.append(compiled.fragment)
        bindings.extend(compiled.bindings)
    return CompiledClause(" AND ".join(fragments), tuple(bindings))
