"""Condition operators supported in WHERE clauses"""

from enum import Enum
from typing import Any, Union

from sqlitelib.exceptions import UnsupportedOperatorError


class Arity(Enum):
    """How many values an operator binds"""
    NONE = 0
    SINGLE = 1
    PAIR = 2
    MANY = -1


class Operator(Enum):
    """Closed set of condition operators, each with its SQL token and arity

    Example:
        >>> Operator.BETWEEN.token
        'BETWEEN'
        >>> Operator.parse(">=")
        <Operator.GREATER_THAN_OR_EQUAL: '>='>
    """

    EQUALS = ("=", Arity.SINGLE)
    NOT_EQUALS = ("!=", Arity.SINGLE)
    GREATER_THAN = (">", Arity.SINGLE)
    GREATER_THAN_OR_EQUAL = (">=", Arity.SINGLE)
    LESS_THAN = ("<", Arity.SINGLE)
    LESS_THAN_OR_EQUAL = ("<=", Arity.SINGLE)
    LIKE = ("LIKE", Arity.SINGLE)
    NOT_LIKE = ("NOT LIKE", Arity.SINGLE)
    IN = ("IN", Arity.MANY)
    NOT_IN = ("NOT IN", Arity.MANY)
    BETWEEN = ("BETWEEN", Arity.PAIR)
    NOT_BETWEEN = ("NOT BETWEEN", Arity.PAIR)
    IS_NULL = ("IS NULL", Arity.NONE)
    IS_NOT_NULL = ("IS NOT NULL", Arity.NONE)

    def __init__(self, token: str, arity: Arity) -> None:
        self.token = token
        self.arity = arity

    def __repr__(self) -> str:
        return f"<Operator.{self.name}: {self.token!r}>"

    def __str__(self) -> str:
        return self.token

    @classmethod
    def parse(cls, value: Union["Operator", str, Any]) -> "Operator":
        """Resolve a member, a member name or a SQL token to an Operator"""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = " ".join(value.split()).upper()
            if key in cls.__members__:
                return cls.__members__[key]
            for member in cls:
                if member.token == key:
                    return member
            # Common alias for NOT_EQUALS
            if key == "<>":
                return cls.NOT_EQUALS
        raise UnsupportedOperatorError(f"The operator {value!r} is not supported.")
