"""Named parameter bindings and bind-type inference"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from sqlitelib.exceptions import InvalidArgumentError

Scalar = Union[None, bool, int, float, str, bytes]

WHERE_SCOPE = "w"
ASSIGN_SCOPE = "s"

_NON_WORD = re.compile(r'\W')


class BindType(Enum):
    """SQLite storage class a bound value is sent as"""
    INTEGER = "INTEGER"
    FLOAT = "REAL"
    TEXT = "TEXT"
    BLOB = "BLOB"
    NULL = "NULL"


def infer_type(value: Any) -> BindType:
    """Map a Python value to the storage class it binds as

    bool and int bind as INTEGER, float as FLOAT, str as TEXT, bytes-like as
    BLOB and None as NULL. Any other type is rejected rather than silently
    bound as NULL.
    """
    # bool first: it is a subclass of int
    if isinstance(value, bool):
        return BindType.INTEGER
    if isinstance(value, int):
        return BindType.INTEGER
    if isinstance(value, float):
        return BindType.FLOAT
    if isinstance(value, str):
        return BindType.TEXT
    if isinstance(value, (bytes, bytearray, memoryview)):
        return BindType.BLOB
    if value is None:
        return BindType.NULL
    raise InvalidArgumentError(
        f"Unsupported bind value type {type(value).__name__!r}: {value!r}. "
        "Supported types are bool, int, float, str, bytes and None."
    )


def coerce_value(value: Any, bind_type: BindType) -> Any:
    """Convert a value to the Python type the driver expects for its bind type"""
    if bind_type is BindType.INTEGER:
        return int(value)
    if bind_type is BindType.FLOAT:
        return float(value)
    if bind_type is BindType.TEXT:
        return str(value)
    if bind_type is BindType.BLOB:
        return bytes(value)
    return None


def placeholder_name(
    column: str,
    clause_index: int,
    element_index: int = 0,
    scope: str = WHERE_SCOPE,
) -> str:
    """Build a placeholder name unique per (scope, clause_index, element_index)

    The column is appended for readability only, with non-word characters
    replaced by underscores.

    Example:
        >>> placeholder_name("age", 1, 0)
        'w1_0_age'
        >>> placeholder_name("name", 2, scope="s")
        's2_0_name'
    """
    if clause_index < 0 or element_index < 0:
        raise InvalidArgumentError("Placeholder indexes must be non-negative")
    suffix = _NON_WORD.sub("_", column)
    return f"{scope}{clause_index}_{element_index}_{suffix}"


@dataclass(frozen=True)
class ParamBinding:
    """A named placeholder paired with its value and inferred bind type

    The value is stored coerced for the driver, so True is kept as 1.
    """
    name: str
    value: Any
    type: BindType = field(init=False, default=BindType.NULL)

    def __post_init__(self):
        """Validate the name and infer the bind type from the value"""
        name = self.name.lstrip(":") if isinstance(self.name, str) else self.name
        if not name or not isinstance(name, str):
            raise InvalidArgumentError(f"Invalid placeholder name: {self.name!r}")
        bind_type = infer_type(self.value)
        object.__setattr__(self, 'name', name)
        object.__setattr__(self, 'type', bind_type)
        object.__setattr__(self, 'value', coerce_value(self.value, bind_type))

    @property
    def placeholder(self) -> str:
        """Placeholder as written in SQL (e.g. ':w0_0_age')"""
        return f":{self.name}"

    def as_param(self) -> tuple[str, Any]:
        """Return the (name, value) pair handed to the driver"""
        return self.name, self.value

    @classmethod
    def for_column(
        cls,
        column: str,
        value: Any,
        clause_index: int,
        element_index: int = 0,
        scope: str = WHERE_SCOPE,
    ) -> 'ParamBinding':
        """Create a binding whose name is derived from the column and its position"""
        return cls(placeholder_name(column, clause_index, element_index, scope), value)


def bindings_to_params(bindings: Any) -> dict[str, Any]:
    """Collect bindings into the name -> value mapping sqlite3 binds by name

    Raises InvalidArgumentError if two bindings share a name.
    """
    params: dict[str, Any] = {}
    for binding in bindings or ():
        if binding.name in params:
            raise InvalidArgumentError(f"Duplicate placeholder name: {binding.placeholder}")
        name, value = binding.as_param()
        params[name] = value
    return params
