"""Query building: operators, bindings, WHERE clauses and statement builders"""

from sqlitelib.query.operators import Arity, Operator
from sqlitelib.query.binding import (
    BindType,
    ParamBinding,
    infer_type,
    placeholder_name,
    bindings_to_params,
)
from sqlitelib.query.clause import (
    WhereClause,
    CompiledClause,
    compile_condition,
    compile_where,
)
from sqlitelib.query.builder import (
    Statement,
    build_select,
    build_insert,
    build_update,
    build_delete,
    normalize_assignments,
    normalize_clauses,
    is_wildcard,
)

__all__ = [
    # Operators
    "Arity",
    "Operator",
    # Bindings
    "BindType",
    "ParamBinding",
    "infer_type",
    "placeholder_name",
    "bindings_to_params",
    # Clauses
    "WhereClause",
    "CompiledClause",
    "compile_condition",
    "compile_where",
    # Statements
    "Statement",
    "build_select",
    "build_insert",
    "build_update",
    "build_delete",
    "normalize_assignments",
    "normalize_clauses",
    "is_wildcard",
]
