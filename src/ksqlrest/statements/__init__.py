"""Statement handling: normalization, script splitting, classification."""

from ksqlrest.statements._types import Action, ObjectKind, Statement
from ksqlrest.statements.classify import (
    classify,
    object_name,
    object_type,
    statement_type,
    swap_kind,
)
from ksqlrest.statements.normalize import (
    is_quoted,
    lower_if_unquoted,
    normalize,
    split_statements,
)

__all__ = [
    "Action",
    "ObjectKind",
    "Statement",
    "classify",
    "is_quoted",
    "lower_if_unquoted",
    "normalize",
    "object_name",
    "object_type",
    "split_statements",
    "statement_type",
    "swap_kind",
]
