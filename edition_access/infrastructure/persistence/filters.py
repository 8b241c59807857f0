"""Translate FilterSpec values into SQLAlchemy boolean clauses.

A ById or ByField whose value is None (membership not assigned) matches no
rows, never every row.
"""

from typing import Any

from sqlalchemy import ColumnElement, false, or_, true

from edition_access.domain.value_objects import AnyOf, ByField, ById, FilterSpec, NoFilter


def _column(model: Any, name: str) -> Any:
    column = getattr(model, name, None)
    if column is None:
        raise ValueError(f"{model.__name__} has no column {name!r}")
    return column


def filter_to_clause(model: Any, spec: FilterSpec) -> ColumnElement[bool]:
    """Return a WHERE clause for model restricted by spec.

    Args:
        model: ORM model class (e.g. User, Company, DelegateAccess).
        spec: FilterSpec from ResourceFilterBuilder.

    Raises:
        ValueError: If spec names a column model does not have.
        TypeError: If spec is not a FilterSpec.
    """
    if isinstance(spec, NoFilter):
        return true()
    if isinstance(spec, ById):
        return false() if spec.id is None else model.id == spec.id
    if isinstance(spec, ByField):
        column = _column(model, spec.name)
        return false() if spec.value is None else column == spec.value
    if isinstance(spec, AnyOf):
        return or_(*(filter_to_clause(model, s) for s in spec.specs))
    raise TypeError(f"Unsupported filter spec: {spec!r}")
