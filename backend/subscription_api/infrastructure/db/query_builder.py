"""
Dynamic Query Construction

Builds parameterized UPDATE statements from an ordered list of column
assignments. Values are always bound as parameters; only column names
known to the table may be assigned.
"""

from typing import Any, List, Tuple

from sqlalchemy import Table, update
from sqlalchemy.sql.dml import Update


class UpdateStatementBuilder:
    """
    Accumulates (column, value) assignments for a single-row UPDATE.

    The SET clause is rendered in the order assignments were added, and
    each value gets its own bound parameter.

    Example:
        stmt = (
            UpdateStatementBuilder(table)
            .set("updated_at", now)
            .set("price", 799)
            .build(subscription_id)
        )
    """

    def __init__(self, table: Table, key_column: str = "id"):
        self._table = table
        self._key_column = key_column
        self._assignments: List[Tuple[str, Any]] = []

    def set(self, column: str, value: Any) -> "UpdateStatementBuilder":
        """Append an assignment; the column must exist on the table."""
        if column not in self._table.c:
            raise ValueError(f"Unknown column {column!r} for table {self._table.name}")
        if column in self.columns:
            raise ValueError(f"Column {column!r} assigned twice")
        self._assignments.append((column, value))
        return self

    @property
    def columns(self) -> List[str]:
        return [name for name, _ in self._assignments]

    def build(self, key: Any) -> Update:
        """Render the UPDATE statement filtered by the key column."""
        if not self._assignments:
            raise ValueError("UPDATE requires at least one assignment")

        return (
            update(self._table)
            .where(self._table.c[self._key_column] == key)
            .ordered_values(
                *((self._table.c[name], value) for name, value in self._assignments)
            )
        )
