"""
Secure query building utilities with positional parameter binding.

Queries are assembled from fixed SQL fragments while every caller-supplied value
travels through the parameter list as a ``$N`` placeholder, so value content is
never interpreted as SQL.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple
import re

DEFAULT_LIMIT = 10

_IDENTIFIER_RE = re.compile(r'^[a-zA-Z_][a-zA-Z0-9_]*(\.[a-zA-Z_][a-zA-Z0-9_]*)?$')
_PLACEHOLDER_RE = re.compile(r'\$(\d+)')


class FilterOperator(Enum):
    """Supported filter operators."""
    EQUALS = "="
    LIKE = "LIKE"
    GREATER_THAN = ">"
    LESS_THAN = "<"
    GREATER_EQUAL = ">="
    LESS_EQUAL = "<="


@dataclass(frozen=True)
class ParameterizedQuery:
    """A SQL string plus the ordered values bound to its ``$N`` placeholders."""

    sql: str
    params: Tuple[Any, ...] = ()

    @property
    def placeholder_count(self) -> int:
        """Number of distinct ``$N`` placeholders in the SQL text."""
        return len(set(_PLACEHOLDER_RE.findall(self.sql)))


class SecureQueryBuilder:
    """Incremental query builder with positional parameter binding.

    Predicates added through :meth:`where` are combined conjunctively. The first
    one is introduced with ``WHERE`` and every later one with ``AND``; the builder
    counts predicates instead of inspecting the SQL it has produced.

    Example:
        builder = SecureQueryBuilder("SELECT * FROM users")
        query = builder.where("email", FilterOperator.EQUALS, email).build()
    """

    def __init__(self, base_query: str = ""):
        self.base_query = base_query.strip()
        self.params: List[Any] = []
        self.predicate_count: int = 0
        self._predicates: List[str] = []
        self._group_by: List[str] = []
        self._order_by: List[str] = []
        self._limit_placeholder: Optional[str] = None

    def add_parameter(self, value: Any) -> str:
        """
        Add a parameter and return its placeholder.

        Args:
            value: The parameter value

        Returns:
            Positional placeholder string (e.g., "$1")
        """
        self.params.append(value)
        return f"${len(self.params)}"

    def build_filter_condition(self, column: str, operator: FilterOperator, value: Any) -> str:
        """
        Build a single filter condition with parameter binding.

        Args:
            column: Column name, optionally table-qualified
            operator: Filter operator
            value: Value bound to the condition's placeholder

        Returns:
            SQL condition string with a parameter placeholder
        """
        safe_column = validate_column_name(column)
        if value is None:
            raise ValueError(f"Value required for {operator.value} operator")

        placeholder = self.add_parameter(value)
        return f"{safe_column} {operator.value} {placeholder}"

    def where(self, column: str, operator: FilterOperator, value: Any) -> "SecureQueryBuilder":
        """Append a predicate, joined with AND to any earlier predicate."""
        if self._group_by or self._order_by or self._limit_placeholder:
            raise ValueError("Predicates must be added before GROUP BY, ORDER BY and LIMIT")

        condition = self.build_filter_condition(column, operator, value)
        keyword = "WHERE" if self.predicate_count == 0 else "AND"
        self._predicates.append(f"{keyword} {condition}")
        self.predicate_count += 1
        return self

    def group_by(self, *columns: str) -> "SecureQueryBuilder":
        """Add GROUP BY columns."""
        self._group_by.extend(validate_column_name(c) for c in columns)
        return self

    def order_by(self, column: str, direction: str = "ASC") -> "SecureQueryBuilder":
        """Add an ORDER BY column."""
        direction = direction.upper()
        if direction not in ("ASC", "DESC"):
            raise ValueError(f"Invalid sort direction: {direction}")
        self._order_by.append(f"{validate_column_name(column)} {direction}")
        return self

    def limit(self, count: int) -> "SecureQueryBuilder":
        """Bind the row limit; it is always the last parameter."""
        if self._limit_placeholder is not None:
            raise ValueError("LIMIT has already been set")
        self._limit_placeholder = self.add_parameter(count)
        return self

    def build(self) -> ParameterizedQuery:
        """Assemble the SQL and return it with a snapshot of the parameters."""
        query_parts = [self.base_query] if self.base_query else []

        if self._predicates:
            query_parts.append(" ".join(self._predicates))

        if self._group_by:
            query_parts.append(f"GROUP BY {', '.join(self._group_by)}")

        if self._order_by:
            query_parts.append(f"ORDER BY {', '.join(self._order_by)}")

        if self._limit_placeholder:
            query_parts.append(f"LIMIT {self._limit_placeholder}")

        return ParameterizedQuery(sql="\n".join(query_parts), params=tuple(self.params))

    def get_parameters(self) -> List[Any]:
        """Get all accumulated parameters."""
        return list(self.params)

    def reset(self):
        """Reset the builder for reuse with the same base query."""
        self.params.clear()
        self.predicate_count = 0
        self._predicates.clear()
        self._group_by.clear()
        self._order_by.clear()
        self._limit_placeholder = None


def build_insert_query(table_name: str, values: Mapping[str, Any]) -> ParameterizedQuery:
    """
    Build an INSERT ... RETURNING * statement with parameter binding.

    Args:
        table_name: Target table
        values: Column -> value mapping; insertion order is preserved

    Returns:
        ParameterizedQuery for the insert
    """
    if not values:
        raise ValueError("At least one column value is required for an insert")

    safe_table = validate_column_name(table_name)
    builder = SecureQueryBuilder()
    columns = [validate_column_name(column) for column in values]
    placeholders = [builder.add_parameter(value) for value in values.values()]

    sql = (
        f"INSERT INTO {safe_table} ({', '.join(columns)})\n"
        f"VALUES ({', '.join(placeholders)})\n"
        "RETURNING *"
    )
    return ParameterizedQuery(sql=sql, params=tuple(builder.params))


def normalize_limit(limit: Any, default: int = DEFAULT_LIMIT) -> int:
    """
    Coerce a requested row limit.

    Anything other than a positive ``int`` (including ``bool``, floats, strings,
    zero and negatives) falls back to ``default``.
    """
    if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
        return default
    return limit


def validate_column_name(column_name: str) -> str:
    """
    Validate a column or table name to prevent injection.

    Args:
        column_name: Identifier, optionally qualified as ``table.column``

    Returns:
        The identifier unchanged

    Raises:
        ValueError: If the identifier contains invalid characters
    """
    if not isinstance(column_name, str) or not _IDENTIFIER_RE.match(column_name):
        raise ValueError(f"Invalid column name: {column_name}")

    return column_name


def describe_query(query: ParameterizedQuery) -> Dict[str, Any]:
    """Summarize a query for logging."""
    return {"sql": " ".join(query.sql.split()), "params": list(query.params)}
