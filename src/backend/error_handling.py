"""Error handling and categorization for data store operations."""

from enum import Enum
from typing import Any, Optional, Sequence

import duckdb


class ErrorCategory(Enum):
    """Categories for different types of data store errors."""
    CONNECTION = "connection"
    CONSTRAINT = "constraint"
    QUERY = "query"
    DATA = "data"
    UNKNOWN = "unknown"


def categorize_error(exception: Exception) -> ErrorCategory:
    """Categorize an exception into error types for better handling."""
    if isinstance(exception, (duckdb.ConnectionException, duckdb.IOException)):
        return ErrorCategory.CONNECTION
    elif isinstance(exception, duckdb.ConstraintException):
        return ErrorCategory.CONSTRAINT
    elif isinstance(exception, (duckdb.ConversionException, duckdb.InvalidInputException, duckdb.OutOfRangeException)):
        return ErrorCategory.DATA
    elif isinstance(exception, (duckdb.ParserException, duckdb.BinderException, duckdb.CatalogException)):
        return ErrorCategory.QUERY
    else:
        return ErrorCategory.UNKNOWN


class DataAccessError(Exception):
    """Raised when the data store fails to open or to execute a statement."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        query: Optional[str] = None,
        params: Optional[Sequence[Any]] = None,
    ):
        self.message = message
        self.category = category
        self.query = query
        self.params = list(params) if params is not None else None
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.category.value}] {self.message}"
