from .normalize import coerce_numeric_column, first_finite_value, resolve_column

__all__ = [
    "coerce_numeric_column",
    "first_finite_value",
    "resolve_column",
]
