"""
Value coercion helpers.

Google Sheets renders booleans as TRUE/FALSE and omits empty cells, so values
coming back from the API (or handed to keygrid as keys) are normalised here.
"""

from typing import Any, List, Optional

from keygrid.exceptions import InvalidArgumentError


def to_cell_string(value: Any) -> str:
    """Convert a cell value to the string Google Sheets would display.

    Args:
        value: Raw value (string, number, boolean or None)

    Returns:
        ``""`` for None, ``"TRUE"``/``"FALSE"`` for booleans, ``str(value)``
        otherwise
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, str):
        return value
    return str(value)


def to_key_string(value: Any, name: str = "key") -> str:
    """Coerce a key to the string it is matched against.

    Keys are compared by exact string equality, so the coerced value is not
    trimmed; blank keys are rejected.

    Args:
        value: Key as given by the caller
        name: Name used in the error message (``key``, ``row key``, ...)

    Returns:
        The key as a string

    Raises:
        InvalidArgumentError: If the coerced key is empty or whitespace
    """
    key = to_cell_string(value)
    if not key.strip():
        raise InvalidArgumentError(f"invalid {name} ({value!r})")
    return key


def is_nested(values: List[Any]) -> bool:
    """Check whether a flat value list contains a list or tuple."""
    return any(isinstance(value, (list, tuple)) for value in values)


def to_optional_key(value: Any) -> Optional[str]:
    """Coerce an optional key; None or a blank key means "no key"."""
    if value is None:
        return None
    key = to_cell_string(value)
    return key if key.strip() else None
