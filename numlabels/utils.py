"""
Numlabels utilities shared across the package.

Contains the configuration error type and value formatters used in exception
messages by multiple modules, kept here to avoid circular imports.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any


# Classes --------------------------------------------------------------------------------------------------------------

class ConfigError(ValueError):
    """
    Invalid labelling configuration.

    Raised before any element is formatted: an unknown sign style, a non-positive
    accuracy, or a malformed scale-cut table. Subclasses ValueError so that callers
    catching ValueError keep working.
    """


# Methods --------------------------------------------------------------------------------------------------------------

def fmt_type(obj: Any) -> str:
    """Format the type of an object (or a type itself) for exception messages.

    Examples:
        >>> fmt_type(42)
        '<type: int>'
        >>> fmt_type(str)
        '<type: str>'
    """
    target_type = obj if isinstance(obj, type) else type(obj)
    try:
        type_name = target_type.__name__
    except AttributeError:
        type_name = str(target_type)
    return f"<type: {type_name}>"


def fmt_value(x: Any, max_repr: int = 80) -> str:
    """
    Format a single value as a type-value pair for exception messages.

    Broken __repr__ methods are tolerated, long reprs are truncated with '...'.

    Examples:
        >>> fmt_value(42)
        '<int: 42>'
        >>> fmt_value("bogus")
        "<str: 'bogus'>"
    """
    t = type(x).__name__
    try:
        r = repr(x)
    except Exception as e:
        r = f"<{t} object (repr failed: {type(e).__name__})>"

    # Escape inner '>' so the wrapper brackets stay unambiguous
    r = r.replace(">", "\\>")
    if len(r) > max_repr:
        r = r[:max(1, max_repr)] + "..."
    return f"<{t}: {r}>"
