"""
Sentinel for arguments that were not provided by the caller.

UNSET distinguishes an omitted keyword from an explicit None, which the labelling
factories need for legacy arguments such as `digits`: passing anything at all,
None included, triggers a deprecation warning.

Example:
    >>> def comma(x, digits: int | UnsetType = UNSET):
    ...     if digits is not UNSET:
    ...         warnings.warn("digits is deprecated", DeprecationWarning)
"""

from typing import Any

__all__ = [
    'UNSET',
    'UnsetType',
]


class UnsetType:
    """
    Sentinel type for UNSET.

    Singleton, falsy, compared by identity and preserved through pickling.
    """
    __slots__ = ()

    _instance: 'UnsetType | None' = None

    def __new__(cls) -> 'UnsetType':
        """Ensures singleton behavior."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return '<UNSET>'

    def __eq__(self, other: Any) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> tuple:
        """Ensure pickling returns the singleton instance."""
        return (self.__class__, ())


UNSET = UnsetType()
