"""Error taxonomy for the resgen core.

Naming problems are recoverable: they are collected as diagnostics and
returned next to the validated tree.  Only a broken upstream contract raises.
"""

from __future__ import annotations

from collections.abc import Sequence


class ResgenWarning(UserWarning):
    """Base class for recoverable naming problems."""

    code = "RESGEN_WARNING"


class IdentifierCollisionWarning(ResgenWarning):
    """Sibling identifiers collided and were resolved automatically."""

    code = "IDENTIFIER_COLLISION"


class UnresolvableNamingConflict(ResgenWarning):
    """A colliding entry could not be renamed and was dropped."""

    code = "UNRESOLVABLE_NAMING_CONFLICT"


class InternalConsistencyError(Exception):
    """Raised when a generator fragment violates the tree contract.

    Attributes:
        invariant: Short name of the violated invariant.
        paths: Dotted tree paths of the offending entries.
    """

    def __init__(self, invariant: str, paths: Sequence[str] = ()) -> None:
        self.invariant = invariant
        self.paths = tuple(paths)
        message = f"Internal consistency violated: {invariant}"
        if self.paths:
            message += f" ({', '.join(self.paths)})"
        super().__init__(message)
