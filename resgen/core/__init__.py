"""resgen core: sanitizing, aggregation and validation of the namespace tree.

Usage::

    from resgen.core import aggregate, validate

    tree = aggregate(fragments, AccessLevel.PUBLIC)
    result = validate(tree)
    for diagnostic in result.warnings:
        print(diagnostic.message)
"""

from resgen.core.aggregator import aggregate, with_support_members
from resgen.core.errors import (
    IdentifierCollisionWarning,
    InternalConsistencyError,
    UnresolvableNamingConflict,
)
from resgen.core.identifiers import sanitize
from resgen.core.models import (
    AccessLevel,
    CollisionReport,
    Fragment,
    GeneratorKind,
    Group,
    Member,
    ResourceTree,
    ValidationResult,
)
from resgen.core.validator import validate

__all__ = [
    "AccessLevel",
    "CollisionReport",
    "Fragment",
    "GeneratorKind",
    "Group",
    "IdentifierCollisionWarning",
    "InternalConsistencyError",
    "Member",
    "ResourceTree",
    "UnresolvableNamingConflict",
    "ValidationResult",
    "aggregate",
    "sanitize",
    "validate",
    "with_support_members",
]
