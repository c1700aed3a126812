"""Merge generator fragments into one namespace tree.

Each fragment becomes a child group of the root, named after the generator
kind that produced it, in the order the generators were enabled.  Nothing is
flattened, sorted or deduplicated here; cross-fragment collisions are the
validator's business.
"""

from __future__ import annotations

from collections.abc import Sequence

from .identifiers import swift_string
from .models import (
    AccessLevel,
    Fragment,
    Group,
    Member,
    ResourceTree,
    ResourceType,
    Scope,
)


def aggregate(
    fragments: Sequence[Fragment],
    access_level: AccessLevel = AccessLevel.INTERNAL,
    name_prefix: str = "",
) -> ResourceTree:
    """Nest every fragment under a shared root.

    Args:
        fragments: Generator outputs in registration order.  The order is the
            tie-break for every later stable-ordering decision.
        access_level: Access level of the external declarations.
        name_prefix: Prefix for the generated root types (``{prefix}R``).

    Returns:
        A ``ResourceTree`` whose root children are named ``image``,
        ``string`` and so on.
    """
    root_name = f"{name_prefix}R"
    children = tuple(
        fragment.group.model_copy(
            update={"name": fragment.kind.value, "identifier": fragment.kind.value}
        )
        for fragment in fragments
    )
    root = Group(name=root_name, identifier=root_name, groups=children)
    return ResourceTree(root=root, access_level=access_level, name_prefix=name_prefix)


def support_members(bundle_identifier: str = "") -> tuple[Member, ...]:
    """Internal records every generated file relies on.

    ``hostingBundle`` resolves the bundle the resources live in and
    ``applicationLocale`` picks the locale used for formatted strings.
    """
    bundle_value = "Bundle.main"
    if bundle_identifier:
        bundle_value = (
            f'Bundle(identifier: "{swift_string(bundle_identifier)}") ?? Bundle.main'
        )
    return (
        Member(
            name="hostingBundle",
            identifier="hostingBundle",
            type=ResourceType.BUNDLE,
            swift_type="Bundle",
            value=bundle_value,
            modules=frozenset({"Foundation"}),
            scope=Scope.INTERNAL,
        ),
        Member(
            name="applicationLocale",
            identifier="applicationLocale",
            type=ResourceType.LOCALE,
            swift_type="Locale",
            value=(
                "hostingBundle.preferredLocalizations.first"
                ".flatMap { Locale(identifier: $0) } ?? Locale.current"
            ),
            modules=frozenset({"Foundation"}),
            scope=Scope.INTERNAL,
        ),
    )


def with_support_members(tree: ResourceTree, bundle_identifier: str = "") -> ResourceTree:
    """Return *tree* with the internal support records added to its root.

    Applied after validation; the support identifiers are reserved for the
    generated file and never come from resources.
    """
    extras = support_members(bundle_identifier)
    existing = {m.identifier for m in tree.root.members}
    members = tree.root.members + tuple(m for m in extras if m.identifier not in existing)
    root = tree.root.model_copy(update={"members": members})
    return tree.model_copy(update={"root": root})
