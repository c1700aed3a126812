"""Shared pieces of the struct generators.

Every generator is a ``StructGenerator`` variant bound to one
``GeneratorKind``.  It reads its slice of ``Resources`` and returns a
``Fragment``; it never looks at another generator's output.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import ClassVar

from pydantic import BaseModel, Field

from ..core.identifiers import sanitize, swift_string
from ..core.models import AccessLevel, Fragment, GeneratorKind, Group, Member
from .resources import Resources

# Module of the runtime types (ImageResource, ReuseIdentifier, ...) the
# generated code builds on.
RUNTIME_MODULE = "ResgenKit"


class GeneratorSettings(BaseModel):
    """The configuration slice every generator shares."""

    access_level: AccessLevel = Field(default=AccessLevel.INTERNAL)
    name_prefix: str = Field(default="")
    development_language: str = Field(default="en")

    @property
    def bundle(self) -> str:
        """Swift expression for the bundle holding the resources."""
        return f"_{self.name_prefix}R.hostingBundle"

    @property
    def locale(self) -> str:
        """Swift expression for the locale used by formatted strings."""
        return f"_{self.name_prefix}R.applicationLocale"


class StructGenerator:
    """Base class of the generator variants."""

    kind: ClassVar[GeneratorKind]

    def __init__(self, resources: Resources, settings: GeneratorSettings) -> None:
        self.resources = resources
        self.settings = settings

    def fragment(self) -> Fragment:
        """Produce this generator's fragment."""
        members, groups = self.entries()
        return Fragment(
            kind=self.kind,
            group=Group(
                name=self.kind.value,
                identifier=self.kind.value,
                members=tuple(members),
                groups=tuple(groups),
            ),
        )

    def entries(self) -> tuple[Sequence[Member], Sequence[Group]]:
        raise NotImplementedError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def literal(value: str) -> str:
    """A Swift string literal for *value*."""
    return f'"{swift_string(value)}"'


def nest(
    entries: Iterable[tuple[Sequence[str], Member]],
) -> tuple[tuple[Member, ...], tuple[Group, ...]]:
    """Build nested groups from ``(namespace, member)`` pairs.

    Namespaces with the same raw name are merged, in first-appearance order::

        nest([(["Icons"], back), ([], logo)]) -> ((logo,), (Group("Icons", [back]),))
    """
    members: list[Member] = []
    children: dict[str, list[tuple[Sequence[str], Member]]] = {}
    for namespace, member in entries:
        if namespace:
            children.setdefault(namespace[0], []).append((namespace[1:], member))
        else:
            members.append(member)

    groups: list[Group] = []
    for name, nested in children.items():
        sub_members, sub_groups = nest(nested)
        groups.append(
            Group(
                name=name,
                identifier=sanitize(name),
                members=sub_members,
                groups=sub_groups,
            )
        )
    return tuple(members), tuple(groups)
