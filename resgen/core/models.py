"""Pydantic v2 models for the resgen namespace tree.

Defines the generator kinds, the member/group tree produced by struct
generators, the aggregated ``ResourceTree`` and the validation outputs.
Tree records are frozen: every stage builds new instances instead of
mutating the previous stage's output.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .errors import (
    IdentifierCollisionWarning,
    ResgenWarning,
    UnresolvableNamingConflict,
)


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class AccessLevel(str, Enum):
    """Swift access level used for the external declarations."""
    PUBLIC = "public"
    INTERNAL = "internal"
    FILEPRIVATE = "fileprivate"


class Scope(str, Enum):
    """Which generated type hierarchy a member belongs to."""
    EXTERNAL = "external"
    INTERNAL = "internal"


class GeneratorKind(str, Enum):
    """The closed set of struct generators."""
    IMAGE = "image"
    STRING = "string"
    COLOR = "color"
    FILE = "file"
    FONT = "font"
    NIB = "nib"
    SEGUE = "segue"
    STORYBOARD = "storyboard"
    REUSE_IDENTIFIER = "reuseIdentifier"
    ENTITLEMENTS = "entitlements"
    INFO = "info"
    ID = "id"


DEFAULT_GENERATOR_ORDER: tuple[GeneratorKind, ...] = (
    GeneratorKind.IMAGE,
    GeneratorKind.COLOR,
    GeneratorKind.FONT,
    GeneratorKind.SEGUE,
    GeneratorKind.STORYBOARD,
    GeneratorKind.NIB,
    GeneratorKind.REUSE_IDENTIFIER,
    GeneratorKind.FILE,
    GeneratorKind.STRING,
    GeneratorKind.ID,
    GeneratorKind.INFO,
    GeneratorKind.ENTITLEMENTS,
)


class ResourceType(str, Enum):
    """Semantic type of a member."""
    IMAGE = "image"
    COLOR = "color"
    FONT = "font"
    FILE = "file"
    NIB = "nib"
    STORYBOARD = "storyboard"
    SEGUE = "segue"
    REUSE_IDENTIFIER = "reuseIdentifier"
    STRING = "string"
    PROPERTY = "property"
    IDENTIFIER = "identifier"
    BUNDLE = "bundle"
    LOCALE = "locale"


# Standalone internal records allowed without an external counterpart.
INTERNAL_EXEMPT_TYPES: frozenset[ResourceType] = frozenset({
    ResourceType.BUNDLE,
    ResourceType.LOCALE,
})


class Severity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class Resolution(str, Enum):
    """How a collision or invalid identifier was resolved."""
    DEDUPLICATED = "deduplicated"
    RENAMED = "renamed"
    DROPPED = "dropped"
    ESCAPED = "escaped"


# ---------------------------------------------------------------------------
# Tree records
# ---------------------------------------------------------------------------

class Parameter(BaseModel):
    """An argument of a function-style accessor."""
    model_config = ConfigDict(frozen=True)

    label: str = Field(default="_", description="External argument label")
    name: str = Field(..., description="Internal parameter name")
    swift_type: str = Field(..., description="Swift type of the argument")


class Check(BaseModel):
    """Runtime validation data for a member.

    ``condition`` is a Swift boolean expression that is true when the
    resource is missing at runtime.
    """
    model_config = ConfigDict(frozen=True)

    condition: str
    message: str


class Member(BaseModel):
    """A leaf accessor in the namespace tree."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Raw resource name")
    identifier: str = Field(..., description="Proposed Swift identifier")
    type: ResourceType
    swift_type: str = Field(..., description="Swift type of the accessor")
    value: str = Field(..., description="Swift expression producing the accessor")
    key: str = Field(default="", description="Runtime lookup key")
    parameters: tuple[Parameter, ...] = ()
    check: Check | None = None
    modules: frozenset[str] = frozenset()
    scope: Scope = Scope.EXTERNAL
    discriminator: str = Field(default="", description="Hint used when renaming")
    source: str = Field(default="", description="Where the resource was declared")

    def payload(self) -> tuple:
        """Everything that makes two members the same underlying resource."""
        return (
            self.type,
            self.swift_type,
            self.value,
            self.key,
            self.parameters,
            self.check,
            self.scope,
        )


class Group(BaseModel):
    """A named namespace node holding members and nested groups."""
    model_config = ConfigDict(frozen=True)

    name: str
    identifier: str
    members: tuple[Member, ...] = ()
    groups: tuple[Group, ...] = ()
    discriminator: str = ""

    def payload(self) -> tuple:
        return (
            "group",
            tuple((m.identifier, m.payload()) for m in self.members),
            tuple((g.identifier, g.payload()) for g in self.groups),
        )

    def is_empty(self) -> bool:
        return not self.members and all(g.is_empty() for g in self.groups)

    def walk(self, path: tuple[str, ...] = ()) -> Iterator[tuple[tuple[str, ...], Group]]:
        """Yield ``(path, group)`` pairs in pre-order, starting with *self*."""
        here = path + (self.identifier,)
        yield here, self
        for child in self.groups:
            yield from child.walk(here)

    def members_with_paths(self) -> Iterator[tuple[tuple[str, ...], Member]]:
        for path, group in self.walk():
            for member in group.members:
                yield path + (member.identifier,), member

    def find(self, path: Iterable[str]) -> Group | Member | None:
        """Look up a descendant by identifiers relative to this group."""
        node: Group | Member = self
        for part in path:
            if not isinstance(node, Group):
                return None
            children = {m.identifier: m for m in node.members}
            children.update({g.identifier: g for g in node.groups})
            if part not in children:
                return None
            node = children[part]
        return node

    def project(self, scope: Scope) -> Group:
        """Return the external or internal view of this subtree.

        The external view keeps every group and the external members.  The
        internal view keeps internal-scope members plus every member carrying
        a check (its internal record sits at the same path), and prunes
        groups left empty.
        """
        if scope is Scope.EXTERNAL:
            members = tuple(m for m in self.members if m.scope is Scope.EXTERNAL)
            groups = tuple(g.project(scope) for g in self.groups)
        else:
            members = tuple(
                m for m in self.members
                if m.scope is Scope.INTERNAL or m.check is not None
            )
            groups = tuple(
                view for view in (g.project(scope) for g in self.groups)
                if not view.is_empty()
            )
        return self.model_copy(update={"members": members, "groups": groups})

    def restrict(self, types: Iterable[ResourceType]) -> Group:
        """Keep only members of the given types, pruning emptied groups."""
        wanted = frozenset(types)
        groups = tuple(
            view for view in (g.restrict(wanted) for g in self.groups)
            if not view.is_empty()
        )
        members = tuple(m for m in self.members if m.type in wanted)
        return self.model_copy(update={"members": members, "groups": groups})

    def internal_orphans(self) -> list[str]:
        """Dotted paths of internal records that mirror nothing external."""
        return [
            ".".join(path)
            for path, member in self.members_with_paths()
            if member.scope is Scope.INTERNAL
            and member.type not in INTERNAL_EXEMPT_TYPES
        ]

    def has_checks(self) -> bool:
        return any(m.check is not None for _, m in self.members_with_paths())


class Fragment(BaseModel):
    """The unmerged output of one struct generator."""
    model_config = ConfigDict(frozen=True)

    kind: GeneratorKind
    group: Group


class ResourceTree(BaseModel):
    """The merged namespace of every active generator."""
    model_config = ConfigDict(frozen=True)

    root: Group
    access_level: AccessLevel = AccessLevel.INTERNAL
    name_prefix: str = ""

    @property
    def external_name(self) -> str:
        return f"{self.name_prefix}R"

    @property
    def internal_name(self) -> str:
        return f"_{self.name_prefix}R"

    @property
    def external(self) -> Group:
        return self.root.project(Scope.EXTERNAL)

    @property
    def internal(self) -> Group:
        return self.root.project(Scope.INTERNAL).model_copy(
            update={"name": self.internal_name, "identifier": self.internal_name}
        )


# ---------------------------------------------------------------------------
# Validation outputs
# ---------------------------------------------------------------------------

_WARNING_FOR_RESOLUTION: dict[Resolution, type[ResgenWarning] | None] = {
    Resolution.DEDUPLICATED: None,
    Resolution.RENAMED: IdentifierCollisionWarning,
    Resolution.ESCAPED: IdentifierCollisionWarning,
    Resolution.DROPPED: UnresolvableNamingConflict,
}


class Diagnostic(BaseModel):
    """A console-facing message produced by the pipeline."""
    model_config = ConfigDict(frozen=True)

    severity: Severity
    message: str
    code: str = ""


class CollisionReport(BaseModel):
    """What the validator did about one contested identifier."""
    model_config = ConfigDict(frozen=True)

    path: tuple[str, ...]
    identifier: str = Field(..., description="The contested identifier")
    names: tuple[str, ...] = Field(..., description="Raw names proposing it, winner first")
    subject: str = Field(..., description="Raw name this resolution applies to")
    resolution: Resolution
    applied: str | None = Field(default=None, description="Identifier actually used")
    reason: str = ""

    @property
    def dropped(self) -> tuple[str, ...]:
        if self.resolution in (Resolution.DEDUPLICATED, Resolution.DROPPED):
            return (self.subject,)
        return ()

    @property
    def severity(self) -> Severity:
        if self.resolution is Resolution.DEDUPLICATED:
            return Severity.INFO
        return Severity.WARNING

    @property
    def message(self) -> str:
        where = ".".join(self.path)
        claimants = ", ".join(f"'{name}'" for name in self.names)
        if self.resolution is Resolution.DEDUPLICATED:
            return (
                f"{where}: '{self.subject}' is identical to '{self.names[0]}', "
                f"generating a single `{self.identifier}`"
            )
        if self.resolution is Resolution.ESCAPED:
            return (
                f"{where}: '{self.subject}' is {self.reason}, "
                f"generated as `{self.applied}`"
            )
        if self.resolution is Resolution.RENAMED and self.reason:
            return (
                f"{where}: `{self.identifier}` is {self.reason}; "
                f"'{self.subject}' renamed to `{self.applied}`"
            )
        if self.resolution is Resolution.RENAMED:
            return (
                f"{where}: symbol `{self.identifier}` would be generated for "
                f"{claimants}; '{self.subject}' renamed to `{self.applied}`"
            )
        return (
            f"{where}: symbol `{self.identifier}` would be generated for "
            f"{claimants}; skipping '{self.subject}' ({self.reason})"
        )

    def diagnostic(self) -> Diagnostic:
        category = _WARNING_FOR_RESOLUTION[self.resolution]
        return Diagnostic(
            severity=self.severity,
            message=self.message,
            code=category.code if category else "DUPLICATE_RESOURCE",
        )


class ValidationResult(BaseModel):
    """The validated tree and everything the validator decided on the way."""
    model_config = ConfigDict(frozen=True)

    tree: ResourceTree
    reports: tuple[CollisionReport, ...] = ()

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return [report.diagnostic() for report in self.reports]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.WARNING]


Group.model_rebuild()
