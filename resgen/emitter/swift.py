"""Swift struct builders for the external and internal type hierarchies."""

from __future__ import annotations

from collections.abc import Sequence

from ..core.identifiers import swift_string
from ..core.models import Group, Member, ResourceTree, ResourceType, Scope

INDENT = "  "

TYPE_LABELS: dict[ResourceType, str] = {
    ResourceType.IMAGE: "Image",
    ResourceType.COLOR: "Color",
    ResourceType.FONT: "Font",
    ResourceType.FILE: "Resource file",
    ResourceType.NIB: "Nib",
    ResourceType.STORYBOARD: "Storyboard",
    ResourceType.SEGUE: "Segue identifier",
    ResourceType.REUSE_IDENTIFIER: "Reuse identifier",
    ResourceType.STRING: "String",
    ResourceType.PROPERTY: "Property",
    ResourceType.IDENTIFIER: "Accessibility identifier",
    ResourceType.BUNDLE: "Bundle",
    ResourceType.LOCALE: "Locale",
}

INTERNAL_ACCESS = "fileprivate"


def indent(lines: Sequence[str]) -> list[str]:
    return [f"{INDENT}{line}" if line else "" for line in lines]


def join_sections(sections: Sequence[Sequence[str]]) -> list[str]:
    """Concatenate non-empty sections with one blank line between them."""
    lines: list[str] = []
    for section in sections:
        if not section:
            continue
        if lines:
            lines.append("")
        lines.extend(section)
    return lines


def prefixed(access: str, declaration: str) -> str:
    return f"{access} {declaration}" if access else declaration


def doc_comment(member: Member) -> str:
    return f"/// {TYPE_LABELS[member.type]} `{swift_string(member.name)}`."


def declaration(member: Member, access: str) -> list[str]:
    """The accessor for one member: a static constant or a static function."""
    if member.parameters:
        params = ", ".join(
            f"{p.label} {p.name}: {p.swift_type}" for p in member.parameters
        )
        return [
            doc_comment(member),
            prefixed(access, f"static func {member.identifier}({params}) -> {member.swift_type} {{"),
            f"{INDENT}{member.value}",
            "}",
        ]
    return [
        doc_comment(member),
        prefixed(access, f"static let {member.identifier}: {member.swift_type} = {member.value}"),
    ]


# ---------------------------------------------------------------------------
# External hierarchy
# ---------------------------------------------------------------------------

def external_struct(group: Group, tree: ResourceTree, *, with_validate: bool = True) -> str:
    """Render the public-facing ``R`` struct.

    Args:
        group: The external view to render, rooted at ``R``.
        tree: The tree the view came from (names and access level).
        with_validate: Emit ``R.validate()`` forwarding to the internal
            hierarchy when any member carries a runtime check.
    """
    access = tree.access_level.value
    name = tree.external_name
    validate_call = None
    if with_validate and tree.root.has_checks():
        validate_call = f"{tree.internal_name}.validate()"

    lines = [
        f"/// This `{name}` struct is generated and contains references to static resources.",
        prefixed(access, f"struct {name} {{"),
        *indent(_external_body(group, access, validate_call)),
        "}",
    ]
    return "\n".join(lines)


def _external_body(group: Group, access: str, validate_call: str | None = None) -> list[str]:
    sections: list[list[str]] = []
    sections.append([line for m in group.members for line in declaration(m, access)])
    for child in group.groups:
        sections.append([
            prefixed(access, f"struct {child.identifier} {{"),
            *indent(_external_body(child, access)),
            "}",
        ])
    if validate_call:
        sections.append([
            "/// Throws when a resource referenced from this file is missing at runtime.",
            prefixed(access, "static func validate() throws {"),
            f"{INDENT}try {validate_call}",
            "}",
        ])
    return join_sections(sections)


# ---------------------------------------------------------------------------
# Internal hierarchy
# ---------------------------------------------------------------------------

def internal_struct(group: Group, tree: ResourceTree) -> str:
    """Render the ``_R`` support struct.

    It holds the standalone support records and one ``validate()`` per
    group that has checked members, mirroring the external groups.
    """
    lines = [
        prefixed(INTERNAL_ACCESS, f"struct {tree.internal_name} {{"),
        *indent(_internal_body(group, root=True)),
        "}",
    ]
    return "\n".join(lines)


def _internal_body(group: Group, *, root: bool = False) -> list[str]:
    sections: list[list[str]] = []
    sections.append([
        line
        for m in group.members
        if m.scope is Scope.INTERNAL
        for line in declaration(m, "")
    ])

    if root and group.has_checks():
        sections.append([
            "struct ValidationError: Error, CustomStringConvertible {",
            f"{INDENT}let description: String",
            "}",
        ])

    body = [
        f'if {m.check.condition} {{ throw ValidationError(description: "{swift_string(m.check.message)}") }}'
        for m in group.members
        if m.check is not None
    ]
    body += [f"try {child.identifier}.validate()" for child in group.groups]
    if body:
        sections.append(["static func validate() throws {", *indent(body), "}"])

    for child in group.groups:
        sections.append([
            f"struct {child.identifier} {{",
            *indent(_internal_body(child)),
            "}",
        ])
    return join_sections(sections)
