"""Objective-C compatible legacy surface.

Mirrors both hierarchies as ``@objcMembers`` classes: the external mirror
exposes each accessor's lookup key as a string constant, the internal
mirror forwards ``validate()`` and exposes the support records.
"""

from __future__ import annotations

from ..core.identifiers import swift_string
from ..core.models import Group, ResourceTree, Scope
from .swift import INDENT, doc_comment, indent, join_sections, prefixed

OBJC_SUFFIX = "Objc"


def legacy_surface(external: Group, internal: Group, tree: ResourceTree) -> str:
    access = tree.access_level.value
    external_name = f"{tree.external_name}{OBJC_SUFFIX}"
    internal_name = f"{tree.internal_name}{OBJC_SUFFIX}"

    validate_call = None
    if tree.root.has_checks():
        validate_call = f"{internal_name}.validate()"

    external_lines = _class(
        external_name, access, _external_body(external, access, validate_call)
    )
    internal_lines = _class(
        internal_name, "", _internal_body(internal, (tree.internal_name,))
    )
    return "\n".join(join_sections([external_lines, internal_lines]))


def _class(name: str, access: str, body: list[str]) -> list[str]:
    return [
        "@objcMembers",
        prefixed(access, f"class {name}: NSObject {{"),
        *indent(body),
        "}",
    ]


def _external_body(group: Group, access: str, validate_call: str | None = None) -> list[str]:
    constants: list[str] = []
    for member in group.members:
        if member.parameters or not member.key:
            continue
        constants += [
            doc_comment(member),
            prefixed(access, f'static let {member.identifier} = "{swift_string(member.key)}"'),
        ]
    sections = [constants]
    sections += [
        _class(child.identifier, access, _external_body(child, access))
        for child in group.groups
    ]
    if validate_call:
        sections.append([
            prefixed(access, "static func validate() throws {"),
            f"{INDENT}try {validate_call}",
            "}",
        ])
    return join_sections(sections)


def _internal_body(group: Group, path: tuple[str, ...]) -> list[str]:
    target = ".".join(path)
    support = [
        f"static var {m.identifier}: {m.swift_type} {{ {target}.{m.identifier} }}"
        for m in group.members
        if m.scope is Scope.INTERNAL
    ]
    sections = [support]
    if group.has_checks():
        sections.append([
            "static func validate() throws {",
            f"{INDENT}try {target}.validate()",
            "}",
        ])
    sections += [
        _class(child.identifier, "", _internal_body(child, path + (child.identifier,)))
        for child in group.groups
    ]
    return join_sections(sections)
