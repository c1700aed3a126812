"""Generators fed by nibs and storyboards.

Covers nib loading, storyboard scenes, segue identifiers, reuse identifiers
and accessibility identifiers.  The accessibility identifiers are also the
whole UI-test surface.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..core.identifiers import sanitize
from ..core.models import Check, GeneratorKind, Group, Member, ResourceType
from .base import RUNTIME_MODULE, StructGenerator, literal, nest
from .resources import Reusable


def _image_check(owner: str, images: Sequence[str], bundle: str) -> Check | None:
    """One check covering every image a layout file references."""
    names = sorted(set(images))
    if not names:
        return None
    condition = " || ".join(
        f"UIImage(named: {literal(name)}, in: {bundle}, compatibleWith: nil) == nil"
        for name in names
    )
    return Check(
        condition=condition,
        message=f"An image used in '{owner}' could not be loaded",
    )


class FileStructGenerator(StructGenerator):
    """Plain bundle files, addressed by name and extension."""

    kind = GeneratorKind.FILE

    def entries(self) -> tuple[Sequence[Member], Sequence[Group]]:
        bundle = self.settings.bundle
        members = [
            Member(
                name=file.filename,
                identifier=sanitize(file.filename),
                type=ResourceType.FILE,
                swift_type="FileResource",
                value=(
                    f"FileResource(bundle: {bundle}, name: {literal(file.stem)}, "
                    f"pathExtension: {literal(file.extension)})"
                ),
                key=file.filename,
                modules=frozenset({RUNTIME_MODULE, "Foundation"}),
                discriminator=file.extension,
                source=file.filename,
            )
            for file in self.resources.files
        ]
        return members, ()


class NibStructGenerator(StructGenerator):
    kind = GeneratorKind.NIB

    def entries(self) -> tuple[Sequence[Member], Sequence[Group]]:
        bundle = self.settings.bundle
        members = []
        for nib in self.resources.nibs:
            root_type = nib.root_views[0] if nib.root_views else "UIView"
            members.append(
                Member(
                    name=nib.name,
                    identifier=sanitize(nib.name),
                    type=ResourceType.NIB,
                    swift_type=f"NibResource<{root_type}>",
                    value=f"NibResource<{root_type}>(name: {literal(nib.name)}, bundle: {bundle})",
                    key=nib.name,
                    check=_image_check(nib.name, nib.used_images, bundle),
                    modules=frozenset({RUNTIME_MODULE, "UIKit"}),
                    source=f"{nib.name}.xib",
                )
            )
        return members, ()


class StoryboardStructGenerator(StructGenerator):
    """One group per storyboard with its name, initial scene and named scenes."""

    kind = GeneratorKind.STORYBOARD

    def entries(self) -> tuple[Sequence[Member], Sequence[Group]]:
        bundle = self.settings.bundle
        groups = []
        for storyboard in self.resources.storyboards:
            source = f"{storyboard.name}.storyboard"
            members = [
                Member(
                    name="name",
                    identifier="name",
                    type=ResourceType.STORYBOARD,
                    swift_type="String",
                    value=literal(storyboard.name),
                    key=storyboard.name,
                    check=_image_check(storyboard.name, storyboard.used_images, bundle),
                    modules=frozenset({"UIKit"}),
                    source=source,
                )
            ]
            initial = storyboard.initial_view_controller
            if initial is not None:
                members.append(
                    Member(
                        name="initialViewController",
                        identifier="initialViewController",
                        type=ResourceType.STORYBOARD,
                        swift_type=f"StoryboardInitialViewController<{initial.type}>",
                        value=(
                            f"StoryboardInitialViewController<{initial.type}>"
                            f"(storyboard: {literal(storyboard.name)}, bundle: {bundle})"
                        ),
                        key=storyboard.name,
                        modules=frozenset({RUNTIME_MODULE, "UIKit"}),
                        source=source,
                    )
                )
            for controller in storyboard.view_controllers:
                identifier = controller.storyboard_identifier
                if not identifier:
                    continue
                swift_type = f"StoryboardViewControllerResource<{controller.type}>"
                members.append(
                    Member(
                        name=identifier,
                        identifier=sanitize(identifier),
                        type=ResourceType.STORYBOARD,
                        swift_type=swift_type,
                        value=(
                            f"{swift_type}(identifier: {literal(identifier)}, "
                            f"storyboard: {literal(storyboard.name)}, bundle: {bundle})"
                        ),
                        key=identifier,
                        modules=frozenset({RUNTIME_MODULE, "UIKit"}),
                        source=source,
                    )
                )
            groups.append(
                Group(
                    name=storyboard.name,
                    identifier=sanitize(storyboard.name),
                    members=tuple(members),
                )
            )
        return (), groups


class SegueStructGenerator(StructGenerator):
    """Segue identifiers grouped by the class of their source scene."""

    kind = GeneratorKind.SEGUE

    def entries(self) -> tuple[Sequence[Member], Sequence[Group]]:
        pairs: list[tuple[list[str], Member]] = []
        for storyboard in self.resources.storyboards:
            for segue in storyboard.segues:
                swift_type = f"SegueIdentifier<{segue.source_type}, {segue.destination_type}>"
                member = Member(
                    name=segue.identifier,
                    identifier=sanitize(segue.identifier),
                    type=ResourceType.SEGUE,
                    swift_type=swift_type,
                    value=f"{swift_type}(identifier: {literal(segue.identifier)})",
                    key=segue.identifier,
                    modules=frozenset({RUNTIME_MODULE, "UIKit"}),
                    discriminator=storyboard.name,
                    source=f"{storyboard.name}.storyboard",
                )
                pairs.append(([segue.source_type], member))
        return nest(pairs)


class ReuseIdentifierStructGenerator(StructGenerator):
    """Reuse identifiers of cells declared in nibs and storyboards."""

    kind = GeneratorKind.REUSE_IDENTIFIER

    def entries(self) -> tuple[Sequence[Member], Sequence[Group]]:
        members = []
        for nib in self.resources.nibs:
            members.extend(self._member(r, nib.name, f"{nib.name}.xib") for r in nib.reusables)
        for storyboard in self.resources.storyboards:
            members.extend(
                self._member(r, storyboard.name, f"{storyboard.name}.storyboard")
                for r in storyboard.reusables
            )
        return members, ()

    def _member(self, reusable: Reusable, owner: str, source: str) -> Member:
        swift_type = f"ReuseIdentifier<{reusable.type}>"
        return Member(
            name=reusable.identifier,
            identifier=sanitize(reusable.identifier),
            type=ResourceType.REUSE_IDENTIFIER,
            swift_type=swift_type,
            value=f"{swift_type}(identifier: {literal(reusable.identifier)})",
            key=reusable.identifier,
            modules=frozenset({RUNTIME_MODULE, "UIKit"}),
            discriminator=owner,
            source=source,
        )


class AccessibilityIdentifierStructGenerator(StructGenerator):
    """Accessibility identifiers per layout file, as plain strings."""

    kind = GeneratorKind.ID

    def entries(self) -> tuple[Sequence[Member], Sequence[Group]]:
        groups = []
        layouts = [(nib.name, "nib", nib.accessibility_identifiers) for nib in self.resources.nibs]
        layouts += [
            (storyboard.name, "storyboard", storyboard.accessibility_identifiers)
            for storyboard in self.resources.storyboards
        ]
        for owner, discriminator, identifiers in layouts:
            if not identifiers:
                continue
            members = tuple(
                Member(
                    name=identifier,
                    identifier=sanitize(identifier),
                    type=ResourceType.IDENTIFIER,
                    swift_type="String",
                    value=literal(identifier),
                    key=identifier,
                    source=owner,
                )
                for identifier in identifiers
            )
            groups.append(
                Group(
                    name=owner,
                    identifier=sanitize(owner),
                    members=members,
                    discriminator=discriminator,
                )
            )
        return (), groups
