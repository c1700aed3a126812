"""Image, color and font generators.

These are the resources that can go missing at runtime, so every member
carries a ``Check`` that the internal ``validate()`` functions run.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..core.identifiers import sanitize
from ..core.models import Check, GeneratorKind, Group, Member, ResourceType
from .base import RUNTIME_MODULE, StructGenerator, literal, nest


class ImageStructGenerator(StructGenerator):
    """Loose image files plus image sets from asset catalogs."""

    kind = GeneratorKind.IMAGE

    def entries(self) -> tuple[Sequence[Member], Sequence[Group]]:
        pairs: list[tuple[list[str], Member]] = []
        for image in self.resources.images:
            pairs.append(
                ([], self._member(image.name, image.name, "", image.path or image.name))
            )
        for folder in self.resources.asset_folders:
            for name in folder.images:
                *namespace, leaf = name.split("/")
                pairs.append(
                    (namespace, self._member(leaf, name, folder.name, f"{folder.name}.xcassets"))
                )
        return nest(pairs)

    def _member(self, leaf: str, name: str, discriminator: str, source: str) -> Member:
        bundle = self.settings.bundle
        return Member(
            name=leaf,
            identifier=sanitize(leaf),
            type=ResourceType.IMAGE,
            swift_type="ImageResource",
            value=f"ImageResource(bundle: {bundle}, name: {literal(name)})",
            key=name,
            check=Check(
                condition=f"UIImage(named: {literal(name)}, in: {bundle}, compatibleWith: nil) == nil",
                message=f"Image named '{name}' could not be loaded",
            ),
            modules=frozenset({RUNTIME_MODULE, "UIKit"}),
            discriminator=discriminator,
            source=source,
        )


class ColorStructGenerator(StructGenerator):
    """Color sets from asset catalogs."""

    kind = GeneratorKind.COLOR

    def entries(self) -> tuple[Sequence[Member], Sequence[Group]]:
        bundle = self.settings.bundle
        pairs: list[tuple[list[str], Member]] = []
        for folder in self.resources.asset_folders:
            for name in folder.colors:
                *namespace, leaf = name.split("/")
                member = Member(
                    name=leaf,
                    identifier=sanitize(leaf),
                    type=ResourceType.COLOR,
                    swift_type="ColorResource",
                    value=f"ColorResource(bundle: {bundle}, name: {literal(name)})",
                    key=name,
                    check=Check(
                        condition=(
                            f"UIColor(named: {literal(name)}, in: {bundle}, "
                            "compatibleWith: nil) == nil"
                        ),
                        message=f"Color named '{name}' could not be loaded",
                    ),
                    modules=frozenset({RUNTIME_MODULE, "UIKit"}),
                    discriminator=folder.name,
                    source=f"{folder.name}.xcassets",
                )
                pairs.append((namespace, member))
        return nest(pairs)


class FontStructGenerator(StructGenerator):
    """Custom fonts, addressed by PostScript name."""

    kind = GeneratorKind.FONT

    def entries(self) -> tuple[Sequence[Member], Sequence[Group]]:
        members = [
            Member(
                name=font.name,
                identifier=sanitize(font.name),
                type=ResourceType.FONT,
                swift_type="FontResource",
                value=f"FontResource(fontName: {literal(font.name)})",
                key=font.name,
                check=Check(
                    condition=f"UIFont(name: {literal(font.name)}, size: 42) == nil",
                    message=f"Font '{font.name}' could not be loaded",
                ),
                modules=frozenset({RUNTIME_MODULE, "UIKit"}),
                source=font.filename,
            )
            for font in self.resources.fonts
        ]
        return members, ()
