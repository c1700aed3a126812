"""resgen struct generators.

One ``StructGenerator`` variant per ``GeneratorKind``.  The configuration
picks which kinds run and in which order; ``build_generators`` instantiates
them.

Quick usage::

    from resgen.generators import GeneratorSettings, Resources, build_generators

    resources = Resources.load(Path("resources.json"))
    generators = build_generators(["image", "font"], resources, GeneratorSettings())
    fragments = [generator.fragment() for generator in generators]
"""

from __future__ import annotations

from collections.abc import Iterable

from resgen.core.models import GeneratorKind
from resgen.generators.assets import (
    ColorStructGenerator,
    FontStructGenerator,
    ImageStructGenerator,
)
from resgen.generators.base import GeneratorSettings, StructGenerator
from resgen.generators.layouts import (
    AccessibilityIdentifierStructGenerator,
    FileStructGenerator,
    NibStructGenerator,
    ReuseIdentifierStructGenerator,
    SegueStructGenerator,
    StoryboardStructGenerator,
)
from resgen.generators.property_lists import (
    EntitlementsStructGenerator,
    InfoPlistStructGenerator,
)
from resgen.generators.resources import Resources
from resgen.generators.strings import StringsStructGenerator

GENERATORS: dict[GeneratorKind, type[StructGenerator]] = {
    GeneratorKind.IMAGE: ImageStructGenerator,
    GeneratorKind.COLOR: ColorStructGenerator,
    GeneratorKind.FONT: FontStructGenerator,
    GeneratorKind.SEGUE: SegueStructGenerator,
    GeneratorKind.STORYBOARD: StoryboardStructGenerator,
    GeneratorKind.NIB: NibStructGenerator,
    GeneratorKind.REUSE_IDENTIFIER: ReuseIdentifierStructGenerator,
    GeneratorKind.FILE: FileStructGenerator,
    GeneratorKind.STRING: StringsStructGenerator,
    GeneratorKind.ID: AccessibilityIdentifierStructGenerator,
    GeneratorKind.INFO: InfoPlistStructGenerator,
    GeneratorKind.ENTITLEMENTS: EntitlementsStructGenerator,
}


def build_generators(
    kinds: Iterable[GeneratorKind | str],
    resources: Resources,
    settings: GeneratorSettings,
) -> list[StructGenerator]:
    """Instantiate the enabled generators, keeping the given order.

    Repeated kinds are ignored after their first occurrence.

    Raises:
        ValueError: If a kind is not a known ``GeneratorKind`` value.
    """
    generators: list[StructGenerator] = []
    seen: set[GeneratorKind] = set()
    for raw in kinds:
        kind = GeneratorKind(raw)
        if kind in seen:
            continue
        seen.add(kind)
        generators.append(GENERATORS[kind](resources, settings))
    return generators


__all__ = [
    "GENERATORS",
    "GeneratorSettings",
    "Resources",
    "StructGenerator",
    "build_generators",
]
