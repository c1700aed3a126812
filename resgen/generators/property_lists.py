"""Info.plist and entitlements generators.

Dictionaries become nested groups and scalar values become literal members.
Arrays of strings become one member per string; arrays of dictionaries
become one group per item, named after the item's first string value.

When the same key holds different values in different build
configurations, one member per configuration is emitted with the
configuration as its discriminator and the validator tells them apart.
"""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from typing import Any

from ..core.identifiers import sanitize
from ..core.models import GeneratorKind, Group, Member, ResourceType
from .base import StructGenerator, literal, nest
from .resources import PropertyList

INFO_PLIST_WHITELIST: tuple[str, ...] = (
    "UIApplicationShortcutItems",
    "UISceneConfigurations",
    "NSUserActivityTypes",
    "NSExtension",
)


def swift_literal(value: Any) -> tuple[str, str] | None:
    """``(swift_type, literal)`` for a scalar plist value, or None."""
    if isinstance(value, bool):
        return "Bool", "true" if value else "false"
    if isinstance(value, int):
        return "Int", str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return "Double", "Double.nan"
        if math.isinf(value):
            return "Double", "Double.infinity" if value > 0 else "-Double.infinity"
        return "Double", repr(value)
    if isinstance(value, str):
        return "String", literal(value)
    return None


class PropertyListStructGenerator(StructGenerator):
    """Base for the two plist-backed kinds."""

    whitelist: tuple[str, ...] | None = None

    def plists(self) -> list[PropertyList]:
        raise NotImplementedError

    def entries(self) -> tuple[Sequence[Member], Sequence[Group]]:
        pairs: list[tuple[list[str], Member]] = []
        for plist in self.plists():
            contents = plist.contents
            if self.whitelist is not None:
                contents = {k: v for k, v in contents.items() if k in self.whitelist}
            pairs.extend(self._walk(contents, [], plist))
        return nest(pairs)

    def _walk(
        self, contents: dict[str, Any], namespace: list[str], plist: PropertyList
    ) -> Iterator[tuple[list[str], Member]]:
        for key in sorted(contents):
            value = contents[key]
            if isinstance(value, dict):
                yield from self._walk(value, namespace + [key], plist)
            elif isinstance(value, list):
                yield from self._walk_list(value, namespace + [key], plist)
            else:
                member = self._member(key, value, plist)
                if member is not None:
                    yield namespace, member

    def _walk_list(
        self, items: list[Any], namespace: list[str], plist: PropertyList
    ) -> Iterator[tuple[list[str], Member]]:
        for index, item in enumerate(items):
            if isinstance(item, dict):
                label = next(
                    (item[k] for k in sorted(item) if isinstance(item[k], str)),
                    f"item{index}",
                )
                yield from self._walk(item, namespace + [label], plist)
            elif isinstance(item, str):
                member = self._member(item, item, plist)
                if member is not None:
                    yield namespace, member

    def _member(self, key: str, value: Any, plist: PropertyList) -> Member | None:
        converted = swift_literal(value)
        if converted is None:
            return None
        swift_type, value_literal = converted
        return Member(
            name=key,
            identifier=sanitize(key),
            type=ResourceType.PROPERTY,
            swift_type=swift_type,
            value=value_literal,
            key=key,
            discriminator=plist.build_configuration,
            source=plist.path,
        )


class InfoPlistStructGenerator(PropertyListStructGenerator):
    kind = GeneratorKind.INFO
    whitelist = INFO_PLIST_WHITELIST

    def plists(self) -> list[PropertyList]:
        return self.resources.info_plists


class EntitlementsStructGenerator(PropertyListStructGenerator):
    kind = GeneratorKind.ENTITLEMENTS

    def plists(self) -> list[PropertyList]:
        return self.resources.entitlements
