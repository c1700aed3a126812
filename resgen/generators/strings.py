"""Localized string generator.

One group per strings table.  A key's text is taken from the development
language when present, then from the unlocalized (Base) table, then from the
first locale that has it.  Printf-style format specifiers in that text turn
the accessor into a function with one typed parameter per argument.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from ..core.identifiers import sanitize
from ..core.models import GeneratorKind, Group, Member, Parameter, ResourceType
from .base import RUNTIME_MODULE, StructGenerator, literal
from .resources import LocalizableStrings, StringEntry

_FORMAT_RE = re.compile(
    r"%(?:(?P<position>\d+)\$)?[-+ #0']*\d*(?:\.\d+)?(?:hh|h|ll|l|q|z|t|j|L)?"
    r"(?P<conversion>[@dDiuUxXoOfFeEgGaAcCsSp%])"
)

_SWIFT_TYPES: dict[str, str] = {
    "@": "String",
    "s": "String",
    "S": "String",
    "c": "CChar",
    "C": "unichar",
    "p": "UnsafeRawPointer",
    **{c: "Int" for c in "dDiuUxXoO"},
    **{c: "Double" for c in "fFeEgGaA"},
}


def format_arguments(text: str) -> list[str]:
    """Swift types of the format arguments in *text*, in argument order.

    Positional specifiers (``%2$@``) are honoured; ``%%`` is skipped.

    Examples::

        format_arguments("Hello %@, you have %d messages") -> ["String", "Int"]
        format_arguments("%2$@ owes %1$.2f")                -> ["Double", "String"]
    """
    by_position: dict[int, str] = {}
    next_position = 1
    for match in _FORMAT_RE.finditer(text):
        conversion = match.group("conversion")
        if conversion == "%":
            continue
        if match.group("position"):
            position = int(match.group("position"))
        else:
            position = next_position
            next_position += 1
        by_position.setdefault(position, _SWIFT_TYPES[conversion])
    if not by_position:
        return []
    return [by_position.get(i, "String") for i in range(1, max(by_position) + 1)]


class StringsStructGenerator(StructGenerator):
    kind = GeneratorKind.STRING

    def entries(self) -> tuple[Sequence[Member], Sequence[Group]]:
        tables: dict[str, list[LocalizableStrings]] = {}
        for strings in self.resources.strings:
            tables.setdefault(strings.table, []).append(strings)

        groups = [
            Group(
                name=table,
                identifier=sanitize(table),
                members=tuple(self._table_members(table, localized)),
            )
            for table, localized in tables.items()
        ]
        return (), groups

    def _table_members(self, table: str, localized: list[LocalizableStrings]) -> list[Member]:
        chosen: dict[str, StringEntry] = {}
        locales: dict[str, list[str]] = {}
        for strings in self._by_preference(localized):
            for entry in strings.entries:
                chosen.setdefault(entry.key, entry)
                if strings.locale:
                    locales.setdefault(entry.key, []).append(strings.locale)
        return [
            self._member(table, entry, sorted(set(locales.get(key, []))))
            for key, entry in chosen.items()
        ]

    def _by_preference(self, localized: list[LocalizableStrings]) -> list[LocalizableStrings]:
        development = self.settings.development_language

        def rank(strings: LocalizableStrings) -> int:
            if strings.locale == development:
                return 0
            if strings.locale is None:
                return 1
            return 2

        return sorted(localized, key=rank)

    def _member(self, table: str, entry: StringEntry, locales: list[str]) -> Member:
        bundle = self.settings.bundle
        lookup = (
            f"NSLocalizedString({literal(entry.key)}, tableName: {literal(table)}, "
            f"bundle: {bundle}, value: {literal(entry.value)}, comment: {literal(entry.comment)})"
        )
        arguments = format_arguments(entry.value)
        if arguments:
            parameters = tuple(
                Parameter(name=f"value{index}", swift_type=swift_type)
                for index, swift_type in enumerate(arguments, start=1)
            )
            names = ", ".join(p.name for p in parameters)
            value = f"String(format: {lookup}, locale: {self.settings.locale}, {names})"
            swift_type = "String"
            modules = frozenset({"Foundation"})
        else:
            parameters = ()
            locale_list = ", ".join(literal(locale) for locale in locales)
            swift_type = "StringResource"
            value = (
                f"StringResource(key: {literal(entry.key)}, tableName: {literal(table)}, "
                f"bundle: {bundle}, locales: [{locale_list}], comment: {literal(entry.comment)})"
            )
            modules = frozenset({RUNTIME_MODULE, "Foundation"})
        return Member(
            name=entry.key,
            identifier=sanitize(entry.key),
            type=ResourceType.STRING,
            swift_type=swift_type,
            value=value,
            key=entry.key,
            parameters=parameters,
            modules=modules,
            discriminator=table,
            source=f"{table}.strings",
        )
