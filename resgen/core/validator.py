"""Namespace validation: unique, legal identifiers at every tree level.

Groups are resolved parent first.  Inside one group, proposed identifiers
are bucketed case-insensitively; the first entry of a bucket (aggregator
input order) keeps its name and every later entry goes through
``RESOLUTION_TABLE``.  Names the emitted code declares for itself
(``validate``, plus ``ValidationError`` and the support records at the root)
have no winning entry: every entry proposing one goes through the table.
Problems are returned as ``CollisionReport`` records;
only a broken fragment contract raises ``InternalConsistencyError``.
"""

from __future__ import annotations

from .errors import InternalConsistencyError
from .identifiers import escape_reason, is_valid_identifier, pascal_case, sanitize
from .models import (
    INTERNAL_EXEMPT_TYPES,
    CollisionReport,
    Group,
    Member,
    Resolution,
    ResourceTree,
    ResourceType,
    ValidationResult,
)

Entry = Member | Group

# (payload equal, rename candidate free) -> resolution
RESOLUTION_TABLE: dict[tuple[bool, bool], Resolution] = {
    (True, True): Resolution.DEDUPLICATED,
    (True, False): Resolution.DEDUPLICATED,
    (False, True): Resolution.RENAMED,
    (False, False): Resolution.DROPPED,
}

GROUP_DISCRIMINATOR = "group"

# Names the emitted code declares for itself: every struct gets a
# ``validate()``; the root also holds the error type and support records.
HELPER_NAMES: frozenset[str] = frozenset({"validate"})
ROOT_HELPER_NAMES: frozenset[str] = HELPER_NAMES | {
    "ValidationError",
    "hostingBundle",
    "applicationLocale",
}

_REASON_TEXT = {"empty": "an empty name", "reserved word": "a reserved word"}


def decide(payload_equal: bool, rename_free: bool) -> Resolution:
    """Look up the resolution for one colliding entry."""
    return RESOLUTION_TABLE[(payload_equal, rename_free)]


def validate(tree: ResourceTree) -> ValidationResult:
    """Resolve collisions and invalid identifiers across the whole tree.

    Returns a new tree; *tree* is left untouched.

    Raises:
        InternalConsistencyError: If a fragment holds internal records that
            mirror nothing external, or reuses one raw name for members of
            different types inside a single group.
    """
    check_contract(tree.root)
    root, reports = _validate_group(tree.root, (), (), is_root=True)
    return ValidationResult(
        tree=tree.model_copy(update={"root": root}),
        reports=reports,
    )


def check_contract(root: Group) -> None:
    orphans = root.internal_orphans()
    if orphans:
        raise InternalConsistencyError(
            "internal records must mirror an external member", orphans
        )

    mismatched: list[str] = []
    for path, group in root.walk():
        seen: dict[str, ResourceType] = {}
        for member in group.members:
            first_type = seen.setdefault(member.name, member.type)
            if first_type is not member.type:
                mismatched.append(".".join(path + (member.name,)))
    if mismatched:
        raise InternalConsistencyError(
            "a raw name maps to a single member type within a group", mismatched
        )


def rename_candidate(entry: Entry, identifier: str) -> str:
    """The disambiguated identifier tried for a colliding *entry*."""
    suffix = pascal_case(entry.discriminator)
    if not suffix:
        fallback = entry.type.value if isinstance(entry, Member) else GROUP_DISCRIMINATOR
        suffix = pascal_case(fallback)
    return identifier + suffix


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _validate_group(
    group: Group,
    parent_path: tuple[str, ...],
    reports: tuple[CollisionReport, ...],
    *,
    is_root: bool = False,
) -> tuple[Group, tuple[CollisionReport, ...]]:
    path = parent_path + (group.identifier,)
    entries, reports = _resolve_level(
        [*group.members, *group.groups],
        path,
        reports,
        reserved=ROOT_HELPER_NAMES if is_root else HELPER_NAMES,
    )

    members = [e for e in entries if isinstance(e, Member)]
    groups = [e for e in entries if isinstance(e, Group)]
    members.sort(key=_sort_key)
    if not is_root:
        groups.sort(key=_sort_key)

    validated: list[Group] = []
    for child in groups:
        child, reports = _validate_group(child, path, reports)
        validated.append(child)

    return (
        group.model_copy(update={"members": tuple(members), "groups": tuple(validated)}),
        reports,
    )


def _resolve_level(
    entries: list[Entry],
    path: tuple[str, ...],
    reports: tuple[CollisionReport, ...],
    reserved: frozenset[str] = frozenset(),
) -> tuple[list[Entry], tuple[CollisionReport, ...]]:
    proposed: list[Entry] = []
    for entry in entries:
        entry, report = _legal_entry(entry, path)
        proposed.append(entry)
        if report is not None:
            reports += (report,)

    buckets: dict[str, list[Entry]] = {}
    for entry in proposed:
        buckets.setdefault(entry.identifier.casefold(), []).append(entry)
    helpers = {name.casefold(): name for name in reserved}
    taken = set(buckets) | set(helpers)

    resolved: list[Entry] = []
    for key, bucket in buckets.items():
        names = tuple(e.name for e in bucket)
        keeper: Entry | None = None
        if key in helpers and not _is_support_record(bucket[0]):
            keeper_identifier = helpers[key]
            challengers = bucket
        else:
            keeper = bucket[0]
            keeper_identifier = keeper.identifier
            resolved.append(keeper)
            challengers = bucket[1:]
        for entry in challengers:
            candidate = rename_candidate(entry, entry.identifier)
            resolution = decide(
                payload_equal=keeper is not None and entry.payload() == keeper.payload(),
                rename_free=candidate.casefold() not in taken,
            )
            applied: str | None = None
            reason = ""
            if resolution is Resolution.RENAMED:
                taken.add(candidate.casefold())
                resolved.append(entry.model_copy(update={"identifier": candidate}))
                applied = candidate
                if keeper is None:
                    reason = "reserved for generated code"
            elif resolution is Resolution.DEDUPLICATED:
                applied = keeper_identifier
            else:
                reason = f"`{candidate}` is taken as well"
            reports += (
                CollisionReport(
                    path=path,
                    identifier=keeper_identifier,
                    names=names,
                    subject=entry.name,
                    resolution=resolution,
                    applied=applied,
                    reason=reason,
                ),
            )
    return resolved, reports


def _legal_entry(entry: Entry, path: tuple[str, ...]) -> tuple[Entry, CollisionReport | None]:
    if not is_valid_identifier(entry.identifier):
        fixed = sanitize(entry.identifier)
        return entry.model_copy(update={"identifier": fixed}), CollisionReport(
            path=path,
            identifier=entry.identifier,
            names=(entry.name,),
            subject=entry.name,
            resolution=Resolution.ESCAPED,
            applied=fixed,
            reason="not a valid identifier",
        )

    reason = escape_reason(entry.name)
    if reason and entry.identifier == sanitize(entry.name):
        return entry, CollisionReport(
            path=path,
            identifier=entry.identifier,
            names=(entry.name,),
            subject=entry.name,
            resolution=Resolution.ESCAPED,
            applied=entry.identifier,
            reason=_REASON_TEXT[reason],
        )
    return entry, None


def _is_support_record(entry: Entry) -> bool:
    return isinstance(entry, Member) and entry.type in INTERNAL_EXEMPT_TYPES


def _sort_key(entry: Entry) -> tuple[str, str]:
    return entry.identifier.casefold(), entry.identifier
