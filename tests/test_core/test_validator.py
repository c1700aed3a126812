"""Unit tests for namespace validation (resgen.core.validator).

Tests cover:
- Case-insensitive sibling collisions and the resolution table
- Renaming, deduplication and dropping
- Escaping of reserved, empty and illegal identifiers
- Contract violations raising InternalConsistencyError
- Ordering, determinism and external/internal mirroring
"""

from __future__ import annotations

import pytest

from resgen.core.aggregator import aggregate
from resgen.core.errors import InternalConsistencyError
from resgen.core.models import (
    Fragment,
    GeneratorKind,
    Resolution,
    ResourceTree,
    ResourceType,
    Scope,
)
from resgen.core.validator import (
    RESOLUTION_TABLE,
    check_contract,
    decide,
    rename_candidate,
    validate,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def tree_of(make_group):
    """Build a one-fragment tree from image members."""

    def _build(*members, groups=()) -> ResourceTree:
        fragment = Fragment(
            kind=GeneratorKind.IMAGE, group=make_group("image", members, groups)
        )
        return aggregate([fragment])

    return _build


def _identifiers(tree: ResourceTree, *path: str) -> list[str]:
    group = tree.root.find(path)
    return [m.identifier for m in group.members]


# ---------------------------------------------------------------------------
# Decision table
# ---------------------------------------------------------------------------


class TestDecisionTable:
    def test_every_combination_is_covered(self):
        assert set(RESOLUTION_TABLE) == {(a, b) for a in (True, False) for b in (True, False)}

    @pytest.mark.parametrize(
        ("payload_equal", "rename_free", "expected"),
        [
            (True, True, Resolution.DEDUPLICATED),
            (True, False, Resolution.DEDUPLICATED),
            (False, True, Resolution.RENAMED),
            (False, False, Resolution.DROPPED),
        ],
    )
    def test_decide(self, payload_equal, rename_free, expected):
        assert decide(payload_equal, rename_free) is expected


class TestRenameCandidate:
    def test_discriminator_wins(self, make_member):
        member = make_member("back", discriminator="my-assets")
        assert rename_candidate(member, "back") == "backMyAssets"

    def test_member_type_fallback(self, make_member):
        assert rename_candidate(make_member("Icon"), "icon") == "iconImage"

    def test_group_fallback(self, make_group):
        assert rename_candidate(make_group("Icons", identifier="icons"), "icons") == "iconsGroup"


# ---------------------------------------------------------------------------
# Collisions
# ---------------------------------------------------------------------------


class TestCollisions:
    def test_case_variants_collide_and_later_one_is_renamed(self, tree_of, make_member):
        tree = tree_of(make_member("foo"), make_member("Foo", "foo"))
        result = validate(tree)

        assert _identifiers(result.tree, "image") == ["foo", "fooImage"]
        assert result.tree.root.find(["image", "foo"]).name == "foo"
        assert result.tree.root.find(["image", "fooImage"]).name == "Foo"
        [report] = result.reports
        assert report.resolution is Resolution.RENAMED
        assert report.names == ("foo", "Foo")
        assert report.applied == "fooImage"

    def test_identifiers_differing_only_in_case_collide(self, tree_of, make_member):
        result = validate(tree_of(make_member("Foo", "Foo"), make_member("foo", "foo")))
        assert _identifiers(result.tree, "image") == ["Foo", "fooImage"]

    def test_identical_payload_is_merged(self, tree_of, make_member):
        tree = tree_of(
            make_member("logo", value="X", source="a.png"),
            make_member("logo", value="X", source="b.png"),
        )
        result = validate(tree)
        assert _identifiers(result.tree, "image") == ["logo"]
        [report] = result.reports
        assert report.resolution is Resolution.DEDUPLICATED
        assert result.warnings == []

    def test_taken_candidate_drops_entry(self, tree_of, make_member):
        tree = tree_of(
            make_member("foo"),
            make_member("Foo", "foo"),
            make_member("fooImage"),
        )
        result = validate(tree)
        assert _identifiers(result.tree, "image") == ["foo", "fooImage"]
        assert result.tree.root.find(["image", "fooImage"]).name == "fooImage"
        [report] = result.reports
        assert report.resolution is Resolution.DROPPED
        assert report.dropped == ("Foo",)
        assert result.warnings[0].code == "UNRESOLVABLE_NAMING_CONFLICT"

    def test_third_case_variant_is_dropped(self, tree_of, make_member):
        tree = tree_of(make_member("foo"), make_member("Foo", "foo"), make_member("FOO", "foo"))
        result = validate(tree)
        assert _identifiers(result.tree, "image") == ["foo", "fooImage"]
        assert [r.resolution for r in result.reports] == [
            Resolution.RENAMED,
            Resolution.DROPPED,
        ]

    def test_member_and_group_share_a_namespace(self, tree_of, make_member, make_group):
        tree = tree_of(
            make_member("icons"),
            groups=[make_group("Icons", [make_member("back")], identifier="icons")],
        )
        result = validate(tree)
        image = result.tree.root.find(["image"])
        assert [m.identifier for m in image.members] == ["icons"]
        assert [g.identifier for g in image.groups] == ["iconsGroup"]

    def test_collisions_only_within_one_group(self, make_member, make_group):
        tree = aggregate([
            Fragment(kind=GeneratorKind.IMAGE, group=make_group("image", [make_member("logo")])),
            Fragment(kind=GeneratorKind.COLOR, group=make_group("color", [make_member("logo")])),
        ])
        assert validate(tree).reports == ()

    def test_colliding_root_groups(self, make_member, make_group):
        tree = aggregate([
            Fragment(kind=GeneratorKind.IMAGE, group=make_group("image", [make_member("a")])),
            Fragment(kind=GeneratorKind.IMAGE, group=make_group("image", [make_member("b")])),
        ])
        result = validate(tree)
        assert [g.identifier for g in result.tree.root.groups] == ["image", "imageGroup"]


class TestGeneratedNames:
    def test_group_named_validate_is_renamed(self, tree_of, make_member, make_group):
        tree = tree_of(groups=[make_group("validate", [make_member("back")])])
        result = validate(tree)

        image = result.tree.root.find(["image"])
        assert [g.identifier for g in image.groups] == ["validateGroup"]
        assert image.groups[0].name == "validate"
        [report] = result.reports
        assert report.resolution is Resolution.RENAMED
        assert report.reason == "reserved for generated code"
        assert result.warnings[0].code == "IDENTIFIER_COLLISION"

    def test_member_named_validate_is_renamed(self, tree_of, make_member):
        result = validate(tree_of(make_member("Validate", "validate"), make_member("logo")))
        assert _identifiers(result.tree, "image") == ["logo", "validateImage"]

    def test_every_claimant_of_a_generated_name_is_resolved(self, tree_of, make_member):
        tree = tree_of(make_member("validate"), make_member("Validate", "validate"))
        result = validate(tree)
        assert _identifiers(result.tree, "image") == ["validateImage"]
        assert [r.resolution for r in result.reports] == [
            Resolution.RENAMED,
            Resolution.DROPPED,
        ]

    def test_root_helpers_reserved_at_root_only(self, make_member, make_group):
        root = make_group(
            "R",
            groups=[
                make_group("ValidationError", [make_member("a")]),
                make_group("color", [make_member("hostingBundle")]),
            ],
        )
        result = validate(ResourceTree(root=root))
        assert [g.identifier for g in result.tree.root.groups] == [
            "ValidationErrorGroup",
            "color",
        ]
        assert _identifiers(result.tree, "color") == ["hostingBundle"]

    def test_support_records_keep_their_names(self, make_group, support_member):
        tree = ResourceTree(root=make_group("R", [support_member]))
        result = validate(tree)
        assert [m.identifier for m in result.tree.root.members] == ["hostingBundle"]
        assert result.reports == ()


# ---------------------------------------------------------------------------
# Escaping
# ---------------------------------------------------------------------------


class TestEscaping:
    def test_reserved_word_reported(self, tree_of, make_member):
        result = validate(tree_of(make_member("class", "_class")))
        assert _identifiers(result.tree, "image") == ["_class"]
        [report] = result.reports
        assert report.resolution is Resolution.ESCAPED
        assert report.reason == "a reserved word"

    def test_empty_name_reported(self, tree_of, make_member):
        result = validate(tree_of(make_member("", "_unnamed")))
        [report] = result.reports
        assert report.resolution is Resolution.ESCAPED
        assert report.applied == "_unnamed"
        assert report.reason == "an empty name"

    def test_leading_digit_is_not_reported(self, tree_of, make_member):
        result = validate(tree_of(make_member("2x", "_2x")))
        assert result.reports == ()

    def test_illegal_identifier_is_sanitized(self, tree_of, make_member):
        result = validate(tree_of(make_member("my-image", "my-image")))
        assert _identifiers(result.tree, "image") == ["myImage"]
        [report] = result.reports
        assert report.reason == "not a valid identifier"

    def test_escaped_names_still_collide(self, tree_of, make_member):
        tree = tree_of(make_member("class", "_class"), make_member("Class", "_class"))
        result = validate(tree)
        assert _identifiers(result.tree, "image") == ["_class", "_classImage"]


# ---------------------------------------------------------------------------
# Contract
# ---------------------------------------------------------------------------


class TestContract:
    def test_orphan_internal_record_raises(self, tree_of, make_member):
        tree = tree_of(make_member("a", scope=Scope.INTERNAL))
        with pytest.raises(InternalConsistencyError) as exc_info:
            validate(tree)
        assert exc_info.value.paths == ("R.image.a",)

    def test_support_records_are_exempt(self, make_group, support_member):
        check_contract(make_group("R", [support_member]))

    def test_same_raw_name_with_two_types_raises(self, tree_of, make_member):
        tree = tree_of(make_member("a"), make_member("a", type=ResourceType.COLOR))
        with pytest.raises(InternalConsistencyError, match="single member type"):
            validate(tree)


# ---------------------------------------------------------------------------
# Ordering and determinism
# ---------------------------------------------------------------------------


class TestOrdering:
    def test_root_keeps_registration_order(self, make_member, make_group):
        tree = aggregate([
            Fragment(kind=GeneratorKind.STRING, group=make_group("s", [make_member("a")])),
            Fragment(kind=GeneratorKind.COLOR, group=make_group("c", [make_member("b")])),
        ])
        result = validate(tree)
        assert [g.identifier for g in result.tree.root.groups] == ["string", "color"]

    def test_nested_levels_are_sorted(self, tree_of, make_member, make_group):
        tree = tree_of(
            make_member("zeta"),
            make_member("Alpha", "alpha"),
            make_member("beta"),
            groups=[make_group("Zoo", identifier="zoo"), make_group("Apes", identifier="apes")],
        )
        image = validate(tree).tree.root.find(["image"])
        assert [m.identifier for m in image.members] == ["alpha", "beta", "zeta"]
        assert [g.identifier for g in image.groups] == ["apes", "zoo"]

    def test_validation_is_deterministic(self, tree_of, make_member):
        tree = tree_of(make_member("foo"), make_member("Foo", "foo"), make_member("bar"))
        assert validate(tree) == validate(tree)

    def test_input_tree_untouched(self, tree_of, make_member):
        tree = tree_of(make_member("foo"), make_member("Foo", "foo"))
        before = tree.model_copy(deep=True)
        validate(tree)
        assert tree == before


class TestMirroring:
    def test_checked_members_mirror_into_internal_view(self, tree_of, make_member):
        tree = tree_of(
            make_member("foo", checked=True),
            make_member("Foo", "foo", checked=True),
            make_member("FOO", "foo", checked=True),
        )
        validated = validate(tree).tree
        external = validated.external
        internal = validated.internal

        checked = [
            path for path, m in external.members_with_paths() if m.check is not None
        ]
        assert len(checked) == 2
        for path in checked:
            assert internal.find(path[1:]) == external.find(path[1:])
        internal_paths = [path[1:] for path, _ in internal.members_with_paths()]
        assert sorted(internal_paths) == sorted(path[1:] for path in checked)
        assert validated.root.internal_orphans() == []
