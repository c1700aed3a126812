"""Unit tests for fragment aggregation (resgen.core.aggregator)."""

from __future__ import annotations

import pytest

from resgen.core.aggregator import aggregate, support_members, with_support_members
from resgen.core.models import (
    INTERNAL_EXEMPT_TYPES,
    AccessLevel,
    Fragment,
    GeneratorKind,
    Scope,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def fragments(make_member, make_group):
    return [
        Fragment(kind=GeneratorKind.STRING, group=make_group("whatever", [make_member("a")])),
        Fragment(kind=GeneratorKind.IMAGE, group=make_group("image", [make_member("b")])),
    ]


class TestAggregate:
    def test_children_named_after_kind_in_order(self, fragments):
        tree = aggregate(fragments)
        assert [g.identifier for g in tree.root.groups] == ["string", "image"]
        assert [g.name for g in tree.root.groups] == ["string", "image"]

    def test_root_and_settings(self, fragments):
        tree = aggregate(fragments, AccessLevel.PUBLIC, name_prefix="App")
        assert tree.root.identifier == "AppR"
        assert tree.access_level is AccessLevel.PUBLIC
        assert tree.external_name == "AppR"

    def test_members_untouched(self, fragments):
        tree = aggregate(fragments)
        assert tree.root.find(["string", "a"]) == fragments[0].group.members[0]

    def test_no_fragments(self):
        tree = aggregate([])
        assert tree.root.groups == ()
        assert tree.root.is_empty()


class TestSupportMembers:
    def test_internal_and_exempt(self):
        for member in support_members():
            assert member.scope is Scope.INTERNAL
            assert member.type in INTERNAL_EXEMPT_TYPES
            assert "Foundation" in member.modules

    def test_default_bundle_is_main(self):
        bundle = support_members()[0]
        assert bundle.identifier == "hostingBundle"
        assert bundle.value == "Bundle.main"

    def test_bundle_identifier(self):
        bundle = support_members("com.example.Resources")[0]
        assert bundle.value == 'Bundle(identifier: "com.example.Resources") ?? Bundle.main'

    def test_added_once_to_root(self, fragments):
        tree = with_support_members(with_support_members(aggregate(fragments)))
        assert [m.identifier for m in tree.root.members] == [
            "hostingBundle",
            "applicationLocale",
        ]
        assert tree.external.members == ()
        assert len(tree.internal.members) == 2
