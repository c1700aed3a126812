"""End-to-end generation tests.

Runs the whole pipeline over a resources document on disk: generators,
aggregation, validation, emission and file output.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from resgen.core.models import Resolution
from resgen.core.validator import validate
from resgen.generators import Resources
from resgen.pipeline import Pipeline


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

@pytest.mark.integration
class TestIconAndFont:
    """Two images differing only in case plus one font, access level public."""

    @pytest.mark.asyncio
    async def test_external_tree(self, icon_font_config, icon_font_resources) -> None:
        result = await Pipeline(icon_font_config).run(icon_font_resources)
        external = result.tree.external

        assert [g.identifier for g in external.groups] == ["image", "font"]
        image, font = external.groups
        assert [(m.identifier, m.name) for m in image.members] == [
            ("icon", "icon"),
            ("iconImage", "Icon"),
        ]
        assert [m.identifier for m in font.members] == ["robotoBold"]

    @pytest.mark.asyncio
    async def test_single_rename_warning(self, icon_font_config, icon_font_resources) -> None:
        result = await Pipeline(icon_font_config).run(icon_font_resources, write=False)
        [warning] = result.warnings
        assert warning.code == "IDENTIFIER_COLLISION"
        assert "'Icon' renamed to `iconImage`" in warning.message

    @pytest.mark.asyncio
    async def test_files_on_disk(self, icon_font_config, icon_font_resources) -> None:
        await Pipeline(icon_font_config).run(icon_font_resources)

        full = icon_font_config.output_path.read_text(encoding="utf-8")
        assert "public struct R {" in full
        assert "public static let iconImage: ImageResource" in full
        assert "public static let robotoBold: FontResource" in full
        assert "fileprivate struct _R {" in full

        uitest = icon_font_config.uitest_output_path.read_text(encoding="utf-8")
        assert uitest.endswith("public struct R {\n}\n")
        assert "import" not in uitest

    @pytest.mark.asyncio
    async def test_rerun_leaves_files_alone(
        self, icon_font_config, icon_font_resources
    ) -> None:
        await Pipeline(icon_font_config).run(icon_font_resources)
        before = icon_font_config.output_path.stat().st_mtime_ns

        result = await Pipeline(icon_font_config).run(icon_font_resources)
        assert result.written == []
        assert icon_font_config.output_path.stat().st_mtime_ns == before


@pytest.mark.integration
class TestFullTarget:
    """A target exercising every generator, loaded from JSON."""

    @pytest.mark.asyncio
    async def test_json_round_trip_generation(
        self, config, sample_resources, tmp_path: Path
    ) -> None:
        path = tmp_path / "resources.json"
        path.write_text(sample_resources.model_dump_json(indent=2), encoding="utf-8")
        loaded = Resources.load(path)

        from_disk = await Pipeline(config).run(loaded, write=False)
        in_memory = await Pipeline(config).run(sample_resources, write=False)
        assert from_disk.full == in_memory.full

    @pytest.mark.asyncio
    async def test_every_kind_present(self, config, sample_resources) -> None:
        result = await Pipeline(config).run(sample_resources, write=False)
        assert [g.identifier for g in result.tree.root.groups] == [
            kind.value for kind in config.generators
        ]

    @pytest.mark.asyncio
    async def test_checked_members_have_internal_records(
        self, config, sample_resources
    ) -> None:
        result = await Pipeline(config).run(sample_resources, write=False)
        external = result.tree.external
        internal = result.tree.internal
        for path, member in external.members_with_paths():
            if member.check is not None:
                assert internal.find(path[1:]) == member, path
        assert result.tree.root.internal_orphans() == []

    @pytest.mark.asyncio
    async def test_validated_tree_is_stable(self, config, sample_resources) -> None:
        result = await Pipeline(config).run(sample_resources, write=False)
        again = validate(result.tree)
        escaped_or_clean = {r.resolution for r in again.reports}
        assert escaped_or_clean <= {Resolution.ESCAPED}

    @pytest.mark.asyncio
    async def test_uitest_surface(self, config, sample_resources) -> None:
        result = await Pipeline(config).run(sample_resources, write=False)
        assert "public struct profileCell {" in result.uitest
        assert 'public static let profileAvatar: String = "profile.avatar"' in result.uitest
        assert "ImageResource" not in result.uitest
