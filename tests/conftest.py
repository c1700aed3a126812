"""Shared pytest fixtures for the resgen test suite.

Provides reusable fixtures for:
- Member / group builders for hand-made trees
- Sample ``Resources`` documents (a broad one and the icon/font scenario)
- Configurations writing into a temporary directory
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest

from resgen.config import Config
from resgen.core.models import (
    AccessLevel,
    Check,
    GeneratorKind,
    Group,
    Member,
    ResourceType,
    Scope,
)
from resgen.generators import GeneratorSettings
from resgen.generators.resources import (
    AssetFolder,
    Font,
    Image,
    LocalizableStrings,
    Nib,
    PropertyList,
    ResourceFile,
    Resources,
    Reusable,
    Segue,
    Storyboard,
    StringEntry,
    ViewController,
)


# ---------------------------------------------------------------------------
# Tree builders
# ---------------------------------------------------------------------------


@pytest.fixture
def make_member() -> Callable[..., Member]:
    """Factory for members; unspecified fields get image-like defaults."""

    def _make(
        name: str,
        identifier: str | None = None,
        *,
        type: ResourceType = ResourceType.IMAGE,
        value: str | None = None,
        checked: bool = False,
        **extra: Any,
    ) -> Member:
        check = None
        if checked:
            check = Check(condition=f'missing("{name}")', message=f"'{name}' is missing")
        return Member(
            name=name,
            identifier=identifier if identifier is not None else name,
            type=type,
            swift_type="ImageResource",
            value=value if value is not None else f'ImageResource(name: "{name}")',
            key=name,
            check=check,
            **extra,
        )

    return _make


@pytest.fixture
def make_group() -> Callable[..., Group]:
    def _make(name: str, members=(), groups=(), identifier: str | None = None, **extra) -> Group:
        return Group(
            name=name,
            identifier=identifier if identifier is not None else name,
            members=tuple(members),
            groups=tuple(groups),
            **extra,
        )

    return _make


@pytest.fixture
def support_member() -> Member:
    return Member(
        name="hostingBundle",
        identifier="hostingBundle",
        type=ResourceType.BUNDLE,
        swift_type="Bundle",
        value="Bundle.main",
        scope=Scope.INTERNAL,
    )


# ---------------------------------------------------------------------------
# Resources
# ---------------------------------------------------------------------------


@pytest.fixture
def settings() -> GeneratorSettings:
    return GeneratorSettings(access_level=AccessLevel.PUBLIC)


@pytest.fixture
def icon_font_resources() -> Resources:
    """Two images that differ only in case plus one font."""
    return Resources(
        images=[Image(name="icon"), Image(name="Icon")],
        fonts=[Font(name="Roboto-Bold", filename="Roboto-Bold.ttf")],
    )


@pytest.fixture
def sample_resources() -> Resources:
    """A target using every generator at least once."""
    return Resources(
        development_language="en",
        images=[Image(name="logo"), Image(name="background", path="Images/background.jpg")],
        asset_folders=[
            AssetFolder(
                name="Images",
                images=["settings", "Icons/back", "Icons/close"],
                colors=["Primary", "Brand/accent"],
            )
        ],
        fonts=[Font(name="Roboto-Bold", filename="Roboto-Bold.ttf")],
        files=[ResourceFile(filename="data.json"), ResourceFile(filename="README")],
        nibs=[
            Nib(
                name="ProfileCell",
                root_views=["ProfileCell"],
                reusables=[Reusable(identifier="profileCell", type="ProfileCell")],
                used_images=["logo"],
                accessibility_identifiers=["profile.avatar", "profile.name"],
            )
        ],
        storyboards=[
            Storyboard(
                name="Main",
                initial_view_controller=ViewController(type="HomeViewController"),
                view_controllers=[
                    ViewController(type="HomeViewController"),
                    ViewController(
                        type="DetailViewController", storyboard_identifier="detail"
                    ),
                ],
                segues=[
                    Segue(
                        identifier="showDetail",
                        source_type="HomeViewController",
                        destination_type="DetailViewController",
                    )
                ],
                used_images=["settings"],
                accessibility_identifiers=["home.title"],
            )
        ],
        strings=[
            LocalizableStrings(
                table="Localizable",
                locale="en",
                entries=[
                    StringEntry(key="welcome.title", value="Welcome"),
                    StringEntry(key="inbox.count", value="Hello %@, you have %d messages"),
                ],
            ),
            LocalizableStrings(
                table="Localizable",
                locale="nl",
                entries=[StringEntry(key="welcome.title", value="Welkom")],
            ),
        ],
        info_plists=[
            PropertyList(
                build_configuration="Debug",
                path="Info.plist",
                contents={
                    "CFBundleName": "Sample",
                    "UIApplicationShortcutItems": [
                        {"UIApplicationShortcutItemType": "compose", "UIApplicationShortcutItemTitle": "Compose"}
                    ],
                },
            )
        ],
        entitlements=[
            PropertyList(
                build_configuration="Debug",
                path="App.entitlements",
                contents={"aps-environment": "development"},
            ),
            PropertyList(
                build_configuration="Release",
                path="App.entitlements",
                contents={"aps-environment": "production"},
            ),
        ],
    )


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@pytest.fixture
def config(tmp_path: Path) -> Config:
    """Config writing both outputs into ``tmp_path``."""
    return Config(
        output_path=tmp_path / "R.generated.swift",
        uitest_output_path=tmp_path / "R.uitest.swift",
        access_level=AccessLevel.PUBLIC,
    )


@pytest.fixture
def icon_font_config(tmp_path: Path) -> Config:
    return Config(
        output_path=tmp_path / "R.generated.swift",
        uitest_output_path=tmp_path / "R.uitest.swift",
        access_level=AccessLevel.PUBLIC,
        generators=[GeneratorKind.IMAGE, GeneratorKind.FONT],
    )
