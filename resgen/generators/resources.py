"""Normalized resource records handed over by the resource parsers.

The parsers (project file, asset catalogs, layout files, property lists,
strings files) are separate tools.  They emit a single JSON document that
validates against ``Resources``; everything in it is trusted as-is.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Images, colors, fonts, files
# ---------------------------------------------------------------------------

class Image(BaseModel):
    """A loose image file (scale suffixes already stripped)."""
    name: str = Field(..., description="Image name without scale suffix or extension")
    path: str = Field(default="", description="Path relative to the project")


class AssetFolder(BaseModel):
    """An asset catalog.  ``/`` in a name marks a namespaced folder."""
    name: str = Field(..., description="Catalog name, e.g. 'Images'")
    images: list[str] = Field(default_factory=list, description="Image set names")
    colors: list[str] = Field(default_factory=list, description="Color set names")


class Font(BaseModel):
    """A font file registered with the target."""
    name: str = Field(..., description="PostScript name, e.g. 'Roboto-Bold'")
    filename: str = Field(default="", description="Font file name")


class ResourceFile(BaseModel):
    """Any other file copied into the bundle."""
    filename: str = Field(..., description="File name including extension")

    @property
    def stem(self) -> str:
        return self.filename.rsplit(".", 1)[0] if "." in self.filename else self.filename

    @property
    def extension(self) -> str:
        return self.filename.rsplit(".", 1)[1] if "." in self.filename else ""


# ---------------------------------------------------------------------------
# Layout files
# ---------------------------------------------------------------------------

class Reusable(BaseModel):
    """A reusable cell or view with a reuse identifier."""
    identifier: str
    type: str = Field(default="UITableViewCell", description="Swift class of the cell")


class ViewController(BaseModel):
    """A storyboard scene."""
    type: str = Field(default="UIViewController", description="Swift class")
    storyboard_identifier: Optional[str] = Field(
        default=None, description="Storyboard ID, if set"
    )


class Segue(BaseModel):
    """A storyboard segue with an identifier."""
    identifier: str
    source_type: str = Field(default="UIViewController")
    destination_type: str = Field(default="UIViewController")
    kind: str = Field(default="show")


class Nib(BaseModel):
    """A parsed nib/xib file."""
    name: str
    root_views: list[str] = Field(default_factory=list, description="Classes of root views")
    reusables: list[Reusable] = Field(default_factory=list)
    used_images: list[str] = Field(default_factory=list)
    accessibility_identifiers: list[str] = Field(default_factory=list)


class Storyboard(BaseModel):
    """A parsed storyboard file."""
    name: str
    initial_view_controller: Optional[ViewController] = None
    view_controllers: list[ViewController] = Field(default_factory=list)
    segues: list[Segue] = Field(default_factory=list)
    reusables: list[Reusable] = Field(default_factory=list)
    used_images: list[str] = Field(default_factory=list)
    accessibility_identifiers: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Strings and property lists
# ---------------------------------------------------------------------------

class StringEntry(BaseModel):
    """One localized key in one locale."""
    key: str
    value: str = ""
    comment: str = ""


class LocalizableStrings(BaseModel):
    """One ``.strings`` table for one locale."""
    table: str = Field(default="Localizable", description="Table name (file stem)")
    locale: Optional[str] = Field(default=None, description="None for Base/unlocalized")
    entries: list[StringEntry] = Field(default_factory=list)


class PropertyList(BaseModel):
    """A property list parsed for one build configuration."""
    build_configuration: str = Field(default="Debug")
    path: str = Field(default="")
    contents: dict[str, Any] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Top-level document
# ---------------------------------------------------------------------------

class Resources(BaseModel):
    """Everything the parsers found for one target."""
    development_language: str = Field(default="en")
    images: list[Image] = Field(default_factory=list)
    asset_folders: list[AssetFolder] = Field(default_factory=list)
    fonts: list[Font] = Field(default_factory=list)
    files: list[ResourceFile] = Field(default_factory=list)
    nibs: list[Nib] = Field(default_factory=list)
    storyboards: list[Storyboard] = Field(default_factory=list)
    strings: list[LocalizableStrings] = Field(default_factory=list)
    info_plists: list[PropertyList] = Field(default_factory=list)
    entitlements: list[PropertyList] = Field(default_factory=list)

    @property
    def declared_images(self) -> list[str]:
        """Every image name, loose files first, then asset catalog entries."""
        names = [image.name for image in self.images]
        for folder in self.asset_folders:
            names.extend(folder.images)
        return names

    @property
    def used_images(self) -> list[str]:
        """Image names referenced from nibs and storyboards."""
        names: list[str] = []
        for nib in self.nibs:
            names.extend(nib.used_images)
        for storyboard in self.storyboards:
            names.extend(storyboard.used_images)
        return names

    @classmethod
    def load(cls, path: Path) -> "Resources":
        """Load a parser-produced ``resources.json`` document."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)
