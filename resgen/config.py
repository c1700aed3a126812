"""resgen configuration.

Centralised, typed configuration for a generation run.  Settings use a
Pydantic v2 model so they are validated at construction time and can be
serialised to/from JSON or read from ``RESGEN_*`` environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from resgen.core.models import DEFAULT_GENERATOR_ORDER, AccessLevel, GeneratorKind
from resgen.emitter import EmitOptions
from resgen.generators import GeneratorSettings, Resources


class Config(BaseModel):
    """Global resgen configuration.

    Created once by the CLI entry point (or by ``from_env``) and handed to
    ``Pipeline``, which derives the generator settings and emit options from
    it.
    """

    output_path: Path = Field(default=Path("R.generated.swift"))
    uitest_output_path: Optional[Path] = Field(
        default=None, description="Where to write the UI-test surface; skipped when unset"
    )
    generators: list[GeneratorKind] = Field(default_factory=lambda: list(DEFAULT_GENERATOR_ORDER))
    access_level: AccessLevel = Field(default=AccessLevel.INTERNAL)
    name_prefix: str = Field(default="", description="Prefix of the generated root types")
    imports: list[str] = Field(default_factory=list)
    product_module_name: str = Field(default="")
    bundle_identifier: str = Field(
        default="", description="Bundle identifier of the resource bundle; main bundle if empty"
    )
    development_language: Optional[str] = Field(
        default=None, description="Overrides the development language of the resources"
    )
    objc_compat: bool = Field(default=False)
    unused_images: bool = Field(default=False)

    @field_validator("generators")
    @classmethod
    def _dedupe_generators(cls, value: list[GeneratorKind]) -> list[GeneratorKind]:
        return list(dict.fromkeys(value))

    # ------------------------------------------------------------------
    # Derived settings
    # ------------------------------------------------------------------

    def generator_settings(self, resources: Resources | None = None) -> GeneratorSettings:
        """The settings shared by every struct generator."""
        language = self.development_language
        if language is None:
            language = resources.development_language if resources else "en"
        return GeneratorSettings(
            access_level=self.access_level,
            name_prefix=self.name_prefix,
            development_language=language,
        )

    def emit_options(self, resources: Resources | None = None) -> EmitOptions:
        """Emit options for the full output.

        Image usage is only collected when the unused-image report is on.
        """
        declared: list[str] = []
        used: list[str] = []
        if self.unused_images and resources is not None:
            declared = resources.declared_images
            used = resources.used_images
        return EmitOptions(
            imports=self.imports,
            product_module_name=self.product_module_name,
            objc_compat=self.objc_compat,
            unused_images=self.unused_images,
            declared_images=declared,
            used_images=used,
        )

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            RESGEN_OUTPUT, RESGEN_UITEST_OUTPUT, RESGEN_GENERATORS,
            RESGEN_ACCESS_LEVEL, RESGEN_NAME_PREFIX, RESGEN_IMPORTS,
            RESGEN_PRODUCT_MODULE_NAME, RESGEN_BUNDLE_IDENTIFIER,
            RESGEN_DEVELOPMENT_LANGUAGE, RESGEN_OBJC_COMPAT,
            RESGEN_UNUSED_IMAGES.

        List values are comma separated; flags accept ``1``/``true``/``yes``.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("RESGEN_OUTPUT"):
            kwargs["output_path"] = Path(os.environ["RESGEN_OUTPUT"])
        if os.environ.get("RESGEN_UITEST_OUTPUT"):
            kwargs["uitest_output_path"] = Path(os.environ["RESGEN_UITEST_OUTPUT"])
        if os.environ.get("RESGEN_GENERATORS"):
            kwargs["generators"] = _split(os.environ["RESGEN_GENERATORS"])
        if os.environ.get("RESGEN_ACCESS_LEVEL"):
            kwargs["access_level"] = os.environ["RESGEN_ACCESS_LEVEL"]
        if os.environ.get("RESGEN_NAME_PREFIX"):
            kwargs["name_prefix"] = os.environ["RESGEN_NAME_PREFIX"]
        if os.environ.get("RESGEN_IMPORTS"):
            kwargs["imports"] = _split(os.environ["RESGEN_IMPORTS"])
        if os.environ.get("RESGEN_PRODUCT_MODULE_NAME"):
            kwargs["product_module_name"] = os.environ["RESGEN_PRODUCT_MODULE_NAME"]
        if os.environ.get("RESGEN_BUNDLE_IDENTIFIER"):
            kwargs["bundle_identifier"] = os.environ["RESGEN_BUNDLE_IDENTIFIER"]
        if os.environ.get("RESGEN_DEVELOPMENT_LANGUAGE"):
            kwargs["development_language"] = os.environ["RESGEN_DEVELOPMENT_LANGUAGE"]
        if os.environ.get("RESGEN_OBJC_COMPAT"):
            kwargs["objc_compat"] = _flag(os.environ["RESGEN_OBJC_COMPAT"])
        if os.environ.get("RESGEN_UNUSED_IMAGES"):
            kwargs["unused_images"] = _flag(os.environ["RESGEN_UNUSED_IMAGES"])
        return cls(**kwargs)


def _split(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")
