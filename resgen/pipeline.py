"""resgen pipeline orchestrator.

Runs one generation pass:

1. GENERATE  -- every enabled struct generator turns its slice of the
   resources into a fragment (concurrently, results in registration order).
2. AGGREGATE -- fragments become one namespace tree under ``R``.
3. VALIDATE  -- collisions and illegal identifiers are resolved.
4. EMIT      -- the full and UI-test Swift files are rendered and written
   when their contents changed.

Usage::

    python -m resgen.pipeline resources.json --output R.generated.swift
    python -m resgen.pipeline resources.json -o R.generated.swift --uitest-output R.uitest.swift
"""

from __future__ import annotations

import asyncio
import sys
import time
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError
from rich.panel import Panel

from resgen.config import Config
from resgen.core import (
    Fragment,
    InternalConsistencyError,
    ResourceTree,
    aggregate,
    validate,
    with_support_members,
)
from resgen.core.models import Diagnostic, Severity
from resgen.emitter import EmitMode, TemplateRenderer, emit
from resgen.generators import Resources, build_generators
from resgen.utils import (
    console,
    format_duration,
    print_diagnostics,
    print_error,
    print_success,
    print_summary_table,
    write_if_changed,
)


class GenerationResult(BaseModel):
    """Everything one pass produced."""

    tree: ResourceTree
    full: str
    uitest: Optional[str] = None
    diagnostics: list[Diagnostic] = Field(default_factory=list)
    written: list[Path] = Field(default_factory=list)

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is not Severity.INFO]


# ---------------------------------------------------------------------------
# Pipeline Orchestrator
# ---------------------------------------------------------------------------


class Pipeline:
    """Drives the generate, aggregate, validate, emit sequence.

    Attributes:
        config: Run configuration.
        renderer: Template renderer shared by both outputs.
    """

    def __init__(self, config: Config, renderer: TemplateRenderer | None = None) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()

    async def generate(self, resources: Resources) -> list[Fragment]:
        """Run the enabled generators concurrently.

        Generators share nothing, so each one runs in a worker thread; the
        gathered fragments keep registration order.
        """
        settings = self.config.generator_settings(resources)
        generators = build_generators(self.config.generators, resources, settings)
        fragments = await asyncio.gather(
            *(asyncio.to_thread(generator.fragment) for generator in generators)
        )
        return list(fragments)

    def build(self, fragments: list[Fragment], resources: Resources) -> GenerationResult:
        """Aggregate, validate and render *fragments*.

        Raises:
            InternalConsistencyError: If a fragment breaks the tree contract.
        """
        tree = aggregate(fragments, self.config.access_level, self.config.name_prefix)
        result = validate(tree)
        final = with_support_members(result.tree, self.config.bundle_identifier)

        full = emit(final, EmitMode.FULL, self.config.emit_options(resources), self.renderer)
        uitest = None
        if self.config.uitest_output_path is not None:
            uitest = emit(final, EmitMode.UITEST, renderer=self.renderer)

        return GenerationResult(
            tree=final,
            full=full,
            uitest=uitest,
            diagnostics=result.diagnostics,
        )

    async def run(self, resources: Resources, write: bool = True) -> GenerationResult:
        """Execute one generation pass.

        Args:
            resources: Parsed resources of the target.
            write: Write the outputs to the configured paths.  Files whose
                contents are unchanged are left alone.

        Returns:
            The rendered outputs, diagnostics and the paths actually written.
        """
        fragments = await self.generate(resources)
        result = self.build(fragments, resources)

        if write:
            outputs = [(self.config.output_path, result.full)]
            if result.uitest is not None and self.config.uitest_output_path is not None:
                outputs.append((self.config.uitest_output_path, result.uitest))
            for path, content in outputs:
                if await write_if_changed(path, content):
                    result.written.append(path)
        return result


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def _build_config(args) -> Config:
    config = Config.load(Path(args.config)) if args.config else Config.from_env()
    overrides = {
        "output_path": Path(args.output) if args.output else None,
        "uitest_output_path": Path(args.uitest_output) if args.uitest_output else None,
        "generators": (
            [g.strip() for g in args.generators.split(",") if g.strip()]
            if args.generators
            else None
        ),
        "access_level": args.access_level,
        "name_prefix": args.name_prefix,
        "imports": args.imports,
        "product_module_name": args.product_module_name,
        "bundle_identifier": args.bundle_identifier,
        "development_language": args.development_language,
        "objc_compat": True if args.objc else None,
        "unused_images": True if args.unused_images else None,
    }
    update = {key: value for key, value in overrides.items() if value is not None}
    return Config.model_validate({**config.model_dump(), **update})


def main() -> None:
    """CLI entry point for ``resgen`` / ``python -m resgen.pipeline``."""
    import argparse

    parser = argparse.ArgumentParser(
        description="resgen -- strongly typed Swift accessors for app resources",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  resgen resources.json -o R.generated.swift\n"
            "  resgen resources.json -o R.generated.swift --access-level public --objc\n"
            "  resgen resources.json --generators image,font,string\n"
        ),
    )

    parser.add_argument("resources", help="Path to the parsed resources JSON document")
    parser.add_argument("--config", "-c", default=None, help="JSON configuration file")
    parser.add_argument("--output", "-o", default=None, help="Generated Swift file")
    parser.add_argument("--uitest-output", default=None, help="Generated UI-test Swift file")
    parser.add_argument(
        "--generators",
        default=None,
        help="Comma-separated generator kinds, in registration order",
    )
    parser.add_argument(
        "--access-level",
        default=None,
        choices=["public", "internal", "fileprivate"],
        help="Access level of the generated declarations",
    )
    parser.add_argument("--name-prefix", default=None, help="Prefix of the R/_R type names")
    parser.add_argument(
        "--import",
        dest="imports",
        action="append",
        default=None,
        help="Additional module to import (repeatable)",
    )
    parser.add_argument("--product-module-name", default=None)
    parser.add_argument("--bundle-identifier", default=None)
    parser.add_argument("--development-language", default=None)
    parser.add_argument("--objc", action="store_true", help="Emit the Objective-C surface")
    parser.add_argument(
        "--unused-images", action="store_true", help="Report images no layout file uses"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Also print merged duplicates"
    )

    args = parser.parse_args()

    resources_path = Path(args.resources)
    if not resources_path.exists():
        console.print(f"[bold red]Error:[/bold red] Resources file not found: {resources_path}")
        sys.exit(1)

    try:
        config = _build_config(args)
        resources = Resources.load(resources_path)
    except (OSError, ValidationError) as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        sys.exit(1)

    start = time.monotonic()
    pipeline = Pipeline(config)
    try:
        result = asyncio.run(pipeline.run(resources))
    except InternalConsistencyError as exc:
        print_error(str(exc))
        sys.exit(1)
    elapsed = time.monotonic() - start

    print_diagnostics(result.diagnostics, verbose=args.verbose)

    members = sum(1 for _ in result.tree.external.members_with_paths())
    outputs = [config.output_path]
    if config.uitest_output_path is not None:
        outputs.append(config.uitest_output_path)
    console.print(
        Panel(
            f"Generators : {', '.join(kind.value for kind in config.generators)}\n"
            f"Output     : {', '.join(str(path) for path in outputs)}",
            title="[bold]resgen[/bold]",
            border_style="bright_cyan",
        )
    )
    print_summary_table(
        {
            "Accessors": str(members),
            "Warnings": str(len(result.warnings)),
            "Files written": str(len(result.written)),
            "Duration": format_duration(elapsed),
        }
    )
    if result.written:
        print_success(f"Generated {', '.join(str(path) for path in result.written)}")
    else:
        print_success("Generated files are up to date")


if __name__ == "__main__":
    main()
