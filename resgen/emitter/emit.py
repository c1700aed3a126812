"""Serialize a validated ``ResourceTree`` into generated Swift source.

Two outputs come from the same tree:

* ``full``   -- header, imports, the external ``R`` hierarchy, the internal
  ``_R`` hierarchy, the optional Objective-C surface and the optional
  unused-image report.
* ``uitest`` -- header plus ``R`` restricted to accessibility identifiers.

Emission is a pure function of its inputs, so unchanged input always yields
the exact text written last time.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from pydantic import BaseModel, Field

from ..core.identifiers import sanitize
from ..core.models import ResourceTree, ResourceType
from .objc import legacy_surface
from .swift import external_struct, internal_struct
from .templates import TemplateRenderer


class EmitMode(str, Enum):
    FULL = "full"
    UITEST = "uitest"


class EmitOptions(BaseModel):
    """Everything besides the tree that shapes the generated file."""

    imports: list[str] = Field(default_factory=list, description="Extra modules to import")
    product_module_name: str = Field(
        default="", description="Module the file is compiled into; never imported"
    )
    objc_compat: bool = Field(default=False, description="Emit the Objective-C surface")
    unused_images: bool = Field(default=False, description="Append the unused-image report")
    declared_images: list[str] = Field(default_factory=list)
    used_images: list[str] = Field(default_factory=list)


UITEST_TYPES: frozenset[ResourceType] = frozenset({ResourceType.IDENTIFIER})


def emit(
    tree: ResourceTree,
    mode: EmitMode = EmitMode.FULL,
    options: EmitOptions | None = None,
    renderer: TemplateRenderer | None = None,
) -> str:
    """Render *tree* as Swift source.

    Args:
        tree: A validated tree (support members already added for ``full``).
        mode: Which surface to produce.
        options: Imports, interop and report switches.
        renderer: Template renderer; a default one is created when omitted.

    Returns:
        The complete file contents, ending with a newline.
    """
    options = options or EmitOptions()
    renderer = renderer or TemplateRenderer()

    if mode is EmitMode.UITEST:
        external = tree.external.restrict(UITEST_TYPES)
        return renderer.render(
            "uitest.swift.j2",
            {"external": external_struct(external, tree, with_validate=False)},
        )

    external = tree.external
    internal = tree.internal
    context = {
        "imports": extract_modules(
            tree,
            options.imports,
            exclude=[options.product_module_name],
            objc_compat=options.objc_compat,
        ),
        "external": external_struct(external, tree),
        "internal": internal_struct(internal, tree),
        "objc": legacy_surface(external, internal, tree) if options.objc_compat else None,
        "unused_images": (
            unused_images(options.declared_images, options.used_images)
            if options.unused_images
            else None
        ),
    }
    return renderer.render("full.swift.j2", context)


def extract_modules(
    tree: ResourceTree,
    configured: Iterable[str] = (),
    exclude: Iterable[str] = (),
    *,
    objc_compat: bool = False,
) -> list[str]:
    """Modules the generated file must import, sorted.

    Collected from the members of both views plus *configured*; anything in
    *exclude* (the product module itself) is left out.
    """
    modules = {module for module in configured if module}
    for view in (tree.external, tree.internal):
        for _, member in view.members_with_paths():
            modules.update(member.modules)
    if objc_compat:
        modules.add("Foundation")
    modules.difference_update(exclude)
    return sorted(modules)


def unused_images(declared: Iterable[str], used: Iterable[str]) -> list[str]:
    """Identifiers of declared images never referenced from a layout file.

    Example::

        unused_images({"a", "b", "c"}, {"a", "b"}) -> ["c"]
    """
    unused = set(declared) - set(used)
    return sorted({sanitize(name) for name in unused})
