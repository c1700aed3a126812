"""resgen emitter -- turns a validated tree into Swift source text.

Quick usage::

    from resgen.emitter import EmitMode, EmitOptions, emit

    text = emit(result.tree, EmitMode.FULL, EmitOptions(objc_compat=True))
"""

from resgen.emitter.emit import (
    EmitMode,
    EmitOptions,
    emit,
    extract_modules,
    unused_images,
)
from resgen.emitter.templates import TemplateRenderer

__all__ = [
    "EmitMode",
    "EmitOptions",
    "TemplateRenderer",
    "emit",
    "extract_modules",
    "unused_images",
]
