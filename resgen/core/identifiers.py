"""Identifier sanitizing for generated Swift accessors.

Every resource name, however malformed, maps to a syntactically valid Swift
identifier.  The substitution rule is fixed in one place:

* Accented letters are reduced to their base letter (NFKD, combining marks
  dropped).  Any other character outside ``[A-Za-z0-9]`` separates words.
* Words are joined in lower camel case: ``"Roboto-Bold" -> "robotoBold"``.
* An empty result becomes ``"_unnamed"``; a leading digit or a reserved word
  gets a ``_`` prefix (``"2x" -> "_2x"``, ``"class" -> "_class"``).

Uniqueness is not guaranteed here; the validator owns that.
"""

from __future__ import annotations

import re
import unicodedata

# ---------------------------------------------------------------------------
# Grammar
# ---------------------------------------------------------------------------

SWIFT_RESERVED_WORDS: frozenset[str] = frozenset({
    # Declarations
    "associatedtype", "class", "deinit", "enum", "extension", "fileprivate",
    "func", "import", "init", "inout", "internal", "let", "open", "operator",
    "private", "precedencegroup", "protocol", "public", "rethrows", "static",
    "struct", "subscript", "typealias", "var",
    # Statements
    "break", "case", "catch", "continue", "default", "defer", "do", "else",
    "fallthrough", "for", "guard", "if", "in", "repeat", "return", "switch",
    "throw", "where", "while",
    # Expressions and types
    "Any", "as", "await", "false", "is", "nil", "self", "Self", "super",
    "throws", "true", "try", "Type", "Protocol",
})

EMPTY_IDENTIFIER = "_unnamed"
ESCAPE_PREFIX = "_"

_IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_WORD_SPLIT_RE = re.compile(r"[^A-Za-z0-9]+")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def sanitize(raw: str) -> str:
    """Convert a raw resource name into a valid Swift identifier.

    Examples::

        sanitize("Roboto-Bold") -> "robotoBold"
        sanitize("data.json")   -> "dataJson"
        sanitize("2x")          -> "_2x"
        sanitize("class")       -> "_class"
        sanitize("")            -> "_unnamed"
    """
    return _escape(camel_case(raw))


def camel_case(raw: str) -> str:
    """Join the words of *raw* in lower camel case without escaping."""
    words = _words(raw)
    if not words:
        return ""
    first = words[0]
    first = first.lower() if first.isupper() else first[0].lower() + first[1:]
    return first + "".join(word[0].upper() + word[1:] for word in words[1:])


def pascal_case(raw: str) -> str:
    """Join the words of *raw* in upper camel case (``"my-assets" -> "MyAssets"``)."""
    return "".join(word[0].upper() + word[1:] for word in _words(raw))


def is_reserved(identifier: str) -> bool:
    """Return ``True`` if *identifier* is a Swift reserved word."""
    return identifier in SWIFT_RESERVED_WORDS


def is_valid_identifier(identifier: str) -> bool:
    """Return ``True`` if *identifier* can be emitted as-is."""
    return (
        bool(_IDENTIFIER_RE.fullmatch(identifier))
        and identifier != "_"
        and not is_reserved(identifier)
    )


def escape_reason(raw: str) -> str | None:
    """Explain why sanitizing *raw* needed an escape, if it did.

    Returns ``"empty"`` or ``"reserved word"``; a leading digit is plain
    grammar and is not reported.
    """
    base = camel_case(raw)
    if not base:
        return "empty"
    if is_reserved(base):
        return "reserved word"
    return None


def swift_string(value: str) -> str:
    """Escape *value* for use inside a Swift string literal (no quotes added)."""
    return (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _words(raw: str) -> list[str]:
    decomposed = unicodedata.normalize("NFKD", raw)
    ascii_text = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    ascii_text = ascii_text.encode("ascii", "ignore").decode("ascii")
    return [word for word in _WORD_SPLIT_RE.split(ascii_text) if word]


def _escape(base: str) -> str:
    if not base:
        return EMPTY_IDENTIFIER
    if base[0].isdigit() or is_reserved(base):
        return ESCAPE_PREFIX + base
    return base
