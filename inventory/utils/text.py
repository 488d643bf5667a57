"""String helpers shared by the snippet builders."""

import re

ELLIPSIS = "…"

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_LINE_BREAK = re.compile(r"\r?\n")


def slugify(value: str) -> str:
    """lower-case, collapse non-alphanumerics to '_', never empty."""
    normalized = _NON_ALNUM.sub("_", value.lower()).strip("_")
    return normalized or "workflow"


def truncate(value: str, max_length: int) -> str:
    """cut to max_length characters, the last one being an ellipsis."""
    if len(value) <= max_length:
        return value
    return value[: max(0, max_length - 1)] + ELLIPSIS


def escape_label(value: str) -> str:
    """make text safe inside a quoted mermaid label.

    Quotes become single quotes, square brackets become parentheses and
    line breaks become a literal ``\\n``.
    """
    value = value.replace('"', "'").replace("[", "(").replace("]", ")")
    return _LINE_BREAK.sub(r"\\n", value)


def unique(values: list[str]) -> list[str]:
    """drop repeated strings, keeping first occurrences in order."""
    return list(dict.fromkeys(values))
