"""Static HTML tables shared across htmltrim modules."""

from __future__ import annotations

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "source",
        "track",
        "wbr",
    }
)

# Content of these elements is serialized verbatim.
RAW_TEXT_ELEMENTS = frozenset({"script", "style"})

# MIME types that browsers treat as classic JavaScript. A <script type> with
# one of these values is equivalent to omitting the attribute.
REDUNDANT_SCRIPT_TYPES = frozenset(
    {
        "application/javascript",
        "application/ecmascript",
        "application/x-ecmascript",
        "application/x-javascript",
        "text/ecmascript",
        "text/javascript",
        "text/javascript1.0",
        "text/javascript1.1",
        "text/javascript1.2",
        "text/javascript1.3",
        "text/javascript1.4",
        "text/javascript1.5",
        "text/jscript",
        "text/livescript",
        "text/x-ecmascript",
        "text/x-javascript",
    }
)
