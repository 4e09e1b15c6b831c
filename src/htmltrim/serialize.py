"""HTML serialization for htmltrim trees."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .constants import RAW_TEXT_ELEMENTS, VOID_ELEMENTS

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .node import Node


def _escape_text(text: str) -> str:
    if "&" not in text and "<" not in text and ">" not in text:
        return text
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def _escape_attr_value(value: str) -> str:
    if "&" not in value and '"' not in value:
        return value
    return value.replace("&", "&amp;").replace('"', "&quot;")


def serialize_start_tag(
    name: str,
    attrs: Mapping[str, str | None] | None,
    *,
    minimize_empty: bool = True,
) -> str:
    """Serialize a start tag.

    With `minimize_empty`, attributes with an empty (or None) value are
    written as a bare name: `<audio preload>` instead of `<audio preload="">`.
    """

    if not attrs:
        return f"<{name}>"

    parts = [f"<{name}"]
    for key, value in attrs.items():
        if value is None or value == "":
            if minimize_empty:
                parts.append(f" {key}")
            else:
                parts.append(f' {key}=""')
            continue
        parts.append(f' {key}="{_escape_attr_value(str(value))}"')
    parts.append(">")
    return "".join(parts)


def serialize_end_tag(name: str) -> str:
    return f"</{name}>"


def to_html(node: Node, *, minimize_empty: bool = True) -> str:
    out: list[str] = []
    _serialize(node, out, minimize_empty=minimize_empty, raw=False)
    return "".join(out)


def _serialize(node: Node, out: list[str], *, minimize_empty: bool, raw: bool) -> None:
    name = node.name
    if name == "#text":
        data = node.data  # type: ignore[attr-defined]
        out.append(data if raw else _escape_text(data))
        return
    if name == "#comment":
        out.append(f"<!--{node.data}-->")  # type: ignore[attr-defined]
        return

    tag = node.tag
    if tag is not None:
        out.append(serialize_start_tag(tag, node.attrs, minimize_empty=minimize_empty))
        if tag in VOID_ELEMENTS:
            return

    child_raw = tag in RAW_TEXT_ELEMENTS
    for child in node.children or ():
        _serialize(child, out, minimize_empty=minimize_empty, raw=child_raw)

    if tag is not None:
        out.append(serialize_end_tag(tag))
