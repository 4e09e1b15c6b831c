"""Remove attributes that restate the HTML default.

Two tables drive this pass:

- `REDUNDANT_ATTRIBUTES`: attributes whose value equals the implicit default,
  e.g. `<form method="get">`. These are deleted.
- `EMPTY_DEFAULT_ATTRIBUTES`: attributes whose default is equivalent to the
  empty value, e.g. `<audio preload="auto">`. These are rewritten to `""` so
  the serializer can emit the bare attribute name.

Attribute names are matched by exact key, except `type` on `<script>` and
`<link>`: every key that lowercases to `type` is checked.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from .constants import REDUNDANT_SCRIPT_TYPES

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from typing import Any, Protocol

    from .node import Node

    class NodeCallback(Protocol):
        def __call__(self, node: Node) -> None: ...

    class ReportCallback(Protocol):
        def __call__(self, msg: str, *, node: Any | None = None) -> None: ...


@dataclass(frozen=True, slots=True)
class Equals:
    """The attribute is redundant when its value is exactly `value`."""

    value: str

    def redundant_keys(self, node: Node, name: str) -> list[str]:
        if node.attrs.get(name) == self.value:  # type: ignore[union-attr]
            return [name]
        return []


@dataclass(frozen=True, slots=True)
class When:
    """The attribute is redundant when `func(node)` is true."""

    func: Callable[[Node], bool]

    def redundant_keys(self, node: Node, name: str) -> list[str]:
        if name not in node.attrs or not self.func(node):  # type: ignore[operator]
            return []
        return [name]


@dataclass(frozen=True, slots=True)
class WhenAnyCase:
    """Every key whose lowercased name equals the rule name is checked.

    Each such key is redundant when `func(node, key)` is true.
    """

    func: Callable[[Node, str], bool]

    def redundant_keys(self, node: Node, name: str) -> list[str]:
        return [key for key in node.attrs if key.lower() == name and self.func(node, key)]  # type: ignore[union-attr]


RemovalRule = Equals | When | WhenAnyCase


def _script_type_is_redundant(node: Node, key: str) -> bool:
    return node.attrs[key] in REDUNDANT_SCRIPT_TYPES  # type: ignore[index]


def _script_charset_is_redundant(node: Node) -> bool:
    # charset only affects external scripts.
    return not node.attrs.get("src")  # type: ignore[union-attr]


def _link_type_is_redundant(node: Node, key: str) -> bool:
    attrs = node.attrs
    return attrs.get("rel") == "stylesheet" and attrs[key] == "text/css"  # type: ignore[union-attr,index]


def _freeze(table: dict[str, dict[str, Any]]) -> Mapping[str, Mapping[str, Any]]:
    return MappingProxyType({tag: MappingProxyType(rules) for tag, rules in table.items()})


REDUNDANT_ATTRIBUTES: Mapping[str, Mapping[str, RemovalRule]] = _freeze(
    {
        "form": {"method": Equals("get")},
        "input": {"type": Equals("text")},
        "button": {"type": Equals("submit")},
        "script": {
            "language": Equals("javascript"),
            "type": WhenAnyCase(_script_type_is_redundant),
            "charset": When(_script_charset_is_redundant),
        },
        "style": {
            "media": Equals("all"),
            "type": Equals("text/css"),
        },
        "link": {
            "media": Equals("all"),
            "type": WhenAnyCase(_link_type_is_redundant),
        },
        "img": {"loading": Equals("eager")},
        "iframe": {"loading": Equals("eager")},
    }
)

EMPTY_DEFAULT_ATTRIBUTES: Mapping[str, Mapping[str, str]] = _freeze(
    {
        "audio": {"preload": "auto"},
        "video": {"preload": "auto"},
        "form": {"autocomplete": "on"},
        "img": {"decoding": "auto"},
        "track": {"kind": "subtitles"},
        "textarea": {"wrap": "soft"},
        "area": {"shape": "rect"},
        "button": {"type": "submit"},
        "input": {"type": "text"},
    }
)


def strip_redundant_attributes(
    node: Node,
    *,
    callback: NodeCallback | None = None,
    report: ReportCallback | None = None,
) -> bool:
    """Apply both rule tables to a single node. Returns True if attrs changed.

    Removal rules always run before empty-default rules. `button[type]` and
    `input[type]` are listed in both tables with the same value and must end
    up removed, never blanked: once removed, the empty-default lookup sees no
    value and does nothing.
    """

    tag = getattr(node, "tag", None)
    if tag is None:
        return False

    attrs = node.attrs
    if attrs is None:
        attrs = node.attrs = {}

    changed = False

    removal_rules = REDUNDANT_ATTRIBUTES.get(tag)
    if removal_rules:
        for name, rule in removal_rules.items():
            for key in rule.redundant_keys(node, name):
                del attrs[key]
                changed = True
                if report is not None:
                    report(f"Removed redundant attribute '{key}' from <{tag}>", node=node)

    empty_defaults = EMPTY_DEFAULT_ATTRIBUTES.get(tag)
    if empty_defaults:
        for name, default in empty_defaults.items():
            if attrs.get(name) != default:
                continue
            attrs[name] = ""
            changed = True
            if report is not None:
                report(f"Normalized attribute '{name}' on <{tag}> to empty value", node=node)

    if changed and callback is not None:
        callback(node)
    return changed


def remove_redundant_attributes(
    tree: Node,
    *,
    callback: NodeCallback | None = None,
    report: ReportCallback | None = None,
) -> Node:
    """Strip redundant attributes from every element in `tree`, in place.

    Returns the same tree.
    """

    def _visit(node: Node) -> Node:
        strip_redundant_attributes(node, callback=callback, report=report)
        return node

    return tree.walk(_visit)


__all__ = [
    "EMPTY_DEFAULT_ATTRIBUTES",
    "REDUNDANT_ATTRIBUTES",
    "REDUNDANT_SCRIPT_TYPES",
    "Equals",
    "RemovalRule",
    "When",
    "WhenAnyCase",
    "remove_redundant_attributes",
    "strip_redundant_attributes",
]
