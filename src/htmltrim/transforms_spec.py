"""Public transform specifications for htmltrim.

This module contains the user-facing transform dataclasses.

The transform compiler/runtime (compile_transforms/apply_compiled_transforms)
lives in `htmltrim.transforms`, which re-exports everything here:

  from htmltrim.transforms import RemoveRedundantAttrs, compile_transforms, apply_compiled_transforms
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any, Protocol

    from .node import Node

    class NodeCallback(Protocol):
        def __call__(self, node: Node) -> None: ...

    class EditAttrsCallback(Protocol):
        def __call__(self, node: Node) -> dict[str, str | None] | None: ...

    class ReportCallback(Protocol):
        def __call__(self, msg: str, *, node: Any | None = None) -> None: ...


@dataclass(frozen=True, slots=True)
class RemoveRedundantAttrs:
    """Drop attributes that restate the HTML default and blank empty defaults.

    Runs `htmltrim.redundant_attrs.strip_redundant_attributes` on every
    element. `callback` fires once per changed element; `report` receives one
    message per removed or normalized attribute.
    """

    enabled: bool
    callback: NodeCallback | None
    report: ReportCallback | None

    def __init__(
        self,
        *,
        enabled: bool = True,
        callback: NodeCallback | None = None,
        report: ReportCallback | None = None,
    ) -> None:
        object.__setattr__(self, "enabled", bool(enabled))
        object.__setattr__(self, "callback", callback)
        object.__setattr__(self, "report", report)


@dataclass(frozen=True, slots=True)
class EditAttrs:
    """Edit element attributes using a callback.

    - Return None to leave attributes unchanged.
    - Return a dict to replace the node's attributes with that dict.
    """

    selector: str
    func: EditAttrsCallback
    enabled: bool
    callback: NodeCallback | None
    report: ReportCallback | None

    def __init__(
        self,
        selector: str,
        func: EditAttrsCallback,
        *,
        enabled: bool = True,
        callback: NodeCallback | None = None,
        report: ReportCallback | None = None,
    ) -> None:
        object.__setattr__(self, "selector", str(selector))
        object.__setattr__(self, "func", func)
        object.__setattr__(self, "enabled", bool(enabled))
        object.__setattr__(self, "callback", callback)
        object.__setattr__(self, "report", report)


@dataclass(frozen=True, slots=True)
class DropAttrs:
    """Drop attributes whose names match simple glob patterns."""

    selector: str
    patterns: tuple[str, ...]
    enabled: bool
    callback: NodeCallback | None
    report: ReportCallback | None

    def __init__(
        self,
        selector: str,
        *,
        patterns: tuple[str, ...] = (),
        enabled: bool = True,
        callback: NodeCallback | None = None,
        report: ReportCallback | None = None,
    ) -> None:
        object.__setattr__(self, "selector", str(selector))
        object.__setattr__(
            self,
            "patterns",
            tuple(sorted({str(p).strip().lower() for p in patterns if str(p).strip()})),
        )
        object.__setattr__(self, "enabled", bool(enabled))
        object.__setattr__(self, "callback", callback)
        object.__setattr__(self, "report", report)


__all__ = [
    "DropAttrs",
    "EditAttrs",
    "RemoveRedundantAttrs",
]
