"""Tree transforms for minification passes.

Transforms are declared as small frozen specs (see `htmltrim.transforms_spec`),
compiled once, and then applied to a tree. Each stage is applied in a single
depth-first walk; transforms within a stage run in declaration order on each
element before the walk moves on.

Performance: selectors and attribute patterns are compiled once before
application.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from .redundant_attrs import strip_redundant_attributes
from .transforms_spec import DropAttrs, EditAttrs, RemoveRedundantAttrs

if TYPE_CHECKING:
    from typing import Any, Protocol

    from .node import Node

    class NodeCallback(Protocol):
        def __call__(self, node: Node) -> None: ...

    class EditAttrsCallback(Protocol):
        def __call__(self, node: Node) -> dict[str, str | None] | None: ...

    class ReportCallback(Protocol):
        def __call__(self, msg: str, *, node: Any | None = None) -> None: ...


# -----------------
# Public API
# -----------------


@dataclass(frozen=True, slots=True)
class Stage:
    """Group transforms into an explicit stage.

    Each stage is a separate walk over the tree.

    - Stages can be nested; nested stages are flattened.
    - If at least one Stage is present at the top level of a transform list,
        any top-level transforms around it are automatically grouped into
        implicit stages.
    """

    transforms: tuple[TransformSpec, ...]
    enabled: bool
    callback: NodeCallback | None
    report: ReportCallback | None

    def __init__(
        self,
        transforms: list[TransformSpec] | tuple[TransformSpec, ...],
        *,
        enabled: bool = True,
        callback: NodeCallback | None = None,
        report: ReportCallback | None = None,
    ) -> None:
        object.__setattr__(self, "transforms", tuple(transforms))
        object.__setattr__(self, "enabled", bool(enabled))
        object.__setattr__(self, "callback", callback)
        object.__setattr__(self, "report", report)


# -----------------
# Compilation
# -----------------


Transform = RemoveRedundantAttrs | EditAttrs | DropAttrs

_TRANSFORM_CLASSES: tuple[type[object], ...] = (
    RemoveRedundantAttrs,
    EditAttrs,
    DropAttrs,
)

TransformSpec = Transform | Stage


@dataclass(frozen=True, slots=True)
class _CompiledRemoveRedundantAttrsTransform:
    kind: Literal["remove_redundant_attrs"]
    callback: NodeCallback | None
    report: ReportCallback | None


@dataclass(frozen=True, slots=True)
class _CompiledRewriteAttrsTransform:
    kind: Literal["rewrite_attrs"]
    selector_str: str
    tags: frozenset[str] | None
    func: EditAttrsCallback


class _CompiledRewriteAttrsChain:
    """Chain of attribute transforms sharing one selector.

    Fused from adjacent EditAttrs/DropAttrs specs so the selector is matched
    once per node.
    """

    __slots__ = ("funcs", "kind", "selector_str", "tags")

    kind: Literal["rewrite_attrs_chain"]
    selector_str: str
    tags: frozenset[str] | None
    funcs: list[EditAttrsCallback]

    def __init__(
        self,
        selector_str: str,
        tags: frozenset[str] | None,
        funcs: list[EditAttrsCallback],
    ) -> None:
        self.kind = "rewrite_attrs_chain"
        self.selector_str = selector_str
        self.tags = tags
        self.funcs = funcs


@dataclass(frozen=True, slots=True)
class _CompiledStageHookTransform:
    kind: Literal["stage_hook"]
    index: int
    callback: NodeCallback | None
    report: ReportCallback | None


@dataclass(frozen=True, slots=True)
class _CompiledStageBoundary:
    kind: Literal["stage_boundary"]


CompiledTransform = (
    _CompiledRemoveRedundantAttrsTransform
    | _CompiledRewriteAttrsTransform
    | _CompiledRewriteAttrsChain
    | _CompiledStageHookTransform
    | _CompiledStageBoundary
)


def _iter_flattened_transforms(specs: list[TransformSpec] | tuple[TransformSpec, ...]) -> list[Transform]:
    out: list[Transform] = []

    def _walk(items: list[TransformSpec] | tuple[TransformSpec, ...]) -> None:
        for item in items:
            if isinstance(item, Stage):
                if item.enabled:
                    _walk(item.transforms)
                continue
            out.append(item)

    _walk(specs)
    return out


def _split_into_top_level_stages(specs: list[TransformSpec] | tuple[TransformSpec, ...]) -> list[Stage]:
    # Only enable auto-staging when a Stage is present at the top level.
    has_top_level_stage = any(isinstance(t, Stage) and t.enabled for t in specs)
    if not has_top_level_stage:
        return []

    stages: list[Stage] = []
    pending: list[TransformSpec] = []

    for item in specs:
        if isinstance(item, Stage):
            if not item.enabled:
                continue
            if pending:
                stages.append(Stage(pending))
                pending = []
            stages.append(item)
            continue

        pending.append(item)

    if pending:
        stages.append(Stage(pending))

    return stages


def _parse_tag_selector(selector: str) -> frozenset[str] | None:
    """Parse "*" or a comma-separated list of tag names.

    Returns None for "*" (match every element).
    """

    if selector.strip() == "*":
        return None

    tags: list[str] = []
    for part in selector.split(","):
        p = part.strip().lower()
        if not p or any(ch in p for ch in " .#[]:>*+~()\t\n\r\f"):
            raise ValueError(f"Unsupported selector: {selector!r} (expected '*' or a list of tag names)")
        tags.append(p)
    return frozenset(tags)


def _compile_patterns_to_regex(patterns: tuple[str, ...]) -> re.Pattern[str] | None:
    if not patterns:
        return None
    parts: list[str] = []
    for p in patterns:
        regex = re.escape(p)
        regex = regex.replace(r"\*", ".*")
        regex = regex.replace(r"\?", ".")
        parts.append(regex)
    full = "^(?:" + "|".join(parts) + ")$"
    return re.compile(full)


def compile_transforms(transforms: list[TransformSpec] | tuple[TransformSpec, ...]) -> list[CompiledTransform]:
    if not transforms:
        return []

    top_level_stages = _split_into_top_level_stages(transforms)
    if top_level_stages:
        # Stage is a pass boundary. Compile each stage separately and insert a
        # boundary marker so apply_compiled_transforms starts a new walk.
        compiled_stage: list[CompiledTransform] = []
        for stage_i, stage in enumerate(top_level_stages):
            if stage_i:
                compiled_stage.append(_CompiledStageBoundary(kind="stage_boundary"))
            compiled_stage.append(
                _CompiledStageHookTransform(
                    kind="stage_hook",
                    index=stage_i,
                    callback=stage.callback,
                    report=stage.report,
                )
            )
            compiled_stage.extend(compile_transforms(_iter_flattened_transforms(stage.transforms)))
        return compiled_stage

    compiled: list[CompiledTransform] = []

    def _append_compiled(item: CompiledTransform) -> None:
        # Fuse adjacent attribute rewrites that target the same selector into
        # a flat chain.
        if compiled and isinstance(item, _CompiledRewriteAttrsTransform):
            prev = compiled[-1]
            if isinstance(prev, _CompiledRewriteAttrsChain) and prev.tags == item.tags:
                prev.funcs.append(item.func)
                return
            if isinstance(prev, _CompiledRewriteAttrsTransform) and prev.tags == item.tags:
                compiled[-1] = _CompiledRewriteAttrsChain(
                    selector_str=prev.selector_str,
                    tags=prev.tags,
                    funcs=[prev.func, item.func],
                )
                return
        compiled.append(item)

    for t in _iter_flattened_transforms(transforms):
        if not isinstance(t, _TRANSFORM_CLASSES):
            raise TypeError(f"Unsupported transform: {type(t).__name__}")
        if not t.enabled:
            continue

        if isinstance(t, RemoveRedundantAttrs):
            _append_compiled(
                _CompiledRemoveRedundantAttrsTransform(
                    kind="remove_redundant_attrs",
                    callback=t.callback,
                    report=t.report,
                )
            )
            continue

        if isinstance(t, EditAttrs):
            selector_str = t.selector
            edit_attrs_func = t.func
            on_hook = t.callback
            on_report = t.report

            def _wrapped_attrs(
                node: Node,
                edit_attrs_func: EditAttrsCallback = edit_attrs_func,
                selector_str: str = selector_str,
                on_hook: NodeCallback | None = on_hook,
                on_report: ReportCallback | None = on_report,
            ) -> dict[str, str | None] | None:
                out = edit_attrs_func(node)
                if out is None:
                    return None
                if on_hook is not None:
                    on_hook(node)
                if on_report is not None:
                    tag = str(node.name).lower()
                    on_report(f"Edited attributes on <{tag}> (matched selector '{selector_str}')", node=node)
                return out

            _append_compiled(
                _CompiledRewriteAttrsTransform(
                    kind="rewrite_attrs",
                    selector_str=selector_str,
                    tags=_parse_tag_selector(selector_str),
                    func=_wrapped_attrs,
                )
            )
            continue

        if isinstance(t, DropAttrs):
            patterns = t.patterns
            on_hook = t.callback
            on_report = t.report
            compiled_regex = _compile_patterns_to_regex(patterns)

            def _drop_attrs(
                node: Node,
                compiled_regex: re.Pattern[str] | None = compiled_regex,
                on_hook: NodeCallback | None = on_hook,
                on_report: ReportCallback | None = on_report,
            ) -> dict[str, str | None] | None:
                attrs = node.attrs
                if not attrs or compiled_regex is None:
                    return None

                # Avoid allocating unless something matches.
                for key in attrs:
                    if compiled_regex.match(key.lower()):
                        break
                else:
                    return None

                out: dict[str, str | None] = {}
                for key, value in attrs.items():
                    if compiled_regex.match(key.lower()):
                        if on_report is not None:
                            tag = str(node.name).lower()
                            on_report(f"Dropped attribute '{key}' from <{tag}>", node=node)
                        continue
                    out[key] = value
                if on_hook is not None:
                    on_hook(node)
                return out

            _append_compiled(
                _CompiledRewriteAttrsTransform(
                    kind="rewrite_attrs",
                    selector_str=t.selector,
                    tags=_parse_tag_selector(t.selector),
                    func=_drop_attrs,
                )
            )
            continue

        raise TypeError(f"Unsupported transform: {type(t).__name__}")  # pragma: no cover

    return compiled


# -----------------
# Application
# -----------------


def _split_passes(compiled: list[CompiledTransform]) -> list[list[CompiledTransform]]:
    passes: list[list[CompiledTransform]] = [[]]
    for t in compiled:
        if isinstance(t, _CompiledStageBoundary):
            passes.append([])
            continue
        passes[-1].append(t)
    return passes


def _tag_matches(tags: frozenset[str] | None, node: Node) -> bool:
    if tags is None:
        return True
    return node.name.lower() in tags


def _apply_to_node(node: Node, walk_transforms: list[CompiledTransform]) -> Node:
    if node.tag is None:
        return node

    for t in walk_transforms:
        if isinstance(t, _CompiledRemoveRedundantAttrsTransform):
            strip_redundant_attributes(node, callback=t.callback, report=t.report)
            continue

        if isinstance(t, _CompiledRewriteAttrsTransform):
            if not _tag_matches(t.tags, node):
                continue
            new_attrs = t.func(node)
            if new_attrs is not None:
                node.attrs = new_attrs
            continue

        if isinstance(t, _CompiledRewriteAttrsChain):
            if not _tag_matches(t.tags, node):
                continue
            for func in t.funcs:
                chain_out = func(node)
                if chain_out is not None:
                    node.attrs = chain_out
            continue

        raise TypeError(f"Unsupported compiled transform: {type(t).__name__}")  # pragma: no cover

    return node


def apply_compiled_transforms(root: Node, compiled: list[CompiledTransform]) -> Node:
    if not compiled:
        return root

    for walk_transforms in _split_passes(compiled):
        node_transforms: list[CompiledTransform] = []
        for t in walk_transforms:
            if isinstance(t, _CompiledStageHookTransform):
                if t.callback is not None:
                    t.callback(root)
                if t.report is not None:
                    t.report(f"Stage {t.index + 1}", node=root)
                continue
            node_transforms.append(t)

        if not node_transforms:
            continue

        def _visit(node: Node, node_transforms: list[CompiledTransform] = node_transforms) -> Node:
            return _apply_to_node(node, node_transforms)

        root = root.walk(_visit)

    return root


__all__ = [
    "DropAttrs",
    "EditAttrs",
    "RemoveRedundantAttrs",
    "Stage",
    "apply_compiled_transforms",
    "compile_transforms",
]
