from .constants import REDUNDANT_SCRIPT_TYPES
from .node import Comment, Document, DocumentFragment, Element, Node, Text
from .redundant_attrs import (
    EMPTY_DEFAULT_ATTRIBUTES,
    REDUNDANT_ATTRIBUTES,
    remove_redundant_attributes,
    strip_redundant_attributes,
)
from .serialize import to_html
from .transforms import (
    DropAttrs,
    EditAttrs,
    RemoveRedundantAttrs,
    Stage,
    apply_compiled_transforms,
    compile_transforms,
)

__all__ = [
    "EMPTY_DEFAULT_ATTRIBUTES",
    "REDUNDANT_ATTRIBUTES",
    "REDUNDANT_SCRIPT_TYPES",
    "Comment",
    "Document",
    "DocumentFragment",
    "DropAttrs",
    "EditAttrs",
    "Element",
    "Node",
    "RemoveRedundantAttrs",
    "Stage",
    "Text",
    "apply_compiled_transforms",
    "compile_transforms",
    "remove_redundant_attributes",
    "strip_redundant_attributes",
    "to_html",
]
