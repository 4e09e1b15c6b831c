"""In-memory HTML tree.

Nodes follow the usual DOM naming: element nodes carry their (lowercase) tag
name, every other node type has a name starting with ``#``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Mapping


class Node:
    __slots__ = ("attrs", "children", "name", "parent")

    name: str
    parent: Node | None
    children: list[Node] | None
    attrs: dict[str, str | None] | None

    def __init__(self, name: str) -> None:
        self.name = name
        self.parent = None
        self.children = None
        self.attrs = None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"

    @property
    def tag(self) -> str | None:
        """Element name, or None for text/comment/document nodes."""
        name = self.name
        if name.startswith("#"):
            return None
        return name

    def append_child(self, node: Node) -> Node:
        if self.children is None:
            raise TypeError(f"{self.name} nodes cannot have children")
        if node.parent is not None:
            node.parent.remove_child(node)
        self.children.append(node)
        node.parent = self
        return node

    def insert_before(self, node: Node, reference: Node | None) -> Node:
        if reference is None:
            return self.append_child(node)
        if self.children is None:
            raise TypeError(f"{self.name} nodes cannot have children")
        if node.parent is not None:
            node.parent.remove_child(node)
        index = self._index_of(reference)
        self.children.insert(index, node)
        node.parent = self
        return node

    def remove_child(self, node: Node) -> Node:
        index = self._index_of(node)
        del self.children[index]  # type: ignore[index]
        node.parent = None
        return node

    def replace_child(self, new_node: Node, old_node: Node) -> Node:
        if new_node is old_node:
            return old_node
        if new_node.parent is not None:
            new_node.parent.remove_child(new_node)
        index = self._index_of(old_node)
        self.children[index] = new_node  # type: ignore[index]
        new_node.parent = self
        old_node.parent = None
        return old_node

    def _index_of(self, node: Node) -> int:
        children = self.children or []
        for i, child in enumerate(children):
            if child is node:
                return i
        raise ValueError(f"{node!r} is not a child of {self!r}")

    def walk(self, visitor: Callable[[Node], Node]) -> Node:
        """Visit this node and all descendants in document order.

        The visitor receives each node and returns the node to keep in its
        place. Children of the returned node are visited next (pre-order).
        A node is visited at most once, even if a visitor moves it.
        Returns the (possibly replaced) root.
        """

        root = _visit(visitor, self)
        if root is not self and self.parent is not None:
            self.parent.replace_child(root, self)

        # Keyed by id(); values keep the nodes alive so ids are not reused.
        visited: dict[int, Node] = {id(self): self, id(root): root}
        stack: list[Node] = list(reversed(root.children or ()))
        while stack:
            child = stack.pop()
            parent = child.parent
            # Detached or already handled by an earlier replacement.
            if parent is None or id(child) in visited:
                continue
            out = _visit(visitor, child)
            visited[id(child)] = child
            if out is not child:
                if id(out) in visited:
                    parent.replace_child(out, child)
                    continue
                visited[id(out)] = out
                parent.replace_child(out, child)
            if out.children:
                stack.extend(reversed(out.children))
        return root

    def iter_elements(self) -> Iterator[Node]:
        stack: list[Node] = [self]
        while stack:
            node = stack.pop()
            if node.tag is not None:
                yield node
            if node.children:
                stack.extend(reversed(node.children))

    def to_html(self, *, minimize_empty: bool = True) -> str:
        from .serialize import to_html

        return to_html(self, minimize_empty=minimize_empty)


def _visit(visitor: Callable[[Node], Node], node: Node) -> Node:
    out = visitor(node)
    if out is None:
        raise TypeError(f"Tree visitor returned None for {node!r}")
    return out


class Element(Node):
    __slots__ = ("namespace",)

    namespace: str | None

    def __init__(
        self,
        name: str,
        attrs: Mapping[str, str | None] | None = None,
        namespace: str | None = "html",
    ) -> None:
        super().__init__(name.lower() if namespace in (None, "html") else name)
        self.attrs = dict(attrs) if attrs else {}
        self.children = []
        self.namespace = namespace


class Text(Node):
    __slots__ = ("data",)

    data: str

    def __init__(self, data: str) -> None:
        super().__init__("#text")
        self.data = data


class Comment(Node):
    __slots__ = ("data",)

    data: str

    def __init__(self, data: str) -> None:
        super().__init__("#comment")
        self.data = data


class Document(Node):
    __slots__ = ()

    def __init__(self) -> None:
        super().__init__("#document")
        self.children = []


class DocumentFragment(Node):
    __slots__ = ()

    def __init__(self) -> None:
        super().__init__("#document-fragment")
        self.children = []


__all__ = [
    "Comment",
    "Document",
    "DocumentFragment",
    "Element",
    "Node",
    "Text",
]
