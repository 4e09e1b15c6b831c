import unittest

from htmltrim.node import Comment, Document, DocumentFragment, Element, Text


class TestNode(unittest.TestCase):
    def test_tag_is_none_for_non_elements(self) -> None:
        assert Element("DIV").tag == "div"
        assert Text("x").tag is None
        assert Comment("x").tag is None
        assert Document().tag is None
        assert DocumentFragment().tag is None

    def test_foreign_element_keeps_name_case(self) -> None:
        node = Element("foreignObject", {}, "svg")
        assert node.name == "foreignObject"

    def test_element_copies_attrs(self) -> None:
        attrs = {"id": "a"}
        node = Element("div", attrs)
        node.attrs["id"] = "b"
        assert attrs == {"id": "a"}

    def test_append_child_reparents(self) -> None:
        a = Element("div")
        b = Element("div")
        child = Text("x")
        a.append_child(child)
        b.append_child(child)
        assert a.children == []
        assert b.children == [child]
        assert child.parent is b

    def test_text_cannot_have_children(self) -> None:
        with self.assertRaises(TypeError):
            Text("x").append_child(Text("y"))

    def test_remove_non_child_raises(self) -> None:
        with self.assertRaises(ValueError):
            Element("div").remove_child(Text("x"))

    def test_insert_before(self) -> None:
        root = Element("div")
        b = root.append_child(Element("b"))
        a = root.insert_before(Element("a"), b)
        root.insert_before(Element("c"), None)
        assert [n.name for n in root.children] == ["a", "b", "c"]
        assert a.parent is root


class TestWalk(unittest.TestCase):
    def _tree(self) -> Document:
        root = Document()
        html = root.append_child(Element("html"))
        body = html.append_child(Element("body"))
        p = body.append_child(Element("p"))
        p.append_child(Text("hi"))
        body.append_child(Comment("c"))
        html.append_child(Element("footer"))
        return root

    def test_visits_every_node_in_document_order(self) -> None:
        seen: list[str] = []

        def visitor(node):
            seen.append(node.name)
            return node

        root = self._tree()
        assert root.walk(visitor) is root
        assert seen == ["#document", "html", "body", "p", "#text", "#comment", "footer"]

    def test_visitor_can_replace_nodes(self) -> None:
        root = self._tree()

        def visitor(node):
            if node.name == "p":
                span = Element("span")
                span.append_child(Text("replaced"))
                return span
            return node

        seen: list[str] = []

        def recorder(node):
            seen.append(node.name)
            return node

        root.walk(visitor)
        root.walk(recorder)
        assert "p" not in seen
        assert seen[3:5] == ["span", "#text"]
        assert root.to_html() == "<html><body><span>replaced</span><!--c--></body><footer></footer></html>"

    def test_visitor_returning_a_later_sibling_moves_it(self) -> None:
        root = Document()
        a = root.append_child(Element("a"))
        b = root.append_child(Element("b"))
        seen: list[str] = []

        def visitor(node):
            seen.append(node.name)
            return b if node is a else node

        root.walk(visitor)
        assert root.children == [b]
        assert b.parent is root
        assert a.parent is None
        assert seen == ["#document", "a"]

    def test_visitor_returning_an_earlier_sibling_moves_it(self) -> None:
        root = Document()
        a = root.append_child(Element("a"))
        b = root.append_child(Element("b"))
        c = root.append_child(Element("c"))
        seen: list[str] = []

        def visitor(node):
            seen.append(node.name)
            return a if node is c else node

        root.walk(visitor)
        assert root.children == [b, a]
        assert seen == ["#document", "a", "b", "c"]

    def test_replace_child_with_sibling_keeps_each_node_once(self) -> None:
        root = Element("div")
        a = root.append_child(Element("a"))
        b = root.append_child(Element("b"))
        assert root.replace_child(b, a) is a
        assert root.children == [b]
        assert a.parent is None

    def test_visitor_returning_none_raises(self) -> None:
        with self.assertRaises(TypeError):
            self._tree().walk(lambda node: None)

    def test_iter_elements_skips_non_elements(self) -> None:
        names = [n.name for n in self._tree().iter_elements()]
        assert names == ["html", "body", "p", "footer"]
