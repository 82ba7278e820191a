"""
tsb_homebank.parser.tree
========================
Read-only queries over a parsed document tree.

Nodes are ``bs4`` page elements.  Nothing here mutates a node, so the same
node can be held by several queries at once.

* ``TreeIterator``  – lazy breadth-first walk from a root node
* ``tag_name``      – lowercased tag name, HTML namespace only
* ``attr``          – value of a namespace-less attribute
* ``text_content``  – space-joined text of a subtree
"""

from collections import deque

from bs4.element import NavigableString, PreformattedString, Tag

from ..config import HTML_NAMESPACE


class TreeIterator:
    """
    Breadth-first iterator over *root* and all of its descendants.

    Yields the root first, then every level in document order.  The walk
    is single-use: once exhausted, create a new iterator to walk again.
    """

    def __init__(self, root) -> None:
        self._queue: deque = deque([root])

    def __iter__(self) -> "TreeIterator":
        return self

    def __next__(self):
        if not self._queue:
            raise StopIteration
        node = self._queue.popleft()
        self._queue.extend(children(node))
        return node


def children(node) -> list:
    """Child nodes of *node* in document order (empty for leaf nodes)."""
    if isinstance(node, Tag):
        return node.contents
    return []


def is_text(node) -> bool:
    # Comments, doctypes, CDATA and processing instructions are
    # PreformattedString subclasses and do not count as text.
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def tag_name(node) -> str | None:
    """
    Return the lowercased tag name of an HTML element.

    Elements from foreign namespaces (inline SVG, MathML) return ``None``
    even when their local name matches an HTML tag, as do text nodes and
    the document object itself.
    """
    if isinstance(node, Tag) and node.namespace == HTML_NAMESPACE:
        return node.name.lower()
    return None


def attr(node, name: str) -> str | None:
    """
    Return the value of the first attribute of *node* that has no namespace
    and whose local name is exactly *name* (case-sensitive).
    """
    if not isinstance(node, Tag):
        return None
    for key, value in node.attrs.items():
        # Namespaced attributes (xlink:href, xml:lang) are NamespacedAttribute
        # keys; plain HTML attributes are ordinary strings.
        if getattr(key, "namespace", None) is not None:
            continue
        if key == name:
            if isinstance(value, list):
                return " ".join(value)
            return value
    return None


def text_content(node) -> str:
    """Text of every text node under *node*, stripped and space-joined."""
    parts = (str(n).strip() for n in TreeIterator(node) if is_text(n))
    return " ".join(p for p in parts if p).strip()


def find_elements(root, name: str) -> list:
    """Every HTML element under *root* (inclusive) whose tag name is *name*."""
    return [node for node in TreeIterator(root) if tag_name(node) == name]


def first_element(root, name: str, attribute: str | None = None):
    """
    Return the first element named *name* in traversal order, or ``None``.

    When *attribute* is given, only elements carrying that attribute match.
    """
    for node in TreeIterator(root):
        if tag_name(node) != name:
            continue
        if attribute is None or attr(node, attribute) is not None:
            return node
    return None
