# stylejit/runtime/document.py
"""
A small DOM-like element tree the runtime can watch.

Only what class-driven injection needs is modelled:

• `Element`  – tag, ordered class list, attributes, children, text
• `Document` – `head` / `body` roots, element factory, tree walking
• `MutationObserver` – batched `MutationRecord`s for child-list and
  ``class`` attribute changes, delivered once per event-loop turn

`Document.from_html()` builds a tree from markup with BeautifulSoup.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Iterator, List, Optional

from bs4 import BeautifulSoup, Tag

from stylejit.logger import get_logger

logger = get_logger(__name__)


# ──────────────────────────────────────────────────────────────
# Mutation records / observers
# ──────────────────────────────────────────────────────────────
@dataclass
class MutationRecord:
    type: str  # "childList" | "attributes"
    target: "Element"
    added_nodes: List["Element"] = field(default_factory=list)
    removed_nodes: List["Element"] = field(default_factory=list)
    attribute_name: Optional[str] = None


MutationCallback = Callable[[List[MutationRecord], "MutationObserver"], None]


class MutationObserver:
    """
    Collects records for observed subtrees and hands them to *callback* in
    one batch per loop turn (``loop.call_soon``).  Without a running loop the
    batch is delivered synchronously.
    """

    def __init__(self, callback: MutationCallback) -> None:
        self._callback = callback
        self._targets: Dict[int, tuple["Element", dict]] = {}
        self._queue: List[MutationRecord] = []
        self._scheduled = False

    def observe(
        self,
        target: "Element",
        *,
        child_list: bool = True,
        attributes: bool = True,
        subtree: bool = True,
        attribute_filter: Iterable[str] | None = ("class",),
    ) -> None:
        opts = {
            "child_list": child_list,
            "attributes": attributes,
            "subtree": subtree,
            "attribute_filter": set(attribute_filter) if attribute_filter else None,
        }
        self._targets[id(target)] = (target, opts)
        target.owner_document._observers.add(self)

    def disconnect(self) -> None:
        for target, _ in self._targets.values():
            target.owner_document._observers.discard(self)
        self._targets.clear()
        self._queue.clear()

    def take_records(self) -> List[MutationRecord]:
        records, self._queue = self._queue, []
        return records

    # ------------------------------------------------------------------ #

    def _wants(self, record: MutationRecord) -> bool:
        for target, opts in self._targets.values():
            node: Optional[Element] = record.target
            if node is not target and not (opts["subtree"] and node.is_descendant_of(target)):
                continue
            if record.type == "childList" and opts["child_list"]:
                return True
            if record.type == "attributes" and opts["attributes"]:
                allowed = opts["attribute_filter"]
                if allowed is None or record.attribute_name in allowed:
                    return True
        return False

    def _enqueue(self, record: MutationRecord) -> None:
        if not self._wants(record):
            return
        self._queue.append(record)
        if self._scheduled:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._deliver()
            return
        self._scheduled = True
        loop.call_soon(self._deliver)

    def _deliver(self) -> None:
        self._scheduled = False
        records = self.take_records()
        if not records:
            return
        try:
            self._callback(records, self)
        except Exception:  # noqa: BLE001
            logger.exception("MutationObserver callback failed")


# ──────────────────────────────────────────────────────────────
# Elements
# ──────────────────────────────────────────────────────────────
class ClassList:
    """Ordered, duplicate-free token list backing an element's ``class``."""

    def __init__(self, element: "Element", tokens: Iterable[str] = ()) -> None:
        self._el = element
        self._tokens: List[str] = list(dict.fromkeys(t for t in tokens if t))

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._tokens))

    def __len__(self) -> int:
        return len(self._tokens)

    def __contains__(self, token: object) -> bool:
        return token in self._tokens

    def __repr__(self) -> str:
        return f"ClassList({self._tokens!r})"

    def contains(self, token: str) -> bool:
        return token in self._tokens

    def add(self, *tokens: str) -> None:
        new = [t for t in tokens if t and t not in self._tokens]
        if new:
            self._tokens.extend(new)
            self._el._notify_attribute("class")

    def remove(self, *tokens: str) -> None:
        before = len(self._tokens)
        self._tokens = [t for t in self._tokens if t not in tokens]
        if len(self._tokens) != before:
            self._el._notify_attribute("class")

    def toggle(self, token: str, force: bool | None = None) -> bool:
        present = token in self._tokens
        want = (not present) if force is None else force
        if want and not present:
            self.add(token)
        elif not want and present:
            self.remove(token)
        return want

    def replace(self, old: str, new: str) -> bool:
        if old not in self._tokens:
            return False
        idx = self._tokens.index(old)
        if new in self._tokens:
            self._tokens.pop(idx)
        else:
            self._tokens[idx] = new
        self._el._notify_attribute("class")
        return True

    def _set(self, value: str) -> None:
        self._tokens = list(dict.fromkeys(value.split()))


class Element:
    def __init__(
        self,
        tag: str,
        document: "Document",
        *,
        classes: Iterable[str] = (),
        attrs: Dict[str, str] | None = None,
        text: str = "",
    ) -> None:
        self.tag = tag.lower()
        self.owner_document = document
        self.parent: Optional[Element] = None
        self.children: List[Element] = []
        self.attrs: Dict[str, str] = dict(attrs or {})
        self.attrs.pop("class", None)
        self.class_list = ClassList(self, classes)
        self.text_content = text

    def __repr__(self) -> str:
        cls = " ".join(self.class_list)
        return f"<{self.tag}{' class=' + repr(cls) if cls else ''}>"

    # ── attributes ───────────────────────────────────────────────
    @property
    def id(self) -> str | None:
        return self.attrs.get("id")

    @property
    def class_name(self) -> str:
        return " ".join(self.class_list)

    def get_attribute(self, name: str) -> str | None:
        if name == "class":
            return self.class_name
        return self.attrs.get(name)

    def set_attribute(self, name: str, value: str) -> None:
        if name == "class":
            self.class_list._set(value)
        else:
            self.attrs[name] = value
        self._notify_attribute(name)

    # ── tree ─────────────────────────────────────────────────────
    def append_child(self, child: "Element") -> "Element":
        if child.parent is not None:
            child.parent.remove_child(child)
        child.parent = self
        self.children.append(child)
        self.owner_document._notify(
            MutationRecord(type="childList", target=self, added_nodes=[child])
        )
        return child

    def remove_child(self, child: "Element") -> "Element":
        self.children.remove(child)
        child.parent = None
        self.owner_document._notify(
            MutationRecord(type="childList", target=self, removed_nodes=[child])
        )
        return child

    def is_descendant_of(self, ancestor: "Element") -> bool:
        node = self.parent
        while node is not None:
            if node is ancestor:
                return True
            node = node.parent
        return False

    def walk(self) -> Iterator["Element"]:
        """Depth-first, self first (TreeWalker order)."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def _notify_attribute(self, name: str) -> None:
        self.owner_document._notify(
            MutationRecord(type="attributes", target=self, attribute_name=name)
        )


# ──────────────────────────────────────────────────────────────
# Document
# ──────────────────────────────────────────────────────────────
class Document:
    def __init__(self) -> None:
        self._observers: set[MutationObserver] = set()
        self.document_element = Element("html", self)
        self.head = Element("head", self)
        self.body = Element("body", self)
        for root in (self.head, self.body):
            root.parent = self.document_element
            self.document_element.children.append(root)

    def create_element(self, tag: str, *, classes: Iterable[str] = (), **attrs: str) -> Element:
        return Element(tag, self, classes=classes, attrs=attrs)

    def get_element_by_id(self, element_id: str) -> Element | None:
        for el in self.document_element.walk():
            if el.id == element_id:
                return el
        return None

    def _notify(self, record: MutationRecord) -> None:
        for obs in list(self._observers):
            obs._enqueue(record)

    # ── HTML loading ─────────────────────────────────────────────
    @classmethod
    def from_html(cls, markup: str) -> "Document":
        """Build a document from HTML markup (head and body children)."""
        doc = cls()
        soup = BeautifulSoup(markup, "html.parser")

        head = soup.find("head")
        body = soup.find("body")
        if head is not None:
            doc._adopt(head, doc.head)
        if body is not None:
            doc._adopt(body, doc.body)
            if body.get("class"):
                doc.body.class_list._set(" ".join(body.get("class")))
        if head is None and body is None:
            doc._adopt(soup, doc.body)
        return doc

    def _adopt(self, source: Tag, parent: Element) -> None:
        for child in source.children:
            if not isinstance(child, Tag) or child.name in ("html", "head", "body"):
                if isinstance(child, Tag):
                    self._adopt(child, parent)
                continue
            attrs = {k: (" ".join(v) if isinstance(v, list) else v) for k, v in child.attrs.items()}
            classes = attrs.pop("class", "").split()
            el = Element(child.name, self, classes=classes, attrs=attrs)
            el.parent = parent
            parent.children.append(el)
            self._adopt(child, el)
