# stylejit/runtime/__init__.py
"""Live JIT injection into a watched `Document`.

Key features
────────────
•  One-time stylesheet fetch, parsed into a class → rule map + base block.
•  Base block and rules for classes already present injected at init.
•  MutationObserver feeds newly seen classes to a frame-coalescing scheduler.
•  Idempotent injection: a class is injected once, its rules never removed.
•  Explicit handle per document, `close()` detaches everything.

    runtime = StyleRuntime(doc, {"css_path": "/style.css", "base_url": "http://localhost:8000"})
    await runtime.init()
    runtime.get_injected()
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Iterable, List, Mapping, Optional

import httpx
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from stylejit.errors import FetchError
from stylejit.logger import get_logger
from stylejit.models import RetentionPolicy
from stylejit.runtime.document import Document, Element, MutationObserver, MutationRecord
from stylejit.runtime.fetch import fetch_stylesheet
from stylejit.runtime.rulemap import RuleMap
from stylejit.runtime.scheduler import DEFAULT_FRAME_INTERVAL, InjectionScheduler

__all__ = ["RuntimeConfig", "StyleRuntime", "install", "scan_document"]

logger = get_logger(__name__)


class RuntimeConfig(BaseModel):
    """
    Host-page options.

    Keys may be given in snake_case or in the page-side camelCase spelling
    (`cssPath`, `keepBase`, `baseUrl`, ...); unknown keys are ignored.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, alias_generator=to_camel)

    css_path: str = "/style.css"
    inject: bool = True  # auto-run init() from install()
    watch: bool = True
    debug: bool = False
    keep_base: bool = True
    base_url: Optional[str] = None
    frame_interval: float = DEFAULT_FRAME_INTERVAL
    timeout: float = 10.0
    style_id: str = "style-jit"

    def policy(self) -> RetentionPolicy:
        return RetentionPolicy(keep_base=self.keep_base, prune_unknown=False)


def scan_document(root: Element) -> List[str]:
    """Every class token on *root* and its descendants, first-seen order."""
    found: Dict[str, None] = {}
    for el in root.walk():
        for cls in el.class_list:
            found[cls] = None
    return list(found)


class StyleRuntime:
    def __init__(
        self,
        document: Document,
        config: RuntimeConfig | Mapping[str, Any] | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not isinstance(config, RuntimeConfig):
            config = RuntimeConfig.model_validate(dict(config or {}))
        self.config = config
        self.document = document
        self._transport = transport

        self.rules: Optional[RuleMap] = None
        self._injected: Dict[str, None] = {}  # insertion-ordered set
        self._emitted: set[int] = set()  # rule indexes already in the style tag
        self._style: Optional[Element] = None
        self._observer: Optional[MutationObserver] = None
        self.init_task: Optional[asyncio.Task] = None
        self._scheduler = InjectionScheduler(
            self.inject, frame_interval=config.frame_interval
        )

    # ------------------------------------------------------------------ #
    # Style element
    # ------------------------------------------------------------------ #

    @property
    def style_element(self) -> Element:
        if self._style is None:
            tag = self.document.create_element("style", id=self.config.style_id)
            tag.attrs["data-jit"] = "true"
            self.document.head.append_child(tag)
            self._style = tag
        return self._style

    @property
    def loaded(self) -> bool:
        return self.rules is not None

    # ------------------------------------------------------------------ #
    # Init
    # ------------------------------------------------------------------ #

    async def init(self) -> bool:
        """
        Fetch + parse, inject base and present classes, start observing.

        Returns False (after logging) when the stylesheet can't be loaded;
        nothing is injected in that case.  Once loaded, further calls are
        no-ops returning True.
        """
        if self.loaded:
            return True
        cfg = self.config
        loop = asyncio.get_running_loop()
        started = loop.time()

        try:
            css_text = await fetch_stylesheet(
                cfg.css_path,
                base_url=cfg.base_url,
                timeout=cfg.timeout,
                transport=self._transport,
            )
        except FetchError as exc:
            logger.error("[StyleJIT] Error loading CSS: %s", exc)
            return False
        if self.loaded:
            # a concurrent init() finished while this one was fetching
            return True

        self.rules = RuleMap.parse(css_text, cfg.policy())
        if cfg.debug:
            logger.info(
                "[StyleJIT] Load %.1fms, parsed %d class rules",
                (loop.time() - started) * 1000,
                len(self.rules.classes),
            )

        self.style_element.text_content = self.rules.base

        dom_classes = scan_document(self.document.body)
        self.inject(dom_classes)

        if cfg.watch:
            self._observe()

        if cfg.debug:
            logger.info("[StyleJIT] Initial scan: %d classes", len(dom_classes))
        return True

    def _observe(self) -> None:
        if self._observer is not None:
            return
        self._observer = MutationObserver(self._on_mutations)
        self._observer.observe(
            self.document.body,
            child_list=True,
            subtree=True,
            attributes=True,
            attribute_filter=["class"],
        )

    def _on_mutations(self, records: List[MutationRecord], _observer) -> None:
        found: Dict[str, None] = {}
        for rec in records:
            if rec.type == "attributes" and rec.attribute_name == "class":
                for cls in rec.target.class_list:
                    found[cls] = None
            elif rec.type == "childList":
                for node in rec.added_nodes:
                    for cls in scan_document(node):
                        found[cls] = None
        if found:
            self._scheduler.add(found)

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def inject(self, classes: str | Iterable[str]) -> None:
        """Synchronously inject rules for *classes* not injected yet."""
        if self.rules is None:
            return
        if isinstance(classes, str):
            classes = [classes]

        fresh: List[str] = []
        for cls in classes:
            if cls in self._injected:
                continue
            self._injected[cls] = None
            if cls in self.rules.classes:
                fresh.append(cls)
                if self.config.debug:
                    logger.info("[StyleJIT] +.%s", cls)

        # source order keeps the cascade intact within one batch
        new_idx = sorted(
            i for i in set(self.rules.indexes_for(fresh)) if i not in self._emitted
        )
        if not new_idx:
            return
        self._emitted.update(new_idx)
        tag = self.style_element
        tag.text_content += "\n" + "\n".join(self.rules.entries[i] for i in new_idx)

    def rescan(self) -> None:
        """Re-walk the whole body and inject anything missing."""
        self.inject(scan_document(self.document.body))

    def get_injected(self) -> List[str]:
        return list(self._injected)

    def get_available(self) -> List[str]:
        return self.rules.available() if self.rules else []

    @property
    def css_text(self) -> str:
        return self._style.text_content if self._style is not None else ""

    def close(self) -> None:
        """Detach the observer, drop the pending frame and release references."""
        if self._observer is not None:
            self._observer.disconnect()
            self._observer = None
        self._scheduler.cancel()
        self.rules = None
        self._style = None


def install(
    document: Document,
    config: RuntimeConfig | Mapping[str, Any] | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> StyleRuntime:
    """
    Create a runtime for *document*; with ``inject`` enabled its `init()` is
    scheduled as a task on the running loop (kept on ``runtime.init_task``).
    """
    runtime = StyleRuntime(document, config, transport=transport)
    if runtime.config.inject:
        runtime.init_task = asyncio.get_running_loop().create_task(runtime.init())
    return runtime
