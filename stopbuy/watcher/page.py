"""
Browser Page

A long-lived page context: the current URL, the live document and the
observers notified on every DOM mutation burst.

Single-page storefronts change the URL and swap DOM subtrees without
reloading; push_state() and replace_content() model those, load() models
a full document load.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, List, Optional
from urllib.parse import urlparse

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

MutationCallback = Callable[["BrowserPage"], None]


class BrowserPage:
    """
    Usage:
        page = BrowserPage("https://store.epicgames.com/en-US/", html)
        unsubscribe = page.observe(on_mutation)
        page.push_state("https://store.epicgames.com/en-US/p/returnal", new_html)
    """

    def __init__(self, url: str, html: str = "", parser: str = "lxml"):
        self.parser = parser
        self.url = url
        self.document = BeautifulSoup(html, parser)
        # Held while the document is mutated or read by a check
        self.lock = threading.RLock()
        self._observers: List[MutationCallback] = []

    @property
    def host(self) -> str:
        return (urlparse(self.url).hostname or "").lower()

    def observe(self, callback: MutationCallback) -> Callable[[], None]:
        """
        Subscribe to mutation bursts over the whole document.

        Returns:
            Function that removes the subscription
        """
        self._observers.append(callback)

        def unsubscribe() -> None:
            if callback in self._observers:
                self._observers.remove(callback)

        return unsubscribe

    def load(self, url: str, html: str) -> None:
        """Full navigation: new URL and a freshly parsed document."""
        with self.lock:
            self.url = url
            self.document = BeautifulSoup(html, self.parser)
        self.notify_mutation()

    def push_state(self, url: str, html: Optional[str] = None) -> None:
        """
        SPA route change: the URL changes in place; the body is re-rendered
        when html is given.
        """
        with self.lock:
            self.url = url
            if html is not None:
                self._render_body(html)
        self.notify_mutation()

    def replace_content(self, selector: str, html: str) -> bool:
        """
        Swap the children of one element without changing the URL.

        Returns:
            False if no element matches the selector
        """
        with self.lock:
            element = self.document.select_one(selector)
            if element is None:
                return False
            element.clear()
            fragment = BeautifulSoup(html, "html.parser")
            for child in list(fragment.contents):
                element.append(child.extract())
        self.notify_mutation()
        return True

    def notify_mutation(self) -> None:
        """Deliver one mutation burst to every observer."""
        for callback in list(self._observers):
            callback(self)

    def _render_body(self, html: str) -> None:
        rendered = BeautifulSoup(html, self.parser)
        new_body = rendered.body
        body = self.document.body
        if body is None or new_body is None:
            self.document = rendered
            return
        body.clear()
        for child in list(new_body.contents):
            body.append(child.extract())
