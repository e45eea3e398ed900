"""
Page Watcher

Keeps one page's ownership advisory in step with navigation.

States:
    IDLE                 unsupported domain, or stopped
    WATCHING             supported storefront, not on an evaluated product page
    PRODUCT_PAGE_ACTIVE  a title was extracted and ownership was evaluated

Every DOM mutation burst compares the page URL with the last URL seen.
An unchanged URL is ignored, so unrelated DOM churn never re-runs matching.
A changed URL (re)schedules one check after the settle delay; the check
reads the URL current at fire time.

Each check uses one library snapshot, fetched at its start:
    classify URL -> extract title -> match (other platforms only)
    -> show, replace or retract the advisory
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, List, Optional

from ..common.config_loader import load_watcher_settings
from ..common.constants import DEFAULT_SETTLE_DELAY
from ..extraction import StorefrontRegistry, TitleExtractor, get_storefront_registry
from ..library import LibraryStore
from ..matching import GameMatcher, find_malformed_entries
from ..models import (
    CartItemReport,
    CheckIssue,
    CheckReport,
    Libraries,
    PageContext,
    PageType,
    WatcherState,
)
from ..presentation import WarningPresenter
from .debounce import DebounceTimer
from .page import BrowserPage

logger = logging.getLogger(__name__)


def load_settle_delay() -> float:
    """Settle delay from config/settings.yaml, falling back to the default."""
    return float(load_watcher_settings().get('settle_delay', DEFAULT_SETTLE_DELAY))


class PageWatcher:
    """
    Drives title extraction, matching and the advisory for one page.

    Usage:
        watcher = PageWatcher(page, store)
        watcher.start()
        ...
        watcher.stop()

    Prefer attach_watcher(), which keeps at most one watcher per page.
    """

    def __init__(
        self,
        page: BrowserPage,
        store: LibraryStore,
        registry: Optional[StorefrontRegistry] = None,
        settle_delay: Optional[float] = None,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
    ):
        """
        Initialize the watcher.

        Args:
            page: The page context to watch
            store: Library store supplying snapshots and change notifications
            registry: Storefront table. If None, uses config/storefronts.yaml.
            settle_delay: Seconds to wait after a URL change. If None, loads
                from config/settings.yaml.
            timer_factory: threading.Timer-compatible constructor
        """
        self.page = page
        self.store = store
        self.registry = registry if registry is not None else get_storefront_registry()
        if settle_delay is None:
            settle_delay = load_settle_delay()

        self.storefront = None
        self.state = WatcherState.IDLE
        self.context: Optional[PageContext] = None
        self.last_report: Optional[CheckReport] = None

        self._last_seen_url: Optional[str] = None
        self._timer = DebounceTimer(settle_delay, self._run_scheduled_check, timer_factory)
        self._unsubscribers: List[Callable[[], None]] = []
        self._lock = threading.RLock()

    # ── Lifecycle ─────────────────────────────────────────────────────────

    def start(self, initial_check: bool = True) -> bool:
        """
        Select the storefront and begin watching.

        Calling start() on a watcher that is already subscribed does nothing.

        Args:
            initial_check: Schedule a check once the first render settles.
                Callers driving check_now() themselves pass False.

        Returns:
            False if the page's domain is not a supported storefront
        """
        if self._unsubscribers:
            return self.storefront is not None

        storefront = self.registry.for_url(self.page.url)
        if storefront is None:
            logger.debug("Unsupported domain %s, watcher idle", self.page.host)
            return False

        with self._lock:
            self.storefront = storefront
            self.state = WatcherState.WATCHING
            self._last_seen_url = self.page.url
            self._unsubscribers = [
                self.page.observe(self._on_mutation),
                self.store.on_change(self._on_library_change),
            ]

        logger.info("Watching %s (%s)", self.page.url, storefront.name)
        if initial_check:
            self._timer.schedule()
        return True

    def stop(self) -> None:
        """Cancel the pending check, unsubscribe and retract the advisory."""
        self._timer.cancel()
        with self._lock:
            for unsubscribe in self._unsubscribers:
                unsubscribe()
            self._unsubscribers = []

            if self.context is not None and self.storefront is not None:
                with self.page.lock:
                    presenter = WarningPresenter(self.page.document, self.storefront)
                    presenter.hide_single_warning(self.context.active_warning)
            self.context = None
            self.state = WatcherState.IDLE

    @property
    def check_pending(self) -> bool:
        return self._timer.pending

    # ── Triggers ──────────────────────────────────────────────────────────

    def _on_mutation(self, page: BrowserPage) -> None:
        url = page.url
        if url == self._last_seen_url:
            return
        logger.debug("URL changed: %s -> %s", self._last_seen_url, url)
        self._last_seen_url = url

        storefront = self.storefront
        if storefront is None or not storefront.matches_host(page.host):
            if not self._select_storefront():
                return
        self._timer.schedule()

    def _select_storefront(self) -> bool:
        """
        Pick the storefront again after a navigation to another host.

        An unsupported host retracts the advisory and leaves the watcher
        IDLE but still subscribed, so navigating back to a supported
        storefront resumes watching.

        Returns:
            False if the new host is not a supported storefront
        """
        storefront = self.registry.for_url(self.page.url)
        with self._lock:
            previous = self.storefront
            if self.context is not None and previous is not None:
                with self.page.lock:
                    presenter = WarningPresenter(self.page.document, previous)
                    presenter.hide_single_warning(self.context.active_warning)
            self.context = None
            self.storefront = storefront

            if storefront is None:
                self._timer.cancel()
                self.state = WatcherState.IDLE
                logger.info("Left supported storefronts (%s), watcher idle", self.page.host)
                return False

            self.state = WatcherState.WATCHING

        logger.info("Watching %s (%s)", self.page.url, storefront.name)
        return True

    def _on_library_change(self, libraries: Libraries) -> None:
        context = self.context
        if context is None or context.page_type is PageType.OTHER:
            return
        # A navigation is pending; its own check will see the new library
        if context.url != self.page.url:
            return
        logger.debug("Library changed (%d games), re-checking %s",
                     libraries.total_games, context.url)
        self._run_scheduled_check()

    def _run_scheduled_check(self) -> None:
        # Runs on timer and notification threads; never let a failure
        # escape into the host page
        try:
            self.check_now()
        except Exception:
            logger.exception("Ownership check failed for %s", self.page.url)

    # ── Pipeline ──────────────────────────────────────────────────────────

    def check_now(self) -> CheckReport:
        """
        Run one ownership check against the page as it is right now.

        Returns:
            CheckReport describing what was found and shown
        """
        with self._lock, self.page.lock:
            if self.storefront is None:
                raise RuntimeError(
                    "PageWatcher.check_now() needs a storefront; not started "
                    "or the page is on an unsupported domain"
                )

            url = self.page.url
            libraries = self.store.get_libraries()
            if self.storefront.matches_host(self.page.host):
                page_type = self.storefront.classify(url)
            else:
                page_type = PageType.OTHER

            previous = self.context
            context = PageContext(url=url, page_type=page_type)
            report = CheckReport(url=url, page_type=page_type)
            presenter = WarningPresenter(self.page.document, self.storefront)

            # Release the previous advisory before anything new is attached
            if previous is not None:
                presenter.hide_single_warning(previous.active_warning)

            if page_type is PageType.PRODUCT:
                self._check_product(libraries, context, report, presenter)
            elif page_type is PageType.CART:
                self._check_cart(libraries, report, presenter)
                self.state = WatcherState.WATCHING
            else:
                self.state = WatcherState.WATCHING

            self.context = context
            self.last_report = report

        self._log_report(report)
        return report

    def _check_product(
        self,
        libraries: Libraries,
        context: PageContext,
        report: CheckReport,
        presenter: WarningPresenter,
    ) -> None:
        title = TitleExtractor(self.page.document, self.storefront).extract_title()
        context.extracted_title = title
        report.title = title

        if title is None:
            # Never warn on an unknown title
            report.issues.append(CheckIssue.EXTRACTION_MISS)
            self.state = WatcherState.WATCHING
            return

        matcher = self._build_matcher(libraries, report)
        owned_on = matcher.owned_elsewhere(title, self.storefront.platform)
        report.owned_on = owned_on

        if owned_on:
            context.active_warning = presenter.show_single_warning(owned_on)
            if context.active_warning is None:
                report.issues.append(CheckIssue.NO_ANCHOR)
            report.warned = context.active_warning is not None

        self.state = WatcherState.PRODUCT_PAGE_ACTIVE

    def _check_cart(
        self,
        libraries: Libraries,
        report: CheckReport,
        presenter: WarningPresenter,
    ) -> None:
        items = TitleExtractor(self.page.document, self.storefront).extract_cart_items()
        if not items:
            report.issues.append(CheckIssue.EXTRACTION_MISS)
            return

        matcher = self._build_matcher(libraries, report)
        for item in items:
            owned_on = matcher.owned_elsewhere(item.title, self.storefront.platform)
            if owned_on:
                # Already-marked containers are left as they are
                presenter.show_cart_warning(item.container, owned_on)
            report.cart_items.append(CartItemReport(
                title=item.title,
                owned_on=owned_on,
                warned=bool(owned_on),
            ))

        report.warned = any(item.warned for item in report.cart_items)

    def _build_matcher(self, libraries: Libraries, report: CheckReport) -> GameMatcher:
        entries = list(libraries.all_entries())
        if not entries:
            report.issues.append(CheckIssue.EMPTY_LIBRARY)

        malformed = find_malformed_entries(entries)
        if malformed:
            report.issues.append(CheckIssue.MALFORMED_ENTRY)
            logger.debug("%d library entries have no usable title", len(malformed))

        return GameMatcher(entries)

    def _log_report(self, report: CheckReport) -> None:
        if report.page_type is PageType.PRODUCT:
            logger.info("Checked %s: title=%r owned elsewhere on: %s",
                        report.url, report.title, ", ".join(report.platforms) or "-")
        elif report.page_type is PageType.CART:
            logger.info("Checked cart %s: %d item(s), %d owned elsewhere",
                        report.url, len(report.cart_items),
                        sum(1 for item in report.cart_items if item.warned))
        else:
            logger.debug("Not a product page: %s", report.url)
        for issue in report.issues:
            logger.debug("Check issue on %s: %s", report.url, issue.value)


class WatcherRegistry:
    """
    At most one watcher per page context.

    attach() returns the watcher already attached to a page instead of
    starting a second one. detach() is the only way a page is released.
    """

    def __init__(self):
        self._watchers: Dict[BrowserPage, PageWatcher] = {}
        self._lock = threading.Lock()

    def attach(self, page: BrowserPage, store: LibraryStore, **kwargs) -> PageWatcher:
        """
        Get or create the watcher for a page.

        Args:
            page: Page context
            store: Library store
            **kwargs: Passed to PageWatcher for a new watcher

        Returns:
            The page's watcher (started)
        """
        with self._lock:
            watcher = self._watchers.get(page)
            if watcher is not None:
                logger.debug("Watcher already attached to %s", page.url)
                if watcher.state is WatcherState.IDLE:
                    # Started on an unsupported domain; the page may have
                    # loaded a storefront since
                    watcher.start()
                return watcher
            watcher = PageWatcher(page, store, **kwargs)
            self._watchers[page] = watcher

        watcher.start()
        return watcher

    def get(self, page: BrowserPage) -> Optional[PageWatcher]:
        return self._watchers.get(page)

    def detach(self, page: BrowserPage) -> None:
        """Stop and forget the page's watcher, if any."""
        with self._lock:
            watcher = self._watchers.pop(page, None)
        if watcher is not None:
            watcher.stop()

    def __len__(self) -> int:
        return len(self._watchers)


_default_registry = WatcherRegistry()


def attach_watcher(page: BrowserPage, store: LibraryStore, **kwargs) -> PageWatcher:
    """Attach a watcher to a page via the process-wide registry."""
    return _default_registry.attach(page, store, **kwargs)


def detach_watcher(page: BrowserPage) -> None:
    """Detach a page's watcher from the process-wide registry."""
    _default_registry.detach(page)
