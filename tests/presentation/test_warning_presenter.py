"""Tests for stopbuy/presentation/warning_presenter.py"""

from stopbuy.common.constants import CART_WARNING_CLASS, SINGLE_WARNING_ID
from stopbuy.extraction.title_extractor import TitleExtractor
from stopbuy.models import LibraryEntry
from stopbuy.presentation.warning_presenter import WarningPresenter, format_platforms

from tests.helpers import STEAM_PRODUCT_HTML, cart_html, cart_item, epic_product_html

OWNED_ON = [
    LibraryEntry(title="Cyberpunk 2077", platform="gog"),
    LibraryEntry(title="Cyberpunk 2077", platform="epic"),
]


class TestFormatPlatforms:
    def test_joins_in_order(self):
        assert format_platforms(OWNED_ON) == "gog, epic"

    def test_each_platform_once(self):
        entries = [LibraryEntry("A", "gog"), LibraryEntry("A: Deluxe", "gog")]
        assert format_platforms(entries) == "gog"


class TestShowSingleWarning:
    def test_inserted_before_purchase_anchor(self, make_soup, steam_storefront):
        soup = make_soup(STEAM_PRODUCT_HTML)
        presenter = WarningPresenter(soup, steam_storefront)

        handle = presenter.show_single_warning(OWNED_ON)

        anchor = soup.select_one(".game_purchase_action")
        assert handle is not None
        assert handle["id"] == SINGLE_WARNING_ID
        assert anchor.find_previous_sibling() is handle

    def test_lists_platforms(self, make_soup, steam_storefront):
        presenter = WarningPresenter(make_soup(STEAM_PRODUCT_HTML), steam_storefront)
        handle = presenter.show_single_warning(OWNED_ON)
        text = handle.get_text(" ", strip=True)
        assert "Already in your library" in text
        assert "You own this game on gog, epic" in text

    def test_replaces_existing(self, make_soup, steam_storefront):
        soup = make_soup(STEAM_PRODUCT_HTML)
        presenter = WarningPresenter(soup, steam_storefront)

        presenter.show_single_warning(OWNED_ON)
        presenter.show_single_warning(OWNED_ON[:1])

        warnings = soup.find_all(id=SINGLE_WARNING_ID)
        assert len(warnings) == 1
        assert "epic" not in warnings[0].get_text()

    def test_no_anchor_is_noop(self, make_soup, epic_storefront):
        soup = make_soup(epic_product_html("Returnal", with_anchor=False))
        presenter = WarningPresenter(soup, epic_storefront)

        assert presenter.show_single_warning(OWNED_ON) is None
        assert soup.find(id=SINGLE_WARNING_ID) is None

    def test_nothing_owned_is_noop(self, make_soup, steam_storefront):
        soup = make_soup(STEAM_PRODUCT_HTML)
        assert WarningPresenter(soup, steam_storefront).show_single_warning([]) is None
        assert soup.find(id=SINGLE_WARNING_ID) is None


class TestHideSingleWarning:
    def test_removes_by_handle(self, make_soup, steam_storefront):
        soup = make_soup(STEAM_PRODUCT_HTML)
        presenter = WarningPresenter(soup, steam_storefront)
        handle = presenter.show_single_warning(OWNED_ON)

        presenter.hide_single_warning(handle)

        assert presenter.current_single_warning() is None

    def test_removes_without_handle(self, make_soup, steam_storefront):
        soup = make_soup(STEAM_PRODUCT_HTML)
        presenter = WarningPresenter(soup, steam_storefront)
        presenter.show_single_warning(OWNED_ON)

        presenter.hide_single_warning()

        assert soup.find(id=SINGLE_WARNING_ID) is None

    def test_safe_when_nothing_shown(self, make_soup, steam_storefront):
        presenter = WarningPresenter(make_soup(STEAM_PRODUCT_HTML), steam_storefront)
        presenter.hide_single_warning()
        presenter.hide_single_warning(None)

    def test_safe_when_handle_already_removed(self, make_soup, steam_storefront):
        soup = make_soup(STEAM_PRODUCT_HTML)
        presenter = WarningPresenter(soup, steam_storefront)
        handle = presenter.show_single_warning(OWNED_ON)

        presenter.hide_single_warning(handle)
        presenter.hide_single_warning(handle)

        assert soup.find(id=SINGLE_WARNING_ID) is None


class TestShowCartWarning:
    def _cart(self, make_soup, steam_storefront):
        soup = make_soup(cart_html(
            cart_item("Hollow Knight", "https://store.steampowered.com/app/367520/"),
            cart_item("Returnal", "https://store.steampowered.com/app/1649240/"),
        ))
        items = TitleExtractor(soup, steam_storefront).extract_cart_items()
        return soup, items

    def test_attached_next_to_item_title(self, make_soup, steam_storefront):
        soup, items = self._cart(make_soup, steam_storefront)
        presenter = WarningPresenter(soup, steam_storefront)

        node = presenter.show_cart_warning(items[0].container, OWNED_ON)

        assert node is not None
        assert CART_WARNING_CLASS in node["class"]
        assert node.parent["class"] == ["details"]
        assert "Owned on gog, epic" in node.get_text()

    def test_idempotent(self, make_soup, steam_storefront):
        soup, items = self._cart(make_soup, steam_storefront)
        presenter = WarningPresenter(soup, steam_storefront)

        presenter.show_cart_warning(items[0].container, OWNED_ON)
        second = presenter.show_cart_warning(items[0].container, OWNED_ON)

        assert second is None
        assert len(items[0].container.select(f".{CART_WARNING_CLASS}")) == 1
        assert presenter.count_cart_warnings() == 1

    def test_independent_per_item(self, make_soup, steam_storefront):
        soup, items = self._cart(make_soup, steam_storefront)
        presenter = WarningPresenter(soup, steam_storefront)

        presenter.show_cart_warning(items[0].container, OWNED_ON)
        presenter.show_cart_warning(items[1].container, OWNED_ON)

        assert presenter.count_cart_warnings() == 2

    def test_appends_to_container_without_title_element(self, make_soup, steam_storefront):
        soup = make_soup(cart_html(
            cart_item("Returnal", "https://store.steampowered.com/app/1649240/", with_title_div=False),
        ))
        container = soup.select_one("div.Focusable")
        node = WarningPresenter(soup, steam_storefront).show_cart_warning(container, OWNED_ON)
        assert node.parent is container

    def test_nothing_owned_is_noop(self, make_soup, steam_storefront):
        soup, items = self._cart(make_soup, steam_storefront)
        presenter = WarningPresenter(soup, steam_storefront)
        assert presenter.show_cart_warning(items[0].container, []) is None
        assert presenter.count_cart_warnings() == 0
