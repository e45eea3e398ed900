"""Page builders and a deterministic timer for watcher tests."""

STEAM_PRODUCT_URL = "https://store.steampowered.com/app/367520/Hollow_Knight/"
STEAM_CART_URL = "https://store.steampowered.com/cart/"
EPIC_HOME_URL = "https://store.epicgames.com/en-US/"
EPIC_PRODUCT_URL = "https://store.epicgames.com/en-US/p/hollow-knight"
EPIC_OTHER_PRODUCT_URL = "https://store.epicgames.com/en-US/p/returnal"
EPIC_BROWSE_URL = "https://store.epicgames.com/en-US/browse"


class FakeTimer:
    """threading.Timer stand-in that only fires when the test says so."""

    def __init__(self, interval, function):
        self.interval = interval
        self.function = function
        self.started = False
        self.cancelled = False
        self.daemon = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        """Run the callback as the timer thread would, even if cancelled late."""
        self.function()


class TimerRecorder:
    """Timer factory that records every timer it creates."""

    def __init__(self):
        self.timers = []

    def __call__(self, interval, function):
        timer = FakeTimer(interval, function)
        self.timers.append(timer)
        return timer

    @property
    def pending(self):
        return [t for t in self.timers if t.started and not t.cancelled]

    def fire_pending(self):
        """Fire every started, non-cancelled timer once."""
        for timer in self.pending:
            timer.cancelled = True
            timer.fire()


def epic_product_html(title="Hollow Knight", with_anchor=True):
    anchor = (
        '<div class="purchase"><button data-testid="purchase-cta-button">Buy Now</button></div>'
        if with_anchor else ""
    )
    return f"""
    <html><body>
      <header><a href="/">Epic Games Store</a></header>
      <main id="app">
        <h1 data-testid="pdp-product-name">{title}</h1>
        <aside>{anchor}</aside>
      </main>
    </body></html>
    """


EPIC_HOME_HTML = """
<html><body>
  <header><h1>Epic Games Store</h1></header>
  <main id="app"><section>Featured</section></main>
</body></html>
"""


STEAM_PRODUCT_HTML = """
<html><body>
  <div class="page_title_area">
    <div class="apphub_AppName" id="appHubAppName">  Cyberpunk   2077 </div>
  </div>
  <div class="game_area_purchase">
    <div class="game_area_purchase_game">
      <h1>Buy Cyberpunk 2077</h1>
      <div class="game_purchase_action">Add to Cart</div>
    </div>
  </div>
</body></html>
"""


def cart_item(title, href, with_title_div=True):
    """One cart line item in the storefront's panel markup."""
    title_div = f'<div id=":r0:">{title}</div>' if with_title_div else ""
    return f"""
    <div class="CartItem_Panel Focusable">
      <a href="{href}"><img alt="{title}" src="x.jpg"/></a>
      <div class="details">
        {title_div}
        <a href="{href}">Store page</a>
      </div>
    </div>
    """


def cart_html(*items):
    return '<html><body><div class="cart">' + "".join(items) + "</div></body></html>"
