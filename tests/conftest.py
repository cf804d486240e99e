import pytest

from verification.keyboard_layout import VIEWPORT, open_keyboard
from verification.static_server import StaticServer


@pytest.fixture(scope="session")
def static_server():
    """One server for the whole run, closed whatever the outcome."""
    server = StaticServer().start()
    try:
        yield server
    finally:
        server.stop()


@pytest.fixture(scope="session")
def browser_context_args(browser_context_args):
    return {**browser_context_args, "viewport": VIEWPORT}


@pytest.fixture
def keyboard_page(page, static_server):
    open_keyboard(page, static_server.url)
    return page


@pytest.fixture
def api(playwright, static_server):
    context = playwright.request.new_context(base_url=static_server.url)
    yield context
    context.dispose()
