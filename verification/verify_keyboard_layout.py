
import os
import sys

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from verification.keyboard_layout import (
    CASE_TOP_KEYS,
    PLAIN_LETTER_KEYS,
    VIEWPORT,
    check_case_top_key,
    check_plain_letter_key,
    open_keyboard,
)
from verification.static_server import StaticServer

DEFAULT_SCREENSHOT = "verification/keyboard_layout.png"


def verify_keyboard_layout(root=None, screenshot=None):
    screenshot = screenshot or os.environ.get("KEYBOARD_SCREENSHOT", DEFAULT_SCREENSHOT)

    with StaticServer(root) as server, sync_playwright() as p:
        browser = p.chromium.launch(headless=True)
        try:
            page = browser.new_page(viewport=VIEWPORT)

            print(f"Loading keyboard from {server.url}")
            open_keyboard(page, server.url)

            for key_id in CASE_TOP_KEYS:
                check_case_top_key(page, key_id)
            print(f"Case/main/mod ordering OK for {len(CASE_TOP_KEYS)} keys.")

            for key_id in PLAIN_LETTER_KEYS:
                check_plain_letter_key(page, key_id)
            print(f"No stray case labels on {len(PLAIN_LETTER_KEYS)} letter keys.")

            page.screenshot(path=screenshot)
            print(f"Verification successful, screenshot saved to {screenshot}.")
        finally:
            browser.close()


def main():
    try:
        verify_keyboard_layout()
    except (AssertionError, PlaywrightError) as exc:
        # PlaywrightError covers render timeouts as well as browser failures
        print(f"Keyboard layout verification failed: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()
