from playwright.sync_api import expect

# Keys whose face shows a case label above the main label (and maybe a mod label)
CASE_TOP_KEYS = [
    "L01", "L02", "L03", "L04", "L05", "L06",
    "L21", "L31",
    "R06", "R05", "R04", "R03", "R02", "R01",
    "R22", "R21",
    "R34", "R33", "R32", "R31",
]

# Letter keys stay centered: no case label at all
PLAIN_LETTER_KEYS = ["L12", "L13", "L14", "L15", "L16", "R16", "R15", "R14", "R13", "R12"]

CENTER_TOLERANCE = 1

VIEWPORT = {"width": 1900, "height": 1200}

KEYBOARD_SELECTOR = "#keyboard"
READY_SELECTOR = 'html[data-keyboard-ready="true"]'

# True once the keyboard's box is the same on two consecutive polls
STABLE_BOX_JS = """
(selector) => {
    const el = document.querySelector(selector);
    if (!el) return false;
    const r = el.getBoundingClientRect();
    const box = [r.x, r.y, r.width, r.height].join(",");
    const stable = window.__keyboardBox === box && r.width > 0;
    window.__keyboardBox = box;
    return stable;
}
"""


class LayoutAssertionError(AssertionError):
    """A key's labels are missing a box or sit in the wrong order."""


def center_y(box):
    return box["y"] + box["height"] / 2


def key_locator(page, key_id):
    return page.locator(f'[data-key="{key_id}"]')


def wait_for_layout_ready(page, timeout=None):
    page.wait_for_selector(READY_SELECTOR, state="attached", timeout=timeout)
    page.wait_for_function(STABLE_BOX_JS, arg=KEYBOARD_SELECTOR, polling=50, timeout=timeout)


def open_keyboard(page, url, timeout=None):
    page.goto(url)
    wait_for_layout_ready(page, timeout=timeout)


def _bounding_box(locator, key_id, name):
    box = locator.bounding_box()
    if box is None:
        raise LayoutAssertionError(f"{key_id} {name} box should not be null")
    return box


def check_case_top_key(page, key_id):
    key = key_locator(page, key_id)
    expect(key, f"{key_id} should exist").to_be_visible()

    # First .key-label is the visible key; tooltips add a second one
    face = key.locator(".key-label").first
    case_label = face.locator(".case-label")
    main_label = face.locator(".main-label")
    expect(case_label, f"{key_id} should have a case label").to_have_count(1)
    expect(main_label, f"{key_id} should have a main label").to_have_count(1)

    case_box = _bounding_box(case_label, key_id, "case label")
    main_box = _bounding_box(main_label, key_id, "main label")
    case_center, main_center = center_y(case_box), center_y(main_box)
    if not case_center < main_center - CENTER_TOLERANCE:
        raise LayoutAssertionError(
            f"{key_id} case label should sit above main "
            f"(case center {case_center:.1f}, main center {main_center:.1f})"
        )

    mod_label = face.locator(".mod-label")
    if mod_label.count():
        mod_box = _bounding_box(mod_label.first, key_id, "mod label")
        if not main_box["y"] < mod_box["y"]:
            raise LayoutAssertionError(
                f"{key_id} main label should be above mod "
                f"(main top {main_box['y']:.1f}, mod top {mod_box['y']:.1f})"
            )


def check_plain_letter_key(page, key_id):
    key = key_locator(page, key_id)
    expect(key, f"{key_id} should exist").to_be_visible()
    expect(key.locator(".case-label"), f"{key_id} should not have a case label").to_have_count(0)
