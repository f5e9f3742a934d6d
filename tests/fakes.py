"""Dobles de prueba de Playwright y del renderizado."""
from pathlib import Path
from typing import List, Optional

import cv2
import numpy as np
from playwright.sync_api import Error as PlaywrightError

OCEAN = (200, 150, 50)   # BGR
RED = (50, 50, 200)
YELLOW = (50, 200, 200)


def striped_image(width: int = 500, height: int = 310, color=None, stripes: int = 0) -> np.ndarray:
    """Océano con `stripes` de cada 10 columnas pintadas de `color`."""
    pixels = np.empty((height, width, 3), dtype=np.uint8)
    pixels[:] = OCEAN
    if color is not None and stripes:
        pixels[:, np.arange(width) % 10 < stripes] = color
    return pixels


def write_png(path: Path, width: int, height: int) -> Path:
    pixels = np.full((height, width, 3), 255, dtype=np.uint8)
    pixels[: height // 2] = (120, 60, 10)
    path.parent.mkdir(parents=True, exist_ok=True)
    cv2.imwrite(str(path), pixels)
    return path


class FakeHandle:
    def __init__(self, page, fail: bool = False):
        self.page = page
        self.fail = fail

    def screenshot(self, path, type="png", timeout=None):
        self.page.calls.append("handle.screenshot")
        if self.fail:
            raise PlaywrightError("handle screenshot failed")
        write_png(Path(path), *self.page.capture_size)

    def dispose(self):
        pass


class FakeLocator:
    def __init__(self, page):
        self.page = page

    @property
    def first(self):
        return self

    def screenshot(self, path, type="png", timeout=None):
        self.page.calls.append("locator.screenshot")
        if self.page.element_visible is False:
            raise PlaywrightError("Timeout 3000ms exceeded: element is not visible")
        write_png(Path(path), *self.page.capture_size)


class FakePage:
    def __init__(self, log: List[str], element_visible: bool = True, has_handle: bool = True,
                 handle_fails: bool = False, full_page_fails: bool = False,
                 selector_missing: bool = False, capture_size=(1860, 3000)):
        self.log = log
        self.calls: List[str] = []
        self.element_visible = element_visible
        self.has_handle = has_handle
        self.handle_fails = handle_fails
        self.full_page_fails = full_page_fails
        self.selector_missing = selector_missing
        self.capture_size = capture_size
        self.visited: Optional[str] = None
        self.goto_timeout: Optional[int] = None

    def goto(self, url, wait_until=None, timeout=None):
        self.visited = url
        self.goto_timeout = timeout

    def wait_for_selector(self, selector, timeout=None):
        self.calls.append(f"wait:{selector}")
        if self.selector_missing:
            raise PlaywrightError(f"Timeout {timeout}ms exceeded waiting for {selector}")

    def wait_for_timeout(self, ms):
        self.calls.append(f"sleep:{ms}")

    def locator(self, selector):
        return FakeLocator(self)

    def query_selector(self, selector):
        self.calls.append("query_selector")
        return FakeHandle(self, self.handle_fails) if self.has_handle else None

    def screenshot(self, path, type="png", full_page=False):
        self.calls.append("page.screenshot")
        if self.full_page_fails:
            raise PlaywrightError("page screenshot failed")
        write_png(Path(path), *self.capture_size)

    def close(self):
        self.log.append("page.close")


class FakeContext:
    def __init__(self, log, page):
        self.log = log
        self.page = page

    def new_page(self):
        return self.page

    def close(self):
        self.log.append("context.close")


class FakeBrowser:
    def __init__(self, log, page, close_fails: bool = False):
        self.log = log
        self.page = page
        self.close_fails = close_fails
        self.context_options = None

    def new_context(self, **options):
        self.context_options = options
        return FakeContext(self.log, self.page)

    def close(self):
        self.log.append("browser.close")
        if self.close_fails:
            raise PlaywrightError("browser already gone")


class FakeChromium:
    def __init__(self, driver):
        self.driver = driver

    def launch(self, **options):
        self.driver.launch_options = options
        if self.driver.launch_fails:
            raise PlaywrightError(f"Timeout {options.get('timeout')}ms exceeded launching chromium")
        return self.driver.browser


class FakePlaywright:
    """Sustituye a `sync_playwright`: llamarlo devuelve un objeto con `start()`."""
    def __init__(self, page: Optional[FakePage] = None, launch_fails: bool = False,
                 browser_close_fails: bool = False):
        self.log: List[str] = []
        self.page = page or FakePage(self.log)
        self.page.log = self.log
        self.browser = FakeBrowser(self.log, self.page, browser_close_fails)
        self.chromium = FakeChromium(self)
        self.launch_fails = launch_fails
        self.launch_options = None

    def __call__(self):
        return self

    def start(self):
        self.log.append("playwright.start")
        return self

    def stop(self):
        self.log.append("playwright.stop")
