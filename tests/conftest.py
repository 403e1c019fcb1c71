"""
Shared fixtures: an in-memory stand-in for the Playwright engine
"""

import io
from typing import List, Optional

import pytest
from PIL import Image

from screenshot_api.config import Settings
from screenshot_api.screenshot_service import ScreenshotService


def make_png(width: int = 1920, height: int = 2400) -> bytes:
    buffered = io.BytesIO()
    Image.new("RGB", (width, height), "white").save(buffered, format="PNG")
    return buffered.getvalue()


def make_jpeg(width: int = 1920, height: int = 1080) -> bytes:
    buffered = io.BytesIO()
    Image.new("RGB", (width, height), "white").save(buffered, format="JPEG")
    return buffered.getvalue()


class FakePage:
    def __init__(self, engine: "FakeEngine"):
        self.engine = engine

    async def set_viewport_size(self, viewport_size):
        self.engine.calls.append(("set_viewport_size", viewport_size))

    async def goto(self, url, wait_until=None):
        self.engine.calls.append(("goto", url, wait_until))
        if self.engine.fail_on == "goto":
            raise RuntimeError("net::ERR_NAME_NOT_RESOLVED")

    async def screenshot(self, type=None, quality=None, full_page=False):
        self.engine.calls.append(("screenshot", {"type": type, "quality": quality, "full_page": full_page}))
        if self.engine.fail_on == "screenshot":
            raise RuntimeError("Target crashed")
        return make_jpeg() if type == "jpeg" else make_png()

    async def pdf(self, format=None, print_background=None, landscape=None, margin=None):
        self.engine.calls.append(("pdf", {
            "format": format,
            "print_background": print_background,
            "landscape": landscape,
            "margin": margin,
        }))
        if self.engine.fail_on == "pdf":
            raise RuntimeError("Printing failed")
        return b"%PDF-1.4 fake"

    async def close(self):
        self.engine.calls.append(("page.close",))


class FakeBrowser:
    def __init__(self, engine: "FakeEngine"):
        self.engine = engine

    async def new_page(self):
        self.engine.calls.append(("new_page",))
        if self.engine.fail_on == "new_page":
            raise RuntimeError("Target page, context or browser has been closed")
        return FakePage(self.engine)

    async def close(self):
        self.engine.calls.append(("browser.close",))


class FakeChromium:
    def __init__(self, engine: "FakeEngine"):
        self.engine = engine

    async def launch(self, headless=None, args=None):
        self.engine.calls.append(("launch", headless, args))
        if self.engine.fail_on == "launch":
            raise RuntimeError("Executable doesn't exist")
        return FakeBrowser(self.engine)


class FakeEngine:
    """Mimics async_playwright() and records every call made against it"""

    def __init__(self, fail_on: Optional[str] = None):
        self.fail_on = fail_on
        self.calls: List[tuple] = []
        self.chromium = FakeChromium(self)
        self.installs = 0

    def __call__(self):
        return self

    async def __aenter__(self):
        self.calls.append(("start",))
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.calls.append(("stop",))
        return False

    async def install(self, timeout):
        self.installs += 1

    def names(self) -> List[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def engine():
    return FakeEngine()


@pytest.fixture
def test_settings(monkeypatch):
    monkeypatch.delenv("BROWSER_ARGS", raising=False)
    monkeypatch.delenv("VIEWPORT_WIDTH", raising=False)
    monkeypatch.delenv("VIEWPORT_HEIGHT", raising=False)
    monkeypatch.delenv("AUTO_INSTALL_BROWSER", raising=False)
    return Settings()


@pytest.fixture
def service(engine, test_settings):
    return ScreenshotService(config=test_settings, playwright_factory=engine, installer=engine.install)
