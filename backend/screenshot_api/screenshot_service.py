"""
Screenshot service
Drives one headless Chromium per capture: launch, open a page, navigate,
capture an image or PDF, write it to disk and tear everything down.
"""

import asyncio
import logging
import sys
from typing import Callable, Optional

import aiofiles
from playwright.async_api import Browser, Page, async_playwright

from .config import Settings, settings as default_settings
from .errors import CaptureError
from .models import CaptureKind, CaptureOutcome, JpegCapture, PdfCapture
from .utils import read_image_dimensions

logger = logging.getLogger(__name__)


async def install_browser(timeout: int) -> None:
    """Run ``playwright install chromium``; a no-op when the build is already present."""
    proc = await asyncio.create_subprocess_exec(
        sys.executable, "-m", "playwright", "install", "chromium",
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    try:
        _, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        proc.kill()
        await proc.wait()
        raise CaptureError(f"Browser install timed out after {timeout}s")

    if proc.returncode != 0:
        raise CaptureError(
            f"Browser install failed (rc={proc.returncode}): "
            f"{stderr.decode(errors='replace')[:500]}"
        )


class ScreenshotService:
    """Captures screenshots and PDFs with a fresh browser per request"""

    def __init__(
        self,
        config: Optional[Settings] = None,
        playwright_factory: Callable = async_playwright,
        installer: Callable = install_browser,
    ):
        self.config = config or default_settings
        self.playwright_factory = playwright_factory
        self.installer = installer
        self.browser_ready = False

    async def initialize(self) -> bool:
        """Warm the browser install check at startup"""
        try:
            await self.ensure_browser()
            logger.info("Screenshot service initialized")
            return True
        except Exception as e:
            logger.warning(f"Browser install check failed at startup: {e}")
            return False

    async def health_check(self) -> bool:
        """Check if service is healthy"""
        return self.browser_ready or not self.config.AUTO_INSTALL_BROWSER

    async def ensure_browser(self) -> None:
        """Make sure the Chromium build is available locally"""
        if self.browser_ready or not self.config.AUTO_INSTALL_BROWSER:
            return

        logger.debug("Checking Chromium install...")
        await self.installer(self.config.BROWSER_INSTALL_TIMEOUT)
        self.browser_ready = True

    async def capture(self, url: str, output_path: str, kind: CaptureKind) -> CaptureOutcome:
        """Render url and write the artifact for kind to output_path"""
        logger.info(f"Capturing {kind.label} of {url} -> {output_path}")
        try:
            await self.ensure_browser()
            async with self.playwright_factory() as playwright:
                browser = await playwright.chromium.launch(
                    headless=True,
                    args=list(self.config.BROWSER_ARGS),
                )
                try:
                    page = await browser.new_page()
                    try:
                        outcome = await self._capture_page(page, url, output_path, kind)
                    finally:
                        await page.close()
                finally:
                    await self._close_browser(browser)

        except CaptureError as e:
            logger.warning(f"Capture failed for {url}: {e}")
            raise
        except Exception as e:
            logger.warning(f"Capture failed for {url}: {e}")
            raise CaptureError(str(e)) from e

        logger.info(f"{kind.label} captured: {outcome.file_path} ({outcome.file_size} bytes)")
        return outcome

    async def _capture_page(self, page: Page, url: str, output_path: str, kind: CaptureKind) -> CaptureOutcome:
        if isinstance(kind, PdfCapture):
            await self._navigate(page, url)
            options = kind.options
            data = await page.pdf(
                format=options.format,
                print_background=options.print_background,
                landscape=options.landscape,
                margin=options.margins(),
            )
            dimensions = None
        else:
            await page.set_viewport_size({
                "width": self.config.VIEWPORT_WIDTH,
                "height": self.config.VIEWPORT_HEIGHT,
            })
            await self._navigate(page, url)
            data = await page.screenshot(
                type=kind.image_type,
                quality=kind.quality if isinstance(kind, JpegCapture) else None,
                full_page=True,
            )
            dimensions = read_image_dimensions(data)

        async with aiofiles.open(output_path, "wb") as f:
            await f.write(data)

        return CaptureOutcome(
            file_path=output_path,
            label=kind.label,
            file_size=len(data),
            dimensions=dimensions,
        )

    async def _navigate(self, page: Page, url: str) -> None:
        logger.debug(f"Navigating to {url}")
        await page.goto(url, wait_until="networkidle")

    async def _close_browser(self, browser: Browser) -> None:
        await browser.close()
        logger.debug("Browser closed")
