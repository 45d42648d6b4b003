"""HTML to PDF rendering through headless Chromium (Playwright)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from ops_dashboard.errors import RenderError
from ops_dashboard.logging_config import get_logger

logger = get_logger(__name__)

CHROMIUM_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-web-security",
    "--font-render-hinting=none",
]
VIEWPORT = {"width": 1200, "height": 800}


@dataclass(slots=True)
class RenderOptions:
    format: str = "A4"
    landscape: bool = False
    margin: Dict[str, str] = field(
        default_factory=lambda: {"top": "1cm", "right": "1cm", "bottom": "1cm", "left": "1cm"}
    )
    print_background: bool = True
    scale: float = 1.0


class PlaywrightPdfRenderer:
    """Render an HTML string to PDF bytes. One browser per call."""

    def __init__(self, *, timeout_ms: int = 30_000, launch_args: Optional[List[str]] = None) -> None:
        self.timeout_ms = timeout_ms
        self.launch_args = launch_args or list(CHROMIUM_ARGS)

    async def render(self, html: str, options: Optional[RenderOptions] = None) -> bytes:
        options = options or RenderOptions()
        try:
            async with async_playwright() as playwright:
                browser = await playwright.chromium.launch(headless=True, args=self.launch_args)
                try:
                    page = await browser.new_page(viewport=VIEWPORT)
                    # networkidle lets web fonts (Hebrew/Arabic) finish loading
                    await page.set_content(html, wait_until="networkidle", timeout=self.timeout_ms)
                    return await page.pdf(
                        format=options.format,
                        landscape=options.landscape,
                        margin=options.margin,
                        print_background=options.print_background,
                        scale=options.scale,
                        prefer_css_page_size=True,
                    )
                finally:
                    await browser.close()
        except PlaywrightError as exc:
            logger.error("PDF rendering failed: %s", exc)
            raise RenderError("Failed to generate PDF") from exc
