"""
================================================================================
Browser Manager
================================================================================

Browser lifecycle management for scenario execution.

Features:
    - chromium / firefox / webkit selection from config
    - One isolated context per scenario
    - Optional video recording and Playwright tracing
    - Trace kept only for failed scenarios in "retain-on-failure" mode

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger
from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Page,
    Playwright,
)
from playwright.async_api import Error as PlaywrightError

from autoheal.common import ensure_directory, get_config


SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")


class BrowserManager:
    """
    Manages the browser instance and per-scenario contexts.

    Usage:
        async with BrowserManager.from_config() as manager:
            context = await manager.new_context()
            page = await context.new_page()
            await page.goto("https://www.saucedemo.com")
    """

    DEFAULT_LAUNCH_OPTIONS: Dict[str, Any] = {
        "headless": True,
        "args": ["--ignore-certificate-errors"],
    }

    def __init__(
        self,
        headless: bool = True,
        browser_type: str = "chromium",
        slow_mo: int = 0,
        viewport: Optional[Dict[str, int]] = None,
        video: bool = False,
        trace: str = "off",
        artifacts_dir: str = "test-results",
    ):
        """
        Initialize browser manager.

        Args:
            headless: Run browser in headless mode
            browser_type: Browser to use - 'chromium', 'firefox', 'webkit'
            slow_mo: Delay in milliseconds between Playwright operations
            viewport: Viewport size for new contexts
            video: Record a video per context
            trace: Tracing mode - 'off', 'on', 'retain-on-failure'
            artifacts_dir: Root directory for videos, traces and screenshots
        """
        if browser_type not in SUPPORTED_BROWSERS:
            raise ValueError(
                f"Unsupported browser '{browser_type}'. Use one of: {', '.join(SUPPORTED_BROWSERS)}"
            )
        self.headless = headless
        self.browser_type = browser_type
        self.slow_mo = slow_mo
        self.viewport = viewport or {"width": 1920, "height": 1080}
        self.video = video
        self.trace = trace
        self.artifacts_dir = Path(artifacts_dir)

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._contexts: List[BrowserContext] = []

    @classmethod
    def from_config(cls) -> "BrowserManager":
        """Build a manager from the `browser` and `artifacts` config sections."""
        return cls(
            headless=get_config("browser.headless", True),
            browser_type=get_config("browser.type", "chromium"),
            slow_mo=get_config("browser.slow_mo", 0),
            viewport={
                "width": get_config("browser.viewport_width", 1920),
                "height": get_config("browser.viewport_height", 1080),
            },
            video=get_config("browser.video", "off") == "on",
            trace=get_config("browser.trace", "off"),
            artifacts_dir=get_config("artifacts.dir", "test-results"),
        )

    async def __aenter__(self) -> "BrowserManager":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    @property
    def tracing_enabled(self) -> bool:
        return self.trace in ("on", "retain-on-failure")

    async def start(self) -> None:
        """Start Playwright and launch browser."""
        self._playwright = await async_playwright().start()
        browser_launcher = getattr(self._playwright, self.browser_type)

        launch_options = {
            **self.DEFAULT_LAUNCH_OPTIONS,
            "headless": self.headless,
            "slow_mo": self.slow_mo,
        }
        if self.browser_type != "chromium":
            launch_options.pop("args")

        try:
            self._browser = await browser_launcher.launch(**launch_options)
        except Exception:
            await self._playwright.stop()
            self._playwright = None
            raise
        logger.debug(
            f"Browser started: {self.browser_type} "
            f"(headless={self.headless}, slow_mo={self.slow_mo})"
        )

    async def close(self) -> None:
        """Close all contexts and browser."""
        for context in self._contexts:
            try:
                await context.close()
            except PlaywrightError as e:
                logger.debug(f"Context already closed: {e}")
        self._contexts.clear()

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

        logger.debug("Browser closed")

    async def new_context(self, **options: Any) -> BrowserContext:
        """
        Create a new isolated browser context.

        Starts tracing when tracing is enabled.

        Args:
            **options: Additional context options

        Returns:
            New BrowserContext
        """
        if not self._browser:
            raise RuntimeError("Browser not started. Call start() first.")

        context_options: Dict[str, Any] = {
            "viewport": self.viewport,
            "ignore_https_errors": True,
            **options,
        }
        if self.video:
            video_dir = ensure_directory(str(self.artifacts_dir / "videos"))
            context_options.setdefault("record_video_dir", video_dir)
            context_options.setdefault("record_video_size", self.viewport)

        context = await self._browser.new_context(**context_options)
        if self.tracing_enabled:
            await context.tracing.start(screenshots=True, snapshots=True)
        self._contexts.append(context)
        return context

    async def new_page(self, context: Optional[BrowserContext] = None, **context_options: Any) -> Page:
        """Create a new page in a new or existing context."""
        if context is None:
            context = await self.new_context(**context_options)
        return await context.new_page()

    async def finish_context(
        self,
        context: BrowserContext,
        scenario_name: str,
        failed: bool,
    ) -> Optional[Path]:
        """
        Stop tracing and close a scenario's context.

        The trace is written only when tracing is 'on', or when the scenario
        failed under 'retain-on-failure'.

        Returns:
            Path to the saved trace, if one was written
        """
        trace_path: Optional[Path] = None
        if self.tracing_enabled:
            if self.trace == "on" or failed:
                trace_dir = Path(ensure_directory(str(self.artifacts_dir / "traces")))
                trace_path = trace_dir / f"{_safe_name(scenario_name)}.zip"
                await context.tracing.stop(path=str(trace_path))
                logger.info(f"Trace saved: {trace_path}")
            else:
                await context.tracing.stop()

        await context.close()
        if context in self._contexts:
            self._contexts.remove(context)
        return trace_path

    @property
    def browser(self) -> Optional[Browser]:
        """Get browser instance."""
        return self._browser


def _safe_name(name: str) -> str:
    return "".join(ch if ch.isalnum() else "_" for ch in name)


__all__ = [
    "BrowserManager",
    "SUPPORTED_BROWSERS",
]
