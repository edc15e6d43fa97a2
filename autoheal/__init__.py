"""
autoheal test harness package.

Playwright scenario steps for the SauceDemo shop and generic pages, driven by
a self-healing resolver that finds elements by human-readable description.

Packages:
  - `autoheal.common`: configuration and logging
  - `autoheal.ui_testing`: resolver framework, page objects, step library
"""

__version__ = "1.0.0"
