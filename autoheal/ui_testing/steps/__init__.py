"""
================================================================================
Scenario Steps
================================================================================

Step library mirroring the Gherkin phrases used by scenarios. Every step
takes the scenario's ScenarioContext as its first argument.

Modules:
    - context: ScenarioContext (page, variables, page objects, healing log)
    - common_steps: navigation, clicks, input, waits, scrolling
    - sauce_demo_steps: SauceDemo shop flows
    - verification_steps: "Then ..." checks

Author: Automation Team
License: MIT
================================================================================
"""

from .context import ScenarioContext

__all__ = [
    "ScenarioContext",
]
