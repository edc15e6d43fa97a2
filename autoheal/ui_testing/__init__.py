"""UI testing: self-healing framework, SauceDemo page objects and scenario steps."""
