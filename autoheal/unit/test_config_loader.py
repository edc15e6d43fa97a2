import pytest
import yaml

from autoheal.common import ConfigLoader, ConfigurationError
from autoheal.ui_testing.framework.resolver import ResolveOptions


def test_env_override_and_defaults(monkeypatch, tmp_path, reset_config):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        yaml.dump({"resolver": {"timeout_ms": 2000}, "app": {"base_url": "http://example.com"}}),
        encoding="utf-8",
    )

    loader = ConfigLoader(config_path=config_path)
    assert loader.get("app.base_url") == "http://example.com"
    assert loader.get("resolver.deadline_ms", 30000) == 30000

    ConfigLoader.reset()
    monkeypatch.setenv("RESOLVER_TIMEOUT_MS", "750")
    loader = ConfigLoader(config_path=config_path)
    assert loader.get("resolver.timeout_ms", 3000) == 750


def test_env_bool_coercion(monkeypatch, tmp_path, reset_config):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump({"e2e": {"enabled": False}}), encoding="utf-8")

    monkeypatch.setenv("E2E_ENABLED", "true")
    loader = ConfigLoader(config_path=config_path)
    assert loader.get("e2e.enabled", False) is True


def test_reload_updates_values(tmp_path, reset_config):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump({"resolver": {"timeout_ms": 500}}), encoding="utf-8")

    loader = ConfigLoader(config_path=config_path)
    assert loader.get("resolver.timeout_ms") == 500

    config_path.write_text(yaml.dump({"resolver": {"timeout_ms": 1500}}), encoding="utf-8")
    loader.reload()
    assert loader.get("resolver.timeout_ms") == 1500


def test_missing_file_falls_back_to_defaults(tmp_path, reset_config):
    loader = ConfigLoader(config_path=tmp_path / "absent.yaml")

    assert loader.get("browser.type", "chromium") == "chromium"
    assert loader.get_section("browser") == {}


def test_invalid_yaml_raises(tmp_path, reset_config):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("resolver: [unclosed", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        ConfigLoader(config_path=config_path)


def test_resolve_options_from_config(tmp_path, reset_config):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        yaml.dump({"resolver": {"timeout_ms": 1000, "slow_timeout_ms": 2000, "deadline_ms": 0}}),
        encoding="utf-8",
    )
    ConfigLoader(config_path=config_path)

    options = ResolveOptions.from_config()

    assert options.default_timeout_ms == 1000
    assert options.slow_timeout_ms == 2000
    assert options.deadline_ms is None


def test_shipped_config_leaves_deadline_unset(reset_config):
    ConfigLoader()

    options = ResolveOptions.from_config()

    assert options.deadline_ms is None
    assert options.default_timeout_ms == 3000
    assert options.slow_timeout_ms == 5000


def test_null_value_counts_as_unset(tmp_path, reset_config):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("resolver:\n  deadline_ms: null\n", encoding="utf-8")

    loader = ConfigLoader(config_path=config_path)

    assert loader.get("resolver.deadline_ms") is None
    assert loader.get("resolver.deadline_ms", 0) == 0


@pytest.mark.parametrize(
    "section, match",
    [
        ({"resolver": {"timeout_ms": 0}}, "resolver.timeout_ms must be a positive integer"),
        ({"resolver": {"slow_timeout_ms": "fast"}}, "resolver.slow_timeout_ms"),
        ({"resolver": {"deadline_ms": -5}}, "resolver.deadline_ms"),
        ({"browser": {"type": "edge"}}, "browser.type must be one of: chromium, firefox, webkit"),
        ({"browser": {"trace": "always"}}, "browser.trace"),
        ({"browser": {"headless": "maybe"}}, "browser.headless must be true or false"),
    ],
)
def test_invalid_section_values_raise(tmp_path, reset_config, section, match):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump(section), encoding="utf-8")

    with pytest.raises(ConfigurationError, match=match):
        ConfigLoader(config_path=config_path)


def test_invalid_env_override_raises(monkeypatch, tmp_path, reset_config):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump({"browser": {"type": "chromium"}}), encoding="utf-8")
    loader = ConfigLoader(config_path=config_path)

    monkeypatch.setenv("BROWSER_TYPE", "netscape")
    with pytest.raises(ConfigurationError, match=r"from \$BROWSER_TYPE"):
        loader.get("browser.type", "chromium")

    monkeypatch.setenv("RESOLVER_TIMEOUT_MS", "soon")
    with pytest.raises(ConfigurationError, match="resolver.timeout_ms"):
        loader.get("resolver.timeout_ms", 3000)


def test_top_level_must_be_mapping(tmp_path, reset_config):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="mapping of sections"):
        ConfigLoader(config_path=config_path)


def test_env_deadline_enables_budget(monkeypatch, tmp_path, reset_config):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump({"resolver": {"deadline_ms": None}}), encoding="utf-8")
    ConfigLoader(config_path=config_path)

    monkeypatch.setenv("RESOLVER_DEADLINE_MS", "300")

    assert ResolveOptions.from_config().deadline_ms == 300
