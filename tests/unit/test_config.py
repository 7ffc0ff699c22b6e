import site_crawler.core.config as config_module  # type: ignore[import]

from tests.helpers.crawler_imports import load_configuration

ENV_KEYS = ["BROWSER_ENDPOINT", "HEADLESS", "CRAWL_DELAY", "NAVIGATION_TIMEOUT", "CRAWLER_LOG_FILE"]


def test_load_configuration_uses_environment(monkeypatch, tmp_path):
    monkeypatch.setattr(config_module, "load_dotenv", lambda *_args, **_kwargs: False)
    log_path = tmp_path / "crawl.log"

    monkeypatch.setenv("BROWSER_ENDPOINT", "http://localhost:9222/")
    monkeypatch.setenv("HEADLESS", "false")
    monkeypatch.setenv("CRAWL_DELAY", "0.5")
    monkeypatch.setenv("NAVIGATION_TIMEOUT", "3000")
    monkeypatch.setenv("CRAWLER_LOG_FILE", str(log_path))

    config = load_configuration(" https://example.com ")

    assert config.root_url == "https://example.com"
    assert config.endpoint == "http://localhost:9222"
    assert config.headless is False
    assert config.crawl_delay == 0.5
    assert config.navigation_timeout_ms == 3000
    assert config.log_file == log_path.resolve()
    assert config.cancel_timeout == 5.0


def test_load_configuration_defaults(monkeypatch):
    monkeypatch.setattr(config_module, "load_dotenv", lambda *_args, **_kwargs: False)
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)

    config = load_configuration()

    assert config.root_url is None
    assert config.endpoint is None
    assert config.headless is True
    assert config.channel_capacity == 100
    assert config.scroll_lines == 3
    assert config.poll_interval == 0.1
    assert config.log_file is None


def test_explicit_arguments_override_environment(monkeypatch):
    monkeypatch.setattr(config_module, "load_dotenv", lambda *_args, **_kwargs: False)
    monkeypatch.setenv("BROWSER_ENDPOINT", "http://env:9222")
    monkeypatch.setenv("HEADLESS", "true")

    config = load_configuration(endpoint="http://cli:9222", headless=False)

    assert config.endpoint == "http://cli:9222"
    assert config.headless is False
