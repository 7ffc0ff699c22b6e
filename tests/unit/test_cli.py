import logging

import site_crawler.cli as cli  # type: ignore[import]
from tests.helpers.crawler_imports import ControlSignal, CrawlerConfig
from tests.helpers.fakes import FakeRenderer, FakeTerminal


def _run(config, prompts, signals):
    calls = []
    prompt_values = list(prompts)
    signal_values = list(signals)

    def fake_prompt(terminal, renderer, poll_interval):
        calls.append(("prompt", None))
        return prompt_values.pop(0)

    def fake_session(terminal, renderer, config, root_url):
        calls.append(("session", root_url))
        return signal_values.pop(0)

    cli.run_application(
        FakeTerminal(),
        FakeRenderer(),
        config,
        session_runner=fake_session,
        prompt=fake_prompt,
    )
    return calls


def test_exit_session_returns_to_prompt_until_quit():
    calls = _run(
        CrawlerConfig(),
        prompts=["http://x.com/", "http://y.com/", None],
        signals=[ControlSignal.EXIT_SESSION, ControlSignal.EXIT_SESSION],
    )

    assert calls == [
        ("prompt", None),
        ("session", "http://x.com/"),
        ("prompt", None),
        ("session", "http://y.com/"),
        ("prompt", None),
    ]


def test_exit_application_from_session_stops_loop():
    calls = _run(
        CrawlerConfig(),
        prompts=["http://x.com/"],
        signals=[ControlSignal.EXIT_APPLICATION],
    )

    assert calls == [("prompt", None), ("session", "http://x.com/")]


def test_url_argument_skips_first_prompt():
    calls = _run(
        CrawlerConfig(root_url="http://x.com"),
        prompts=[None],
        signals=[ControlSignal.EXIT_SESSION],
    )

    assert calls == [("session", "http://x.com/"), ("prompt", None)]


def test_invalid_url_argument_falls_back_to_prompt():
    calls = _run(CrawlerConfig(root_url="x.com"), prompts=[None], signals=[])

    assert calls == [("prompt", None)]


def test_parse_arguments():
    args = cli.parse_arguments(["http://x.com", "--no-headless", "--log-file", "crawl.log", "-v"])

    assert args.url == "http://x.com"
    assert args.headless is False
    assert args.log_file == "crawl.log"
    assert args.verbose is True
    assert cli.parse_arguments([]).url is None


def test_configure_logging_writes_to_file(tmp_path):
    log_path = tmp_path / "crawl.log"

    cli.configure_logging(log_path, verbose=True)
    logging.getLogger("site_crawler.test").debug("hello log")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert "hello log" in log_path.read_text(encoding="utf-8")
    cli.configure_logging(None)
    assert all(isinstance(h, logging.NullHandler) for h in logging.getLogger().handlers)


def test_print_dependency_status_reports_missing(monkeypatch, capsys):
    monkeypatch.setattr(cli, "verify_dependencies", lambda endpoint: {"chromium": False})

    assert cli.print_dependency_status(None) is False
    assert "[!] chromium not found" in capsys.readouterr().out
