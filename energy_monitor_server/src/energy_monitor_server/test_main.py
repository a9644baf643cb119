import pytest

from energy_monitor_server import __main__ as cli


@pytest.fixture(autouse=True)
def restore_env(monkeypatch):
    monkeypatch.setenv("ENERGY_MONITOR_ENV", "development")


def test_api_command_parses_overrides():
    args = cli.build_parser().parse_args(["--environment", "testing", "api", "--port", "9000"])
    assert args.environment == "testing"
    assert args.port == 9000
    assert args.handler is cli.run_api_server


def test_command_is_required():
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args([])


def test_main_dispatches_with_environment_settings(monkeypatch):
    seen = []
    monkeypatch.setattr(cli, "run_mqtt_server", lambda args, config: seen.append(config))

    cli.main(["--environment", "testing", "server"])

    [config] = seen
    assert config.ENVIRONMENT.value == "testing"
    assert config.DATABASE_URL == "sqlite:///:memory:"


def test_setup_db_creates_tables(caplog):
    caplog.set_level("INFO", logger=cli.__name__)
    cli.main(["--environment", "testing", "setup-db"])
    assert "devices, events, measurements" in caplog.text
