import pytest

import vrfcodec.cli as cli
from vrfcodec.api.error_handler import SkippableAPIError
from vrfcodec.api.models import Episode, ShowResponse, VideoServer
from vrfcodec.config.loader import ConfigError


def test_create_parser_subcommands():
    parser = cli.create_parser()
    args = parser.parse_args(["--dub", "decode", "--unquote", "abc"])
    assert args.dub is True
    assert args.command == "decode"
    assert args.unquote is True
    assert args.token == "abc"


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        cli.create_parser().parse_args([])


def test_encode_prints_token(capsys):
    assert cli.main(["encode", "12345"]) == 0
    assert capsys.readouterr().out.strip() == "9%2FGa%2BuM%3D"


def test_decode_prints_plaintext(capsys):
    assert cli.main(["decode", "9/Ga+uM="]) == 0
    assert capsys.readouterr().out.strip() == "12345"


def test_decode_unquote(capsys):
    assert cli.main(["decode", "--unquote", "9%2FGa%2BuM%3D"]) == 0
    assert capsys.readouterr().out.strip() == "12345"


def test_decode_bad_token_returns_error(capsys):
    assert cli.main(["decode", "9%2FGa%2BuM%3D"]) == 1
    assert "bad input" in capsys.readouterr().err


def test_main_handles_config_error(monkeypatch):
    monkeypatch.setattr(cli, "load_config", lambda path=None: (_ for _ in ()).throw(ConfigError("bad config")))
    assert cli.main(["search", "naruto"]) == 1


def test_main_applies_dub_override_and_runs_command(monkeypatch, make_config):
    path = make_config()
    called = {}

    async def fake_run_command(config, args):
        called["config"] = config
        called["args"] = args
        return 0

    monkeypatch.setattr(cli, "run_command", fake_run_command)

    code = cli.main(["--config", str(path), "--dub", "search", "naruto"])
    assert code == 0
    assert called["config"]["site"]["dub"] is True
    assert called["args"].query == "naruto"


def test_main_reports_api_errors(monkeypatch, make_config, capsys):
    async def failing_run_command(config, args):
        raise SkippableAPIError("Not found (watch page)")

    monkeypatch.setattr(cli, "run_command", failing_run_command)

    assert cli.main(["--config", str(make_config()), "episodes", "https://9anime.id/watch/x"]) == 1
    assert "Not found" in capsys.readouterr().err


class FakeSite:
    def __init__(self, config, client=None):
        self.config = config

    async def search(self, query):
        return [ShowResponse("One Piece", "https://9anime.id/watch/one-piece.ov8", "https://img/op.jpg")]

    async def load_episodes(self, url):
        return [Episode("1", "https://9anime.id/ajax/server/list/1?vrf=x", "Pilot", True)]

    async def load_video_servers(self, url):
        return [VideoServer("Vidstream", "https://vidstream.pro/e/1")]


@pytest.mark.parametrize(
    "argv,expected",
    [
        (["search", "one piece"], "One Piece\thttps://9anime.id/watch/one-piece.ov8"),
        (["episodes", "https://9anime.id/watch/x"], "1 Pilot [filler]\thttps://9anime.id/ajax/server/list/1?vrf=x"),
        (["servers", "https://9anime.id/ajax/server/list/1"], "Vidstream\thttps://vidstream.pro/e/1"),
    ],
)
def test_site_commands_print_results(monkeypatch, make_config, capsys, argv, expected):
    monkeypatch.setattr(cli, "NineAnimeClient", FakeSite)
    assert cli.main(["--config", str(make_config())] + argv) == 0
    assert capsys.readouterr().out.strip() == expected


def test_main_null_section_falls_back_to_defaults(monkeypatch, tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("site: null\nlogging:\n  console: false\n")
    called = {}

    async def fake_run_command(config, args):
        called["config"] = config
        return 0

    monkeypatch.setattr(cli, "run_command", fake_run_command)

    assert cli.main(["--config", str(path), "search", "x"]) == 0
    assert called["config"]["site"]["host"] == "9anime.id"


@pytest.mark.parametrize("body", ["site: [9anime.id]\n", "api: 3\n", "logging: verbose\n"])
def test_main_reports_non_mapping_section(tmp_path, capsys, body):
    path = tmp_path / "config.yaml"
    path.write_text(body)

    assert cli.main(["--config", str(path), "search", "x"]) == 1
    assert "Configuration error" in capsys.readouterr().err


def test_main_logs_site_command_failure(monkeypatch, make_config, caplog):
    async def failing_run_command(config, args):
        raise SkippableAPIError("Not found (watch page)")

    monkeypatch.setattr(cli, "run_command", failing_run_command)
    monkeypatch.setattr(cli, "_setup_logging", lambda config: None)

    with caplog.at_level("ERROR", logger="vrfcodec.cli"):
        assert cli.main(["--config", str(make_config()), "episodes", "https://9anime.id/watch/x"]) == 1

    assert "episodes failed: Not found (watch page)" in caplog.text
