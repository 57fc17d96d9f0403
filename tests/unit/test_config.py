"""
Unit tests for server configuration and the command line.
"""

import pytest

from minihttp import __version__
from minihttp.__main__ import build_parser
from minihttp.config import ServerConfig


class TestServerConfig:

    def test_defaults(self):
        config = ServerConfig()

        assert config.host == "0.0.0.0"
        assert config.port == 4221
        assert config.buffer_size == 1024
        assert config.directory == "."
        assert config.log_format == "text"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("HTTP_HOST", "127.0.0.1")
        monkeypatch.setenv("HTTP_PORT", "8080")
        monkeypatch.setenv("HTTP_DIRECTORY", "/tmp/files")
        monkeypatch.setenv("HTTP_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("HTTP_LOG_FORMAT", "json")

        config = ServerConfig.from_env()

        assert config.host == "127.0.0.1"
        assert config.port == 8080
        assert config.directory == "/tmp/files"
        assert config.log_level == "DEBUG"
        assert config.log_format == "json"

    def test_from_env_defaults(self, monkeypatch):
        for name in ("HTTP_HOST", "HTTP_PORT", "HTTP_DIRECTORY", "HTTP_LOG_LEVEL", "HTTP_LOG_FORMAT"):
            monkeypatch.delenv(name, raising=False)

        assert ServerConfig.from_env() == ServerConfig()

    def test_validate_accepts_defaults(self):
        ServerConfig().validate()
        ServerConfig(port=0).validate()

    @pytest.mark.parametrize("overrides", [
        {"port": -1},
        {"port": 65536},
        {"backlog": 0},
        {"buffer_size": 10},
        {"log_format": "xml"},
    ])
    def test_validate_rejects(self, overrides: dict):
        with pytest.raises(ValueError):
            ServerConfig(**overrides).validate()


class TestCommandLine:

    def test_defaults_come_from_config(self):
        defaults = ServerConfig(port=9999, directory="/srv")
        args = build_parser(defaults).parse_args([])

        assert args.port == 9999
        assert args.directory == "/srv"
        assert args.log_level == "INFO"

    def test_overrides(self):
        args = build_parser(ServerConfig()).parse_args(
            ["--directory", "/tmp/x", "-p", "8000", "-l", "debug", "--log-format", "json"]
        )

        assert args.directory == "/tmp/x"
        assert args.port == 8000
        assert args.log_level == "DEBUG"
        assert args.log_format == "json"

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            build_parser(ServerConfig()).parse_args(["--version"])

        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_invalid_log_format(self):
        with pytest.raises(SystemExit):
            build_parser(ServerConfig()).parse_args(["--log-format", "xml"])
