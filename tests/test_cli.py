"""Tests for the command line entry point."""

import os

import pytest

from bracketlog.cli import build_parser, build_record, main
from bracketlog.models import DbRequestLog, HttpResponseLog, LogLevel


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ("LOG_PATH", "LOG_FORMAT_EXTENSION", "BRACKETLOG_CONFIG"):
        monkeypatch.delenv(key, raising=False)


class TestBuildRecord:
    def test_http_response(self):
        args = build_parser().parse_args(["--level", "error", "http-response", "1.2.3.4", "500"])
        record = build_record(args)
        assert isinstance(record, HttpResponseLog)
        assert record.status_code == 500
        assert record.level is LogLevel.ERROR

    def test_db_request(self):
        args = build_parser().parse_args(
            ["db-request", "127.0.0.1:5000", "INSERT", "--pile", "users", "--size", "12"]
        )
        record = build_record(args)
        assert isinstance(record, DbRequestLog)
        assert record.command == "INSERT"
        assert record.pile == "users"
        assert record.payload_size == 12


class TestMain:
    def test_http_request_written(self, tmp_path, capsys):
        rc = main([
            "--log-path", str(tmp_path),
            "http-request", "35.111.95.142", "/api/v1/health_check", "GET",
            "--size", "30", "--body", "{}",
        ])
        assert rc == 0
        printed = capsys.readouterr().out.strip()
        assert printed.endswith("[INFO] [REQUEST] [35.111.95.142] [/api/v1/health_check] [GET] [30B] [{}]")
        with open(tmp_path / "server.log", encoding="utf-8") as f:
            assert f.read() == printed + "\n"

    def test_extension_option(self, tmp_path):
        rc = main(["--log-path", str(tmp_path), "--extension", ".txt", "db-response", "0"])
        assert rc == 0
        assert os.listdir(tmp_path) == ["db.txt"]

    def test_dry_run_writes_nothing(self, tmp_path, capsys):
        log_dir = tmp_path / "logs"
        rc = main(["--log-path", str(log_dir), "--dry-run", "db-response", "1", "--message", "boom"])
        assert rc == 0
        assert capsys.readouterr().out.strip().endswith("[INFO] [RESPONSE] [1] [boom]")
        assert not log_dir.exists()

    def test_io_error_returns_1(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        rc = main(["--log-path", str(blocker), "db-response", "0"])
        assert rc == 1

    def test_negative_size_is_usage_error(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main(["--log-path", str(tmp_path), "db-request", "a:1", "GET", "--size", "-5"])
        assert exc.value.code == 2

    def test_missing_command(self):
        with pytest.raises(SystemExit):
            main([])


class TestConfigErrors:
    def test_malformed_yaml_returns_1(self, tmp_path):
        cfg = tmp_path / "bad.yml"
        cfg.write_text("log_path: [unclosed\n", encoding="utf-8")
        rc = main(["--config", str(cfg), "db-response", "0"])
        assert rc == 1

    def test_non_mapping_config_returns_1(self, tmp_path):
        cfg = tmp_path / "list.yml"
        cfg.write_text("- a\n- b\n", encoding="utf-8")
        rc = main(["--config", str(cfg), "db-response", "0"])
        assert rc == 1

    def test_empty_log_path_env_returns_1(self, monkeypatch):
        monkeypatch.setenv("LOG_PATH", "")
        rc = main(["db-response", "0"])
        assert rc == 1

    def test_config_file_used(self, tmp_path):
        log_dir = tmp_path / "from-yaml"
        cfg = tmp_path / "config.yml"
        cfg.write_text(f"log_path: {log_dir}\nlog_format_extension: txt\n", encoding="utf-8")
        rc = main(["--config", str(cfg), "db-response", "0"])
        assert rc == 0
        assert os.listdir(log_dir) == ["db.txt"]
