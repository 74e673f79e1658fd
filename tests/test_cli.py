"""
Tests for CLI interface.
"""

import json

import pytest
from click.testing import CliRunner

from logstash_adapter.cli.main import cli


@pytest.fixture
def runner():
    """Create a CLI test runner."""
    return CliRunner()


def _json_lines(output: str) -> list[dict]:
    return [json.loads(line) for line in output.splitlines() if line.startswith("{")]


class TestCLI:
    """Tests for top-level CLI behavior."""

    def test_cli_version(self, runner):
        """Test --version flag."""
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.3.0" in result.output

    def test_cli_help(self, runner):
        """Test --help flag."""
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "ship" in result.output
        assert "preview" in result.output
        assert "classify" in result.output

    def test_ship_help(self, runner):
        """Test ship --help."""
        result = runner.invoke(cli, ["ship", "--help"])
        assert result.exit_code == 0
        assert "--route" in result.output
        assert "--flush-on-close" in result.output
        assert "--max-lines" in result.output

    def test_transports_command(self, runner):
        """Test transports command."""
        result = runner.invoke(cli, ["transports"])
        assert result.exit_code == 0
        assert "udp" in result.output
        assert "tcp" in result.output
        assert "tls" in result.output
        assert "Adapters: logstash" in result.output


class TestShipCommand:
    """Tests for ship command."""

    def test_ship_to_udp(self, runner, udp_receiver, docker_log_file, container_config_file):
        receiver, port = udp_receiver
        result = runner.invoke(
            cli,
            [
                "--log-level", "ERROR",
                "ship",
                "--route", f"logstash+udp://127.0.0.1:{port}",
                "--config", str(container_config_file),
                str(docker_log_file),
            ],
            env={"HOSTNAME": "node-1"},
        )

        assert result.exit_code == 0, result.output
        assert "Shipped 2 events from 6 records" in result.output

        first = json.loads(receiver.recv(65535).decode("utf-8"))
        second = json.loads(receiver.recv(65535).decode("utf-8"))

        assert first == {
            "message": "starting worker",
            "container_name": "worker",
            "container_id": "abc123def456",
            "image_name": "acme/worker:1.2",
            "container_hostname": "abc123def456",
            "host": "node-1",
            "stream": "stderr",
            "tags": [""],
        }
        assert second["message"] == (
            "ERROR: job failed\n"
            "Traceback (most recent call last):\n"
            '  File "job.py", line 12, in run\n'
            "ValueError: bad input"
        )
        assert second["tags"] == ["multiline"]

    def test_ship_flush_on_close(self, runner, udp_receiver, docker_log_file):
        receiver, port = udp_receiver
        result = runner.invoke(
            cli,
            [
                "--quiet",
                "ship",
                "-r", f"logstash://127.0.0.1:{port}",
                "--id", "abc", "--name", "/web",
                "--flush-on-close",
                str(docker_log_file),
            ],
            env={"HOSTNAME": "H"},
        )

        assert result.exit_code == 0, result.output
        assert "Shipped" not in result.output
        messages = [json.loads(receiver.recv(65535))["message"] for _ in range(3)]
        assert messages[-1] == "worker idle"

    def test_ship_route_from_environment(self, runner, udp_receiver, docker_log_file):
        receiver, port = udp_receiver
        result = runner.invoke(
            cli,
            ["ship", "--id", "abc", str(docker_log_file)],
            env={"HOSTNAME": "H", "LOGSTASH_ROUTE": f"logstash+udp://127.0.0.1:{port}"},
        )

        assert result.exit_code == 0, result.output
        assert json.loads(receiver.recv(65535))["container_id"] == "abc"

    def test_ship_requires_container(self, runner, docker_log_file):
        result = runner.invoke(cli, ["ship", str(docker_log_file)])
        assert result.exit_code == 1
        assert "a container --id or --config is required" in result.output

    def test_ship_unknown_transport(self, runner, docker_log_file):
        result = runner.invoke(
            cli,
            ["ship", "-r", "logstash+quic://127.0.0.1:5000", "--id", "abc", str(docker_log_file)],
        )
        assert result.exit_code == 1
        assert "unable to find adapter: logstash+quic" in result.output

    def test_ship_missing_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["ship", "--id", "abc", str(tmp_path / "missing.log")])
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_ship_decode_error(self, runner, udp_receiver, tmp_path):
        _, port = udp_receiver
        log_file = tmp_path / "bad-json.log"
        log_file.write_text("not json\n")

        result = runner.invoke(
            cli,
            ["ship", "-r", f"logstash+udp://127.0.0.1:{port}", "--id", "abc", str(log_file)],
        )
        assert result.exit_code == 1
        assert "Decode error" in result.output


class TestPreviewCommand:
    """Tests for preview command."""

    def test_preview_json(self, runner, docker_log_file):
        result = runner.invoke(
            cli,
            ["--log-level", "ERROR", "preview", "--id", "abc", "--name", "/web",
             "--output", "json", str(docker_log_file)],
            env={"HOSTNAME": "H"},
        )

        assert result.exit_code == 0, result.output
        events = _json_lines(result.output)
        assert [e["tags"] for e in events] == [[""], ["multiline"], [""]]
        assert events[2]["message"] == "worker idle"
        assert all(e["container_name"] == "web" and e["host"] == "H" for e in events)

    def test_preview_without_flush(self, runner, docker_log_file):
        result = runner.invoke(
            cli,
            ["preview", "--id", "abc", "-o", "json", "--no-flush-on-close", str(docker_log_file)],
            env={"HOSTNAME": "H"},
        )

        assert result.exit_code == 0
        assert len(_json_lines(result.output)) == 2

    def test_preview_max_lines(self, runner, docker_log_file):
        result = runner.invoke(
            cli,
            ["preview", "--id", "abc", "-o", "json", "--max-lines", "2", str(docker_log_file)],
            env={"HOSTNAME": "H"},
        )

        events = _json_lines(result.output)
        assert result.exit_code == 0
        assert events[1]["message"] == "ERROR: job failed\nTraceback (most recent call last):"

    def test_preview_table(self, runner, docker_log_file):
        result = runner.invoke(
            cli,
            ["preview", "--id", "abc", "--name", "/web", str(docker_log_file)],
            env={"HOSTNAME": "H"},
        )
        assert result.exit_code == 0
        assert "web" in result.output
        assert "multiline" in result.output

    def test_preview_no_complete_events(self, runner, tmp_path):
        log_file = tmp_path / "one-json.log"
        log_file.write_text('{"log":"hello\\n","stream":"stdout"}\n')

        result = runner.invoke(
            cli,
            ["preview", "--id", "abc", "--no-flush-on-close", str(log_file)],
            env={"HOSTNAME": "H"},
        )
        assert result.exit_code == 0
        assert "No complete events." in result.output


    def test_preview_stdin_with_invalid_bytes(self, runner):
        result = runner.invoke(
            cli,
            ["preview", "--id", "abc", "-o", "json", "-"],
            input=b'{"log":"ok\\n","stream":"stdout"}\n{"log":"bad \xff\xfe\\n","stream":"stdout"}\n',
            env={"HOSTNAME": "H"},
        )

        assert result.exit_code == 0, result.output
        assert [e["message"] for e in _json_lines(result.output)] == ["ok", "bad \ufffd\ufffd"]


class TestClassifyCommand:
    """Tests for classify command."""

    def test_classify_json(self, runner, tmp_path, sample_traceback):
        text_file = tmp_path / "trace.txt"
        text_file.write_text("\n".join(sample_traceback) + "\n")

        result = runner.invoke(cli, ["classify", "--json", str(text_file)])

        assert result.exit_code == 0
        rows = _json_lines(result.output)
        assert [row["pattern"] for row in rows] == [
            None, "traceback_header", "indented", "indented", None,
        ]
        assert rows[1]["continuation"] is True
        assert rows[0]["line_number"] == 1

    def test_classify_extra_pattern(self, runner, tmp_path):
        text_file = tmp_path / "java.txt"
        text_file.write_text("Caused by: java.io.IOException\n")

        result = runner.invoke(cli, ["classify", "--json", "-p", "^Caused by: ", str(text_file)])
        assert _json_lines(result.output)[0]["pattern"] == "extra_1"

    def test_classify_invalid_pattern(self, runner, tmp_path):
        text_file = tmp_path / "x.txt"
        text_file.write_text("x\n")

        result = runner.invoke(cli, ["classify", "-p", "(unclosed", str(text_file)])
        assert result.exit_code == 1

    def test_classify_stdin(self, runner):
        result = runner.invoke(cli, ["classify", "--json", "-"], input="head\n  more\n")
        assert [row["continuation"] for row in _json_lines(result.output)] == [False, True]

    def test_classify_stdin_with_invalid_bytes(self, runner):
        result = runner.invoke(cli, ["classify", "--json", "-"], input=b"head \xff\n  more\n")

        assert result.exit_code == 0, result.output
        rows = _json_lines(result.output)
        assert rows[0]["line"] == "head \ufffd"
        assert rows[1]["continuation"] is True

    def test_classify_missing_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["classify", str(tmp_path / "missing.txt")])
        assert result.exit_code == 1
        assert "File not found" in result.output


class TestEnvironmentSettings:
    """LOGSTASH_* variables supply the command defaults."""

    def test_flush_on_close_from_environment(self, runner, udp_receiver, docker_log_file):
        receiver, port = udp_receiver
        result = runner.invoke(
            cli,
            ["ship", "--id", "abc", str(docker_log_file)],
            env={
                "HOSTNAME": "H",
                "LOGSTASH_ROUTE": f"logstash+udp://127.0.0.1:{port}",
                "LOGSTASH_FLUSH_ON_CLOSE": "true",
            },
        )

        assert result.exit_code == 0, result.output
        assert "Shipped 3 events from 6 records" in result.output
        messages = [json.loads(receiver.recv(65535))["message"] for _ in range(3)]
        assert messages[-1] == "worker idle"

    def test_option_overrides_environment(self, runner, udp_receiver, docker_log_file):
        _, port = udp_receiver
        result = runner.invoke(
            cli,
            ["ship", "--id", "abc", "--no-flush-on-close", str(docker_log_file)],
            env={
                "HOSTNAME": "H",
                "LOGSTASH_ROUTE": f"logstash+udp://127.0.0.1:{port}",
                "LOGSTASH_FLUSH_ON_CLOSE": "1",
            },
        )

        assert result.exit_code == 0, result.output
        assert "Shipped 2 events from 6 records" in result.output

    def test_max_lines_from_environment(self, runner, docker_log_file):
        result = runner.invoke(
            cli,
            ["preview", "--id", "abc", "-o", "json", str(docker_log_file)],
            env={"HOSTNAME": "H", "LOGSTASH_MAX_LINES": "2"},
        )

        assert result.exit_code == 0, result.output
        events = _json_lines(result.output)
        assert events[1]["message"] == "ERROR: job failed\nTraceback (most recent call last):"

    def test_extra_patterns_from_environment(self, runner, tmp_path):
        text_file = tmp_path / "java.txt"
        text_file.write_text("Caused by: java.io.IOException\n... 3 more\n")

        result = runner.invoke(
            cli,
            ["classify", "--json", "-p", r"^\.\.\. ", str(text_file)],
            env={"LOGSTASH_EXTRA_PATTERNS": "^Caused by: "},
        )

        assert result.exit_code == 0, result.output
        assert [row["pattern"] for row in _json_lines(result.output)] == ["extra_1", "extra_2"]

    def test_log_level_from_environment(self, runner, udp_receiver, docker_log_file):
        _, port = udp_receiver
        result = runner.invoke(
            cli,
            ["ship", "-r", f"logstash+udp://127.0.0.1:{port}", "--id", "abc", str(docker_log_file)],
            env={"HOSTNAME": "H", "LOGSTASH_LOG_LEVEL": "debug"},
        )

        assert result.exit_code == 0, result.output
        assert "logstash: streaming to" in result.output

    def test_invalid_setting(self, runner):
        result = runner.invoke(cli, ["transports"], env={"LOGSTASH_MAX_LINES": "many"})

        assert result.exit_code == 1
        assert "LOGSTASH_MAX_LINES must be an integer" in result.output
