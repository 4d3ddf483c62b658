import subprocess

import pytest

from openapi_to_code.pipeline.config import FormatterConfig
from openapi_to_code.pipeline.errors import RenderError
from openapi_to_code.pipeline.formatters import rustfmt_formatter
from openapi_to_code.pipeline.formatters.rustfmt_formatter import RustfmtFormatter

CODE = "pub struct Foo{pub bar:String}"


def completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class TestRustfmtFormatter:
    """Test the rustfmt subprocess wrapper"""

    def test_unavailable_returns_code_unchanged(self, caplog):
        formatter = RustfmtFormatter(executable="definitely-not-rustfmt")

        assert formatter.is_available() is False
        assert formatter.format(CODE, FormatterConfig(enabled=True)) == CODE
        assert "not available" in caplog.text

    def test_formats_through_stdin(self, monkeypatch):
        calls = []

        def fake_run(cmd, **kwargs):
            calls.append((cmd, kwargs))
            if "--version" in cmd:
                return completed(stdout="rustfmt 1.7.0")
            return completed(stdout="pub struct Foo {\n    pub bar: String,\n}\n")

        monkeypatch.setattr(rustfmt_formatter.subprocess, "run", fake_run)

        result = RustfmtFormatter().format(CODE, FormatterConfig(enabled=True, edition="2018", timeout=7))

        assert result == "pub struct Foo {\n    pub bar: String,\n}\n"
        cmd, kwargs = calls[-1]
        assert cmd == ["rustfmt", "--emit", "stdout", "--edition", "2018"]
        assert kwargs["input"] == CODE
        assert kwargs["timeout"] == 7

    def test_failure_raises(self, monkeypatch):
        def fake_run(cmd, **kwargs):
            if "--version" in cmd:
                return completed()
            return completed(returncode=1, stderr="error: expected `;`")

        monkeypatch.setattr(rustfmt_formatter.subprocess, "run", fake_run)

        with pytest.raises(RenderError) as exc_info:
            RustfmtFormatter().format(CODE, FormatterConfig(enabled=True))
        assert "expected `;`" in str(exc_info.value)

    def test_timeout_raises(self, monkeypatch):
        def fake_run(cmd, **kwargs):
            if "--version" in cmd:
                return completed()
            raise subprocess.TimeoutExpired(cmd, kwargs["timeout"])

        monkeypatch.setattr(rustfmt_formatter.subprocess, "run", fake_run)

        with pytest.raises(RenderError):
            RustfmtFormatter().format(CODE, FormatterConfig(enabled=True))
