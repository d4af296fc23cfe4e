import os
import subprocess

import pytest

from bank_trade_extractor import ExtractionError, ExtractorConfig
from bank_trade_extractor import text_extractor as te
from bank_trade_extractor.text_extractor import (
    PdfplumberExtractor,
    PdftotextExtractor,
    get_text_extractor,
)


@pytest.fixture
def tmpdir_path(tmp_path, monkeypatch):
    monkeypatch.setattr(te.tempfile, "gettempdir", lambda: str(tmp_path))
    return tmp_path


def _fake_tool(monkeypatch, calls, text="2025.07.01 valörlü GZ:\n", returncode=0):
    monkeypatch.setattr(te.shutil, "which", lambda name, path=None: f"/usr/bin/{name}")

    def fake_run(cmd, **kwargs):
        calls.append((cmd, kwargs))
        if returncode:
            raise subprocess.CalledProcessError(returncode, cmd, stderr=b"Syntax Error")
        with open(cmd[2], "w", encoding="utf-8") as f:
            f.write(text)
        return subprocess.CompletedProcess(cmd, 0, b"", b"")

    monkeypatch.setattr(te.subprocess, "run", fake_run)


def test_extract_runs_tool_and_removes_temp_files(monkeypatch, tmpdir_path, quiet_logger):
    calls = []
    _fake_tool(monkeypatch, calls, text="hello\nworld\n")

    text = PdftotextExtractor(ExtractorConfig(), quiet_logger).extract(b"%PDF-1.4 fake")

    assert text == "hello\nworld\n"
    (cmd, kwargs), = calls
    assert cmd[0] == "/usr/bin/pdftotext"
    assert os.path.basename(cmd[1]).startswith("temp-pdf-")
    assert os.path.basename(cmd[2]).startswith("temp-text-")
    assert kwargs["timeout"] == 30
    assert list(tmpdir_path.iterdir()) == []


def test_search_path_includes_extra_prefixes(monkeypatch, quiet_logger):
    monkeypatch.setenv("PATH", "/bin")
    seen = {}

    def fake_which(name, path=None):
        seen["path"] = path
        return None

    monkeypatch.setattr(te.shutil, "which", fake_which)
    extractor = PdftotextExtractor(ExtractorConfig(), quiet_logger)

    with pytest.raises(ExtractionError, match="pdftotext not found"):
        extractor.resolve_tool()
    assert seen["path"].split(os.pathsep) == ["/bin", "/opt/homebrew/bin", "/usr/local/bin"]


def test_missing_tool_raises_and_cleans_up(monkeypatch, tmpdir_path, quiet_logger):
    monkeypatch.setattr(te.shutil, "which", lambda name, path=None: None)

    with pytest.raises(ExtractionError):
        PdftotextExtractor(ExtractorConfig(), quiet_logger).extract(b"%PDF")
    assert list(tmpdir_path.iterdir()) == []


def test_non_zero_exit_raises(monkeypatch, tmpdir_path, quiet_logger):
    _fake_tool(monkeypatch, [], returncode=1)

    with pytest.raises(ExtractionError, match="status 1: Syntax Error"):
        PdftotextExtractor(ExtractorConfig(), quiet_logger).extract(b"%PDF")


def test_timeout_raises(monkeypatch, tmpdir_path, quiet_logger):
    monkeypatch.setattr(te.shutil, "which", lambda name, path=None: "/usr/bin/pdftotext")

    def slow_run(cmd, **kwargs):
        raise subprocess.TimeoutExpired(cmd, kwargs["timeout"])

    monkeypatch.setattr(te.subprocess, "run", slow_run)

    with pytest.raises(ExtractionError, match="timed out"):
        PdftotextExtractor(ExtractorConfig(), quiet_logger).extract(b"%PDF")


def test_cleanup_failure_is_logged_not_raised(monkeypatch, tmpdir_path, caplog):
    _fake_tool(monkeypatch, [], text="body")

    def failing_unlink(path):
        raise PermissionError("locked")

    monkeypatch.setattr(te.os, "unlink", failing_unlink)

    with caplog.at_level("WARNING"):
        text = PdftotextExtractor(ExtractorConfig()).extract(b"%PDF")

    assert text == "body"
    assert "Cleanup error" in caplog.text


class _FakePage:
    def __init__(self, text):
        self.text = text

    def extract_text(self):
        return self.text


class _FakePdf:
    def __init__(self, pages):
        self.pages = pages

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


def test_pdfplumber_backend_joins_pages(monkeypatch, quiet_logger):
    pdf = _FakePdf([_FakePage("page one"), _FakePage(None), _FakePage("page two")])
    monkeypatch.setattr(te.pdfplumber, "open", lambda stream: pdf)

    assert PdfplumberExtractor(ExtractorConfig(), quiet_logger).extract(b"%PDF") == "page one\npage two"


def test_pdfplumber_errors_become_extraction_errors(monkeypatch, quiet_logger):
    def broken_open(stream):
        raise ValueError("not a pdf")

    monkeypatch.setattr(te.pdfplumber, "open", broken_open)

    with pytest.raises(ExtractionError, match="not a pdf"):
        PdfplumberExtractor(ExtractorConfig(), quiet_logger).extract(b"junk")


def test_get_text_extractor_by_backend():
    assert isinstance(get_text_extractor(ExtractorConfig()), PdftotextExtractor)
    config = ExtractorConfig(overrides={"backend": "pdfplumber"})
    assert isinstance(get_text_extractor(config), PdfplumberExtractor)
    with pytest.raises(ValueError):
        get_text_extractor(ExtractorConfig(overrides={"backend": "ocr"}))
