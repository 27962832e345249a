"""Unit tests for the command line surface."""
import os
import sys
from unittest.mock import patch

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import cli
from config.settings import ImportConfig, ImportsSettings, OmnigageConfig
from tools.imports.errors import TransferFailed
from tools.imports.models import PipelineStage

CONFIGURED = ImportsSettings(
    omnigage=OmnigageConfig(token_key="key", token_secret="secret", account_key="acct"),
    imports=ImportConfig(file_path=""),
)


class _FakePipeline:
    """Stands in for ContactImportPipeline; fails for files named bad*."""

    settings_seen = []

    def __init__(self, settings):
        self.settings_seen.append(settings)

    def run(self, path, result=None):
        result.advance(PipelineStage.START)
        result.advance(PipelineStage.RESOLVED)
        result.advance(PipelineStage.REGISTERED)
        if path.name.startswith("bad"):
            result.advance(PipelineStage.FAILED)
            result.error = "Storage upload failed with status 403"
            raise TransferFailed(result.error, status_code=403)
        result.upload_id = "up_1"
        result.import_id = "imp_1"
        result.advance(PipelineStage.TRANSFERRED)
        result.advance(PipelineStage.SUBMITTED)
        return result


def test_import_requires_credentials(capsys):
    empty = ImportsSettings(omnigage=OmnigageConfig(token_key="", token_secret="", account_key=""))
    with patch.object(cli, "config", empty):
        assert cli.main(["import", "x.csv"]) == 1
    assert "must be set" in capsys.readouterr().out


def test_import_directory_reports_each_file(tmp_path, capsys):
    (tmp_path / "a.csv").write_text("a")
    (tmp_path / "nested").mkdir()
    (tmp_path / "nested" / "b.xlsx").write_bytes(b"b")
    (tmp_path / "ignored.txt").write_text("c")

    with patch.object(cli, "config", CONFIGURED), \
         patch.object(cli, "ContactImportPipeline", _FakePipeline):
        code = cli.main(["import", str(tmp_path)])

    out = capsys.readouterr().out
    assert code == 0
    assert "File: a.csv" in out
    assert "File: b.xlsx" in out
    assert "ignored.txt" not in out
    assert "Import ID: imp_1" in out
    assert "Summary: 2 imported, 0 failed" in out


def test_failure_is_reported_and_sets_exit_code(tmp_path, capsys):
    good = tmp_path / "good.csv"
    bad = tmp_path / "bad.csv"
    good.write_text("a")
    bad.write_text("b")

    with patch.object(cli, "config", CONFIGURED), \
         patch.object(cli, "ContactImportPipeline", _FakePipeline):
        code = cli.main(["import", str(bad), str(good)])

    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR: Storage upload failed with status 403" in out
    assert "Summary: 1 imported, 1 failed" in out
    assert "bad.csv: failed after registered" in out


def test_host_override(tmp_path):
    path = tmp_path / "a.csv"
    path.write_text("a")
    _FakePipeline.settings_seen.clear()

    with patch.object(cli, "config", CONFIGURED), \
         patch.object(cli, "ContactImportPipeline", _FakePipeline):
        cli.main(["import", str(path), "--host", "https://sandbox.test/api/v1/"])

    assert _FakePipeline.settings_seen[0].host == "https://sandbox.test/api/v1/"
    assert _FakePipeline.settings_seen[0].token_key == "key"


def test_import_falls_back_to_configured_path(tmp_path, capsys):
    path = tmp_path / "default.csv"
    path.write_text("a")
    settings = ImportsSettings(omnigage=CONFIGURED.omnigage, imports=ImportConfig(file_path=str(path)))

    with patch.object(cli, "config", settings), \
         patch.object(cli, "ContactImportPipeline", _FakePipeline):
        assert cli.main(["import"]) == 0
    assert "File: default.csv" in capsys.readouterr().out


def test_status_masks_secrets(capsys):
    with patch.object(cli, "config", CONFIGURED):
        assert cli.main(["status"]) == 0
    out = capsys.readouterr().out
    assert "secret" not in out.replace("Token secret", "")
    assert "Ready" in out
