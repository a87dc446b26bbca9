from __future__ import annotations

import pytest

from archive_guard import create
from archive_guard.builder import ArchiveBuilder
from archive_guard.config import GuardSettings
from archive_guard.errors import CreationError, DestinationMissingError, FailureKind, SourceMissingError
from archive_guard.paths import ArchiveLocation
from archive_guard.process import ProcessResult

from conftest import ok


@pytest.fixture
def source(tmp_path):
    path = tmp_path / "app"
    path.mkdir()
    (path / "app.rb").write_text("puts 'hello'", encoding="utf-8")
    return path


def test_create_runs_zip_in_source_directory(fake_invoker, source, tmp_path):
    out = tmp_path / "out.zip"
    fake_invoker.on("zip", ok("  adding: app.rb (stored 0%)\n"))

    log = ArchiveBuilder(fake_invoker).create(
        ArchiveLocation.from_input(str(source)), ArchiveLocation.from_input(str(out))
    )

    assert log == "  adding: app.rb (stored 0%)\n"
    assert fake_invoker.calls == [
        ("zip", ["-q", "-r", "-D", "--symlinks", str(out), "."], str(source)),
    ]


def test_module_level_create_uses_configured_zip(fake_invoker, source, tmp_path):
    fake_invoker.on("/usr/local/bin/zip", ok())

    log = create(
        str(source),
        str(tmp_path / "out.zip"),
        settings=GuardSettings(zip_command="/usr/local/bin/zip"),
        invoker=fake_invoker,
    )

    assert log == ""
    assert fake_invoker.calls[0][0] == "/usr/local/bin/zip"


def test_missing_source(fake_invoker, tmp_path):
    with pytest.raises(SourceMissingError, match="Path does not exist") as excinfo:
        create(str(tmp_path / "nope"), str(tmp_path / "out.zip"), settings=GuardSettings(), invoker=fake_invoker)
    assert excinfo.value.kind is FailureKind.SOURCE_MISSING
    assert fake_invoker.calls == []


def test_missing_destination_parent(fake_invoker, source, tmp_path):
    with pytest.raises(DestinationMissingError):
        create(str(source), str(tmp_path / "missing" / "out.zip"), settings=GuardSettings(), invoker=fake_invoker)
    assert fake_invoker.calls == []


def test_source_check_precedes_destination_check(fake_invoker, tmp_path):
    with pytest.raises(SourceMissingError):
        create(str(tmp_path / "nope"), str(tmp_path / "missing" / "out.zip"), settings=GuardSettings(), invoker=fake_invoker)


def test_zip_failure_keeps_diagnostics(fake_invoker, source, tmp_path):
    fake_invoker.on("zip", ProcessResult(stdout="", stderr="zip I/O error: No space left on device", exit_code=14))

    with pytest.raises(CreationError, match="Could not zip the package") as excinfo:
        create(str(source), str(tmp_path / "out.zip"), settings=GuardSettings(), invoker=fake_invoker)

    assert excinfo.value.diagnostic.exit_code == 14
    assert "No space left" in excinfo.value.describe()
