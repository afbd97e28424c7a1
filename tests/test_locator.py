"""Tests for locating the Mail envelope index."""

from pathlib import Path

import pytest

from fruitmail import locator
from fruitmail.errors import MailDatabaseAccessError, MailDatabaseNotFoundError
from fruitmail.locator import find_db_path


def _make_db(root: Path, version: str) -> Path:
    db = root / version / "MailData" / "Envelope Index"
    db.parent.mkdir(parents=True)
    db.write_bytes(b"")
    return db


class TestFindDbPath:
    def test_override_wins(self, tmp_path: Path) -> None:
        _make_db(tmp_path, "V10")
        assert find_db_path(override="/custom/path/Envelope Index", mail_root=tmp_path) == Path(
            "/custom/path/Envelope Index"
        )

    def test_empty_override_ignored(self, tmp_path: Path) -> None:
        db = _make_db(tmp_path, "V9")
        assert find_db_path(override="", mail_root=tmp_path) == db

    def test_highest_version_first(self, tmp_path: Path) -> None:
        _make_db(tmp_path, "V2")
        _make_db(tmp_path, "V9")
        db10 = _make_db(tmp_path, "V10")
        (tmp_path / "Random").mkdir()
        (tmp_path / "file.txt").write_text("x")
        assert find_db_path(mail_root=tmp_path) == db10

    def test_falls_back_when_newest_lacks_db(self, tmp_path: Path) -> None:
        (tmp_path / "V10" / "MailData").mkdir(parents=True)
        db9 = _make_db(tmp_path, "V9")
        assert find_db_path(mail_root=tmp_path) == db9

    def test_version_named_file_is_skipped(self, tmp_path: Path) -> None:
        (tmp_path / "V11").write_text("not a dir")
        db = _make_db(tmp_path, "V8")
        assert find_db_path(mail_root=tmp_path) == db

    def test_nothing_found(self, tmp_path: Path) -> None:
        with pytest.raises(MailDatabaseNotFoundError, match="Could not find Mail database"):
            find_db_path(mail_root=tmp_path)

    def test_missing_root(self, tmp_path: Path) -> None:
        with pytest.raises(MailDatabaseNotFoundError):
            find_db_path(mail_root=tmp_path / "absent")

    def test_permission_denied(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        def deny(self: Path):
            raise PermissionError("EACCES")

        monkeypatch.setattr(Path, "iterdir", deny)
        with pytest.raises(MailDatabaseAccessError, match="Permission denied"):
            find_db_path(mail_root=tmp_path)

    def test_default_root_under_home(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
        assert locator.default_mail_root() == tmp_path / "Library" / "Mail"
