"""Tests for the text-file password store."""

from __future__ import annotations

import re
from datetime import datetime

import pytest

from adapters.file_store import MAX_LABEL_CHARS, FilePasswordStore, sanitize_label
from core.domain.errors import StorageError

FIXED_NOW = datetime(2024, 1, 2, 3, 4, 5)


class TestSanitizeLabel:
    @pytest.mark.parametrize(
        ("label", "expected"),
        [
            ("example.com", "example_com"),
            ("my site/login?x=1", "my_site_login_x_1"),
            ("a-b_c", "a-b_c"),
            ("../../etc/passwd", "______etc_passwd"),
            ("café", "caf_"),
        ],
    )
    def test_replacements(self, label, expected):
        assert sanitize_label(label) == expected

    @pytest.mark.parametrize("label", ["hello world", "a/b\\c", "x!@#$%^&*()", "tab\there"])
    def test_preserves_length(self, label):
        assert len(sanitize_label(label)) == len(label)


class TestSave:
    def test_first_save_uses_label(self, tmp_path):
        store = FilePasswordStore(tmp_path, clock=lambda: FIXED_NOW)
        assert store.save("testwebsite", "TestPassword123!") == "testwebsite.txt"
        content = (tmp_path / "testwebsite.txt").read_text(encoding="utf-8")
        assert content == (
            "Website/Purpose: testwebsite\n"
            "Password: TestPassword123!\n"
            "Generated: 2024-01-02 03:04:05\n"
        )

    def test_collision_appends_epoch(self, tmp_path):
        store = FilePasswordStore(tmp_path)
        first = store.save("testwebsite", "TestPassword123!")
        second = store.save("testwebsite", "AnotherPassword456!")

        assert first != second
        assert re.fullmatch(r"testwebsite_\d+\.txt", second)
        assert second.endswith(".txt") and first.endswith(".txt")
        assert (tmp_path / first).read_text(encoding="utf-8").count("TestPassword123!") == 1
        assert "AnotherPassword456!" in (tmp_path / second).read_text(encoding="utf-8")

    def test_never_overwrites_within_same_second(self, tmp_path):
        store = FilePasswordStore(tmp_path, clock=lambda: FIXED_NOW)
        epoch = int(FIXED_NOW.timestamp())
        names = [store.save("site", f"Password{i}!") for i in range(3)]
        assert names == ["site.txt", f"site_{epoch}.txt", f"site_{epoch}_1.txt"]
        assert len(list(tmp_path.iterdir())) == 3

    def test_empty_site_uses_timestamp(self, tmp_path):
        store = FilePasswordStore(tmp_path, clock=lambda: FIXED_NOW)
        assert store.save("", "Pw1!") == "password_20240102_030405.txt"

    def test_label_is_sanitized_but_kept_in_record(self, tmp_path):
        store = FilePasswordStore(tmp_path, clock=lambda: FIXED_NOW)
        name = store.save("mail.example.com/login", "Pw1!")
        assert name == "mail_example_com_login.txt"
        assert "Website/Purpose: mail.example.com/login\n" in (tmp_path / name).read_text(encoding="utf-8")

    def test_creates_directory(self, tmp_path):
        target = tmp_path / "nested" / "passwords"
        FilePasswordStore(target).save("site", "Pw1!")
        assert (target / "site.txt").is_file()

    def test_unwritable_directory(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        store = FilePasswordStore(blocker / "passwords")
        with pytest.raises(StorageError):
            store.save("site", "Pw1!")

    def test_long_label_is_truncated_in_filename(self, tmp_path):
        store = FilePasswordStore(tmp_path, clock=lambda: FIXED_NOW)
        label = "a" * 512
        names = [store.save(label, f"Password{i}!") for i in range(3)]

        assert names[0] == "a" * MAX_LABEL_CHARS + ".txt"
        assert all(len(name.encode("utf-8")) <= 255 for name in names)
        assert len(set(names)) == 3
        assert f"Website/Purpose: {label}\n" in (tmp_path / names[0]).read_text(encoding="utf-8")
