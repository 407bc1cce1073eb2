import logging

from kisah.constants import CONTEXT_FILES
from kisah.personality import load_context, loaded_context_files, resolve_runtime_path
from kisah.types import ChatMessage, Role


def test_no_directory_gives_empty_bundle():
    assert load_context(None) == ()
    assert load_context("") == ()


def test_fragments_follow_fixed_order(tmp_path):
    # Written in reverse so filesystem order cannot produce the expected result.
    for name in reversed(CONTEXT_FILES):
        (tmp_path / name).write_text(f"content of {name}\n", encoding="utf-8")

    bundle = load_context(tmp_path)

    assert [m.content for m in bundle] == [f"content of {name}\n" for name in CONTEXT_FILES]
    assert all(m.role is Role.SYSTEM for m in bundle)


def test_missing_fragments_are_skipped_with_warning(tmp_path, caplog):
    caplog.set_level(logging.WARNING, logger="kisah")
    (tmp_path / "SOUL.md").write_text("You are terse.", encoding="utf-8")
    (tmp_path / "USER.md").write_text("The user is Fitra.", encoding="utf-8")

    bundle = load_context(tmp_path)

    assert bundle == (
        ChatMessage(Role.SYSTEM, "You are terse."),
        ChatMessage(Role.SYSTEM, "The user is Fitra."),
    )
    assert "Kisah file not found" in caplog.text
    assert "IDENTITY.md" in caplog.text


def test_unreadable_fragments_are_skipped(tmp_path, caplog):
    caplog.set_level(logging.WARNING, logger="kisah")
    (tmp_path / "SOUL.md").write_text("soul", encoding="utf-8")
    (tmp_path / "IDENTITY.md").mkdir()
    (tmp_path / "BOOTSTRAP.md").write_bytes(b"\xff\xfe\xfa not utf-8")

    bundle = load_context(tmp_path)

    assert bundle == (ChatMessage(Role.SYSTEM, "soul"),)
    assert "Failed to read kisah file" in caplog.text


def test_missing_directory_is_not_fatal(tmp_path):
    assert load_context(tmp_path / "nope") == ()


def test_loading_is_repeatable(tmp_path):
    (tmp_path / "SOUL.md").write_text("soul", encoding="utf-8")
    (tmp_path / "AGENTS.md").write_text("agents", encoding="utf-8")

    assert load_context(tmp_path) == load_context(tmp_path)


def test_loaded_context_files(tmp_path):
    (tmp_path / "USER.md").write_text("u", encoding="utf-8")
    (tmp_path / "SOUL.md").write_text("s", encoding="utf-8")

    assert loaded_context_files(tmp_path) == ["SOUL.md", "USER.md"]
    assert loaded_context_files(None) == []


def test_resolve_runtime_path_uses_kisah_home(tmp_path, monkeypatch):
    monkeypatch.setenv("KISAH_HOME", str(tmp_path))

    assert resolve_runtime_path("kisah") == (tmp_path / "kisah").resolve()
    assert resolve_runtime_path(str(tmp_path / "abs")) == (tmp_path / "abs").resolve()
