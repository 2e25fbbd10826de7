"""Tests for mathconv.config — Config.from_env()."""

from pathlib import Path

import pytest

from mathconv.config import (
    ENV_EXPORT_DIR,
    ENV_EXPORT_LABEL,
    ENV_LATEX_WRAPPING,
    Config,
    latex_wrapping_from_env,
)
from mathconv.export import DEFAULT_LABEL
from mathconv.transpile import LatexWrapping


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in (ENV_EXPORT_DIR, ENV_EXPORT_LABEL, ENV_LATEX_WRAPPING):
        monkeypatch.delenv(key, raising=False)


class TestDefaults:
    def test_export_dir_defaults_to_cwd(self):
        assert Config.from_env().export_dir == Path(".")

    def test_label_default(self):
        assert Config.from_env().export_label == DEFAULT_LABEL

    def test_wrapping_default_is_display(self):
        assert Config.from_env().latex_wrapping is LatexWrapping.DISPLAY


class TestFromEnv:
    # ── Environment values ───────────────────────────────────────────────

    def test_export_dir_read_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv(ENV_EXPORT_DIR, str(tmp_path))
        assert Config.from_env().export_dir == tmp_path

    def test_label_read_from_env(self, monkeypatch):
        monkeypatch.setenv(ENV_EXPORT_LABEL, "formula")
        assert Config.from_env().export_label == "formula"

    def test_wrapping_read_from_env(self, monkeypatch):
        monkeypatch.setenv(ENV_LATEX_WRAPPING, "paren")
        assert Config.from_env().latex_wrapping is LatexWrapping.PAREN

    # ── Overrides ────────────────────────────────────────────────────────

    def test_export_dir_override_wins(self, monkeypatch, tmp_path):
        monkeypatch.setenv(ENV_EXPORT_DIR, "/should/not/be/used")
        config = Config.from_env(export_dir_override=tmp_path)
        assert config.export_dir == tmp_path

    def test_label_override_wins(self, monkeypatch):
        monkeypatch.setenv(ENV_EXPORT_LABEL, "env-label")
        assert Config.from_env(label_override="cli-label").export_label == "cli-label"

    def test_wrapping_override_wins(self, monkeypatch):
        monkeypatch.setenv(ENV_LATEX_WRAPPING, "inline")
        config = Config.from_env(wrapping_override="equation")
        assert config.latex_wrapping is LatexWrapping.EQUATION

    # ── Errors ───────────────────────────────────────────────────────────

    def test_unknown_wrapping_raises(self, monkeypatch):
        monkeypatch.setenv(ENV_LATEX_WRAPPING, "brackets-please")
        with pytest.raises(RuntimeError, match=ENV_LATEX_WRAPPING):
            Config.from_env()

    def test_export_dir_that_is_a_file_raises(self, tmp_path):
        f = tmp_path / "file.txt"
        f.write_text("x")
        with pytest.raises(RuntimeError, match="not a directory"):
            Config.from_env(export_dir_override=f)

    def test_missing_export_dir_is_allowed(self, tmp_path):
        config = Config.from_env(export_dir_override=tmp_path / "later")
        assert config.export_dir == tmp_path / "later"


class TestLatexWrappingFromEnv:
    def test_default(self):
        assert latex_wrapping_from_env() is LatexWrapping.DISPLAY

    def test_override_wins(self, monkeypatch):
        monkeypatch.setenv(ENV_LATEX_WRAPPING, "inline")
        assert latex_wrapping_from_env("bracket") is LatexWrapping.BRACKET

    def test_ignores_bad_export_dir(self, monkeypatch, tmp_path):
        f = tmp_path / "file.txt"
        f.write_text("x")
        monkeypatch.setenv(ENV_EXPORT_DIR, str(f))
        assert latex_wrapping_from_env() is LatexWrapping.DISPLAY

    def test_unknown_raises(self):
        with pytest.raises(RuntimeError, match=ENV_LATEX_WRAPPING):
            latex_wrapping_from_env("nope")
