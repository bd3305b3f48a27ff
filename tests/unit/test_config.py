"""Unit tests for config.py"""

import pytest

from blogsite.config import load_config


@pytest.fixture(autouse=True)
def chdir_tmp(tmp_path, monkeypatch):
    """Run each test from a clean tmp directory so no stray config.yaml is read."""
    monkeypatch.chdir(tmp_path)


def test_load_config_defaults():
    """Settings defaults apply when no config.yaml, env var, or CLI override exists."""
    settings = load_config()
    assert settings.source_dir == "."
    assert settings.posts_dir == "_posts"
    assert settings.output_dir == "_site"
    assert settings.write_manifest is True
    assert "README.md" in settings.exclude


def test_load_config_reads_config_yaml(tmp_path):
    """Values in config.yaml replace the defaults."""
    (tmp_path / "config.yaml").write_text("site_title: Testing Notes\noutput_dir: public\n")
    settings = load_config()
    assert settings.site_title == "Testing Notes"
    assert settings.output_dir == "public"


def test_load_config_uses_env_output_dir(monkeypatch):
    """BLOGSITE_OUTPUT_DIR env var is picked up by load_config."""
    monkeypatch.setenv("BLOGSITE_OUTPUT_DIR", "env-site")
    settings = load_config()
    assert settings.output_dir == "env-site"


def test_load_config_env_overrides_config_yaml(tmp_path, monkeypatch):
    """BLOGSITE_POSTS_DIR takes precedence over config.yaml posts_dir."""
    (tmp_path / "config.yaml").write_text("posts_dir: articles\n")
    monkeypatch.setenv("BLOGSITE_POSTS_DIR", "_drafts")
    settings = load_config()
    assert settings.posts_dir == "_drafts"


def test_load_config_cli_overrides_env(monkeypatch):
    """A non-None CLI override beats the env var; None overrides are ignored."""
    monkeypatch.setenv("BLOGSITE_OUTPUT_DIR", "env-site")
    settings = load_config(overrides={"output_dir": "cli-site", "posts_dir": None})
    assert settings.output_dir == "cli-site"
    assert settings.posts_dir == "_posts"


def test_load_config_env_bool(monkeypatch):
    """BLOGSITE_WRITE_MANIFEST is coerced to bool."""
    monkeypatch.setenv("BLOGSITE_WRITE_MANIFEST", "false")
    assert load_config().write_manifest is False


def test_load_config_env_exclude_comma_list(monkeypatch):
    """BLOGSITE_EXCLUDE accepts a comma-separated list of file names."""
    monkeypatch.setenv("BLOGSITE_EXCLUDE", "README.md, NOTES.md")
    assert load_config().exclude == ["README.md", "NOTES.md"]


def test_load_config_invalid_yaml(tmp_path):
    """load_config raises ValueError when config.yaml contains invalid YAML."""
    (tmp_path / "config.yaml").write_text("key: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid config.yaml"):
        load_config()


def test_load_config_non_mapping_yaml(tmp_path):
    """load_config rejects a config.yaml that is not a mapping."""
    (tmp_path / "config.yaml").write_text("- just\n- a list\n")
    with pytest.raises(ValueError, match="expected a mapping"):
        load_config()
