from __future__ import annotations

from pathlib import Path

import pytest

from tsbootstrap.settings import DEFAULT_REGISTRY_URL, RuntimeSettings, SettingsError, load_settings


def test_defaults_without_config(tmp_path: Path) -> None:
    settings = load_settings({"TSBOOTSTRAP_HOME": str(tmp_path)})
    assert settings.home_dir == tmp_path
    assert settings.log_dir == tmp_path / "logs"
    assert settings.registry_backend == "npm"
    assert settings.registry_url == DEFAULT_REGISTRY_URL
    assert settings.template_dir is None


def test_config_file_is_read(tmp_path: Path) -> None:
    (tmp_path / "config.yaml").write_text(
        "registry:\n"
        "  backend: http\n"
        "  url: https://npm.example.test/\n"
        "  timeout: 5\n"
        "tools:\n"
        "  git: /opt/git/bin/git\n"
        "template_dir: ~/my-templates\n",
        encoding="utf-8",
    )
    settings = load_settings({"TSBOOTSTRAP_HOME": str(tmp_path)})
    assert settings.registry_backend == "http"
    assert settings.registry_url == "https://npm.example.test"
    assert settings.request_timeout == 5.0
    assert settings.git_executable == "/opt/git/bin/git"
    assert settings.template_dir == Path("~/my-templates").expanduser()


def test_environment_overrides_config_file(tmp_path: Path) -> None:
    (tmp_path / "config.yaml").write_text("registry:\n  backend: http\n", encoding="utf-8")
    settings = load_settings(
        {
            "TSBOOTSTRAP_HOME": str(tmp_path),
            "TSBOOTSTRAP_REGISTRY": "NPM",
            "TSBOOTSTRAP_NPM": "/usr/local/bin/npm",
            "TSBOOTSTRAP_TEMPLATE_DIR": str(tmp_path / "tpl"),
        }
    )
    assert settings.registry_backend == "npm"
    assert settings.npm_executable == "/usr/local/bin/npm"
    assert settings.template_dir == tmp_path / "tpl"


@pytest.mark.parametrize(
    "content",
    [
        "registry: [",
        "- just\n- a list\n",
        "registry: http\n",
        "registry:\n  timeout: soon\n",
        "registry:\n  backend: pypi\n",
    ],
)
def test_invalid_config_raises(tmp_path: Path, content: str) -> None:
    (tmp_path / "config.yaml").write_text(content, encoding="utf-8")
    with pytest.raises(SettingsError):
        load_settings({"TSBOOTSTRAP_HOME": str(tmp_path)})


def test_with_overrides_ignores_none(tmp_path: Path) -> None:
    settings = RuntimeSettings(home_dir=tmp_path, log_dir=tmp_path / "logs")
    updated = settings.with_overrides(registry_backend=None, registry_url="https://x.test")
    assert updated.registry_backend == "npm"
    assert updated.registry_url == "https://x.test"
    with pytest.raises(SettingsError):
        settings.with_overrides(registry_backend="yarn")
