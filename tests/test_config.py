from __future__ import annotations

from pathlib import Path

import pytest

from pdfannot.core.config import CONFIG_ENV_VAR, Config, load_config
from pdfannot.core.constants import DEFAULT_EXCLUDE, DEFAULT_MERGE_DEST
from pdfannot.core.exceptions import ConfigurationError


def test_defaults(monkeypatch) -> None:
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)

    config = load_config()

    assert config.annotations.exclude == list(DEFAULT_EXCLUDE)
    assert config.annotations.merge_dest == DEFAULT_MERGE_DEST
    assert config.annotations.force is False
    assert config.output.color == "auto"


def test_from_file(tmp_path: Path) -> None:
    path = tmp_path / "pdfannot.toml"
    path.write_text(
        'verbose = true\n'
        '[annotations]\n'
        'exclude = ["Link", "Widget"]\n'
        'merge_dest = "out/merged.pdf"\n'
        'force = true\n'
        '[output]\n'
        'color = "never"\n'
    )

    config = Config.from_file(path)

    assert config.verbose is True
    assert config.annotations.exclude == ["Link", "Widget"]
    assert config.annotations.merge_dest == "out/merged.pdf"
    assert config.annotations.force is True
    assert config.output.color == "never"


def test_single_exclude_string() -> None:
    config = Config.from_dict({"annotations": {"exclude": "Popup"}})

    assert config.annotations.exclude == ["Popup"]


@pytest.mark.parametrize(
    "data",
    [
        {"output": {"color": "sometimes"}},
        {"annotations": {"exclude": [1, 2]}},
    ],
)
def test_invalid_values(data) -> None:
    with pytest.raises(ConfigurationError):
        Config.from_dict(data)


def test_invalid_toml(tmp_path: Path) -> None:
    path = tmp_path / "pdfannot.toml"
    path.write_text("[annotations\n")

    with pytest.raises(ConfigurationError):
        Config.from_file(path)


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        Config.from_file(tmp_path / "missing.toml")


def test_environment_variable(monkeypatch, tmp_path: Path) -> None:
    path = tmp_path / "pdfannot.toml"
    path.write_text('[annotations]\nstrip_dest = "clean.pdf"\n')
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

    assert load_config().annotations.strip_dest == "clean.pdf"


def test_explicit_path_wins_over_environment(monkeypatch, tmp_path: Path) -> None:
    env_path = tmp_path / "env.toml"
    env_path.write_text('[output]\ncolor = "always"\n')
    explicit = tmp_path / "explicit.toml"
    explicit.write_text('[output]\ncolor = "never"\n')
    monkeypatch.setenv(CONFIG_ENV_VAR, str(env_path))

    assert load_config(explicit).output.color == "never"
