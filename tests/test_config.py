"""Tests for cssdts.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from cssdts.casing import CasingPolicy
from cssdts.config import ConfigError, FileConfig, RunConfiguration, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, FileConfig)
    assert config.root == tmp_path.resolve()
    assert config.search_dir is None
    assert config.pattern is None
    assert config.camel_case is None
    assert config.extra == {}


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".cssdts.yml"
    config_file.write_text(
        """
search_dir: src/styles
out_dir: types
pattern: "**/*.module.css"
camel_case: dashes
drop_extension: true
use_spaces: "yes"
no_semicolons: false
editor: vscode
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.search_dir == "src/styles"
    assert config.out_dir == "types"
    assert config.pattern == "**/*.module.css"
    assert config.camel_case == "dashes"
    assert config.drop_extension is True
    assert config.use_spaces is True
    assert config.no_semicolons is False
    assert config.extra == {"editor": "vscode"}

    run = config.to_run_configuration()
    assert run.root_dir == tmp_path.resolve()
    assert run.casing is CasingPolicy.DASHES
    assert run.indent == "  "
    assert run.terminator == ";"
    assert run.output_directory == tmp_path.resolve() / "types"


def test_overrides_take_precedence_over_file_values(tmp_path: Path) -> None:
    (tmp_path / ".cssdts.yml").write_text("search_dir: a\nout_dir: b\n", encoding="utf-8")
    config = load_config(tmp_path)

    run = config.to_run_configuration(
        root_dir=tmp_path, out_dir="c", camel_case="true", no_semicolons=True, use_spaces=None
    )

    assert run.search_dir == "a"
    assert run.out_dir == "c"
    assert run.casing is CasingPolicy.CAMEL_CASE
    assert run.terminator == ""
    assert run.indent == "\t"


def test_unknown_override_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(TypeError):
        load_config(tmp_path).to_run_configuration(colour="red")


@pytest.mark.parametrize(
    "body",
    [
        "camel_case: snake\n",
        "camel_case: [1, 2]\n",
        "- just\n- a list\n",
        "search_dir: [unclosed\n",
    ],
)
def test_invalid_files_raise_config_error(tmp_path: Path, body: str) -> None:
    (tmp_path / ".cssdts.yml").write_text(body, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_run_configuration_defaults(tmp_path: Path) -> None:
    config = RunConfiguration(root_dir=tmp_path, search_dir="src")

    assert config.out_dir == "src"
    assert config.casing is CasingPolicy.IDENTITY
    assert config.indent == "\t"
    assert config.terminator == ";"
    assert config.input_directory == tmp_path / "src"
    assert config.converter("a-b") == "a-b"


def test_run_configuration_is_immutable(tmp_path: Path) -> None:
    config = RunConfiguration(root_dir=tmp_path)

    with pytest.raises(AttributeError):
        config.search_dir = "elsewhere"  # type: ignore[misc]


@pytest.mark.parametrize(("indent", "terminator"), [("\t ", ";"), ("", ";"), ("\t", ",")])
def test_run_configuration_rejects_bad_punctuation(tmp_path: Path, indent: str, terminator: str) -> None:
    with pytest.raises(ValueError):
        RunConfiguration(root_dir=tmp_path, indent=indent, terminator=terminator)
