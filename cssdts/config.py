"""Run configuration and `.cssdts.yml` loading."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .casing import CasingPolicy, KeyConverter, converter_for

CONFIG_FILENAME = ".cssdts.yml"
DEFAULT_PATTERN = "**/*.css"

TAB_INDENT = "\t"
SPACE_INDENT = "  "
SEMICOLON = ";"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass(frozen=True)
class RunConfiguration:
    """Immutable settings shared by every file processed in one run."""

    root_dir: Path
    search_dir: str = ""
    out_dir: Optional[str] = None
    casing: CasingPolicy = CasingPolicy.IDENTITY
    drop_extension: bool = False
    indent: str = TAB_INDENT
    terminator: str = SEMICOLON

    def __post_init__(self) -> None:
        object.__setattr__(self, "root_dir", Path(self.root_dir))
        if self.out_dir is None:
            object.__setattr__(self, "out_dir", self.search_dir)
        if self.indent != TAB_INDENT and (not self.indent or self.indent.strip(" ")):
            raise ValueError("indent must be a tab or a run of spaces")
        if self.terminator not in {SEMICOLON, ""}:
            raise ValueError("terminator must be ';' or empty")

    @classmethod
    def from_options(
        cls,
        *,
        root_dir: Union[str, Path, None] = None,
        search_dir: Optional[str] = None,
        out_dir: Optional[str] = None,
        camel_case: Union[str, bool, None] = None,
        drop_extension: bool = False,
        use_spaces: bool = False,
        no_semicolons: bool = False,
    ) -> "RunConfiguration":
        """Build a configuration from flag-style options."""
        return cls(
            root_dir=Path(root_dir) if root_dir is not None else Path.cwd(),
            search_dir=search_dir or "",
            out_dir=out_dir or None,
            casing=CasingPolicy.from_option(camel_case),
            drop_extension=bool(drop_extension),
            indent=SPACE_INDENT if use_spaces else TAB_INDENT,
            terminator="" if no_semicolons else SEMICOLON,
        )

    @property
    def input_directory(self) -> Path:
        return self.root_dir / self.search_dir

    @property
    def output_directory(self) -> Path:
        return self.root_dir / (self.out_dir or "")

    @property
    def converter(self) -> KeyConverter:
        return converter_for(self.casing)


@dataclass
class FileConfig:
    """Settings read from `.cssdts.yml`; unset values are left as ``None``."""

    root: Path
    search_dir: Optional[str] = None
    out_dir: Optional[str] = None
    pattern: Optional[str] = None
    camel_case: Union[str, bool, None] = None
    drop_extension: Optional[bool] = None
    use_spaces: Optional[bool] = None
    no_semicolons: Optional[bool] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_run_configuration(self, **overrides: Any) -> RunConfiguration:
        """Combine file values with explicit overrides (``None`` overrides are ignored)."""
        values: Dict[str, Any] = {
            "root_dir": self.root,
            "search_dir": self.search_dir,
            "out_dir": self.out_dir,
            "camel_case": self.camel_case,
            "drop_extension": bool(self.drop_extension),
            "use_spaces": bool(self.use_spaces),
            "no_semicolons": bool(self.no_semicolons),
        }
        for key, value in overrides.items():
            if key not in values:
                raise TypeError(f"Unknown configuration option: {key}")
            if value is None:
                continue
            # Boolean flags only switch a file setting on.
            if value is False and key != "camel_case":
                continue
            values[key] = value
        try:
            return RunConfiguration.from_options(**values)
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc


_KNOWN_KEYS = {
    "search_dir",
    "out_dir",
    "pattern",
    "camel_case",
    "drop_extension",
    "use_spaces",
    "no_semicolons",
}


def load_config(config_path: Path) -> FileConfig:
    """Load configuration from disk; a missing file yields empty settings."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return FileConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    camel_case = data.get("camel_case")
    if camel_case is not None and not isinstance(camel_case, (str, bool)):
        raise ConfigError("camel_case must be true, false or 'dashes'")
    if camel_case is not None:
        try:
            CasingPolicy.from_option(camel_case)
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc

    return FileConfig(
        root=root,
        search_dir=_as_str(data.get("search_dir")),
        out_dir=_as_str(data.get("out_dir")),
        pattern=_as_str(data.get("pattern")),
        camel_case=camel_case,
        drop_extension=_as_bool(data.get("drop_extension")),
        use_spaces=_as_bool(data.get("use_spaces")),
        no_semicolons=_as_bool(data.get("no_semicolons")),
        extra={key: value for key, value in data.items() if key not in _KNOWN_KEYS},
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DEFAULT_PATTERN",
    "FileConfig",
    "RunConfiguration",
    "load_config",
]
