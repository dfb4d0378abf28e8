from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Mapping, Optional
import os

import yaml
from rich.errors import StyleSyntaxError
from rich.style import Style

from .types import Segment

ColorMode = Literal["auto", "always", "never"]
COLOR_MODES: tuple[str, ...] = ("auto", "always", "never")

CONFIG_FILENAMES: tuple[str, ...] = ("eoe.yaml", ".eoe.yaml")

_MAPPING_KEYS = ("label", "separator", "message_style", "fallback_message", "color")


class ConfigError(ValueError):
    """Raised when a configuration file or value is malformed."""


def _check_style(style: str, *, where: str) -> str:
    try:
        Style.parse(style)
    except StyleSyntaxError as error:
        raise ConfigError(f"Invalid style for {where}: {style!r} ({error})") from error
    return style


def _check_color(color: str) -> str:
    if color not in COLOR_MODES:
        raise ConfigError(f"Invalid color mode: {color!r} (expected one of {', '.join(COLOR_MODES)})")
    return color


@dataclass(frozen=True)
class ReporterConfig:
    """
    Styling configuration for the error reporter.

    Parameters
    ----------
    label
        Segment printed in front of the outermost cause ("error").
    separator
        Segment between a label and its message.
    message_style
        Style of the fallback message text. Cause text is never styled.
    fallback_message
        Text reported when the value is absent (``None``).
    color
        "auto" styles only when stderr is a terminal; "always" forces ANSI
        styling; "never" writes plain text.

    Usage example
    -------------
        cfg = ReporterConfig(fallback_message="no value to report")
    """

    label: Segment = Segment("error", "bold red")
    separator: Segment = Segment(": ")
    message_style: str = ""
    fallback_message: str = "unexpected None"
    color: ColorMode = "auto"

    def __post_init__(self) -> None:
        _check_color(self.color)

    @property
    def caused_by(self) -> Segment:
        """Label for every cause after the first; shares the label's style."""
        return Segment("caused by", self.label.style)

    @classmethod
    def from_env(cls, *, default: Optional["ReporterConfig"] = None, prefix: str = "EOE_") -> "ReporterConfig":
        """
        Create config from environment variables, falling back to `default`.

        Supported variables
        -------------------
        - <PFX>LABEL, <PFX>LABEL_STYLE
        - <PFX>SEPARATOR, <PFX>SEPARATOR_STYLE
        - <PFX>MESSAGE_STYLE
        - <PFX>FALLBACK_MESSAGE
        - <PFX>COLOR: "auto" | "always" | "never"

        Usage example
        -------------
            cfg = ReporterConfig.from_env(prefix="MYTOOL_")
        """
        builder = ConfigBuilder()
        builder.update_from_env(prefix=prefix)
        return builder.build(default=default)


@dataclass
class ConfigBuilder:
    """
    Write-once staging area for a `ReporterConfig`.

    Each field can be set at most once: the first `set_*` call wins and returns
    True, later calls return False and change nothing. Applying sources in
    precedence order (CLI, environment, file) therefore gives the expected
    override behavior. Text and style of the label and separator are separate
    fields, so one source may set the text and another the style.

    Usage example
    -------------
        builder = ConfigBuilder()
        builder.set_fallback_message("nothing found")
        builder.set_fallback_message("ignored")  # -> False
        cfg = builder.build()
    """

    _values: dict[str, Any] = field(default_factory=dict, repr=False)

    def _set_once(self, name: str, value: Any) -> bool:
        if name in self._values:
            return False
        self._values[name] = value
        return True

    def is_set(self, name: str) -> bool:
        return name in self._values

    def set_label_text(self, text: str) -> bool:
        return self._set_once("label_text", text)

    def set_label_style(self, style: str) -> bool:
        return self._set_once("label_style", style)

    def set_separator_text(self, text: str) -> bool:
        return self._set_once("separator_text", text)

    def set_separator_style(self, style: str) -> bool:
        return self._set_once("separator_style", style)

    def set_message_style(self, style: str) -> bool:
        return self._set_once("message_style", style)

    def set_fallback_message(self, message: str) -> bool:
        return self._set_once("fallback_message", message)

    def set_color(self, color: ColorMode) -> bool:
        return self._set_once("color", _check_color(color))

    def update_from_env(self, *, prefix: str = "EOE_", environ: Optional[Mapping[str, str]] = None) -> None:
        """Apply environment overrides. Invalid values are ignored."""
        env = os.environ if environ is None else environ

        label_text = env.get(f"{prefix}LABEL")
        if label_text is not None:
            self.set_label_text(label_text)
        label_style = env.get(f"{prefix}LABEL_STYLE")
        if label_style is not None and _is_valid_style(label_style):
            self.set_label_style(label_style)

        separator = env.get(f"{prefix}SEPARATOR")
        if separator is not None:
            self.set_separator_text(separator)
        separator_style = env.get(f"{prefix}SEPARATOR_STYLE")
        if separator_style is not None and _is_valid_style(separator_style):
            self.set_separator_style(separator_style)

        message_style = env.get(f"{prefix}MESSAGE_STYLE")
        if message_style is not None and _is_valid_style(message_style):
            self.set_message_style(message_style)

        fallback = env.get(f"{prefix}FALLBACK_MESSAGE")
        if fallback is not None:
            self.set_fallback_message(fallback)

        color = env.get(f"{prefix}COLOR", "").strip().lower()
        if color in COLOR_MODES:
            self.set_color(color)  # type: ignore[arg-type]

    def update_from_mapping(self, data: Mapping[str, Any], *, source: str = "config") -> None:
        """
        Apply settings from a parsed mapping (e.g. a YAML file).

        `label` and `separator` accept either a string (the text) or a mapping
        with `text` and/or `style`. Unknown keys and wrong types raise ConfigError.
        """
        unknown = sorted(set(data) - set(_MAPPING_KEYS))
        if unknown:
            raise ConfigError(f"Unknown keys in {source}: {', '.join(unknown)}")

        if "label" in data:
            text, style = _segment_parts(data["label"], where=f"{source}:label")
            if text is not None:
                self.set_label_text(text)
            if style is not None:
                self.set_label_style(style)
        if "separator" in data:
            text, style = _segment_parts(data["separator"], where=f"{source}:separator")
            if text is not None:
                self.set_separator_text(text)
            if style is not None:
                self.set_separator_style(style)
        if "message_style" in data:
            style = _require_str(data["message_style"], where=f"{source}:message_style")
            self.set_message_style(_check_style(style, where=f"{source}:message_style"))
        if "fallback_message" in data:
            self.set_fallback_message(_require_str(data["fallback_message"], where=f"{source}:fallback_message"))
        if "color" in data:
            self.set_color(_require_str(data["color"], where=f"{source}:color"))  # type: ignore[arg-type]

    def build(self, *, default: Optional[ReporterConfig] = None) -> ReporterConfig:
        """Freeze into a `ReporterConfig`; unset fields come from `default`."""
        base = default if default is not None else ReporterConfig()
        v = self._values
        return ReporterConfig(
            label=Segment(v.get("label_text", base.label.text), v.get("label_style", base.label.style)),
            separator=Segment(
                v.get("separator_text", base.separator.text),
                v.get("separator_style", base.separator.style),
            ),
            message_style=v.get("message_style", base.message_style),
            fallback_message=v.get("fallback_message", base.fallback_message),
            color=v.get("color", base.color),
        )


def _is_valid_style(style: str) -> bool:
    try:
        Style.parse(style)
    except StyleSyntaxError:
        return False
    return True


def _require_str(value: Any, *, where: str) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"Expected a string for {where}, got {type(value).__name__}")
    return value


def _segment_parts(value: Any, *, where: str) -> tuple[Optional[str], Optional[str]]:
    """Split a segment setting into (text, style); None marks a part not given."""
    if isinstance(value, str):
        return value, None
    if isinstance(value, Mapping):
        extra = sorted(set(value) - {"text", "style"})
        if extra:
            raise ConfigError(f"Unknown keys in {where}: {', '.join(extra)}")
        text = _require_str(value["text"], where=f"{where}.text") if "text" in value else None
        style = None
        if "style" in value:
            style = _check_style(_require_str(value["style"], where=f"{where}.style"), where=where)
        return text, style
    raise ConfigError(f"Expected a string or mapping for {where}, got {type(value).__name__}")


def load_config_file(path: Path) -> dict[str, Any]:
    """Parse one YAML config file into a mapping."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as error:
        raise ConfigError(f"Cannot read config file {path}: {error}") from error
    except yaml.YAMLError as error:
        raise ConfigError(f"Malformed YAML in {path}: {error}") from error
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Top level of {path} must be a mapping")
    return data


def load_config(root: Path) -> dict[str, Any]:
    """
    Load eoe config from a directory if present.

    Search order:
    1) ``eoe.yaml``
    2) ``.eoe.yaml``
    """

    for filename in CONFIG_FILENAMES:
        config_path = root / filename
        if config_path.exists():
            return load_config_file(config_path)
    return {}


def resolve_config(
    *,
    overrides: Optional[Mapping[str, Any]] = None,
    config_path: Optional[Path] = None,
    root: Optional[Path] = None,
    env_prefix: str = "EOE_",
) -> ReporterConfig:
    """
    Merge configuration sources, highest priority first:

    1) `overrides` (typically CLI flags, same shape as the YAML mapping)
    2) environment variables
    3) `config_path`, or a config file discovered in `root` (default: cwd)
    4) `ReporterConfig` defaults
    """
    builder = ConfigBuilder()
    if overrides:
        builder.update_from_mapping(overrides, source="overrides")
    builder.update_from_env(prefix=env_prefix)

    if config_path is not None:
        data = load_config_file(config_path)
        source = str(config_path)
    else:
        data = load_config(root if root is not None else Path.cwd())
        source = "config file"
    builder.update_from_mapping(data, source=source)
    return builder.build()
