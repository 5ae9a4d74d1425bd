"""Project configuration loading for pagereader.

This module is intentionally small and deterministic: it only reads
`pagereader.toml` and performs light validation. The renderers never see it;
the CLI and watch mode turn it into arguments.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pagereader.dispatch import FORMATS, OutputFormat
from pagereader.errors import PageReaderConfigError
from pagereader.html_adapter import DEFAULT_TITLE

CONFIG_FILENAME = "pagereader.toml"

VIEWS: tuple[str, ...] = ("html", "page", "tree", "raw")


@dataclass(frozen=True)
class RenderConfig:
    format: OutputFormat


@dataclass(frozen=True)
class OutputConfig:
    view: str
    title: str
    save_dir: str


@dataclass(frozen=True)
class PageReaderConfig:
    version: int
    render: RenderConfig
    output: OutputConfig


def default_config() -> PageReaderConfig:
    """Configuration used when no `pagereader.toml` exists."""

    return PageReaderConfig(
        version=1,
        render=RenderConfig(format="markdown"),
        output=OutputConfig(view="html", title=DEFAULT_TITLE, save_dir=""),
    )


def find_project_root(start: Path) -> Path:
    """Walk upward from `start` (file or directory) looking for `pagereader.toml`."""

    cur = start
    try:
        if cur.is_file():
            cur = cur.parent
    except OSError:
        cur = cur.parent

    cur = cur.resolve()
    while True:
        if (cur / CONFIG_FILENAME).is_file():
            return cur
        if cur.parent == cur:
            break
        cur = cur.parent

    raise PageReaderConfigError(
        f"Could not find {CONFIG_FILENAME} by walking upward from start path."
    )


def _as_table(value: Any, *, name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise PageReaderConfigError(f"Expected [{name}] to be a table.")
    return value


def _as_int(value: Any, *, name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise PageReaderConfigError(f"Expected {name} to be an integer.")
    return value


def _as_str(value: Any, *, name: str) -> str:
    if not isinstance(value, str):
        raise PageReaderConfigError(f"Expected {name} to be a string.")
    return value


def _as_choice(value: Any, *, name: str, choices: tuple[str, ...]) -> str:
    s = _as_str(value, name=name).strip().lower()
    if s not in choices:
        raise PageReaderConfigError(
            f"Invalid {name}: {value!r} (expected one of: {', '.join(choices)})."
        )
    return s


def load_config(
    *, root: Path | None = None, config_path: Path | None = None
) -> PageReaderConfig:
    """Load and validate `pagereader.toml`.

    If neither `root` nor `config_path` are provided, the project root is
    discovered by walking upward from the current working directory.
    """

    if config_path is None:
        if root is None:
            root = find_project_root(Path.cwd())
        config_path = root / CONFIG_FILENAME

    try:
        raw = config_path.read_bytes()
    except FileNotFoundError as e:
        raise PageReaderConfigError(f"Missing {CONFIG_FILENAME} at: {config_path}") from e
    except OSError as e:
        raise PageReaderConfigError(f"Failed reading config file: {config_path}") from e

    try:
        data = tomllib.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise PageReaderConfigError(f"Config is not valid UTF-8: {config_path}") from e
    except tomllib.TOMLDecodeError as e:
        raise PageReaderConfigError(f"Invalid TOML in {config_path}: {e}") from e

    version = data.get("version", None)
    if version is None:
        raise PageReaderConfigError(f"Missing required `version = 1` in {CONFIG_FILENAME}.")
    version_i = _as_int(version, name="version")
    if version_i != 1:
        raise PageReaderConfigError(f"Unsupported config version: {version_i} (expected 1).")

    defaults = default_config()
    render_tbl = _as_table(data.get("render"), name="render")
    output_tbl = _as_table(data.get("output"), name="output")

    if "format" in render_tbl:
        fmt = _as_choice(render_tbl["format"], name="render.format", choices=FORMATS)
    else:
        fmt = defaults.render.format

    if "view" in output_tbl:
        view = _as_choice(output_tbl["view"], name="output.view", choices=VIEWS)
    else:
        view = defaults.output.view

    if "title" in output_tbl:
        title = _as_str(output_tbl["title"], name="output.title")
    else:
        title = defaults.output.title

    if "save_dir" in output_tbl:
        save_dir = _as_str(output_tbl["save_dir"], name="output.save_dir")
    else:
        save_dir = defaults.output.save_dir

    return PageReaderConfig(
        version=version_i,
        render=RenderConfig(format=fmt),  # type: ignore[arg-type]
        output=OutputConfig(view=view, title=title, save_dir=save_dir),
    )
