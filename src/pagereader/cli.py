from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from pagereader import __version__
from pagereader.config import VIEWS, PageReaderConfig, default_config
from pagereader.diagnostics import format_error_with_hint
from pagereader.dispatch import FORMATS, normalize_format, render
from pagereader.errors import PageReaderConfigError, PageReaderInputError
from pagereader.html_adapter import to_html, wrap_page
from pagereader.nodes import RenderNode, to_dict

EXIT_OK = 0
EXIT_CONFIG = 2
EXIT_INPUT = 3

STDIN_PATH = "-"


def _add_common_flags(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--root",
        type=str,
        default=None,
        help="Project root (defaults to searching upward from cwd for pagereader.toml).",
    )
    p.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to pagereader.toml (defaults to <root>/pagereader.toml).",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging on stderr.",
    )


def _add_render_flags(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--format",
        choices=FORMATS,
        default=None,
        help="Input format (defaults to render.format from config, then markdown).",
    )
    p.add_argument(
        "--view",
        choices=VIEWS,
        default=None,
        help="Output view: html fragment, full page, node tree (JSON) or raw input.",
    )
    p.add_argument("--title", type=str, default=None, help="Page title for --view page.")
    p.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Write the result to this file instead of stdout.",
    )
    p.add_argument(
        "--save-dir",
        type=str,
        default=None,
        help="Also save the raw input as page-reader-result-<ms>.<ext> in this directory.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print a machine-readable JSON envelope instead of the view.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pagereader")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    render_p = subparsers.add_parser("render", help="Render AI-generated text as a document.")
    render_p.add_argument(
        "path",
        nargs="?",
        default=STDIN_PATH,
        help="Input file (default: read stdin).",
    )
    _add_common_flags(render_p)
    _add_render_flags(render_p)

    watch_p = subparsers.add_parser("watch", help="Re-render a file whenever it changes.")
    watch_p.add_argument("path", help="Input file to watch.")
    _add_common_flags(watch_p)
    _add_render_flags(watch_p)

    mcp_p = subparsers.add_parser("mcp", help="MCP server commands.")
    mcp_sub = mcp_p.add_subparsers(dest="mcp_command", required=True)
    serve_p = mcp_sub.add_parser("serve", help="Run the MCP server over stdio.")
    _add_common_flags(serve_p)

    return parser


def parse_args(argv: list[str]) -> argparse.Namespace:
    return _build_parser().parse_args(argv)


def _is_json_mode(args: argparse.Namespace) -> bool:
    return bool(getattr(args, "json_output", False))


def _configure_logging(args: argparse.Namespace) -> None:
    level = logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _load_config(args: argparse.Namespace) -> PageReaderConfig:
    """Resolve configuration; a missing pagereader.toml means defaults.

    An explicit --config must exist.
    """
    from pagereader.config import CONFIG_FILENAME, find_project_root, load_config

    if args.config:
        return load_config(config_path=Path(args.config).resolve())

    if args.root:
        root = Path(args.root).resolve()
        if not (root / CONFIG_FILENAME).is_file():
            return default_config()
        return load_config(root=root)

    try:
        root = find_project_root(Path.cwd())
    except PageReaderConfigError:
        return default_config()
    return load_config(root=root)


def _eprint(msg: str) -> None:
    print(msg, file=sys.stderr)


def _print_error(e: BaseException) -> None:
    _eprint(format_error_with_hint(e))


def _read_input(path: str) -> str:
    if path == STDIN_PATH:
        return sys.stdin.read()
    try:
        return Path(path).read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise PageReaderInputError(f"Input file not found: {path}") from e
    except UnicodeDecodeError as e:
        raise PageReaderInputError(f"Input is not valid UTF-8: {path}") from e
    except OSError as e:
        raise PageReaderInputError(f"Failed reading input file: {path}") from e


def _write_output(text: str, output: str | None) -> None:
    if not text.endswith("\n"):
        text += "\n"
    if output is None:
        sys.stdout.write(text)
        return
    path = Path(output)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise PageReaderInputError(f"Failed writing output file: {path}") from e


def format_view(text: str, nodes: list[RenderNode], *, view: str, title: str) -> str:
    """Turn a render result into the requested CLI view."""
    if view == "raw":
        return text
    if view == "tree":
        return json.dumps([to_dict(n) for n in nodes], indent=2, ensure_ascii=False)
    fragment = to_html(nodes)
    if view == "page":
        return wrap_page(fragment, title=title)
    return fragment


def cmd_render(args: argparse.Namespace) -> int:
    try:
        cfg = _load_config(args)
        fmt = normalize_format(args.format or cfg.render.format)
        view = args.view or cfg.output.view
        title = args.title if args.title is not None else cfg.output.title

        text = _read_input(args.path)
        nodes = render(text, fmt)

        saved_path: Path | None = None
        save_dir = args.save_dir if args.save_dir is not None else cfg.output.save_dir
        if save_dir:
            from pagereader.export import save_result

            saved_path = save_result(text, fmt, Path(save_dir))
            if not _is_json_mode(args):
                _eprint(f"saved: {saved_path}")

        if _is_json_mode(args):
            payload: dict[str, object] = {
                "command": "render",
                "ok": True,
                "format": fmt,
                "nodes": [to_dict(n) for n in nodes],
            }
            if saved_path is not None:
                payload["saved_path"] = str(saved_path)
            out = json.dumps(payload, indent=2, ensure_ascii=False)
        else:
            out = format_view(text, nodes, view=view, title=title)

        _write_output(out, args.output)
        return EXIT_OK
    except PageReaderConfigError as e:
        _print_error(e)
        return EXIT_CONFIG
    except PageReaderInputError as e:
        _print_error(e)
        return EXIT_INPUT


def cmd_watch(args: argparse.Namespace) -> int:
    from pagereader import watcher

    if args.output is None:
        _eprint("error: watch mode needs --output")
        return EXIT_CONFIG

    try:
        watcher.check_watchfiles_available()
    except ImportError as e:
        _print_error(e)
        return EXIT_CONFIG

    watched = Path(args.path)
    rc = cmd_render(args)
    if rc != EXIT_OK:
        return rc

    def on_cycle_result(result: watcher.WatchCycleResult) -> None:
        if _is_json_mode(args):
            print(json.dumps(watcher.format_watch_cycle_json(result)))

    try:
        asyncio.run(
            watcher.run_watch_loop(
                changes_iter=watcher.make_watchfiles_iter([watched.resolve().parent]),
                run_cycle=watcher.build_cycle_runner(args),
                on_event=_eprint,
                on_cycle_result=on_cycle_result,
                on_error=_print_error,
                watched=watched,
            )
        )
    except KeyboardInterrupt:
        pass
    return EXIT_OK


def cmd_mcp(args: argparse.Namespace) -> int:
    try:
        from pagereader.mcp_server import run_server

        run_server()
    except ImportError as e:
        _print_error(e)
        return EXIT_CONFIG
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    try:
        args = parse_args(list(sys.argv[1:] if argv is None else argv))
    except SystemExit as e:
        # argparse uses SystemExit for --help/--version and parse errors.
        code = e.code
        return int(code) if isinstance(code, int) else EXIT_CONFIG

    _configure_logging(args)

    if args.command == "render":
        return cmd_render(args)
    if args.command == "watch":
        return cmd_watch(args)
    if args.command == "mcp":
        return cmd_mcp(args)

    return EXIT_CONFIG


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
