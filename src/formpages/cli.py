"""CLI entry point for FormPages."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from formpages import __version__, logger
from formpages.document import build_document
from formpages.exceptions import FormSpecError, PackageError
from formpages.form_store import load_form_spec, write_document
from formpages.logging import configure_logging, render_context
from formpages.renderer import FormRenderer, mapping_lookup
from formpages.settings import Settings, get_settings

EXIT_INVALID_PAGE = 2


def _positive_int(value: str) -> int:
    """Parse a 1-based page number.

    Args:
        value (str): CLI value.

    Raises:
        argparse.ArgumentTypeError: If value is not a positive integer.

    Returns:
        int: Parsed page number.
    """
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("--page must be an integer") from exc  # noqa: TRY003
    if number < 1:
        raise argparse.ArgumentTypeError("--page must be >= 1")  # noqa: TRY003
    return number


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser.

    Returns:
        argparse.ArgumentParser: The configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="formpages")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    render_parser = subparsers.add_parser("render", help="Render the form markup of one page")
    render_parser.add_argument("--config", required=True, type=Path, dest="config_path")
    render_parser.add_argument("--page", type=_positive_int, default=1)
    render_parser.add_argument("--output", type=Path, default=None, dest="output_path")

    build_parser_ = subparsers.add_parser("build", help="Build a standalone HTML document for the form")
    build_parser_.add_argument("--config", required=True, type=Path, dest="config_path")
    build_parser_.add_argument("--page", type=_positive_int, default=1)
    build_parser_.add_argument("--output", type=Path, default=None, dest="output_path")

    validate_parser = subparsers.add_parser("validate", help="Check required fields of one page")
    validate_parser.add_argument("--config", required=True, type=Path, dest="config_path")
    validate_parser.add_argument("--page", type=_positive_int, required=True)
    validate_parser.add_argument("--values", required=True, type=Path, dest="values_path")

    return parser


def _load_values(path: Path) -> dict[str, object]:
    """Load submitted values from a JSON object file.

    Args:
        path (Path): Values file path.

    Raises:
        FormSpecError: If the file cannot be read as a JSON object.

    Returns:
        dict[str, object]: Values keyed by field name.
    """
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise FormSpecError(message=f"Cannot read values file {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise FormSpecError(message=f"Values file must contain a JSON object: {path}")
    return payload


def _run_render(args: argparse.Namespace, settings: Settings) -> int:
    form_spec = load_form_spec(args.config_path)
    markup = FormRenderer(form_spec, settings=settings).render_page(args.page)
    if args.output_path is None:
        sys.stdout.write(markup)
    else:
        write_document(markup, args.output_path)
    return 0


def _run_build(args: argparse.Namespace, settings: Settings) -> int:
    form_spec = load_form_spec(args.config_path)
    markup = build_document(form_spec, page=args.page, settings=settings)
    output_path = args.output_path or Path(settings.output_dir) / "formulario.html"
    write_document(markup, output_path)
    return 0


def _run_validate(args: argparse.Namespace, settings: Settings) -> int:
    form_spec = load_form_spec(args.config_path)
    values = _load_values(args.values_path)

    def _notify(message: str) -> None:
        sys.stdout.write(f"{message}\n")

    valid = FormRenderer.validate_page(
        args.page,
        form_spec,
        mapping_lookup(values),
        _notify,
        settings=settings,
    )
    logger.info("Page validated", page=args.page, valid=valid)
    return 0 if valid else EXIT_INVALID_PAGE


_COMMANDS = {
    "render": _run_render,
    "build": _run_build,
    "validate": _run_validate,
}


def main(argv: list[str] | None = None) -> int:
    """Run the CLI.

    Args:
        argv (list[str] | None): Arguments, defaults to `sys.argv[1:]`.

    Returns:
        int: Exit code (0 for success, 1 for error, 2 for a page failing validation).
    """
    settings = get_settings()
    configure_logging(settings=settings)

    parser = build_parser()
    args = parser.parse_args(argv)

    command = _COMMANDS.get(args.command)
    if command is None:
        parser.print_help()
        return 0

    try:
        with render_context(command=args.command):
            return command(args, settings)
    except PackageError:
        logger.exception("Command failed", command=args.command)
        return 1
    except KeyboardInterrupt:
        logger.info("Command aborted by user", command=args.command)
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
