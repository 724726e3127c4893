"""CLI entry point for bookfold."""

from __future__ import annotations

import argparse
from pathlib import Path

from bookfold import __version__, logger
from bookfold.async_runner import run_async
from bookfold.exceptions import PackageError
from bookfold.logging import configure_logging
from bookfold.pipeline import (
    build_request_async,
    export_filename,
    generate_instructions,
    persist_instructions,
    run_pattern,
)
from bookfold.preview import render_fold_preview, render_processed_image, save_preview
from bookfold.settings import Settings, get_settings
from bookfold.sources import FileImageSource
from bookfold.typing.enums import DepthMode
from bookfold.typing.models import UnlockCredentials


def _depth_mode_from_cli(value: str) -> DepthMode:
    """Convert `--mode` CLI value into a depth mode.

    Args:
        value (str): CLI value (`uniform` or `variable`).

    Raises:
        argparse.ArgumentTypeError: If value is not supported.

    Returns:
        DepthMode: Selected depth mode.
    """
    try:
        return DepthMode.from_str(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("--mode must be one of: uniform, variable") from exc  # noqa: TRY003


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser.

    Returns:
        argparse.ArgumentParser: The configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="bookfold")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    generate_parser = subparsers.add_parser("generate", help="Generate cutting instructions from an image")
    generate_parser.add_argument("--image", required=True, type=Path, dest="image_path")
    generate_parser.add_argument("--height", required=True, type=float, dest="book_height_cm")
    generate_parser.add_argument("--pages", required=True, type=int, dest="total_pages")
    generate_parser.add_argument("--padding", type=float, default=0.0, dest="padding_cm")
    generate_parser.add_argument("--mode", default="uniform", type=_depth_mode_from_cli, dest="mode")
    generate_parser.add_argument("--output", type=Path, default=None, dest="output_path")
    generate_parser.add_argument("--preview", type=Path, default=None, dest="preview_path")
    generate_parser.add_argument("--processed", type=Path, default=None, dest="processed_path")
    generate_parser.add_argument("--email", default=None)
    generate_parser.add_argument("--confirmation-id", default=None, dest="confirmation_id")

    return parser


def _credentials_from_args(args: argparse.Namespace) -> UnlockCredentials | None:
    """Build unlock credentials when both parts were supplied.

    Args:
        args (argparse.Namespace): Parsed CLI args.

    Returns:
        UnlockCredentials | None: Credentials, or None when incomplete.
    """
    email = getattr(args, "email", None)
    confirmation_id = getattr(args, "confirmation_id", None)
    if not email or not confirmation_id:
        return None
    return UnlockCredentials(email=email, confirmation_id=confirmation_id)


def _resolve_output_path(args: argparse.Namespace, settings: Settings) -> Path:
    if args.output_path is not None:
        return args.output_path
    return Path(settings.results_dir) / export_filename(args.image_path.name)


def _run_generate(args: argparse.Namespace, settings: Settings) -> Path:
    """Generate and persist instructions plus optional previews.

    Args:
        args (argparse.Namespace): Parsed CLI args.
        settings (Settings): Runtime settings.

    Returns:
        Path: Written instructions path.
    """
    request = run_async(
        build_request_async(
            FileImageSource(args.image_path),
            args.book_height_cm,
            args.total_pages,
            args.padding_cm,
            args.mode,
        ),
    )
    run = run_pattern(request, config=settings.pattern_config())
    text = generate_instructions(
        run.result,
        request.mode,
        require_payment=settings.require_payment,
        credentials=_credentials_from_args(args),
    )

    if args.processed_path is not None:
        save_preview(render_processed_image(run.grid), args.processed_path)
    if args.preview_path is not None:
        save_preview(render_fold_preview(run.result), args.preview_path)

    return persist_instructions(text, _resolve_output_path(args, settings))


def main() -> int:
    """Run the CLI.

    Returns:
        int: Exit code (0 for success, 1 for error).
    """
    settings = get_settings()
    configure_logging(settings=settings)

    parser = build_parser()
    args = parser.parse_args()

    if args.command != "generate":
        parser.print_help()
        return 0

    try:
        output_path = _run_generate(args, settings)
    except PackageError:
        logger.exception("Pattern generation failed")
        return 1
    except KeyboardInterrupt:
        logger.info("Pattern generation aborted by user")
        return 130
    except Exception:
        logger.exception("Unexpected error during pattern generation")
        return 1

    logger.info("Instructions written", extra={"output_path": str(output_path)})
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
