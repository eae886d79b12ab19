# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from blocksettings.adapters.csv_file import DELIMITERS, CsvOptions
from blocksettings.app import (
    create_course,
    describe_course_blocks,
    install_block_type,
    list_addable_block_types,
    upload_block_settings,
)
from blocksettings.config import ConfigurationError, configure_logging
from blocksettings.domain.errors import NotFoundError, SetupError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

_VALIDATION_ERRORS = (SetupError, NotFoundError, ConfigurationError, ValueError)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Bulk-manage course block settings")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log per-row outcomes and adapter activity",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    upload = subparsers.add_parser("upload", help="Apply a block settings CSV file")
    upload.add_argument("file", type=str, help="CSV file: operation,course,block,region,weight")
    upload.add_argument(
        "--encoding",
        type=str,
        default=CsvOptions().encoding,
        help="File encoding (default: %(default)s)",
    )
    upload.add_argument(
        "--delimiter",
        choices=sorted(DELIMITERS),
        default=CsvOptions().delimiter,
        help="Field delimiter (default: %(default)s)",
    )

    show = subparsers.add_parser("show", help="Show the blocks on a course page")
    show.add_argument("shortname", type=str, help="Course shortname")

    addable = subparsers.add_parser("addable", help="List block types that can still be added")
    addable.add_argument("shortname", type=str, help="Course shortname")

    course = subparsers.add_parser("course", help="Course management commands")
    course_sub = course.add_subparsers(dest="course_command", required=True)
    course_create = course_sub.add_parser("create", help="Register a course")
    course_create.add_argument("--shortname", type=str, required=True, help="Course shortname")
    course_create.add_argument("--fullname", type=str, default="", help="Course full name")

    block_type = subparsers.add_parser("block-type", help="Block type management commands")
    block_type_sub = block_type.add_subparsers(dest="block_type_command", required=True)
    block_type_add = block_type_sub.add_parser("add", help="Register an installed block type")
    block_type_add.add_argument("name", type=str, help="Block type name, e.g. calendar_month")
    block_type_add.add_argument("--title", type=str, default="", help="Display title")
    block_type_add.add_argument(
        "--multiple",
        action="store_true",
        help="Allow more than one instance per course",
    )
    block_type_add.add_argument(
        "--hidden",
        action="store_true",
        help="Register the block type as disabled",
    )

    return parser.parse_args(list(argv))


def _upload(args: argparse.Namespace) -> None:
    report = upload_block_settings(
        args.file,
        options=CsvOptions(encoding=args.encoding, delimiter=args.delimiter),
    )
    for line in report.lines:
        print(line.message)
    print(report.summary())


def _show(args: argparse.Namespace) -> None:
    for region, placements in describe_course_blocks(args.shortname).items():
        print(f"{region}:")
        if not placements:
            print("  (no blocks)")
        for placement in placements:
            flags = " [protected]" if placement.protected else ""
            hidden = " [hidden]" if not placement.visible else ""
            print(
                f"  {placement.weight:>3}  {placement.block_name} "
                f"(id {placement.id}){flags}{hidden}"
            )


def _addable(args: argparse.Namespace) -> None:
    block_types = list_addable_block_types(args.shortname)
    if not block_types:
        print("No block types can be added.")
    for item in block_types:
        print(f"{item.name}\t{item.display_title}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        if parsed_args.command == "upload":
            _upload(parsed_args)
        elif parsed_args.command == "show":
            _show(parsed_args)
        elif parsed_args.command == "addable":
            _addable(parsed_args)
        elif parsed_args.command == "course" and parsed_args.course_command == "create":
            course = create_course(
                shortname=parsed_args.shortname,
                fullname=parsed_args.fullname,
            )
            print(f"Created course {course.shortname} (id {course.id})")
        elif parsed_args.command == "block-type" and parsed_args.block_type_command == "add":
            block_type = install_block_type(
                name=parsed_args.name,
                title=parsed_args.title,
                allow_multiple=parsed_args.multiple,
                visible=not parsed_args.hidden,
            )
            print(f"Installed block type {block_type.name} (id {block_type.id})")
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except _VALIDATION_ERRORS:
        log.exception("CLI validation error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
