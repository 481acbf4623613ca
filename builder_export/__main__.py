"""CLI entry point for builder-export.

This module acts as the central entry point for the project's CLI tools.
It delegates commands to the appropriate handlers.
"""

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from builder_export.config import get_log_level
from builder_export.core import get_logger, setup_logging

# Load environment variables from .env file
load_dotenv()

logger = get_logger("cli")


# =============================================================================
# Export Command
# =============================================================================


def _load_inputs(args: argparse.Namespace) -> dict:
    """Load the optional design analysis files named on the command line."""
    from builder_export.ir import (
        ColorPalette,
        ComponentLibrary,
        TemplateParts,
        TypographySystem,
        load_model,
    )

    sources = {
        "palette": (args.palette, ColorPalette),
        "typography": (args.typography, TypographySystem),
        "library": (args.library, ComponentLibrary),
        "template_parts": (args.template_parts, TemplateParts),
    }
    return {
        key: load_model(model, path)
        for key, (path, model) in sources.items()
        if path is not None
    }


def cmd_export(args: argparse.Namespace) -> int:
    """Handle the export command."""
    from builder_export.exporters import ExportOptions, get_exporter
    from builder_export.ir import load_component_tree
    from builder_export.output import format_export_summary

    try:
        components = load_component_tree(args.tree)
        inputs = _load_inputs(args)
        exporter = get_exporter(args.target)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Could not read input: {e}")
        return 1
    except ValidationError as e:
        logger.error(f"Invalid input: {e}")
        return 1
    except KeyError as e:
        logger.error(str(e.args[0]) if e.args else str(e))
        return 1

    # Switches left unset keep their EXPORT_VALIDATE/EXPORT_OPTIMIZE defaults
    if args.no_validate:
        inputs["validate"] = False
    if args.no_optimize:
        inputs["optimize"] = False
    options = ExportOptions(title=args.title, **inputs)
    result = exporter.export(components, options)
    text = exporter.serialize(result, args.format)

    if args.output:
        args.output.write_text(text, encoding="utf-8")
        logger.info(f"Export saved to {args.output}")
    else:
        print(text)

    for line in format_export_summary(result, components).splitlines():
        logger.info(line)
    return 0


def handle_export_command(argv: list[str]) -> int:
    """Handle export-specific arguments."""
    from builder_export.exporters import list_exporters

    parser = argparse.ArgumentParser(
        prog="builder-export export",
        description="Export an analyzed component tree to a page builder",
    )
    parser.add_argument("tree", type=Path, help="Component tree JSON file")
    parser.add_argument(
        "--target",
        "-t",
        type=str,
        required=True,
        choices=list_exporters(),
        help="Page builder to export to",
    )
    parser.add_argument("--palette", type=Path, default=None, help="Color palette JSON")
    parser.add_argument("--typography", type=Path, default=None, help="Typography system JSON")
    parser.add_argument("--library", type=Path, default=None, help="Component library JSON")
    parser.add_argument(
        "--template-parts",
        type=Path,
        default=None,
        help="Detected template parts JSON",
    )
    parser.add_argument(
        "--title",
        type=str,
        default="Exported Page",
        help="Document title (default: Exported Page)",
    )
    parser.add_argument(
        "--format",
        "-f",
        type=str,
        default="json",
        choices=["json", "native"],
        help="Output format (default: json)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Output file path (prints to stdout if not specified)",
    )
    parser.add_argument("--no-validate", action="store_true", help="Skip export validation")
    parser.add_argument("--no-optimize", action="store_true", help="Skip export optimization")

    args = parser.parse_args(argv)
    return cmd_export(args)


# =============================================================================
# Targets & Tree Commands
# =============================================================================


def cmd_targets(_argv: list[str]) -> int:
    """Handle the targets command."""
    from builder_export.exporters import list_exporters

    for name in list_exporters():
        print(name)
    return 0


def cmd_tree(argv: list[str]) -> int:
    """Handle the tree command."""
    from builder_export.ir import count_components, load_component_tree
    from builder_export.output import format_component_tree

    parser = argparse.ArgumentParser(
        prog="builder-export tree",
        description="Print an analyzed component tree",
    )
    parser.add_argument("tree", type=Path, help="Component tree JSON file")
    args = parser.parse_args(argv)

    try:
        components = load_component_tree(args.tree)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Could not read input: {e}")
        return 1
    except ValidationError as e:
        logger.error(f"Invalid input: {e}")
        return 1

    print(format_component_tree(components))
    logger.info(f"{count_components(components)} component(s)")
    return 0


# =============================================================================
# Main
# =============================================================================


def show_help() -> None:
    """Display CLI help message."""
    print("Usage: builder-export {command} [args]")
    print("\nCommands:")
    print("  export     Export a component tree to a page builder")
    print("  targets    List available page builders")
    print("  tree       Print a component tree")
    print("\nExamples:")
    print("  builder-export export page.json --target elementor -o page.elementor.json")
    print("  builder-export export page.json -t gutenberg --palette palette.json -f native")
    print("  builder-export targets")
    print("  builder-export tree page.json")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        show_help()
        return 1

    command = argv[0]
    rest_args = argv[1:]

    if command in ("-h", "--help"):
        show_help()
        return 0

    commands = {
        "export": lambda: handle_export_command(rest_args),
        "targets": lambda: cmd_targets(rest_args),
        "tree": lambda: cmd_tree(rest_args),
    }

    if command in commands:
        setup_logging(get_log_level())
        return commands[command]()

    logger.error(f"Unknown command: {command}")
    show_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
