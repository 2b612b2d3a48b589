from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates parsed namespaces into
session configuration overrides.
"""

import argparse
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the pastedeps CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="pastedeps",
        description=(
            "Assemble selected project files, and optionally their local "
            "import dependencies, into one text blob for an LLM chat."
        ),
    )

    # --- Project and Selection ---
    p.add_argument(
        "-i", "--input",
        dest="project_root",
        default=None,
        help="Project root directory.",
    )
    p.add_argument(
        "files",
        nargs="*",
        default=[],
        help="Files to include, absolute or relative to the project root.",
    )

    # --- Dependency Detection ---
    p.add_argument(
        "--deps",
        action="store_true",
        help="Detect local dependencies of the selected files.",
    )
    deps_mode = p.add_mutually_exclusive_group()
    deps_mode.add_argument(
        "--accept-deps",
        action="store_true",
        help="Add every detected dependency to the selection.",
    )
    deps_mode.add_argument(
        "--review-deps",
        action="store_true",
        help="Confirm each detected dependency interactively.",
    )

    # --- Output Format ---
    p.add_argument(
        "--tree",
        action="store_true",
        help="Prepend a file map of the selected files.",
    )
    p.add_argument(
        "--include-binary",
        action="store_true",
        help="List selected binary files (content omitted) in the output.",
    )
    instructions = p.add_mutually_exclusive_group()
    instructions.add_argument(
        "--instructions",
        default=None,
        help="Free-text instructions appended after the files.",
    )
    instructions.add_argument(
        "--instructions-file",
        dest="instructions_file",
        default=None,
        help="Read the instructions from a text file.",
    )
    p.add_argument(
        "-o", "--output",
        dest="output_path",
        default=None,
        help="Write the result to a file instead of stdout.",
    )

    # --- Scanning Filters ---
    p.add_argument(
        "--exclude",
        dest="exclude_patterns",
        default=None,
        help="Comma-separated regexes flagging files as excluded.",
    )
    p.add_argument(
        "--no-gitignore",
        action="store_true",
        help="Ignore local .gitignore rules.",
    )
    p.add_argument(
        "--max-size",
        dest="max_file_size",
        type=int,
        default=None,
        help="Skip files larger than this many bytes.",
    )
    p.add_argument(
        "--model",
        dest="target_model",
        default=None,
        help="Model used for the token estimate.",
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the persisted session and start from defaults.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration and exit.",
    )
    p.add_argument(
        "--save-config",
        action="store_true",
        help="Persist the effective configuration as the last session.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print a JSON summary instead of the assembled text.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    overrides["project_root"] = args.project_root
    overrides["target_model"] = args.target_model
    overrides["max_file_size"] = args.max_file_size

    if args.deps or args.accept_deps or args.review_deps:
        overrides["auto_include_dependencies"] = True
    if args.tree:
        overrides["include_file_tree"] = True
    if args.include_binary:
        overrides["include_binary_paths"] = True

    if args.exclude_patterns is not None:
        overrides["exclude_patterns"] = _split_csv(args.exclude_patterns)
    if args.no_gitignore:
        overrides["respect_gitignore"] = False

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """
    Convert a comma-separated string into a list of sanitized strings.
    """
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
