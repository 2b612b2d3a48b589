from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration merging
(defaults, persisted session and CLI overrides), project scanning,
dependency detection and review, and rendering of the assembled paste text.
"""

import json
import os
import sys
from typing import Any, Dict, List, Optional, Sequence

from pastedeps.core.pipeline.formatter import assemble_clipboard_text, format_base_file_content
from pastedeps.core.pipeline.validator import validate_config
from pastedeps.core.processing.tokenizer import count_tokens
from pastedeps.core.services.scanner import scan_project, select_files
from pastedeps.core.services.selection import (
    NO_DEPENDENCIES_HINT,
    DependencyReview,
    apply_dependency_selection,
    detect_dependencies,
    toggle_dependency,
)
from pastedeps.domain.config import (
    get_default_app_state,
    get_default_config,
    load_app_state,
    save_config,
)
from pastedeps.domain.models import FileRecord
from pastedeps.infra.fs import normalize_dir, read_text_file
from pastedeps.infra.logging import (
    LoggingConfig,
    configure_logging,
    get_default_log_path,
    get_logger,
)
from pastedeps.infra.paths import path_key, relative_to
from pastedeps.interface.cli import args as cli_args

logger = get_logger(__name__)


class _UsageError(Exception):
    """Invalid user input detected after argument parsing (exit code 2)."""


# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 2 invalid input, 1 failure, 130 interrupted).
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Resolve persisted state (defaults vs stored application state)
    state = get_default_app_state() if args.use_defaults else load_app_state()
    settings = state.get("app_settings", {})

    # 3. Logging bootstrap (console on stderr, optional rotating file)
    log_level = "DEBUG" if args.debug else settings.get("log_level", "INFO")
    log_file = get_default_log_path() if settings.get("log_to_file") else None
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=log_file))

    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    base_conf = get_default_config()
    base_conf.update(state.get("last_session", {}))

    # 4. Merge overrides and validate
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return 0

    if args.save_config:
        save_config(clean_conf)
        logger.info("Session configuration saved.")

    # 5. Pre-flight input verification
    project_root = normalize_dir(clean_conf["project_root"], os.getcwd())
    if not os.path.isdir(project_root):
        return _fail_usage(f"Project root does not exist or is not a directory: {project_root}")
    if not args.files:
        return _fail_usage("No files selected. Pass at least one file path after the options.")

    # 6. Execution phase
    logger.info(f"Targeting project root: {project_root}")
    try:
        summary = _run(args, clean_conf, project_root)
    except _UsageError as e:
        return _fail_usage(str(e))
    except KeyboardInterrupt:
        logger.warning("Operation interrupted by user.")
        print("Operation interrupted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        logger.critical(f"Unexpected failure: {e}", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    # 7. Output rendering phase
    if args.json_output:
        report = {k: v for k, v in summary.items() if k != "text"}
        print(json.dumps(report, ensure_ascii=False, indent=2))
    elif summary["output"] is None:
        sys.stdout.write(summary["text"])
        if summary["text"] and not summary["text"].endswith("\n"):
            sys.stdout.write("\n")

    logger.info(f"Estimated tokens: {summary['token_count']:,}")
    return 0

# -----------------------------------------------------------------------------
# WORKFLOW
# -----------------------------------------------------------------------------

def _run(args: Any, conf: Dict[str, Any], project_root: str) -> Dict[str, Any]:
    """Scan, select, resolve dependencies and assemble the paste text."""
    all_files = scan_project(
        project_root,
        exclude_patterns=conf["exclude_patterns"],
        respect_gitignore=conf["respect_gitignore"],
        max_file_size=conf["max_file_size"],
    )

    selected = select_files(all_files, args.files, project_root)
    if not selected:
        raise _UsageError("None of the requested files exist in the project.")

    selection = [f.path for f in selected]
    dependencies: List[str] = []

    if conf["auto_include_dependencies"]:
        review = detect_dependencies(selection, all_files, project_root)
        if review.is_empty:
            print(NO_DEPENDENCIES_HINT, file=sys.stderr)
        elif args.review_deps:
            dependencies = _review_interactively(review, project_root)
        elif args.accept_deps:
            dependencies = list(review.detected)
        else:
            _print_detected(review, project_root)
        selection = apply_dependency_selection(selection, [], dependencies)

    records = _records_for(selection, all_files)
    if not conf["include_binary_paths"]:
        records = [r for r in records if not r.is_binary]

    instructions = _load_instructions(args)
    base = format_base_file_content(records, project_root, conf["include_file_tree"])
    text = assemble_clipboard_text(base, instructions)
    token_count = count_tokens(text, conf["target_model"])

    if args.output_path:
        out_path = os.path.abspath(args.output_path)
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(text)
        logger.info(f"Output written to {out_path}")

    return {
        "selected": [relative_to(f.path, project_root) for f in selected],
        "dependencies": [relative_to(p, project_root) for p in dependencies],
        "files": [relative_to(r.path, project_root) for r in records],
        "token_count": token_count,
        "output": os.path.abspath(args.output_path) if args.output_path else None,
        "text": text,
    }


def _review_interactively(review: DependencyReview, project_root: str) -> List[str]:
    """Ask a yes/no question for every detected dependency."""
    approved: List[str] = []
    for path in review.detected:
        # Prompt on stderr so stdout carries only the assembled text
        print(f"Include {relative_to(path, project_root)}? [Y/n] ", end="", file=sys.stderr, flush=True)
        try:
            answer = input().strip().lower()
        except EOFError:
            # No more answers: decline the remaining dependencies
            print(file=sys.stderr)
            logger.warning("Input closed during dependency review; remaining files declined.")
            break
        approved = toggle_dependency(approved, path, answer in ("", "y", "yes"))
    return approved


def _print_detected(review: DependencyReview, project_root: str) -> None:
    print(f"Detected {len(review.detected)} dependencies (use --accept-deps to include):",
          file=sys.stderr)
    for path in review.detected:
        print(f"  - {relative_to(path, project_root)}", file=sys.stderr)


def _records_for(paths: Sequence[str], all_files: Sequence[FileRecord]) -> List[FileRecord]:
    index: Dict[str, FileRecord] = {}
    for record in all_files:
        index.setdefault(path_key(record.path), record)
    return [index[path_key(p)] for p in paths if path_key(p) in index]


def _load_instructions(args: Any) -> str:
    if args.instructions_file:
        content, error = read_text_file(args.instructions_file)
        if content is None:
            raise _UsageError(f"Cannot read instructions file {args.instructions_file}: {error}")
        return content
    return args.instructions or ""


def _fail_usage(msg: str) -> int:
    logger.error(msg)
    print(f"ERROR: {msg}", file=sys.stderr)
    return 2

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Perform a shallow merge of override values into the base configuration.

    Only known session keys are merged; None means "not provided".

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    keys_to_merge = [
        "project_root", "auto_include_dependencies", "include_file_tree",
        "include_binary_paths", "exclude_patterns", "respect_gitignore",
        "max_file_size", "target_model",
    ]
    for k in keys_to_merge:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
