from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema (shared options plus the serve, build and
fetch sub-commands) and translates parsed namespaces into configuration
overrides.
"""

import argparse
from typing import Any, Dict

from biotree.domain.constants import ROOT_CATEGORIES

COMMAND_SERVE = "serve"
COMMAND_BUILD = "build"
COMMAND_FETCH = "fetch"

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the BioTree CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="biotree",
        description="Browse biomechanics data-collection sessions as a mind-map.",
    )

    # --- Configuration Sources ---
    p.add_argument(
        "--config",
        dest="config_file",
        default=None,
        help="Settings JSON file (default: ./biotree.json when present).",
    )
    p.add_argument(
        "--registry",
        dest="registry_file",
        default=None,
        help="JSON file mapping categories to allowed name prefixes.",
    )
    p.add_argument(
        "--data-root",
        dest="data_root",
        default=None,
        help="Folder containing the user/activity/trial hierarchy.",
    )
    p.add_argument(
        "--public-dir",
        dest="public_dir",
        default=None,
        help="Static-content root; snapshots are written under tree_history/.",
    )

    # --- Diagnostics ---
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this file (rotated at 2 MB). serve defaults to the user data directory.",
    )

    sub = p.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    # --- serve ---
    serve = sub.add_parser(COMMAND_SERVE, help="Start the web viewer.")
    serve.add_argument("--host", default=None, help="Bind address.")
    serve.add_argument("--port", type=int, default=None, help="TCP port.")
    serve.add_argument(
        "--no-browser",
        action="store_true",
        help="Do not open the default browser.",
    )

    # --- build ---
    build = sub.add_parser(COMMAND_BUILD, help="Build the tree locally and print it.")
    _add_output_options(build)
    build.add_argument(
        "--no-snapshot",
        action="store_true",
        help="Do not write the Markdown snapshot to the history folder.",
    )

    # --- fetch ---
    fetch = sub.add_parser(COMMAND_FETCH, help="Request the tree from a running server.")
    _add_output_options(fetch)
    fetch.add_argument(
        "--url",
        default=None,
        help="Server base URL (default: built from the configured host and port).",
    )

    return p


def _add_output_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--by",
        dest="root_category",
        choices=ROOT_CATEGORIES,
        default=None,
        help="Top-level ordering of the tree.",
    )
    parser.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the {error_msg, tree} JSON envelope instead of Markdown.",
    )
    parser.add_argument(
        "--markmap",
        action="store_true",
        help="Prefix the Markdown with markmap front matter.",
    )

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Only values explicitly given on the command line are returned.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    for key in ("registry_file", "data_root", "public_dir", "log_file"):
        value = getattr(args, key, None)
        if value is not None:
            overrides[key] = value

    if args.debug:
        overrides["log_level"] = "DEBUG"

    if getattr(args, "host", None) is not None:
        overrides["host"] = args.host
    if getattr(args, "port", None) is not None:
        overrides["port"] = args.port
    if getattr(args, "no_browser", False):
        overrides["open_browser"] = False

    return overrides
