from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: argument parsing, configuration resolution
(defaults, settings file, CLI overrides), logging bootstrap and dispatch to
the serve, build and fetch commands.
"""

import json
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from biotree.core.analysis.markdown_renderer import render_markdown, with_markmap_options
from biotree.core.services.tree_service import generate_tree
from biotree.core.services.validator import validate_config
from biotree.domain.config import AppConfig, load_name_registry, load_settings
from biotree.domain.errors import RegistryFormatError, TreeFetchError
from biotree.domain.registry import NameRegistry
from biotree.domain.tree_models import tree_from_json
from biotree.infra.logging import LoggingConfig, configure_logging
from biotree.infra.network import fetch_tree_payload
from biotree.infra.network.common import base_url_for
from biotree.interface.cli import args as cli_args

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_SETUP = 2

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 failure, 2 invalid setup).
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Configuration resolution (defaults < settings file < CLI)
    raw_conf = _merge_config(load_settings(args.config_file), cli_args.args_to_overrides(args))
    cfg, warnings = validate_config(raw_conf)

    # 3. Logging bootstrap (the long-running server always keeps a log file)
    configure_logging(LoggingConfig.from_app_config(
        cfg, persistent=args.command == cli_args.COMMAND_SERVE
    ))

    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    # 4. Command dispatch
    if args.command == cli_args.COMMAND_FETCH:
        return _run_fetch(args, cfg)

    registry = _load_registry(cfg)
    if registry is None:
        return EXIT_SETUP

    if args.command == cli_args.COMMAND_SERVE:
        return _run_serve(cfg, registry)
    return _run_build(args, cfg, registry)

# -----------------------------------------------------------------------------
# COMMANDS
# -----------------------------------------------------------------------------

def _run_serve(cfg: AppConfig, registry: NameRegistry) -> int:
    from biotree.interface.web.server import run_server

    if not os.path.isdir(cfg.data_root):
        logger.warning(f"Data root does not exist yet: {cfg.data_root}")

    try:
        run_server(cfg, registry)
    except KeyboardInterrupt:
        logger.info("Server stopped.")
    except OSError as e:
        logger.critical(f"Error starting server: {e}")
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_FAILURE
    return EXIT_OK


def _run_build(args: Any, cfg: AppConfig, registry: NameRegistry) -> int:
    root_category = args.root_category or cfg.default_root_category

    if not os.path.isdir(cfg.data_root):
        msg = f"Data root does not exist: {cfg.data_root}"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_SETUP

    result = generate_tree(root_category, cfg, registry, save=not args.no_snapshot)

    if args.json_output:
        print(json.dumps(result.to_payload(), ensure_ascii=False, indent=2))
    elif result.markdown:
        _print_markdown(result.markdown, args.markmap)

    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return EXIT_FAILURE

    if result.snapshot_path:
        print(f"Snapshot: {result.snapshot_path}", file=sys.stderr)
    return EXIT_OK


def _run_fetch(args: Any, cfg: AppConfig) -> int:
    root_category = args.root_category or cfg.default_root_category

    try:
        payload = fetch_tree_payload(root_category, base_url=args.url or base_url_for(cfg.host, cfg.port))
    except TreeFetchError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_FAILURE

    if args.json_output:
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        tree = tree_from_json(payload.get("tree") or [])
        _print_markdown(render_markdown(tree, cfg.document_title), args.markmap)
    return EXIT_OK

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _load_registry(cfg: AppConfig) -> Optional[NameRegistry]:
    """Load the name registry, reporting failures as a setup error."""
    try:
        return load_name_registry(cfg.registry_file)
    except (OSError, RegistryFormatError) as e:
        msg = f"Cannot load name registry '{cfg.registry_file}': {e}"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return None


def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow merge of override values into the base configuration."""
    out = dict(base)
    for k, v in overrides.items():
        if v is not None:
            out[k] = v
    return out


def _print_markdown(markdown: str, markmap: bool) -> None:
    print(with_markmap_options(markdown) if markmap else markdown, end="")

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
