from __future__ import annotations

"""
Flask web application serving the session tree and its mind-map viewer.

Routes:
    GET /                        Viewer page.
    GET /get-tree                Session tree as JSON (writes a snapshot).
    GET /tree_history/<file>     Previously written snapshots.
"""

import logging
from typing import Optional

from flask import Flask, jsonify, render_template, request, send_from_directory

from biotree.core.services.tree_service import generate_tree
from biotree.domain.config import AppConfig
from biotree.domain.registry import NameRegistry
from biotree.domain.result_models import FAILURE_VALIDATION, TreeResult
from biotree.infra.fs import DirectoryLister, FileWriter

logger = logging.getLogger(__name__)

QUERY_PARAM = "startingClassName"


def create_app(
        cfg: AppConfig,
        registry: NameRegistry,
        *,
        lister: Optional[DirectoryLister] = None,
        writer: Optional[FileWriter] = None,
) -> Flask:
    """
    Build the Flask application.

    Args:
        cfg: Runtime configuration.
        registry: Name registry loaded at startup.
        lister: Directory listing capability (local disk by default).
        writer: File writing capability (local disk by default).
    """
    app = Flask(__name__)
    app.config["BIOTREE_CONFIG"] = cfg

    @app.route("/")
    def index():
        """Main page with the generator controls and the mind-map."""
        return render_template("index.html", default_root_category=cfg.default_root_category)

    @app.route("/get-tree")
    def get_tree():
        """API endpoint returning the session tree in the requested ordering."""
        root_category = request.args.get(QUERY_PARAM) or cfg.default_root_category
        result = generate_tree(root_category, cfg, registry, lister=lister, writer=writer)
        return jsonify(result.to_payload()), status_for(result)

    @app.route("/tree_history/<path:filename>")
    def tree_history(filename: str):
        """Serve a stored Markdown snapshot."""
        return send_from_directory(cfg.history_dir, filename, mimetype="text/markdown")

    logger.info(f"Static files served from {app.static_folder}.")
    return app


def status_for(result: TreeResult) -> int:
    """Map a tree result to its HTTP status code."""
    if result.ok:
        return 200
    if result.failure == FAILURE_VALIDATION:
        return 400
    return 500
