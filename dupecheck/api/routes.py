"""
Flask routes for the Image Duplicate Checker GUI.

Contains all API endpoints for the web interface.
"""

from __future__ import annotations

import os
import logging
from datetime import datetime

from flask import Blueprint, jsonify, request, send_file

from ..state import check_state
from ..scanner import describe_record
from ..user_config import get_user_config
from ..utils import validators
from ..utils.platform import PlatformActionError, open_file, copy_to_clipboard
from .runner import CheckRunner

# Create blueprint for routes
api = Blueprint('api', __name__)

# Module logger
_logger = logging.getLogger(__name__)


# =============================================================================
# Route Handlers
# =============================================================================

@api.route('/api/check', methods=['POST'])
def api_check():
    """Start a duplicate check in the background."""
    data = request.get_json(silent=True)
    if not data:
        return jsonify({'error': 'Request body required'}), 400

    path = str(data.get('path', '')).strip()
    workspace = str(data.get('workspace', '')).strip()
    search_paths = data.get('searchPaths')
    search_mode = data.get('searchMode')

    is_valid, error = validators.validate_check_params(
        path=path,
        workspace=workspace,
        search_paths=search_paths,
        search_mode=search_mode,
    )
    if not is_valid:
        return jsonify({'error': error}), 400

    config = get_user_config().to_scan_configuration(
        workspace_roots=[workspace],
        search_paths=search_paths,
        search_mode=search_mode,
    )

    if not check_state.try_start(path, workspace):
        return jsonify({'error': 'A check is already running'}), 409

    CheckRunner(check_state, path, config).start()
    return jsonify({'status': 'started'})


@api.route('/api/status')
def api_status():
    """Return the current check status, progress messages and outcome."""
    return jsonify(check_state.to_status_dict(describe=describe_record))


@api.route('/api/ping')
def api_ping():
    """Simple endpoint for connection monitoring."""
    return jsonify({'status': 'ok', 'time': datetime.now().isoformat()})


def _requested_duplicate():
    """Look up the duplicate named in the request body; returns (record, error_response)."""
    data = request.get_json(silent=True) or {}
    path = str(data.get('path', '')).strip()
    if not path:
        return None, (jsonify({'error': 'No path specified'}), 400)

    # Only act on paths reported by the last check
    record = check_state.find_duplicate(path)
    if record is None:
        _logger.warning(f"Blocked action on path not in results: {path}")
        return None, (jsonify({'error': 'Path is not in the current results'}), 403)
    return record, None


@api.route('/api/open', methods=['POST'])
def api_open():
    """Open a duplicate with the system's default application."""
    record, error = _requested_duplicate()
    if error:
        return error

    try:
        open_file(record.absolute_path)
    except FileNotFoundError:
        return jsonify({'error': 'File not found (may have been deleted)'}), 404
    except PlatformActionError as e:
        return jsonify({'error': str(e)}), 500

    return jsonify({'status': 'opened', 'path': record.absolute_path})


@api.route('/api/copy', methods=['POST'])
def api_copy():
    """Copy a duplicate's absolute path to the clipboard."""
    record, error = _requested_duplicate()
    if error:
        return error

    try:
        copy_to_clipboard(record.absolute_path)
    except PlatformActionError as e:
        return jsonify({'error': str(e)}), 500

    return jsonify({'status': 'copied', 'path': record.absolute_path})


@api.route('/api/image')
def api_image():
    """Serve an image file for preview.

    Security: Only serves files within the workspace of the current check
    to prevent path traversal attacks.
    """
    path = request.args.get('path', '').strip()

    if not path:
        return jsonify({'error': 'No path specified'}), 400

    if not check_state.workspace:
        return jsonify({'error': 'No active check'}), 403

    if not validators.validate_path_in_directory(path, check_state.workspace):
        _logger.warning(f"Blocked access to file outside workspace: {path}")
        return jsonify({'error': 'Access denied: file outside workspace'}), 403

    if not os.path.isfile(path):
        return jsonify({'error': 'File not found'}), 404

    try:
        return send_file(path)
    except OSError as e:
        _logger.error(f"Error serving file {path}: {e}")
        return jsonify({'error': f'Error serving file: {e}'}), 500
