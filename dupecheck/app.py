#!/usr/bin/env python3
"""
Image Duplicate Checker - Web API
=================================
A local JSON API used by a front end (editor extension, browser page) to
check an image for duplicates, follow progress, and open or copy results.

Run with: python -m dupecheck server
Or: dupecheck-server

Options:
    -q, --quiet     Only log errors
    -v, --verbose   Log every request
    -p, --port      Port to listen on (default: 5000)
    --host          Interface to bind (default: 127.0.0.1)
"""

import argparse
import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .api import api
from .config import DEFAULT_PORT


# Logging levels
LOG_QUIET = 0    # Errors only
LOG_MINIMAL = 1  # Startup info and warnings (default)
LOG_VERBOSE = 2  # Every request

_logger = logging.getLogger(__name__)


def _register_error_handlers(app: Flask) -> None:
    """Answer every failed request with a JSON body instead of an HTML page."""

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({'error': error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        _logger.exception("Unhandled error while serving request")
        return jsonify({'error': f'Internal error: {error}'}), 500


def create_app(log_level: int = LOG_MINIMAL) -> Flask:
    """
    Build the Flask application serving the duplicate check API.

    Args:
        log_level: LOG_QUIET, LOG_MINIMAL or LOG_VERBOSE; controls how much
            of werkzeug's request logging is shown
    """
    app = Flask(__name__)
    app.json.sort_keys = False

    if log_level < LOG_VERBOSE:
        logging.getLogger('werkzeug').setLevel(
            logging.ERROR if log_level == LOG_QUIET else logging.WARNING
        )

    app.register_blueprint(api)
    _register_error_handlers(app)
    return app


def suppress_flask_banner():
    """Hide the development server banner printed by ``app.run``."""
    try:
        import flask.cli
        flask.cli.show_server_banner = lambda *args, **kwargs: None
    except (ImportError, AttributeError):
        pass


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Image Duplicate Checker - Web API',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument('-q', '--quiet', action='store_true', help='Only log errors')
    verbosity.add_argument('-v', '--verbose', action='store_true', help='Log every request')
    parser.add_argument(
        '-p', '--port',
        type=int,
        default=DEFAULT_PORT,
        help=f'Port to listen on (default: {DEFAULT_PORT})'
    )
    parser.add_argument(
        '--host',
        default='127.0.0.1',
        help='Interface to bind (default: 127.0.0.1, local only)'
    )
    return parser


def main(argv=None):
    """Main entry point for the web API."""
    args = create_parser().parse_args(argv)

    if args.quiet:
        log_level = LOG_QUIET
    elif args.verbose:
        log_level = LOG_VERBOSE
    else:
        log_level = LOG_MINIMAL

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else
        logging.ERROR if args.quiet else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    if log_level < LOG_VERBOSE:
        suppress_flask_banner()

    app = create_app(log_level)
    _logger.info(f"Duplicate check API listening on http://{args.host}:{args.port}")

    try:
        app.run(
            host=args.host,
            port=args.port,
            debug=False,
            threaded=True,
            use_reloader=False
        )
    except KeyboardInterrupt:
        _logger.info("Server stopped")


if __name__ == '__main__':
    main()
