"""
PhotoPrint Relay - Main Application
===================================

LAN print relay for the PhotoBooth iPad app.

Run: python -m photoprint_relay
"""

import asyncio
import base64
import binascii
import platform
import socket
import sys
from datetime import datetime
from typing import Optional

from flask import Flask, current_app, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import RequestEntityTooLarge

from . import __version__
from .config import (
    DEBUG,
    DISCOVERY_ENABLED,
    HOST,
    LOG_DIR,
    LOG_LEVEL,
    MAX_CONTENT_LENGTH,
    PORT,
    SERVICE_NAME,
)
from .discovery import ServiceAdvertiser, get_local_ips
from .errors import PhotoPrintError
from .handlers import WINDOWS_CHAIN, POSIX_CHAIN
from .logging_config import get_logger, setup_logging
from .models import MediaKind, PageSize, PrintJob
from .orchestrator import JobOrchestrator

logger = get_logger(__name__)

EXTENSION_KEY = 'photoprint'
ADVERTISER_KEY = 'photoprint_advertiser'

BANNER = r"""
            _      _______      ________
      /\   | |    |_   _\ \    / /  ____|
     /  \  | |      | |  \ \  / /| |__
    / /\ \ | |      | |   \ \/ / |  __|
   / ____ \| |____ _| |_   \  /  | |____
  /_/    \_\______|_____|   \/   |______|
"""

# =============================================================================
# Application Setup
# =============================================================================


def create_app(
    orchestrator: Optional[JobOrchestrator] = None,
    advertiser: Optional[ServiceAdvertiser] = None,
) -> Flask:
    """
    Application factory.

    Args:
        orchestrator: Job orchestrator owning the printer inventory
        advertiser: mDNS advertiser re-published after a printer refresh
    """
    app = Flask(__name__)
    app.config['MAX_CONTENT_LENGTH'] = MAX_CONTENT_LENGTH
    CORS(app, origins='*', send_wildcard=True)

    app.extensions[EXTENSION_KEY] = orchestrator or JobOrchestrator()
    app.extensions[ADVERTISER_KEY] = advertiser

    app.before_request(_log_request)
    app.register_error_handler(RequestEntityTooLarge, _too_large)

    app.add_url_rule('/health', view_func=health, methods=['GET'])
    app.add_url_rule('/info', view_func=info, methods=['GET'])
    app.add_url_rule('/printers', view_func=list_printers, methods=['GET'])
    app.add_url_rule('/printers/refresh', view_func=refresh_printers, methods=['GET'])
    app.add_url_rule('/print', view_func=print_image, methods=['POST'])

    return app


def _orchestrator() -> JobOrchestrator:
    return current_app.extensions[EXTENSION_KEY]


def _log_request():
    logger.debug('%s %s from %s', request.method, request.path, request.remote_addr)


def _too_large(e):
    return jsonify({'error': 'Request body too large', 'success': False}), 413


# =============================================================================
# Health & Info Endpoints
# =============================================================================

def health():
    """Liveness check with the current default printer."""
    snapshot = _orchestrator().inventory.snapshot
    return jsonify({
        'status': 'OK',
        'defaultPrinter': snapshot.default_printer_name or 'default',
        'timestamp': datetime.now().isoformat(),
    })


def info():
    """Static description of the service."""
    windows = _orchestrator().inventory.windows
    return jsonify({
        'service': SERVICE_NAME,
        'version': __version__,
        'hostname': socket.gethostname(),
        'platform': platform.system(),
        'python': sys.version.split()[0],
        'endpoints': {
            'health': 'GET /health',
            'info': 'GET /info',
            'printers': 'GET /printers',
            'refresh': 'GET /printers/refresh',
            'print': 'POST /print',
        },
        'capabilities': {
            'mimeTypes': ['image/png', 'image/jpeg'],
            'copies': True,
            'printerSelection': True,
            'templates': True,
            'printMethods': list(WINDOWS_CHAIN if windows else POSIX_CHAIN),
        },
    })


# =============================================================================
# Printer Inventory API
# =============================================================================

def list_printers():
    """Last known default printer and installed printers."""
    return jsonify(_orchestrator().inventory.snapshot.to_dict())


async def refresh_printers():
    """Re-query the OS printer list."""
    inventory = _orchestrator().inventory
    try:
        snapshot = await inventory.refresh(strict=True)
    except PhotoPrintError as e:
        logger.error('Failed to refresh printers: %s', e)
        return jsonify({'error': 'Failed to refresh printers', 'success': False}), 500

    advertiser = current_app.extensions.get(ADVERTISER_KEY)
    if advertiser is not None:
        try:
            advertiser.update(snapshot)
        except Exception as e:
            logger.warning('Failed to update service record: %s', e)

    data = snapshot.to_dict()
    data['success'] = True
    return jsonify(data)


# =============================================================================
# Print API
# =============================================================================

def _parse_copies(value) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value)
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, int) and value >= 1:
        return value
    return None


def _decode_payload(data: str) -> bytes:
    # Accept data URLs as well as bare base64
    if data.startswith('data:') and ',' in data:
        data = data.split(',', 1)[1]
    # Whitespace from line-wrapped encoders is fine; anything else outside
    # the alphabet is rejected
    data = ''.join(data.split())
    return base64.b64decode(data, validate=True)


async def print_image():
    """Submit a base64 image for printing."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}

    encoded = data.get('data')
    if not encoded or not isinstance(encoded, str):
        return jsonify({'error': 'Missing base64 data'}), 400

    copies = _parse_copies(data.get('copies', 1))
    if copies is None:
        return jsonify({'error': 'copies must be a positive integer'}), 400

    try:
        payload = _decode_payload(encoded)
    except (binascii.Error, ValueError):
        return jsonify({'error': 'Invalid base64 data'}), 400
    if not payload:
        return jsonify({'error': 'Missing base64 data'}), 400

    target_printer = data.get('targetPrinter')
    job = PrintJob(
        payload=payload,
        copies=copies,
        media_kind=MediaKind.from_mime_type(data.get('mimeType', 'image/png')),
        requested_printer=target_printer if isinstance(target_printer, str) else None,
        restricted_mode=data.get('hasAccess', False) is not True,
        target_page_size=PageSize.from_dict(data.get('template')),
    )

    try:
        outcome = await _orchestrator().submit(job)
    except OSError as e:
        logger.error('[%s] Print error: %s', job.id, e)
        return jsonify({
            'error': 'Could not prepare print file',
            'jobId': job.id,
            'success': False,
        }), 500

    return jsonify(outcome.to_dict()), (200 if outcome.success else 500)


# =============================================================================
# Main
# =============================================================================

def log_banner(log=None):
    """Log the startup banner one line at a time at INFO."""
    log = log or logger
    for line in BANNER.strip('\n').splitlines():
        log.info('%s', line, extra={'banner': True})
    log.info('PhotoPrint Relay %s', __version__)


def main():
    """Run the service."""
    setup_logging(LOG_LEVEL, LOG_DIR)

    orchestrator = JobOrchestrator()
    snapshot = asyncio.run(orchestrator.inventory.refresh())

    advertiser = None
    if DISCOVERY_ENABLED:
        advertiser = ServiceAdvertiser(PORT)
        try:
            advertiser.start(snapshot)
        except Exception as e:
            logger.warning('Service discovery unavailable: %s', e)
            advertiser = None

    app = create_app(orchestrator, advertiser)

    log_banner()
    addresses = get_local_ips()
    if addresses:
        logger.info('Print server listening on:')
        for addr in addresses:
            logger.info('  http://%s:%d', addr, PORT)
    else:
        logger.info('Print server listening on http://localhost:%d', PORT)

    try:
        app.run(host=HOST, port=PORT, debug=DEBUG, use_reloader=False)
    finally:
        if advertiser is not None:
            advertiser.stop()


if __name__ == '__main__':
    main()
