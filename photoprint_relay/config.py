"""
PhotoPrint Relay Configuration
"""

import os
import tempfile
from pathlib import Path

from dotenv import load_dotenv

# .env next to the working directory overrides nothing already exported
load_dotenv()

# =============================================================================
# Server Configuration
# =============================================================================

PORT = int(os.environ.get('PHOTOPRINT_PORT', os.environ.get('PORT', 4000)))
HOST = os.environ.get('PHOTOPRINT_HOST', '0.0.0.0')
DEBUG = os.environ.get('PHOTOPRINT_DEBUG', 'false').lower() == 'true'

# Base64 payloads of full-resolution photos are large
MAX_CONTENT_LENGTH = 20 * 1024 * 1024

# =============================================================================
# Logging
# =============================================================================

LOG_LEVEL = os.environ.get('PHOTOPRINT_LOG_LEVEL', 'INFO').upper()
LOG_DIR = os.environ.get('PHOTOPRINT_LOG_DIR') or None

# =============================================================================
# Printing
# =============================================================================

INVENTORY_TIMEOUT = 10  # seconds
PRINT_TIMEOUT = 30  # seconds

# Scratch directory for transient print artifacts
SCRATCH_DIR = os.environ.get('PHOTOPRINT_SCRATCH_DIR', tempfile.gettempdir())

# Printed instead of the submitted image when the client has no access
PLACEHOLDER_PATH = os.environ.get(
    'PHOTOPRINT_PLACEHOLDER',
    str(Path(__file__).parent / 'assets' / 'placeholder.png'),
)

# Extensions the legacy Windows image viewer can print
IMAGE_EXTENSIONS = ('png', 'jpg', 'jpeg', 'bmp', 'gif')

# =============================================================================
# Service Discovery
# =============================================================================

DISCOVERY_ENABLED = os.environ.get('PHOTOPRINT_DISCOVERY', 'true').lower() == 'true'
SERVICE_NAME = os.environ.get('PHOTOPRINT_SERVICE_NAME', 'PhotoBooth Print Server')
SERVICE_TYPE = '_photoprint._tcp.local.'

# =============================================================================
# Troubleshooting text returned with failed jobs
# =============================================================================

TROUBLESHOOTING = {
    'printer': 'Check that the printer is switched on, online and has paper.',
    'driver': 'Check that the printer driver is installed and the printer prints a test page.',
    'spooler': 'Check that the print spooler service (Windows) or CUPS (macOS/Linux) is running.',
    'default': 'Check that a default printer is set, or pass targetPrinter explicitly.',
}
