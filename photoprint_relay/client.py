"""
PhotoPrint Relay Client
=======================

Python SDK for talking to a running relay.

Usage:
    from photoprint_relay.client import PhotoPrintClient

    client = PhotoPrintClient('http://192.168.1.20:4000')

    # Printers
    printers = client.list_printers()
    client.refresh_printers()

    # Print image
    with open('photo.png', 'rb') as f:
        result = client.print_image(f.read(), copies=2, target_printer='DNP_DS620')
"""

import base64
from typing import Any, Dict, Optional

import requests


class PhotoPrintClient:
    """Client for PhotoPrint Relay."""

    def __init__(self, base_url: str = 'http://localhost:4000', timeout: float = 30):
        """
        Initialize client.

        Args:
            base_url: Base URL of the relay
            timeout: Request timeout in seconds; printing waits longer
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

    def _request(self, method: str, endpoint: str, data: Dict = None,
                 timeout: Optional[float] = None) -> Dict[str, Any]:
        """Make API request."""
        url = f'{self.base_url}{endpoint}'
        timeout = timeout or self.timeout

        try:
            if method == 'GET':
                response = requests.get(url, timeout=timeout)
            elif method == 'POST':
                response = requests.post(url, json=data, timeout=timeout)
            else:
                raise ValueError(f'Unknown method: {method}')

            return response.json()

        except requests.exceptions.Timeout:
            return {'success': False, 'error': 'Request timeout'}
        except requests.exceptions.ConnectionError:
            return {'success': False, 'error': f'Cannot connect to {self.base_url}'}
        except ValueError as e:
            return {'success': False, 'error': f'Invalid response: {e}'}

    # =========================================================================
    # Health
    # =========================================================================

    def health(self) -> Dict[str, Any]:
        """Liveness and current default printer."""
        return self._request('GET', '/health')

    def info(self) -> Dict[str, Any]:
        """Service version and capabilities."""
        return self._request('GET', '/info')

    def is_online(self) -> bool:
        """Check if the relay answers."""
        return self.health().get('status') == 'OK'

    # =========================================================================
    # Printers
    # =========================================================================

    def list_printers(self) -> Dict[str, Any]:
        """Default printer and installed printers as last seen by the relay."""
        return self._request('GET', '/printers')

    def refresh_printers(self) -> Dict[str, Any]:
        """Ask the relay to re-query the OS printer list."""
        return self._request('GET', '/printers/refresh')

    # =========================================================================
    # Printing
    # =========================================================================

    def print_image(
        self,
        image_data: bytes,
        copies: int = 1,
        mime_type: str = 'image/png',
        target_printer: Optional[str] = None,
        has_access: bool = False,
        template: Optional[Dict[str, float]] = None,
    ) -> Dict[str, Any]:
        """
        Submit an image.

        Args:
            image_data: Raw PNG or JPEG bytes
            copies: Number of copies
            mime_type: 'image/png' or 'image/jpeg'
            target_printer: Printer name; the relay's default when omitted
            has_access: False prints the relay's placeholder image once
            template: Page size hint, ``{'widthInch': 2, 'heightInch': 6}``

        Returns:
            Relay response with jobId, printer and success
        """
        data = {
            'copies': copies,
            'mimeType': mime_type,
            'data': base64.b64encode(image_data).decode('ascii'),
            'hasAccess': has_access,
        }
        if target_printer:
            data['targetPrinter'] = target_printer
        if template:
            data['template'] = template

        # Windows may print copy after copy, each with its own 30s budget
        timeout = max(self.timeout, 30 * copies + 10)
        return self._request('POST', '/print', data, timeout=timeout)
