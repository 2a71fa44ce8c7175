"""
PhotoPrint Relay
================

Zero-install LAN print server for the PhotoBooth iPad app.

Receives base64 images over HTTP and hands them to the host's native
print path, advertising itself via mDNS so clients find it without
manual IP configuration.

Usage:
    python -m photoprint_relay

API Endpoints:
    GET  /printers          - Default printer and installed printers
    GET  /printers/refresh  - Re-query the OS printer list
    POST /print             - Submit a base64 image
    GET  /health            - Liveness check
    GET  /info              - Service capabilities
"""

__version__ = '1.0.0'
__author__ = 'Alive Magic Print'
