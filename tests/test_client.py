"""
Tests for the Python client SDK.
"""

import base64
from unittest.mock import MagicMock, patch

import requests

from photoprint_relay.client import PhotoPrintClient

from .conftest import PNG_BASE64, PNG_BYTES


def response(data):
    mock = MagicMock()
    mock.json.return_value = data
    return mock


def test_list_printers():
    client = PhotoPrintClient('http://relay.local:4000/')
    payload = {'defaultPrinter': 'DNP', 'availablePrinters': ['DNP'], 'timestamp': 'now'}
    with patch('photoprint_relay.client.requests.get', return_value=response(payload)) as get:
        assert client.list_printers() == payload
    assert get.call_args.args[0] == 'http://relay.local:4000/printers'


def test_refresh_printers():
    client = PhotoPrintClient()
    with patch('photoprint_relay.client.requests.get', return_value=response({'success': True})) as get:
        assert client.refresh_printers()['success']
    assert get.call_args.args[0].endswith('/printers/refresh')


def test_print_image_body():
    client = PhotoPrintClient()
    with patch('photoprint_relay.client.requests.post',
               return_value=response({'jobId': 'x', 'success': True})) as post:
        client.print_image(PNG_BYTES, copies=2, target_printer='DNP',
                           has_access=True, template={'widthInch': 2, 'heightInch': 6})

    body = post.call_args.kwargs['json']
    assert base64.b64decode(body['data']) == PNG_BYTES
    assert body['data'] == PNG_BASE64
    assert body['copies'] == 2
    assert body['mimeType'] == 'image/png'
    assert body['targetPrinter'] == 'DNP'
    assert body['hasAccess'] is True
    assert body['template'] == {'widthInch': 2, 'heightInch': 6}
    assert post.call_args.kwargs['timeout'] >= 70


def test_print_image_omits_optional_fields():
    client = PhotoPrintClient()
    with patch('photoprint_relay.client.requests.post', return_value=response({})) as post:
        client.print_image(PNG_BYTES)
    body = post.call_args.kwargs['json']
    assert 'targetPrinter' not in body
    assert 'template' not in body
    assert body['hasAccess'] is False


def test_connection_error():
    client = PhotoPrintClient('http://nowhere:4000')
    with patch('photoprint_relay.client.requests.get',
               side_effect=requests.exceptions.ConnectionError()):
        result = client.health()
    assert result == {'success': False, 'error': 'Cannot connect to http://nowhere:4000'}
    with patch('photoprint_relay.client.requests.get',
               side_effect=requests.exceptions.ConnectionError()):
        assert not client.is_online()


def test_timeout():
    client = PhotoPrintClient()
    with patch('photoprint_relay.client.requests.get', side_effect=requests.exceptions.Timeout()):
        assert client.info() == {'success': False, 'error': 'Request timeout'}
