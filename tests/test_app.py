"""
Tests for the HTTP surface.
"""

import logging
import uuid
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from photoprint_relay.app import BANNER, create_app, log_banner
from photoprint_relay.errors import CommandError
from photoprint_relay.logging_config import LevelTagFormatter
from photoprint_relay.models import PageSize
from photoprint_relay.printing.commands import CommandResult

from .conftest import PNG_BASE64, PNG_BYTES

RUN = 'photoprint_relay.printing.inventory.run_command'


@pytest.fixture
def advertiser():
    return MagicMock()


@pytest.fixture
def app(orchestrator, advertiser):
    app = create_app(orchestrator, advertiser)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


class TestHealthAndInfo:

    def test_health(self, client):
        response = client.get('/health')
        assert response.status_code == 200
        assert response.json['status'] == 'OK'
        assert response.json['defaultPrinter'] == 'Office_Laser'

    def test_info(self, client):
        data = client.get('/info').json
        assert data['service'] == 'PhotoBooth Print Server'
        assert data['capabilities']['mimeTypes'] == ['image/png', 'image/jpeg']
        assert data['capabilities']['printMethods'] == ['lp']
        assert 'print' in data['endpoints']

    def test_cors(self, client):
        response = client.get('/health', headers={'Origin': 'http://ipad.local'})
        assert response.headers['Access-Control-Allow-Origin'] == '*'


class TestPrinters:

    def test_list(self, client):
        data = client.get('/printers').json
        assert data['defaultPrinter'] == 'Office_Laser'
        assert data['availablePrinters'] == ['Office_Laser', 'DNP_DS620']
        assert 'timestamp' in data

    def test_refresh(self, client, orchestrator, advertiser):
        outputs = [
            CommandResult(0, 'system default destination: DNP_DS620\n', ''),
            CommandResult(0, 'printer DNP_DS620 is idle.\n', ''),
        ]
        with patch(RUN, AsyncMock(side_effect=outputs)):
            response = client.get('/printers/refresh')

        assert response.status_code == 200
        assert response.json['success'] is True
        assert response.json['defaultPrinter'] == 'DNP_DS620'
        assert response.json['availablePrinters'] == ['DNP_DS620']
        assert orchestrator.inventory.snapshot.known_printers == ('DNP_DS620',)
        advertiser.update.assert_called_once_with(orchestrator.inventory.snapshot)

    def test_refresh_failure_keeps_inventory(self, client, orchestrator, advertiser):
        before = orchestrator.inventory.snapshot
        with patch(RUN, AsyncMock(side_effect=CommandError('lpstat', 1, 'scheduler not running'))):
            response = client.get('/printers/refresh')

        assert response.status_code == 500
        assert response.json == {'error': 'Failed to refresh printers', 'success': False}
        assert orchestrator.inventory.snapshot is before
        assert client.get('/printers').json['availablePrinters'] == ['Office_Laser', 'DNP_DS620']
        advertiser.update.assert_not_called()

    def test_refresh_survives_advertiser_error(self, client, advertiser):
        advertiser.update.side_effect = OSError('mdns down')
        outputs = [CommandResult(0, '', ''), CommandResult(0, '', '')]
        with patch(RUN, AsyncMock(side_effect=outputs)):
            response = client.get('/printers/refresh')
        assert response.status_code == 200


class TestPrint:

    def test_print_default_printer(self, client, dispatcher):
        response = client.post('/print', json={'copies': 1, 'mimeType': 'image/png', 'data': PNG_BASE64})

        assert response.status_code == 200
        data = response.json
        assert uuid.UUID(data['jobId'])
        assert data == {'jobId': data['jobId'], 'copies': 1, 'printer': 'Office_Laser', 'success': True}
        assert dispatcher.calls[0]['content'] == PNG_BYTES
        assert not dispatcher.calls[0]['path'].exists()

    def test_print_with_no_printer_detected(self, client, orchestrator, dispatcher):
        from photoprint_relay.models import PrinterInventorySnapshot
        orchestrator.inventory.replace(PrinterInventorySnapshot())

        data = client.post('/print', json={'copies': 1, 'mimeType': 'image/png', 'data': PNG_BASE64}).json

        assert data['printer'] == 'default'
        assert data['copies'] == 1
        assert data['success'] is True
        assert dispatcher.calls[0]['printer_name'] is None

    def test_target_printer(self, client, dispatcher):
        data = client.post('/print', json={'data': PNG_BASE64, 'targetPrinter': 'Unlisted'}).json
        assert data['printer'] == 'Unlisted'
        assert dispatcher.calls[0]['printer_name'] == 'Unlisted'

    def test_defaults(self, client, dispatcher):
        client.post('/print', json={'data': PNG_BASE64})
        call = dispatcher.calls[0]
        assert call['copies'] == 1
        assert call['path'].suffix == '.png'
        assert call['restricted_mode'] is True
        assert call['target_page_size'] is None

    def test_access_and_template(self, client, dispatcher):
        client.post('/print', json={
            'data': PNG_BASE64,
            'mimeType': 'image/jpeg',
            'copies': 3,
            'hasAccess': True,
            'template': {'widthInch': 2, 'heightInch': 6},
        })
        call = dispatcher.calls[0]
        assert call['restricted_mode'] is False
        assert call['copies'] == 3
        assert call['path'].suffix == '.jpg'
        assert call['target_page_size'] == PageSize(2, 6)

    def test_data_url_accepted(self, client, dispatcher):
        client.post('/print', json={'data': f'data:image/png;base64,{PNG_BASE64}'})
        assert dispatcher.calls[0]['content'] == PNG_BYTES

    @pytest.mark.parametrize('body', [
        {'data': ''}, {}, {'data': 123}, {'copies': 2}, ['not', 'an', 'object'], 'x', 42,
    ])
    def test_missing_data(self, client, dispatcher, body):
        response = client.post('/print', json=body)
        assert response.status_code == 400
        assert response.json == {'error': 'Missing base64 data'}
        assert dispatcher.calls == []

    def test_non_json_body(self, client):
        response = client.post('/print', data='hello', content_type='text/plain')
        assert response.status_code == 400

    def test_invalid_base64(self, client, dispatcher):
        response = client.post('/print', json={'data': 'abc'})
        assert response.status_code == 400
        assert response.json['error'] == 'Invalid base64 data'
        assert dispatcher.calls == []

    @pytest.mark.parametrize('encoded', ['@@@@not base64!!', f'{PNG_BASE64[:8]}*{PNG_BASE64[8:]}'])
    def test_non_alphabet_characters_rejected(self, client, dispatcher, encoded):
        response = client.post('/print', json={'data': encoded})
        assert response.status_code == 400
        assert response.json['error'] == 'Invalid base64 data'
        assert dispatcher.calls == []

    def test_wrapped_base64_accepted(self, client, dispatcher):
        wrapped = '\n'.join(PNG_BASE64[i:i + 20] for i in range(0, len(PNG_BASE64), 20))
        response = client.post('/print', json={'data': wrapped})
        assert response.status_code == 200
        assert dispatcher.calls[0]['content'] == PNG_BYTES

    @pytest.mark.parametrize('copies', [0, -2, 'many', True, 1.5])
    def test_invalid_copies(self, client, copies):
        response = client.post('/print', json={'data': PNG_BASE64, 'copies': copies})
        assert response.status_code == 400

    def test_dispatch_failure(self, client, dispatcher):
        dispatcher.fail = True
        response = client.post('/print', json={'data': PNG_BASE64})

        assert response.status_code == 500
        data = response.json
        assert data['success'] is False
        assert data['printer'] == 'Office_Laser'
        assert uuid.UUID(data['jobId'])
        assert data['error']
        assert 'troubleshooting' in data
        assert not dispatcher.calls[0]['path'].exists()

    def test_unwritable_scratch_dir(self, client, orchestrator, tmp_path):
        orchestrator.scratch_dir = str(tmp_path / 'missing')
        response = client.post('/print', json={'data': PNG_BASE64})
        assert response.status_code == 500
        assert response.json['success'] is False


class TestBanner:

    def test_banner_logged_at_info(self, caplog):
        with caplog.at_level(logging.INFO, logger='photoprint_relay'):
            log_banner()
        lines = [r.getMessage() for r in caplog.records if getattr(r, 'banner', False)]
        assert lines == BANNER.strip('\n').splitlines()
        assert all(r.levelno == logging.INFO for r in caplog.records)
        assert any('PhotoPrint Relay' in r.getMessage() for r in caplog.records)

    def test_banner_tinted_on_console(self):
        record = logging.LogRecord('photoprint_relay.app', logging.INFO, __file__, 1,
                                   '%s', ('  /_/',), None)
        record.banner = True
        assert LevelTagFormatter(colour=True).format(record) == '\x1b[38;2;2;197;255m  /_/\x1b[0m'
        assert LevelTagFormatter(colour=False).format(record) == '  /_/'
