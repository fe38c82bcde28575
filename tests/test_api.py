import pytest

from flight_tracker.app import create_app
from tests.conftest import make_payload, make_response


@pytest.fixture
def client(service):
    app = create_app(lookup_service=service)
    app.config['TESTING'] = True
    return app.test_client()


def test_missing_code_is_bad_request(client, session):
    resp = client.get('/api/flights')
    assert resp.status_code == 400
    assert resp.get_json() == {'error': {'message': 'Flight IATA code is required'}}
    session.get.assert_not_called()


def test_blank_code_is_bad_request(client):
    resp = client.get('/api/flights?flight_iata=%20%20')
    assert resp.status_code == 400


def test_mock_flag_returns_synthetic_body(client, session):
    resp = client.get('/api/flights?flight_iata=UA102&mock=true')

    assert resp.status_code == 200
    body = resp.get_json()
    assert body['pagination']['total'] == 1
    assert body['data'][0]['departure']['iata'] == 'EWR'
    session.get.assert_not_called()


def test_live_lookup(client, session):
    session.get.return_value = make_response(payload=make_payload())

    resp = client.get('/api/flights?flight_iata=LH430')

    assert resp.status_code == 200
    assert resp.get_json()['data'][0]['flight']['iata'] == 'LH430'


def test_upstream_error_keeps_status(client, session):
    session.get.return_value = make_response(
        status_code=401,
        payload={'error': {'code': 'invalid_access_key', 'info': 'You have not supplied a valid API Access Key.'}},
    )

    resp = client.get('/api/flights?flight_iata=LH430')

    assert resp.status_code == 401
    assert resp.get_json()['error']['message'] == 'You have not supplied a valid API Access Key.'


def test_synthetic_fallback_is_not_an_error(client, session):
    session.get.return_value = make_response(status_code=403, text='only https is supported', content_type='text/plain')

    resp = client.get('/api/flights?flight_iata=BA117')

    assert resp.status_code == 200
    assert resp.get_json()['data'][0]['airline']['name'] == 'British Airways'


def test_health(client):
    resp = client.get('/health')
    assert resp.status_code == 200
    assert resp.get_json() == {'status': 'ok', 'provider_configured': True}


def test_unknown_route_is_json_404(client):
    resp = client.get('/api/nowhere')
    assert resp.status_code == 404
    assert resp.get_json() == {'error': {'message': 'Not found'}}
