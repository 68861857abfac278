from io import BytesIO

import pytest

from app import app

from .conftest import make_png, requires_cairo


@pytest.fixture
def client():
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client


def test_health(client):
    response = client.get('/health')
    assert response.status_code == 200
    assert response.get_json() == {'status': 'ok'}


def test_export_svg(client):
    response = client.get('/export/svg?data=hello&dot_type=rounded&shape=circle')
    assert response.status_code == 200
    assert response.mimetype == 'image/svg+xml'
    assert response.get_data().startswith(b'<?xml')


def test_export_with_border_text(client):
    response = client.get('/export/svg', query_string={
        'text': 'hello',
        'border_thickness': '12',
        'border_round': '0.5',
        'border_top_text': 'SCAN ME',
    })
    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert '<textPath' in body
    assert 'SCAN ME' in body


def test_export_with_logo(client):
    response = client.post('/export/svg', data={
        'data': 'https://example.com',
        'logo': (BytesIO(make_png(40, 40)), 'logo.png'),
    }, content_type='multipart/form-data')
    assert response.status_code == 200
    assert b'data:image/png;base64,' in response.get_data()


def test_missing_text(client):
    response = client.get('/export/svg')
    assert response.status_code == 400


def test_invalid_options(client):
    assert client.get('/export/svg?data=x&width=10').status_code == 400
    assert client.get('/export/svg?data=x&dot_color=nope').status_code == 400
    assert client.get('/export/svg?data=x&border_thickness=thick').status_code == 400


def test_unknown_format(client):
    assert client.get('/export/gif?data=x').status_code == 404


@requires_cairo
def test_export_png(client):
    response = client.get('/export/png?data=hello&margin=20')
    assert response.status_code == 200
    assert response.mimetype == 'image/png'
    assert response.get_data().startswith(b'\x89PNG')
