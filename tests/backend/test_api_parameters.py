from fastapi.testclient import TestClient

from paramstore_lib.main import create_app, Config
from paramstore_lib.parameters.models import MASK
from paramstore_lib.parameters.service import ParameterStore
from paramstore_lib.storage.ssm_backend import SSMParameterBackend
from tests.helpers import FakeSSMClient, client_error


def test_create_and_list_namespace(client):
    r = client.post('/api/parameters/ortelius/dev/variables', json={'name': 'PORT', 'value': '3001', 'isSecure': False})
    assert r.status_code == 201
    assert r.json()['version'] == 1

    r = client.get('/api/parameters/ortelius/dev')
    assert r.status_code == 200
    body = r.json()
    assert len(body) == 1
    assert {k: body[0][k] for k in ('name', 'value', 'isSecure', 'version')} == {
        'name': 'PORT', 'value': '3001', 'isSecure': False, 'version': 1,
    }


def test_list_all_masks_secure_values_unless_revealed(client, store):
    store.create_variable('ortelius/dev', 'TOKEN', 'supersecret', True)
    r = client.get('/api/parameters')
    assert r.status_code == 200
    assert r.json()['ortelius/dev'][0]['value'] == MASK
    r = client.get('/api/parameters?reveal=true')
    assert r.json()['ortelius/dev'][0]['value'] == 'supersecret'


def test_update_bumps_version(client, store):
    store.create_variable('ortelius/dev', 'PORT', '3001')
    r = client.patch('/api/parameters/ortelius/dev/variables/PORT', json={'value': '3002'})
    assert r.status_code == 200
    assert r.json()['version'] == 2
    listed = client.get('/api/parameters/ortelius/dev').json()[0]
    assert (listed['value'], listed['version']) == ('3002', 2)


def test_update_version_conflict_returns_409(client, store):
    store.create_variable('ns', 'A', '1')
    store.update_variable('ns', 'A', value='2')
    r = client.patch('/api/parameters/ns/variables/A', json={'value': '3', 'expectedVersion': 1})
    assert r.status_code == 409
    assert r.json()['error'] == 'VersionConflict'


def test_duplicate_create_returns_409(client, store):
    store.create_variable('ns', 'A', '1')
    r = client.post('/api/parameters/ns/variables', json={'name': 'A', 'value': '2'})
    assert r.status_code == 409


def test_empty_value_returns_400(client):
    r = client.post('/api/parameters/ns/variables', json={'name': 'A', 'value': ''})
    assert r.status_code == 400
    assert r.json()['error'] == 'ValidationError'


def test_delete_then_update_returns_404(client, store):
    store.create_variable('ortelius/dev', 'PORT', '3001')
    r = client.delete('/api/parameters/ortelius/dev/variables/PORT')
    assert r.status_code == 204
    assert client.get('/api/parameters/ortelius/dev').json() == []
    r = client.patch('/api/parameters/ortelius/dev/variables/PORT', json={'value': '3002'})
    assert r.status_code == 404
    r = client.delete('/api/parameters/ortelius/dev/variables/PORT')
    assert r.status_code == 404


def test_create_namespace_twice_returns_409(client):
    payload = {'name': 'FIRST', 'value': '1', 'isSecure': False}
    r = client.post('/api/namespaces/new/ns', json=payload)
    assert r.status_code == 201
    r = client.post('/api/namespaces/new/ns', json={**payload, 'name': 'SECOND'})
    assert r.status_code == 409


def test_import_env_reports_counts(client, store):
    store.create_variable('app/dev', 'DB_HOST', 'old')
    r = client.post('/api/parameters/app/dev/import', json={'content': 'DB_HOST=new\nDB_PORT=5432\nBAD=\n'})
    assert r.status_code == 200
    body = r.json()
    assert body['ok'] is False
    assert body['created'] == ['DB_PORT']
    assert body['updated'] == ['DB_HOST']
    assert [f['name'] for f in body['failed']] == ['BAD']


def test_patch_value_only_keeps_secure_flag_and_mask(client, store):
    store.create_variable('ortelius/dev', 'TOKEN', 'old', True)
    r = client.patch('/api/parameters/ortelius/dev/variables/TOKEN', json={'value': 'rotated'})
    assert r.status_code == 200
    assert (r.json()['isSecure'], r.json()['value']) == (True, MASK)
    listed = client.get('/api/parameters/ortelius/dev').json()[0]
    assert (listed['isSecure'], listed['value'], listed['version']) == (True, MASK, 2)
    assert store.list_namespace('ortelius/dev')[0].value == 'rotated'


def test_plain_import_keeps_secure_flag_and_mask(client, store):
    store.create_variable('app/dev', 'TOKEN', 'old', True)
    r = client.post('/api/parameters/app/dev/import', json={'content': 'TOKEN=rotated\n'})
    assert r.json()['updated'] == ['TOKEN']
    listed = client.get('/api/parameters').json()['app/dev'][0]
    assert (listed['isSecure'], listed['value']) == (True, MASK)


def test_backend_unavailable_returns_503():
    fake = FakeSSMClient()
    fake.fail_with = client_error('ThrottlingException', 'GetParametersByPath')
    app = create_app(Config(parameter_store=ParameterStore(SSMParameterBackend(fake))))
    r = TestClient(app).get('/api/parameters')
    assert r.status_code == 503
    assert r.json()['error'] == 'BackendUnavailable'


def test_ssm_backed_app_round_trip():
    app = create_app(Config(parameter_store=ParameterStore(SSMParameterBackend(FakeSSMClient()))))
    c = TestClient(app)
    assert c.post('/api/parameters/ortelius/prod/variables', json={'name': 'PORT', 'value': '80'}).status_code == 201
    r = c.get('/api/parameters')
    assert r.json()['ortelius/prod'][0]['id'] == '/ortelius/prod/PORT'
