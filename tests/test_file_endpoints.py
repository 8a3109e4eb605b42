"""Tests for the HTTP surface of the Files Manager."""

import asyncio
import time

import httpx
import pytest
from fastapi.testclient import TestClient

from files_manager.main import app
from files_manager.repositories.file_repository import FileRepository
from files_manager.routes.file_routes import get_file_service
from files_manager.services.file_service import FileService


@pytest.fixture
def client(test_db, storage):
    """Create FastAPI test client backed by a temporary database and storage root."""
    app.dependency_overrides[get_file_service] = lambda: FileService(storage=storage)
    yield TestClient(app)
    app.dependency_overrides.clear()


def _upload(client, token, **body):
    return client.post('/files', json=body, headers={'X-Token': token})


def test_root_endpoint(client):
    response = client.get('/')
    assert response.status_code == 200
    assert response.json()['status'] == 'running'


def test_health_endpoint(client):
    assert client.get('/health').json() == {'status': 'healthy', 'service': 'files_manager'}


def test_ready_endpoint(client):
    response = client.get('/ready')
    assert response.status_code == 200
    assert response.json()['ready'] is True


def test_request_id_header(client):
    assert client.get('/health').headers['X-Request-ID']


class TestUpload:

    def test_unauthorized(self, client):
        response = client.post('/files', json={'name': 'Photos', 'type': 'folder'})
        assert response.status_code == 401
        assert response.json() == {'detail': 'Unauthorized', 'code': 'UNAUTHORIZED'}

    def test_create_folder(self, client, user_a):
        response = _upload(client, 'token-a', name='Photos', type='folder')

        assert response.status_code == 201
        data = response.json()
        assert data['name'] == 'Photos'
        assert data['type'] == 'folder'
        assert data['userId'] == user_a.user_id
        assert data['isPublic'] is False
        assert data['parentId'] == '0'
        assert data['id']
        assert 'localPath' not in data

    @pytest.mark.parametrize('body, code, detail', [
        ({'type': 'folder'}, 'MISSING_NAME', 'Missing name'),
        ({'name': 'a'}, 'MISSING_TYPE', 'Missing type'),
        ({'name': 'a', 'type': 'video'}, 'MISSING_TYPE', 'Missing type'),
        ({'name': 'a', 'type': 'file'}, 'MISSING_DATA', 'Missing data'),
        ({'name': 'a', 'type': 'file', 'data': 'aG$V%sb#G8='}, 'INVALID_DATA', 'Invalid data'),
        ({'name': 'a', 'type': 'folder', 'parentId': 'missing'}, 'PARENT_NOT_FOUND', 'Parent not found'),
    ])
    def test_validation_errors(self, client, user_a, body, code, detail):
        response = _upload(client, 'token-a', **body)

        assert response.status_code == 400
        assert response.json() == {'detail': detail, 'code': code}

    def test_parent_not_a_folder(self, client, user_a):
        parent = _upload(client, 'token-a', name='a.txt', type='file', data='aGVsbG8=').json()

        response = _upload(client, 'token-a', name='b', type='folder', parentId=parent['id'])
        assert response.status_code == 400
        assert response.json()['code'] == 'PARENT_NOT_A_FOLDER'

    @pytest.mark.parametrize('parent_id', [0, '0'])
    def test_root_parent_id_forms(self, client, user_a, parent_id):
        response = _upload(client, 'token-a', name='a', type='folder', parentId=parent_id)

        assert response.status_code == 201
        assert response.json()['parentId'] == '0'


class TestShowAndIndex:

    def test_show(self, client, user_a, user_b):
        folder = _upload(client, 'token-a', name='Photos', type='folder').json()

        response = client.get(f"/files/{folder['id']}", headers={'X-Token': 'token-a'})
        assert response.status_code == 200
        assert response.json() == folder

        response = client.get(f"/files/{folder['id']}", headers={'X-Token': 'token-b'})
        assert response.status_code == 404
        assert response.json() == {'detail': 'Not found', 'code': 'NOT_FOUND'}

    def test_show_unauthorized(self, client):
        assert client.get('/files/anything').status_code == 401

    def test_index_pagination(self, client, user_a):
        folder = _upload(client, 'token-a', name='Photos', type='folder').json()
        for i in range(25):
            _upload(client, 'token-a', name=f'img{i}.png', type='image', data='aGVsbG8=', parentId=folder['id'])

        headers = {'X-Token': 'token-a'}
        first = client.get(f"/files?parentId={folder['id']}", headers=headers).json()
        second = client.get(f"/files?parentId={folder['id']}&page=1", headers=headers).json()
        third = client.get(f"/files?parentId={folder['id']}&page=2", headers=headers).json()

        assert len(first) == 20
        assert [f['name'] for f in second] == [f'img{i}.png' for i in range(20, 25)]
        assert third == []

    def test_index_defaults_to_root(self, client, user_a):
        _upload(client, 'token-a', name='Photos', type='folder')

        response = client.get('/files?page=oops', headers={'X-Token': 'token-a'})
        assert response.status_code == 200
        assert [f['name'] for f in response.json()] == ['Photos']

    def test_index_unauthorized(self, client):
        assert client.get('/files').status_code == 401


class TestPublishAndDownload:

    def test_scenario(self, client, user_a, user_b):
        folder = _upload(client, 'token-a', name='Photos', type='folder').json()
        image = _upload(
            client, 'token-a', name='cat.png', type='image', data='aGVsbG8=', parentId=folder['id']
        ).json()
        assert image['isPublic'] is False

        response = client.get(f"/files/{image['id']}/data", headers={'X-Token': 'token-b'})
        assert response.status_code == 404

        response = client.put(f"/files/{image['id']}/publish", headers={'X-Token': 'token-a'})
        assert response.status_code == 200
        assert response.json()['isPublic'] is True

        response = client.get(f"/files/{image['id']}/data", headers={'X-Token': 'token-b'})
        assert response.status_code == 200
        assert response.content == b'hello'
        assert response.headers['content-type'] == 'image/png'

        response = client.put(f"/files/{image['id']}/unpublish", headers={'X-Token': 'token-a'})
        assert response.json()['isPublic'] is False
        assert client.get(f"/files/{image['id']}/data").status_code == 404

    def test_publish_by_non_owner(self, client, user_a, user_b):
        folder = _upload(client, 'token-a', name='Photos', type='folder').json()

        response = client.put(f"/files/{folder['id']}/publish", headers={'X-Token': 'token-b'})
        assert response.status_code == 404

    def test_publish_unauthorized(self, client):
        assert client.put('/files/anything/publish').status_code == 401
        assert client.put('/files/anything/unpublish').status_code == 401

    def test_download_folder(self, client, user_a):
        folder = _upload(client, 'token-a', name='Photos', type='folder').json()

        response = client.get(f"/files/{folder['id']}/data")
        assert response.status_code == 400
        assert response.json() == {'detail': "A folder doesn't have content", 'code': 'FOLDER_HAS_NO_CONTENT'}

    def test_download_size_variant(self, client, user_a):
        image = _upload(client, 'token-a', name='cat.png', type='image', data='aGVsbG8=', isPublic=True).json()

        response = client.get(f"/files/{image['id']}/data?size=100")
        assert response.status_code == 404
        assert response.json() == {'detail': 'Not found', 'code': 'NOT_FOUND'}

    def test_download_text_content_type(self, client, user_a):
        record = _upload(client, 'token-a', name='notes.txt', type='file', data='aGVsbG8=').json()

        response = client.get(f"/files/{record['id']}/data", headers={'X-Token': 'token-a'})
        assert response.status_code == 200
        assert response.text == 'hello'
        assert response.headers['content-type'] == 'text/plain; charset=utf-8'

    def test_download_missing(self, client):
        assert client.get('/files/missing/data').status_code == 404


@pytest.mark.asyncio
async def test_slow_listing_does_not_block_other_requests(test_db, storage, user_a, monkeypatch):
    app.dependency_overrides[get_file_service] = lambda: FileService(storage=storage)
    list_by_parent = FileRepository.list_by_parent

    def slow_list_by_parent(parent_id, skip, limit=20):
        time.sleep(0.5)
        return list_by_parent(parent_id, skip, limit)

    monkeypatch.setattr(FileRepository, "list_by_parent", staticmethod(slow_list_by_parent))

    transport = httpx.ASGITransport(app=app)
    try:
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            listing = asyncio.create_task(client.get("/files", headers={"X-Token": "token-a"}))
            await asyncio.sleep(0.05)

            health = await client.get("/health")
            assert health.status_code == 200
            assert not listing.done()

            assert (await listing).status_code == 200
    finally:
        app.dependency_overrides.clear()
