"""Shared fixtures for originals renamer tests."""

from pathlib import Path

import pytest
import yaml

from flickr_renamer.models import LocalRecord, RemoteRecord


class FakeResponse:
    """Just enough of requests.Response for FlickrClient."""

    def __init__(self, body, status_code=200, reason='OK'):
        self.body = body
        self.status_code = status_code
        self.reason = reason

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if isinstance(self.body, Exception):
            raise self.body
        return self.body


class FakeSession:
    """Answers Flickr REST calls from a dict keyed by method name."""

    def __init__(self, responses):
        self.responses = responses
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append({'url': url, 'params': params, 'timeout': timeout})
        response = self.responses[params['method']]
        if isinstance(response, Exception):
            raise response
        return response


def ok_user(user_id='12345@N00'):
    return FakeResponse({'user': {'id': user_id, 'nsid': user_id}, 'stat': 'ok'})


def ok_photoset(photos, total=None, perpage=500, title='Holiday'):
    return FakeResponse({
        'photoset': {
            'id': '72157600000000000',
            'title': title,
            'photo': photos,
            'total': str(len(photos) if total is None else total),
            'perpage': perpage,
        },
        'stat': 'ok',
    })


def api_photo(photo_id, title, datetaken):
    return {'id': photo_id, 'title': title, 'datetaken': datetaken, 'datetakengranularity': 0}


def local(name, captured_at, directory='/originals'):
    return LocalRecord(name=name, path=Path(directory) / name, captured_at=captured_at)


def remote(photo_id, title, captured_at):
    return RemoteRecord(id=photo_id, title=title, captured_at=captured_at)


@pytest.fixture
def originals_dir(tmp_path):
    """Empty originals directory."""
    d = tmp_path / 'originals'
    d.mkdir()
    return d


@pytest.fixture
def create_original(originals_dir):
    """Factory fixture: create a file in the originals directory."""

    def _create(name, content=b'fake jpeg data'):
        path = originals_dir / name
        path.write_bytes(content)
        return path

    return _create


@pytest.fixture
def write_config(tmp_path, originals_dir):
    """Factory fixture: write a YAML config file and return its path."""

    def _write(**sections):
        config_data = {
            'flickr': {
                'api_key': 'test-key',
                'username': 'tester',
                'set_id': '72157600000000000',
            },
            'originals': {'dir': str(originals_dir)},
            'process': {'dry_run': True, 'parallel_jobs': 2},
        }
        for section, values in sections.items():
            config_data.setdefault(section, {}).update(values)

        config_path = tmp_path / 'renamer.yml'
        with open(config_path, 'w') as f:
            yaml.dump(config_data, f)
        return config_path

    return _write


@pytest.fixture
def sample_config(write_config):
    from flickr_renamer.config import Config
    return Config(str(write_config()))
