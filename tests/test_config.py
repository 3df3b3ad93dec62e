#!/usr/bin/env python3
"""Tests for renamer configuration using should/when pattern."""

import pytest

from flickr_renamer.config import DEFAULT_EXTENSIONS, Config
from flickr_renamer.errors import ConfigurationError


def test_should_load_values_when_config_file_given(write_config):
    config = Config(str(write_config()))

    assert config.get_api_key() == 'test-key'
    assert config.get_username() == 'tester'
    assert config.get_set_id() == '72157600000000000'
    assert config.get_parallel_jobs() == 2
    assert config.is_dry_run() is True


def test_should_use_defaults_when_no_config_file_found(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    config = Config()

    assert config.config_path is None
    assert config.is_dry_run() is False
    assert config.is_exclusive_matching() is False
    assert config.get_parallel_jobs() == 4
    assert config.get_timeout() == 30
    assert config.get_supported_extensions() == DEFAULT_EXTENSIONS


def test_should_find_config_in_current_directory(write_config, tmp_path, monkeypatch):
    write_config()
    monkeypatch.chdir(tmp_path)

    config = Config()

    assert config.get_username() == 'tester'


def test_should_prefer_overrides_when_given(write_config):
    config = Config(str(write_config()), overrides={
        'flickr': {'username': 'someone-else', 'api_key': None},
        'process': {'dry_run': False},
    })

    assert config.get_username() == 'someone-else'
    assert config.get_api_key() == 'test-key'  # None does not override
    assert config.get_set_id() == '72157600000000000'
    assert config.is_dry_run() is False


def test_should_stringify_numeric_set_id(write_config):
    config = Config(str(write_config(flickr={'set_id': 72157600000000000})))
    assert config.get_set_id() == '72157600000000000'


def test_should_normalize_extensions(write_config):
    config = Config(str(write_config(originals={'extensions': ['.JPG', 'Nef']})))
    assert config.get_supported_extensions() == ['jpg', 'nef']


def test_should_pass_validation_when_complete(sample_config):
    assert sample_config.validate_config() == []


def test_should_report_missing_credentials(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    errors = Config().validate_config()

    assert "Flickr API key not configured" in errors
    assert "Flickr username not configured" in errors
    assert "Flickr set id not configured" in errors
    assert "Originals directory not configured" in errors


def test_should_skip_originals_check_when_not_required(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config = Config(overrides={'flickr': {'api_key': 'k', 'username': 'u', 'set_id': 's'}})

    assert config.validate_config(require_originals=False) == []


def test_should_report_missing_originals_directory(write_config, tmp_path):
    config = Config(str(write_config(originals={'dir': str(tmp_path / 'absent')})))

    errors = config.validate_config()

    assert any('does not exist' in e for e in errors)


@pytest.mark.parametrize('section,values,fragment', [
    ('process', {'parallel_jobs': 0}, 'parallel_jobs'),
    ('process', {'parallel_jobs': 64}, 'parallel_jobs'),
    ('flickr', {'timeout_seconds': 0}, 'timeout_seconds'),
    ('flickr', {'per_page': 1000}, 'per_page'),
])
def test_should_reject_out_of_range_values(write_config, section, values, fragment):
    config = Config(str(write_config(**{section: values})))

    errors = config.validate_config()

    assert any(fragment in e for e in errors)


def test_should_raise_when_config_file_unreadable(tmp_path):
    with pytest.raises(ConfigurationError):
        Config(str(tmp_path / 'missing.yml'))


def test_should_raise_when_config_is_not_a_mapping(tmp_path):
    path = tmp_path / 'list.yml'
    path.write_text('- a\n- b\n')

    with pytest.raises(ConfigurationError, match='mapping'):
        Config(str(path))


def test_should_support_dot_notation_defaults(sample_config):
    assert sample_config.get('flickr.api_key') == 'test-key'
    assert sample_config.get('does.not.exist', 'fallback') == 'fallback'
