import pytest
import yaml

from photostatlr import config
from photostatlr import constants
from photostatlr.exceptions import ConfigError


@pytest.fixture
def config_file(tmp_path):
    def write(data):
        path = tmp_path / 'export.yml'
        path.write_text(data if isinstance(data, str) else yaml.safe_dump(data))
        return str(path)
    return write


def test_load_config(config_file):
    path = config_file({
        'servername': 'diskstation:5000',
        'dstRoot': 'Photos/{Date %Y}',
        'copyTree': True,
        'srcRoot': '/photos',
    })
    cfg = config.load_config(path)
    assert cfg['dstRoot'] == 'Photos/{Date %Y}'
    assert cfg['serverUrl'] == 'http://diskstation:5000'
    assert cfg['RAWandJPG'] is False
    assert set(cfg) == set(config.DEFAULTS)


def test_load_config_env(config_file, monkeypatch):
    path = config_file({'proto': 'https'})
    monkeypatch.setenv(constants.ENV_VAR, path)
    assert config.load_config()['proto'] == 'https'


def test_load_config_empty(config_file):
    assert config.load_config(config_file('')) == config.DEFAULTS


@pytest.mark.parametrize('data', (
    '- a\n- b\n',           # Not a mapping
    'key: [unclosed\n',     # Invalid yaml
))
def test_load_config_invalid(config_file, data):
    with pytest.raises(ConfigError):
        config.load_config(config_file(data))


def test_load_config_missing(tmp_path, monkeypatch):
    with pytest.raises(ConfigError):
        config.load_config(str(tmp_path / 'missing.yml'))
    monkeypatch.delenv(constants.ENV_VAR, raising=False)
    with pytest.raises(ConfigError):
        config.load_config()


@pytest.mark.parametrize('data', (
    {'unknownKey': 1},
    {'proto': 'ftp'},
    {'copyTree': True},
    {'renameDstFile': True},
))
def test_validate_config_fail(data):
    with pytest.raises(ConfigError):
        config.validate_config(data)


def test_validate_config_keeps_server_url():
    cfg = config.validate_config({'servername': 'ds', 'serverUrl': 'https://ds:5001'})
    assert cfg['serverUrl'] == 'https://ds:5001'
