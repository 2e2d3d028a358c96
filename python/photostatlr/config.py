import os

import yaml

from photostatlr import constants
from photostatlr import exceptions

PROTOCOLS = ('http', 'https')

# Export and publish settings with their defaults
DEFAULTS = {
    'proto': 'http',            # transport protocol for the upload
    'servername': None,         # name/address of the photo server, may include ':port'
    'serverUrl': None,          # proto + servername
    'username': None,
    'password': None,
    'copyTree': False,          # upload method: flat copy or tree mirror
    'srcRoot': None,            # local root of the photo folders, required by copyTree
    'dstRoot': None,            # destination album, may contain metadata placeholders
    'RAWandJPG': False,         # RAW and JPG of a photo are uploaded to the same album
    'renameDstFile': False,     # rename uploaded files using dstFilename
    'dstFilename': None,        # filename template, may contain metadata placeholders
    'isPS6': False,
    'usePersonalPS': False,     # upload to a personal photo station
    'personalPSOwner': None,
    'logLevel': 2,
}


def validate_config(config):
    """
    Merges a configuration with the defaults and validates it.

    :raise ConfigError: for unknown keys or inconsistent values
    :param dict config:
    :rtype: dict
    """
    unknown = sorted(set(config) - set(DEFAULTS))
    if unknown:
        raise exceptions.ConfigError('Unknown configuration keys: {}'.format(unknown))

    merged = DEFAULTS.copy()
    merged.update(config)

    if merged['proto'] not in PROTOCOLS:
        raise exceptions.ConfigError('Invalid protocol {!r}, must be one of {}'.format(
            merged['proto'], PROTOCOLS
        ))
    if merged['copyTree'] and not merged['srcRoot']:
        raise exceptions.ConfigError('copyTree requires srcRoot')
    if merged['renameDstFile'] and not merged['dstFilename']:
        raise exceptions.ConfigError('renameDstFile requires dstFilename')
    if merged['servername'] and not merged['serverUrl']:
        merged['serverUrl'] = '{}://{}'.format(merged['proto'], merged['servername'])
    return merged


def load_config(path=None):
    """
    Loads a YAML export configuration.

    :raise ConfigError: if there is no configuration file or it is invalid
    :param str  path: Configuration file, defaults to the file named by the
                      PHOTOSTATLR_CONFIG environment variable
    :rtype: dict
    """
    path = path or os.environ.get(constants.ENV_VAR)
    if not path:
        raise exceptions.ConfigError(
            'No configuration given and {} is not set'.format(constants.ENV_VAR)
        )
    try:
        with open(path) as f:
            config = yaml.safe_load(f)
    except (IOError, OSError) as exc:
        raise exceptions.ConfigError('Cannot read configuration {}: {}'.format(path, exc))
    except yaml.YAMLError as exc:
        raise exceptions.ConfigError('Invalid configuration {}: {}'.format(path, exc))

    if config is None:
        config = {}
    if not isinstance(config, dict):
        raise exceptions.ConfigError('Configuration {} must be a mapping'.format(path))
    return validate_config(config)
