import posixpath
import re

from loguru import logger

from photostatlr import constants


def normalize_dirname(path):
    """
    Converts a local or remote path to a unix style path without leading or
    trailing separators and without empty segments.

    :param str  path:
    :rtype: str
    """
    if path is None:
        return None
    path = path.replace('\\', '/')
    path = re.sub('/{2,}', '/', path)
    return path.strip('/')


def mk_legal_filename(name):
    """
    Replaces all characters that are illegal in a file or directory name.

    :param str  name:
    :rtype: str
    """
    if name is None:
        return None
    return constants.ILLEGAL_FILENAME_CHARS.sub(constants.ILLEGAL_FILENAME_REPLACEMENT, name)


def split_path(path):
    """
    :param str  path:
    :rtype: list[str]
    """
    return [segment for segment in (normalize_dirname(path) or '').split('/') if segment]


def extension(filename):
    # type: (str) -> str
    return posixpath.splitext(filename.replace('\\', '/'))[1].lstrip('.')


def is_raw(filename):
    """ Whether the filename extension is one of the supported RAW formats """
    return extension(filename).lower() in constants.RAW_EXTENSIONS


def is_video(filename):
    """ Whether the filename extension is one of the supported video formats """
    return extension(filename).lower() in constants.VIDEO_EXTENSIONS


def _add_suffix(path, suffix, ext):
    return '{}{}.{}'.format(posixpath.splitext(path)[0], suffix, ext)


def get_publish_path(photo, rendered_filename, export_params, dst_root):
    """
    Builds the path of a rendered photo relative to the local source root and
    the absolute path it is uploaded to: remote path = dst_root + relative path.

    :param photo:                   Host photo object
    :param str  rendered_filename:  Filename of the rendered photo
    :param dict export_params:      Export configuration, see config.DEFAULTS
    :param str  dst_root:           Evaluated destination album
    :rtype: tuple[str, str]
    :return: Tuple of (local relative path, remote absolute path), both as unix
        style paths
    """
    src_path = photo.get_raw_metadata('path').replace('\\', '/')
    src_extension = extension(src_path)
    rendered_path = posixpath.join(posixpath.dirname(src_path), rendered_filename)
    rendered_extension = extension(rendered_filename)

    # Virtual copies share the master's filename, make it unique with the copy name
    if photo.get_raw_metadata('isVirtualCopy'):
        copy_name = photo.get_formatted_metadata('copyName') or ''
        rendered_path = _add_suffix(rendered_path, '-' + copy_name, rendered_extension)
        logger.debug('isVirtualCopy: new rendered path is {!r}', rendered_path)

    # RAW and JPG of the same photo go to the same album: keep the original
    # extension in the name, eg, '_rw2.jpg'
    if (not photo.get_raw_metadata('isVideo')
            and export_params.get('RAWandJPG')
            and src_extension.lower() != rendered_extension.lower()):
        rendered_path = _add_suffix(rendered_path, '_' + src_extension, rendered_extension)
        logger.debug('Different extensions and RAWandJPG set: new rendered path is {!r}', rendered_path)

    if export_params.get('copyTree'):
        src_root = (export_params.get('srcRoot') or '').replace('\\', '/')
        local_relative_path = posixpath.relpath(rendered_path, src_root)
    else:
        local_relative_path = posixpath.basename(rendered_path)

    remote_abs_path = dst_root + '/' + local_relative_path if dst_root else local_relative_path
    logger.debug(
        "get_publish_path({!r}, {}, {}, {!r}) returns {!r}, {!r}",
        src_path, rendered_extension, 'Tree' if export_params.get('copyTree') else 'Flat',
        dst_root, local_relative_path, remote_abs_path
    )
    return local_relative_path, remote_abs_path
