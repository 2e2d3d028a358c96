from loguru import logger

from photostatlr import constants
from photostatlr import exceptions

KEYWORD_HIERARCHY_SEPARATOR = '|'


def get_keyword_objects(photo, keyword_names):
    """
    The photo's exportable leaf keywords whose name is in keyword_names.
    Synonyms and parent keywords are not returned.

    :param photo:                   Host photo object
    :param list[str] keyword_names:
    :rtype: list
    """
    names = set(keyword_names)
    keywords = [keyword for keyword in photo.get_raw_metadata('keywords') or ()
                if keyword.include_on_export and keyword.name in names]
    logger.debug("get_keyword_objects({}, '{}') returns {} leaf keyword objects",
                 photo.get_raw_metadata('path'), ','.join(keyword_names), len(keywords))
    return keywords


def add_photo_keyword_names(catalog, photo, keyword_names):
    """
    Adds keyword hierarchies to a photo, creating any keyword that does not
    exist yet. A hierarchy looks like: 'parentKeyword|childKeyword|keyword'

    The photo is changed inside a single catalog write transaction. If write
    access isn't granted in time the photo is left unchanged.

    :param catalog:                 Host catalog
    :param photo:                   Host photo object
    :param list[str] keyword_names:
    :return: False if write access to the catalog timed out
    :rtype: bool
    """
    try:
        with catalog.with_write_access('Add keywords', timeout=constants.WRITE_ACCESS_TIMEOUT):
            for keyword_name in keyword_names:
                keyword = None
                for name in keyword_name.split(KEYWORD_HIERARCHY_SEPARATOR):
                    keyword = catalog.create_keyword(name, parent=keyword)
                if keyword is not None:
                    photo.add_keyword(keyword)
    except exceptions.WriteAccessError as exc:
        logger.warning("add_photo_keyword_names({}, '{}') failed: {}",
                       photo.get_raw_metadata('path'), ','.join(keyword_names), exc)
        return False
    return True


def remove_photo_keywords(catalog, photo, keywords):
    """
    :param catalog:         Host catalog
    :param photo:           Host photo object
    :param list keywords:   Host keyword objects
    :return: False if write access to the catalog timed out
    :rtype: bool
    """
    try:
        with catalog.with_write_access('Remove keywords', timeout=constants.WRITE_ACCESS_TIMEOUT):
            for keyword in keywords:
                photo.remove_keyword(keyword)
    except exceptions.WriteAccessError as exc:
        logger.warning('remove_photo_keywords({}) failed: {}', photo.get_raw_metadata('path'), exc)
        return False
    return True
