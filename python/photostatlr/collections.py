from loguru import logger

from photostatlr import constants
from photostatlr.pathutils import mk_legal_filename, normalize_dirname


def get_collection_path(collection):
    """
    Hierarchy path of a collection, built by walking up its parent collection
    sets: <CollectionSetName>/<CollectionSetName>/.../<CollectionName>

    :param collection: Host collection object or None
    :rtype: str
    """
    if collection is None:
        return ''

    segments = [collection.name]
    parent = collection.parent
    while parent is not None:
        segments.append(mk_legal_filename(parent.name))
        parent = parent.parent
    collection_path = '/'.join(reversed(segments))
    logger.trace('get_collection_path() returns {}', collection_path)
    return normalize_dirname(collection_path)


def get_collection_upload_path(published_collection):
    """
    Target album of a published collection: the collection's dstRoot, prefixed
    by the baseDir of every parent collection set that defines one.

    :param published_collection: Host published collection or collection set
    :rtype: str
    """
    settings = published_collection.settings or {}
    if published_collection.is_collection_set:
        collection_path = settings.get(constants.KEY_BASE_DIR)
    else:
        collection_path = settings.get(constants.KEY_DST_ROOT)
    collection_path = collection_path or ''

    parent = published_collection.parent
    while parent is not None:
        base_dir = normalize_dirname((parent.settings or {}).get(constants.KEY_BASE_DIR))
        if base_dir:
            collection_path = base_dir + '/' + collection_path
        parent = parent.parent
    logger.trace('get_collection_upload_path() returns {}', collection_path)
    return normalize_dirname(collection_path)


def get_default_collection_settings(container):
    """
    Depth first search for the default collection of a publish service or
    published collection set.

    :param container: Host publish service or published collection set
    :rtype: tuple[str, dict]
    :return: Tuple of (collection name, collection settings), or (None, None)
        if there is no default collection
    """
    if container is None:
        logger.error('get_default_collection_settings: publish service is None!')
        return None, None

    stack = [container]
    while stack:
        current = stack.pop()
        for collection in current.get_child_collections():
            if collection.is_default_collection:
                logger.debug('get_default_collection_settings({}): found default collection {!r}',
                             container.name, collection.name)
                return collection.name, collection.settings
        # Reversed so that sets are searched in their natural order
        stack.extend(reversed(current.get_child_collection_sets()))

    logger.trace('get_default_collection_settings({}): default collection not found', container.name)
    return None, None


def get_all_published_collections(container):
    """
    All published collections below a publish service or collection set. The
    immediate collections of a set are listed before those of its child sets.

    :param container: Host publish service or published collection set
    :rtype: list
    """
    collections = []
    stack = [container]
    while stack:
        current = stack.pop()
        child_collections = current.get_child_collections()
        child_sets = current.get_child_collection_sets()
        logger.debug('{} has {} collections and {} collection sets',
                     current.name, len(child_collections), len(child_sets))
        collections.extend(child_collections)
        stack.extend(reversed(child_sets))
    return collections
