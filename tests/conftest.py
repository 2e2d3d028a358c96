import contextlib

import pytest

from photostatlr import exceptions
from photostatlr import host


class MockKeyword(host.Keyword):
    def __init__(self, name, parent=None, include_on_export=True):
        self._name = name
        self.parent = parent
        self._include_on_export = include_on_export

    def __repr__(self):
        return 'MockKeyword({!r})'.format(self._name)

    @property
    def name(self):
        return self._name

    @property
    def include_on_export(self):
        return self._include_on_export


class MockPhoto(host.Photo):
    def __init__(self, raw=None, formatted=None, collections=()):
        self.raw = dict(raw or {})
        self.formatted = dict(formatted or {})
        self.collections = list(collections)
        self.raw.setdefault('keywords', [])

    def get_raw_metadata(self, key):
        return self.raw.get(key)

    def get_formatted_metadata(self, key=None):
        if key is None:
            return self.formatted.copy()
        return self.formatted.get(key)

    def get_contained_collections(self):
        return list(self.collections)

    def add_keyword(self, keyword):
        if keyword not in self.raw['keywords']:
            self.raw['keywords'].append(keyword)

    def remove_keyword(self, keyword):
        self.raw['keywords'].remove(keyword)


class MockCollection(host.Collection):
    def __init__(self, name, parent=None, is_collection_set=False, local_identifier=1,
                 settings=None, is_default_collection=False, published_photos=()):
        self._name = name
        self._parent = parent
        self._is_collection_set = is_collection_set
        self._local_identifier = local_identifier
        self._settings = settings or {}
        self._is_default_collection = is_default_collection
        self._published_photos = list(published_photos)
        self.collections = []
        self.collection_sets = []
        if parent is not None:
            siblings = parent.collection_sets if is_collection_set else parent.collections
            siblings.append(self)

    def __repr__(self):
        return 'MockCollection({!r})'.format(self._name)

    @property
    def name(self):
        return self._name

    @property
    def parent(self):
        return self._parent

    @property
    def is_collection_set(self):
        return self._is_collection_set

    @property
    def local_identifier(self):
        return self._local_identifier

    @property
    def settings(self):
        return self._settings

    @property
    def is_default_collection(self):
        return self._is_default_collection

    def get_child_collections(self):
        return list(self.collections)

    def get_child_collection_sets(self):
        return list(self.collection_sets)

    def get_published_photos(self):
        return list(self._published_photos)


class MockPublishedPhoto(host.PublishedPhoto):
    def __init__(self, remote_id, remote_url, photo=None):
        self._remote_id = remote_id
        self._remote_url = remote_url
        self._photo = photo or MockPhoto()

    @property
    def photo(self):
        return self._photo

    @property
    def remote_id(self):
        return self._remote_id

    @property
    def remote_url(self):
        return self._remote_url

    def set_remote_url(self, url):
        self._remote_url = url


class MockCatalog(host.Catalog):
    def __init__(self, publish_services=(), locked_writes=()):
        """
        :param publish_services:
        :param locked_writes: Indexes of write transactions that time out
        """
        self.keywords = {}
        self.publish_services = list(publish_services)
        self.locked_writes = set(locked_writes)
        self.writes = []

    def create_keyword(self, name, parent=None):
        key = (name, parent)
        if key not in self.keywords:
            self.keywords[key] = MockKeyword(name, parent=parent)
        return self.keywords[key]

    def get_publish_services(self, plugin_id):
        return list(self.publish_services)

    @contextlib.contextmanager
    def with_write_access(self, action_name, timeout):
        index = len(self.writes)
        self.writes.append((action_name, timeout))
        if index in self.locked_writes:
            raise exceptions.WriteAccessTimeout('{} timed out after {}s'.format(action_name, timeout))
        yield


class MockProgressScope(host.ProgressScope):
    instances = []

    def __init__(self, title=None, cancel_after=None):
        super().__init__(title)
        self.cancel_after = cancel_after
        self.reports = []
        MockProgressScope.instances.append(self)

    def is_canceled(self):
        return self.cancel_after is not None and len(self.reports) >= self.cancel_after

    def set_portion_complete(self, done, total):
        super().set_portion_complete(done, total)
        self.reports.append((done, total))


@pytest.fixture
def progress_scopes():
    MockProgressScope.instances = []
    yield MockProgressScope.instances
    MockProgressScope.instances = []


@pytest.fixture
def collection_tree():
    """
    Collection hierarchy:

        Trips/
            Europe: 2019/
                Paris
                Rome
            Beach
    """
    trips = MockCollection('Trips', is_collection_set=True)
    europe = MockCollection('Europe: 2019', parent=trips, is_collection_set=True)
    paris = MockCollection('Paris', parent=europe)
    rome = MockCollection('Rome', parent=europe)
    beach = MockCollection('Beach', parent=trips)
    return {c.name: c for c in (trips, europe, paris, rome, beach)}
