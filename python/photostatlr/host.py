"""
Interfaces of the host catalog objects consumed by photostatlr.

Nothing here is instantiated by photostatlr itself: the host application passes
its own objects, which only need to provide the same attributes and methods.
The ProgressScope is the exception, it doubles as a silent default for batch
operations run outside of a progress reporting context.
"""


class Keyword:
    @property
    def name(self):
        """
        :rtype: str
        """
        raise NotImplementedError

    @property
    def include_on_export(self):
        """
        Whether the keyword is written to exported photos

        :rtype: bool
        """
        raise NotImplementedError


class Photo:
    def get_raw_metadata(self, key):
        """
        :param str  key: eg, 'path', 'isVirtualCopy', 'isVideo', 'keywords',
                         'dateTimeOriginal', 'lastEditTime'
        :return: Value or None if not set
        """
        raise NotImplementedError

    def get_formatted_metadata(self, key=None):
        """
        :param str  key: Metadata name, if None the full mapping is returned
        :rtype: str|dict[str, str]
        """
        raise NotImplementedError

    def get_contained_collections(self):
        """
        :rtype: list[Collection]
        """
        raise NotImplementedError

    def add_keyword(self, keyword):
        raise NotImplementedError

    def remove_keyword(self, keyword):
        raise NotImplementedError


class Collection:
    """ A collection or collection set, published or not """

    @property
    def name(self):
        """
        :rtype: str
        """
        raise NotImplementedError

    @property
    def parent(self):
        """
        :rtype: Collection|None
        """
        raise NotImplementedError

    @property
    def is_collection_set(self):
        """
        :rtype: bool
        """
        raise NotImplementedError

    @property
    def local_identifier(self):
        """
        :rtype: int
        """
        raise NotImplementedError

    @property
    def settings(self):
        """
        Publish settings of the collection, eg, dstRoot for collections and
        baseDir for collection sets

        :rtype: dict
        """
        raise NotImplementedError

    @property
    def is_default_collection(self):
        """
        :rtype: bool
        """
        raise NotImplementedError

    def get_child_collections(self):
        """
        :rtype: list[Collection]
        """
        raise NotImplementedError

    def get_child_collection_sets(self):
        """
        :rtype: list[Collection]
        """
        raise NotImplementedError

    def get_published_photos(self):
        """
        :rtype: list[PublishedPhoto]
        """
        raise NotImplementedError


class PublishedPhoto:
    @property
    def photo(self):
        """
        :rtype: Photo
        """
        raise NotImplementedError

    @property
    def remote_id(self):
        """
        :rtype: str
        """
        raise NotImplementedError

    @property
    def remote_url(self):
        """
        Backlink to the publishing collection: '<collectionLocalId>/<publishTime>'

        :rtype: str
        """
        raise NotImplementedError

    def set_remote_url(self, url):
        raise NotImplementedError


class Catalog:
    def create_keyword(self, name, parent=None):
        """
        Returns the existing keyword with the name below parent, creating it
        if it does not exist.

        :param str      name:
        :param Keyword  parent:
        :rtype: Keyword
        """
        raise NotImplementedError

    def get_publish_services(self, plugin_id):
        """
        :param str  plugin_id:
        :rtype: list[Collection]
        """
        raise NotImplementedError

    def with_write_access(self, action_name, timeout):
        """
        Context manager for a catalog write transaction.

        :raise WriteAccessTimeout: if write access isn't granted within timeout
        :param str      action_name: Name of the action, eg, for undo
        :param float    timeout: Seconds to wait for write access
        """
        raise NotImplementedError


class ProgressScope:
    def __init__(self, title=None):
        self.title = title
        self.portion = 0.0
        self.finished = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.done()

    def is_canceled(self):
        # type: () -> bool
        return False

    def set_portion_complete(self, done, total):
        self.portion = float(done) / total if total else 1.0

    def done(self):
        self.finished = True
