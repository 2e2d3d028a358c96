from loguru import logger

from photostatlr import constants


class AlbumCheckList:
    """
    Albums to check for emptiness once a batch of photos has been deleted or
    moved. Each album is listed once and the list is ordered by descending
    path length, so that child albums are checked (and deleted) before their
    parents.
    """

    def __init__(self, log=None):
        self._albums = []   # type: list[str]
        self._log = log or logger

    def __repr__(self):
        return '{}({!r})'.format(self.__class__.__name__, self._albums)

    def __contains__(self, album_path):
        return album_path in self._albums

    def __iter__(self):
        return iter(self._albums[:])

    def __len__(self):
        return len(self._albums)

    @property
    def albums(self):
        """
        :rtype: tuple[str]
        """
        return tuple(self._albums)

    def add(self, album_path):
        """
        Inserts an album, keeping the longest paths first.

        An album is considered already noted if an existing entry starts with
        its path. Note that this is a string prefix, not a directory prefix,
        eg, '/a/b' is covered by an existing '/a/bc'.

        :param str  album_path:
        :rtype: bool
        :return: Whether or not the album was inserted
        """
        for idx, existing in enumerate(self._albums):
            if existing.startswith(album_path):
                self._log.debug('note_album({}): {} already in list', album_path, existing)
                return False
            if len(existing) <= len(album_path):
                self._albums.insert(idx, album_path)
                self._log.debug('note_album({}): insert before {}', album_path, existing)
                return True

        self._albums.append(album_path)
        self._log.debug('note_album({}): insert as last in list', album_path)
        return True

    def note_album(self, photo_path):
        """
        Notes the album containing a photo. Photos in the root album are
        ignored.

        :param str  photo_path: Remote path of the photo
        :rtype: AlbumCheckList
        """
        match = constants.PATTERN_ALBUM.match(photo_path)
        if match is None:
            self._log.debug('note_album({}): root will not be noted', photo_path)
            return self
        self.add(match.group(1))
        return self

    def drain(self):
        """
        Yields and removes the albums, longest path first.

        :rtype: collections.abc.Iterator[str]
        """
        while self._albums:
            yield self._albums.pop(0)


def note_album_for_check_empty(album_check_list, photo_path):
    """
    Notes the album of a photo in the album check list, creating the list if
    it doesn't exist yet. Always use the returned list.

    :param AlbumCheckList   album_check_list: Existing list or None
    :param str              photo_path:
    :rtype: AlbumCheckList
    """
    if album_check_list is None:
        album_check_list = AlbumCheckList()
    return album_check_list.note_album(photo_path)
