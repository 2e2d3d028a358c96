from loguru import logger

from photostatlr import constants
from photostatlr import token
from photostatlr.pathutils import normalize_dirname


class Template:
    """
    Album path containing metadata placeholders which are substituted by the
    actual values of a photo:

        {Date <format>|<default>}
        {LrFM:<key> <extract pattern>|<default>}
        {Path:<level> <extract pattern>|<default>}
        {LrCC:<name|path> <filter>|<default>}

    Unrecognized placeholders are left unchanged as they might be intended
    path components. Undefined metadata is substituted by its default, or ''
    if there is no default.

    Extract and filter patterns are Python regular expressions, but must not
    contain braces: a '{' inside a placeholder, eg, a '{4}' quantifier, makes
    the whole placeholder literal text.
    """

    def __init__(self, pattern, log=None):
        """
        :param str  pattern:
        :param log: Logger to report substitutions to, defaults to loguru's
        """
        self._pattern = pattern
        self._log = log or logger
        self._categories = None  # type: tuple

    def __repr__(self):
        return '{}({!r})'.format(self.__class__.__name__, self._pattern)

    def __str__(self):
        return self._pattern or ''

    @property
    def categories(self):
        """
        Placeholder categories used by the pattern

        :rtype: tuple[str]
        """
        if self._categories is None:
            self._categories = token.categories(self._pattern)
        return self._categories

    @property
    def is_dynamic(self):
        """
        Whether or not the pattern contains placeholders

        :rtype: bool
        """
        return bool(self._pattern) and constants.TOKEN_START in self._pattern

    @property
    def pattern(self):
        """
        :rtype: str
        """
        return self._pattern

    def evaluate(self, photo):
        """
        Substitutes all placeholders by the photo's metadata and normalizes
        the result.

        :param photo: Host photo object
        :rtype: str
        """
        if not self.is_dynamic:
            return normalize_dirname(self._pattern)

        snapshot = token.MetadataSnapshot(photo)
        resolvers = {}
        segments = []
        for item in token.scan(self._pattern):
            if isinstance(item, token.Placeholder):
                resolver = resolvers.get(item.category)
                if resolver is None:
                    resolver = resolvers[item.category] = token.get_resolver(item.category, log=self._log)
                item = resolver.resolve(item, snapshot)
            segments.append(item)

        path = normalize_dirname(''.join(segments))
        self._log.debug('evaluate({!r}) --> {!r}', self._pattern, path)
        return path


class NameTemplate(Template):
    """
    Filename containing metadata placeholders. Evaluates to '?' if the pattern
    contains path separators.
    """

    def evaluate(self, photo):
        if self._pattern and any(sep in self._pattern for sep in constants.PATH_SEPARATORS):
            self._log.debug('evaluate: filename {!r} must not contain / or \\', self._pattern)
            return constants.MANDATORY_MISSING
        return super().evaluate(photo)


TEMPLATE_TYPES = {
    constants.TEMPLATE_PATH: Template,
    constants.TEMPLATE_FILENAME: NameTemplate,
}


def is_dynamic_album_path(path):
    """
    :param str  path:
    :rtype: bool
    """
    return Template(path).is_dynamic


def evaluate_path_or_filename(path, photo, kind=constants.TEMPLATE_PATH, log=None):
    """
    Substitutes metadata placeholders in a directory path or filename by the
    actual values of the photo and sanitizes the result.

    :raise KeyError: if kind is not a known template type
    :param str  path:
    :param photo:       Host photo object
    :param str  kind:   'path' or 'filename'
    :rtype: str
    """
    return TEMPLATE_TYPES[kind](path, log=log).evaluate(photo)
