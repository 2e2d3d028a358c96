import re

from loguru import logger

from photostatlr import constants
from photostatlr.collections import get_collection_path
from photostatlr.dates import get_date_time_original, format_timestamp
from photostatlr.pathutils import mk_legal_filename, split_path


class Placeholder:
    """
    A single metadata placeholder in a template:

        {<category><separator><args>|<default>}

    The default is None if the placeholder has no '|'.
    """

    def __init__(self, category, args, default, text, start=0):
        """
        :param str  category:
        :param str  args:
        :param str  default:
        :param str  text:   Source text of the placeholder, including braces
        :param int  start:  Index of the placeholder in the template
        """
        self.category = category
        self.args = args
        self.default = default
        self.text = text
        self.start = start

    def __repr__(self):
        return ('{self.__class__.__name__}({self.category!r}, {self.args!r}, '
                '{self.default!r}, {self.text!r}, start={self.start})'.format(self=self))

    def __str__(self):
        return self.text

    def __eq__(self, other):
        if not isinstance(other, Placeholder):
            return NotImplemented
        return (self.category, self.args, self.default, self.text, self.start) == \
               (other.category, other.args, other.default, other.text, other.start)

    @property
    def end(self):
        """
        :rtype: int
        """
        return self.start + len(self.text)

    @property
    def fallback(self):
        """
        Value substituted when the placeholder can't be resolved

        :rtype: str
        """
        return self.default or ''


def parse_placeholder(text, start=0):
    """
    Parses the text of a single placeholder, including the braces.

    :param str  text:
    :param int  start:
    :rtype: Placeholder|None
    :return: Placeholder, or None if the text is not a recognized placeholder
    """
    if not (text.startswith(constants.TOKEN_START) and text.endswith(constants.TOKEN_END)):
        return None
    body = text[1:-1]
    match = constants.PATTERN_CATEGORY.match(body)
    if match is None or match.group(0) not in constants.CATEGORY_SEPARATORS:
        return None

    category = match.group(0)
    rest = body[match.end():]
    separator = constants.CATEGORY_SEPARATORS[category]
    if separator is None:
        # Category and arguments are separated by whitespace, eg, {Date %Y}
        if rest and not (rest[0].isspace() or rest[0] == constants.DEFAULT_SEPARATOR):
            return None
        rest = rest.lstrip()
    elif rest.startswith(separator):
        rest = rest[len(separator):]
    else:
        return None

    args, sep, default = rest.rpartition(constants.DEFAULT_SEPARATOR)
    if not sep:
        args, default = rest, None
    return Placeholder(category, args, default, text, start)


def scan(template):
    """
    Splits a template into literal text and placeholders, in order.

    A placeholder runs from a '{' to the first '}' with no other '{' between
    them. Unclosed braces and unrecognized placeholders are kept as literal
    text.

    :param str  template:
    :rtype: collections.abc.Iterator[str|Placeholder]
    """
    literal_start = idx = 0
    while True:
        open_idx = template.find(constants.TOKEN_START, idx)
        if open_idx < 0:
            break
        close_idx = template.find(constants.TOKEN_END, open_idx + 1)
        if close_idx < 0:
            break
        nested_idx = template.find(constants.TOKEN_START, open_idx + 1, close_idx)
        if nested_idx >= 0:
            # Only the innermost brace can open a placeholder
            idx = nested_idx
            continue

        idx = close_idx + 1
        placeholder = parse_placeholder(template[open_idx:idx], open_idx)
        if placeholder is None:
            continue
        if literal_start < open_idx:
            yield template[literal_start:open_idx]
        yield placeholder
        literal_start = idx

    if literal_start < len(template):
        yield template[literal_start:]


def placeholders(template):
    """
    :param str  template:
    :rtype: list[Placeholder]
    """
    return [item for item in scan(template or '') if isinstance(item, Placeholder)]


def categories(template):
    """
    The placeholder categories used by a template, in resolver order

    :param str  template:
    :rtype: tuple[str]
    """
    found = {placeholder.category for placeholder in placeholders(template)}
    return tuple(category for category in constants.CATEGORIES if category in found)


def split_args(args, key_regex):
    """
    Splits placeholder arguments of the form '<key> <pattern>'.

    :param str  args:
    :param str  key_regex: Pattern the key must match
    :rtype: tuple[str, str]
    :return: Tuple of (key, pattern), pattern is None if not given
    """
    match = re.match(r'\s*({})\s+(.+)$'.format(key_regex), args, re.DOTALL)
    if match is None:
        return args.strip(), None
    return match.group(1), match.group(2)


def extract(value, pattern):
    """
    Searches a value with an extract pattern. If the pattern has groups, the
    first group is the result, otherwise the whole match.

    :raise re.error: if the pattern is invalid
    :param str  value:
    :param str  pattern:
    :rtype: str|None
    :return: Extracted string, or None if the pattern does not match
    """
    match = re.search(pattern, value)
    if match is None:
        return None
    return match.group(1) if match.re.groups else match.group(0)


class MetadataSnapshot:
    """
    Metadata of a photo required to evaluate one template. Every source is
    fetched from the host on first use and kept for this evaluation only.
    """

    def __init__(self, photo):
        self._photo = photo
        self._capture_time = None       # type: float
        self._formatted_metadata = None  # type: dict
        self._path_segments = None      # type: list
        self._collection_paths = None   # type: list

    @property
    def photo(self):
        return self._photo

    @property
    def capture_time(self):
        """
        :rtype: float
        """
        if self._capture_time is None:
            self._capture_time, _ = get_date_time_original(self._photo)
        return self._capture_time

    @property
    def formatted_metadata(self):
        """
        :rtype: dict[str, str]
        """
        if self._formatted_metadata is None:
            self._formatted_metadata = self._photo.get_formatted_metadata() or {}
        return self._formatted_metadata

    @property
    def path_segments(self):
        """
        :rtype: list[str]
        """
        if self._path_segments is None:
            self._path_segments = split_path(self._photo.get_raw_metadata('path'))
        return self._path_segments

    @property
    def collection_paths(self):
        """
        :rtype: list[str]
        """
        if self._collection_paths is None:
            self._collection_paths = [get_collection_path(collection)
                                      for collection in self._photo.get_contained_collections() or ()]
        return self._collection_paths


class Resolver:
    category = None  # type: str

    def __init__(self, log=None):
        self._log = log or logger

    def __repr__(self):
        return '{}()'.format(self.__class__.__name__)

    def resolve(self, placeholder, snapshot):
        """
        Substitution string for the placeholder. Malformed placeholders resolve
        to their own text, unresolvable values to the placeholder's default.

        :param Placeholder      placeholder:
        :param MetadataSnapshot snapshot:
        :rtype: str
        """
        raise NotImplementedError

    def _extract(self, placeholder, value, pattern):
        """ Extracts and sanitizes a metadata value, falling back on the default """
        if not value:
            return placeholder.fallback
        if pattern is not None:
            try:
                value = extract(value, pattern)
            except re.error as exc:
                self._log.debug('{}: invalid pattern {!r}: {}', placeholder, pattern, exc)
                return placeholder.text
        if value is None:
            return placeholder.fallback
        return mk_legal_filename(value)


class DateResolver(Resolver):
    """ {Date <format>} - capture date formatted with strftime directives """

    category = constants.CATEGORY_DATE

    def resolve(self, placeholder, snapshot):
        date_format = placeholder.args
        if not date_format.strip():
            return placeholder.fallback
        try:
            date_string = format_timestamp(snapshot.capture_time, date_format)
        except ValueError as exc:
            self._log.debug('{}: invalid date format: {}', placeholder, exc)
            return placeholder.text
        self._log.debug('date format {!r} --> {!r}', date_format, date_string)
        return date_string or placeholder.fallback


class FormattedMetadataResolver(Resolver):
    """ {LrFM:<key> <extract pattern>} - formatted metadata value of the photo """

    category = constants.CATEGORY_FORMATTED_METADATA

    def resolve(self, placeholder, snapshot):
        key, pattern = split_args(placeholder.args, constants.PATTERN_METADATA_KEY)
        value = snapshot.formatted_metadata.get(key)
        value = '' if value is None else str(value)
        result = self._extract(placeholder, value, pattern)
        self._log.debug('LrFM:{} = {!r}, pattern {!r} --> {!r}', key, value, pattern, result)
        return result


class PathLevelResolver(Resolver):
    """ {Path:<level> <extract pattern>} - directory name at a level of the photo's path """

    category = constants.CATEGORY_PATH

    def resolve(self, placeholder, snapshot):
        level, pattern = split_args(placeholder.args, constants.PATTERN_PATH_LEVEL)
        if not level.isdigit():
            self._log.debug('{}: level {!r} is not a number', placeholder, level)
            return placeholder.text
        level = int(level)

        # The last segment is the filename, which is not a directory level
        segments = snapshot.path_segments
        value = segments[level - 1] if 0 < level < len(segments) else ''
        result = self._extract(placeholder, value, pattern)
        self._log.debug('Path:{} = {!r}, pattern {!r} --> {!r}', level, value, pattern, result)
        return result


class ContainedCollectionResolver(Resolver):
    """ {LrCC:<name|path> <filter>} - first collection containing the photo """

    category = constants.CATEGORY_CONTAINED_COLLECTION

    def resolve(self, placeholder, snapshot):
        data_type, data_filter = split_args(placeholder.args, constants.PATTERN_METADATA_KEY)
        if data_type not in constants.DATA_TYPES:
            self._log.debug('{}: type {!r} not valid', placeholder, data_type)
            return placeholder.text

        collection_paths = snapshot.collection_paths
        if not collection_paths:
            self._log.trace('{}: no collections', placeholder)
            return placeholder.fallback

        for collection_path in collection_paths:
            if data_type == constants.DATA_TYPE_NAME:
                value = collection_path.rpartition('/')[2]
            else:
                value = collection_path
            try:
                matched = data_filter is None or re.search(data_filter, value) is not None
            except re.error as exc:
                self._log.debug('{}: invalid filter {!r}: {}', placeholder, data_filter, exc)
                return placeholder.text
            if matched:
                self._log.debug('{} --> {!r}', placeholder, value)
                return value

        self._log.debug('{}: no match', placeholder)
        return placeholder.fallback


RESOLVERS = {
    cls.category: cls
    for cls in (DateResolver, FormattedMetadataResolver, PathLevelResolver, ContainedCollectionResolver)
}


def get_resolver(category, log=None):
    """
    :raise KeyError: if there is no resolver for the category
    :param str  category:
    :rtype: Resolver
    """
    return RESOLVERS[category](log=log)
