import datetime

import pytest

from conftest import MockCollection, MockPhoto
from photostatlr import constants
from photostatlr import token
from photostatlr.token import Placeholder


@pytest.mark.parametrize('text, expected', (
    ('{Date %Y}', ('Date', '%Y', None)),
    ('{Date %Y-%m|unknown}', ('Date', '%Y-%m', 'unknown')),
    ('{Date}', ('Date', '', None)),
    ('{Date|nodate}', ('Date', '', 'nodate')),
    ('{LrFM:caption|Untitled}', ('LrFM', 'caption', 'Untitled')),
    ('{LrFM:title (\\w+)}', ('LrFM', 'title (\\w+)', None)),
    ('{Path:2}', ('Path', '2', None)),
    ('{Path:9|X}', ('Path', '9', 'X')),
    ('{LrCC:name ^A|a|b}', ('LrCC', 'name ^A|a', 'b')),   # Default after the last '|'
    ('{LrCC:path|}', ('LrCC', 'path', '')),
))
def test_parse_placeholder(text, expected):
    placeholder = token.parse_placeholder(text)
    assert (placeholder.category, placeholder.args, placeholder.default) == expected
    assert placeholder.text == text


@pytest.mark.parametrize('text', (
    '{Unknown:abc}',    # Unknown category
    '{DateX}',          # Category must be followed by whitespace
    '{LrFM caption}',   # Category must be followed by ':'
    '{Path}',
    '{}',
    '{ Date %Y}',
    'Date %Y',          # No braces
))
def test_parse_placeholder_unrecognized(text):
    assert token.parse_placeholder(text) is None


@pytest.mark.parametrize('template, expected', (
    ('', []),
    ('plain/path', ['plain/path']),
    ('{Date %Y}', [Placeholder('Date', '%Y', None, '{Date %Y}', 0)]),
    ('a/{Date %Y}/{Path:1}.jpg', [
        'a/',
        Placeholder('Date', '%Y', None, '{Date %Y}', 2),
        '/',
        Placeholder('Path', '1', None, '{Path:1}', 12),
        '.jpg',
    ]),
    # Unrecognized and unclosed placeholders stay literal
    ('{foo}/{Date %Y', ['{foo}/{Date %Y']),
    ('{foo}/{Date %Y}', ['{foo}/', Placeholder('Date', '%Y', None, '{Date %Y}', 6)]),
    # Only the innermost brace opens a placeholder
    ('{a{Date %Y}}', ['{a', Placeholder('Date', '%Y', None, '{Date %Y}', 2), '}']),
))
def test_scan(template, expected):
    assert list(token.scan(template)) == expected


def test_placeholder_properties():
    placeholder = token.parse_placeholder('{LrFM:caption|Untitled}', start=4)
    assert placeholder.start == 4
    assert placeholder.end == 4 + len('{LrFM:caption|Untitled}')
    assert placeholder.fallback == 'Untitled'
    assert str(placeholder) == '{LrFM:caption|Untitled}'
    assert token.parse_placeholder('{LrFM:caption}').fallback == ''


@pytest.mark.parametrize('template, expected', (
    ('no/placeholders', ()),
    ('{LrCC:name}/{Date %Y}', ('Date', 'LrCC')),
    ('{Path:1}/{LrFM:title}/{LrCC:path}/{Date %Y}', constants.CATEGORIES),
    ('{Other:1}', ()),
))
def test_categories(template, expected):
    assert token.categories(template) == expected


@pytest.mark.parametrize('args, key_regex, expected', (
    ('caption', r'\w+', ('caption', None)),
    ('caption (\\d+)', r'\w+', ('caption', '(\\d+)')),
    ('caption   ^(.*) x', r'\w+', ('caption', '^(.*) x')),
    ('2 ^(\\d+)_', r'\d+', ('2', '^(\\d+)_')),
    ('two ^x', r'\d+', ('two ^x', None)),
    (' name ', r'\w+', ('name', None)),
))
def test_split_args(args, key_regex, expected):
    assert token.split_args(args, key_regex) == expected


@pytest.mark.parametrize('value, pattern, expected', (
    ('2019_Paris', r'^(\d+)', '2019'),
    ('2019_Paris', r'Paris', 'Paris'),
    ('2019_Paris', r'Rome', None),
    ('2019_Paris', r'(Rome)?x', None),
))
def test_extract(value, pattern, expected):
    assert token.extract(value, pattern) == expected


def test_get_resolver():
    assert isinstance(token.get_resolver('Date'), token.DateResolver)
    assert isinstance(token.get_resolver('LrFM'), token.FormattedMetadataResolver)
    assert isinstance(token.get_resolver('Path'), token.PathLevelResolver)
    assert isinstance(token.get_resolver('LrCC'), token.ContainedCollectionResolver)
    with pytest.raises(KeyError):
        token.get_resolver('Unknown')


@pytest.fixture
def photo(collection_tree):
    return MockPhoto(
        raw={
            'path': '/photos/2019/Paris_trip/IMG_0001.CR2',
            'dateTimeOriginal': datetime.datetime(2019, 7, 14, 12, 30),
        },
        formatted={
            'caption': 'Eiffel tower at night',
            'title': '',
            'cameraModel': 'EOS 5D/II',
            'rating': 4,
        },
        collections=[collection_tree['Beach'], collection_tree['Paris']],
    )


def resolve(text, photo):
    placeholder = token.parse_placeholder(text)
    resolver = token.get_resolver(placeholder.category)
    return resolver.resolve(placeholder, token.MetadataSnapshot(photo))


@pytest.mark.parametrize('text, expected', (
    ('{Date %Y}', '2019'),
    ('{Date %Y-%m-%d}', '2019-07-14'),
    ('{Date|nodate}', 'nodate'),
    ('{Date}', ''),
))
def test_date_resolver(photo, text, expected):
    assert resolve(text, photo) == expected


@pytest.mark.parametrize('text, expected', (
    ('{LrFM:caption}', 'Eiffel tower at night'),
    ('{LrFM:caption ^(\\w+)}', 'Eiffel'),
    ('{LrFM:caption tower}', 'tower'),
    ('{LrFM:caption ^(\\d+)|nomatch}', 'nomatch'),     # No match uses the default
    ('{LrFM:caption ^(\\d+)}', ''),
    ('{LrFM:title|Untitled}', 'Untitled'),             # Empty value
    ('{LrFM:missing|Untitled}', 'Untitled'),           # Missing value
    ('{LrFM:cameraModel}', 'EOS 5D-II'),               # Extracted values are sanitized
    ('{LrFM:title|a/b}', 'a/b'),                       # Defaults are not
    ('{LrFM:rating}', '4'),
    ('{LrFM:caption ([}', '{LrFM:caption ([}'),        # Invalid pattern is passed through
))
def test_formatted_metadata_resolver(photo, text, expected):
    assert resolve(text, photo) == expected


@pytest.mark.parametrize('text, expected', (
    ('{Path:1}', 'photos'),
    ('{Path:2}', '2019'),
    ('{Path:3 ^([^_]+)}', 'Paris'),
    ('{Path:3 ^(\\d+)|none}', 'none'),
    ('{Path:4|nolevel}', 'nolevel'),                   # The filename is not a level
    ('{Path:0|nolevel}', 'nolevel'),
    ('{Path:9|X}', 'X'),
    ('{Path:9}', ''),
    ('{Path:two|X}', '{Path:two|X}'),                  # Level must be a number
))
def test_path_level_resolver(photo, text, expected):
    assert resolve(text, photo) == expected


@pytest.mark.parametrize('text, expected', (
    ('{LrCC:name}', 'Beach'),
    ('{LrCC:path}', 'Trips/Beach'),
    ('{LrCC:name ^P}', 'Paris'),
    ('{LrCC:path Europe}', 'Trips/Europe- 2019/Paris'),
    ('{LrCC:name ^X|none}', 'none'),
    ('{LrCC:name ^X}', ''),
    ('{LrCC:leaf|none}', '{LrCC:leaf|none}'),          # Invalid data type is passed through
    ('{LrCC:nam}', '{LrCC:nam}'),
))
def test_contained_collection_resolver(photo, text, expected):
    assert resolve(text, photo) == expected


def test_contained_collection_resolver_no_collections():
    photo = MockPhoto(raw={'path': '/a/b.jpg'})
    assert resolve('{LrCC:name|nocoll}', photo) == 'nocoll'
    assert resolve('{LrCC:path ^(}', photo) == ''


def test_snapshot_fetches_once(mocker):
    collection = MockCollection('Album')
    photo = MockPhoto(raw={'path': '/a/b/c.jpg'}, formatted={'title': 't'}, collections=[collection])
    get_formatted = mocker.spy(photo, 'get_formatted_metadata')
    get_collections = mocker.spy(photo, 'get_contained_collections')

    snapshot = token.MetadataSnapshot(photo)
    for _ in range(3):
        assert snapshot.formatted_metadata == {'title': 't'}
        assert snapshot.collection_paths == ['Album']
        assert snapshot.path_segments == ['a', 'b', 'c.jpg']
    assert get_formatted.call_count == 1
    assert get_collections.call_count == 1
