import re

ENV_VAR = 'PHOTOSTATLR_CONFIG'

# Placeholder syntax: {<category><separator><args>|<default>}
TOKEN_START = '{'
TOKEN_END = '}'
DEFAULT_SEPARATOR = '|'

CATEGORY_DATE = 'Date'
CATEGORY_FORMATTED_METADATA = 'LrFM'
CATEGORY_PATH = 'Path'
CATEGORY_CONTAINED_COLLECTION = 'LrCC'

# Presence-check order for the category resolvers
CATEGORIES = (
    CATEGORY_DATE,
    CATEGORY_FORMATTED_METADATA,
    CATEGORY_PATH,
    CATEGORY_CONTAINED_COLLECTION,
)

# Character expected between category and arguments. None allows whitespace
CATEGORY_SEPARATORS = {
    CATEGORY_DATE: None,
    CATEGORY_FORMATTED_METADATA: ':',
    CATEGORY_PATH: ':',
    CATEGORY_CONTAINED_COLLECTION: ':',
}

PATTERN_CATEGORY = re.compile(r'[A-Za-z]\w*')
PATTERN_METADATA_KEY = r'\w+'
PATTERN_PATH_LEVEL = r'\d+'
PATTERN_ALBUM = re.compile(r'(.+)/([^/]+)')
PATTERN_BACKLINK = re.compile(r'(\d+)')
PATTERN_BACKLINK_TIME = re.compile(r'\d+/(\d+)')

DATA_TYPE_NAME = 'name'
DATA_TYPE_PATH = 'path'
DATA_TYPES = (DATA_TYPE_NAME, DATA_TYPE_PATH)

# Substituted for a filename template that cannot produce a valid filename
MANDATORY_MISSING = '?'

TEMPLATE_PATH = 'path'
TEMPLATE_FILENAME = 'filename'

ILLEGAL_FILENAME_CHARS = re.compile(r'[\\/:?*"<>|]')
ILLEGAL_FILENAME_REPLACEMENT = '-'
PATH_SEPARATORS = ('/', '\\')

RAW_EXTENSIONS = frozenset((
    '3fr', 'arw', 'cr2', 'dng', 'dcr', 'erf', 'mef', 'mrw', 'nef', 'orf',
    'pef', 'raf', 'raw', 'rw2', 'srw', 'x3f',
))
VIDEO_EXTENSIONS = frozenset((
    '3gp', '3gpp', 'avchd', 'avi', 'm2t', 'm2ts', 'm4v', 'mov', 'mp4', 'mpe',
    'mpg', 'mts',
))

# Raw metadata keys searched for the capture date, in order of precedence
DATE_ORIGINAL_KEYS = ('dateTimeOriginal', 'dateTimeOriginalISO8601')
DATE_DIGITIZED_KEYS = ('dateTimeDigitized', 'dateTimeDigitizedISO8601')
DATE_CREATED_KEY = 'dateCreated'

LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

WRITE_ACCESS_TIMEOUT = 5

# Collection settings keys
KEY_DST_ROOT = 'dstRoot'
KEY_BASE_DIR = 'baseDir'
