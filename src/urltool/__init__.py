__version__ = "0.1"

from .batch import BatchItem, iter_batch, process_batch, process_url
from .config import ModifierConfig
from .errors import InvalidPortError, NoURLsError, RelativeResolutionError, URLParseError, UrlToolError
from .hacks import normalize
from .pipeline import STEPS, apply_modifiers
from .url import URL, Userinfo, clean_path, encode_query, join_host_port, parse_url_reference, split_host_port
