"""The ordered list of modifications applied to each URL.

Steps run in a fixed order because later ones read what earlier ones wrote:
the port is added to whatever host -H left behind, query values are appended
after -sq cleared the old ones, and -r resolves against the finished URL.
"""

import logging
import re
from typing import Callable

from .config import ModifierConfig
from .errors import InvalidPortError, RelativeResolutionError, wrap_error
from .url import (
    URL,
    Userinfo,
    clean_path,
    encode_query,
    join_host_port,
    join_path,
    parse_url_reference,
    split_host_port,
)

logger = logging.getLogger(__name__)

Step = Callable[[URL, ModifierConfig], URL]

_PORT_RE = re.compile(r"[0-9]+")
_MAX_PORT = 2**64 - 1
_MAX_PORT_DIGITS = len(str(_MAX_PORT))


def set_scheme(url: URL, config: ModifierConfig) -> URL:
    if config.scheme is not None:
        url.scheme = config.scheme
    return url


def set_opaque(url: URL, config: ModifierConfig) -> URL:
    if config.opaque is not None:
        url.opaque = config.opaque
    return url


def set_userinfo(url: URL, config: ModifierConfig) -> URL:
    """Strip, then override username and password.

    Userinfo is rebuilt only when the resulting username or password is
    non-empty, so -U alone removes it and -U -u NAME replaces it.
    """
    if config.strip_user:
        url.user = None

    username = url.user.username if url.user is not None else ""
    password = url.user.password if url.user is not None else None
    if config.username is not None:
        username = config.username
    if config.password is not None:
        password = config.password

    if username or password:
        url.user = Userinfo(username=username, password=password)
    return url


def set_host(url: URL, config: ModifierConfig) -> URL:
    if config.host is not None:
        url.host = config.host
    return url


def set_port(url: URL, config: ModifierConfig) -> URL:
    """Replace the port of the current host, or add one."""
    if config.port is None:
        return url

    port = config.port
    # Leading zeros are allowed, so compare the significant digits only.
    digits = port.lstrip("0")
    if not _PORT_RE.fullmatch(port) or len(digits) > _MAX_PORT_DIGITS or int(digits or "0") > _MAX_PORT:
        raise InvalidPortError(
            f"invalid port number {port!r}",
            {"port": port, "url": str(url)},
        )

    try:
        host, _ = split_host_port(url.host)
    except ValueError:
        host = url.host
        if host.startswith("[") and host.endswith("]"):
            host = host[1:-1]
    url.host = join_host_port(host, port)
    return url


def set_path(url: URL, config: ModifierConfig) -> URL:
    """Join a relative (or -j) path onto the current one, or replace it, then clean the result."""
    if config.path is None:
        return url

    if config.join_path or not config.path.startswith("/"):
        path = join_path(url.path or "/", config.path)
    else:
        path = config.path
    url.path = clean_path(path)
    return url


def set_force_query(url: URL, config: ModifierConfig) -> URL:
    url.force_query = config.force_query
    return url


def strip_query(url: URL, config: ModifierConfig) -> URL:
    if config.strip_query:
        url.raw_query = ""
    return url


def append_query(url: URL, config: ModifierConfig) -> URL:
    """Append -q values. A non-empty query is always re-encoded with sorted keys."""
    values = url.query()
    for key, appended in config.query.items():
        values.setdefault(key, []).extend(appended)
    if values:
        url.raw_query = encode_query(values)
    return url


def set_fragment(url: URL, config: ModifierConfig) -> URL:
    if config.fragment is not None:
        url.fragment = config.fragment
    return url


def resolve_relative(url: URL, config: ModifierConfig) -> URL:
    """Replace the URL with the -r reference resolved against it."""
    if config.relative is None:
        return url

    try:
        ref = parse_url_reference(config.relative)
    except ValueError as e:
        raise wrap_error(
            e,
            f"parse {config.relative!r} relative to {str(url)!r}",
            {"relative": config.relative, "url": str(url)},
            RelativeResolutionError,
        ) from e
    return url.join(ref)


STEPS: tuple[tuple[str, Step], ...] = (
    ("scheme", set_scheme),
    ("opaque", set_opaque),
    ("userinfo", set_userinfo),
    ("host", set_host),
    ("port", set_port),
    ("path", set_path),
    ("force-query", set_force_query),
    ("strip-query", strip_query),
    ("append-query", append_query),
    ("fragment", set_fragment),
    ("relative", resolve_relative),
)


def apply_modifiers(url: URL, config: ModifierConfig) -> URL:
    """Run every step over url in order and return the result.

    The URL is modified in place except by the final relative step, which
    returns a new one. Raises InvalidPortError or RelativeResolutionError;
    the steps after the failing one do not run.
    """
    for name, step in STEPS:
        url = step(url, config)
        logger.debug(f"{name}: {url}")
    return url
