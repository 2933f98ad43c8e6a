"""Best-effort reinterpretation of scheme-less URLs.

Without a "//" authority marker, "user:pass@example.com/x" parses with
"user" as its scheme and "example.com/foo" parses as a bare path. The
rules here move those pieces to where a person typing them meant them to go.
"""

import logging

from .url import URL, Userinfo

logger = logging.getLogger(__name__)


def split_userinfo_scheme(url: URL) -> bool:
    """Rewrite a user:pass@host[/path] misparse. Returns True if the URL was changed."""
    at = url.opaque.find("@")
    if not url.scheme or at == -1 or url.host or url.path or url.user is not None:
        return False

    username, password = url.scheme, url.opaque[:at]
    host, slash, path = url.opaque[at + 1 :].partition("/")
    url.user = Userinfo(username=username, password=password)
    url.host = host
    url.path = slash + path
    url.scheme = ""
    url.opaque = ""
    logger.debug(f"Read scheme {username!r} as a username for host {host!r}")
    return True


def split_bare_domain(url: URL) -> bool:
    """Rewrite a domain.tld[/path] misparse. Returns True if the URL was changed."""
    if url.scheme or url.host or not url.path:
        return False

    host, slash, path = url.path.partition("/")
    url.host = host
    url.path = slash + path
    logger.debug(f"Read leading path segment {host!r} as a host")
    return True


def normalize(url: URL) -> URL:
    """Apply the first of the two rules that matches, if any."""
    if not split_userinfo_scheme(url):
        split_bare_domain(url)
    return url
