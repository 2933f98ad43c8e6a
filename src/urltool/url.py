"""urltool.url
A mutable URL value with the field layout urltool edits: scheme, opaque,
userinfo, host[:port], path, query and fragment.
Parsing follows RFCs 3986 and 3987; recomposition follows Go's net/url.
"""

import copy
import dataclasses
import posixpath
import re
import string

from typing import Iterable, Self
from urllib.parse import parse_qsl, urlencode

from .grammar import IRELATIVE_REF_PAT, IRI_PAT, RELATIVE_REF_PAT, URI_PAT

_UNRESERVED_CHARS: str = string.ascii_letters + string.digits + "-._~"
_PCT_ENCODED_RE: re.Pattern[str] = re.compile(r"%[0-9A-Fa-f]{2}")

# Characters allowed to appear unescaped in each component, beyond unreserved.
# A "%" is kept only when it already starts a %XX escape.
_USERNAME_SAFE: str = "!$&'()*+,;="
_PASSWORD_SAFE: str = _USERNAME_SAFE + ":"
_HOST_SAFE: str = "!$&'()*+,;=:[]"
_PATH_SAFE: str = "/!$&'()*+,;=:@"
_FRAGMENT_SAFE: str = _PATH_SAFE + "?"


def _escape(text: str, safe: str) -> str:
    """Percent-encode the ASCII characters of text that are neither unreserved nor in safe.
    Existing %XX escapes and non-ASCII characters are left alone so IRIs stay IRIs.
    """
    result: str = ""
    for i, ch in enumerate(text):
        if not ch.isascii() or ch in _UNRESERVED_CHARS or ch in safe:
            result += ch
        elif ch == "%" and _PCT_ENCODED_RE.match(text, i):
            result += ch
        else:
            result += f"%{ord(ch):02X}"
    return result


@dataclasses.dataclass
class Userinfo:
    """The user[:password] part of an authority. A password of None means there was no ":"."""

    username: str
    password: str | None = None

    @classmethod
    def parse(cls, raw: str) -> Self:
        username, colon, password = raw.partition(":")
        return cls(username=username, password=password if colon else None)

    def serialize(self: Self) -> str:
        result: str = _escape(self.username, _USERNAME_SAFE)
        if self.password is not None:
            result += f":{_escape(self.password, _PASSWORD_SAFE)}"
        return result


@dataclasses.dataclass
class URL:
    """A URL-reference. Use parse_url_reference to build one from a string.

    An empty string means the component is absent, except for user, where None
    is absent and Userinfo("") is an empty username (as in "http://@host").
    """

    scheme: str = ""
    opaque: str = ""
    user: Userinfo | None = None
    host: str = ""
    path: str = ""
    raw_query: str = ""
    force_query: bool = False
    fragment: str = ""

    def __str__(self: Self) -> str:
        return self.serialize()

    @property
    def has_authority(self: Self) -> bool:
        return self.host != "" or self.user is not None

    @property
    def has_query(self: Self) -> bool:
        return self.raw_query != "" or self.force_query

    @property
    def reference_path(self: Self) -> str:
        """The path as RFC 3986 sees it, which includes the opaque part."""
        return self.opaque or self.path

    def set_reference_path(self: Self, path: str) -> None:
        """Store an RFC 3986 path, as opaque when it has no authority or root to hang from."""
        if self.scheme and not self.has_authority and path and not path.startswith("/"):
            self.opaque, self.path = path, ""
        else:
            self.opaque, self.path = "", path

    def query(self: Self) -> dict[str, list[str]]:
        """Decode raw_query into a key -> values mapping. "k" without "=" decodes to k: [""]."""
        values: dict[str, list[str]] = {}
        for key, value in parse_qsl(self.raw_query, keep_blank_values=True):
            values.setdefault(key, []).append(value)
        return values

    def serialize(self: Self) -> str:
        """Recompose the URL string the way Go's url.URL.String does."""
        result: str = ""
        if self.scheme:
            result += f"{self.scheme}:"
        if self.opaque:
            result += self.opaque
        else:
            if self.scheme or self.host or self.user is not None:
                if self.host or self.path or self.user is not None:
                    result += "//"
                if self.user is not None:
                    result += f"{self.user.serialize()}@"
                result += _escape(self.host, _HOST_SAFE)
            path: str = _escape(self.path, _PATH_SAFE)
            if path and not path.startswith("/") and self.host:
                result += "/"
            # A colon in the first segment of a relative path would read back as a scheme.
            if not result and ":" in path.partition("/")[0]:
                result += "./"
            result += path
        if self.has_query:
            result += f"?{self.raw_query}"
        if self.fragment:
            result += f"#{_escape(self.fragment, _FRAGMENT_SAFE)}"
        return result

    def join(self: Self, ref: Self) -> Self:
        """Implementation of the "Transform References" algorithm from RFC 3986 section 5.2.2
        Returns a new URL for ref resolved against self; neither input is modified.
        """

        scheme: str
        user: Userinfo | None
        host: str
        path: str
        query_source: URL

        # Kept close to the pseudocode in the RFC so it is easy to check against it.
        if ref.scheme:
            scheme = ref.scheme
            user = ref.user
            host = ref.host
            path = _remove_dot_segments(ref.reference_path)
            query_source = ref
        else:
            if ref.has_authority:
                user = ref.user
                host = ref.host
                path = _remove_dot_segments(ref.reference_path)
                query_source = ref
            else:
                if len(ref.reference_path) == 0:
                    path = self.reference_path
                    if ref.has_query:
                        query_source = ref
                    else:
                        query_source = self
                else:
                    if ref.reference_path.startswith("/"):
                        path = _remove_dot_segments(ref.reference_path)
                    else:
                        path = _merge_paths(self, ref)
                        path = _remove_dot_segments(path)
                    query_source = ref
                user = self.user
                host = self.host
            scheme = self.scheme

        target: Self = self.__class__(
            scheme=scheme,
            user=copy.copy(user),
            host=host,
            raw_query=query_source.raw_query,
            force_query=query_source.force_query,
            fragment=ref.fragment,
        )
        target.set_reference_path(path)
        return target


def _remove_dot_segments(path: str) -> str:
    """Implementation of the "remove_dot_segments" routine from RFC 3986 section 5.2.4"""
    result: str = ""
    while len(path) > 0:
        if path.startswith("./") or path.startswith("../"):
            _, _, path = path.partition("/")
        elif path.startswith("/./") or path == "/.":
            path = f"/{path[len('/./') :]}"
        elif path.startswith("/../") or path == "/..":
            path = f"/{path[len('/../') :]}"
            result, _, _ = result.rpartition("/")
        elif path in (".", ".."):
            path = ""
        else:
            if path.startswith("/"):
                _, _, path = path.partition("/")
                result += "/"
            first_seg, slash, rest = path.partition("/")
            path = slash + rest
            result += first_seg
    return result


def _merge_paths(base: URL, ref: URL) -> str:
    """Implementation of the "merge" routine defined in RFC 3986 section 5.2.3"""
    if base.has_authority and len(base.reference_path) == 0:
        return f"/{ref.reference_path}"
    dirname, slash, _ = base.reference_path.rpartition("/")
    return dirname + slash + ref.reference_path


def _parse(data: str, pattern: re.Pattern[str]) -> URL:
    m: re.Match[str] | None = pattern.match(data)
    if m is None:
        raise ValueError("parse failed")
    groups: dict[str, str | None] = m.groupdict()

    # Relative references don't have a scheme group in their regexes.
    url: URL = URL(scheme=(groups.get("scheme") or "").lower())

    host: str | None = groups["host"]
    if host is not None:
        if groups["port"] is not None:
            host += f":{groups['port']}"
        url.host = host
    if groups["userinfo"] is not None:
        url.user = Userinfo.parse(groups["userinfo"])

    # Exactly one of the path_* alternatives matched.
    url.set_reference_path(
        next(value for name, value in groups.items() if name.startswith("path_") and value is not None)
    )

    query: str | None = groups["query"]
    if query == "":
        url.force_query = True
    elif query is not None:
        url.raw_query = query

    url.fragment = groups["fragment"] or ""
    return url


def parse_url_reference(data: str) -> URL:
    """Parse an absolute URL or a relative reference.
    Non-ASCII input is parsed with the RFC 3987 IRI rules.
    Raises ValueError when data is neither.
    """
    patterns: tuple[re.Pattern[str], ...] = (
        (URI_PAT, RELATIVE_REF_PAT) if data.isascii() else (IRI_PAT, IRELATIVE_REF_PAT)
    )
    for pattern in patterns:
        try:
            return _parse(data, pattern)
        except ValueError:
            pass
    raise ValueError("not a valid URL-reference")


def encode_query(values: dict[str, list[str]]) -> str:
    """Encode a key -> values mapping as "k=v&..." with keys sorted and values in order."""
    pairs: Iterable[tuple[str, str]] = ((key, value) for key in sorted(values) for value in values[key])
    return urlencode(list(pairs))


def split_host_port(hostport: str) -> tuple[str, str]:
    """Split "host:port", "[v6]:port" or "v4:port" into host and port, like Go's net.SplitHostPort.
    Raises ValueError when there is no port or the address is malformed.
    """
    i: int = hostport.rfind(":")
    if i < 0:
        raise ValueError(f"missing port in address {hostport!r}")

    j: int = 0
    k: int = 0
    if hostport.startswith("["):
        end: int = hostport.find("]")
        if end < 0:
            raise ValueError(f"missing ']' in address {hostport!r}")
        if end + 1 == len(hostport):
            raise ValueError(f"missing port in address {hostport!r}")
        if end + 1 != i:
            if hostport[end + 1] == ":":
                raise ValueError(f"too many colons in address {hostport!r}")
            raise ValueError(f"missing port in address {hostport!r}")
        host: str = hostport[1:end]
        j, k = 1, end + 1
    else:
        host = hostport[:i]
        if ":" in host:
            raise ValueError(f"too many colons in address {hostport!r}")

    if "[" in hostport[j:]:
        raise ValueError(f"unexpected '[' in address {hostport!r}")
    if "]" in hostport[k:]:
        raise ValueError(f"unexpected ']' in address {hostport!r}")
    return host, hostport[i + 1 :]


def join_host_port(host: str, port: str) -> str:
    """Inverse of split_host_port: IPv6 literals get their brackets back."""
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


def join_path(base: str, elem: str) -> str:
    """Append elem to base with a "/" between them, like Go's path.Join before cleaning."""
    if not elem:
        return base
    if not base:
        return elem
    return f"{base}/{elem}"


def clean_path(path: str) -> str:
    """Lexically clean a slash-separated path.

    "." and ".." segments are resolved, repeated and trailing slashes dropped.
    A ".." can never climb above the root: anything that would still start
    with "/../" becomes "/".
    """
    cleaned: str = posixpath.normpath(path)
    # POSIX keeps exactly two leading slashes, URL paths don't.
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    if cleaned.startswith("/../"):
        cleaned = "/"
    return cleaned
