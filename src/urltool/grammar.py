"""urltool.grammar
Regular expressions for URI-references (RFC 3986) and IRI-references (RFC 3987).

Each pattern exposes named groups for the components: scheme, userinfo, host,
port, one of the path_* kinds, query and fragment.
"""

import re

# Each of these ABNF rules is from RFC 3986, 3987, 6874, or 5234.
# Rules that differ between URIs and IRIs are built by _rules() below.

# ALPHA = %x41-5A / %x61-7A
_ALPHA: str = r"[A-Za-z]"

# DIGIT = %x30-39
_DIGIT: str = r"[0-9]"

# HEXDIG = DIGIT / "A" / "B" / "C" / "D" / "E" / "F"
_HEXDIG: str = rf"(?:{_DIGIT}|[A-Fa-f])"

# ucschar = %xA0-D7FF / %xF900-FDCF / %xFDF0-FFEF / %x10000-1FFFD / ... / %xE1000-EFFFD
_UCSCHAR: str = "[\xa0-\ud7ff\uf900-\ufdcf\ufdf0-\uffef\U00010000-\U0001FFFD\U00020000-\U0002FFFD\U00030000-\U0003FFFD\U00040000-\U0004FFFD\U00050000-\U0005FFFD\U00060000-\U0006FFFD\U00070000-\U0007FFFD\U00080000-\U0008FFFD\U00090000-\U0009FFFD\U000A0000-\U000AFFFD\U000B0000-\U000BFFFD\U000C0000-\U000CFFFD\U000D0000-\U000DFFFD\U000E0000-\U000EFFFD]"

# iprivate = %xE000-F8FF / %xF0000-FFFFD / %x100000-10FFFD
_IPRIVATE: str = "[\ue000-\uf8ff\U000F0000-\U000FFFFD\U00100000-\U0010FFFD]"

# pct-encoded = "%" HEXDIG HEXDIG
_PCT_ENCODED: str = rf"%{_HEXDIG}{_HEXDIG}"

# sub-delims = "!" / "$" / "&" / "'" / "(" / ")" / "*" / "+" / "," / ";" / "="
_SUB_DELIMS: str = r"[!$&'()*+,;=]"

# Printable ASCII outside every RFC 3986 character class, plus space.
# "%" is not among them: a "%" must still start a pct-encoded triplet.
_LOOSE_CHARS: str = r"[ \"<>\\^`{|}]"

# unreserved = ALPHA / DIGIT / "-" / "." / "_" / "~"
_UNRESERVED: str = rf"(?:{_ALPHA}|{_DIGIT}|[-._~])"

# scheme = ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
_SCHEME: str = rf"(?P<scheme>{_ALPHA}(?:{_ALPHA}|{_DIGIT}|[+\-.])*)"

# dec-octet = DIGIT / %x31-39 DIGIT / "1" 2DIGIT / "2" %x30-34 DIGIT / "25" %x30-35
_DEC_OCTET: str = rf"(?:{_DIGIT}|[1-9]{_DIGIT}|1{_DIGIT}{{2}}|2[0-4]{_DIGIT}|25[0-5])"

# IPv4address = dec-octet "." dec-octet "." dec-octet "." dec-octet
_IPV4ADDRESS: str = rf"{_DEC_OCTET}\.{_DEC_OCTET}\.{_DEC_OCTET}\.{_DEC_OCTET}"

# h16 = 1*4HEXDIG
_H16: str = rf"(?:{_HEXDIG}{{1,4}})"

# ls32 = ( h16 ":" h16 ) / IPv4address
_LS32: str = rf"(?:{_H16}:{_H16}|{_IPV4ADDRESS})"

# IPv6address =                            6( h16 ":" ) ls32
#             /                       "::" 5( h16 ":" ) ls32
#             / [               h16 ] "::" 4( h16 ":" ) ls32
#             / [ *1( h16 ":" ) h16 ] "::" 3( h16 ":" ) ls32
#             / [ *2( h16 ":" ) h16 ] "::" 2( h16 ":" ) ls32
#             / [ *3( h16 ":" ) h16 ] "::"    h16 ":"   ls32
#             / [ *4( h16 ":" ) h16 ] "::"              ls32
#             / [ *5( h16 ":" ) h16 ] "::"              h16
#             / [ *6( h16 ":" ) h16 ] "::"
_IPV6ADDRESS: str = "(?:" + "|".join(
    (
        rf"(?:{_H16}:){{6}}{_LS32}",
        rf"::(?:{_H16}:){{5}}{_LS32}",
        rf"(?:{_H16})?::(?:{_H16}:){{4}}{_LS32}",
        rf"(?:(?:{_H16}:){{0,1}}{_H16})?::(?:{_H16}:){{3}}{_LS32}",
        rf"(?:(?:{_H16}:){{0,2}}{_H16})?::(?:{_H16}:){{2}}{_LS32}",
        rf"(?:(?:{_H16}:){{0,3}}{_H16})?::(?:{_H16}:){_LS32}",
        rf"(?:(?:{_H16}:){{0,4}}{_H16})?::{_LS32}",
        rf"(?:(?:{_H16}:){{0,5}}{_H16})?::{_H16}",
        rf"(?:(?:{_H16}:){{0,6}}{_H16})?::",
    )
) + ")"

# IPv6addrz = IPv6address "%25" ZoneID
# ZoneID = 1*( unreserved / pct-encoded )
_IPV6ADDRZ: str = rf"{_IPV6ADDRESS}%25(?:{_UNRESERVED}|{_PCT_ENCODED})+"

# IPvFuture = "v" 1*HEXDIG "." 1*( unreserved / sub-delims / ":" )
_IPVFUTURE: str = rf"v{_HEXDIG}+\.(?:{_UNRESERVED}|{_SUB_DELIMS}|:)+"

# port = *DIGIT
_PORT: str = rf"(?P<port>{_DIGIT}*)"


def _rules(iri: bool) -> dict[str, str]:
    """Build the rules that have an "i" variant in RFC 3987."""
    # iunreserved = ALPHA / DIGIT / "-" / "." / "_" / "~" / ucschar
    unreserved: str = rf"(?:{_ALPHA}|{_DIGIT}|[-._~]|{_UCSCHAR})" if iri else _UNRESERVED

    # pchar = unreserved / pct-encoded / sub-delims / ":" / "@"
    # Paths, queries and fragments also take the printable ASCII the RFC leaves
    # out, the way common URL parsers do. They are escaped again on output.
    pchar: str = rf"(?:{unreserved}|{_PCT_ENCODED}|{_SUB_DELIMS}|[:@]|{_LOOSE_CHARS})"

    # iquery = *( ipchar / iprivate / "/" / "?" )
    query_chars: str = rf"(?:{pchar}|{_IPRIVATE}|[/?])" if iri else rf"(?:{pchar}|[/?])"

    segment: str = rf"{pchar}*"
    segment_nz: str = rf"{pchar}+"
    # segment-nz-nc = 1*( unreserved / pct-encoded / sub-delims / "@" )
    segment_nz_nc: str = rf"(?:{unreserved}|{_PCT_ENCODED}|{_SUB_DELIMS}|@|{_LOOSE_CHARS})+"

    # IP-literal = "[" ( IPv6address / IPv6addrz / IPvFuture  ) "]"
    # (IRIs don't support zone identifiers)
    if iri:
        ip_literal: str = rf"\[(?:{_IPV6ADDRESS}|{_IPVFUTURE})\]"
    else:
        ip_literal = rf"\[(?:{_IPV6ADDRESS}|{_IPV6ADDRZ}|{_IPVFUTURE})\]"

    # reg-name = *( unreserved / pct-encoded / sub-delims )
    reg_name: str = rf"(?:{unreserved}|{_PCT_ENCODED}|{_SUB_DELIMS})*"

    # userinfo = *( unreserved / pct-encoded / sub-delims / ":" )
    userinfo: str = rf"(?P<userinfo>(?:{unreserved}|{_PCT_ENCODED}|{_SUB_DELIMS}|:)*)"

    # host = IP-literal / IPv4address / reg-name
    host: str = rf"(?P<host>{ip_literal}|{_IPV4ADDRESS}|{reg_name})"

    return {
        # authority = [ userinfo "@" ] host [ ":" port ]
        "authority": rf"(?:{userinfo}@)?{host}(?::{_PORT})?",
        # path-abempty = *( "/" segment )
        "path_abempty": rf"(?P<path_abempty>(?:/{segment})*)",
        # path-absolute = "/" [ segment-nz *( "/" segment ) ]
        "path_absolute": rf"(?P<path_absolute>/(?:{segment_nz}(?:/{segment})*)?)",
        # path-rootless = segment-nz *( "/" segment )
        "path_rootless": rf"(?P<path_rootless>{segment_nz}(?:/{segment})*)",
        # path-noscheme = segment-nz-nc *( "/" segment )
        "path_noscheme": rf"(?P<path_noscheme>{segment_nz_nc}(?:/{segment})*)",
        # path-empty = 0<pchar>
        "path_empty": r"(?P<path_empty>)",
        # query = *( pchar / "/" / "?" )
        "query": rf"(?P<query>{query_chars}*)",
        # fragment = *( pchar / "/" / "?" )
        "fragment": rf"(?P<fragment>(?:{pchar}|[/?])*)",
    }


def _absolute_pattern(iri: bool) -> re.Pattern[str]:
    r: dict[str, str] = _rules(iri)
    # hier-part = "//" authority path-abempty / path-absolute / path-rootless / path-empty
    hier_part: str = (
        rf"(?://{r['authority']}{r['path_abempty']}|{r['path_absolute']}|{r['path_rootless']}|{r['path_empty']})"
    )
    # URI = scheme ":" hier-part [ "?" query ] [ "#" fragment ]
    return re.compile(rf"\A{_SCHEME}:{hier_part}(?:\?{r['query']})?(?:#{r['fragment']})?\Z")


def _relative_pattern(iri: bool) -> re.Pattern[str]:
    r: dict[str, str] = _rules(iri)
    # relative-part = "//" authority path-abempty / path-absolute / path-noscheme / path-empty
    relative_part: str = (
        rf"(?://{r['authority']}{r['path_abempty']}|{r['path_absolute']}|{r['path_noscheme']}|{r['path_empty']})"
    )
    # relative-ref = relative-part [ "?" query ] [ "#" fragment ]
    return re.compile(rf"\A{relative_part}(?:\?{r['query']})?(?:#{r['fragment']})?\Z")


URI_PAT: re.Pattern[str] = _absolute_pattern(iri=False)
IRI_PAT: re.Pattern[str] = _absolute_pattern(iri=True)
RELATIVE_REF_PAT: re.Pattern[str] = _relative_pattern(iri=False)
IRELATIVE_REF_PAT: re.Pattern[str] = _relative_pattern(iri=True)
