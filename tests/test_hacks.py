import pytest

from urltool.hacks import normalize, split_bare_domain, split_userinfo_scheme
from urltool.url import URL, Userinfo, parse_url_reference


def test_userinfo_scheme_with_path():
    url = normalize(parse_url_reference("user:pass@host.com/path"))
    assert url.user == Userinfo("user", "pass")
    assert url.host == "host.com"
    assert url.path == "/path"
    assert url.scheme == "" and url.opaque == ""
    assert url.serialize() == "//user:pass@host.com/path"


def test_userinfo_scheme_without_path():
    url = normalize(parse_url_reference("user:pass@host.com"))
    assert url.user == Userinfo("user", "pass")
    assert url.host == "host.com"
    assert url.path == ""


def test_userinfo_scheme_keeps_port_in_host():
    url = normalize(parse_url_reference("user:pass@host.com:8080/x"))
    assert url.host == "host.com:8080"
    assert url.path == "/x"


def test_userinfo_scheme_splits_at_first_at_sign():
    url = normalize(parse_url_reference("user:p@ss@host.com"))
    assert url.user == Userinfo("user", "p")
    assert url.host == "ss@host.com"


def test_bare_domain_with_path():
    url = normalize(parse_url_reference("example.com/foo/bar"))
    assert url.host == "example.com"
    assert url.path == "/foo/bar"
    assert url.serialize() == "//example.com/foo/bar"


def test_bare_domain_alone():
    url = normalize(parse_url_reference("example.com"))
    assert url.host == "example.com"
    assert url.path == ""


@pytest.mark.parametrize("data", [
    "http://example.com/x",
    "localhost:8080",
    "//example.com/x",
    "?q=1",
])
def test_well_formed_urls_are_left_alone(data):
    url = parse_url_reference(data)
    assert normalize(parse_url_reference(data)) == url


def test_rules_are_exclusive():
    url = parse_url_reference("user:pass@host.com/path")
    assert split_userinfo_scheme(url)
    # Now scheme-less with a host, so the bare domain rule has nothing to do.
    assert not split_bare_domain(url)
    assert not split_userinfo_scheme(url)


def test_userinfo_rule_needs_empty_userinfo():
    url = URL(scheme="a", opaque="b@c", user=Userinfo("x"))
    assert not split_userinfo_scheme(url)
    assert url.opaque == "b@c"
