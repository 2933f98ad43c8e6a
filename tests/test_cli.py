import io
import sys

import pytest

from urltool.cli import build_parser, main, parse_bool, split_group


class _Terminal(io.StringIO):
    def isatty(self):
        return True


def run(capsys, *argv):
    code = main(list(argv))
    captured = capsys.readouterr()
    return code, captured.out, captured.err


def test_groups_apply_their_own_modifiers(capsys):
    code, out, err = run(capsys, "a.com", "-s", "https", "b.com", "-s", "ftp")
    assert code == 0
    assert out == "https://a.com\nftp://b.com"
    assert err == ""


def test_several_urls_in_one_group(capsys):
    code, out, _ = run(capsys, "a.com", "b.com", "-s", "https")
    assert code == 0
    assert out == "https://a.com\nhttps://b.com"


def test_flag_equals_syntax(capsys):
    code, out, _ = run(capsys, "example.com", "-s=https", "-P=8443", "-p=/x")
    assert code == 0
    assert out == "https://example.com:8443/x"


def test_double_dash_flag(capsys):
    _, out, _ = run(capsys, "a.com", "--s", "https")
    assert out == "https://a.com"


def test_bool_flag_values(capsys):
    _, out, _ = run(capsys, "example.com/foo", "-nh=true")
    assert out == "example.com/foo"
    _, out, _ = run(capsys, "example.com/foo", "-nh=false")
    assert out == "//example.com/foo"
    _, out, _ = run(capsys, "example.com/foo", "-nh", "-s", "x")
    assert out == "x://example.com/foo"


def test_query_flags(capsys):
    _, out, _ = run(capsys, "http://h/?a=1", "-q", "a=2", "-q", "b")
    assert out == "http://h/?a=1&a=2&b="
    _, out, _ = run(capsys, "http://h/?a=1", "-sq", "-q", "k=v")
    assert out == "http://h/?k=v"


def test_user_flags(capsys):
    _, out, _ = run(capsys, "http://u:p@h/", "-U")
    assert out == "http://h/"
    _, out, _ = run(capsys, "http://u:p@h/", "-U", "-u", "bob")
    assert out == "http://bob@h/"


def test_flag_value_may_start_with_dash(capsys):
    _, out, _ = run(capsys, "http://h/", "-f", "-top")
    assert out == "http://h/#-top"


def test_invalid_port(capsys):
    code, out, err = run(capsys, "example.com", "-P", "abc")
    assert code == 1
    assert out == ""
    assert err == "invalid port number 'abc'\n"


def test_partial_output_before_error(capsys):
    code, out, err = run(capsys, "a.com", "-s", "https", "b.com", "-P", "x")
    assert code == 1
    assert out == "https://a.com"
    assert "invalid port number 'x'" in err


def test_parse_error_skips_to_next_group(capsys):
    code, out, err = run(capsys, "a.com", "a%zz", "-s", "x", "c.com", "-s", "https")
    assert code == 1
    assert out == "https://c.com"
    assert err == "unable to parse URL 'a%zz': not a valid URL-reference\n"


def test_relative_flag(capsys):
    code, out, _ = run(capsys, "http://h/a/b", "-r", "../c")
    assert code == 0
    assert out == "http://h/c"


def test_no_urls_given(capsys):
    code, out, err = run(capsys, "-s", "https")
    assert code == 1
    assert out == ""
    assert err == "no URLs given\n"


def test_double_dash_ends_flags(capsys):
    code, out, _ = run(capsys, "a.com", "-s", "https", "--", "b.com")
    assert code == 0
    assert out == "https://a.com\n//b.com"


@pytest.mark.parametrize("argv,message", [
    (["a.com", "-x"], "flag provided but not defined: -x"),
    (["a.com", "-s"], "flag needs an argument: -s"),
    (["a.com", "---s", "x"], "bad flag syntax: ---s"),
    (["a.com", "-U=maybe"], "invalid boolean value 'maybe'"),
])
def test_usage_errors(capsys, argv, message):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    assert exc.value.code == 2
    assert message in capsys.readouterr().err


@pytest.mark.parametrize("flag", ["-h", "-help", "--help"])
def test_help(capsys, flag):
    with pytest.raises(SystemExit) as exc:
        main(["a.com", flag])
    assert exc.value.code == 2
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Modify one or more URLs" in captured.err


def test_no_arguments(capsys):
    code, out, err = run(capsys)
    assert code == 2
    assert out == ""
    assert "usage: urltool" in err


def test_terminal_gets_trailing_newline(monkeypatch):
    terminal = _Terminal()
    monkeypatch.setattr(sys, "stdout", terminal)
    assert main(["a.com", "-s", "https"]) == 0
    assert terminal.getvalue() == "https://a.com\n"


def test_split_group():
    parser = build_parser()
    urls, flags, rest = split_group(parser, ["a", "b", "-s", "x", "-U", "-q=k=v", "c", "-j"])
    assert urls == ["a", "b"]
    assert flags == ["-s=x", "-U", "-q=k=v"]
    assert rest == ["c", "-j"]


def test_split_group_lone_dash_is_a_url():
    urls, flags, rest = split_group(build_parser(), ["-", "-s", "x"])
    assert urls == ["-"]
    assert flags == ["-s=x"]
    assert rest == []


@pytest.mark.parametrize("value,expected", [
    ("1", True), ("t", True), ("TRUE", True), ("True", True),
    ("0", False), ("f", False), ("FALSE", False), ("false", False),
])
def test_parse_bool(value, expected):
    assert parse_bool(value) is expected
