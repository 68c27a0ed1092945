import io

import pytest

from capis.metadata import Cookie, Header, Metadata, Method, Param
from capis.read_yaml import MetadataError, load_metadata, read_yaml


def test_empty_document_gives_defaults():
    meta = read_yaml("")
    assert meta == Metadata()
    assert meta.host == "localhost"
    assert meta.path == "/"
    assert meta.secure is True


def test_scalar_fields():
    doc = (
        "method: POST\n"
        "host: api.example.com\n"
        "path: /v1/items\n"
        "url: https://api.example.com/v1/items\n"
        "timeout: 5000\n"
        "secure: false\n"
    )
    meta = read_yaml(doc)
    assert meta.method is Method.POST
    assert meta.host == "api.example.com"
    assert meta.path == "/v1/items"
    assert meta.url == "https://api.example.com/v1/items"
    assert meta.timeout == 5000
    assert meta.secure is False


def test_top_level_keys_are_case_insensitive():
    meta = read_yaml("METHOD: PUT\nHost: example.com\n")
    assert meta.method is Method.PUT
    assert meta.host == "example.com"


@pytest.mark.parametrize("name", ["post", "PATCH", "Get"])
def test_unknown_method_falls_back_to_get(name):
    assert read_yaml(f"method: {name}\n").method is Method.GET


def test_delete_and_update_methods():
    assert read_yaml("method: DELETE\n").method is Method.DELETE
    assert read_yaml("method: UPDATE\n").method is Method.UPDATE


@pytest.mark.parametrize("text, expected", [("15abc", 15), ("abc", 0), ("-20", -20)])
def test_timeout_reads_leading_integer(text, expected):
    assert read_yaml(f"timeout: '{text}'\n").timeout == expected


@pytest.mark.parametrize("text, expected", [("true", True), ("yes", False), ("True", False)])
def test_secure_requires_exact_true(text, expected):
    assert read_yaml(f"secure: {text}\n").secure is expected


def test_headers_as_sequence():
    doc = (
        "headers:\n"
        "  - key: Accept\n"
        "    value: application/json\n"
        "  - Key: X-Trace\n"
        "    VALUE: abc\n"
        "  - key: Missing-Value\n"
    )
    meta = read_yaml(doc)
    assert meta.headers == [
        Header("Accept", "application/json"),
        Header("X-Trace", "abc"),
    ]


def test_headers_as_mapping_keep_case_and_order():
    doc = "headers:\n  Accept: text/html\n  X-Custom: one\n"
    meta = read_yaml(doc)
    assert meta.headers == [Header("Accept", "text/html"), Header("X-Custom", "one")]


def test_params_in_both_forms():
    seq = read_yaml("params:\n  - key: q\n    value: cats\n")
    assert seq.params == [Param("q", "cats")]
    mapping = read_yaml("params:\n  page: '2'\n  size: '10'\n")
    assert mapping.params == [Param("page", "2"), Param("size", "10")]


def test_later_empty_headers_do_not_clear_earlier():
    doc = "headers:\n  A: one\nheaders: []\n"
    assert read_yaml(doc).headers == [Header("A", "one")]


def test_cookie_defaults_and_flags():
    doc = (
        "cookies:\n"
        "  - name: session\n"
        "    value: token\n"
        "  - name: pref\n"
        "    value: dark\n"
        "    domain: example.com\n"
        "    path: /app\n"
        "    expires: never\n"
        "    HttpOnly: true\n"
        "    secure: true\n"
    )
    meta = read_yaml(doc)
    assert meta.cookies == [
        Cookie(name="session", value="token"),
        Cookie(
            name="pref",
            value="dark",
            domain="example.com",
            path="/app",
            expires="never",
            http_only=True,
            secure=True,
        ),
    ]
    assert meta.cookies[0].path == "/"
    assert meta.cookies[0].domain == ""


def test_cookie_without_name_is_dropped():
    doc = "cookies:\n  - value: token\n  - name: keep\n    value: token\n"
    assert [c.name for c in read_yaml(doc).cookies] == ["keep"]


def test_cookies_as_mapping_are_ignored():
    assert read_yaml("cookies:\n  session: token\n").cookies == []


def test_nested_unknown_key_is_ignored():
    doc = "extra:\n  host: elsewhere\nhost: example.com\n"
    assert read_yaml(doc).host == "example.com"


def test_only_first_document_is_used():
    doc = "host: first.example.com\n---\nhost: second.example.com\n"
    assert read_yaml(doc).host == "first.example.com"


def test_file_like_stream():
    meta = read_yaml(io.StringIO("path: /status\n"))
    assert meta.path == "/status"


def test_invalid_yaml_raises():
    with pytest.raises(MetadataError):
        read_yaml("host: [unclosed\n")


def test_load_metadata_from_file(tmp_path):
    target = tmp_path / "request.yaml"
    target.write_text("method: PUT\nhost: example.com\n", encoding="utf-8")
    meta = load_metadata(target)
    assert meta.method is Method.PUT
    assert meta.host == "example.com"


def test_load_metadata_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_metadata(tmp_path / "absent.yaml")