from requestbook.models import Collection, Header, Request
from requestbook.parser import parse_collection, parse_collection_report
from requestbook.serializer import serialize_collection


def test_multi_request_import():
    text = "### R1\nGET http://a\n\nbodyA\n\n### R2\nPOST http://b\nX: 1\n\nbodyB"
    collection = parse_collection(text, "imported")
    assert collection.name == "imported"
    assert [r.name for r in collection.requests] == ["R1", "R2"]
    first, second = collection.requests
    assert first.method == "GET"
    assert first.url == "http://a"
    assert first.headers == []
    assert first.body == "bodyA"
    assert second.method == "POST"
    assert second.url == "http://b"
    assert second.headers == [Header("X", "1")]
    assert second.body == "bodyB"


def test_missing_blank_line_degrades_to_body_only():
    collection = parse_collection("### Name\nGET http://x\nhello body", "c")
    assert collection.requests == [Request(name="Name", url="http://x", method="GET", headers=[], body="hello body")]


def test_missing_blank_line_does_not_read_header_like_lines():
    collection = parse_collection("### Name\nGET http://x\nX: 1", "c")
    request = collection.requests[0]
    assert request.headers == []
    assert request.body == "X: 1"


def test_text_without_delimiter_has_no_requests():
    assert parse_collection("", "c").requests == []
    assert parse_collection("GET http://x\n\nbody", "c").requests == []


def test_preamble_before_first_delimiter_is_ignored():
    collection = parse_collection("notes here\n### R\nGET http://x\n\nbody", "c")
    assert len(collection.requests) == 1
    assert collection.requests[0].name == "R"


def test_header_split_on_first_colon_and_trimmed():
    collection = parse_collection("### R\nGET http://x\n  Host :  http://a:8080 \n\nbody", "c")
    assert collection.requests[0].headers == [Header("Host", "http://a:8080")]


def test_header_without_colon_is_dropped_and_reported():
    report = parse_collection_report("### R\nGET http://x\nBadHeader\nX: 1\n\nbody", "c")
    assert report.collection.requests[0].headers == [Header("X", "1")]
    assert report.skipped_count == 1
    skipped = report.skipped[0]
    assert skipped.request_index == 0
    assert skipped.line_number == 2
    assert skipped.text == "BadHeader"


def test_url_with_spaces_keeps_first_token():
    collection = parse_collection("### R\nGET http://x/a b c\n\nbody", "c")
    assert collection.requests[0].url == "http://x/a"


def test_unknown_method_falls_back_to_get():
    report = parse_collection_report("### R\nPATCH http://x\n\nbody", "c")
    request = report.collection.requests[0]
    assert request.method == "GET"
    assert request.url == "http://x"
    assert "PATCH" in report.skipped[0].reason


def test_empty_segment_does_not_raise():
    report = parse_collection_report("###\n###   \n", "c")
    assert len(report.collection.requests) == 2
    assert all(r.name == "" and r.url == "" for r in report.collection.requests)
    assert report.skipped_count == 2


def test_crlf_line_endings():
    collection = parse_collection("### R\r\nPUT http://x\r\nX: 1\r\n\r\nbody", "c")
    request = collection.requests[0]
    assert request.method == "PUT"
    assert request.headers == [Header("X", "1")]
    assert request.body == "body"


def test_multiline_body_keeps_inner_blank_lines():
    collection = parse_collection("### R\nPOST http://x\n\nline1\n\nline3", "c")
    assert collection.requests[0].body == "line1\n\nline3"


def _sample_collection() -> Collection:
    return Collection(
        name="sample",
        requests=[
            Request(name="List users", url="https://api.example.com/users", body="{}"),
            Request(
                name="Create user",
                url="https://api.example.com/users",
                method="POST",
                headers=[Header("Content-Type", "application/json"), Header("X-Trace", "abc:123")],
                body='{\n  "name": "demo"\n}',
            ),
            Request(name="Delete user", url="https://api.example.com/users/1", method="DELETE"),
        ],
    )


def test_round_trip_preserves_requests():
    collection = _sample_collection()
    parsed = parse_collection(serialize_collection(collection), collection.name)
    assert parsed.requests == collection.requests


def test_round_trip_drops_inactive_headers():
    collection = Collection(
        name="c",
        requests=[Request(name="R", url="http://x", headers=[Header("A", "1"), Header("", "2"), Header("B", "")], body="b")],
    )
    parsed = parse_collection(serialize_collection(collection), "c")
    assert parsed.requests[0].headers == [Header("A", "1")]


def test_re_export_is_idempotent():
    text = serialize_collection(_sample_collection())
    assert serialize_collection(parse_collection(text, "sample")) == text


def test_whitespace_only_line_does_not_end_headers():
    collection = parse_collection("### R\nGET http://x\nX: 1\n   \nbody", "c")
    request = collection.requests[0]
    assert request.headers == []
    assert request.body == "X: 1\n   \nbody"
