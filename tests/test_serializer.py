from requestbook.models import Collection, Header, Request
from requestbook.serializer import serialize_collection, serialize_request


def test_only_active_headers_are_emitted():
    request = Request(
        name="R",
        url="http://x",
        headers=[Header("A", "1"), Header("", "2"), Header("B", "")],
        body="{}",
    )
    assert serialize_request(request) == "### R\nGET http://x\nA: 1\n\n{}\n\n"


def test_no_headers_keeps_single_blank_line_before_body():
    request = Request(name="R", url="http://x", method="POST", body='{"a": 1}')
    assert serialize_request(request) == '### R\nPOST http://x\n\n{"a": 1}\n\n'


def test_blocks_are_joined_in_order():
    collection = Collection(
        name="C",
        requests=[
            Request(name="R1", url="http://a", body="bodyA"),
            Request(name="R2", url="http://b", method="DELETE", headers=[Header("X", "1")], body="bodyB"),
        ],
    )
    expected = (
        "### R1\nGET http://a\n\nbodyA\n\n"
        "\n"
        "### R2\nDELETE http://b\nX: 1\n\nbodyB\n\n"
    )
    assert serialize_collection(collection) == expected


def test_empty_collection_serializes_to_empty_text():
    assert serialize_collection(Collection(name="C")) == ""
