from __future__ import annotations

from requestbook.models import Collection, Request

BLOCK_DELIMITER = "###"


def serialize_request(request: Request) -> str:
    header_lines = "\n".join(f"{header.key}: {header.value}" for header in request.active_headers())
    header_block = f"{header_lines}\n" if header_lines else ""
    return f"{BLOCK_DELIMITER} {request.name}\n{request.method} {request.url}\n{header_block}\n{request.body}\n\n"


def serialize_collection(collection: Collection) -> str:
    return "\n".join(serialize_request(request) for request in collection.requests)
