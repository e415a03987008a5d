"""Lenient reader for the .http collection format.

Parsing never raises. Lines that cannot be interpreted are dropped and
reported through ``ParseReport.skipped``; ``parse_collection`` discards that
report and returns only the collection.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from requestbook.models import DEFAULT_METHOD, HTTP_METHODS, Collection, Header, Request
from requestbook.serializer import BLOCK_DELIMITER

logger = logging.getLogger(__name__)


@dataclass
class SkippedLine:
    request_index: int
    line_number: int
    text: str
    reason: str


@dataclass
class ParseReport:
    collection: Collection
    skipped: list[SkippedLine] = field(default_factory=list)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


def parse_collection(text: str, name: str) -> Collection:
    return parse_collection_report(text, name).collection


def parse_collection_report(text: str, name: str) -> ParseReport:
    report = ParseReport(collection=Collection(name=name))
    segments = text.replace("\r\n", "\n").split(BLOCK_DELIMITER)[1:]
    for index, segment in enumerate(segments):
        request = _parse_segment(segment, index, report.skipped)
        report.collection.requests.append(request)
    for item in report.skipped:
        logger.warning(
            "skipped line %d of request %d (%s): %r",
            item.line_number,
            item.request_index,
            item.reason,
            item.text,
        )
    return report


def _parse_segment(segment: str, index: int, skipped: list[SkippedLine]) -> Request:
    lines = segment.strip().split("\n")
    name = lines[0].strip()

    request_line = lines[1] if len(lines) > 1 else ""
    method, url = _parse_request_line(request_line, index, skipped)

    header_end = _find_blank_line(lines, start=2)
    headers: list[Header] = []
    if header_end == -1:
        body_lines = lines[2:]
    else:
        for line_number in range(2, header_end):
            line = lines[line_number]
            if ":" not in line:
                skipped.append(SkippedLine(index, line_number, line, "header without ':'"))
                continue
            key, value = line.split(":", 1)
            headers.append(Header(key.strip(), value.strip()))
        body_lines = lines[header_end + 1 :]

    return Request(
        name=name,
        url=url,
        method=method,
        headers=headers,
        body="\n".join(body_lines),
    )


def _parse_request_line(line: str, index: int, skipped: list[SkippedLine]) -> tuple[str, str]:
    if not line:
        skipped.append(SkippedLine(index, 1, line, "missing request line"))
        return DEFAULT_METHOD, ""
    tokens = line.split(" ")
    method = tokens[0]
    url = tokens[1] if len(tokens) > 1 else ""
    if method.upper() not in HTTP_METHODS:
        skipped.append(SkippedLine(index, 1, line, f"unsupported method {method!r}"))
        method = DEFAULT_METHOD
    return method, url


def _find_blank_line(lines: list[str], start: int) -> int:
    for line_number in range(start, len(lines)):
        if lines[line_number] == "":
            return line_number
    return -1
