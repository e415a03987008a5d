"""Request and collection records shared by the store, the .http codec and the UI."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from requestbook.errors import InvalidMethodError

HTTP_METHODS = ("GET", "POST", "PUT", "DELETE")
DEFAULT_METHOD = "GET"
BLANK_REQUEST_NAME = "New Request"


@dataclass
class Header:
    key: str = ""
    value: str = ""

    @property
    def active(self) -> bool:
        """Only headers with both a key and a value are sent or exported."""
        return bool(self.key) and bool(self.value)

    def to_dict(self) -> dict[str, str]:
        return {"key": self.key, "value": self.value}

    @classmethod
    def from_dict(cls, data: dict) -> Header:
        key = data.get("key")
        value = data.get("value")
        return cls(
            key=key if isinstance(key, str) else "",
            value=value if isinstance(value, str) else "",
        )


@dataclass
class Request:
    name: str = ""
    url: str = ""
    method: str = DEFAULT_METHOD
    headers: list[Header] = field(default_factory=list)
    body: str = ""

    def __post_init__(self) -> None:
        method = str(self.method).upper() if self.method is not None else ""
        if method not in HTTP_METHODS:
            raise InvalidMethodError(self.method)
        self.method = method

    @classmethod
    def blank(cls) -> Request:
        return cls(name=BLANK_REQUEST_NAME)

    def active_headers(self) -> list[Header]:
        return [header for header in self.headers if header.active]

    def header_map(self) -> dict[str, str]:
        # Repeated keys collapse; the last one wins.
        return {header.key: header.value for header in self.active_headers()}

    def copy(self) -> Request:
        return Request(
            name=self.name,
            url=self.url,
            method=self.method,
            headers=[Header(header.key, header.value) for header in self.headers],
            body=self.body,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "url": self.url,
            "method": self.method,
            "headers": [header.to_dict() for header in self.headers],
            "body": self.body,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Request:
        headers = data.get("headers") or []
        if isinstance(headers, dict):
            rows = [Header(str(key), str(value)) for key, value in headers.items()]
        else:
            rows = [Header.from_dict(item) for item in headers if isinstance(item, dict)]
        name = data.get("name")
        url = data.get("url")
        body = data.get("body")
        return cls(
            name=name if isinstance(name, str) else "",
            url=url if isinstance(url, str) else "",
            method=data.get("method") or DEFAULT_METHOD,
            headers=rows,
            body=body if isinstance(body, str) else "",
        )


@dataclass
class Collection:
    name: str
    requests: list[Request] = field(default_factory=list)

    def find_request(self, name: str) -> Request | None:
        for request in self.requests:
            if request.name == name:
                return request
        return None

    def request_names(self) -> list[str]:
        return [request.name for request in self.requests]
