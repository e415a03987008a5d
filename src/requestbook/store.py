"""In-memory registry of collections plus the single request editing slot.

Requests are identified by name only. Removing a request affects the first
match in the named collection; saving a loaded request rewrites every request
that carries the loaded request's original name, in every collection.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from requestbook.errors import PreconditionError
from requestbook.models import DEFAULT_METHOD, Collection, Header, Request
from requestbook.parser import ParseReport, parse_collection_report
from requestbook.serializer import serialize_collection

logger = logging.getLogger(__name__)


def _editable_headers(headers: list[Header]) -> list[Header]:
    rows = [Header(header.key, header.value) for header in headers]
    return rows or [Header()]


@dataclass
class EditingSlot:
    request: Request = field(default_factory=lambda: Request(headers=[Header()]))
    original_name: str | None = None

    @property
    def loaded(self) -> bool:
        return self.original_name is not None


class CollectionStore:
    def __init__(self, collections: list[Collection] | None = None) -> None:
        self.collections: list[Collection] = list(collections or [])
        self.editing = EditingSlot()

    def find_collection(self, name: str) -> Collection | None:
        for collection in self.collections:
            if collection.name == name:
                return collection
        return None

    def create_collection(self, name: str) -> Collection:
        if not name or not name.strip():
            raise PreconditionError("collection name is required")
        collection = Collection(name=name)
        self.collections.append(collection)
        logger.info("created collection %r", name)
        return collection

    def remove_collection(self, name: str) -> Collection | None:
        collection = self.find_collection(name)
        if collection is None:
            return None
        self.collections.remove(collection)
        logger.info("removed collection %r", name)
        return collection

    def add_blank_request(self, collection_name: str) -> Request | None:
        collection = self.find_collection(collection_name)
        if collection is None:
            logger.debug("add_blank_request: no collection named %r", collection_name)
            return None
        request = Request.blank()
        collection.requests.append(request)
        logger.info("added blank request to %r", collection_name)
        return request

    def load_request(self, request: Request) -> EditingSlot:
        loaded = request.copy()
        loaded.headers = _editable_headers(request.headers)
        self.editing = EditingSlot(request=loaded, original_name=request.name)
        logger.debug("loaded request %r", request.name)
        return self.editing

    def new_request(self) -> EditingSlot:
        self.editing = EditingSlot()
        return self.editing

    def save_current_request(
        self,
        name: str,
        *,
        url: str = "",
        method: str = DEFAULT_METHOD,
        headers: list[Header] | None = None,
        body: str = "",
    ) -> Request:
        if not name or not name.strip():
            raise PreconditionError("Please enter a name for the request")
        saved = Request(
            name=name.strip(),
            url=url,
            method=method,
            headers=[Header(h.key, h.value) for h in headers or [] if h.active],
            body=body,
        )

        if self.editing.loaded:
            original_name = self.editing.original_name
            replaced = 0
            for collection in self.collections:
                for index, request in enumerate(collection.requests):
                    if request.name == original_name:
                        collection.requests[index] = saved.copy()
                        replaced += 1
            logger.info("updated %d request(s) named %r", replaced, original_name)
        else:
            if not self.collections:
                raise PreconditionError("Please create a collection first")
            self.collections[0].requests.append(saved.copy())
            logger.info("saved new request %r to %r", saved.name, self.collections[0].name)

        slot_request = saved.copy()
        slot_request.headers = _editable_headers(saved.headers)
        self.editing = EditingSlot(request=slot_request, original_name=saved.name)
        return saved

    def remove_request(self, collection_name: str, request_name: str) -> Request | None:
        collection = self.find_collection(collection_name)
        removed = collection.find_request(request_name) if collection is not None else None
        if removed is not None:
            collection.requests.remove(removed)
            logger.info("removed request %r from %r", request_name, collection_name)
        if self.editing.loaded and self.editing.original_name == request_name:
            self.new_request()
        return removed

    def export_collection(self, collection: Collection | str) -> str:
        if isinstance(collection, str):
            found = self.find_collection(collection)
            if found is None:
                raise PreconditionError(f"no collection named {collection!r}")
            collection = found
        return serialize_collection(collection)

    def import_collection_report(self, text: str, assigned_name: str) -> ParseReport:
        report = parse_collection_report(text, assigned_name)
        self.collections.append(report.collection)
        logger.info(
            "imported collection %r with %d request(s), %d skipped line(s)",
            assigned_name,
            len(report.collection.requests),
            report.skipped_count,
        )
        return report

    def import_collection(self, text: str, assigned_name: str) -> Collection:
        return self.import_collection_report(text, assigned_name).collection
