from __future__ import annotations

import logging
from pathlib import Path

from requestbook.errors import CollectionFileError
from requestbook.models import Collection
from requestbook.parser import ParseReport, parse_collection_report
from requestbook.serializer import serialize_collection
from requestbook.store import CollectionStore

logger = logging.getLogger(__name__)

HTTP_SUFFIX = ".http"


def collection_filename(name: str) -> str:
    safe_name = name.replace("/", "_").replace("\\", "_").strip() or "collection"
    return f"{safe_name}{HTTP_SUFFIX}"


def collection_name_from_path(path: str | Path) -> str:
    # Only the first ".http" is removed, matching how exported files are named.
    return Path(path).name.replace(HTTP_SUFFIX, "", 1)


def export_to_file(collection: Collection, output_dir: str | Path, filename: str | None = None) -> Path:
    output_path = Path(output_dir)
    file_path = output_path / (filename or collection_filename(collection.name))
    try:
        output_path.mkdir(parents=True, exist_ok=True)
        with file_path.open("w", encoding="utf-8", newline="\n") as handle:
            handle.write(serialize_collection(collection))
    except OSError as exc:
        raise CollectionFileError(file_path, str(exc)) from exc
    logger.info("exported collection %r to %s", collection.name, file_path)
    return file_path


def read_collection_file(path: str | Path) -> ParseReport:
    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CollectionFileError(file_path, str(exc)) from exc
    return parse_collection_report(text, collection_name_from_path(file_path))


def import_collection_file(store: CollectionStore, path: str | Path) -> ParseReport:
    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CollectionFileError(file_path, str(exc)) from exc
    return store.import_collection_report(text, collection_name_from_path(file_path))
