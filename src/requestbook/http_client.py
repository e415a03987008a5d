from __future__ import annotations

import logging
from typing import Any

import requests

from requestbook.config import get_settings
from requestbook.models import HTTP_METHODS, Request

logger = logging.getLogger(__name__)

GENERIC_ERROR = "An error occurred while making the request"
BODY_METHODS = {"POST", "PUT"}


def _failure(error_type: str, message: str) -> dict:
    logger.warning("request failed: %s %s", error_type, message)
    return {
        "success": False,
        "error": GENERIC_ERROR,
        "error_type": error_type,
        "error_message": message,
    }


def build_headers(headers: dict | None, default_content_type: str | None = None) -> dict:
    content_type = default_content_type or get_settings().default_content_type
    merged = {"Content-Type": content_type}
    merged.update(headers or {})
    return merged


def execute(
    url: str,
    method: str,
    headers: dict | None = None,
    body: str | None = None,
    timeout: float | None = None,
) -> dict:
    method = str(method).upper() if method is not None else ""

    if method not in HTTP_METHODS:
        return _failure("InvalidMethod", f"unsupported method: {method or None}")

    if not url:
        return _failure("InvalidURL", "url is required")

    settings = get_settings()
    try:
        request_kwargs: dict[str, Any] = {
            "method": method,
            "url": url,
            "headers": build_headers(headers, settings.default_content_type),
            "timeout": timeout if timeout is not None else settings.timeout,
        }
        if body and method in BODY_METHODS:
            request_kwargs["data"] = body.encode("utf-8")

        response = requests.request(**request_kwargs)
        elapsed_ms = int(response.elapsed.total_seconds() * 1000)
        try:
            data = response.json()
        except ValueError as exc:
            return _failure("InvalidJSON", str(exc))
        return {
            "success": True,
            "status_code": response.status_code,
            "status_text": response.reason or "",
            "headers": dict(response.headers),
            "data": data,
            "elapsed_ms": elapsed_ms,
        }
    except requests.exceptions.Timeout as exc:
        return _failure("Timeout", str(exc))
    except requests.exceptions.ConnectionError as exc:
        return _failure("ConnectionError", str(exc))
    except requests.RequestException as exc:
        return _failure("RequestException", str(exc))
    except (UnicodeError, ValueError) as exc:
        # http.client encodes header names as ASCII and values as latin-1.
        return _failure("InvalidHeader", str(exc))


def send_request(request: Request, timeout: float | None = None) -> dict:
    return execute(
        request.url,
        request.method,
        request.header_map(),
        request.body,
        timeout=timeout,
    )
