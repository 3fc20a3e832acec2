"""
API Dependencies - FastAPI dependency injection

Collaborators wrapped around the pure text pipeline:
- settings access
- optional bearer-token credential gate
- bounded JSON body reader
- request arrival time (set by the access-log middleware)
"""

import hmac
import json
import logging
from typing import Any, Dict, Optional

from fastapi import Depends, Header, Request

from aipipe.errors import AuthorizationError, MalformedBodyError, PayloadTooLargeError
from aipipe.settings import Settings, get_settings
from aipipe.utils.timestamps import monotonic_ms

logger = logging.getLogger(__name__)


def get_app_settings() -> Settings:
    """
    FastAPI dependency to access settings.

    Tests swap configuration with:
        app.dependency_overrides[get_app_settings] = lambda: Settings(...)
    """
    return get_settings()


def require_auth(
    authorization: Optional[str] = Header(default=None),
    cfg: Settings = Depends(get_app_settings),
) -> None:
    """
    Optional bearer auth.

    Disabled when no token is configured. Otherwise the Authorization header
    must be exactly "Bearer <token>".
    """
    if not cfg.auth_enabled:
        return

    expected = f"Bearer {cfg.aipipe_token.get_secret_value()}"
    provided = authorization or ""
    if not hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8")):
        logger.warning("Rejected request with missing or invalid bearer token")
        raise AuthorizationError()


def _is_json_content_type(content_type: str) -> bool:
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


async def read_json_body(
    request: Request,
    cfg: Settings = Depends(get_app_settings),
) -> Dict[str, Any]:
    """
    Read and decode the request body as a JSON object.

    - Bodies over `max_body_bytes` raise PayloadTooLargeError.
    - Empty bodies, non-JSON content types and JSON values that are not
      objects all decode to {} so validation reports the missing input.
    - Undecodable JSON raises MalformedBodyError.
    """
    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > cfg.max_body_bytes:
        raise PayloadTooLargeError()

    # Chunked bodies carry no Content-Length, so enforce the limit while reading
    chunks = []
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > cfg.max_body_bytes:
            raise PayloadTooLargeError()
        chunks.append(chunk)
    raw = b"".join(chunks)

    if not raw.strip() or not _is_json_content_type(request.headers.get("content-type", "")):
        return {}

    try:
        data = json.loads(raw)
    except (ValueError, UnicodeDecodeError) as e:
        logger.warning(f"Could not decode JSON body: {e}")
        raise MalformedBodyError()

    if not isinstance(data, dict):
        return {}
    return data


def get_request_start(request: Request) -> float:
    """monotonic_ms() reading taken when the request arrived."""
    started = getattr(request.state, "started_ms", None)
    if started is None:
        return monotonic_ms()
    return started
