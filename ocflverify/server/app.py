"""HTTP surface — thin Starlette routes over :class:`Verifier`.

    POST /verify/{id}          ingest verification
    POST /verify/{id}/update   update verification
    GET  /health               liveness

Status mapping:

    200  verified (empty body)
    400  non-integer id, missing/malformed body, non string->string mapping
    404  no inventory for the object id
    409  verification failed; body is the path -> error mapping
    500  anything else (malformed inventory, store failure)
"""

from __future__ import annotations

import json
import logging
from typing import Any

from starlette.applications import Starlette
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, Response
from starlette.routing import Route

from ocflverify.config import ProdConfig
from ocflverify.core.errors import InventoryNotFoundError
from ocflverify.core.verifier import VerificationFailed, Verifier

logger = logging.getLogger(__name__)


class BadRequestError(ValueError):
    """Raised when a request's id or body cannot be accepted."""


def _parse_object_id(request: Request) -> int:
    raw = request.path_params["object_id"]
    # ASCII digits only; int() would also take "+5", "1_000" and other scripts
    if not (raw.isascii() and raw.isdigit()):
        raise BadRequestError(f"Object id must be a non-negative integer, got {raw!r}")
    return int(raw)


async def _parse_checksums(request: Request) -> dict[str, str]:
    body = await request.body()
    if not body:
        raise BadRequestError("Request body is required")
    try:
        payload: Any = json.loads(body)
    except json.JSONDecodeError as exc:
        raise BadRequestError(f"Malformed JSON body: {exc.msg}") from exc
    if not isinstance(payload, dict):
        raise BadRequestError("Request body must be a JSON object of path -> checksum")
    for path, checksum in payload.items():
        if not isinstance(checksum, str):
            raise BadRequestError(f"Checksum for {path!r} must be a string")
    return payload


def _make_endpoint(verifier: Verifier, update: bool):
    operation = verifier.verify_update if update else verifier.verify_ingest

    async def endpoint(request: Request) -> Response:
        try:
            object_id = _parse_object_id(request)
            checksums = await _parse_checksums(request)
        except BadRequestError as exc:
            return PlainTextResponse(str(exc), status_code=400)

        try:
            await run_in_threadpool(operation, object_id, checksums)
        except VerificationFailed as exc:
            return JSONResponse(exc.to_dict(), status_code=409)
        except InventoryNotFoundError as exc:
            return PlainTextResponse(str(exc), status_code=404)
        except Exception as exc:  # noqa: BLE001
            logger.error("Verification of object %s failed: %s", object_id, exc, exc_info=True)
            return PlainTextResponse(str(exc), status_code=500)
        return Response(status_code=200)

    return endpoint


async def health(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


def create_app(verifier: Verifier, *, debug: bool = False) -> Starlette:
    """Build the Starlette application around *verifier*."""
    routes = [
        Route("/health", health, methods=["GET"]),
        Route("/verify/{object_id}", _make_endpoint(verifier, update=False), methods=["POST"]),
        Route(
            "/verify/{object_id}/update",
            _make_endpoint(verifier, update=True),
            methods=["POST"],
        ),
    ]
    return Starlette(debug=debug, routes=routes)


def create_app_from_config(config: ProdConfig) -> Starlette:
    """Wire an S3-backed verifier from settings and wrap it in the app."""
    from ocflverify.core.digest_cache import DigestCache
    from ocflverify.core.inventory_loader import InventoryLoader
    from ocflverify.store.s3 import S3ObjectStore

    store = S3ObjectStore.from_config(config)
    verifier = Verifier(
        store,
        loader=InventoryLoader(store, config.inventory_name),
        digest_cache=DigestCache(store),
        max_workers=config.max_workers,
    )
    # Tracebacks are never served in production
    return create_app(verifier, debug=config.debug and not config.is_production)
