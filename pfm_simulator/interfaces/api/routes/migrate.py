"""Endpoints that pull a user's data from the live vendor API.

``/start`` answers with a ``text/event-stream``: one ``data: {json}`` frame
per importer event. The stream owns its own database session because it
outlives the request scope of :func:`get_db`.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse, StreamingResponse
from jose.exceptions import JOSEError

from pfm_simulator.application.use_cases.migration import (
    MigrationImporter,
    check_vendor_connection,
)
from pfm_simulator.infrastructure.database import SessionLocal
from pfm_simulator.infrastructure.vendor_api import VendorFetchError
from pfm_simulator.interfaces.api.schemas import (
    MigrationConnectionRequest,
    MigrationStartRequest,
)
from pfm_simulator.utils.serializers import serialize_special_types

router = APIRouter(prefix="/api/migrate", tags=["migration"])
logger = logging.getLogger(__name__)

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


def _sse_frame(event: dict) -> str:
    return f"data: {json.dumps(serialize_special_types(event))}\n\n"


@router.post("/test")
def test_connection(payload: MigrationConnectionRequest):
    """Check the vendor credentials by fetching the current vendor user."""

    try:
        user = check_vendor_connection(payload.to_config())
    except (VendorFetchError, ValueError, JOSEError) as exc:
        logger.warning("Vendor connection test failed for %s: %s", payload.partner_domain, exc)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "error": str(exc)},
        )
    return {"success": True, "user": serialize_special_types(user)}


def _stream_migration(payload: MigrationStartRequest) -> Iterator[str]:
    session = SessionLocal()
    try:
        importer = MigrationImporter(
            session, payload.to_config(), payload.entities.to_entities()
        )
        for event in importer.run():
            yield _sse_frame(event)
    finally:
        session.close()


@router.post("/start")
def start_migration(payload: MigrationStartRequest):
    logger.info(
        "Starting migration of %s from %s: %s",
        payload.pcid,
        payload.partner_domain,
        ", ".join(payload.entities.to_entities().selected()) or "nothing selected",
    )
    return StreamingResponse(
        _stream_migration(payload),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
