import logging
from typing import Iterator, Optional

from fastapi import APIRouter, Body, Depends, Response
from fastapi.responses import JSONResponse

from bulkorder.infra.Order_Repository import build_record_store, reading_order_lines
from bulkorder.infra.Record_Store import RecordStore
from bulkorder.infra.pdf_utils import generate_pdf_for_order_sheet
from bulkorder.logic.pipeline import generate_order_sheet
from bulkorder.utilities.config import get_order_sheet_config
from bulkorder.utilities.exceptions import OrderSheetError
from bulkorder.utilities.validators import GenerateRequest, OrderSheetConfig

router = APIRouter(prefix="/api/bulk-order", tags=["bulk-order"])
logger = logging.getLogger(__name__)


def get_store() -> Iterator[RecordStore]:
    store = build_record_store()
    try:
        yield store
    finally:
        store.close()


def get_config() -> OrderSheetConfig:
    return get_order_sheet_config()


def _error_response(e: OrderSheetError) -> JSONResponse:
    return JSONResponse(status_code=e.http_status, content={"error": e.to_dict()})


@router.get("")
def list_bulk_order(store: RecordStore = Depends(get_store), config: OrderSheetConfig = Depends(get_config)):
    """Current contents of the bulk order table."""
    try:
        lines = reading_order_lines(store, config.bulk_order_table)
    except OrderSheetError as e:
        logger.error("Failed to read bulk order: %s", e)
        return _error_response(e)
    return {"items": [line.to_dict() for line in lines], "count": len(lines)}


@router.post("/generate")
def generate_bulk_order(body: Optional[GenerateRequest] = Body(default=None),
                        store: RecordStore = Depends(get_store),
                        config: OrderSheetConfig = Depends(get_config)):
    """Run the estimation and (unless dry_run) replace the bulk order table."""
    dry_run = body.dry_run if body else False
    try:
        result = generate_order_sheet(store, config, dry_run=dry_run)
    except OrderSheetError as e:
        logger.error("Order sheet generation failed: %s", e)
        return _error_response(e)
    return {"status": "success", "dry_run": dry_run, **result.to_dict()}


@router.get("/pdf")
def bulk_order_pdf(store: RecordStore = Depends(get_store), config: OrderSheetConfig = Depends(get_config)):
    try:
        lines = reading_order_lines(store, config.bulk_order_table)
    except OrderSheetError as e:
        logger.error("Failed to read bulk order: %s", e)
        return _error_response(e)
    pdf = generate_pdf_for_order_sheet(lines)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="bulk_order.pdf"'},
    )
