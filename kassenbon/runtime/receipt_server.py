"""FastAPI server that parses receipt rows posted by a capture client."""

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from kassenbon.application.receipts import ReceiptParseRequest, ReceiptParseResult, run_receipt_parse
from kassenbon.domain.rows import RowTable
from kassenbon.receipt.formatter import receipt_to_dict
from kassenbon.receipt.row_sources import rows_from_lines, rows_from_mapping
from kassenbon.runtime import get_logger

logger = get_logger(__name__)

STATUS_CODES = {
    "parsed": 200,
    "empty_input": 400,
    "unprocessable": 422,
    "no_items": 422,
}


class ParsePayload(BaseModel):
    """Either OCR text lines or an already tokenized row table."""

    lines: list[str] | None = None
    rows: dict[str, list[str]] | None = None
    vendor: str | None = None


app = FastAPI(title="Kassenbon Receipt Parser")


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"status": "error", "message": message}, status_code=status_code)


def _result_body(result: ReceiptParseResult) -> dict:
    body: dict = {"status": result.status}
    if result.receipt is not None and result.status == "parsed":
        body["receipt"] = receipt_to_dict(result.receipt)
    else:
        body["message"] = result.error
        body["store"] = result.store
        body["store_is_fallback"] = result.store_is_fallback
    body["warnings"] = result.warnings
    return body


@app.post("/parse")
async def parse(payload: ParsePayload) -> JSONResponse:
    """Parse one receipt and return its record."""
    if (payload.lines is None) == (payload.rows is None):
        return _error('Provide exactly one of "lines" or "rows"', 422)

    row_table: RowTable
    if payload.lines is not None:
        row_table = rows_from_lines(payload.lines)
    else:
        try:
            row_table = rows_from_mapping(payload.rows or {})
        except ValueError as exc:
            return _error(str(exc), 422)

    request = ReceiptParseRequest(row_table=row_table, vendor_override=payload.vendor)
    result = run_receipt_parse(request)
    logger.info("Parsed receipt via HTTP: status=%s store=%s", result.status, result.store)
    return JSONResponse(_result_body(result), status_code=STATUS_CODES[result.status])


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=8000)
