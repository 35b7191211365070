# src/dealscore/api/http.py
from __future__ import annotations

from functools import lru_cache

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from dealscore.adapters.config import config
from dealscore.adapters.logging_utils import get_logger
from dealscore.domain.ports import NarrativeProvider
from dealscore.services.deal_analyzer import analyze_deal
from dealscore.services.narrative import make_narrative_provider
from dealscore.services.validation import DealValidationError
from .schemas import AnalyzeRequest, AnalyzeResponse, ErrorResponse

logger = get_logger(__name__)

app = FastAPI(title="dealscore")


# -------------------------------------------------------------------
# Narrative provider (single init, overridable in tests)
# -------------------------------------------------------------------
@lru_cache(maxsize=1)
def get_narrative_provider() -> NarrativeProvider:
    return make_narrative_provider(config)


@app.exception_handler(RequestValidationError)
async def _malformed_body(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": "Request body must be a JSON object"})


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post(
    "/api/analyze",
    response_model=AnalyzeResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def analyze_endpoint(
    payload: AnalyzeRequest,
    narrator: NarrativeProvider = Depends(get_narrative_provider),
):
    try:
        result = analyze_deal(raw_payload=payload.model_dump(), narrator=narrator)
        return AnalyzeResponse(**result)
    except DealValidationError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})
    except Exception as e:
        logger.exception("analyze_failed", extra={"context": {"error": str(e)}})
        return JSONResponse(status_code=500, content={"error": str(e) or "Analysis failed"})
