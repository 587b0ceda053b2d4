"""POST /v1/health/score - household financial health assessment endpoint"""

import time
import logging
from dataclasses import asdict
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Request

from household_health.api.v1.schemas import HealthScoreRequest, HealthScoreResponse
from household_health.api.dependencies import get_request_id, get_settings
from household_health.config import Settings
from household_health.domain.engine import compute
from household_health.domain.exceptions import ValidationError
from household_health.infrastructure.observability.metrics import record_assessment, validation_failures_counter
from household_health.infrastructure.observability.logging import log_assessment

router = APIRouter()


@router.post("/health/score", response_model=HealthScoreResponse)
def assess_health(
    request_body: HealthScoreRequest,
    request: Request,
    settings: Settings = Depends(get_settings),
):
    """
    Score a household snapshot.

    Flow:
    1. Convert request records to domain snapshots
    2. Run the scoring pipeline (aggregate, project, score, classify, alert, suggest)
    3. Record metrics and log outcome
    4. Return the result; nothing is persisted
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        result = compute(
            accounts=[a.to_domain() for a in request_body.accounts],
            transactions=[t.to_domain() for t in request_body.transactions],
            debts=[d.to_domain() for d in request_body.debts],
            as_of=request_body.as_of or date.today(),
            lookback_months=settings.lookback_months,
        )

    except ValidationError as e:
        validation_failures_counter.inc()
        logging.warning(f"Invalid snapshot: {e}", extra={"request_id": request_id, "field": e.field})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_assessment(result)
    log_assessment(request_id, result.score, result.classification.value, len(result.alerts), duration_ms)

    return HealthScoreResponse.model_validate(asdict(result))
