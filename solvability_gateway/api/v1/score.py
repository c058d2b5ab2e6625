"""POST /v1/score - Tenant solvability scoring endpoint"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from solvability_gateway.api.v1.schemas import ScoreRequest, ScoreResponse
from solvability_gateway.api.dependencies import get_request_id, get_scoring_policy
from solvability_gateway.infrastructure.database.session import get_db
from solvability_gateway.infrastructure.database.repositories import AssessmentRepository, AuditRepository
from solvability_gateway.domain.scoring import calculate_solvability_score
from solvability_gateway.domain.policy import ScoringPolicy
from solvability_gateway.domain.exceptions import InvalidScoreInputError
from solvability_gateway.infrastructure.observability.metrics import record_assessment
from solvability_gateway.infrastructure.observability.logging import log_assessment

router = APIRouter()


@router.post("/score", response_model=ScoreResponse)
def create_score(
    request_body: ScoreRequest,
    request: Request,
    db: Session = Depends(get_db),
    policy: ScoringPolicy = Depends(get_scoring_policy),
):
    """
    Score a rental application.

    Flow:
    1. Map the validated profile to the domain input
    2. Compute the solvability score (pure, no I/O)
    3. Persist the score as a JSON blob + audit trail entry
    4. Return the score with its assessment ID
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        # 1. Build domain input
        tenant = request_body.tenant.to_domain()

        # 2. Score
        score = calculate_solvability_score(tenant, policy)

        # 3. Persist assessment and audit entry in one transaction
        assessment_repo = AssessmentRepository(db)
        db_assessment = assessment_repo.create_assessment(
            application_id=request_body.application_id,
            owner_id=request_body.owner_id,
            score=score,
        )
        AuditRepository(db).record_event(
            assessment_id=db_assessment.id,
            actor_id=request_body.owner_id,
            details={
                "request_id": request_id,
                "total_score": score.total_score,
                "policy_version": score.version,
            },
        )

        db.commit()

        # Record metrics and logs
        duration_ms = (time.time() - start_time) * 1000
        record_assessment(
            score.total_score,
            score.risk_level.value,
            score.recommendation.value,
            [w.name for w in score.warnings],
        )
        log_assessment(
            request_id,
            request_body.application_id,
            score.total_score,
            score.risk_level.value,
            score.recommendation.value,
            len(score.warnings),
            duration_ms,
        )

        return ScoreResponse.from_assessment(db_assessment)

    except InvalidScoreInputError as e:
        db.rollback()
        logging.warning(f"Invalid score input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")
