"""GET /v1/score/{assessment_id} - Fetch a stored assessment"""

import uuid
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from solvability_gateway.api.v1.schemas import ScoreResponse
from solvability_gateway.domain.exceptions import AssessmentNotFoundError
from solvability_gateway.infrastructure.database.session import get_db
from solvability_gateway.infrastructure.database.repositories import AssessmentRepository

router = APIRouter()


@router.get("/score/{assessment_id}", response_model=ScoreResponse)
def get_assessment(assessment_id: str, db: Session = Depends(get_db)):
    try:
        assessment_uuid = uuid.UUID(assessment_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid assessment ID format")

    try:
        assessment = AssessmentRepository(db).require_assessment(assessment_uuid)
    except AssessmentNotFoundError:
        raise HTTPException(status_code=404, detail="Assessment not found")

    return ScoreResponse.from_assessment(assessment)
