"""GET /v1/score/history - Fetch an application's scoring history"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from solvability_gateway.api.v1.schemas import HistoryResponse, HistoryItem
from solvability_gateway.config import settings
from solvability_gateway.infrastructure.database.session import get_db
from solvability_gateway.infrastructure.database.repositories import AssessmentRepository

router = APIRouter()


@router.get("/score/history", response_model=HistoryResponse)
def get_score_history(
    application_id: str = Query(..., description="Rental application identifier"),
    db: Session = Depends(get_db),
):
    """
    Retrieve recent solvability assessments for an application.

    Returns:
        Newest first, at most `history_limit` entries
    """
    assessment_repo = AssessmentRepository(db)
    assessments = assessment_repo.get_assessments_by_application(application_id, limit=settings.history_limit)

    history_items = [
        HistoryItem(
            assessment_id=str(a.id),
            total_score=a.total_score,
            risk_level=a.risk_level,
            recommendation=a.recommendation,
            created_at=a.created_at.isoformat(),
        )
        for a in assessments
    ]

    return HistoryResponse(application_id=application_id, assessments=history_items)
