"""Data access layer for solvability assessments"""

import uuid
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from solvability_gateway.infrastructure.database.models import SolvabilityAssessment, ScoringAuditEvent
from solvability_gateway.domain.models import SolvabilityScore
from solvability_gateway.domain.exceptions import AssessmentNotFoundError

SCORE_COMPUTED = "score_computed"


def serialize_score(score: SolvabilityScore) -> Dict[str, Any]:
    """Flatten a score into the JSON blob stored with the assessment"""
    return {
        "total_score": score.total_score,
        "risk_level": score.risk_level.value,
        "recommendation": score.recommendation.value,
        "sub_scores": {
            "income_ratio": score.sub_scores.income_ratio,
            "employment_stability": score.sub_scores.employment_stability,
            "document_completeness": score.sub_scores.document_completeness,
            "guarantor": score.sub_scores.guarantor,
            "rental_history": score.sub_scores.rental_history,
            "ocr_consistency": score.sub_scores.ocr_consistency,
        },
        "warnings": [w.value for w in score.warnings],
        "risks": [
            {
                "code": r.warning.name.lower(),
                "message": r.warning.value,
                "severity": r.severity.value,
                "mitigation": r.mitigation,
            }
            for r in score.risks
        ],
        "strengths": [s.value for s in score.strengths],
        "actions": [a.value for a in score.actions],
        "metrics": {
            "total_monthly_housing_cost": score.metrics.total_monthly_housing_cost,
            "income_ratio": score.metrics.income_ratio,
            "effort_rate": score.metrics.effort_rate,
            "is_gli_eligible": score.metrics.is_gli_eligible,
        },
        "version": score.version,
    }


class AssessmentRepository:
    """Repository for solvability assessments"""

    def __init__(self, db: Session):
        self.db = db

    def create_assessment(
        self,
        application_id: str,
        owner_id: str,
        score: SolvabilityScore,
    ) -> SolvabilityAssessment:
        """Persist a computed score to database"""
        db_assessment = SolvabilityAssessment(
            application_id=application_id,
            owner_id=owner_id,
            total_score=score.total_score,
            risk_level=score.risk_level.value,
            recommendation=score.recommendation.value,
            policy_version=score.version,
            result=serialize_score(score),
        )
        self.db.add(db_assessment)
        self.db.flush()  # Get ID without committing
        return db_assessment

    def get_assessments_by_application(self, application_id: str, limit: int = 10) -> List[SolvabilityAssessment]:
        """Fetch recent assessments for an application"""
        return (
            self.db.query(SolvabilityAssessment)
            .filter(SolvabilityAssessment.application_id == application_id)
            .order_by(SolvabilityAssessment.created_at.desc())
            .limit(limit)
            .all()
        )

    def get_assessment_by_id(self, assessment_id: uuid.UUID) -> Optional[SolvabilityAssessment]:
        return (
            self.db.query(SolvabilityAssessment)
            .filter(SolvabilityAssessment.id == assessment_id)
            .first()
        )

    def require_assessment(self, assessment_id: uuid.UUID) -> SolvabilityAssessment:
        """
        Fetch an assessment that must exist.

        Raises:
            AssessmentNotFoundError: No assessment with this ID
        """
        assessment = self.get_assessment_by_id(assessment_id)
        if assessment is None:
            raise AssessmentNotFoundError(f"Assessment {assessment_id} not found")
        return assessment


class AuditRepository:
    """Repository for the scoring audit trail"""

    def __init__(self, db: Session):
        self.db = db

    def record_event(
        self,
        assessment_id: uuid.UUID,
        actor_id: str,
        action: str = SCORE_COMPUTED,
        details: Optional[Dict[str, Any]] = None,
    ) -> ScoringAuditEvent:
        event = ScoringAuditEvent(
            assessment_id=assessment_id,
            actor_id=actor_id,
            action=action,
            details=details,
        )
        self.db.add(event)
        return event

    def get_events_for_assessment(self, assessment_id: uuid.UUID) -> List[ScoringAuditEvent]:
        return (
            self.db.query(ScoringAuditEvent)
            .filter(ScoringAuditEvent.assessment_id == assessment_id)
            .order_by(ScoringAuditEvent.created_at)
            .all()
        )
