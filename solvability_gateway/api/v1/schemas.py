"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from datetime import date
from typing import List, Optional

from solvability_gateway.domain.exceptions import InvalidScoreInputError
from solvability_gateway.domain.models import (
    DocumentsProvided,
    EmploymentType,
    GuarantorType,
    IncomeType,
    OcrExtraction,
    RentHistory,
    TenantScoreInput,
)


class DocumentsSchema(BaseModel):
    """Uploaded document flags by category"""

    identity: bool = False
    income_proof: bool = False
    tax_notice: bool = False
    employment_contract: bool = False
    rent_receipts: bool = False


class OcrSchema(BaseModel):
    """Income read from uploaded documents"""

    extracted_income: float = Field(..., ge=0, description="Monthly income found on the documents")
    extracted_employer: Optional[str] = None
    confidence: Optional[float] = Field(None, ge=0, le=1, description="OCR confidence between 0 and 1")


class TenantScoreSchema(BaseModel):
    """Applicant profile to score. Amounts are monthly, in euros."""

    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    date_of_birth: Optional[date] = None

    monthly_income: Optional[float] = Field(None, ge=0)
    secondary_income: Optional[float] = Field(None, ge=0)
    income_type: IncomeType = IncomeType.SALARY
    employment_type: EmploymentType
    employment_duration_months: Optional[int] = Field(None, ge=0)

    rent_amount: Optional[float] = Field(None, ge=0)
    charges_amount: float = Field(0.0, ge=0)

    documents_provided: DocumentsSchema = Field(default_factory=DocumentsSchema)

    has_guarantor: bool = False
    guarantor_income: Optional[float] = Field(None, ge=0)
    guarantor_type: Optional[GuarantorType] = None

    previous_rent_history: RentHistory = RentHistory.UNKNOWN
    has_unpaid_rent_history: bool = False

    ocr: Optional[OcrSchema] = None

    def to_domain(self) -> TenantScoreInput:
        """
        Build the immutable scoring input.

        Raises:
            InvalidScoreInputError: Guarantor details sent without a guarantor
        """
        if not self.has_guarantor and (self.guarantor_type is not None or self.guarantor_income is not None):
            raise InvalidScoreInputError("Guarantor details provided but has_guarantor is false")

        ocr = None
        if self.ocr is not None:
            ocr = OcrExtraction(
                extracted_income=self.ocr.extracted_income,
                extracted_employer=self.ocr.extracted_employer,
                confidence=self.ocr.confidence,
            )

        return TenantScoreInput(
            first_name=self.first_name,
            last_name=self.last_name,
            date_of_birth=self.date_of_birth,
            monthly_income=self.monthly_income,
            secondary_income=self.secondary_income,
            income_type=self.income_type,
            employment_type=self.employment_type,
            employment_duration_months=self.employment_duration_months,
            rent_amount=self.rent_amount,
            charges_amount=self.charges_amount,
            documents_provided=DocumentsProvided(**self.documents_provided.model_dump()),
            has_guarantor=self.has_guarantor,
            guarantor_income=self.guarantor_income,
            guarantor_type=self.guarantor_type,
            previous_rent_history=self.previous_rent_history,
            has_unpaid_rent_history=self.has_unpaid_rent_history,
            ocr=ocr,
        )


class ScoreRequest(BaseModel):
    """Request body for POST /v1/score"""

    application_id: str = Field(..., min_length=1, description="Rental application identifier")
    owner_id: str = Field(..., min_length=1, description="Landlord or agency requesting the score")
    tenant: TenantScoreSchema


class SubScoresSchema(BaseModel):
    income_ratio: float
    employment_stability: float
    document_completeness: float
    guarantor: float
    rental_history: float
    ocr_consistency: float


class MetricsSchema(BaseModel):
    total_monthly_housing_cost: float
    income_ratio: Optional[float] = None
    effort_rate: Optional[float] = None
    is_gli_eligible: bool


class RiskSchema(BaseModel):
    code: str
    message: str
    severity: str
    mitigation: str


class ScoreResponse(BaseModel):
    """Response for POST /v1/score and GET /v1/score/{assessment_id}"""

    assessment_id: str
    application_id: str
    total_score: int
    risk_level: str
    recommendation: str
    sub_scores: SubScoresSchema
    warnings: List[str]
    risks: List[RiskSchema] = []  # empty on assessments stored before risks were recorded
    strengths: List[str]
    actions: List[str] = []
    metrics: MetricsSchema
    version: str
    created_at: str

    @classmethod
    def from_assessment(cls, assessment) -> "ScoreResponse":
        """Build from a stored SolvabilityAssessment row"""
        return cls(
            assessment_id=str(assessment.id),
            application_id=assessment.application_id,
            created_at=assessment.created_at.isoformat(),
            **assessment.result,
        )


class HistoryItem(BaseModel):
    """Single assessment in history"""

    assessment_id: str
    total_score: int
    risk_level: str
    recommendation: str
    created_at: str


class HistoryResponse(BaseModel):
    """Response for GET /v1/score/history"""

    application_id: str
    assessments: List[HistoryItem]
