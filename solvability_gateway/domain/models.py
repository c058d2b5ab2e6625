"""Domain models - immutable dataclasses and closed enums for tenant scoring"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional, Tuple


class IncomeType(str, Enum):
    SALARY = "salary"
    SELF_EMPLOYED = "self-employed"
    PENSION = "pension"
    OTHER = "other"


class EmploymentType(str, Enum):
    PERMANENT_CONTRACT = "permanent-contract"  # CDI
    FIXED_TERM_CONTRACT = "fixed-term-contract"  # CDD
    TEMP_AGENCY = "temp-agency"  # interim
    FREELANCE = "freelance"
    RETIRED = "retired"
    STUDENT = "student"
    UNEMPLOYED = "unemployed"
    OTHER = "other"


class GuarantorType(str, Enum):
    PERSON = "person"
    COMPANY = "company"
    STATE_BACKED = "state-backed-guarantee"  # Visale


class RentHistory(str, Enum):
    GOOD = "good"
    LATE_PAYMENTS = "late-payments"
    UNKNOWN = "unknown"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "very-high"


class Recommendation(str, Enum):
    """Ordered from most to least favourable"""

    ACCEPT = "accept"
    ACCEPT_WITH_GUARANTOR = "accept-with-guarantor"
    REVIEW = "review"
    REJECT = "reject"


class ScoreWarning(str, Enum):
    """Warning flags, declared in the order they are reported"""

    INCOME_RATIO_UNAVAILABLE = "income ratio could not be computed: income or housing cost unknown"
    INCOME_RATIO_BELOW_THRESHOLD = "income is below the required multiple of the housing cost"
    MISSING_IDENTITY_DOCUMENT = "missing critical document: identity"
    MISSING_INCOME_PROOF = "missing critical document: income proof"
    OCR_INCOME_MISMATCH = "declared income does not match extracted document income beyond tolerance"
    UNPAID_RENT_HISTORY = "confirmed prior unpaid rent"
    GUARANTOR_INSUFFICIENT = "guarantor present but insufficient"
    PRECARIOUS_EMPLOYMENT = "precarious employment situation"


class Strength(str, Enum):
    COMFORTABLE_INCOME_RATIO = "income covers the housing cost comfortably"
    STABLE_EMPLOYMENT = "highly stable employment"
    GLI_ELIGIBLE = "eligible for rent default insurance (GLI)"
    STATE_BACKED_GUARANTEE = "covered by a state-backed rent guarantee"
    COMPLETE_FILE = "complete application file"
    GOOD_RENTAL_HISTORY = "good rental history"
    LONG_SENIORITY = "long seniority with current employer"


class RiskSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class LandlordAction(str, Enum):
    """Suggested next steps, declared in the order they are reported"""

    REQUIRE_ADDITIONAL_GUARANTEES = "require additional guarantees before accepting this application"
    REQUEST_GUARANTOR = "request a guarantor or offer the Visale guarantee"
    REQUEST_MISSING_DOCUMENTS = "request the missing documents to complete the assessment"
    REQUEST_RENT_RECEIPTS = "request previous rent receipts to check the rental history"
    SUGGEST_GLI_INSURANCE = "consider taking out rent default insurance (GLI)"
    PROCEED_TO_LEASE = "solid application, you can proceed to sign the lease"


@dataclass(frozen=True)
class DocumentsProvided:
    """Which supporting documents the applicant uploaded"""

    identity: bool = False
    income_proof: bool = False
    tax_notice: bool = False
    employment_contract: bool = False
    rent_receipts: bool = False

    def as_flags(self) -> Tuple[bool, ...]:
        return (
            self.identity,
            self.income_proof,
            self.tax_notice,
            self.employment_contract,
            self.rent_receipts,
        )


@dataclass(frozen=True)
class OcrExtraction:
    """Values read from the uploaded income documents"""

    extracted_income: float
    extracted_employer: Optional[str] = None
    confidence: Optional[float] = None  # 0-1


@dataclass(frozen=True)
class TenantScoreInput:
    """Applicant financial profile, assembled by the caller from persisted records"""

    first_name: str
    last_name: str
    monthly_income: Optional[float]
    rent_amount: Optional[float]
    employment_type: EmploymentType
    income_type: IncomeType = IncomeType.SALARY
    charges_amount: float = 0.0
    secondary_income: Optional[float] = None
    employment_duration_months: Optional[int] = None
    date_of_birth: Optional[date] = None
    documents_provided: DocumentsProvided = field(default_factory=DocumentsProvided)
    has_guarantor: bool = False
    guarantor_income: Optional[float] = None
    guarantor_type: Optional[GuarantorType] = None
    previous_rent_history: RentHistory = RentHistory.UNKNOWN
    has_unpaid_rent_history: bool = False
    ocr: Optional[OcrExtraction] = None


@dataclass(frozen=True)
class SubScores:
    """Per-category scores, each on the 0-100 scale"""

    income_ratio: float
    employment_stability: float
    document_completeness: float
    guarantor: float
    rental_history: float
    ocr_consistency: float


@dataclass(frozen=True)
class ScoreMetrics:
    """Derived affordability figures shown alongside the score"""

    total_monthly_housing_cost: float
    income_ratio: Optional[float]
    effort_rate: Optional[float]  # percent of income spent on housing
    is_gli_eligible: bool


@dataclass(frozen=True)
class RiskItem:
    """A raised warning with how serious it is and how to mitigate it"""

    warning: ScoreWarning
    severity: RiskSeverity
    mitigation: str


@dataclass(frozen=True)
class SolvabilityScore:
    """Output of the solvability assessment"""

    total_score: int
    sub_scores: SubScores
    risk_level: RiskLevel
    recommendation: Recommendation
    warnings: Tuple[ScoreWarning, ...]
    risks: Tuple[RiskItem, ...]
    strengths: Tuple[Strength, ...]
    actions: Tuple[LandlordAction, ...]
    metrics: ScoreMetrics
    version: str
