"""Scoring policy - thresholds, lookup tables and weights for solvability scoring

Every number the scorer uses lives here so that tuning the policy is a data
change. Thresholds rationale:
- income_ratio_full_marks = 3.0: French landlords and GLI insurers require
  income of at least three times the rent (ANIL recommends an effort rate
  below 33%)
- income_ratio_floor = 1.0: income that does not even cover the housing cost
- ocr_income_tolerance = 15%: payslips vary month to month (bonuses, overtime)
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Tuple

from solvability_gateway.domain.models import (
    EmploymentType,
    Recommendation,
    RentHistory,
    RiskLevel,
    RiskSeverity,
    ScoreWarning,
)

POLICY_VERSION = "1.0.0"

SUB_SCORE_MAX = 100.0

EMPLOYMENT_STABILITY_SCORES: Mapping[EmploymentType, float] = MappingProxyType(
    {
        EmploymentType.PERMANENT_CONTRACT: 100.0,
        EmploymentType.RETIRED: 95.0,
        EmploymentType.FIXED_TERM_CONTRACT: 65.0,
        EmploymentType.FREELANCE: 50.0,
        EmploymentType.TEMP_AGENCY: 40.0,
        EmploymentType.STUDENT: 35.0,
        EmploymentType.OTHER: 30.0,
        EmploymentType.UNEMPLOYED: 5.0,
    }
)

# Not in work, so "months with current employer" carries no seniority
NO_SENIORITY_EMPLOYMENT = frozenset({EmploymentType.UNEMPLOYED, EmploymentType.STUDENT})

# (minimum months, bonus points), checked top-down
SENIORITY_BONUSES: Tuple[Tuple[int, float], ...] = (
    (60, 10.0),
    (24, 7.0),
    (12, 5.0),
    (6, 2.0),
)

RENTAL_HISTORY_SCORES: Mapping[RentHistory, float] = MappingProxyType(
    {
        RentHistory.GOOD: 100.0,
        RentHistory.UNKNOWN: 50.0,
        RentHistory.LATE_PAYMENTS: 20.0,
    }
)

PRECARIOUS_EMPLOYMENT = frozenset(
    {EmploymentType.TEMP_AGENCY, EmploymentType.STUDENT, EmploymentType.UNEMPLOYED}
)

GLI_ELIGIBLE_EMPLOYMENT = frozenset({EmploymentType.PERMANENT_CONTRACT, EmploymentType.RETIRED})

WARNING_SEVERITY: Mapping[ScoreWarning, RiskSeverity] = MappingProxyType(
    {
        ScoreWarning.INCOME_RATIO_UNAVAILABLE: RiskSeverity.MEDIUM,
        ScoreWarning.INCOME_RATIO_BELOW_THRESHOLD: RiskSeverity.MEDIUM,
        ScoreWarning.MISSING_IDENTITY_DOCUMENT: RiskSeverity.MEDIUM,
        ScoreWarning.MISSING_INCOME_PROOF: RiskSeverity.MEDIUM,
        ScoreWarning.OCR_INCOME_MISMATCH: RiskSeverity.MEDIUM,
        ScoreWarning.UNPAID_RENT_HISTORY: RiskSeverity.CRITICAL,
        ScoreWarning.GUARANTOR_INSUFFICIENT: RiskSeverity.MEDIUM,
        ScoreWarning.PRECARIOUS_EMPLOYMENT: RiskSeverity.MEDIUM,
    }
)

WARNING_MITIGATIONS: Mapping[ScoreWarning, str] = MappingProxyType(
    {
        ScoreWarning.INCOME_RATIO_UNAVAILABLE: "Ask for the income and rent figures before deciding",
        ScoreWarning.INCOME_RATIO_BELOW_THRESHOLD: "Request a solid guarantor or a Visale guarantee",
        ScoreWarning.MISSING_IDENTITY_DOCUMENT: "Request the identity document before deciding",
        ScoreWarning.MISSING_INCOME_PROOF: "Request recent payslips or another income proof before deciding",
        ScoreWarning.OCR_INCOME_MISMATCH: "Check the payslips against the declared income",
        ScoreWarning.UNPAID_RENT_HISTORY: "Refusal advised unless the guarantee is very strong",
        ScoreWarning.GUARANTOR_INSUFFICIENT: "Request the guarantor's income proof or a Visale guarantee",
        ScoreWarning.PRECARIOUS_EMPLOYMENT: "Require a solvent guarantor or a Visale guarantee",
    }
)

SUB_SCORE_WEIGHTS: Mapping[str, float] = MappingProxyType(
    {
        "income_ratio": 0.30,
        "document_completeness": 0.25,
        "employment_stability": 0.15,
        "rental_history": 0.15,
        "guarantor": 0.10,
        "ocr_consistency": 0.05,
    }
)

# (minimum total score, level), descending; the last band must start at 0
RISK_LEVEL_BANDS: Tuple[Tuple[int, RiskLevel], ...] = (
    (75, RiskLevel.LOW),
    (50, RiskLevel.MEDIUM),
    (30, RiskLevel.HIGH),
    (0, RiskLevel.VERY_HIGH),
)

RECOMMENDATION_BANDS: Tuple[Tuple[int, Recommendation], ...] = (
    (75, Recommendation.ACCEPT),
    (55, Recommendation.ACCEPT_WITH_GUARANTOR),
    (35, Recommendation.REVIEW),
    (0, Recommendation.REJECT),
)

# Most favourable first; used to cap a recommendation
RECOMMENDATION_ORDER: Tuple[Recommendation, ...] = tuple(Recommendation)


@dataclass(frozen=True)
class ScoringPolicy:
    """Tunable scoring parameters. Defaults are the production policy."""

    income_ratio_full_marks: float = 3.0
    income_ratio_floor: float = 1.0
    document_count: int = 5
    missing_critical_document_penalty: float = 20.0
    guarantor_unverified_score: float = 50.0
    unpaid_history_score: float = 0.0
    ocr_income_tolerance: float = 0.15
    ocr_deviation_span: float = 0.5  # deviation beyond tolerance that zeroes the raw OCR score
    ocr_default_confidence: float = 1.0
    seniority_strength_months: int = 24
    stable_employment_strength_score: float = 90.0
    high_effort_ratio: float = 2.5  # below this the income shortfall is a high-severity risk (effort rate above 40%)
    gli_suggestion_employment_score: float = 80.0
    employment_scores: Mapping[EmploymentType, float] = field(default_factory=lambda: EMPLOYMENT_STABILITY_SCORES)
    seniority_bonuses: Tuple[Tuple[int, float], ...] = SENIORITY_BONUSES
    rental_history_scores: Mapping[RentHistory, float] = field(default_factory=lambda: RENTAL_HISTORY_SCORES)
    weights: Mapping[str, float] = field(default_factory=lambda: SUB_SCORE_WEIGHTS)
    risk_level_bands: Tuple[Tuple[int, RiskLevel], ...] = RISK_LEVEL_BANDS
    recommendation_bands: Tuple[Tuple[int, Recommendation], ...] = RECOMMENDATION_BANDS
    version: str = POLICY_VERSION


DEFAULT_SCORING_POLICY = ScoringPolicy()
