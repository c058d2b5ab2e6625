"""Solvability scoring engine - core business logic for rental application decisions"""

from typing import List, Optional, Tuple

from solvability_gateway.domain.models import (
    DocumentsProvided,
    EmploymentType,
    GuarantorType,
    LandlordAction,
    Recommendation,
    RentHistory,
    RiskItem,
    RiskLevel,
    RiskSeverity,
    ScoreMetrics,
    ScoreWarning,
    SolvabilityScore,
    Strength,
    SubScores,
    TenantScoreInput,
)
from solvability_gateway.domain.policy import (
    DEFAULT_SCORING_POLICY,
    GLI_ELIGIBLE_EMPLOYMENT,
    NO_SENIORITY_EMPLOYMENT,
    PRECARIOUS_EMPLOYMENT,
    RECOMMENDATION_ORDER,
    SUB_SCORE_MAX,
    WARNING_MITIGATIONS,
    WARNING_SEVERITY,
    ScoringPolicy,
)


def housing_cost(tenant: TenantScoreInput) -> float:
    """Monthly rent plus charges; unknown rent counts as zero"""
    return (tenant.rent_amount or 0.0) + tenant.charges_amount


def compute_income_ratio(tenant: TenantScoreInput) -> Optional[float]:
    """
    Income as a multiple of the monthly housing cost.

    Returns None when the ratio is undefined: income or rent unknown,
    or a housing cost of zero.
    """
    total_housing = housing_cost(tenant)
    if tenant.monthly_income is None or tenant.rent_amount is None or total_housing <= 0:
        return None
    total_income = tenant.monthly_income + (tenant.secondary_income or 0.0)
    return total_income / total_housing


def _scale_ratio(ratio: Optional[float], policy: ScoringPolicy) -> float:
    """Linear 0-100 scale between the floor ratio and the full-marks ratio"""
    if ratio is None or ratio <= policy.income_ratio_floor:
        return 0.0
    if ratio >= policy.income_ratio_full_marks:
        return SUB_SCORE_MAX
    span = policy.income_ratio_full_marks - policy.income_ratio_floor
    return SUB_SCORE_MAX * (ratio - policy.income_ratio_floor) / span


def score_income_ratio(ratio: Optional[float], policy: ScoringPolicy = DEFAULT_SCORING_POLICY) -> float:
    return round(_scale_ratio(ratio, policy), 1)


def score_employment_stability(tenant: TenantScoreInput, policy: ScoringPolicy = DEFAULT_SCORING_POLICY) -> float:
    """
    Contract-type lookup plus a seniority bonus, capped at the maximum.

    Applicants who are not in work (unemployed, students) get no bonus.
    """
    score = policy.employment_scores[tenant.employment_type]

    months = tenant.employment_duration_months
    if months and tenant.employment_type not in NO_SENIORITY_EMPLOYMENT:
        for min_months, bonus in policy.seniority_bonuses:
            if months >= min_months:
                score += bonus
                break

    return min(SUB_SCORE_MAX, score)


def score_document_completeness(
    documents: DocumentsProvided, policy: ScoringPolicy = DEFAULT_SCORING_POLICY
) -> float:
    """
    Share of recognised documents provided.

    Identity and income proof are required for any approval, so each one
    missing costs an extra penalty on top of the plain proportion.
    """
    provided = sum(1 for flag in documents.as_flags() if flag)
    score = SUB_SCORE_MAX * provided / policy.document_count

    for critical in (documents.identity, documents.income_proof):
        if not critical:
            score -= policy.missing_critical_document_penalty

    return round(max(0.0, score), 1)


def score_guarantor(
    tenant: TenantScoreInput,
    ratio: Optional[float],
    policy: ScoringPolicy = DEFAULT_SCORING_POLICY,
) -> float:
    """
    Strength of the guarantee behind the application.

    Without a guarantor the score is full only when the applicant's own
    income already clears the threshold. A state-backed guarantee is
    maximal regardless of income.
    """
    if not tenant.has_guarantor:
        if ratio is not None and ratio >= policy.income_ratio_full_marks:
            return SUB_SCORE_MAX
        return 0.0

    if tenant.guarantor_type == GuarantorType.STATE_BACKED:
        return SUB_SCORE_MAX

    total_housing = housing_cost(tenant)
    if tenant.guarantor_income is None or total_housing <= 0:
        return policy.guarantor_unverified_score

    return round(_scale_ratio(tenant.guarantor_income / total_housing, policy), 1)


def score_rental_history(tenant: TenantScoreInput, policy: ScoringPolicy = DEFAULT_SCORING_POLICY) -> float:
    # Confirmed unpaid rent overrides whatever the history enum says
    if tenant.has_unpaid_rent_history:
        return policy.unpaid_history_score
    return policy.rental_history_scores[tenant.previous_rent_history]


def ocr_income_deviation(tenant: TenantScoreInput) -> Optional[float]:
    """
    Relative gap between declared and document-extracted income.

    None when there is nothing to compare (no OCR data or no declared income).
    """
    if tenant.ocr is None or tenant.monthly_income is None:
        return None

    declared = tenant.monthly_income
    extracted = tenant.ocr.extracted_income
    if declared <= 0:
        return 0.0 if extracted <= 0 else 1.0
    return abs(extracted - declared) / declared


def score_ocr_consistency(tenant: TenantScoreInput, policy: ScoringPolicy = DEFAULT_SCORING_POLICY) -> float:
    """
    Agreement between declared and extracted income.

    Outside the tolerance band the raw score falls linearly, and the penalty
    is weighted by OCR confidence: an unreliable read hurts less.
    """
    deviation = ocr_income_deviation(tenant)
    if deviation is None or deviation <= policy.ocr_income_tolerance:
        return SUB_SCORE_MAX

    excess = deviation - policy.ocr_income_tolerance
    raw = SUB_SCORE_MAX * max(0.0, 1.0 - excess / policy.ocr_deviation_span)

    confidence = tenant.ocr.confidence
    if confidence is None:
        confidence = policy.ocr_default_confidence

    return round(SUB_SCORE_MAX - confidence * (SUB_SCORE_MAX - raw), 1)


def calculate_sub_scores(
    tenant: TenantScoreInput,
    ratio: Optional[float],
    policy: ScoringPolicy = DEFAULT_SCORING_POLICY,
) -> SubScores:
    return SubScores(
        income_ratio=score_income_ratio(ratio, policy),
        employment_stability=score_employment_stability(tenant, policy),
        document_completeness=score_document_completeness(tenant.documents_provided, policy),
        guarantor=score_guarantor(tenant, ratio, policy),
        rental_history=score_rental_history(tenant, policy),
        ocr_consistency=score_ocr_consistency(tenant, policy),
    )


def calculate_total_score(sub_scores: SubScores, policy: ScoringPolicy = DEFAULT_SCORING_POLICY) -> int:
    """
    Weighted sum of the sub-scores, rounded and clamped to 0-100.

    Scoring weights (default policy):
    - 30%: Income ratio
    - 25%: Document completeness
    - 15%: Employment stability
    - 15%: Rental history
    - 10%: Guarantor
    - 5%:  OCR consistency (corroborating evidence only)
    """
    weighted = sum(
        weight * getattr(sub_scores, name) for name, weight in policy.weights.items()
    )
    return max(0, min(100, int(round(weighted))))


def determine_risk_level(total_score: int, policy: ScoringPolicy = DEFAULT_SCORING_POLICY) -> RiskLevel:
    """
    Map total score to a risk band.

    Bands are checked from the highest minimum down; the last band starts
    at 0 so every score gets exactly one level.
    """
    for minimum, level in policy.risk_level_bands:
        if total_score >= minimum:
            return level
    return policy.risk_level_bands[-1][1]


def _cap(recommendation: Recommendation, ceiling: Recommendation) -> Recommendation:
    """Return the less favourable of the two"""
    return max(recommendation, ceiling, key=RECOMMENDATION_ORDER.index)


def determine_recommendation(
    total_score: int,
    tenant: TenantScoreInput,
    ratio: Optional[float],
    policy: ScoringPolicy = DEFAULT_SCORING_POLICY,
) -> Recommendation:
    """
    Score band first, then the hard overrides:
    - income below the threshold can at best be accepted with a guarantor
    - confirmed unpaid rent can at best go to review
    - no identity and no income proof is always a reject
    """
    recommendation = policy.recommendation_bands[-1][1]
    for minimum, band in policy.recommendation_bands:
        if total_score >= minimum:
            recommendation = band
            break

    if ratio is None or ratio < policy.income_ratio_full_marks:
        recommendation = _cap(recommendation, Recommendation.ACCEPT_WITH_GUARANTOR)

    if tenant.has_unpaid_rent_history:
        recommendation = _cap(recommendation, Recommendation.REVIEW)

    documents = tenant.documents_provided
    if not documents.identity and not documents.income_proof:
        recommendation = Recommendation.REJECT

    return recommendation


def collect_warnings(
    tenant: TenantScoreInput,
    ratio: Optional[float],
    sub_scores: SubScores,
    policy: ScoringPolicy = DEFAULT_SCORING_POLICY,
) -> Tuple[ScoreWarning, ...]:
    warnings: List[ScoreWarning] = []

    if ratio is None:
        warnings.append(ScoreWarning.INCOME_RATIO_UNAVAILABLE)
    elif ratio < policy.income_ratio_full_marks:
        warnings.append(ScoreWarning.INCOME_RATIO_BELOW_THRESHOLD)

    if not tenant.documents_provided.identity:
        warnings.append(ScoreWarning.MISSING_IDENTITY_DOCUMENT)
    if not tenant.documents_provided.income_proof:
        warnings.append(ScoreWarning.MISSING_INCOME_PROOF)

    deviation = ocr_income_deviation(tenant)
    if deviation is not None and deviation > policy.ocr_income_tolerance:
        warnings.append(ScoreWarning.OCR_INCOME_MISMATCH)

    if tenant.has_unpaid_rent_history:
        warnings.append(ScoreWarning.UNPAID_RENT_HISTORY)

    if tenant.has_guarantor and sub_scores.guarantor < SUB_SCORE_MAX:
        warnings.append(ScoreWarning.GUARANTOR_INSUFFICIENT)

    if tenant.employment_type in PRECARIOUS_EMPLOYMENT:
        warnings.append(ScoreWarning.PRECARIOUS_EMPLOYMENT)

    return tuple(warnings)


def is_gli_eligible(
    tenant: TenantScoreInput,
    ratio: Optional[float],
    policy: ScoringPolicy = DEFAULT_SCORING_POLICY,
) -> bool:
    """Rent default insurers want 3x income and a permanent contract or a pension"""
    return (
        ratio is not None
        and ratio >= policy.income_ratio_full_marks
        and tenant.employment_type in GLI_ELIGIBLE_EMPLOYMENT
    )


def collect_strengths(
    tenant: TenantScoreInput,
    ratio: Optional[float],
    sub_scores: SubScores,
    policy: ScoringPolicy = DEFAULT_SCORING_POLICY,
) -> Tuple[Strength, ...]:
    strengths: List[Strength] = []

    if ratio is not None and ratio >= policy.income_ratio_full_marks:
        strengths.append(Strength.COMFORTABLE_INCOME_RATIO)
    if sub_scores.employment_stability >= policy.stable_employment_strength_score:
        strengths.append(Strength.STABLE_EMPLOYMENT)
    if is_gli_eligible(tenant, ratio, policy):
        strengths.append(Strength.GLI_ELIGIBLE)
    if tenant.has_guarantor and tenant.guarantor_type == GuarantorType.STATE_BACKED:
        strengths.append(Strength.STATE_BACKED_GUARANTEE)
    if sub_scores.document_completeness >= SUB_SCORE_MAX:
        strengths.append(Strength.COMPLETE_FILE)
    if tenant.previous_rent_history == RentHistory.GOOD and not tenant.has_unpaid_rent_history:
        strengths.append(Strength.GOOD_RENTAL_HISTORY)
    months = tenant.employment_duration_months
    if (
        months is not None
        and months >= policy.seniority_strength_months
        and tenant.employment_type not in NO_SENIORITY_EMPLOYMENT
    ):
        strengths.append(Strength.LONG_SENIORITY)

    return tuple(strengths)


def calculate_metrics(
    tenant: TenantScoreInput,
    ratio: Optional[float],
    policy: ScoringPolicy = DEFAULT_SCORING_POLICY,
) -> ScoreMetrics:
    total_housing = housing_cost(tenant)
    effort_rate = None
    if ratio is not None and ratio > 0:
        effort_rate = round(100.0 / ratio, 1)

    return ScoreMetrics(
        total_monthly_housing_cost=total_housing,
        income_ratio=round(ratio, 2) if ratio is not None else None,
        effort_rate=effort_rate,
        is_gli_eligible=is_gli_eligible(tenant, ratio, policy),
    )


def collect_risks(
    tenant: TenantScoreInput,
    ratio: Optional[float],
    warnings: Tuple[ScoreWarning, ...],
    policy: ScoringPolicy = DEFAULT_SCORING_POLICY,
) -> Tuple[RiskItem, ...]:
    """
    Attach a severity and a mitigation to each warning, in warning order.

    Severity comes from WARNING_SEVERITY, raised to high for unemployment
    and for an income shortfall deeper than the high-effort ratio.
    """
    risks: List[RiskItem] = []

    for warning in warnings:
        severity = WARNING_SEVERITY[warning]
        if warning == ScoreWarning.PRECARIOUS_EMPLOYMENT and tenant.employment_type == EmploymentType.UNEMPLOYED:
            severity = RiskSeverity.HIGH
        elif (
            warning == ScoreWarning.INCOME_RATIO_BELOW_THRESHOLD
            and ratio is not None
            and ratio < policy.high_effort_ratio
        ):
            severity = RiskSeverity.HIGH
        risks.append(RiskItem(warning=warning, severity=severity, mitigation=WARNING_MITIGATIONS[warning]))

    return tuple(risks)


def collect_actions(
    tenant: TenantScoreInput,
    ratio: Optional[float],
    sub_scores: SubScores,
    risks: Tuple[RiskItem, ...],
    recommendation: Recommendation,
    policy: ScoringPolicy = DEFAULT_SCORING_POLICY,
) -> Tuple[LandlordAction, ...]:
    """
    Next steps for the landlord, in LandlordAction declaration order.

    Proceeding to the lease is suggested only when nothing else is pending.
    """
    actions: List[LandlordAction] = []

    if any(risk.severity in (RiskSeverity.HIGH, RiskSeverity.CRITICAL) for risk in risks):
        actions.append(LandlordAction.REQUIRE_ADDITIONAL_GUARANTEES)
    if not tenant.has_guarantor and (ratio is None or ratio < policy.income_ratio_full_marks):
        actions.append(LandlordAction.REQUEST_GUARANTOR)
    if sub_scores.document_completeness < SUB_SCORE_MAX:
        actions.append(LandlordAction.REQUEST_MISSING_DOCUMENTS)
    if not tenant.documents_provided.rent_receipts and tenant.previous_rent_history == RentHistory.UNKNOWN:
        actions.append(LandlordAction.REQUEST_RENT_RECEIPTS)
    if sub_scores.employment_stability < policy.gli_suggestion_employment_score:
        actions.append(LandlordAction.SUGGEST_GLI_INSURANCE)
    if not actions and not risks and recommendation == Recommendation.ACCEPT:
        actions.append(LandlordAction.PROCEED_TO_LEASE)

    return tuple(actions)


def calculate_solvability_score(
    tenant: TenantScoreInput,
    policy: ScoringPolicy = DEFAULT_SCORING_POLICY,
) -> SolvabilityScore:
    """
    Main entry point: score a rental application.

    Pure and deterministic. Business-rule problems (missing documents,
    unpaid rent, weak income) show up as a lower score, a capped
    recommendation and warnings, never as exceptions. Input is assumed to
    be validated by the caller (non-negative amounts, confidence in 0-1).
    """
    ratio = compute_income_ratio(tenant)
    sub_scores = calculate_sub_scores(tenant, ratio, policy)
    total_score = calculate_total_score(sub_scores, policy)
    recommendation = determine_recommendation(total_score, tenant, ratio, policy)
    warnings = collect_warnings(tenant, ratio, sub_scores, policy)
    risks = collect_risks(tenant, ratio, warnings, policy)

    return SolvabilityScore(
        total_score=total_score,
        sub_scores=sub_scores,
        risk_level=determine_risk_level(total_score, policy),
        recommendation=recommendation,
        warnings=warnings,
        risks=risks,
        strengths=collect_strengths(tenant, ratio, sub_scores, policy),
        actions=collect_actions(tenant, ratio, sub_scores, risks, recommendation, policy),
        metrics=calculate_metrics(tenant, ratio, policy),
        version=policy.version,
    )
