"""Unit tests for the scoring policy tables"""

import pytest
from dataclasses import replace
from solvability_gateway.domain.models import EmploymentType, RentHistory, RiskLevel, SubScores
from solvability_gateway.domain.policy import (
    DEFAULT_SCORING_POLICY,
    EMPLOYMENT_STABILITY_SCORES,
    RECOMMENDATION_BANDS,
    RENTAL_HISTORY_SCORES,
    RISK_LEVEL_BANDS,
    SUB_SCORE_WEIGHTS,
    ScoringPolicy,
)
from solvability_gateway.domain.scoring import calculate_solvability_score, determine_risk_level


def test_weights_sum_to_one_and_cover_every_sub_score():
    assert sum(SUB_SCORE_WEIGHTS.values()) == pytest.approx(1.0)
    assert set(SUB_SCORE_WEIGHTS) == set(SubScores.__dataclass_fields__)


def test_income_and_documents_weigh_most_ocr_least():
    ranked = sorted(SUB_SCORE_WEIGHTS, key=SUB_SCORE_WEIGHTS.get, reverse=True)

    assert ranked[:2] == ["income_ratio", "document_completeness"]
    assert ranked[-1] == "ocr_consistency"


def test_lookup_tables_cover_every_enum_value():
    assert set(EMPLOYMENT_STABILITY_SCORES) == set(EmploymentType)
    assert set(RENTAL_HISTORY_SCORES) == set(RentHistory)


def test_lookup_tables_are_read_only():
    with pytest.raises(TypeError):
        EMPLOYMENT_STABILITY_SCORES[EmploymentType.UNEMPLOYED] = 100.0  # type: ignore[index]


@pytest.mark.parametrize("bands", [RISK_LEVEL_BANDS, RECOMMENDATION_BANDS])
def test_bands_descend_and_end_at_zero(bands):
    minimums = [minimum for minimum, _ in bands]

    assert minimums == sorted(minimums, reverse=True)
    assert len(set(minimums)) == len(minimums)
    assert minimums[-1] == 0


def test_every_score_maps_to_exactly_one_risk_level():
    for total_score in range(0, 101):
        matching = [
            level
            for i, (minimum, level) in enumerate(RISK_LEVEL_BANDS)
            if total_score >= minimum and (i == 0 or total_score < RISK_LEVEL_BANDS[i - 1][0])
        ]
        assert len(matching) == 1
        assert determine_risk_level(total_score) == matching[0]


@pytest.mark.parametrize(
    "total_score, expected",
    [
        (100, RiskLevel.LOW),
        (75, RiskLevel.LOW),
        (74, RiskLevel.MEDIUM),
        (50, RiskLevel.MEDIUM),
        (49, RiskLevel.HIGH),
        (30, RiskLevel.HIGH),
        (29, RiskLevel.VERY_HIGH),
        (0, RiskLevel.VERY_HIGH),
    ],
)
def test_risk_level_boundaries(total_score, expected):
    assert determine_risk_level(total_score) == expected


def test_custom_policy_moves_the_income_threshold(strong_tenant):
    lenient = ScoringPolicy(income_ratio_full_marks=2.5)
    tenant = replace(strong_tenant, monthly_income=2500.0)

    assert calculate_solvability_score(tenant, lenient).sub_scores.income_ratio == 100.0
    assert calculate_solvability_score(tenant, DEFAULT_SCORING_POLICY).sub_scores.income_ratio == 75.0


def test_custom_policy_version_is_reported(strong_tenant):
    policy = ScoringPolicy(version="2025-test")

    assert calculate_solvability_score(strong_tenant, policy).version == "2025-test"
