"""Tests for the InspectionEvaluator: scenarios, invariants and determinism.

Each scenario starts from the nominal record in test_inspection_record and
changes only the fields under test.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from hive_health.core.evaluator import EvaluatorConfig, InspectionEvaluator, evaluate_inspection
from hive_health.domain.codes import ActionCode, ChipCode, ReasonCode
from hive_health.domain.enums import HealthStatus
from hive_health.domain.inspection import InspectionRecord

from tests.test_inspection_record import _record


@pytest.fixture
def evaluator() -> InspectionEvaluator:
    return InspectionEvaluator()


# A spread of records covering every rule branch.
_VARIANTS: list[dict] = [
    {},
    {"sickness_signs": True},
    {"eggs_seen": False, "larvae_present": False},
    {"eggs_seen": False, "larvae_present": True},
    {"queen_cell_present": True},
    {"queen_cell_present": True, "bee_frames": 5, "brood_frames": 2},
    {"varroa_level": "high"},
    {"varroa_level": "medium"},
    {"varroa_level": "not_checked"},
    {"food_storage": "weak"},
    {"bee_frames": 3, "brood_frames": 2},
    {"bee_frames": 6, "brood_frames": 1},
    {"brood_quality": "poor"},
    {"frame_count": None, "bee_frames": None, "brood_frames": None,
     "larvae_present": None, "varroa_level": None},
    {"sickness_signs": True, "varroa_level": "high", "food_storage": "faible",
     "brood_quality": "poor", "queen_cell_present": True},
]


class TestScenarios:
    def test_clean_record_is_green(self, evaluator: InspectionEvaluator) -> None:
        analysis = evaluator.evaluate(_record())
        assert analysis.status is HealthStatus.GREEN
        assert analysis.score >= 80
        assert analysis.confidence == 1.0
        assert analysis.reason_codes == [
            ReasonCode.VARROA_LOW,
            ReasonCode.FOOD_OK,
            ReasonCode.BROOD_QUALITY_OK,
        ]
        assert not any(code.is_missing_data for code in analysis.reason_codes)
        assert analysis.action_codes == [
            ActionCode.CONTINUE_WEEKLY_INSPECTIONS,
            ActionCode.KEEP_RECORDING_OBSERVATIONS,
        ]
        assert analysis.chips == [ChipCode.CHIP_STABLE]
        assert analysis.suggested_revisit_days == 7

    def test_sickness_dominates(self, evaluator: InspectionEvaluator) -> None:
        record = InspectionRecord(
            hive_id=1,
            sickness_signs=True,
            varroa_level="high",
            eggs_seen=False,
            larvae_present=False,
        )
        analysis = evaluator.evaluate(record)
        assert analysis.status is HealthStatus.RED
        assert analysis.score <= 49
        assert analysis.suggested_revisit_days <= 2
        findings = [c for c in analysis.reason_codes if not c.is_missing_data]
        assert findings[0] is ReasonCode.SICKNESS_SIGNS_REPORTED
        assert analysis.chips[:2] == [ChipCode.CHIP_URGENT, ChipCode.CHIP_SICKNESS]
        # queen continuity is not consulted once the verdict is red
        assert ReasonCode.QUEEN_FAILURE_SUSPECTED not in analysis.reason_codes
        assert analysis.action_codes[:3] == [
            ActionCode.PHOTOGRAPH_SYMPTOMS,
            ActionCode.ISOLATE_EQUIPMENT,
            ActionCode.CONTACT_LAB,
        ]

    def test_queen_failure(self, evaluator: InspectionEvaluator) -> None:
        analysis = evaluator.evaluate(_record(eggs_seen=False, larvae_present=False))
        assert analysis.status is HealthStatus.RED
        assert ReasonCode.QUEEN_FAILURE_SUSPECTED in analysis.reason_codes
        assert analysis.suggested_revisit_days == 3
        assert analysis.score == 45

    def test_queen_recently_lost(self, evaluator: InspectionEvaluator) -> None:
        analysis = evaluator.evaluate(_record(eggs_seen=False, larvae_present=True))
        assert analysis.status is HealthStatus.YELLOW
        assert ReasonCode.QUEEN_WEAK_OR_RECENTLY_LOST in analysis.reason_codes
        assert analysis.suggested_revisit_days == 5
        assert analysis.score == 75

    def test_swarm_imminent(self, evaluator: InspectionEvaluator) -> None:
        analysis = evaluator.evaluate(_record(queen_cell_present=True))
        assert analysis.status is HealthStatus.RED
        assert ReasonCode.SWARM_RISK_IMMINENT in analysis.reason_codes
        assert ActionCode.SPLIT_COLONY in analysis.action_codes
        assert analysis.suggested_revisit_days == 3
        assert analysis.score == 49

    def test_queen_cells_in_modest_colony_are_monitored(self, evaluator: InspectionEvaluator) -> None:
        analysis = evaluator.evaluate(
            _record(queen_cell_present=True, bee_frames=5, brood_frames=2)
        )
        assert analysis.status is HealthStatus.YELLOW
        assert ReasonCode.QUEEN_CELLS_PRESENT in analysis.reason_codes
        assert analysis.suggested_revisit_days == 5

    def test_varroa_high(self, evaluator: InspectionEvaluator) -> None:
        analysis = evaluator.evaluate(_record(varroa_level="high"))
        assert analysis.status is HealthStatus.RED
        assert analysis.suggested_revisit_days == 3
        assert ChipCode.CHIP_VARROA_HIGH in analysis.chips

    def test_varroa_medium_escalates_green_to_yellow(self, evaluator: InspectionEvaluator) -> None:
        analysis = evaluator.evaluate(_record(varroa_level="medium"))
        assert analysis.status is HealthStatus.YELLOW
        assert analysis.score == 79
        assert analysis.suggested_revisit_days == 7

    def test_varroa_medium_does_not_soften_red(self, evaluator: InspectionEvaluator) -> None:
        analysis = evaluator.evaluate(
            _record(varroa_level="medium", eggs_seen=False, larvae_present=False)
        )
        assert analysis.status is HealthStatus.RED
        assert ReasonCode.VARROA_MEDIUM in analysis.reason_codes

    def test_varroa_not_checked_is_informational(self, evaluator: InspectionEvaluator) -> None:
        analysis = evaluator.evaluate(_record(varroa_level="not_checked"))
        assert analysis.status is HealthStatus.GREEN
        assert analysis.action_codes == [ActionCode.CHECK_VARROA_NEXT_VISIT]
        assert analysis.chips == [ChipCode.CHIP_STABLE, ChipCode.CHIP_VARROA_NOT_CHECKED]

    def test_food_low(self, evaluator: InspectionEvaluator) -> None:
        analysis = evaluator.evaluate(_record(food_storage="faible"))
        assert analysis.status is HealthStatus.YELLOW
        assert ReasonCode.FOOD_LOW in analysis.reason_codes
        assert ActionCode.FEED_COLONY in analysis.action_codes
        assert analysis.suggested_revisit_days == 5

    def test_colony_weak(self, evaluator: InspectionEvaluator) -> None:
        analysis = evaluator.evaluate(_record(bee_frames=3, brood_frames=2))
        assert analysis.status is HealthStatus.YELLOW
        assert ReasonCode.COLONY_WEAK in analysis.reason_codes
        assert ReasonCode.BROOD_SMALL_BUT_VIABLE not in analysis.reason_codes
        assert analysis.metrics.bee_ratio == 0.3

    def test_small_but_viable_brood(self, evaluator: InspectionEvaluator) -> None:
        analysis = evaluator.evaluate(_record(bee_frames=6, brood_frames=1))
        assert analysis.status is HealthStatus.YELLOW
        assert ReasonCode.BROOD_SMALL_BUT_VIABLE in analysis.reason_codes

    def test_small_brood_without_eggs_observation_stays_green(self, evaluator: InspectionEvaluator) -> None:
        analysis = evaluator.evaluate(_record(bee_frames=6, brood_frames=1, eggs_seen=None))
        assert analysis.status is HealthStatus.GREEN

    def test_brood_quality_low(self, evaluator: InspectionEvaluator) -> None:
        analysis = evaluator.evaluate(_record(brood_quality="poor"))
        assert analysis.status is HealthStatus.YELLOW
        assert analysis.suggested_revisit_days == 6

    def test_empty_record_degrades_confidence_not_status(self, evaluator: InspectionEvaluator) -> None:
        analysis = evaluator.evaluate(InspectionRecord(hive_id=1))
        assert analysis.status is HealthStatus.GREEN
        assert analysis.score == 80
        assert analysis.confidence == 0.4
        assert analysis.reason_codes[:5] == [
            ReasonCode.DATA_MISSING_FRAME_COUNT,
            ReasonCode.DATA_MISSING_BEE_FRAMES,
            ReasonCode.DATA_MISSING_BROOD_FRAMES,
            ReasonCode.DATA_MISSING_LARVAE,
            ReasonCode.DATA_MISSING_VARROA,
        ]
        assert analysis.metrics.bee_ratio is None
        assert analysis.metrics.brood_ratio is None

    def test_frame_capacity_is_only_the_ratio_denominator(self, evaluator: InspectionEvaluator) -> None:
        analysis = evaluator.evaluate(_record(frame_count=None), frame_capacity=10)
        assert analysis.metrics.frame_count is None
        assert analysis.metrics.bee_ratio == 0.8
        assert ReasonCode.DATA_MISSING_FRAME_COUNT in analysis.reason_codes
        assert analysis.confidence == 0.88

    def test_smart_summary_takes_first_three(self, evaluator: InspectionEvaluator) -> None:
        analysis = evaluator.evaluate(InspectionRecord(hive_id=1, sickness_signs=True))
        assert analysis.smart_summary.top_reasons == analysis.reason_codes[:3]
        assert analysis.smart_summary.top_actions == analysis.action_codes[:3]

    def test_chips_capped_at_five(self, evaluator: InspectionEvaluator) -> None:
        analysis = evaluator.evaluate(_record(**_VARIANTS[-1]))
        assert len(analysis.chips) == 5
        assert analysis.chips[0] is ChipCode.CHIP_URGENT


class TestInvariants:
    @pytest.mark.parametrize("overrides", _VARIANTS)
    def test_score_agrees_with_status(self, evaluator: InspectionEvaluator, overrides: dict) -> None:
        analysis = evaluator.evaluate(_record(**overrides))
        if analysis.status is HealthStatus.RED:
            assert analysis.score <= 49
        elif analysis.status is HealthStatus.YELLOW:
            assert analysis.score <= 79
        else:
            assert analysis.score >= 80

    @pytest.mark.parametrize("overrides", _VARIANTS)
    def test_bounds_and_non_empty_codes(self, evaluator: InspectionEvaluator, overrides: dict) -> None:
        analysis = evaluator.evaluate(_record(**overrides))
        assert 0.35 <= analysis.confidence <= 1.0
        assert 0 <= analysis.score <= 100
        assert analysis.suggested_revisit_days <= 7
        assert analysis.reason_codes
        assert analysis.action_codes
        assert len(analysis.reason_codes) == len(set(analysis.reason_codes))
        assert len(analysis.action_codes) == len(set(analysis.action_codes))

    def test_confidence_never_rises_as_fields_disappear(self, evaluator: InspectionEvaluator) -> None:
        removals = ["frame_count", "bee_frames", "brood_frames", "larvae_present", "varroa_level"]
        overrides: dict = {}
        confidences = [evaluator.evaluate(_record()).confidence]
        for field_name in removals:
            overrides[field_name] = None
            confidences.append(evaluator.evaluate(_record(**overrides)).confidence)
        for before, after in zip(confidences, confidences[1:]):
            assert after <= before

    def test_more_severe_findings_never_lengthen_revisit(self, evaluator: InspectionEvaluator) -> None:
        mild = evaluator.evaluate(_record(food_storage="weak"))
        worse = evaluator.evaluate(_record(food_storage="weak", varroa_level="high"))
        worst = evaluator.evaluate(
            _record(food_storage="weak", varroa_level="high", sickness_signs=True)
        )
        assert mild.suggested_revisit_days >= worse.suggested_revisit_days
        assert worse.suggested_revisit_days >= worst.suggested_revisit_days


class TestDeterminism:
    def test_repeated_evaluation_identical(self, evaluator: InspectionEvaluator) -> None:
        record = _record(varroa_level="medium", food_storage="poor")
        assert evaluator.evaluate(record) == evaluator.evaluate(record)

    def test_concurrent_evaluation_identical(self, evaluator: InspectionEvaluator) -> None:
        records = [_record(**overrides) for overrides in _VARIANTS]
        expected = [evaluator.evaluate(r) for r in records]
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(evaluator.evaluate, records))
        assert results == expected

    def test_module_level_helper_matches_default_evaluator(self) -> None:
        record = _record(brood_quality="poor")
        assert evaluate_inspection(record) == InspectionEvaluator().evaluate(record)


class TestConfig:
    def test_custom_chip_and_summary_limits(self) -> None:
        engine = InspectionEvaluator(config=EvaluatorConfig(max_chips=2, smart_top_n=1))
        analysis = engine.evaluate(_record(**_VARIANTS[-1]))
        assert len(analysis.chips) == 2
        assert len(analysis.smart_summary.top_reasons) == 1

    @pytest.mark.parametrize(
        "overrides",
        [
            {"default_revisit_days": 14},
            {"default_revisit_days": 0},
            {"confidence_floor": 0.0},
            {"confidence_floor": 1.2},
            {"confidence_missing_penalty": -0.5},
            {"max_chips": 0},
        ],
    )
    def test_out_of_range_config_rejected(self, overrides: dict) -> None:
        with pytest.raises(ValueError):
            EvaluatorConfig(**overrides)

    def test_tightened_config_keeps_guarantees(self) -> None:
        engine = InspectionEvaluator(config=EvaluatorConfig(
            default_revisit_days=5,
            confidence_missing_penalty=0.3,
            confidence_floor=0.5,
        ))
        nominal = engine.evaluate(_record())
        assert nominal.suggested_revisit_days == 5
        empty = engine.evaluate(InspectionRecord(hive_id=1))
        assert empty.confidence == 0.5
