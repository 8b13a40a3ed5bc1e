"""Ordered health rules for a single inspection.

Each rule receives the normalised inspection and the current partial
verdict, and returns a RuleOutcome (or None when it does not apply).  The
evaluator folds outcomes into the verdict in the order of ``RULES``; that
tuple *is* the priority order.

Folding rules:
    - status only moves down the ladder green → yellow → red
    - reasons and actions are ordered sets (first occurrence wins)
    - revisit caps take the minimum, so the interval only ever shrinks
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

from hive_health.core.normalize import NormalizedInspection
from hive_health.domain.codes import ActionCode, ReasonCode
from hive_health.domain.enums import HealthStatus, Level, VarroaLevel

# ── Thresholds ───────────────────────────────────────────────────────────────

STRONG_BEE_FRAMES = 7
STRONG_BEE_RATIO = 0.7
HEAVY_BROOD_FRAMES = 4
HEAVY_BROOD_RATIO = 0.35
WEAK_BEE_RATIO = 0.4
SMALL_BROOD_RATIO = 0.2

SICKNESS_REVISIT_DAYS = 2
CRITICAL_REVISIT_DAYS = 3
WATCH_REVISIT_DAYS = 5
BROOD_QUALITY_REVISIT_DAYS = 6
ROUTINE_REVISIT_DAYS = 7


@dataclass(frozen=True)
class RuleOutcome:
    """What a matched rule contributes to the verdict."""

    escalate_to: HealthStatus | None = None
    reasons: tuple[ReasonCode, ...] = ()
    actions: tuple[ActionCode, ...] = ()
    revisit_cap: int | None = None


@dataclass
class PartialVerdict:
    """Verdict being accumulated while the rules run."""

    status: HealthStatus = HealthStatus.GREEN
    revisit_days: int = ROUTINE_REVISIT_DAYS
    reasons: dict[ReasonCode, None] = field(default_factory=dict)
    actions: dict[ActionCode, None] = field(default_factory=dict)

    def apply(self, outcome: RuleOutcome) -> None:
        if outcome.escalate_to is not None:
            self.status = self.status.worst(outcome.escalate_to)
        for reason in outcome.reasons:
            self.reasons.setdefault(reason, None)
        for action in outcome.actions:
            self.actions.setdefault(action, None)
        if outcome.revisit_cap is not None:
            self.revisit_days = min(self.revisit_days, outcome.revisit_cap)

    @property
    def reason_codes(self) -> list[ReasonCode]:
        return list(self.reasons)

    @property
    def action_codes(self) -> list[ActionCode]:
        return list(self.actions)


Rule = Callable[[NormalizedInspection, PartialVerdict], Optional[RuleOutcome]]


# ── Rules ────────────────────────────────────────────────────────────────────


def missing_data_rule(insp: NormalizedInspection, verdict: PartialVerdict) -> RuleOutcome | None:
    """Record every key observation the inspector left blank."""
    missing = []
    if not insp.frame_count_observed:
        missing.append(ReasonCode.DATA_MISSING_FRAME_COUNT)
    if insp.bee_frames is None:
        missing.append(ReasonCode.DATA_MISSING_BEE_FRAMES)
    if insp.brood_frames is None:
        missing.append(ReasonCode.DATA_MISSING_BROOD_FRAMES)
    if insp.larvae_present is None:
        missing.append(ReasonCode.DATA_MISSING_LARVAE)
    if insp.varroa is None:
        missing.append(ReasonCode.DATA_MISSING_VARROA)
    if not missing:
        return None
    return RuleOutcome(reasons=tuple(missing))


def sickness_rule(insp: NormalizedInspection, verdict: PartialVerdict) -> RuleOutcome | None:
    if insp.sickness_signs is not True:
        return None
    return RuleOutcome(
        escalate_to=HealthStatus.RED,
        reasons=(ReasonCode.SICKNESS_SIGNS_REPORTED,),
        actions=(
            ActionCode.PHOTOGRAPH_SYMPTOMS,
            ActionCode.ISOLATE_EQUIPMENT,
            ActionCode.CONTACT_LAB,
        ),
        revisit_cap=SICKNESS_REVISIT_DAYS,
    )


def queen_continuity_rule(insp: NormalizedInspection, verdict: PartialVerdict) -> RuleOutcome | None:
    """No eggs means the queen stopped laying; larvae tell us how recently."""
    if verdict.status is HealthStatus.RED or insp.eggs_seen is not False:
        return None

    if insp.larvae_present is False:
        return RuleOutcome(
            escalate_to=HealthStatus.RED,
            reasons=(ReasonCode.QUEEN_FAILURE_SUSPECTED,),
            actions=(
                ActionCode.CONFIRM_QUEEN_ABSENCE,
                ActionCode.INSERT_TEST_FRAME,
                ActionCode.PLAN_REQUEENING,
            ),
            revisit_cap=CRITICAL_REVISIT_DAYS,
        )
    if insp.larvae_present is True:
        return RuleOutcome(
            escalate_to=HealthStatus.YELLOW,
            reasons=(ReasonCode.QUEEN_WEAK_OR_RECENTLY_LOST,),
            actions=(ActionCode.CHECK_QUEEN_NEXT_VISIT, ActionCode.LOOK_FOR_QUEEN_CELLS),
            revisit_cap=WATCH_REVISIT_DAYS,
        )
    return None


def _is_strong(insp: NormalizedInspection) -> bool:
    return (
        (insp.bee_frames is not None and insp.bee_frames >= STRONG_BEE_FRAMES)
        or (insp.bee_ratio is not None and insp.bee_ratio >= STRONG_BEE_RATIO)
    )


def _has_heavy_brood(insp: NormalizedInspection) -> bool:
    return (
        (insp.brood_frames is not None and insp.brood_frames >= HEAVY_BROOD_FRAMES)
        or (insp.brood_ratio is not None and insp.brood_ratio >= HEAVY_BROOD_RATIO)
    )


def swarm_risk_rule(insp: NormalizedInspection, verdict: PartialVerdict) -> RuleOutcome | None:
    """Queen cells in a strong, brood-heavy colony mean a swarm is close."""
    if verdict.status is HealthStatus.RED or insp.queen_cell_present is not True:
        return None

    if _is_strong(insp) and _has_heavy_brood(insp):
        return RuleOutcome(
            escalate_to=HealthStatus.RED,
            reasons=(ReasonCode.SWARM_RISK_IMMINENT,),
            actions=(ActionCode.SPLIT_COLONY, ActionCode.ADD_SPACE),
            revisit_cap=CRITICAL_REVISIT_DAYS,
        )
    return RuleOutcome(
        escalate_to=HealthStatus.YELLOW,
        reasons=(ReasonCode.QUEEN_CELLS_PRESENT,),
        actions=(ActionCode.MONITOR_QUEEN_CELLS,),
        revisit_cap=WATCH_REVISIT_DAYS,
    )


def varroa_rule(insp: NormalizedInspection, verdict: PartialVerdict) -> RuleOutcome | None:
    if insp.varroa is VarroaLevel.HIGH:
        return RuleOutcome(
            escalate_to=HealthStatus.RED,
            reasons=(ReasonCode.VARROA_HIGH,),
            actions=(ActionCode.TREAT_VARROA,),
            revisit_cap=CRITICAL_REVISIT_DAYS,
        )
    if insp.varroa is VarroaLevel.MEDIUM:
        return RuleOutcome(
            escalate_to=HealthStatus.YELLOW,
            reasons=(ReasonCode.VARROA_MEDIUM,),
            actions=(ActionCode.PLAN_VARROA_TREATMENT,),
            revisit_cap=ROUTINE_REVISIT_DAYS,
        )
    if insp.varroa is VarroaLevel.LOW:
        return RuleOutcome(reasons=(ReasonCode.VARROA_LOW,))
    if insp.varroa is VarroaLevel.NOT_CHECKED:
        return RuleOutcome(
            reasons=(ReasonCode.VARROA_NOT_CHECKED,),
            actions=(ActionCode.CHECK_VARROA_NEXT_VISIT,),
        )
    return None


def food_rule(insp: NormalizedInspection, verdict: PartialVerdict) -> RuleOutcome | None:
    if insp.food is Level.LOW:
        return RuleOutcome(
            escalate_to=HealthStatus.YELLOW,
            reasons=(ReasonCode.FOOD_LOW,),
            actions=(ActionCode.FEED_COLONY,),
            revisit_cap=WATCH_REVISIT_DAYS,
        )
    if insp.food is Level.HIGH:
        return RuleOutcome(reasons=(ReasonCode.FOOD_HIGH,))
    return RuleOutcome(reasons=(ReasonCode.FOOD_OK,))


def strength_rule(insp: NormalizedInspection, verdict: PartialVerdict) -> RuleOutcome | None:
    """Secondary heuristics, only consulted while nothing else is wrong."""
    if verdict.status is not HealthStatus.GREEN:
        return None

    if insp.bee_ratio is not None and insp.bee_ratio < WEAK_BEE_RATIO:
        return RuleOutcome(
            escalate_to=HealthStatus.YELLOW,
            reasons=(ReasonCode.COLONY_WEAK,),
            actions=(ActionCode.REDUCE_HIVE_VOLUME,),
            revisit_cap=ROUTINE_REVISIT_DAYS,
        )
    if (
        insp.brood_ratio is not None
        and insp.brood_ratio < SMALL_BROOD_RATIO
        and insp.eggs_seen is True
    ):
        return RuleOutcome(
            escalate_to=HealthStatus.YELLOW,
            reasons=(ReasonCode.BROOD_SMALL_BUT_VIABLE,),
            actions=(ActionCode.MONITOR_BROOD_GROWTH,),
            revisit_cap=ROUTINE_REVISIT_DAYS,
        )
    return None


def brood_quality_rule(insp: NormalizedInspection, verdict: PartialVerdict) -> RuleOutcome | None:
    if insp.brood_quality is Level.LOW:
        return RuleOutcome(
            escalate_to=HealthStatus.YELLOW,
            reasons=(ReasonCode.BROOD_QUALITY_LOW,),
            actions=(ActionCode.INSPECT_BROOD_PATTERN,),
            revisit_cap=BROOD_QUALITY_REVISIT_DAYS,
        )
    if insp.brood_quality is Level.HIGH:
        return RuleOutcome(reasons=(ReasonCode.BROOD_QUALITY_HIGH,))
    return RuleOutcome(reasons=(ReasonCode.BROOD_QUALITY_OK,))


def fallback_rule(insp: NormalizedInspection, verdict: PartialVerdict) -> RuleOutcome | None:
    """Guarantee at least one reason and one action.

    With the default ``RULES`` the food and brood-quality rules always add a
    reason, so INSPECTION_STABLE is only reachable through custom rule tables.
    """
    reasons = () if verdict.reasons else (ReasonCode.INSPECTION_STABLE,)
    actions = () if verdict.actions else (
        ActionCode.CONTINUE_WEEKLY_INSPECTIONS,
        ActionCode.KEEP_RECORDING_OBSERVATIONS,
    )
    if not reasons and not actions:
        return None
    return RuleOutcome(reasons=reasons, actions=actions)


RULES: tuple[Rule, ...] = (
    missing_data_rule,
    sickness_rule,
    queen_continuity_rule,
    swarm_risk_rule,
    varroa_rule,
    food_rule,
    strength_rule,
    brood_quality_rule,
    fallback_rule,
)


def run_rules(
    insp: NormalizedInspection,
    rules: tuple[Rule, ...] = RULES,
    default_revisit_days: int = ROUTINE_REVISIT_DAYS,
) -> PartialVerdict:
    """Fold *rules* over *insp*, in order, into a fresh verdict."""
    verdict = PartialVerdict(revisit_days=default_revisit_days)
    for rule in rules:
        outcome = rule(insp, verdict)
        if outcome is not None:
            verdict.apply(outcome)
    return verdict
