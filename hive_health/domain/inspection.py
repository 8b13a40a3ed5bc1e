"""InspectionRecord — the contract between the ingestion boundary and the engine.

An inspection is what a beekeeper wrote down while the hive was open.  Most
observations are optional: a field left blank is recorded as ``None`` and
the evaluator degrades its confidence instead of failing.

The numeric frame invariants are validated here, once, so the engine can
assume they hold and never re-checks them.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field, field_validator, model_validator

from hive_health.foundation.clock import utc_today

MAX_FRAME_COUNT = 30


class InspectionRecord(BaseModel):
    """One field inspection of a single hive.

    Immutable after creation.  Free-text labels (food storage, brood
    quality, varroa level) are kept as written; normalisation is the
    evaluator's job.
    """

    inspection_id: int | None = Field(
        default=None,
        description="Storage identifier, used as a secondary ordering key",
    )
    hive_id: int = Field(..., description="Owning hive identifier")
    inspection_date: date = Field(
        default_factory=utc_today,
        description="Calendar day of the inspection (defaults to today, UTC)",
    )

    queen_seen: bool | None = None
    eggs_seen: bool | None = None
    queen_cell_present: bool | None = None
    sickness_signs: bool | None = None
    larvae_present: bool | None = None

    brood_quality: str | None = Field(default=None, max_length=64)
    food_storage: str | None = Field(default=None, max_length=64)
    varroa_level: str | None = Field(default=None, max_length=32)

    frame_count: int | None = Field(default=None, ge=0, le=MAX_FRAME_COUNT)
    bee_frames: int | None = Field(default=None, ge=0)
    brood_frames: int | None = Field(default=None, ge=0)

    revisit_needed: bool = False
    revisit_date: date | None = None
    notes: str | None = None

    model_config = {"frozen": True}

    # ── Validators ───────────────────────────────────────────────────────

    @field_validator("brood_quality", "food_storage", "varroa_level")
    @classmethod
    def blank_label_is_absent(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def frames_must_be_consistent(self) -> InspectionRecord:
        fc, bees, brood = self.frame_count, self.bee_frames, self.brood_frames
        if fc is not None and bees is not None and bees > fc:
            raise ValueError(f"bee_frames ({bees}) cannot exceed frame_count ({fc})")
        if fc is not None and brood is not None and brood > fc:
            raise ValueError(f"brood_frames ({brood}) cannot exceed frame_count ({fc})")
        if bees is not None and brood is not None and brood > bees:
            raise ValueError(f"brood_frames ({brood}) cannot exceed bee_frames ({bees})")
        return self
