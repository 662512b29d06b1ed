"""Journey stages shown on the "where are you now" step."""

from __future__ import annotations
from dataclasses import dataclass

from ..models import JourneyStage


@dataclass(frozen=True)
class JourneyStageInfo:
    id: JourneyStage
    key: str

    @property
    def title_key(self) -> str:
        return f"journey.stages.{self.key}.title"

    @property
    def description_key(self) -> str:
        return f"journey.stages.{self.key}.description"


JOURNEY_STAGES: list[JourneyStageInfo] = [
    JourneyStageInfo(JourneyStage.NEWLY_DIAGNOSED, "newlyDiagnosed"),
    JourneyStageInfo(JourneyStage.MONITORING, "monitoring"),
    JourneyStageInfo(JourneyStage.PREPARING, "preparing"),
    JourneyStageInfo(JourneyStage.ON_DIALYSIS, "onDialysis"),
    JourneyStageInfo(JourneyStage.TRANSPLANT_WAITING, "transplantWaiting"),
    JourneyStageInfo(JourneyStage.POST_TRANSPLANT, "postTransplant"),
    JourneyStageInfo(JourneyStage.SUPPORTING_SOMEONE, "supporting"),
]


def get_stage_info(stage) -> JourneyStageInfo | None:
    try:
        wanted = JourneyStage(stage)
    except ValueError:
        return None
    return next((s for s in JOURNEY_STAGES if s.id == wanted), None)
