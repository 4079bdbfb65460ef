"""Shift stages and their static checklist and photo configuration."""

from dataclasses import dataclass
from enum import Enum


class ShiftStage(Enum):
    """Phase of a work shift."""

    OPEN = "오픈"
    MIDDLE = "미들 타임"
    CLOSE = "마감"


class BusyLevel(Enum):
    """How busy the store was during the shift."""

    QUIET = "한가함"
    NORMAL = "보통"
    BUSY = "바쁨"
    VERY_BUSY = "매우 바쁨"


@dataclass(frozen=True)
class ChecklistItem:
    """Single checklist entry shown for a stage."""

    id: str
    label: str


@dataclass(frozen=True)
class PhotoGuide:
    """Caption and instructions for one photo slot."""

    label: str
    description: str


@dataclass(frozen=True)
class StageConfig:
    """Checklist items and photo slots for a stage."""

    checklist: tuple[ChecklistItem, ...]
    photo_guides: tuple[PhotoGuide, ...]

    @property
    def max_photos(self) -> int:
        return len(self.photo_guides)

    @property
    def checklist_ids(self) -> frozenset[str]:
        return frozenset(item.id for item in self.checklist)

    def photo_label(self, index: int) -> str:
        """Return the guide caption for a slot, or a positional fallback."""
        if 0 <= index < len(self.photo_guides):
            return self.photo_guides[index].label
        return f"사진 {index + 1}"


STAGE_CONFIGS: dict[ShiftStage, StageConfig] = {
    ShiftStage.OPEN: StageConfig(
        checklist=(
            ChecklistItem("delivery_on", "배달 프로그램 ON"),
            ChecklistItem("lights_on", "조명, 음악 ON"),
            ChecklistItem("ac_heater", "에어컨 및 히터 확인"),
            ChecklistItem("tea_water", "따듯한 차 및 식수 준비"),
        ),
        photo_guides=(
            PhotoGuide(
                "테이블 전체 + 식수 Self-zone",
                "매장 테이블 배치 상태와 식수대 셀프존을 한 컷에 촬영",
            ),
        ),
    ),
    ShiftStage.MIDDLE: StageConfig(
        checklist=(
            ChecklistItem("table_check", "테이블 정리 상태 확인"),
            ChecklistItem("topping_check", "토핑 준비 체크리스트 확인"),
            ChecklistItem("filling_check", "채우기 업무 리스트 확인"),
        ),
        photo_guides=(
            PhotoGuide(
                "메인 유리문 냉장고", "유리문 냉장고 내부 재고 상태가 보이도록 촬영"
            ),
            PhotoGuide("토핑 냉장고 내부", "우측 문 2개를 열고 토핑 배치 상태 촬영"),
            PhotoGuide(
                "업무 리스트 체크 완료본", "체크 완료된 업무 리스트를 정면에서 촬영"
            ),
        ),
    ),
    ShiftStage.CLOSE: StageConfig(
        checklist=(
            ChecklistItem("gas_check", "가스 차단기 -초록불-"),
            ChecklistItem("warmer_check", "온장고 정리"),
            ChecklistItem("fridge_check", "토핑 냉장고 도구 정리"),
            ChecklistItem("floor_check", "바닥 청소"),
            ChecklistItem("stove_check", "화구 청소"),
            ChecklistItem("dishwasher_check", "식기세척기 마감"),
            ChecklistItem("bleach_check", "헹주 락스"),
            ChecklistItem("lights_door", "불 끄고 매장 문 잠그기"),
        ),
        photo_guides=(
            PhotoGuide("가스 차단기 잠금", "초록불 상태의 가스 차단기를 가까이서 촬영"),
            PhotoGuide(
                "토핑 냉장고 작업대 전체", "정리 완료된 작업대 전체가 보이도록 촬영"
            ),
        ),
    ),
}


def stage_config(stage: ShiftStage) -> StageConfig:
    """Return the configuration for a shift stage."""
    return STAGE_CONFIGS[stage]


def stage_catalog() -> list[dict[str, object]]:
    """Return the stage table in a JSON-friendly shape."""
    return [
        {
            "stage": stage.value,
            "max_photos": config.max_photos,
            "checklist": [
                {"id": item.id, "label": item.label} for item in config.checklist
            ],
            "photo_guides": [
                {"label": guide.label, "description": guide.description}
                for guide in config.photo_guides
            ],
        }
        for stage, config in STAGE_CONFIGS.items()
    ]
