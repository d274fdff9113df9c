from pathlib import Path
from typing import Dict, List

import yaml
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

PRESETS_FILE = Path(__file__).parent / "presets.yaml"


class MissionSpec(BaseModel):
    """Explanatory text plus quiz prompts for one topic."""

    model_config = ConfigDict(strict=True, frozen=True)

    mission: StrictStr = Field(description="Learning plan shown for the topic")
    challenge: List[StrictStr] = Field(
        min_length=1, description="Quiz prompts, asked in order"
    )

    @field_validator("mission")
    @classmethod
    def _mission_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("mission must not be blank")
        return value

    @field_validator("challenge")
    @classmethod
    def _challenges_not_blank(cls, value: List[str]) -> List[str]:
        stripped = [question.strip() for question in value]
        for index, question in enumerate(stripped):
            if not question:
                raise ValueError(f"challenge[{index}] must not be blank")
        return stripped


# Load built-in topics from YAML
def load_presets(presets_file: Path = PRESETS_FILE) -> Dict[str, MissionSpec]:
    logger.debug(f"Loading presets from {presets_file}")
    raw = yaml.safe_load(presets_file.read_text(encoding="utf-8")) or {}
    presets = {
        topic: MissionSpec.model_validate(entry) for topic, entry in raw.items()
    }
    logger.debug(f"Loaded presets: {list(presets)}")
    return presets
