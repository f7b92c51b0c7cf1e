from enum import Enum
from typing import Optional, TypedDict

from dreamforge.generation.models import (
    ArchitectureDescription,
    AudioBundle,
    Blueprint,
    GeneratedGame,
    QuantizedSpec,
    UserPreferences,
)


class PipelineStage(str, Enum):
    QUANTIZING = "quantizing"
    ARCHITECTING = "architecting"
    SOUNDING = "sounding"
    BUILDING = "building"
    DONE = "done"
    FAILED = "failed"


class ForgeState(TypedDict, total=False):
    preferences: UserPreferences
    stage: PipelineStage

    # Blueprint Phase
    spec: QuantizedSpec
    architecture: ArchitectureDescription
    blueprint: Blueprint

    # Asset Phase
    audio: Optional[AudioBundle]

    # Build Phase
    game: GeneratedGame
