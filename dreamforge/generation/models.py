"""
Data model for the forge pipeline.

Every model serialises with camelCase aliases so the same classes describe
both the JSON the generation service is asked to emit and the values handed
back to callers.
"""
import logging
from enum import Enum
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

TELEMETRY_MESSAGE_TYPE = "forge-telemetry"


class ForgeModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- User Preferences ---

class Genre(str, Enum):
    FPS = "First Person Shooter"
    RPG = "Role Playing Game"
    RACING = "Racing / Vehicle"
    SIMULATION = "Simulation"
    PUZZLE = "Puzzle"
    PLATFORMER = "3D Platformer"
    ARCADE = "Arcade / Action"
    HORROR = "Survival Horror"
    STRATEGY = "Strategy / RTS"


class Platform(str, Enum):
    WEB = "Web (WebGL/WebGPU)"
    DESKTOP = "Desktop (Windows/Mac/Linux)"
    MOBILE = "Mobile (iOS/Android)"
    CONSOLE = "Console (PS5/Xbox/Switch)"


class SkillLevel(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class ArchitectureStyle(str, Enum):
    AUTO = "AI Recommended"
    ECS = "Entity Component System (ECS)"
    OOP = "Object Oriented (OOP)"
    FUNCTIONAL = "Functional / Reactive"
    DATA_ORIENTED = "Data Oriented Design"


class VisualStyle(str, Enum):
    MINIMALIST = "Minimalist / Abstract"
    LOW_POLY = "Low Poly / Flat Shaded"
    CYBERPUNK = "Cyberpunk / Neon"
    RETRO = "Retro / Voxel"
    NOIR = "Noir / High Contrast"
    REALISTIC = "Realistic (PBR Simulated)"
    TOON = "Toon / Cel Shaded"


class CameraPerspective(str, Enum):
    FIRST_PERSON = "First Person (FPS)"
    THIRD_PERSON = "Third Person (Over Shoulder)"
    ISOMETRIC = "Isometric / Top-Down"
    SIDE_SCROLLER = "Side Scroller (2.5D)"
    ORBITAL = "Orbital / God View"


class EnvironmentType(str, Enum):
    ARENA = "Arena / Enclosed"
    DUNGEON = "Dungeon / Corridors"
    OPEN_WORLD = "Open Field / Terrain"
    CITY = "Urban / Cityscape"
    SPACE = "Space / Void"
    INTERIOR = "Interior / House"


class Atmosphere(str, Enum):
    SUNNY = "Bright / Sunny"
    DARK = "Dark / Horror"
    NEON = "Night / Neon"
    FOGGY = "Misty / Foggy"
    SPACE = "Starfield / Void"


class Pacing(str, Enum):
    ARCADE = "Fast / Arcade"
    TACTICAL = "Slow / Tactical"
    SIMULATION = "Real-time / Simulation"
    TURN_BASED = "Turn-Based / Static"


class GameEngine(str, Enum):
    THREEJS = "Three.js (Standard)"
    THREEJS_WEBGPU = "Three.js (WebGPU Experimental)"
    P5JS = "p5.js (Creative Coding)"
    BABYLONJS = "Babylon.js (Enterprise 3D)"
    KABOOMJS = "Kaboom.js (2D/Retro)"
    RAW_WEBGL = "Raw WebGL (No Engine)"


class QualityLevel(str, Enum):
    SKETCH = "Sketch (Low Detail, Fast)"
    PROTOTYPE = "Prototype (Standard)"
    VERTICAL_SLICE = "Vertical Slice (High Polish)"


class CapabilityFlags(ForgeModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    gpu_tier: Literal["low", "mid", "high"] = "mid"
    input: Literal["mouse", "touch", "gamepad"] = "mouse"
    telemetry: bool = False


class UserPreferences(ForgeModel):
    """Read-only brief for one forge session."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    # Core
    genre: Genre = Genre.ARCADE
    platform: Platform = Platform.WEB
    game_engine: GameEngine = GameEngine.THREEJS
    skill_level: SkillLevel = SkillLevel.INTERMEDIATE
    architecture_style: ArchitectureStyle = ArchitectureStyle.AUTO
    project_description: str = ""

    # Design & Assets
    visual_style: VisualStyle = VisualStyle.LOW_POLY
    camera_perspective: CameraPerspective = CameraPerspective.THIRD_PERSON
    environment_type: EnvironmentType = EnvironmentType.ARENA
    atmosphere: Atmosphere = Atmosphere.SUNNY
    pacing: Pacing = Pacing.ARCADE

    # Pro Features
    seed: str = "forge"
    quality: QualityLevel = QualityLevel.PROTOTYPE
    capabilities: CapabilityFlags = Field(default_factory=CapabilityFlags)


# --- Phase 1: Quantized Spec ---

class QuantizedSpec(ForgeModel):
    title: str = Field(description="The title of the game.")
    summary: str = Field(description="One sentence high concept pitch.")
    core_mechanics: List[str] = Field(description="List of 3-5 key gameplay mechanics. Be specific.")
    visual_requirements: List[str] = Field(
        description="List of 3-5 technical visual targets (e.g. 'Neon Bloom', 'Flat Shading')."
    )


# --- Phase 2: Architecture ---

class ArchitectureNode(ForgeModel):
    name: str = Field(description="Name of the system or component.")
    type: Literal["pattern", "component", "system", "data"]
    description: str = Field(description="What this specific node handles. Max 15 words.")


class ArchitectureBlock(ForgeModel):
    style: str = Field(description="Architecture Pattern name ONLY (e.g. ECS, MVC). Max 10 words.")
    description: str = Field(description="A concise technical summary (max 50 words).")
    nodes: List[ArchitectureNode] = Field(default_factory=list)


class TechStackItem(ForgeModel):
    category: str = Field(description="Category (e.g., Rendering, Physics, AI).")
    name: str = Field(description="Tool or library name.")
    description: str = Field(description="Why this tool was chosen.")
    link: Optional[str] = Field(default=None, description="URL to documentation.")


class Prerequisite(ForgeModel):
    item: str = Field(description="Name of the prerequisite.")
    command: Optional[str] = Field(default=None, description="Install command if applicable.")
    importance: Literal["Critical", "Recommended", "Optional"]


class ArchitectureDescription(ForgeModel):
    recommended_engine: str = Field(
        description="The best web-based engine for this task (e.g., Three.js, Babylon.js, PlayCanvas)."
    )
    language: str = Field(description="The programming language (e.g., TypeScript, JavaScript).")
    architecture: ArchitectureBlock
    tech_stack: List[TechStackItem]
    prerequisites: List[Prerequisite]


class Blueprint(QuantizedSpec, ArchitectureDescription):
    """Merged output of the Quantize and Architect phases."""

    @classmethod
    def merge(cls, spec: QuantizedSpec, architecture: ArchitectureDescription) -> "Blueprint":
        return cls.model_validate({**spec.model_dump(), **architecture.model_dump()})

    def blueprint_fields(self) -> dict:
        return self.model_dump(include=set(Blueprint.model_fields))


# --- Phase 3: Audio ---

class SoundEffect(ForgeModel):
    name: str = Field(description="Name of the sound (e.g., 'jump', 'shoot').")
    trigger: str = Field(description="The gameplay event that triggers this (e.g., 'Player presses Space').")
    code: str = Field(description="Raw JS code for a function `function play[Name](ctx) { ... }` that synthesizes a short SFX.")


class AudioBundle(ForgeModel):
    description: str = Field(description="Short description of the soundscape design logic.")
    background_music: str = Field(
        description="Raw JS code for `function playMusic(ctx) { ... }` using the Web Audio API. No external files."
    )
    sound_effects: List[SoundEffect]


# --- Phase 4: Build ---

class PrototypeBuild(ForgeModel):
    html: str = Field(description="A complete, self-contained HTML string with embedded JS/CSS. Contains the full runnable game.")
    instructions: str = Field(description="Clear, short bullet points on controls and objective.")


class Manifest(ForgeModel):
    version: str
    timestamp: int
    seed: str
    spec_hash: str
    build_hash: str
    platform: Platform
    quality: QualityLevel
    parent_hash: Optional[str] = None


class GeneratedGame(Blueprint):
    html: Optional[str] = None
    instructions: Optional[str] = None
    audio: Optional[AudioBundle] = None
    manifest: Optional[Manifest] = None


# --- Refinement ---

class FileEdit(ForgeModel):
    search: str = Field(description="The EXACT unique string block from the original code to be replaced. Must be long enough to be unique.")
    replace: str = Field(description="The new code block to substitute.")


def _is_usable_edit(edit: Any) -> bool:
    if isinstance(edit, FileEdit):
        return bool(edit.search)
    if not isinstance(edit, dict):
        return False
    search, replace = edit.get("search"), edit.get("replace")
    return isinstance(search, str) and bool(search) and isinstance(replace, str)


class EditPlan(ForgeModel):
    edit_mode: Literal["patch", "rewrite"] = Field(
        description="Choose 'patch' for small localized fixes. Choose 'rewrite' for major logic changes, "
                    "structural overhauls, or if you cannot confidently match the context string."
    )
    edits: List[FileEdit] = Field(
        default_factory=list,
        description="List of search-and-replace operations. Required if editMode is 'patch'."
    )
    full_code: Optional[str] = Field(
        default=None,
        description="The complete, valid HTML file string. Required if editMode is 'rewrite'."
    )
    instructions: Optional[str] = Field(default=None, description="Updated gameplay instructions if changed.")

    @field_validator("edits", mode="before")
    @classmethod
    def _drop_malformed_edits(cls, value: Any):
        # A malformed edit list degrades to fewer edits instead of failing the call
        if value is None:
            return []
        if not isinstance(value, list):
            logger.warning(f"[Refine] 'edits' is {type(value).__name__}, not a list. Treating as empty patch.")
            return []
        kept = [e for e in value if _is_usable_edit(e)]
        if len(kept) != len(value):
            logger.warning(f"[Refine] Dropped {len(value) - len(kept)} malformed edit(s).")
        return kept


class RefinementSettings(ForgeModel):
    temperature: float = 0.7
    max_output_tokens: Optional[int] = None
    top_p: Optional[float] = None
    top_k: Optional[int] = None
