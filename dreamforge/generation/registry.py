"""
PROMPT REGISTRY
Pure builders for every phase request: instructions plus the output schema the
response is validated against. No I/O and no shared state.
"""
import json
from dataclasses import dataclass
from typing import List, Optional, Type

from langchain_core.output_parsers import JsonOutputParser
from pydantic import BaseModel

from dreamforge.generation.compressor import PLACEHOLDER_TOKENS
from dreamforge.generation.models import (
    TELEMETRY_MESSAGE_TYPE,
    ArchitectureDescription,
    AudioBundle,
    Blueprint,
    EditPlan,
    PrototypeBuild,
    QuantizedSpec,
    UserPreferences,
)
from dreamforge.prompts.engine_specs import get_engine_spec
from dreamforge.prompts.generation_prompts import (
    ARCHITECT_SYSTEM_PROMPT,
    ARCHITECT_USER_TEMPLATE,
    AUDIO_CONTEXT_TEMPLATE,
    BUILD_SYSTEM_PROMPT,
    BUILD_USER_TEMPLATE,
    DEFAULT_GPU_RULES,
    GPU_RULES,
    NO_AUDIO_CONTEXT,
    NO_TELEMETRY,
    QUANTIZE_SYSTEM_PROMPT,
    QUANTIZE_USER_TEMPLATE,
    SEEDED_RANDOM_SNIPPET,
    SOUND_EFFECT_TEMPLATE,
    SOUNDSCAPE_SYSTEM_PROMPT,
    SOUNDSCAPE_USER_TEMPLATE,
    TELEMETRY_RULE,
)
from dreamforge.prompts.refinement_prompts import REFINE_SYSTEM_PROMPT, REFINE_USER_TEMPLATE


@dataclass(frozen=True)
class PhasePrompt:
    phase: str
    system_prompt: str
    contents: str
    schema: Type[BaseModel]

    @property
    def response_schema(self) -> dict:
        return self.schema.model_json_schema(by_alias=True)

    @property
    def required_fields(self) -> List[str]:
        return list(self.response_schema.get("required", []))


def format_instructions(schema: Type[BaseModel]) -> str:
    return JsonOutputParser(pydantic_object=schema).get_format_instructions()


def gpu_rules_for(gpu_tier: str) -> str:
    return GPU_RULES.get(gpu_tier, DEFAULT_GPU_RULES)


def audio_context_for(audio: Optional[AudioBundle]) -> str:
    if not audio or not audio.sound_effects:
        return NO_AUDIO_CONTEXT
    effects = "\n\n".join(
        SOUND_EFFECT_TEMPLATE.format(trigger=sfx.trigger, code=sfx.code) for sfx in audio.sound_effects
    )
    return AUDIO_CONTEXT_TEMPLATE.format(background_music=audio.background_music, sound_effects=effects)


def telemetry_rule_for(prefs: UserPreferences) -> str:
    if prefs.capabilities.telemetry:
        return TELEMETRY_RULE.format(message_type=TELEMETRY_MESSAGE_TYPE)
    return NO_TELEMETRY


# --- BLUEPRINT PHASE ---

def quantize_requirements(prefs: UserPreferences) -> PhasePrompt:
    contents = QUANTIZE_USER_TEMPLATE.format(
        engine=prefs.game_engine.value,
        genre=prefs.genre.value,
        visual_style=prefs.visual_style.value,
        camera=prefs.camera_perspective.value,
        environment=prefs.environment_type.value,
        atmosphere=prefs.atmosphere.value,
        pacing=prefs.pacing.value,
        concept=prefs.project_description,
        seed=prefs.seed,
        format_instructions=format_instructions(QuantizedSpec),
    )
    return PhasePrompt("quantize", QUANTIZE_SYSTEM_PROMPT, contents, QuantizedSpec)


def architect_system(spec: QuantizedSpec, prefs: UserPreferences) -> PhasePrompt:
    contents = ARCHITECT_USER_TEMPLATE.format(
        spec_sheet=json.dumps(spec.model_dump(by_alias=True), indent=2, ensure_ascii=False),
        platform=prefs.platform.value,
        engine=prefs.game_engine.value,
        architecture_style=prefs.architecture_style.value,
        gpu_tier=prefs.capabilities.gpu_tier,
        input_mode=prefs.capabilities.input,
        format_instructions=format_instructions(ArchitectureDescription),
    )
    return PhasePrompt("architect", ARCHITECT_SYSTEM_PROMPT, contents, ArchitectureDescription)


# --- ASSET PHASE ---

def design_soundscape(blueprint: Blueprint, prefs: UserPreferences) -> PhasePrompt:
    contents = SOUNDSCAPE_USER_TEMPLATE.format(
        title=blueprint.title,
        atmosphere=prefs.atmosphere.value,
        genre=prefs.genre.value,
        mechanics=json.dumps(blueprint.core_mechanics, ensure_ascii=False),
        format_instructions=format_instructions(AudioBundle),
    )
    return PhasePrompt("soundscape", SOUNDSCAPE_SYSTEM_PROMPT, contents, AudioBundle)


# --- PROTOTYPE PHASE ---

def build_prototype(blueprint: Blueprint, prefs: UserPreferences, audio: Optional[AudioBundle]) -> PhasePrompt:
    contents = BUILD_USER_TEMPLATE.format(
        title=blueprint.title,
        summary=blueprint.summary,
        mechanics=json.dumps(blueprint.core_mechanics, ensure_ascii=False),
        visuals=json.dumps(blueprint.visual_requirements, ensure_ascii=False),
        engine=prefs.game_engine.value,
        platform=prefs.platform.value,
        input_mode=prefs.capabilities.input,
        visual_style=prefs.visual_style.value,
        camera=prefs.camera_perspective.value,
        environment=prefs.environment_type.value,
        atmosphere=prefs.atmosphere.value,
        quality=prefs.quality.value,
        gpu_tier=prefs.capabilities.gpu_tier,
        gpu_rules=gpu_rules_for(prefs.capabilities.gpu_tier),
        engine_spec=get_engine_spec(prefs.game_engine).render(),
        seed=prefs.seed,
        seeded_random=SEEDED_RANDOM_SNIPPET.format(seed=prefs.seed),
        audio_context=audio_context_for(audio),
        telemetry=telemetry_rule_for(prefs),
        format_instructions=format_instructions(PrototypeBuild),
    )
    return PhasePrompt("build", BUILD_SYSTEM_PROMPT, contents, PrototypeBuild)


# --- REFINEMENT PHASE ---

def refine_code(instruction: str, context_code: str) -> PhasePrompt:
    system_prompt = REFINE_SYSTEM_PROMPT.format(placeholders=", ".join(PLACEHOLDER_TOKENS))
    contents = REFINE_USER_TEMPLATE.format(
        instruction=instruction,
        context_code=context_code,
        format_instructions=format_instructions(EditPlan),
    )
    return PhasePrompt("refine", system_prompt, contents, EditPlan)
