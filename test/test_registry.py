import pytest

from conftest import AUDIO
from dreamforge.generation import registry
from dreamforge.generation.compressor import PLACEHOLDER_TOKENS
from dreamforge.generation.models import (
    AudioBundle,
    CapabilityFlags,
    GameEngine,
    TELEMETRY_MESSAGE_TYPE,
    UserPreferences,
)
from dreamforge.prompts.engine_specs import DEFAULT_ENGINE, ENGINE_SPECS, get_engine_spec
from dreamforge.prompts.generation_prompts import DEFAULT_GPU_RULES, GPU_RULES, NO_AUDIO_CONTEXT, NO_TELEMETRY


def test_every_engine_has_instructions():
    assert set(ENGINE_SPECS) == set(GameEngine)


@pytest.mark.parametrize("engine", ["Unity", None, "three.js"])
def test_unknown_engine_falls_back_to_default(engine):
    assert get_engine_spec(engine) is ENGINE_SPECS[DEFAULT_ENGINE]


def test_engine_spec_lookup_by_value():
    spec = get_engine_spec(GameEngine.KABOOMJS.value)
    assert "Kaboom" in spec.framework


def test_gpu_rules_fall_back_on_unknown_tier():
    assert registry.gpu_rules_for("high") == GPU_RULES["high"]
    assert registry.gpu_rules_for("ultra") == DEFAULT_GPU_RULES


def test_audio_context_lists_each_effect():
    context = registry.audio_context_for(AudioBundle.model_validate(AUDIO))
    assert "// Trigger: Player collects a boost" in context
    assert AUDIO["backgroundMusic"] in context


@pytest.mark.parametrize("audio", [None, AudioBundle(description="x", background_music="", sound_effects=[])])
def test_audio_context_without_effects(audio):
    assert registry.audio_context_for(audio) == NO_AUDIO_CONTEXT


def test_telemetry_only_when_flag_is_set(blueprint):
    with_flag = UserPreferences(capabilities=CapabilityFlags(telemetry=True))
    without_flag = UserPreferences()

    on = registry.build_prototype(blueprint, with_flag, None).contents
    off = registry.build_prototype(blueprint, without_flag, None).contents

    assert TELEMETRY_MESSAGE_TYPE in on
    assert TELEMETRY_MESSAGE_TYPE not in off
    assert NO_TELEMETRY in off


def test_build_prompt_embeds_engine_and_seed(blueprint):
    prefs = UserPreferences(game_engine=GameEngine.P5JS, seed="lucky-7")
    contents = registry.build_prototype(blueprint, prefs, None).contents

    assert ENGINE_SPECS[GameEngine.P5JS].framework in contents
    assert 'new SeededRandom("lucky-7")' in contents


def test_prompt_builders_are_pure(blueprint):
    prefs = UserPreferences()
    first = registry.build_prototype(blueprint, prefs, None)
    second = registry.build_prototype(blueprint, prefs, None)
    assert first == second


@pytest.mark.parametrize("builder, required", [
    (lambda bp, p: registry.quantize_requirements(p),
     ["title", "summary", "coreMechanics", "visualRequirements"]),
    (lambda bp, p: registry.design_soundscape(bp, p),
     ["description", "backgroundMusic", "soundEffects"]),
    (lambda bp, p: registry.build_prototype(bp, p, None),
     ["html", "instructions"]),
])
def test_required_fields_use_wire_names(blueprint, builder, required):
    prompt = builder(blueprint, UserPreferences())
    assert prompt.required_fields == required


def test_refine_prompt_names_placeholders():
    prompt = registry.refine_code("make it red", "const a = {x: 1};")
    for token in PLACEHOLDER_TOKENS:
        assert token in prompt.system_prompt
    assert "const a = {x: 1};" in prompt.contents
    assert prompt.phase == "refine"
