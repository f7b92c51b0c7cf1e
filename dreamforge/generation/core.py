import logging
from typing import Callable, Optional

from langgraph.graph import StateGraph, START, END

from dreamforge.config import Config
from dreamforge.generation.chains import ForgeChains
from dreamforge.generation.errors import ForgeError, PhaseError
from dreamforge.generation.game_state import ForgeState, PipelineStage
from dreamforge.generation.manifest import build_manifest
from dreamforge.generation.models import (
    ArchitectureDescription,
    AudioBundle,
    Blueprint,
    GeneratedGame,
    QuantizedSpec,
    RefinementSettings,
    UserPreferences,
)
from dreamforge.generation.provider import LangChainProvider, Provider
from dreamforge.generation.refinement import refine_game
from dreamforge.utils import clean_code_content

logger = logging.getLogger(__name__)

StatusCallback = Optional[Callable[[str], None]]

QUANTIZE_ERROR_PREFIX = "Failed to quantize requirements: "
ARCHITECT_ERROR_PREFIX = "Failed to generate architecture: "
PROTOTYPE_ERROR_PREFIX = "Prototype Generation Failed: "

AUDIO_FALLBACK_DESCRIPTION = "Audio generation failed."
AUDIO_FALLBACK_MUSIC = "// No music generated"


def fallback_audio() -> AudioBundle:
    return AudioBundle(
        description=AUDIO_FALLBACK_DESCRIPTION,
        background_music=AUDIO_FALLBACK_MUSIC,
        sound_effects=[],
    )


def _notify(on_status: StatusCallback, message: str):
    # Status lines are advisory only
    if not on_status:
        return
    try:
        on_status(message)
    except Exception as e:
        logger.warning(f"[Forge] Status callback failed for '{message}': {e}")


class ForgeGenerator:
    """
    Caller-facing entry point. The provider is fixed at construction; use
    `with_provider` to get a generator bound to a different back end.
    """

    def __init__(self, provider: Provider = None, settings: Config = None):
        self.provider = provider or LangChainProvider()
        self.chains = ForgeChains(self.provider, settings)

    def with_provider(self, provider: Provider) -> "ForgeGenerator":
        logger.info(f"[Forge] Switching AI provider to {type(provider).__name__}")
        return ForgeGenerator(provider, self.chains.config)

    # --- Phase 1: Blueprint ---
    def quantize(self, prefs: UserPreferences, on_status: StatusCallback = None) -> QuantizedSpec:
        _notify(on_status, "Quantizing Requirements...")
        try:
            return self.chains.quantize(prefs)
        except ForgeError as e:
            raise PhaseError("quantize", QUANTIZE_ERROR_PREFIX, e) from e

    def architect(self, spec: QuantizedSpec, prefs: UserPreferences,
                  on_status: StatusCallback = None) -> ArchitectureDescription:
        _notify(on_status, "Architecting System...")
        try:
            return self.chains.architect(spec, prefs)
        except ForgeError as e:
            raise PhaseError("architect", ARCHITECT_ERROR_PREFIX, e) from e

    def generate_blueprint(self, prefs: UserPreferences, on_status: StatusCallback = None) -> Blueprint:
        spec = self.quantize(prefs, on_status)
        architecture = self.architect(spec, prefs, on_status)
        return Blueprint.merge(spec, architecture)

    # --- Phase 2: Audio ---
    def generate_soundscape(self, blueprint: Blueprint, prefs: UserPreferences,
                            on_status: StatusCallback = None) -> AudioBundle:
        """Best effort: any failure degrades to an empty bundle and never reaches the caller."""
        _notify(on_status, "Designing Soundscape...")
        try:
            return self.chains.soundscape(blueprint, prefs)
        except Exception as e:
            logger.warning(f"[Audio] Audio generation failed, proceeding without audio: {e}")
            return fallback_audio()

    # --- Phase 3: Prototype ---
    def generate_prototype(self, blueprint: Blueprint, prefs: UserPreferences,
                           audio: Optional[AudioBundle] = None,
                           on_status: StatusCallback = None) -> GeneratedGame:
        _notify(on_status, "Synthesizing Shaders & Logic...")
        try:
            build = self.chains.build(blueprint, prefs, audio)
        except ForgeError as e:
            raise PhaseError("build", PROTOTYPE_ERROR_PREFIX, e) from e

        html = clean_code_content(build.html)
        manifest = build_manifest(blueprint, html, seed=prefs.seed, platform=prefs.platform, quality=prefs.quality)
        logger.info(f"[Build] Prototype built. spec={manifest.spec_hash} build={manifest.build_hash}")
        return GeneratedGame.model_validate({
            **blueprint.blueprint_fields(),
            "html": html,
            "instructions": build.instructions,
            "audio": audio.model_copy(deep=True) if audio else None,
            "manifest": manifest,
        })

    # --- Phase 4: Refinement ---
    def refine_game(self, current_game: GeneratedGame, instruction: str,
                    settings: Optional[RefinementSettings] = None) -> GeneratedGame:
        return refine_game(self.chains, current_game, instruction, settings)

    def run_full_pipeline(self, prefs: UserPreferences, on_status: StatusCallback = None) -> GeneratedGame:
        app_graph = create_forge_graph(self, on_status)
        logger.info("[Forge] Starting LangGraph forge pipeline...")
        try:
            final_state = app_graph.invoke({"preferences": prefs, "stage": PipelineStage.QUANTIZING})
        except PhaseError as e:
            logger.error(f"[Forge] Pipeline {PipelineStage.FAILED.value} during '{e.phase}': {e}")
            raise
        logger.info(f"[Forge] Pipeline {final_state['stage'].value}.")
        return final_state["game"]


def create_forge_graph(generator: ForgeGenerator, on_status: StatusCallback = None):
    """
    Strictly sequential graph: Quantizing -> Architecting -> Sounding -> Building.
    A fatal phase raises out of `invoke`; the sound phase cannot fail.
    """
    # --- Node Definitions ---
    def quantize_node(state: ForgeState):
        spec = generator.quantize(state["preferences"], on_status)
        return {"spec": spec, "stage": PipelineStage.ARCHITECTING}

    def architect_node(state: ForgeState):
        architecture = generator.architect(state["spec"], state["preferences"], on_status)
        blueprint = Blueprint.merge(state["spec"], architecture)
        return {"architecture": architecture, "blueprint": blueprint, "stage": PipelineStage.SOUNDING}

    def sound_node(state: ForgeState):
        audio = generator.generate_soundscape(state["blueprint"], state["preferences"], on_status)
        return {"audio": audio, "stage": PipelineStage.BUILDING}

    def build_node(state: ForgeState):
        game = generator.generate_prototype(state["blueprint"], state["preferences"], state["audio"], on_status)
        return {"game": game, "stage": PipelineStage.DONE}

    # --- Assemble StateGraph ---
    workflow = StateGraph(ForgeState)

    workflow.add_node("Quantizer", quantize_node)
    workflow.add_node("Architect", architect_node)
    workflow.add_node("Sound_Designer", sound_node)
    workflow.add_node("Builder", build_node)

    workflow.add_edge(START, "Quantizer")
    workflow.add_edge("Quantizer", "Architect")
    workflow.add_edge("Architect", "Sound_Designer")
    workflow.add_edge("Sound_Designer", "Builder")
    workflow.add_edge("Builder", END)

    return workflow.compile()
