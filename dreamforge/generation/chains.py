import logging
from typing import Optional, Type, TypeVar

import pydantic
from pydantic import BaseModel

from dreamforge.config import Config, config as default_config
from dreamforge.generation import registry
from dreamforge.generation.errors import ValidationError
from dreamforge.generation.models import (
    ArchitectureDescription,
    AudioBundle,
    Blueprint,
    EditPlan,
    PrototypeBuild,
    QuantizedSpec,
    RefinementSettings,
    UserPreferences,
)
from dreamforge.generation.provider import GenerationRequest, Provider
from dreamforge.generation.registry import PhasePrompt
from dreamforge.generation.sanitizer import parse_and_sanitize, validate_structure

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def coerce_model(schema: Type[M], data: dict, context: str) -> M:
    """Turns a presence-checked dict into the phase model; type errors fail the phase."""
    try:
        return schema.model_validate(data)
    except pydantic.ValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        raise ValidationError(f"{context}: Invalid field values: {', '.join(fields)}") from e


class ForgeChains:
    """
    One method per phase. Each builds its request from the registry, calls the
    provider exactly once, then sanitizes, validates and coerces the response.
    """

    def __init__(self, provider: Provider, settings: Config = None):
        self.provider = provider
        self.config = settings or default_config

    def _request(self, prompt: PhasePrompt, overrides: Optional[RefinementSettings] = None):
        budget = self.config.budget_for(prompt.phase)
        request = GenerationRequest(
            system_prompt=prompt.system_prompt,
            contents=prompt.contents,
            response_schema=prompt.response_schema,
            thinking_budget=budget.thinking_budget,
            max_output_tokens=budget.max_output_tokens,
        )
        if overrides is not None:
            request = request.model_copy(update={
                "temperature": overrides.temperature,
                "top_p": overrides.top_p,
                "top_k": overrides.top_k,
                "max_output_tokens": overrides.max_output_tokens or budget.max_output_tokens,
            })
        return request

    def _run(self, prompt: PhasePrompt, context: str, overrides: Optional[RefinementSettings] = None) -> BaseModel:
        request = self._request(prompt, overrides)
        logger.debug(f"[Chains] {context}: sending request ({request.max_output_tokens} max tokens).")
        raw = self.provider.generate(request)
        data = parse_and_sanitize(raw or "{}")
        validate_structure(data, prompt.required_fields, context)
        return coerce_model(prompt.schema, data, context)

    # --- Phase 1: Blueprint ---
    def quantize(self, prefs: UserPreferences) -> QuantizedSpec:
        return self._run(registry.quantize_requirements(prefs), "Blueprint Spec")

    def architect(self, spec: QuantizedSpec, prefs: UserPreferences) -> ArchitectureDescription:
        return self._run(registry.architect_system(spec, prefs), "Blueprint Architecture")

    # --- Phase 2: Assets ---
    def soundscape(self, blueprint: Blueprint, prefs: UserPreferences) -> AudioBundle:
        return self._run(registry.design_soundscape(blueprint, prefs), "Soundscape")

    # --- Phase 3: Prototype ---
    def build(self, blueprint: Blueprint, prefs: UserPreferences, audio: Optional[AudioBundle]) -> PrototypeBuild:
        return self._run(registry.build_prototype(blueprint, prefs, audio), "Prototype Builder")

    # --- Phase 4: Refinement ---
    def plan_refinement(self, instruction: str, context_code: str,
                        settings: Optional[RefinementSettings] = None) -> EditPlan:
        return self._run(registry.refine_code(instruction, context_code), "Refinement Plan", overrides=settings)
