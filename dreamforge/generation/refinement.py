"""
Differential refinement: mutate an existing game from a natural-language
instruction without regenerating it.

Patch application is deliberately partial-tolerant. Each edit is applied only
on an exact match against the full artifact; an edit that cannot be located is
skipped and logged, and the remaining edits still apply. There is no fuzzy
fallback: a wrong substitution in executable code is worse than a no-op.
"""
import logging
from typing import List, NamedTuple, Optional

from dreamforge.generation.chains import ForgeChains
from dreamforge.generation.compressor import compress_code_for_context, contains_placeholder
from dreamforge.generation.errors import ForgeError, PatchMatchMiss, PhaseError, ValidationError
from dreamforge.generation.manifest import build_manifest
from dreamforge.generation.models import FileEdit, GeneratedGame, RefinementSettings
from dreamforge.utils import clean_code_content

logger = logging.getLogger(__name__)

REFINEMENT_ERROR_PREFIX = "Refinement Failed: "


class PatchResult(NamedTuple):
    html: str
    applied: int
    skipped: List[PatchMatchMiss]


def apply_edit(html: str, edit: FileEdit) -> str:
    """Replace the first exact occurrence of `edit.search`. Raises PatchMatchMiss otherwise."""
    if contains_placeholder(edit.search) or contains_placeholder(edit.replace):
        raise PatchMatchMiss(edit.search, reason="edit touches hidden data placeholder")
    if edit.search not in html:
        raise PatchMatchMiss(edit.search)
    return html.replace(edit.search, edit.replace, 1)


def apply_patch(html: str, edits: List[FileEdit]) -> PatchResult:
    applied = 0
    skipped = []
    for edit in edits:
        try:
            html = apply_edit(html, edit)
            applied += 1
        except PatchMatchMiss as miss:
            logger.warning(f"[Refine] Patch skipped - strict match failed: {miss}")
            skipped.append(miss)
    return PatchResult(html, applied, skipped)


def refine_game(
        chains: ForgeChains,
        current_game: GeneratedGame,
        instruction: str,
        settings: Optional[RefinementSettings] = None,
) -> GeneratedGame:
    """
    Returns a new version of `current_game`. The input is never mutated; any
    provider, parsing or validation failure aborts the whole call.
    """
    try:
        if not current_game.html:
            raise ValidationError("Game has no generated code to refine.")
        if current_game.manifest is None:
            raise ValidationError("Game has no manifest; lineage cannot be recorded.")

        # Compress context to save tokens (remove huge assets)
        context_code = compress_code_for_context(current_game.html)
        plan = chains.plan_refinement(instruction, context_code, settings)
    except ForgeError as e:
        raise PhaseError("refine", REFINEMENT_ERROR_PREFIX, e) from e

    # Mode 1: Full Rewrite
    if plan.edit_mode == "rewrite" and plan.full_code:
        logger.info("[Refine] Refinement strategy: REWRITE")
        new_html = clean_code_content(plan.full_code)
    else:
        # Mode 2: Patch
        if plan.edit_mode == "rewrite":
            logger.warning("[Refine] Rewrite requested without fullCode, falling back to edits.")
        logger.info(f"[Refine] Refinement strategy: PATCH ({len(plan.edits)} edits)")
        result = apply_patch(current_game.html, plan.edits)
        logger.info(f"[Refine] Applied {result.applied} edit(s), skipped {len(result.skipped)}.")
        new_html = result.html

    previous = current_game.manifest
    manifest = build_manifest(
        current_game,
        new_html,
        seed=previous.seed,
        platform=previous.platform,
        quality=previous.quality,
        parent_hash=previous.build_hash,
    )
    return current_game.model_copy(
        update={
            "html": new_html,
            "instructions": plan.instructions or current_game.instructions,
            "manifest": manifest,
        },
        deep=True,
    )
