import json
import os
import re

from dreamforge.generation.models import GeneratedGame

_WRAPPING_FENCE = re.compile(r"^\s*```[a-zA-Z0-9_=-]*\s*\n(.*?)\n?```\s*$", re.DOTALL)


def clean_code_content(content: str) -> str:
    """Strip a markdown fence that wraps the whole code payload. Inner fences are left alone."""
    if not content:
        return ""
    match = _WRAPPING_FENCE.match(content)
    if match:
        return match.group(1)
    return content


def preview_payload(game: GeneratedGame) -> dict:
    """What the external preview host receives: the title and the runnable document."""
    return {"title": game.title, "html": game.html or ""}


def save_generated_files(game: GeneratedGame, output_dir: str) -> str:
    """
    Export a built game as index.html + manifest.json + blueprint.json.
    Each build lands in its own folder named after its build hash.
    """
    if game.html is None or game.manifest is None:
        raise ValueError("Only built games (html + manifest) can be exported.")

    build_dir = os.path.join(output_dir, game.manifest.build_hash)
    os.makedirs(build_dir, exist_ok=True)

    with open(os.path.join(build_dir, "index.html"), "w", encoding="utf-8") as f:
        f.write(game.html)
    with open(os.path.join(build_dir, "manifest.json"), "w", encoding="utf-8") as f:
        json.dump(game.manifest.model_dump(mode="json", by_alias=True), f, indent=2)
    with open(os.path.join(build_dir, "blueprint.json"), "w", encoding="utf-8") as f:
        blueprint = game.model_dump(mode="json", by_alias=True, exclude={"html", "manifest"})
        json.dump(blueprint, f, indent=2, ensure_ascii=False)

    return build_dir
