import hashlib
import json
import time
from typing import Optional

from dreamforge import ENGINE_VERSION
from dreamforge.generation.models import Blueprint, Manifest, Platform, QualityLevel

SHORT_HASH_LENGTH = 16


def short_hash(text: str) -> str:
    """Stable 64-bit prefix of the SHA-256 digest of `text`."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()[:SHORT_HASH_LENGTH]


def serialize_blueprint(blueprint: Blueprint) -> str:
    """Canonical JSON of the blueprint fields only, whatever subclass is passed in."""
    data = blueprint.model_dump(mode="json", by_alias=True, include=set(Blueprint.model_fields))
    return json.dumps(data, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def build_manifest(
        blueprint: Blueprint,
        html: str,
        seed: str,
        platform: Platform,
        quality: QualityLevel,
        parent_hash: Optional[str] = None,
) -> Manifest:
    return Manifest(
        version=ENGINE_VERSION,
        timestamp=int(time.time() * 1000),
        seed=seed,
        spec_hash=short_hash(serialize_blueprint(blueprint)),
        build_hash=short_hash(html or ""),
        platform=platform,
        quality=quality,
        parent_hash=parent_hash,
    )
