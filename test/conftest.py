import copy
import json

import pytest

from dreamforge.generation.models import (
    Blueprint,
    CapabilityFlags,
    Genre,
    Platform,
    QualityLevel,
    UserPreferences,
)
from dreamforge.generation.provider import Provider

SPEC = {
    "title": "Neon Drift",
    "summary": "Dodge traffic on an endless neon highway.",
    "coreMechanics": ["Lane switching", "Boost pickups", "Near-miss scoring"],
    "visualRequirements": ["Neon bloom", "Flat shaded cars", "Scrolling grid floor"],
}

ARCH = {
    "recommendedEngine": "Three.js",
    "language": "JavaScript",
    "architecture": {
        "style": "ECS",
        "description": "Entities hold components; systems update them each frame.",
        "nodes": [
            {"name": "InputSystem", "type": "system", "description": "Maps keys to lane changes."},
            {"name": "Transform", "type": "component", "description": "Position and lane index."},
        ],
    },
    "techStack": [
        {"category": "Rendering", "name": "Three.js", "description": "WebGL scene graph.", "link": "https://threejs.org/docs/"},
    ],
    "prerequisites": [
        {"item": "Modern browser", "command": "none", "importance": "Critical"},
    ],
}

AUDIO = {
    "description": "Fast square-wave arpeggios with short noise bursts.",
    "backgroundMusic": "function playMusic(ctx) { const o = ctx.createOscillator(); o.start(); }",
    "soundEffects": [
        {"name": "boost", "trigger": "Player collects a boost", "code": "function playBoost(ctx) { }"},
    ],
}

HTML = (
    "<html><body><div id=\"overlay\">Click to Play</div>"
    "<script>const speed = 5;\nconst color = 'red';\nfunction loop() { requestAnimationFrame(loop); }</script>"
    "</body></html>"
)

BUILD = {"html": HTML, "instructions": "Arrow keys to switch lanes."}


class ScriptedProvider(Provider):
    """Returns canned responses in order; an Exception item is raised instead."""

    provider_name = "scripted"

    def __init__(self, responses):
        self.responses = list(responses)
        self.requests = []

    def generate(self, request):
        self.requests.append(request)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def dumps(data) -> str:
    return json.dumps(data)


@pytest.fixture
def spec_data():
    return copy.deepcopy(SPEC)


@pytest.fixture
def arch_data():
    return copy.deepcopy(ARCH)


@pytest.fixture
def preferences():
    return UserPreferences(
        genre=Genre.ARCADE,
        seed="abc123",
        quality=QualityLevel.SKETCH,
        platform=Platform.WEB,
        capabilities=CapabilityFlags(telemetry=True),
    )


@pytest.fixture
def blueprint():
    return Blueprint.model_validate({**SPEC, **ARCH})
