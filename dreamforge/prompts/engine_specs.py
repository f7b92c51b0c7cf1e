import logging
from dataclasses import dataclass
from typing import Dict

from dreamforge.generation.models import GameEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineSpec:
    framework: str
    imports: str
    boilerplate: str
    injection: str = ""
    notes: str = ""

    def render(self) -> str:
        lines = [f"FRAMEWORK: {self.framework}", f"IMPORTS:\n{self.imports}"]
        if self.injection:
            lines.append(f"INJECTION: {self.injection}")
        lines.append(f"BOILERPLATE:\n{self.boilerplate}")
        if self.notes:
            lines.append(f"NOTE: {self.notes}")
        return "\n".join(lines)


ENGINE_SPECS: Dict[GameEngine, EngineSpec] = {
    GameEngine.THREEJS: EngineSpec(
        framework="Three.js (Standard WebGL)",
        imports=(
            "  import * as THREE from 'https://unpkg.com/three@0.160.0/build/three.module.js';\n"
            "  import { PointerLockControls } from 'https://unpkg.com/three@0.160.0/examples/jsm/controls/PointerLockControls.js';\n"
            "  import { OrbitControls } from 'https://unpkg.com/three@0.160.0/examples/jsm/controls/OrbitControls.js';"
        ),
        boilerplate="  Standard Scene, Camera, WebGLRenderer.",
        notes="Ensure the canvas is attached to body.",
    ),
    GameEngine.THREEJS_WEBGPU: EngineSpec(
        framework="Three.js (WebGPU - Experimental)",
        imports=(
            "  import * as THREE from 'https://unpkg.com/three@0.167.0/build/three.module.js';\n"
            "  import WebGPURenderer from 'https://unpkg.com/three@0.167.0/examples/jsm/renderers/webgpu/WebGPURenderer.js';\n"
            "  import { PointerLockControls } from 'https://unpkg.com/three@0.167.0/examples/jsm/controls/PointerLockControls.js';"
        ),
        boilerplate=(
            "  const renderer = new WebGPURenderer({ antialias: true });\n"
            "  await renderer.init();"
        ),
        notes="Do NOT use legacy materials if possible. Use materials compatible with WebGPU.",
    ),
    GameEngine.P5JS: EngineSpec(
        framework="p5.js (Creative Coding)",
        imports="  None (Global Mode via CDN)",
        injection='<script src="https://cdnjs.cloudflare.com/ajax/libs/p5.js/1.9.0/p5.js"></script> in the HTML head.',
        boilerplate=(
            "  function setup() { createCanvas(windowWidth, windowHeight, WEBGL); ... }\n"
            "  function draw() { ... }\n"
            "  function windowResized() { resizeCanvas(windowWidth, windowHeight); }"
        ),
        notes="Use 'WEBGL' mode in createCanvas for 3D requirements.",
    ),
    GameEngine.BABYLONJS: EngineSpec(
        framework="Babylon.js",
        imports="  None (Global via CDN)",
        injection=(
            '<script src="https://cdn.babylonjs.com/babylon.js"></script>'
            '<script src="https://cdn.babylonjs.com/loaders/babylonjs.loaders.min.js"></script>'
        ),
        boilerplate=(
            '  const canvas = document.getElementById("renderCanvas");\n'
            "  const engine = new BABYLON.Engine(canvas, true);\n"
            "  const createScene = function() { ... return scene; };\n"
            "  const scene = createScene();\n"
            "  engine.runRenderLoop(function () { scene.render(); });"
        ),
    ),
    GameEngine.KABOOMJS: EngineSpec(
        framework="Kaboom.js",
        imports='  import kaboom from "https://unpkg.com/kaboom@3000.0.1/dist/kaboom.mjs";',
        boilerplate=(
            "  kaboom({ background: [0,0,0] });\n"
            "  // Define scenes and go('main');"
        ),
        notes="This is a 2D engine. If the user asked for 3D, create a 2.5D pseudo-3D style.",
    ),
    GameEngine.RAW_WEBGL: EngineSpec(
        framework="Raw WebGL API (No Engine)",
        imports="  None.",
        boilerplate=(
            '  const gl = canvas.getContext("webgl");\n'
            "  // Write the vertex and fragment shaders as string variables.\n"
            "  // Handle buffer creation, linking, and the draw loop manually."
        ),
        notes="Keep it simple. A colored cube or basic terrain is sufficient.",
    ),
}

DEFAULT_ENGINE = GameEngine.THREEJS


def get_engine_spec(engine) -> EngineSpec:
    """Unrecognised engines get the Three.js baseline rather than an error."""
    try:
        return ENGINE_SPECS[GameEngine(engine)]
    except (KeyError, ValueError):
        logger.debug(f"[Registry] Unknown engine '{engine}', using {DEFAULT_ENGINE.value} instructions.")
        return ENGINE_SPECS[DEFAULT_ENGINE]
