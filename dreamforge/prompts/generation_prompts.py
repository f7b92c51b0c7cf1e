QUANTIZE_SYSTEM_PROMPT = """
You are a Lead Game Designer.
Analyze the user's specifications and output a 'Quantized Spec Sheet' as pure JSON.
Be creative but concise.
"""

QUANTIZE_USER_TEMPLATE = """
Specs:
- Target Engine: {engine}
- Genre: {genre}
- Visual Style: {visual_style}
- Camera: {camera}
- Environment: {environment}
- Atmosphere: {atmosphere}
- Pacing: {pacing}
- Concept: {concept}
- Seed: {seed}

Task:
Extract Title, Summary, Mechanics (3-5) and Visual Requirements (3-5).

{format_instructions}
"""

ARCHITECT_SYSTEM_PROMPT = """
You are a Software Architect for single-file web games.
Design the system architecture for the given Quantized Spec Sheet.

STRICT RULES:
1. Output pure JSON only.
2. 'nodes' must describe the actual Core Loop components for this specific game.
3. Ensure descriptions are meaningful and distinct. Do NOT use placeholder text.
4. KEEP STRINGS CONCISE to avoid JSON errors.
"""

ARCHITECT_USER_TEMPLATE = """
Spec Sheet:
{spec_sheet}

Platform: {platform}
Engine: {engine}
Preferred Architecture Style: {architecture_style}
Target Capabilities: GPU: {gpu_tier}, Input: {input_mode}

Task:
Generate Architecture, Tech Stack, and Prerequisites.

{format_instructions}
"""

SOUNDSCAPE_SYSTEM_PROMPT = """
You are a Procedural Audio Engineer.
Create a soundscape using PURE Web Audio API JavaScript code (Oscillators, GainNodes, Filters).
NO external files (mp3/wav). All sound must be synthesized mathematically.
"""

SOUNDSCAPE_USER_TEMPLATE = """
Game Context:
- Title: {title}
- Atmosphere: {atmosphere}
- Genre: {genre}
- Mechanics: {mechanics}

Task:
1. Write a function 'playMusic(ctx)' that creates a background loop matching the mood.
2. Write functions for 3-5 distinct Sound Effects (SFX) needed for the mechanics.

{format_instructions}
"""

BUILD_SYSTEM_PROMPT = """
You are an Expert Creative Coder and Game Engine Specialist.
Build a single-file HTML/JS prototype that runs without a build step.

CRITICAL IMPLEMENTATION RULES:
1. SINGLE FILE: All HTML, CSS, and JS must be in one string.
2. MODULE BOUNDARIES: Organize code into commented sections (CORE, RENDERER, INPUT, LOGIC).
3. 'CLICK TO PLAY' OVERLAY (MANDATORY):
   - Include a <div id="overlay">...</div> covering the screen.
   - Add a click listener to the overlay that hides it, creates and resumes
     'window.audioCtx', and starts the game loop.
4. DETERMINISTIC SEED: implement a seeded PRNG and use it instead of Math.random()
   for ALL procedural generation.
"""

BUILD_USER_TEMPLATE = """
BLUEPRINT:
- Title: {title}
- Summary: {summary}
- Mechanics: {mechanics}
- Visuals: {visuals}

USER SETTINGS (Strict Enforcement):
- ENGINE: {engine}
- PLATFORM: {platform}
- INPUT MODE: {input_mode}
- Style: {visual_style}
- Camera: {camera}
- Env: {environment}
- Atmo: {atmosphere}
- PROTOTYPE QUALITY: {quality}
- GPU TIER: {gpu_tier}

{gpu_rules}

ENGINE SPECIFIC INSTRUCTIONS:
{engine_spec}

DETERMINISTIC SEED: "{seed}"
{seeded_random}

AUDIO SYSTEM:
{audio_context}

TELEMETRY:
{telemetry}

{format_instructions}
"""

GPU_RULES = {
    "low": "STRICT CONSTRAINTS: LOW POLY ONLY. MAX 100 INSTANCES. NO DYNAMIC SHADOWS. "
           "USE BAKED LIGHTING OR VERTEX COLORS. MOBILE OPTIMIZED SHADERS.",
    "mid": "CONSTRAINTS: MEDIUM POLY. LIMITED DYNAMIC SHADOWS (Max 1 Directional Light). "
           "STANDARD WEBGL SHADERS. TARGET 60FPS ON LAPTOP.",
    "high": "CONSTRAINTS: HIGH POLY ALLOWED. DYNAMIC LIGHTING ENABLED. "
            "POST-PROCESSING (BLOOM/AO) ALLOWED. TARGET 60FPS DESKTOP.",
}
DEFAULT_GPU_RULES = "CONSTRAINTS: OPTIMIZE FOR WEB."

SEEDED_RANDOM_SNIPPET = """Include this class and use 'rng.next()' instead of 'Math.random()':
class SeededRandom {{
   constructor(seed) {{ this.seed = this.hash(seed); }}
   hash(str) {{ let h = 0xdeadbeef; for (let i = 0; i < str.length; i++) h = Math.imul(h ^ str.charCodeAt(i), 2654435761); return (h ^ h >>> 16) >>> 0; }}
   next() {{ this.seed = (this.seed * 1664525 + 1013904223) % 4294967296; return this.seed / 4294967296; }}
}}
const rng = new SeededRandom("{seed}");"""

NO_AUDIO_CONTEXT = "NO CUSTOM AUDIO."

AUDIO_CONTEXT_TEMPLATE = """PROCEDURAL AUDIO ASSETS (You MUST integrate these):

// BACKGROUND MUSIC CODE
{background_music}

// SOUND EFFECT FUNCTIONS
{sound_effects}

INTEGRATION INSTRUCTIONS:
1. Embed these functions in the script.
2. Call 'playMusic(window.audioCtx)' inside the 'Click to Start' handler (after audioCtx.resume()).
3. Call the specific SFX functions (e.g., 'playJump(window.audioCtx)') inside the game logic when the event occurs."""

SOUND_EFFECT_TEMPLATE = """// Trigger: {trigger}
{code}"""

TELEMETRY_RULE = """Inject this at the end of the requestAnimationFrame loop:
// --- TELEMETRY INJECTION ---
if (window.parent) {{
    const now = performance.now();
    if (!window.lastTelUpdate || now - window.lastTelUpdate > 500) {{
        window.lastTelUpdate = now;
        const fps = Math.round(1000 / (now - (window.lastFrameTime || now)));
        window.lastFrameTime = now;
        const entities = scene ? scene.children.length : 0;
        window.parent.postMessage({{ type: '{message_type}', fps: fps, entities: entities }}, '*');
    }}
}}"""

NO_TELEMETRY = "Telemetry disabled. Do NOT post messages to window.parent."
