import logging

import pydantic
from flask import Flask, request, jsonify
from flask_socketio import SocketIO

from dreamforge.config import config
from dreamforge.generation.core import ForgeGenerator
from dreamforge.generation.errors import ForgeError
from dreamforge.generation.models import (
    AudioBundle,
    Blueprint,
    GeneratedGame,
    RefinementSettings,
    UserPreferences,
)
from dreamforge.generation.provider import LangChainProvider
from dreamforge.utils import preview_payload, save_generated_files

logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s | %(levelname)s | %(name)s | %(message)s")
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config['SECRET_KEY'] = config.SECRET_KEY

# Use 'threading' async_mode to ensure compatibility with standard Flask execution
socketio = SocketIO(app, cors_allowed_origins="*", async_mode='threading')
providers = ["google", "openai", "ollama", "groq", "mistral", "deepseek"]


def stream_status(message):
    """Push phase status lines to the frontend via SocketIO."""
    logger.info(message)
    socketio.emit('forge_status', {'data': message})


def _generator_for(data: dict) -> ForgeGenerator:
    provider_name = data.get('provider', config.FORGE_PROVIDER)
    if provider_name not in providers:
        raise ValueError(f"Unknown provider '{provider_name}'. Choose one of: {', '.join(providers)}")
    return ForgeGenerator(LangChainProvider(provider_name))


def _dump(model: pydantic.BaseModel) -> dict:
    return model.model_dump(mode="json", by_alias=True)


@app.errorhandler(pydantic.ValidationError)
@app.errorhandler(ValueError)
@app.errorhandler(KeyError)
def bad_request(e):
    message = f"Missing field: {e}" if isinstance(e, KeyError) else str(e)
    return jsonify({"status": "error", "message": message}), 400


@app.errorhandler(ForgeError)
def forge_failure(e):
    # Surfaced verbatim so the user can retry the same phase
    stream_status(f"Error: {e}")
    return jsonify({"status": "error", "message": str(e)}), 500


@app.route('/providers')
def list_providers():
    return jsonify({"providers": providers, "default": config.FORGE_PROVIDER})


@app.route('/blueprint', methods=['POST'])
def blueprint():
    data = request.json or {}
    prefs = UserPreferences.model_validate(data.get('preferences', {}))
    generator = _generator_for(data)
    result = generator.generate_blueprint(prefs, on_status=stream_status)
    return jsonify({"status": "success", "blueprint": _dump(result)})


@app.route('/prototype', methods=['POST'])
def prototype():
    """Builds from an already approved blueprint, optionally with a soundscape."""
    data = request.json or {}
    prefs = UserPreferences.model_validate(data.get('preferences', {}))
    bp = Blueprint.model_validate(data['blueprint'])
    generator = _generator_for(data)

    audio = data.get('audio')
    if audio is not None:
        audio = AudioBundle.model_validate(audio)
    elif data.get('withAudio', True):
        audio = generator.generate_soundscape(bp, prefs, on_status=stream_status)

    game = generator.generate_prototype(bp, prefs, audio, on_status=stream_status)
    return jsonify(_finish(game))


@app.route('/generate', methods=['POST'])
def generate_game():
    """Runs the whole pipeline: Quantize -> Architect -> Soundscape -> Build."""
    data = request.json or {}
    prefs = UserPreferences.model_validate(data.get('preferences', {}))
    generator = _generator_for(data)

    stream_status(f"Starting forge using [{generator.chains.provider.provider_name.upper()}]")
    game = generator.run_full_pipeline(prefs, on_status=stream_status)
    return jsonify(_finish(game))


@app.route('/refine', methods=['POST'])
def refine():
    data = request.json or {}
    game = GeneratedGame.model_validate(data['game'])
    instruction = data.get('instruction', '')
    if not isinstance(instruction, str) or not instruction.strip():
        raise ValueError("An instruction is required.")
    instruction = instruction.strip()
    settings = RefinementSettings.model_validate(data['settings']) if data.get('settings') else None

    stream_status(f"Refining '{game.title}': {instruction}")
    new_game = _generator_for(data).refine_game(game, instruction, settings)
    return jsonify(_finish(new_game))


@app.route('/preview', methods=['POST'])
def preview():
    """Hands title + html to the external preview host."""
    game = GeneratedGame.model_validate((request.json or {})['game'])
    return jsonify(preview_payload(game))


def _finish(game: GeneratedGame) -> dict:
    response = {"status": "success", "game": _dump(game)}
    if config.SAVE_GENERATED_FILES:
        saved_path = save_generated_files(game, config.OUTPUT_DIR)
        stream_status(f"Done! Game saved at: {saved_path}")
        response["path"] = saved_path
    return response


if __name__ == '__main__':
    # Use allow_unsafe_werkzeug=True to run with the Flask development server
    socketio.run(app, debug=False, port=config.PORT, allow_unsafe_werkzeug=True)
