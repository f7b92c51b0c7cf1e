import pytest

from conftest import ARCH, AUDIO, BUILD, HTML, SPEC, ScriptedProvider, dumps
from dreamforge.config import config
from dreamforge.frontend import app as app_module
from dreamforge.generation.core import ForgeGenerator


@pytest.fixture
def statuses(monkeypatch):
    messages = []
    monkeypatch.setattr(app_module, "stream_status", messages.append)
    monkeypatch.setattr(config, "SAVE_GENERATED_FILES", False)
    return messages


@pytest.fixture
def client(statuses):
    app_module.app.config["TESTING"] = True
    return app_module.app.test_client()


def use_provider(monkeypatch, responses):
    provider = ScriptedProvider(responses)
    monkeypatch.setattr(app_module, "_generator_for", lambda data: ForgeGenerator(provider))
    return provider


def test_list_providers(client):
    data = client.get("/providers").get_json()
    assert "google" in data["providers"]
    assert data["default"] == config.FORGE_PROVIDER


def test_generate_runs_full_pipeline(client, monkeypatch, statuses):
    use_provider(monkeypatch, [dumps(SPEC), dumps(ARCH), dumps(AUDIO), dumps(BUILD)])
    response = client.post("/generate", json={"preferences": {"seed": "abc123"}})

    assert response.status_code == 200
    game = response.get_json()["game"]
    assert game["html"] == HTML
    assert game["manifest"]["seed"] == "abc123"
    assert "Designing Soundscape..." in statuses


def test_phase_failure_returns_prefixed_message(client, monkeypatch):
    use_provider(monkeypatch, ["not json"])
    response = client.post("/blueprint", json={"preferences": {}})

    assert response.status_code == 500
    assert response.get_json()["message"].startswith("Failed to quantize requirements: ")


def test_prototype_with_supplied_audio_skips_soundscape(client, monkeypatch):
    provider = use_provider(monkeypatch, [dumps(BUILD)])
    response = client.post("/prototype", json={"blueprint": {**SPEC, **ARCH}, "audio": AUDIO})

    assert response.status_code == 200
    assert len(provider.requests) == 1
    assert response.get_json()["game"]["audio"]["soundEffects"][0]["name"] == "boost"


def test_refine_round_trip(client, monkeypatch):
    use_provider(monkeypatch, [dumps(BUILD)])
    game = client.post("/prototype", json={"blueprint": {**SPEC, **ARCH}, "withAudio": False}).get_json()["game"]

    plan = {"editMode": "patch", "edits": [{"search": "const speed = 5;", "replace": "const speed = 8;"}]}
    use_provider(monkeypatch, [dumps(plan)])
    response = client.post("/refine", json={"game": game, "instruction": "faster"})

    refined = response.get_json()["game"]
    assert "const speed = 8;" in refined["html"]
    assert refined["manifest"]["parentHash"] == game["manifest"]["buildHash"]


def test_refine_requires_instruction(client):
    response = client.post("/refine", json={"game": {}, "instruction": "  "})
    assert response.status_code == 400


@pytest.mark.parametrize("instruction", [42, None, ["faster"]])
def test_non_text_instruction_is_bad_request(client, instruction):
    game = {**SPEC, **ARCH, "html": HTML}
    response = client.post("/refine", json={"game": game, "instruction": instruction})

    assert response.status_code == 400
    assert response.get_json()["message"] == "An instruction is required."


def test_missing_blueprint_is_bad_request(client):
    response = client.post("/prototype", json={"preferences": {}})
    assert response.status_code == 400
    assert "blueprint" in response.get_json()["message"]


def test_unknown_provider_is_rejected():
    with pytest.raises(ValueError, match="Unknown provider"):
        app_module._generator_for({"provider": "skynet"})


def test_preview(client):
    game = {**SPEC, **ARCH, "html": HTML}
    assert client.post("/preview", json={"game": game}).get_json() == {"title": "Neon Drift", "html": HTML}
