import json
import os

import pytest

from conftest import BUILD, HTML, ScriptedProvider, dumps
from dreamforge.generation.core import ForgeGenerator
from dreamforge.generation.models import GeneratedGame
from dreamforge.utils import clean_code_content, preview_payload, save_generated_files


class TestCleanCodeContent:
    def test_strips_wrapping_fence(self):
        assert clean_code_content("```html\n<html></html>\n```") == "<html></html>"

    def test_strips_bare_fence(self):
        assert clean_code_content("```\nlet a = 1;\n```") == "let a = 1;"

    def test_leaves_inner_fences_alone(self):
        code = "<pre>\n```js\nlet a;\n```\n</pre>"
        assert clean_code_content(code) == code

    def test_plain_code_is_unchanged(self):
        assert clean_code_content(HTML) == HTML

    def test_empty(self):
        assert clean_code_content("") == ""
        assert clean_code_content(None) == ""


@pytest.fixture
def built_game(blueprint, preferences):
    return ForgeGenerator(ScriptedProvider([dumps(BUILD)])).generate_prototype(blueprint, preferences)


def test_preview_payload(built_game):
    assert preview_payload(built_game) == {"title": "Neon Drift", "html": HTML}


def test_save_generated_files(tmp_path, built_game):
    build_dir = save_generated_files(built_game, str(tmp_path))

    assert os.path.basename(build_dir) == built_game.manifest.build_hash
    with open(os.path.join(build_dir, "index.html"), encoding="utf-8") as f:
        assert f.read() == HTML
    with open(os.path.join(build_dir, "manifest.json"), encoding="utf-8") as f:
        assert json.load(f)["buildHash"] == built_game.manifest.build_hash
    with open(os.path.join(build_dir, "blueprint.json"), encoding="utf-8") as f:
        blueprint = json.load(f)
    assert blueprint["title"] == "Neon Drift"
    assert "html" not in blueprint


def test_unbuilt_game_cannot_be_saved(tmp_path, blueprint):
    game = GeneratedGame.model_validate(blueprint.model_dump())
    with pytest.raises(ValueError):
        save_generated_files(game, str(tmp_path))
