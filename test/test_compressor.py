import pytest

from dreamforge.generation.compressor import (
    BASE64_PLACEHOLDER,
    GEOMETRY_PLACEHOLDER,
    compress_code_for_context,
    contains_placeholder,
)

FIFTEEN = "[0.5, -1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14.25]"


def test_long_numeric_array_becomes_one_placeholder():
    before = "const a = 1;\nconst verts = "
    after = ";\nconst b = [1, 2];"
    result = compress_code_for_context(before + FIFTEEN + after)
    assert result == before + GEOMETRY_PLACEHOLDER + after
    assert result.count(GEOMETRY_PLACEHOLDER) == 1


def test_ten_numbers_are_kept_eleven_are_hidden():
    ten = "[" + ",".join(str(i) for i in range(10)) + "]"
    eleven = "[" + ",".join(str(i) for i in range(11)) + "]"
    assert compress_code_for_context(ten) == ten
    assert compress_code_for_context(eleven) == GEOMETRY_PLACEHOLDER


def test_data_uri_is_hidden():
    code = '<img src="data:image/png;base64,iVBORw0KGgoAAAANSUhEUg==">'
    assert compress_code_for_context(code) == f'<img src="{BASE64_PLACEHOLDER}">'


def test_compress_is_idempotent():
    code = (
        "const tex = 'data:audio/wav;base64,UklGRiQAAABXQVZF';\n"
        f"const mesh = {FIFTEEN};\n"
        "function loop() { requestAnimationFrame(loop); }"
    )
    once = compress_code_for_context(code)
    assert compress_code_for_context(once) == once
    assert contains_placeholder(once)


def test_empty_input():
    assert compress_code_for_context("") == ""
    assert compress_code_for_context(None) == ""


@pytest.mark.parametrize("uri", [
    "data:image/svg+xml;base64,PHN2ZyB4bWxucz0iaHR0cDovL3d3dy53My5vcmcvMjAwMC9zdmciLz4=",
    "data:font/woff2;base64,d09GMgABAAAAAAKsAA0AAAAABmQAAAJXAAEAAAAAAAAAAAAA",
    "data:audio/x-wav;base64,UklGRiQAAABXQVZFZm10IBAAAAABAAEA",
    "data:application/octet-stream;charset=binary;base64,AAECAwQFBgc=",
])
def test_non_trivial_mime_types_are_hidden(uri):
    code = f"const asset = '{uri}';"
    compressed = compress_code_for_context(code)
    assert compressed == f"const asset = '{BASE64_PLACEHOLDER}';"
    assert compress_code_for_context(compressed) == compressed
