"""JSON cleanup and normalization of LLM responses"""

import pytest

from music_video_agent.agents.base import as_record_list, clean_json_response, format_time, parse_json_response
from music_video_agent.core.errors import ContentGenerationError


def test_strips_markdown_fences():
    assert clean_json_response('```json\n[{"a": 1}]\n```') == '[{"a": 1}]'
    assert clean_json_response('```\n{"a": 1}\n```') == '{"a": 1}'


def test_drops_extra_trailing_closers():
    assert clean_json_response('{"a": {"b": 1}}}') == '{"a": {"b": 1}}'
    assert clean_json_response('[{"a": 1}]]') == '[{"a": 1}]'


def test_leaves_balanced_json_untouched():
    text = '[{"a": [1, 2]}, {"b": {}}]'
    assert clean_json_response(text) == text


def test_parse_json_response_raises_generation_error():
    assert parse_json_response('```json\n{"scenes": []}\n```') == {"scenes": []}
    with pytest.raises(ContentGenerationError):
        parse_json_response("Sorry, I cannot help with that.")


def test_as_record_list_unwraps_single_list_objects():
    assert as_record_list([{"a": 1}], "scenes") == [{"a": 1}]
    assert as_record_list({"scenes": [{"a": 1}], "note": "x"}, "scenes") == [{"a": 1}]


@pytest.mark.parametrize("result", ["text", {"a": [], "b": []}, {"a": 1}, None])
def test_as_record_list_rejects_other_shapes(result):
    with pytest.raises(ContentGenerationError):
        as_record_list(result, "scenes")


def test_format_time():
    assert format_time(4.3) == "4.3s"
    assert format_time(75) == "1m 15.0s"
