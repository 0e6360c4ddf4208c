import json

import httpx
import pytest

from langchain_sse_replay import ReplayConfig, TranscriptHTTPError
from langchain_sse_replay._providers import Provider
from langchain_sse_replay.models import ParseError
from langchain_sse_replay.parser import parse_sse_response, parse_sse_stream


def _openai(text: str, **extra) -> str:
    return "data: " + json.dumps({"choices": [{"delta": {"content": text}}], **extra})


class TestScenarios:
    def test_openai_deltas(self) -> None:
        text = _openai("Hello") + "\n" + _openai(" world") + "\n"
        result = parse_sse_stream(text)

        assert result.content == "Hello world"
        assert result.metadata is not None
        assert result.metadata.provider is Provider.OPENAI
        assert result.metadata.chunk_count == 2
        assert result.errors is None

    def test_anthropic_delta(self) -> None:
        result = parse_sse_stream('data: {"type":"content_block_delta","delta":{"text":"Hi"}}\n')
        assert result.content == "Hi"
        assert result.metadata.provider == "anthropic"

    def test_done_only(self) -> None:
        result = parse_sse_stream("data: [DONE]\n")
        assert result.content == ""
        assert result.metadata is None
        assert result.errors == (ParseError(line=None, message="No valid SSE data found", raw=None),)

    def test_bad_json(self) -> None:
        result = parse_sse_stream("data: {bad json\n")
        assert result.content == ""
        assert result.metadata is None
        assert result.errors == (ParseError(line=1, message="Invalid JSON - {bad json", raw="{bad json"),)

    def test_empty_string(self) -> None:
        result = parse_sse_stream("")
        assert result.content == ""
        assert result.metadata is None
        assert result.errors == (ParseError(line=None, message="No input provided", raw=None),)

    def test_generic_fallback(self) -> None:
        result = parse_sse_stream('data: {"text":"plain"}\n')
        assert result.metadata.provider is Provider.UNKNOWN
        assert result.content == "plain"


@pytest.mark.parametrize("value", [None, 42, b"data: {}", ["data: {}"]])
def test_non_text_input(value) -> None:
    result = parse_sse_stream(value)
    assert result.errors[0].message == "No input provided"
    assert result.metadata is None


def test_whitespace_only_input_has_no_data() -> None:
    result = parse_sse_stream("  \n\t\n")
    assert result.errors == (ParseError(message="No valid SSE data found"),)


def test_chunk_count_matches_data_lines() -> None:
    lines = [_openai(str(i)) for i in range(7)]
    result = parse_sse_stream("\n\n".join(lines) + "\n\ndata: [DONE]\n")
    assert result.errors is None
    assert result.metadata.chunk_count == 7
    assert result.content == "0123456"


def test_reordering_chunks_reorders_content() -> None:
    a, b = _openai("first "), _openai("second")
    assert parse_sse_stream(f"{a}\n{b}").content == "first second"
    assert parse_sse_stream(f"{b}\n{a}").content == "secondfirst "


def test_provider_is_sticky() -> None:
    text = "\n".join(
        [
            'data: {"type":"content_block_delta","delta":{"text":"A"}}',
            'data: {"candidates":[{"content":{"parts":[{"text":"G"}]}}]}',
            _openai("O"),
        ]
    )
    result = parse_sse_stream(text)

    assert result.metadata.provider is Provider.ANTHROPIC
    # Google's parts are not a generic path; the OpenAI delta is.
    assert result.content == "AO"
    assert result.metadata.chunk_count == 3


def test_control_fields_and_done_are_silent() -> None:
    text = "\n".join(
        [
            "event: message",
            "id: 1",
            "retry: 3000",
            ": comment",
            "data: event: ping",
            "data: id: 7",
            "data: retry: 10",
            "data:",
            _openai("x"),
            "data: [DONE]",
        ]
    )
    result = parse_sse_stream(text)
    assert result.errors is None
    assert result.content == "x"
    assert result.metadata.chunk_count == 1


def test_non_brace_garbage_is_ignored() -> None:
    result = parse_sse_stream("data: hello there\n" + _openai("ok"))
    assert result.errors is None
    assert result.content == "ok"


def test_errors_keep_line_numbers_and_do_not_stop_parsing() -> None:
    text = "\n".join(
        [
            _openai("a"),
            "",
            "data: {broken",
            _openai("b"),
            "   ",
            'data: {"choices": [}',
            _openai("c"),
        ]
    )
    result = parse_sse_stream(text)

    assert result.content == "abc"
    assert result.metadata.chunk_count == 3
    assert [e.line for e in result.errors] == [3, 6]
    assert result.errors[0].raw == "{broken"


def test_error_message_is_truncated() -> None:
    payload = "{" + "x" * 60
    result = parse_sse_stream(f"data: {payload}")
    assert result.errors[0].message == f"Invalid JSON - {payload[:40]}..."
    assert result.errors[0].raw == payload


def test_error_preview_length_is_configurable() -> None:
    result = parse_sse_stream("data: {abcdefgh", ReplayConfig(error_preview_chars=3))
    assert result.errors[0].message == "Invalid JSON - {ab..."


def test_two_segments_on_one_line() -> None:
    text = _openai("one") + _openai("two") + "\n"
    result = parse_sse_stream(text)
    assert result.content == "onetwo"
    assert result.metadata.chunk_count == 2


def test_data_marker_inside_text_does_not_split() -> None:
    text = _openai("the data: field") + "\n"
    result = parse_sse_stream(text)
    assert result.errors is None
    assert result.content == "the data: field"


def test_bare_json_lines_without_prefix() -> None:
    text = '{"text":"one "}\n{"text":"two"}\n'
    result = parse_sse_stream(text)
    assert result.content == "one two"
    assert result.metadata.chunk_count == 2


def test_bare_broken_json_line_is_reported() -> None:
    result = parse_sse_stream('{"text": \n')
    assert result.errors == (ParseError(line=1, message='Invalid JSON - {"text":', raw='{"text":'),)


def test_windows_line_endings() -> None:
    text = _openai("a") + "\r\n" + _openai("b") + "\r\n"
    result = parse_sse_stream(text)
    assert result.content == "ab"
    assert result.errors is None


def test_scalar_chunks_count_but_add_nothing() -> None:
    result = parse_sse_stream("data: 1\ndata: [1,2]\n" + _openai("z"))
    assert result.metadata.provider is Provider.UNKNOWN
    assert result.metadata.chunk_count == 3
    # provider came from the scalar chunk; the OpenAI delta is still a generic path
    assert result.content == "z"


def test_partial_failure_keeps_metadata_and_errors() -> None:
    result = parse_sse_stream(_openai("a", model="gpt-4o", id="chatcmpl-1") + "\ndata: {oops")
    assert result.metadata.model == "gpt-4o"
    assert result.metadata.id == "chatcmpl-1"
    assert len(result.errors) == 1
    assert not result.ok


def test_idempotent() -> None:
    text = _openai("x") + "\ndata: {bad\n"
    assert parse_sse_stream(text) == parse_sse_stream(text)


def test_parse_sse_response() -> None:
    body = _openai("hi") + "\n\ndata: [DONE]\n\n"
    response = httpx.Response(200, text=body, headers={"content-type": "text/event-stream"})
    result = parse_sse_response(response)
    assert result.content == "hi"


def test_parse_sse_response_error_status() -> None:
    request = httpx.Request("GET", "https://example.com/t.txt")
    response = httpx.Response(404, text="missing", request=request)
    with pytest.raises(TranscriptHTTPError) as exc_info:
        parse_sse_response(response)
    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "missing"
    assert exc_info.value.url == "https://example.com/t.txt"


def test_leading_byte_order_mark_is_ignored() -> None:
    result = parse_sse_stream('\ufeff{"text":"hello"}\n')
    assert result.content == "hello"
    assert result.errors is None


def test_byte_order_mark_before_data_field() -> None:
    result = parse_sse_stream("\ufeff" + _openai("Hi") + "\n")
    assert result.content == "Hi"
    assert result.metadata.provider is Provider.OPENAI
