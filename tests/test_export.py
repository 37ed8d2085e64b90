import json
import threading
from pathlib import Path

from voxfront.core import build_response
from voxfront.io import read_json, to_json, to_token_lines, write_json, write_token_lines


def test_to_json_and_write_json(pipeline, tmp_path: Path) -> None:
    response = build_response(
        [pipeline.run("hello world"), pipeline.run_safe("hello", cancel=_cancelled())],
        pipeline.resources,
    )

    payload = json.loads(to_json(response))
    assert payload["metadata"]["utterance_count"] == 2
    assert payload["utterances"][0]["normalized"] == "hello world"
    assert payload["errors"][0]["kind"] == "UtteranceCancelled"

    output_path = tmp_path / "out" / "frontend.json"
    write_json(response, output_path)
    written = json.loads(output_path.read_text(encoding="utf-8"))
    assert written["utterances"][0]["token_ids"] == payload["utterances"][0]["token_ids"]


def _cancelled() -> threading.Event:
    event = threading.Event()
    event.set()
    return event


def test_read_json_restores_response(pipeline, tmp_path: Path) -> None:
    response = build_response([pipeline.run("hello world")], pipeline.resources)
    output_path = tmp_path / "frontend.json"
    write_json(response, output_path)

    assert read_json(output_path) == response


def test_token_lines_skip_failures(pipeline, tmp_path: Path) -> None:
    response = build_response(
        [pipeline.run("hello world"), pipeline.run_safe("hello", cancel=_cancelled())],
        pipeline.resources,
    )

    lines = to_token_lines(response)
    assert len(lines) == 1
    language, ids, normalized = lines[0].split("|")
    assert language == "en"
    assert [int(token_id) for token_id in ids.split()] == response.utterances[0].token_ids
    assert normalized == "hello world"

    output_path = tmp_path / "lists" / "tokens.txt"
    assert write_token_lines(response, output_path) == 1
    assert output_path.read_text(encoding="utf-8") == lines[0] + "\n"
