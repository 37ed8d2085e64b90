"""Front-end output serializers."""

from __future__ import annotations

from pathlib import Path

from voxfront.models import FrontendResponse


def to_json(response: FrontendResponse) -> str:
    """Serialize a front-end response to formatted JSON."""
    return response.model_dump_json(indent=2)


def write_json(response: FrontendResponse, output_path: str | Path) -> None:
    """Write front-end response JSON to disk."""
    path = _prepare(output_path)
    path.write_text(to_json(response) + "\n", encoding="utf-8")


def read_json(input_path: str | Path) -> FrontendResponse:
    """Load a response previously written by :func:`write_json`."""
    return FrontendResponse.model_validate_json(Path(input_path).read_text(encoding="utf-8"))


def to_token_lines(response: FrontendResponse) -> list[str]:
    """One ``language|ids|normalized`` line per successful utterance.

    Failed utterances are skipped; their details stay in the JSON export.
    """
    lines = []
    for utterance in response.utterances:
        ids = " ".join(str(token_id) for token_id in utterance.token_ids)
        normalized = utterance.normalized.replace("\n", " ").replace("|", " ")
        lines.append(f"{utterance.language}|{ids}|{normalized}")
    return lines


def write_token_lines(response: FrontendResponse, output_path: str | Path) -> int:
    """Write the token manifest and return the number of lines written."""
    lines = to_token_lines(response)
    path = _prepare(output_path)
    path.write_text("".join(line + "\n" for line in lines), encoding="utf-8")
    return len(lines)


def _prepare(output_path: str | Path) -> Path:
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return path
