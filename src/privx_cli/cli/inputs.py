"""JSON request-body files for create/update commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


class InputError(ValueError):
    """Raised when an input file is missing or does not hold a valid body."""


def load_json_body(path: str | Path, model: type[ModelT]) -> dict:
    input_path = Path(path)
    try:
        raw = input_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise InputError(f"cannot read input file: {input_path}") from exc

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise InputError(f"invalid JSON in {input_path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise InputError(f"{input_path} must contain a JSON object")

    try:
        model.model_validate(payload)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        raise InputError(f"invalid request body in {input_path}: {problems}") from exc
    return payload
