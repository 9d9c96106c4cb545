from __future__ import annotations

import json
from pathlib import Path

from apicompat.model.description import Description, parse_description
from apicompat.model.errors import DescriptionErrorCode, build_description_error


def load_description_file(path: str | Path) -> Description:
    target = Path(path)
    try:
        raw_text = target.read_text(encoding="utf-8")
    except OSError as exc:
        raise build_description_error(
            DescriptionErrorCode.E_DESC_READ_FAILED,
            f"unable to read description '{target}': {exc}",
            witness=(str(target),),
        ) from exc
    try:
        payload = json.loads(raw_text)
    except json.JSONDecodeError as exc:
        raise build_description_error(
            DescriptionErrorCode.E_DESC_JSON_INVALID,
            f"invalid json in '{target}': {exc}",
            witness=(str(target),),
        ) from exc
    return parse_description(payload)
