"""Чтение и запись манифеста.

Формат определяется по расширению файла:
  .json, .webmanifest — JSON
  .yaml, .yml         — YAML

При записи поля со значением по умолчанию опускаются:
Unknown URL, пустые списки, display "browser" и т.д.
"""

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from web_app_manifest.models.manifest import WebAppManifest

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = (".yaml", ".yml")


def parse_manifest(data: Any) -> WebAppManifest:
    """dict → WebAppManifest. Бросает ValueError или pydantic ValidationError."""
    if not isinstance(data, dict):
        raise ValueError(
            f"Manifest must be an object, got {type(data).__name__}"
        )
    return WebAppManifest.model_validate(data)


def load_manifest(path: Path) -> WebAppManifest:
    with open(path, encoding="utf-8") as f:
        if Path(path).suffix.lower() in _YAML_SUFFIXES:
            raw = yaml.safe_load(f)
        else:
            raw = json.load(f)
    logger.debug("Loaded manifest from %s", path)
    return parse_manifest(raw)


def dump_manifest(manifest: WebAppManifest) -> dict:
    """WebAppManifest → dict для JSON, без полей со значением по умолчанию."""
    return manifest.model_dump(mode="json", exclude_defaults=True)


def write_manifest(manifest: WebAppManifest, out_path: Path) -> None:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(dump_manifest(manifest), f, indent=2, ensure_ascii=False)
        f.write("\n")
