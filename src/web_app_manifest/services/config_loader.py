from pathlib import Path

import yaml

from web_app_manifest.models.config import BatchConfig


def load_batch_config(path: Path) -> BatchConfig:
    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f)  # YAML → Python dict
    config = BatchConfig.model_validate(raw)  # dict → Pydantic model

    # Пути манифестов считаются от папки конфига
    base_dir = Path(path).parent
    for entry in config.manifests:
        if not entry.path.is_absolute():
            entry.path = base_dir / entry.path
    return config
