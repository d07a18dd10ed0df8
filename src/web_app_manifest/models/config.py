"""Модели для YAML batch-конфига.

Этот файл описывает структуру YAML-файла, который пользователь
передаёт через --config команды batch. Pydantic проверяет что
все обязательные поля на месте и типы правильные.
"""

from pathlib import Path

from pydantic import BaseModel, Field


class ManifestEntry(BaseModel):
    """Один манифест для обработки.

    Пример в YAML:
        manifests:
          - path: app/site.webmanifest
            documentUrl: https://example.com/index.html
            manifestUrl: https://example.com/site.webmanifest
            out: site.json

    path — относительно папки, где лежит сам конфиг
    out — имя выходного файла; по умолчанию <имя манифеста>.json
    """

    path: Path
    document_url: str = Field(alias="documentUrl")
    manifest_url: str = Field(alias="manifestUrl")
    out: str | None = None

    # populate_by_name=True — разрешает использовать и Python-имя (document_url),
    # и YAML-имя (documentUrl). Нужно для удобства в тестах.
    model_config = {"populate_by_name": True}


class BatchConfig(BaseModel):
    """Корневая модель batch-конфига."""

    manifests: list[ManifestEntry]
