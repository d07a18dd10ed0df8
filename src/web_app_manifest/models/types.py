"""Перечисления и простые типы манифеста.

Все перечисления — str + Enum, как MimeType в build-конфиге:
значение пишется в JSON как есть, а читается без учёта регистра
("Standalone", "PoSt" и "MultiPart/Form-Data" тоже подходят).
Неизвестное значение — ошибка валидации Pydantic.
"""

import re
from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from typing import Annotated, Any

from pydantic import BeforeValidator, GetCoreSchemaHandler, PlainSerializer
from pydantic_core import core_schema


class _TokenEnum(str, Enum):
    """Базовый класс: поиск значения без учёта регистра."""

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.lower():
                    return member
        return None


class Direction(_TokenEnum):
    """Базовое направление текста для name, short_name и description."""

    AUTO = "auto"
    LTR = "ltr"
    RTL = "rtl"


class Display(_TokenEnum):
    """Предпочитаемый режим отображения приложения.

    Цепочка fallback: fullscreen → standalone → minimal-ui → browser.
    """

    BROWSER = "browser"
    FULLSCREEN = "fullscreen"
    STANDALONE = "standalone"
    MINIMAL_UI = "minimal-ui"


class Orientation(_TokenEnum):
    """Ориентация экрана по умолчанию."""

    ANY = "any"
    NATURAL = "natural"
    LANDSCAPE = "landscape"
    PORTRAIT = "portrait"
    LANDSCAPE_PRIMARY = "landscape-primary"
    LANDSCAPE_SECONDARY = "landscape-secondary"
    PORTRAIT_PRIMARY = "portrait-primary"
    PORTRAIT_SECONDARY = "portrait-secondary"


class ShareTargetMethod(_TokenEnum):
    """HTTP-метод web share target."""

    GET = "GET"
    POST = "POST"


class ShareTargetEnctype(_TokenEnum):
    """Кодировка тела POST-запроса share target. Для GET игнорируется."""

    URL_ENCODED = "application/x-www-form-urlencoded"
    FORM_DATA = "multipart/form-data"


class ImagePurpose(_TokenEnum):
    """Назначение иконки.

    any — в любом контексте
    monochrome — используется только альфа-канал
    maskable — иконка рассчитана на маски и safe zone
    """

    ANY = "any"
    MONOCHROME = "monochrome"
    MASKABLE = "maskable"


# ─── Размер изображения ───────────────────────────────────

_FIXED_SIZE = re.compile(r"([0-9]+)[xX]([0-9]+)")


@total_ordering
@dataclass(frozen=True)
class ImageSize:
    """Размер изображения: "any" или фиксированный "WxH".

    ImageSize()          → any
    ImageSize(64, 128)   → 64x128

    Сортировка: сначала фиксированные по (ширина, высота), потом any.
    """

    width: int | None = None
    height: int | None = None

    @property
    def is_any(self) -> bool:
        return self.width is None or self.height is None

    @classmethod
    def parse(cls, text: str) -> "ImageSize":
        if text.lower() == "any":
            return cls()
        match = _FIXED_SIZE.fullmatch(text)
        if not match:
            raise ValueError(f"Invalid image size: '{text}'")
        return cls(int(match[1]), int(match[2]))

    def __str__(self) -> str:
        if self.is_any:
            return "any"
        return f"{self.width}x{self.height}"

    def __lt__(self, other):
        if not isinstance(other, ImageSize):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def _sort_key(self) -> tuple[int, int, int]:
        if self.is_any:
            return 1, 0, 0
        return 0, self.width, self.height

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            _validate_size,
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )


def _validate_size(value: Any) -> ImageSize:
    if isinstance(value, ImageSize):
        return value
    if isinstance(value, str):
        return ImageSize.parse(value)
    raise ValueError(f"Image size must be a string, got {type(value).__name__}")


# ─── Наборы токенов через пробел ──────────────────────────
#
# В JSON sizes и purpose — одна строка: "16x16 32x32", "maskable monochrome".
# В модели — set, при записи токены сортируются.

def _split_tokens(value: Any) -> Any:
    if isinstance(value, str):
        return value.split()
    return value


def _join_tokens(tokens: set) -> str:
    return " ".join(
        t.value if isinstance(t, Enum) else str(t) for t in sorted(tokens)
    )


ImageSizes = Annotated[
    set[ImageSize],
    BeforeValidator(_split_tokens),
    PlainSerializer(_join_tokens, return_type=str),
]

ImagePurposes = Annotated[
    set[ImagePurpose],
    BeforeValidator(_split_tokens),
    PlainSerializer(_join_tokens, return_type=str),
]
