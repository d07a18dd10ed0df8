"""URL в манифесте: абсолютный, относительный или неизвестный.

Любое URL-поле манифеста после чтения JSON находится в одном из трёх
состояний:

    Absolute(url)        — строка успешно разобрана как абсолютный URL
    Relative(reference)  — строка не разобралась, это относительная ссылка
    Unknown()            — поле отсутствует или null

Относительные и неизвестные URL превращаются в Absolute только при
обработке манифеста (см. services/processor.py), потому что для этого
нужны URL документа и URL самого манифеста.

Примеры:
    Url.parse("https://example.com/app.html") → Absolute(...)
    Url.parse("/app.html")                     → Relative("/app.html")
"""

from dataclasses import dataclass
from functools import total_ordering
from typing import Any

import rfc3986
from pydantic import AnyUrl, GetCoreSchemaHandler, ValidationError
from pydantic_core import core_schema
from rfc3986 import URIReference, misc
from rfc3986.exceptions import RFC3986Exception

from web_app_manifest.errors import (
    NotAbsoluteError,
    NotStringifyableError,
    UrlParsingError,
)

# Схемы с кортежным origin (scheme, host, port); file: сюда не входит
SPECIAL_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp"})

_C0_CONTROL_OR_SPACE = "".join(chr(i) for i in range(0x21))
_TAB_OR_NEWLINE = str.maketrans("", "", "\t\n\r")


# ─── Абсолютные URL ───────────────────────────────────────

def parse_absolute(text: str) -> AnyUrl:
    """Разобрать строку как абсолютный URL.

    Бросает pydantic ValidationError, если строка не абсолютный URL.
    """
    return AnyUrl(text)


def _clean_reference(reference: str, base_scheme: str) -> str:
    """Подготовить ссылку так, как её читает браузер (WHATWG URL).

    Пробелы и управляющие символы по краям отбрасываются, табуляции и
    переводы строк внутри удаляются. Для специальных схем обратный слэш
    в пути означает "/".
    """
    reference = reference.strip(_C0_CONTROL_OR_SPACE)
    reference = reference.translate(_TAB_OR_NEWLINE)
    if base_scheme in SPECIAL_SCHEMES or base_scheme == "file":
        path_end = len(reference)
        for delimiter in "?#":
            index = reference.find(delimiter)
            if index != -1:
                path_end = min(path_end, index)
        reference = reference[:path_end].replace("\\", "/") + reference[path_end:]
    return reference


def join_url(base: AnyUrl, reference: str) -> AnyUrl:
    """Разрешить ссылку относительно базового URL (RFC 3986, раздел 5.2).

    join_url(AnyUrl("https://example.com/a/m.json"), "icon.png")
        → "https://example.com/a/icon.png"
    join_url(AnyUrl("https://example.com/index.html"), ".")
        → "https://example.com/"
    join_url(AnyUrl("https://example.com/m.json"), "open?u=%s")
        → "https://example.com/open?u=%s"
    """
    # Фрагмент базового URL в разрешении не участвует
    base_uri = rfc3986.uri_reference(str(base)).copy_with(fragment=None)

    # uri_reference() перекодирует "%" без двух hex-цифр в "%25" и ломает
    # плейсхолдер %s, поэтому ссылка собирается из групп регулярки как есть.
    # Кодирование потом делает разбор абсолютного URL.
    parts = misc.URI_MATCHER.match(_clean_reference(reference, base.scheme))
    target = URIReference(
        parts.group("scheme"),
        parts.group("authority"),
        parts.group("path") or None,
        parts.group("query"),
        parts.group("fragment"),
    )
    try:
        resolved = target.resolve_with(base_uri)
        return parse_absolute(resolved.unsplit())
    except RFC3986Exception as e:
        raise UrlParsingError(reference, str(e)) from e
    except ValidationError as e:
        raise UrlParsingError(reference, e.errors()[0]["msg"]) from e


def url_origin(url: AnyUrl) -> tuple[str, str, int | None] | None:
    """Origin URL: (scheme, host, port).

    None — opaque origin: схема не из SPECIAL_SCHEMES (mailto:, file:,
    web+app: ...) или URL без хоста.
    Opaque origin не равен никакому другому, даже самому себе.
    """
    if url.scheme not in SPECIAL_SCHEMES or url.host is None:
        return None
    return url.scheme, url.host, url.port


def same_origin(url1: AnyUrl, url2: AnyUrl) -> bool:
    origin = url_origin(url1)
    return origin is not None and origin == url_origin(url2)


def within_scope(url: AnyUrl, scope: AnyUrl) -> bool:
    """Проверить что URL внутри scope.

    Origin должен совпадать, а путь scope должен быть строковым
    префиксом пути URL. Границы сегментов не учитываются:
    scope "/sco" пропускает "/scope/x".
    """
    return same_origin(url, scope) and (url.path or "").startswith(scope.path or "")


# ─── Трёхсостоятельный URL ────────────────────────────────

@total_ordering
class Url:
    """URL-поле манифеста. Экземпляры — только Absolute, Relative или Unknown.

    Сравнение и сортировка структурные: сначала вариант
    (Absolute < Relative < Unknown), затем текст URL.
    """

    _rank = 0

    def __new__(cls, *args, **kwargs):
        if cls is Url:
            raise TypeError("Url cannot be created directly, use Absolute, Relative or Unknown")
        return super().__new__(cls)

    @classmethod
    def parse(cls, text: str) -> "Url":
        """Absolute если строка — абсолютный URL, иначе Relative. Не падает."""
        try:
            return Absolute(parse_absolute(text))
        except ValidationError:
            return Relative(text)

    def to_text(self) -> str:
        match self:
            case Absolute(url):
                return str(url)
            case Relative(reference):
                return reference
            case _:
                raise NotStringifyableError(self)

    def to_absolute(self) -> AnyUrl:
        match self:
            case Absolute(url):
                return url
            case _:
                raise NotAbsoluteError(self)

    def _sort_key(self) -> tuple[int, str]:
        return self._rank, ""

    def __lt__(self, other):
        if not isinstance(other, Url):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        # null/отсутствие → Unknown, строка → parse, обратно — строка или null
        return core_schema.no_info_plain_validator_function(
            _validate_url,
            serialization=core_schema.plain_serializer_function_ser_schema(_serialize_url),
        )


@dataclass(frozen=True)
class Absolute(Url):
    """Разобранный абсолютный URL."""

    url: AnyUrl

    _rank = 0

    def _sort_key(self) -> tuple[int, str]:
        return self._rank, str(self.url)


@dataclass(frozen=True)
class Relative(Url):
    """Относительная ссылка как есть, без нормализации."""

    reference: str

    _rank = 1

    def _sort_key(self) -> tuple[int, str]:
        return self._rank, self.reference


@dataclass(frozen=True)
class Unknown(Url):
    """URL не задан.

    Смысл зависит от поля: для start_url это URL документа,
    для scope — "." относительно start_url, в остальных полях — ошибка.
    """

    _rank = 2


def _validate_url(value: Any) -> Url:
    if value is None:
        return Unknown()
    if isinstance(value, Url):
        return value
    if isinstance(value, AnyUrl):
        return Absolute(parse_absolute(str(value)))
    if isinstance(value, str):
        return Url.parse(value)
    raise ValueError(f"URL must be a string, got {type(value).__name__}")


def _serialize_url(value: Url) -> str | None:
    if isinstance(value, Unknown):
        return None
    return value.to_text()
