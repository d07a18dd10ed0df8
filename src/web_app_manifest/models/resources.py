"""Модели ресурсов манифеста: иконки, скриншоты, ярлыки и т.д.

Это простые контейнеры. Единственное, что с ними происходит при
обработке манифеста, — их URL-поля переписываются в Absolute.

Имена полей совпадают с ключами в JSON манифеста (snake_case),
поэтому alias нужны только там, где ключ неудобен в Python.
"""

from pydantic import BaseModel, Field

from web_app_manifest.models.types import (
    ImagePurpose,
    ImagePurposes,
    ImageSize,
    ImageSizes,
    ShareTargetEnctype,
    ShareTargetMethod,
)
from web_app_manifest.models.url import Unknown, Url


class ExternalApplicationFingerprint(BaseModel):
    """Отпечаток внешнего приложения. Пример: {"type": "sha256_cert", "value": "92:5A:..."}"""

    type: str = ""
    value: str = ""


class ExternalApplicationResource(BaseModel):
    """Нативное приложение-альтернатива (related_applications).

    Пример:
    {
        "platform": "play",
        "url": "https://play.google.com/store/apps/details?id=com.example.app1",
        "id": "com.example.app1",
        "min_version": "2"
    }

    Хотя бы одно из url или id должно быть задано, но здесь
    это не проверяется.
    """

    platform: str = ""
    min_version: str | None = None
    url: Url | None = None
    id: str | None = None
    fingerprints: list[ExternalApplicationFingerprint] = Field(default_factory=list)


class ProtocolHandlerResource(BaseModel):
    """Обработчик протокола.

    Пример: {"protocol": "web+music", "url": "/play?track=%s"}
    %s в url заменяется на URL, которым открыли приложение.
    """

    protocol: str = ""
    url: Url = Field(default_factory=Unknown)


class IconResource(BaseModel):
    """Иконка приложения или ярлыка.

    Пример:
    {
        "src": "icon/lowres.webp",
        "sizes": "48x48 72x72",
        "type": "image/webp",
        "purpose": "maskable monochrome"
    }
    """

    src: Url = Field(default_factory=Unknown)
    type: str | None = None
    sizes: ImageSizes = Field(default_factory=lambda: {ImageSize()})
    purpose: ImagePurposes = Field(default_factory=lambda: {ImagePurpose.ANY})
    label: str | None = None


class ScreenshotResource(BaseModel):
    """Скриншот для магазинов приложений.

    platform — для какой платформы скриншот (например "windows")
    label — доступное описание скриншота
    """

    src: Url = Field(default_factory=Unknown)
    type: str | None = None
    sizes: ImageSizes = Field(default_factory=lambda: {ImageSize()})
    platform: str | None = None
    label: str | None = None


class ShortcutResource(BaseModel):
    """Ярлык на ключевую страницу приложения (контекстное меню иконки)."""

    name: str = ""
    short_name: str | None = None
    description: str | None = None
    url: Url = Field(default_factory=Unknown)
    icons: list[IconResource] = Field(default_factory=list)


class ShareTargetParams(BaseModel):
    """Имена query-параметров, в которые попадают данные шаринга."""

    title: str | None = None
    text: str | None = None
    url: str | None = None


class ShareTargetResource(BaseModel):
    """Web share target.

    Пример:
    {
        "action": "/share",
        "method": "POST",
        "enctype": "multipart/form-data",
        "params": {"title": "name", "text": "description", "url": "link"}
    }
    """

    action: Url = Field(default_factory=Unknown)
    method: ShareTargetMethod = ShareTargetMethod.GET
    enctype: ShareTargetEnctype = ShareTargetEnctype.URL_ENCODED
    params: ShareTargetParams = Field(default_factory=ShareTargetParams)
