"""Корневая модель Web Application Manifest.

Пример JSON (сокращённо):
{
    "start_url": "/",
    "scope": "/",
    "name": "Example App",
    "short_name": "Example",
    "display": "standalone",
    "icons": [{"src": "icon.png", "sizes": "192x192"}]
}

После чтения URL-поля могут быть относительными. Чтобы получить
абсолютные URL и проверить origin/scope, вызовите process().
"""

from pydantic import AnyUrl, BaseModel, Field

from web_app_manifest.models.resources import (
    ExternalApplicationResource,
    IconResource,
    ProtocolHandlerResource,
    ScreenshotResource,
    ShareTargetResource,
    ShortcutResource,
)
from web_app_manifest.models.types import Direction, Display, Orientation
from web_app_manifest.models.url import Unknown, Url


class WebAppManifest(BaseModel):
    """Манифест веб-приложения.

    start_url — URL, открываемый при запуске (по умолчанию URL документа)
    scope — граница навигации (по умолчанию "." относительно start_url)
    lang — языковой тег, хранится строкой как есть
    background_color, theme_color — CSS-цвета, хранятся строкой как есть
    """

    start_url: Url = Field(default_factory=Unknown)
    scope: Url = Field(default_factory=Unknown)

    name: str | None = None
    short_name: str | None = None
    description: str | None = None
    categories: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)

    dir: Direction = Direction.AUTO
    lang: str | None = None
    display: Display = Display.BROWSER
    orientation: Orientation = Orientation.ANY

    background_color: str | None = None
    theme_color: str | None = None
    iarc_rating_id: str | None = None

    prefer_related_applications: bool = False
    related_applications: list[ExternalApplicationResource] = Field(default_factory=list)
    protocol_handlers: list[ProtocolHandlerResource] = Field(default_factory=list)
    shortcuts: list[ShortcutResource] = Field(default_factory=list)
    share_target: ShareTargetResource | None = None
    icons: list[IconResource] = Field(default_factory=list)
    screenshots: list[ScreenshotResource] = Field(default_factory=list)

    def process(
        self,
        document_url: AnyUrl | str,
        manifest_url: AnyUrl | str,
    ) -> "WebAppManifest":
        """Разрешить все URL манифеста и проверить origin и scope.

        Изменяет манифест на месте. При ошибке бросает ManifestError,
        и манифест после этого использовать нельзя.
        """
        from web_app_manifest.services.processor import process_manifest

        return process_manifest(self, document_url, manifest_url)
