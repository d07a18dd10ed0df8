"""Обработка манифеста: разрешение URL и проверка origin/scope.

Берёт:
  - WebAppManifest (только что прочитанный, URL могут быть относительными)
  - document_url — URL страницы, которая сослалась на манифест
  - manifest_url — URL самого манифеста

И переписывает все URL-поля в Absolute.

Логика обработки:
  1. start_url: Relative → относительно manifest_url, Unknown → document_url
  2. scope: Relative → относительно manifest_url, Unknown → "." относительно start_url
  3. Остальные URL (related_applications, protocol_handlers, shortcuts и их
     иконки, share_target, icons, screenshots): Relative → относительно
     manifest_url, Unknown → ошибка
  4. start_url должен быть в том же origin, что и document_url
  5. start_url должен быть внутри scope
  6. protocol_handlers, shortcuts и share_target должны быть внутри scope
     (иконки и скриншоты не проверяются)

Порядок шагов важен только для того, какая ошибка всплывёт первой.
Absolute URL не меняются, поэтому повторная обработка ничего не делает.
"""

import logging
from collections.abc import Callable

from pydantic import AnyUrl, ValidationError

from web_app_manifest.errors import (
    InvalidUnknownUrlError,
    NotSameOriginError,
    NotWithinScopeError,
    UrlParsingError,
)
from web_app_manifest.models.manifest import WebAppManifest
from web_app_manifest.models.url import (
    Absolute,
    Relative,
    Unknown,
    Url,
    join_url,
    parse_absolute,
    same_origin,
    within_scope,
)

logger = logging.getLogger(__name__)


def process_manifest(
    manifest: WebAppManifest,
    document_url: AnyUrl | str,
    manifest_url: AnyUrl | str,
) -> WebAppManifest:
    """Обработать манифест на месте и вернуть его же.

    Бросает:
        UrlParsingError — ссылку не удалось разрешить
        InvalidUnknownUrlError — Unknown URL вне start_url/scope
        NotSameOriginError — start_url не в origin документа
        NotWithinScopeError — start_url или ресурс вне scope
    """
    document_url = _as_absolute(document_url)
    manifest_url = _as_absolute(manifest_url)

    # --- 1. start_url ---
    manifest.start_url = _resolve(
        manifest.start_url, manifest_url, default=lambda: document_url,
    )
    start_url = manifest.start_url.to_absolute()

    # --- 2. scope ---
    manifest.scope = _resolve(
        manifest.scope, manifest_url, default=lambda: join_url(start_url, "."),
    )
    scope = manifest.scope.to_absolute()

    # --- 3. Остальные URL, всегда относительно manifest_url ---
    for application in manifest.related_applications:
        if application.url is not None:
            application.url = _resolve(application.url, manifest_url)

    for handler in manifest.protocol_handlers:
        handler.url = _resolve(handler.url, manifest_url)

    for shortcut in manifest.shortcuts:
        shortcut.url = _resolve(shortcut.url, manifest_url)
        for icon in shortcut.icons:
            icon.src = _resolve(icon.src, manifest_url)

    if manifest.share_target is not None:
        manifest.share_target.action = _resolve(manifest.share_target.action, manifest_url)

    for icon in manifest.icons:
        icon.src = _resolve(icon.src, manifest_url)

    for screenshot in manifest.screenshots:
        screenshot.src = _resolve(screenshot.src, manifest_url)

    # --- 4. Origin start_url ---
    if not same_origin(start_url, document_url):
        raise NotSameOriginError(url1=start_url, url2=document_url)

    # --- 5. start_url внутри scope ---
    _check_scope(start_url, scope)

    # --- 6. Ресурсы внутри scope ---
    for handler in manifest.protocol_handlers:
        _check_scope(handler.url.to_absolute(), scope)

    for shortcut in manifest.shortcuts:
        _check_scope(shortcut.url.to_absolute(), scope)

    if manifest.share_target is not None:
        _check_scope(manifest.share_target.action.to_absolute(), scope)

    logger.debug("Manifest processed: start_url=%s, scope=%s", start_url, scope)
    return manifest


def _resolve(
    url: Url,
    base: AnyUrl,
    default: Callable[[], AnyUrl] | None = None,
) -> Absolute:
    """Превратить Url в Absolute.

    Relative разрешается относительно base. Unknown заменяется на
    default(), а если default не задан — это ошибка.
    """
    match url:
        case Absolute():
            return url
        case Relative(reference):
            resolved = join_url(base, reference)
            logger.debug("Resolved '%s' against %s: %s", reference, base, resolved)
            return Absolute(resolved)
        case Unknown():
            if default is None:
                raise InvalidUnknownUrlError()
            return Absolute(default())
    raise TypeError(f"Unexpected URL value: {url!r}")


def _check_scope(url: AnyUrl, scope: AnyUrl) -> None:
    if not within_scope(url, scope):
        raise NotWithinScopeError(url=url, scope=scope)


def _as_absolute(url: AnyUrl | str) -> AnyUrl:
    """URL контекста (документа или манифеста) → AnyUrl."""
    try:
        return parse_absolute(str(url))
    except ValidationError as e:
        raise UrlParsingError(str(url), e.errors()[0]["msg"]) from e
