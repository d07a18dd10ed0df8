"""Ошибки обработки манифеста.

Все ошибки наследуются от ManifestError, поэтому вызывающий код
может ловить одно исключение и считать манифест отклонённым.
"""


class ManifestError(Exception):
    """Базовая ошибка обработки манифеста."""


class UrlParsingError(ManifestError):
    """Ссылку не удалось разрешить в абсолютный URL."""

    def __init__(self, reference: str, reason: str):
        self.reference = reference
        self.reason = reason
        super().__init__(f"Error while parsing URL '{reference}' ({reason})")


class InvalidUnknownUrlError(ManifestError):
    """Unknown URL в поле, где он не имеет смысла (всё кроме start_url и scope)."""

    def __init__(self):
        super().__init__("Provided unknown URL in invalid context")


class NotSameOriginError(ManifestError):
    """Два URL из разных origin."""

    def __init__(self, url1, url2):
        self.url1 = url1
        self.url2 = url2
        super().__init__(f"Provided URLs ({url1}, {url2}) are not in the same origin")


class NotWithinScopeError(ManifestError):
    """URL вне scope приложения."""

    def __init__(self, url, scope):
        self.url = url
        self.scope = scope
        super().__init__(f"Provided URL ({url}) is not within scope ({scope})")


class NotAbsoluteError(ManifestError):
    """Из Url пытались достать абсолютный URL, но он Relative или Unknown."""

    def __init__(self, url):
        self.url = url
        super().__init__(f"Provided URL ({url!r}) is not absolute")


class NotStringifyableError(ManifestError):
    """Unknown URL нельзя превратить в строку."""

    def __init__(self, url):
        self.url = url
        super().__init__(f"Provided URL ({url!r}) cannot be converted to string")
