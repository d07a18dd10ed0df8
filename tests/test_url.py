"""Тесты для трёхсостоятельного Url и функций работы с абсолютными URL."""

import pytest
from pydantic import AnyUrl, BaseModel, Field, ValidationError

from web_app_manifest.errors import NotAbsoluteError, NotStringifyableError, UrlParsingError
from web_app_manifest.models.url import (
    Absolute,
    Relative,
    Unknown,
    Url,
    join_url,
    parse_absolute,
    same_origin,
    url_origin,
    within_scope,
)


class TestParse:
    """Тесты для Url.parse."""

    def test_absolute_url(self):
        url = "https://example.com/index.html"
        assert Url.parse(url) == Absolute(AnyUrl(url))

    def test_relative_url(self):
        assert Url.parse("/index.html") == Relative("/index.html")

    def test_relative_url_kept_as_is(self):
        """Относительная ссылка не нормализуется."""
        assert Url.parse("../a/./b.html") == Relative("../a/./b.html")

    def test_empty_string_is_relative(self):
        assert Url.parse("") == Relative("")

    def test_default_is_unknown(self):
        class Holder(BaseModel):
            url: Url = Field(default_factory=Unknown)

        assert Holder().url == Unknown()


class TestConversions:
    """Тесты для to_text и to_absolute."""

    def test_absolute_to_text(self):
        url = "https://example.com/handler/?protocol=%s"
        assert Url.parse(url).to_text() == url

    def test_relative_to_text(self):
        url = "/handler/?protocol=%s"
        assert Url.parse(url).to_text() == url

    def test_unknown_to_text_fails(self):
        with pytest.raises(NotStringifyableError) as exc_info:
            Unknown().to_text()
        assert exc_info.value.url == Unknown()

    def test_absolute_to_absolute(self):
        url = AnyUrl("https://example.com")
        assert Absolute(url).to_absolute() == url

    def test_relative_to_absolute_fails(self):
        with pytest.raises(NotAbsoluteError) as exc_info:
            Relative("/index.html").to_absolute()
        assert exc_info.value.url == Relative("/index.html")

    def test_unknown_to_absolute_fails(self):
        with pytest.raises(NotAbsoluteError):
            Unknown().to_absolute()


class TestEqualityAndOrdering:
    """Сравнение, хеширование и сортировка структурные."""

    def test_equal_by_payload(self):
        assert Relative("a") == Relative("a")
        assert Relative("a") != Relative("b")
        assert Unknown() == Unknown()

    def test_different_variants_not_equal(self):
        assert Relative("https://example.com/") != Url.parse("https://example.com/")
        assert Relative("") != Unknown()

    def test_hashable(self):
        urls = {Relative("a"), Relative("a"), Unknown(), Unknown(), Url.parse("https://example.com")}
        assert len(urls) == 3

    def test_ordering(self):
        absolute = Url.parse("https://example.com")
        urls = [Unknown(), Relative("b"), absolute, Relative("a")]
        assert sorted(urls) == [absolute, Relative("a"), Relative("b"), Unknown()]

    def test_ordering_operators(self):
        assert Relative("a") < Relative("b")
        assert Relative("b") <= Unknown()
        assert Unknown() > Url.parse("https://example.com")

    def test_base_class_not_constructible(self):
        with pytest.raises(TypeError):
            Url()


class TestPydanticIntegration:
    """Url как поле Pydantic-модели."""

    class _Model(BaseModel):
        url: Url = Field(default_factory=Unknown)

    def test_null_is_unknown(self):
        assert self._Model.model_validate({"url": None}).url == Unknown()

    def test_string_is_parsed(self):
        assert self._Model.model_validate({"url": "icon.png"}).url == Relative("icon.png")

    def test_non_string_rejected(self):
        with pytest.raises(ValidationError):
            self._Model.model_validate({"url": 42})

    def test_serialization(self):
        assert self._Model(url="icon.png").model_dump() == {"url": "icon.png"}
        assert self._Model().model_dump() == {"url": None}
        assert self._Model(url="https://example.com/a").model_dump(mode="json") == {
            "url": "https://example.com/a"
        }


class TestJoinUrl:
    """Тесты для join_url."""

    def test_sibling(self):
        base = AnyUrl("https://example.com/resources/manifest.webmanifest")
        assert str(join_url(base, "icon.png")) == "https://example.com/resources/icon.png"

    def test_parent(self):
        base = AnyUrl("https://example.com/resources/manifest.webmanifest")
        assert str(join_url(base, "..")) == "https://example.com/"

    def test_dot_is_directory(self):
        base = AnyUrl("https://example.com/app/index.html")
        assert str(join_url(base, ".")) == "https://example.com/app/"

    def test_absolute_path(self):
        base = AnyUrl("https://example.com/resources/manifest.webmanifest")
        assert str(join_url(base, "/hello.html")) == "https://example.com/hello.html"

    def test_query_placeholder_kept(self):
        base = AnyUrl("https://example.com/manifest.webmanifest")
        assert str(join_url(base, "handler?uri=%s")) == "https://example.com/handler?uri=%s"

    def test_placeholder_in_absolute_path(self):
        base = AnyUrl("https://example.com/site.webmanifest")
        assert str(join_url(base, "/open?u=%s")) == "https://example.com/open?u=%s"

    def test_backslash_is_slash(self):
        base = AnyUrl("https://example.com/res/manifest.webmanifest")
        assert str(join_url(base, "\\icon.png")) == "https://example.com/icon.png"

    def test_backslash_in_query_kept(self):
        base = AnyUrl("https://example.com/res/manifest.webmanifest")
        joined = join_url(base, "icon.png?p=a\\b")
        assert joined.path == "/res/icon.png"
        assert "\\" in joined.query or "%5C" in joined.query

    def test_surrounding_whitespace_stripped(self):
        base = AnyUrl("https://example.com/res/manifest.webmanifest")
        assert str(join_url(base, "  /icon.png ")) == "https://example.com/icon.png"

    def test_tab_and_newline_removed(self):
        base = AnyUrl("https://example.com/res/manifest.webmanifest")
        assert str(join_url(base, "ic\ton\n.png")) == "https://example.com/res/icon.png"

    def test_query_only_keeps_base_path(self):
        base = AnyUrl("https://example.com/app/index.html?a=1")
        assert str(join_url(base, "?b=2")) == "https://example.com/app/index.html?b=2"

    def test_network_path(self):
        base = AnyUrl("https://example.com/manifest.webmanifest")
        assert str(join_url(base, "//cdn.example.org/icon.png")) == "https://cdn.example.org/icon.png"

    def test_base_fragment_ignored(self):
        base = AnyUrl("https://example.com/app/index.html#home")
        assert str(join_url(base, ".")) == "https://example.com/app/"

    def test_malformed_reference(self):
        base = AnyUrl("https://example.com/")
        with pytest.raises(UrlParsingError) as exc_info:
            join_url(base, "http://[::1")
        assert exc_info.value.reference == "http://[::1"


class TestOriginAndScope:
    """Тесты для url_origin, same_origin и within_scope."""

    def test_origin(self):
        assert url_origin(parse_absolute("https://example.com/a")) == (
            url_origin(parse_absolute("https://example.com/b"))
        )

    def test_same_origin(self):
        assert same_origin(AnyUrl("https://example.com/a"), AnyUrl("https://example.com/b?x=1"))

    def test_different_scheme(self):
        assert not same_origin(AnyUrl("http://example.com/"), AnyUrl("https://example.com/"))

    def test_different_host(self):
        assert not same_origin(AnyUrl("https://example.com/"), AnyUrl("https://example.org/"))

    def test_different_port(self):
        assert not same_origin(AnyUrl("https://example.com/"), AnyUrl("https://example.com:8443/"))

    def test_opaque_origin_never_same(self):
        url = AnyUrl("mailto:someone@example.com")
        assert url_origin(url) is None
        assert not same_origin(url, url)

    @pytest.mark.parametrize("url", [
        "web+app://host/x",
        "foo://example.com/",
        "file:///home/user/app.html",
    ])
    def test_non_special_scheme_is_opaque(self, url):
        absolute = AnyUrl(url)
        assert url_origin(absolute) is None
        assert not same_origin(absolute, absolute)
        assert not within_scope(absolute, absolute)

    def test_within_scope(self):
        assert within_scope(AnyUrl("https://example.com/app/page"), AnyUrl("https://example.com/app/"))

    def test_outside_scope_path(self):
        assert not within_scope(AnyUrl("https://example.com/other"), AnyUrl("https://example.com/app/"))

    def test_outside_scope_origin(self):
        assert not within_scope(AnyUrl("https://example.org/app/"), AnyUrl("https://example.com/app/"))

    def test_scope_prefix_is_literal(self):
        """Префикс строковый: scope /sco пропускает /scope/x."""
        assert within_scope(AnyUrl("https://example.com/scope/x"), AnyUrl("https://example.com/sco"))
