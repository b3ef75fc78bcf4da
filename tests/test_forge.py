import pytest

from mcfetch.exceptions import FieldNotFound
from mcfetch.models import ChecksumAlgorithm, PromotionTable
from mcfetch.services import ForgeStrategy, MetadataClient, resolve_long_version
from mcfetch.services.forge import match_exact, match_latest, match_passthrough

MD5 = "b" * 32


def meta_url(endpoints, long_version):
    return endpoints.forge_meta_url.format(long_version=long_version)


@pytest.fixture
def strategy(fake_session, endpoints, promotions_document):
    fake_session.add_json(endpoints.forge_promotions_url, promotions_document)
    for long_version in ("1.18.2-40.1.80", "1.18.2-40.2.0", "1.16.5-36.2.39"):
        fake_session.add_json(
            meta_url(endpoints, long_version),
            {"classifiers": {"installer": {"jar": MD5, "txt": "0" * 32}}},
        )
    return ForgeStrategy(MetadataClient(fake_session), endpoints)


class TestPromotionTiers:
    def test_exact_match_beats_suffixed_match(self):
        table = PromotionTable({"1.2": "exact", "1.2-latest": "suffixed"})
        assert resolve_long_version("1.2", table) == "1.2-exact"

    def test_exact_match_uses_numeric_part_of_key(self):
        table = PromotionTable({"1.18.2-recommended": "40.2.0"})
        assert resolve_long_version("1.18.2-recommended", table) == "1.18.2-40.2.0"

    def test_suffixed_match(self):
        table = PromotionTable({"1.18.2-latest": "40.1.80"})
        assert resolve_long_version("1.18.2", table) == "1.18.2-40.1.80"

    def test_pass_through(self):
        table = PromotionTable({"1.18.2-latest": "40.1.80"})
        assert resolve_long_version("1.18.2-40.1.80", table) == "1.18.2-40.1.80"

    def test_null_promotion_falls_through(self):
        table = PromotionTable({"1.2": None, "1.2-latest": "7"})
        assert resolve_long_version("1.2", table) == "1.2-7"

    def test_matchers_short_circuit(self):
        calls = []

        def first(spec, promotions):
            calls.append("first")
            return "hit"

        def second(spec, promotions):
            calls.append("second")
            return "also a hit"

        assert resolve_long_version("x", PromotionTable({}), (first, second)) == "hit"
        assert calls == ["first"]

    def test_individual_matchers(self):
        table = PromotionTable({"1.2-latest": "9"})
        assert match_exact("1.2", table) is None
        assert match_latest("1.2", table) == "1.2-9"
        assert match_passthrough("anything", table) == "anything"


@pytest.mark.asyncio
async def test_resolve_suffixed(strategy, fake_session, endpoints):
    target = await strategy.resolve("1.18.2")

    assert target.algorithm is ChecksumAlgorithm.MD5
    assert target.checksum == MD5
    assert target.filename == "forge-1.18.2-40.1.80-installer.jar"
    assert target.url == (
        "https://maven.minecraftforge.net/net/minecraftforge/forge/"
        "1.18.2-40.1.80/forge-1.18.2-40.1.80-installer.jar"
    )
    assert fake_session.urls == [
        endpoints.forge_promotions_url,
        meta_url(endpoints, "1.18.2-40.1.80"),
    ]


@pytest.mark.asyncio
async def test_resolve_exact(strategy):
    target = await strategy.resolve("1.18.2-recommended")
    assert target.filename == "forge-1.18.2-40.2.0-installer.jar"


@pytest.mark.asyncio
async def test_resolve_pass_through(strategy, fake_session, endpoints):
    target = await strategy.resolve("1.16.5-36.2.39")

    assert target.filename == "forge-1.16.5-36.2.39-installer.jar"
    assert fake_session.urls[-1] == meta_url(endpoints, "1.16.5-36.2.39")


@pytest.mark.asyncio
async def test_missing_installer_checksum(strategy, fake_session, endpoints):
    fake_session.add_json(meta_url(endpoints, "1.18.2-40.1.80"), {"classifiers": {}})

    with pytest.raises(FieldNotFound):
        await strategy.resolve("1.18.2")


@pytest.mark.asyncio
async def test_list(strategy, fake_session, endpoints):
    fake_session.add_json(
        endpoints.forge_index_url,
        {"1.1": ["1.1-1.3.2.1"], "1.18.2": ["1.18.2-40.0.0", "1.18.2-40.1.80"]},
    )

    assert await strategy.list("list") == [
        "1.1-1.3.2.1",
        "1.18.2-40.0.0",
        "1.18.2-40.1.80",
        "1.17.1-latest",
        "1.18.2-latest",
        "1.18.2-recommended",
    ]
    assert fake_session.urls == [endpoints.forge_promotions_url, endpoints.forge_index_url]


def test_listing_keyword(strategy):
    assert strategy.is_listing("list")
    assert not strategy.is_listing("1.18.2")


@pytest.mark.asyncio
async def test_list_prints_nested_objects_as_json(strategy, fake_session, endpoints):
    fake_session.add_json(endpoints.forge_index_url, {"1.18.2": ["1.18.2-40.1.80", {"beta": 1}]})

    listing = await strategy.list("list")

    assert listing[:2] == ["1.18.2-40.1.80", '{"beta": 1}']
