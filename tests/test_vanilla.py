import pytest

from mcfetch.exceptions import FieldNotFound, ParseError, UnknownVersion
from mcfetch.models import ChecksumAlgorithm, DownloadTarget
from mcfetch.services import MetadataClient, VanillaStrategy

SHA1 = "a" * 40


@pytest.fixture
def strategy(fake_session, endpoints, manifest_document):
    fake_session.add_json(endpoints.manifest_url, manifest_document)
    for index, entry in enumerate(manifest_document["versions"]):
        fake_session.add_json(
            entry["url"],
            {
                "id": entry["id"],
                "downloads": {
                    "client": {"url": "https://example/client.jar", "sha1": "c" * 40},
                    "server": {
                        "url": f"https://example/{entry['id']}/server.jar",
                        "sha1": f"{index:x}" * 40,
                    },
                },
            },
        )
    fake_session.add_json(
        "https://example/meta.json",
        {"downloads": {"server": {"url": "https://example/server.jar", "sha1": SHA1}}},
    )
    return VanillaStrategy(MetadataClient(fake_session), endpoints)


@pytest.mark.asyncio
async def test_resolve_release(strategy, fake_session, endpoints):
    target = await strategy.resolve("1.18.2")

    assert target == DownloadTarget(
        url="https://example/server.jar",
        checksum=SHA1,
        algorithm=ChecksumAlgorithm.SHA1,
        filename="server.jar",
    )
    assert fake_session.urls == [endpoints.manifest_url, "https://example/meta.json"]


@pytest.mark.asyncio
async def test_latest_uses_release_pointer(strategy):
    target = await strategy.resolve("latest")
    assert target.url == "https://example/server.jar"


@pytest.mark.asyncio
async def test_latest_snapshot_uses_snapshot_pointer(strategy):
    target = await strategy.resolve("latest-snapshot")
    assert target.url == "https://example/22w16b/server.jar"


@pytest.mark.asyncio
async def test_every_manifest_version_has_a_sha1_target(strategy, manifest_document):
    for entry in manifest_document["versions"]:
        target = await strategy.resolve(entry["id"])
        assert target.algorithm is ChecksumAlgorithm.SHA1
        assert len(target.checksum) == 40


@pytest.mark.asyncio
async def test_unknown_version_skips_metadata_request(strategy, fake_session, endpoints):
    with pytest.raises(UnknownVersion) as exc_info:
        await strategy.resolve("99.99.99")

    assert exc_info.value.version == "99.99.99"
    assert fake_session.urls == [endpoints.manifest_url]


@pytest.mark.asyncio
async def test_missing_server_download(strategy, fake_session):
    fake_session.add_json("https://example/1.18.1.json", {"downloads": {"client": {}}})

    with pytest.raises(FieldNotFound) as exc_info:
        await strategy.resolve("1.18.1")

    assert exc_info.value.path == "downloads.server.url"


@pytest.mark.asyncio
async def test_null_server_url_is_a_parse_error(strategy, fake_session):
    fake_session.add_json(
        "https://example/1.18.1.json",
        {"downloads": {"server": {"url": None, "sha1": SHA1}}},
    )

    with pytest.raises(ParseError):
        await strategy.resolve("1.18.1")


def test_listing_keywords(strategy):
    assert strategy.is_listing("list")
    assert strategy.is_listing("list-latest")
    assert strategy.is_listing("list-latest-snapshot")
    assert not strategy.is_listing("latest")
    assert not strategy.is_listing("1.18.2")


@pytest.mark.asyncio
async def test_list_in_manifest_order(strategy, fake_session, endpoints):
    assert await strategy.list("list") == ["22w16b", "1.18.2", "1.18.1"]
    assert fake_session.urls == [endpoints.manifest_url]


@pytest.mark.asyncio
async def test_list_latest(strategy):
    assert await strategy.list("list-latest") == ["1.18.2"]
    assert await strategy.list("list-latest-snapshot") == ["22w16b"]
