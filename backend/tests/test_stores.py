"""Tests for permission parsing and the store backends."""

import asyncio
import json

import httpx
import pytest

from research_admin.config import Settings
from research_admin.navigation import (
    FilePermissionStore,
    InMemoryPermissionStore,
    MalformedStoreResponse,
    NavigationPermission,
    RemotePermissionStore,
    StoreUnreachable,
    build_permission_store,
    parse_permissions,
)


def _perm(job_title, item, level="edit"):
    return NavigationPermission(job_title=job_title, navigation_item=item, access_level=level)


# ── Parsing ───────────────────────────────────────────────────────────────────

class TestParsePermissions:
    def test_accepts_wire_records_and_ignores_extra_keys(self):
        parsed = parse_permissions([
            {"id": 7, "jobTitle": "PhD Student", "navigationItem": "contracts", "accessLevel": "hide",
             "createdAt": "2026-01-01T00:00:00"},
        ])
        assert parsed == [_perm("PhD Student", "contracts", "hide")]

    def test_empty_list_is_valid(self):
        assert parse_permissions([]) == []

    @pytest.mark.parametrize("payload", [
        None,
        {"permissions": []},
        "[]",
        [{"jobTitle": "PhD Student", "navigationItem": "contracts"}],
        [{"jobTitle": "PhD Student", "navigationItem": "contracts", "accessLevel": "admin"}],
        [{"jobTitle": "", "navigationItem": "contracts", "accessLevel": "view"}],
        [{"jobTitle": "PhD Student", "navigationItem": "contracts", "accessLevel": "view"}, "junk"],
    ])
    def test_malformed_payloads_rejected(self, payload):
        with pytest.raises(MalformedStoreResponse):
            parse_permissions(payload)

    def test_duplicate_pairs_reject_the_batch(self):
        with pytest.raises(MalformedStoreResponse):
            parse_permissions([
                {"jobTitle": "Physician", "navigationItem": "grants", "accessLevel": "view"},
                {"jobTitle": "Physician", "navigationItem": "grants", "accessLevel": "edit"},
            ])

    def test_wire_format_round_trip(self):
        wire = _perm("Grant Officer", "grants", "edit").to_wire()
        assert wire == {"jobTitle": "Grant Officer", "navigationItem": "grants", "accessLevel": "edit"}


# ── Remote store ──────────────────────────────────────────────────────────────

def _mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
class TestRemotePermissionStore:
    async def test_load_parses_collection(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "GET"
            assert request.url.path == "/api/role-permissions"
            return httpx.Response(200, json=[
                {"id": 1, "jobTitle": "Investigator", "navigationItem": "reports", "accessLevel": "view"},
            ])

        async with _mock_client(handler) as client:
            store = RemotePermissionStore("http://store/", client=client)
            assert await store.load() == [_perm("Investigator", "reports", "view")]

    async def test_bulk_save_posts_whole_table(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=[])

        async with _mock_client(handler) as client:
            store = RemotePermissionStore("http://store", client=client)
            await store.bulk_save([_perm("Investigator", "reports", "view"), _perm("Physician", "grants")])

        assert seen["method"] == "POST"
        assert seen["path"] == "/api/role-permissions/bulk"
        assert seen["body"] == {"permissions": [
            {"jobTitle": "Investigator", "navigationItem": "reports", "accessLevel": "view"},
            {"jobTitle": "Physician", "navigationItem": "grants", "accessLevel": "edit"},
        ]}

    async def test_transport_error_is_unreachable(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with _mock_client(handler) as client:
            store = RemotePermissionStore("http://store", client=client)
            with pytest.raises(StoreUnreachable):
                await store.load()
            with pytest.raises(StoreUnreachable):
                await store.bulk_save([])

    async def test_http_error_status_is_unreachable(self):
        async with _mock_client(lambda request: httpx.Response(503)) as client:
            store = RemotePermissionStore("http://store", client=client)
            with pytest.raises(StoreUnreachable):
                await store.load()

    async def test_non_json_body_is_malformed(self):
        async with _mock_client(lambda request: httpx.Response(200, text="<html>")) as client:
            store = RemotePermissionStore("http://store", client=client)
            with pytest.raises(MalformedStoreResponse):
                await store.load()

    async def test_borrowed_client_left_open(self):
        async with _mock_client(lambda request: httpx.Response(200, json=[])) as client:
            store = RemotePermissionStore("http://store", client=client)
            await store.aclose()
            assert not client.is_closed


# ── File store ────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
class TestFilePermissionStore:
    async def test_missing_file_is_empty(self, tmp_path):
        store = FilePermissionStore(tmp_path / "perms.json")
        assert await store.load() == []

    async def test_save_then_load(self, tmp_path):
        path = tmp_path / "nested" / "perms.json"
        store = FilePermissionStore(path)
        table = [_perm("Lab Manager", "facilities", "edit"), _perm("PhD Student", "patents", "hide")]
        await store.bulk_save(table)

        assert json.loads(path.read_text())[1] == {
            "jobTitle": "PhD Student", "navigationItem": "patents", "accessLevel": "hide",
        }
        assert await FilePermissionStore(path).load() == table

    async def test_invalid_json_is_malformed(self, tmp_path):
        path = tmp_path / "perms.json"
        path.write_text("{not json")
        with pytest.raises(MalformedStoreResponse):
            await FilePermissionStore(path).load()

    async def test_unreadable_path_is_unreachable(self, tmp_path):
        # a directory where the file should be
        path = tmp_path / "perms.json"
        path.mkdir()
        with pytest.raises(StoreUnreachable):
            await FilePermissionStore(path).load()

    async def test_concurrent_saves_apply_in_call_order(self, tmp_path):
        path = tmp_path / "perms.json"
        store = FilePermissionStore(path)
        levels = ["edit", "view", "hide"] * 10

        await asyncio.gather(*(
            store.bulk_save([_perm("Management", "reports", level)]) for level in levels
        ))

        assert await store.load() == [_perm("Management", "reports", levels[-1])]
        assert list(tmp_path.iterdir()) == [path]

    async def test_failed_write_leaves_no_temp_file(self, tmp_path):
        path = tmp_path / "perms.json"
        path.mkdir()
        with pytest.raises(StoreUnreachable):
            await FilePermissionStore(path).bulk_save([_perm("Management", "reports")])
        assert list(tmp_path.iterdir()) == [path]


# ── In-memory store & factory ─────────────────────────────────────────────────

@pytest.mark.asyncio
class TestInMemoryPermissionStore:
    async def test_records_saves(self):
        store = InMemoryPermissionStore()
        assert await store.load() == []
        await store.bulk_save([_perm("Management", "reports")])
        assert await store.load() == [_perm("Management", "reports")]
        assert len(store.saves) == 1

    async def test_duplicate_pairs_are_malformed(self):
        store = InMemoryPermissionStore([
            _perm("Management", "reports", "view"),
            _perm("Management", "reports", "hide"),
        ])
        with pytest.raises(MalformedStoreResponse):
            await store.load()


class TestBuildPermissionStore:
    def test_backends(self, tmp_path):
        assert isinstance(
            build_permission_store(Settings(permission_store_backend="memory")),
            InMemoryPermissionStore,
        )
        file_store = build_permission_store(
            Settings(permission_store_backend="file", permission_store_file=str(tmp_path / "p.json"))
        )
        assert isinstance(file_store, FilePermissionStore)
        remote = build_permission_store(
            Settings(permission_store_backend="remote", permission_store_url="http://perm-store:8000/")
        )
        assert isinstance(remote, RemotePermissionStore)
        assert remote.base_url == "http://perm-store:8000"
