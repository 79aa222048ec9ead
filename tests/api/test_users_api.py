"""HTTP surface of the users, roles and permissions routers."""
import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core import config
from app.core.database.engine import get_db
from app.features.roles.models import Role
from app.features.users.dependencies import get_user_service
from app.features.users.service import UserDirectoryService
from app.main import app
from tests.factories import user_payload


pytestmark = pytest.mark.api


async def create(client, **overrides) -> dict:
    response = await client.post("/users/", json=user_payload(**overrides))
    assert response.status_code == 201, response.text
    return response.json()


async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


async def test_create_and_fetch_user(client):
    created = await create(client, permissions=[{"is_readable": True}])

    assert created["permissions"][0]["permission_name"] == "Readable"
    assert "password" not in created

    response = await client.get(f"/users/{created['user_id']}")
    assert response.status_code == 200
    body = response.json()
    assert body["first_name"] == "Maria"
    assert body["role"] == {"role_id": None, "role_name": None}
    assert body["permissions"] == created["permissions"]


async def test_submitted_label_is_ignored(client):
    created = await create(client, permissions=[
        {"is_writable": True, "permission_name": "Everything"},
    ])

    assert created["permissions"][0]["permission_name"] == "Writable"


async def test_fetch_unknown_user_is_404(client):
    response = await client.get("/users/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"detail": "User not found"}


async def test_update_scenario(client):
    created = await create(client, permissions=[{"is_readable": True}])
    original_id = created["permissions"][0]["permission_id"]

    response = await client.put(f"/users/{created['user_id']}", json=user_payload(permissions=[
        {"permission_id": original_id, "is_readable": True, "is_writable": True},
        {"is_readable": True, "is_deletable": True},
    ]))

    assert response.status_code == 200
    permissions = {p["permission_id"]: p["permission_name"] for p in response.json()["permissions"]}
    assert len(permissions) == 2
    assert permissions.pop(original_id) == "Readable, Writable"
    assert list(permissions.values()) == ["Readable, Deletable"]

    fetched = (await client.get(f"/users/{created['user_id']}")).json()
    assert {p["permission_id"] for p in fetched["permissions"]} == {original_id, *permissions}


async def test_update_unknown_user_is_404(client):
    response = await client.put("/users/does-not-exist", json=user_payload())

    assert response.status_code == 404


async def test_delete_user(client):
    created = await create(client, permissions=[{"is_readable": True}])

    response = await client.delete(f"/users/{created['user_id']}")
    assert response.status_code == 200
    assert response.json()["result"] is True

    assert (await client.get(f"/users/{created['user_id']}")).status_code == 404
    remaining = await client.get("/permissions/", params={"user_id": created["user_id"]})
    assert remaining.json() == []


async def test_delete_unknown_user_is_404(client):
    response = await client.delete("/users/does-not-exist")

    assert response.status_code == 404


async def test_datatable_search_sort_and_page(client):
    for first, username in [("Maria", "maria"), ("Bob", "bob"), ("Alice", "alice"), ("Mark", "mark")]:
        await create(client, first_name=first, last_name="Doe", email=f"{username}@example.com", username=username)

    response = await client.post("/users/datatable", json={
        "search": "Mar",
        "order_by": "firstName",
        "order_direction": "desc",
        "page_number": 1,
        "page_size": 1,
    })

    assert response.status_code == 200
    body = response.json()
    assert body["total_count"] == 2
    assert body["page"] == 1
    assert body["page_size"] == 1
    assert [row["first_name"] for row in body["data_source"]] == ["Mark"]
    assert "created_date" in body["data_source"][0]


async def test_datatable_with_empty_body_uses_defaults(client):
    await create(client)

    response = await client.post("/users/datatable", json={})

    assert response.status_code == 200
    body = response.json()
    assert body["page"] == 1
    assert body["page_size"] == 10
    assert body["total_count"] == 1


async def test_list_users_with_query_parameters(client):
    for first, username in [("Zed", "zed"), ("Amy", "amy")]:
        await create(client, first_name=first, username=username)

    response = await client.get("/users/", params={"order_by": "first_name", "page_size": 5})

    assert response.status_code == 200
    assert [row["first_name"] for row in response.json()["data_source"]] == ["Amy", "Zed"]


async def test_list_roles(client, session_factory):
    async with session_factory() as session:
        session.add_all([Role(name="viewer"), Role(name="admin")])
        await session.commit()

    response = await client.get("/roles/")

    assert response.status_code == 200
    assert [role["role_name"] for role in response.json()] == ["admin", "viewer"]


async def test_list_permissions(client):
    first = await create(client, username="one", permissions=[{"is_readable": True}])
    await create(client, username="two", permissions=[{"is_deletable": True}])

    everything = await client.get("/permissions/")
    mine = await client.get("/permissions/", params={"user_id": first["user_id"]})

    assert len(everything.json()) == 2
    assert [(p["user_id"], p["name"], p["is_readable"]) for p in mine.json()] == [
        (first["user_id"], "Readable", True)
    ]


async def test_store_failure_is_500_with_message(client):
    class FailingSession:
        async def execute(self, *args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("database is locked"))

    app.dependency_overrides[get_user_service] = lambda: UserDirectoryService(FailingSession())

    response = await client.get("/users/anything")

    assert response.status_code == 500
    assert response.json()["detail"] == "Internal Server Error"
    assert "database is locked" in response.json()["message"]


async def test_failed_commit_is_500_and_nothing_is_stored(client, engine):
    class CommitFailsSession(AsyncSession):
        async def commit(self):
            raise OperationalError("COMMIT", {}, Exception("database is locked"))

    failing_factory = async_sessionmaker(engine, class_=CommitFailsSession, expire_on_commit=False)

    async def failing_get_db():
        async with failing_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    working_get_db = app.dependency_overrides[get_db]
    app.dependency_overrides[get_db] = failing_get_db
    response = await client.post("/users/", json=user_payload())
    app.dependency_overrides[get_db] = working_get_db

    assert response.status_code == 500
    assert "database is locked" in response.json()["message"]
    listing = await client.post("/users/datatable", json={})
    assert listing.json()["total_count"] == 0


@pytest.mark.parametrize("filters", [
    {"page_number": 10**18, "page_size": 10},
    {"page_size": 10**19},
])
async def test_oversized_paging_values_do_not_fail(client, filters):
    await create(client)

    response = await client.post("/users/datatable", json=filters)

    assert response.status_code == 200
    body = response.json()
    assert body["total_count"] == 1
    assert body["page_size"] <= config.MAX_PAGE_SIZE


def test_importing_app_does_not_configure_logging():
    import app.main as main_module

    assert not hasattr(main_module, "setup_logging")
