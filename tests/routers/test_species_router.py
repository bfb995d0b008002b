import pytest
from fastapi import status
from sqlalchemy.exc import OperationalError

from app.services.security import get_optional_user
from tests.utils.factories import make_species, make_user, wolf_form_input


@pytest.fixture
def seeded(fake_db):
    fake_db.put(make_species(1, author=1))
    fake_db.put(make_species(2, author=2, scientific_name="Amanita muscaria", kingdom="Fungi"))
    return fake_db


def _login(app, user):
    app.dependency_overrides[get_optional_user] = lambda: user


@pytest.mark.asyncio
async def test_list_species(async_client, seeded):
    resp = await async_client.get("/species")

    assert resp.status_code == status.HTTP_200_OK
    names = [s["scientific_name"] for s in resp.json()]
    assert names == ["Amanita muscaria", "Canis lupus"]


@pytest.mark.asyncio
async def test_get_species(async_client, seeded):
    resp = await async_client.get("/species/1")

    assert resp.status_code == status.HTTP_200_OK
    body = resp.json()
    assert body["common_name"] == "Gray wolf"
    assert body["kingdom"] == "Animalia"
    assert body["author"] == 1

    resp_404 = await async_client.get("/species/999")
    assert resp_404.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_update_requires_login(async_client, seeded):
    resp = await async_client.put("/species/1", json=wolf_form_input())

    assert resp.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.asyncio
async def test_update_flow(async_client, app, seeded):
    # Arrange
    _login(app, make_user(1))

    # Act
    resp = await async_client.put("/species/1", json=wolf_form_input())

    # Assert
    assert resp.status_code == status.HTTP_200_OK
    body = resp.json()
    assert body["scientific_name"] == "Canis lupus"
    assert body["common_name"] is None
    assert body["description"] is None
    assert body["total_population"] == 300000
    assert seeded.species[1].common_name is None

    # Not the owner -> 403
    resp_403 = await async_client.put("/species/2", json=wolf_form_input())
    assert resp_403.status_code == status.HTTP_403_FORBIDDEN

    # Missing -> 404
    resp_404 = await async_client.put("/species/999", json=wolf_form_input())
    assert resp_404.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [
        {"scientific_name": "  "},
        {"kingdom": "Mammalia"},
        {"total_population": 0},
        {"image": "wolf.jpg"},
        {"image": "javascript:alert(document.cookie)"},
        {"total_population": True},
    ],
)
async def test_update_validation_errors(async_client, app, seeded, overrides):
    _login(app, make_user(1))

    resp = await async_client.put("/species/1", json=wolf_form_input(**overrides))

    assert resp.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert seeded.commits == 0


@pytest.mark.asyncio
async def test_update_database_failure(async_client, app, seeded):
    _login(app, make_user(1))
    seeded.commit_error = OperationalError("UPDATE", {}, OSError("network unreachable"))

    resp = await async_client.put("/species/1", json=wolf_form_input())

    assert resp.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
    assert resp.json()["detail"] == "network unreachable"
