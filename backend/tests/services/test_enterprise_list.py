"""Enterprise list routes — browse, keyword search, and geo search over HTTP.

Invariants:
    - Browse orders by lowercase name of the selected language
    - "+" in q is equivalent to a space
    - at=<lon>,<lat> orders by increasing distance; malformed at is 400
    - Empty result is 200 []
    - Cache-Control max-age comes from settings
"""

import pytest

from tests.services.sample_enterprises import arts_center, bakery, water_works

URL = "/api/v1/enterprise"


@pytest.fixture
async def seeded(seed_enterprise):
    return {
        "water": await seed_enterprise(water_works()),
        "bakery": await seed_enterprise(bakery()),
        "arts": await seed_enterprise(arts_center()),
    }


async def test_empty_directory_returns_empty_list(client):
    res = await client.get(URL)
    assert res.status_code == 200
    assert res.json() == []


async def test_browse_sorts_by_lowercase_english_name(client, seeded):
    res = await client.get(URL, params={"lang": "en"})
    assert res.status_code == 200
    assert [e["name"] for e in res.json()] == [
        "Arts Center", "Bakery Collective", "Water Works Cooperative",
    ]


async def test_browse_sorts_by_selected_language(client, seeded):
    res = await client.get(URL, params={"lang": "es"})
    assert [e["name"] for e in res.json()] == [
        "Colectivo Panaderia", "Cooperativa de Agua", "Taller de Artes",
    ]


async def test_browse_applies_count_and_offset(client, seeded):
    res = await client.get(URL, params={"count": 1, "offset": 1})
    assert [e["name"] for e in res.json()] == ["Bakery Collective"]


async def test_unsupported_language_falls_back_to_default(client, seeded):
    res = await client.get(URL, params={"lang": "fr"})
    assert res.status_code == 200
    assert [e["name"] for e in res.json()] == [
        "Arts Center", "Bakery Collective", "Water Works Cooperative",
    ]


async def test_list_sets_cache_control(client, seeded):
    res = await client.get(URL)
    assert res.headers["cache-control"] == "max-age=600"


async def test_text_search_orders_by_relevance(client, seeded):
    res = await client.get(URL, params={"q": "water sanitation"})
    assert res.status_code == 200
    assert [e["name"] for e in res.json()] == [
        "Water Works Cooperative", "Bakery Collective",
    ]


async def test_plus_in_query_equals_space(client, seeded):
    spaced = await client.get(URL, params={"q": "water sanitation"})
    plussed = await client.get(f"{URL}?q=water%2Bsanitation")
    assert plussed.status_code == 200
    assert plussed.json() == spaced.json()


async def test_text_search_excluded_term(client, seeded):
    res = await client.get(URL, params={"q": "water -bread"})
    assert [e["name"] for e in res.json()] == ["Water Works Cooperative"]


async def test_text_search_without_matches_is_empty(client, seeded):
    res = await client.get(URL, params={"q": "submarine"})
    assert res.status_code == 200
    assert res.json() == []


async def test_location_search_orders_by_distance(client, seeded):
    res = await client.get(URL, params={"at": "-122.4,37.8", "count": 2})
    assert res.status_code == 200
    assert [e["name"] for e in res.json()] == [
        "Water Works Cooperative", "Bakery Collective",
    ]


async def test_location_search_takes_precedence_over_query(client, seeded):
    res = await client.get(URL, params={"at": "-73.9,40.7", "q": "water"})
    assert res.json()[0]["name"] == "Arts Center"
    assert len(res.json()) == 3


async def test_location_search_offset(client, seeded):
    res = await client.get(URL, params={"at": "-122.4,37.8", "offset": 2})
    assert [e["name"] for e in res.json()] == ["Arts Center"]


@pytest.mark.parametrize("at", [
    "abc", "1,2,3", "-122.4", "200,10", "10,-91", "x,y", "nan,1", "1_2_0,3_7",
])
async def test_malformed_location_is_400(client, at):
    res = await client.get(URL, params={"at": at})
    assert res.status_code == 400
    assert res.json()["message"] == "Invalid location parameter"


async def test_list_hides_private_contacts(client, seeded):
    res = await client.get(URL, params={"q": "sanitation"})
    [water] = res.json()
    assert [e["email"] for e in water["emails"]] == ["info@waterworks.example"]
    assert "clusters" not in water


async def test_zero_count_is_400(client):
    res = await client.get(URL, params={"count": 0})
    assert res.status_code == 400
    assert "message" in res.json()
