"""Enterprise views — projection to API shapes and the creation split.

Tests cover:
    - PublicView: selected language, fallback, public contacts only
    - CompleteView: all languages, private fields and contacts merged
    - split_complete_enterprise: lowercase_name, unsupported languages dropped,
      contacts routed by visibility
    - Malformed documents raise ProjectionError
"""

from uuid import uuid4

import pytest

from directory_api.core.domain_types import ViewKind
from directory_api.core.enterprise_views import (
    project_complete, project_public, split_complete_enterprise,
)
from directory_api.core.errors import ProjectionError


def payload():
    return {
        "translations": {
            "en": {"name": "Green Farms", "purposes": ["food"]},
            "es": {"name": "Granjas Verdes", "purposes": ["comida"]},
            "fr": {"name": "Fermes Vertes"},
        },
        "website": "https://green.example",
        "locations": [(-1.5, 2.5)],
        "emails": [
            {"email": "hi@green.example", "tags": ["main"], "public": True},
            {"email": "boss@green.example", "tags": [], "public": False},
        ],
        "clusters": ["agriculture"],
        "contact_person": ["Sam"],
    }


def stored():
    public, private = split_complete_enterprise(payload(), ["en", "es"])
    private_id = uuid4()
    return (
        {"id": uuid4(), **public, "private_info_id": private_id},
        {"id": private_id, **private},
    )


def test_split_adds_lowercase_name_and_drops_unsupported_languages():
    public, _ = split_complete_enterprise(payload(), ["en", "es"])
    assert set(public["translations"]) == {"en", "es"}
    assert public["translations"]["en"]["lowercase_name"] == "green farms"


def test_split_routes_contacts_by_visibility():
    public, private = split_complete_enterprise(payload(), ["en", "es"])
    assert [e["email"] for e in public["emails"]] == ["hi@green.example"]
    assert [e["email"] for e in private["emails"]] == ["boss@green.example"]
    assert public["locations"] == [[-1.5, 2.5]]
    assert private["clusters"] == ["agriculture"]
    assert "clusters" not in public


def test_public_view_selects_language():
    public, _ = stored()
    view = project_public(public, "es", "en")
    assert view.kind == ViewKind.PUBLIC
    assert view.body["name"] == "Granjas Verdes"
    assert view.body["purposes"] == ["comida"]
    assert view.body["website"] == "https://green.example"
    assert "lowercase_name" not in view.body


def test_public_view_falls_back_when_block_missing():
    public, _ = stored()
    del public["translations"]["es"]
    assert project_public(public, "es", "en").body["name"] == "Green Farms"


def test_public_view_hides_private_contacts():
    public, _ = stored()
    public["emails"].append({"email": "leak@green.example", "public": False})
    emails = project_public(public, "en", "en").body["emails"]
    assert [e["email"] for e in emails] == ["hi@green.example"]


def test_complete_view_merges_private():
    public, private = stored()
    view = project_complete(public, private)
    assert view.kind == ViewKind.COMPLETE
    assert view.body["en"]["name"] == "Green Farms"
    assert view.body["es"]["name"] == "Granjas Verdes"
    assert view.body["clusters"] == ["agriculture"]
    assert view.body["contact_person"] == ["Sam"]
    assert [e["email"] for e in view.body["emails"]] == [
        "hi@green.example", "boss@green.example",
    ]


def test_malformed_document_raises_projection_error():
    public, private = stored()
    public["translations"] = ["not", "a", "mapping"]
    with pytest.raises(ProjectionError) as exc:
        project_public(public, "en", "en")
    assert exc.value.http_status == 500

    public, _ = stored()
    public["emails"] = [{"tags": []}]
    with pytest.raises(ProjectionError):
        project_complete(public, private)
