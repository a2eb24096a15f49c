from whisk.app.db.models import Note, ParsingMethod, Recipe
from whisk.app.schemas.recipe import RecipeCreate
from whisk.app.services import recipes_service
from whisk.app.services.recipe_extraction.models import ExtractedRecipe
from whisk.app.services.recipe_extraction.validation import (
    INGREDIENTS_REQUIRED,
    INSTRUCTIONS_REQUIRED,
    NAME_REQUIRED,
)


def recipe_payload(**overrides):
    payload = {
        "name": "Test Recipe",
        "description": "Tasty",
        "cook_time": "20 minutes",
        "prep_time": "10 minutes",
        "total_time": "30 minutes",
        "category": ["Main Course"],
        "cuisine": ["Italian"],
        "ingredients": ["1 cup flour", "2 eggs"],
        "instructions": ["Mix", "Bake"],
        "yield": "2 servings",
    }
    payload.update(overrides)
    return payload


def test_create_recipe_and_scoping(client, db_session, headers):
    response = client.post("/recipes", json=recipe_payload(), headers=headers)
    assert response.status_code == 201
    body = response.json()
    assert body["user_id"] == "user-1"
    assert body["name"] == "Test Recipe"
    assert body["yield"] == "2 servings"
    assert body["parsing_method"] == "Manual"

    other_recipe = RecipeCreate(**recipe_payload(name="Other User Recipe"))
    recipes_service.create_recipe(db_session, "user-2", other_recipe)

    list_response = client.get("/recipes", headers=headers)
    assert list_response.status_code == 200
    names = {r["name"] for r in list_response.json()}
    assert "Test Recipe" in names
    assert "Other User Recipe" not in names


def test_create_requires_ingredients_and_instructions(client, headers):
    response = client.post("/recipes", json=recipe_payload(ingredients=[]), headers=headers)
    assert response.status_code == 422
    assert response.json()["code"] == "VALIDATION_ERROR"
    assert response.json()["details"] == [INGREDIENTS_REQUIRED]

    response = client.post("/recipes", json=recipe_payload(name="  ", instructions=[]), headers=headers)
    assert response.status_code == 422
    assert response.json()["details"] == [NAME_REQUIRED, INSTRUCTIONS_REQUIRED]


def test_list_orders_newest_first(client, headers):
    for name in ("First", "Second", "Third"):
        assert client.post("/recipes", json=recipe_payload(name=name), headers=headers).status_code == 201
    names = [r["name"] for r in client.get("/recipes", headers=headers).json()]
    assert names == ["Third", "Second", "First"]


def test_get_recipe_of_other_user_is_404(client, headers, other_headers):
    recipe_id = client.post("/recipes", json=recipe_payload(), headers=headers).json()["id"]
    assert client.get(f"/recipes/{recipe_id}", headers=headers).status_code == 200
    response = client.get(f"/recipes/{recipe_id}", headers=other_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "Recipe not found"


def test_update_recipe(client, headers):
    recipe_id = client.post("/recipes", json=recipe_payload(), headers=headers).json()["id"]
    response = client.put(
        f"/recipes/{recipe_id}",
        json={"name": "Renamed", "yield": "6 servings", "user_id": "user-2"},
        headers=headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Renamed"
    assert body["yield"] == "6 servings"
    assert body["user_id"] == "user-1"
    assert body["ingredients"] == ["1 cup flour", "2 eggs"]


def test_update_cannot_empty_required_fields(client, headers):
    recipe_id = client.post("/recipes", json=recipe_payload(), headers=headers).json()["id"]
    response = client.put(f"/recipes/{recipe_id}", json={"instructions": []}, headers=headers)
    assert response.status_code == 422
    assert response.json()["details"] == [INSTRUCTIONS_REQUIRED]
    assert client.get(f"/recipes/{recipe_id}", headers=headers).json()["instructions"] == ["Mix", "Bake"]


def test_update_other_users_recipe_is_404(client, headers, other_headers):
    recipe_id = client.post("/recipes", json=recipe_payload(), headers=headers).json()["id"]
    response = client.put(f"/recipes/{recipe_id}", json={"name": "Hijacked"}, headers=other_headers)
    assert response.status_code == 404
    assert client.get(f"/recipes/{recipe_id}", headers=headers).json()["name"] == "Test Recipe"


def test_delete_recipe_removes_notes(client, db_session, headers):
    recipe_id = client.post("/recipes", json=recipe_payload(), headers=headers).json()["id"]
    client.post(f"/chat/recipes/{recipe_id}/notes", json={"content": "Less salt", "type": "note"}, headers=headers)

    response = client.delete(f"/recipes/{recipe_id}", headers=headers)
    assert response.status_code == 204
    assert client.get(f"/recipes/{recipe_id}", headers=headers).status_code == 404
    assert db_session.query(Note).filter(Note.recipe_id == recipe_id).count() == 0


def test_delete_other_users_recipe_leaves_it(client, db_session, headers, other_headers):
    recipe_id = client.post("/recipes", json=recipe_payload(), headers=headers).json()["id"]
    response = client.delete(f"/recipes/{recipe_id}", headers=other_headers)
    assert response.status_code == 404
    assert db_session.get(Recipe, recipe_id) is not None


def test_filter_recipes(client, headers):
    client.post(
        "/recipes",
        json=recipe_payload(name="Dal Tadka", cuisine=["Indian"], ingredients=["lentils", "ghee"]),
        headers=headers,
    )
    client.post(
        "/recipes",
        json=recipe_payload(name="Tiramisu", category=["Dessert"], ingredients=["mascarpone", "coffee"]),
        headers=headers,
    )

    def names(**params):
        response = client.get("/recipes", params=params, headers=headers)
        assert response.status_code == 200
        return [r["name"] for r in response.json()]

    assert names(cuisine="indian") == ["Dal Tadka"]
    assert names(category="Dessert") == ["Tiramisu"]
    assert names(q="MASCARPONE") == ["Tiramisu"]
    assert names(q="dal") == ["Dal Tadka"]
    assert names(q="nothing like this") == []


def test_facets_are_distinct_and_sorted(client, headers, other_headers):
    client.post("/recipes", json=recipe_payload(category=["Soup", "main course"]), headers=headers)
    client.post("/recipes", json=recipe_payload(category=["Main Course"], cuisine=["Asian"]), headers=headers)
    client.post("/recipes", json=recipe_payload(category=["Secret"]), headers=other_headers)

    response = client.get("/recipes/facets", headers=headers)
    assert response.status_code == 200
    body = response.json()
    assert [c.lower() for c in body["categories"]] == ["main course", "soup"]
    assert body["cuisines"] == ["Asian", "Italian"]


def test_service_create_from_extracted_keeps_parsing_method(db_session):
    extracted = ExtractedRecipe(
        name="Imported",
        ingredients=["salt"],
        instructions=["season"],
        recipe_yield="1 serving",
        source_url="https://example.com/r",
        parsing_method=ParsingMethod.JSON_LD,
    )
    recipe = recipes_service.create_from_extracted(db_session, "user-1", extracted)
    assert recipe.id is not None
    assert recipe.parsing_method == ParsingMethod.JSON_LD
    assert recipe.recipe_yield == "1 serving"
    assert recipe.notes == []


def test_create_ignores_client_parsing_method(client, headers):
    response = client.post("/recipes", json=recipe_payload(parsing_method="JSON-LD"), headers=headers)
    assert response.status_code == 201
    recipe_id = response.json()["id"]
    assert response.json()["parsing_method"] == "Manual"
    assert client.get(f"/recipes/{recipe_id}", headers=headers).json()["parsing_method"] == "Manual"


def test_update_null_clears_optional_fields(client, headers):
    recipe_id = client.post(
        "/recipes", json=recipe_payload(source_url="https://example.com/r"), headers=headers
    ).json()["id"]
    response = client.put(
        f"/recipes/{recipe_id}",
        json={"description": None, "source_url": None, "name": None, "ingredients": None},
        headers=headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["description"] is None
    assert body["source_url"] is None
    assert body["name"] == "Test Recipe"
    assert body["ingredients"] == ["1 cup flour", "2 eggs"]
