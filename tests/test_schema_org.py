import json

from bs4 import BeautifulSoup

from whisk.app.db.models import ParsingMethod
from whisk.app.services.recipe_extraction.extractors import schema_org
from whisk.app.services.recipe_extraction.parsing_utils import (
    extract_image,
    extract_instruction_text,
    format_duration,
)


def page_with_json_ld(data) -> BeautifulSoup:
    raw = data if isinstance(data, str) else json.dumps(data)
    html = f"""
    <html>
      <head><script type="application/ld+json">{raw}</script></head>
      <body><p>Hello</p></body>
    </html>
    """
    return BeautifulSoup(html, "lxml")


def recipe_node(**overrides):
    node = {
        "@context": "https://schema.org",
        "@type": "Recipe",
        "name": "Test Recipe",
        "description": "Simple and good",
        "image": "https://example.com/a.jpg",
        "recipeIngredient": ["1 cup flour", "2 eggs"],
        "recipeInstructions": ["Mix", "Bake"],
        "prepTime": "PT15M",
        "cookTime": "PT1H30M",
        "totalTime": "PT1H45M",
        "recipeYield": ["4", "4 servings"],
        "recipeCategory": "Dessert",
        "recipeCuisine": ["French"],
    }
    node.update(overrides)
    return node


def test_extract_recipe_from_schema_org():
    recipe = schema_org.extract_recipe_from_schema_org(page_with_json_ld(recipe_node()))
    assert recipe is not None
    assert recipe.name == "Test Recipe"
    assert recipe.description == "Simple and good"
    assert recipe.image == "https://example.com/a.jpg"
    assert recipe.ingredients == ["1 cup flour", "2 eggs"]
    assert recipe.instructions == ["Mix", "Bake"]
    assert recipe.prep_time == "15 minutes"
    assert recipe.cook_time == "1 hours and 30 minutes"
    assert recipe.recipe_yield == "4"
    assert recipe.category == ["Dessert"]
    assert recipe.cuisine == ["French"]
    assert recipe.parsing_method == ParsingMethod.JSON_LD


def test_graph_picks_recipe_node():
    data = {
        "@context": "https://schema.org",
        "@graph": [
            {"@type": "WebPage", "name": "Page"},
            recipe_node(name="Graph Dish", **{"@type": ["Recipe", "NewsArticle"]}),
        ],
    }
    recipe = schema_org.extract_recipe_from_schema_org(page_with_json_ld(data))
    assert recipe is not None
    assert recipe.name == "Graph Dish"


def test_list_uses_first_element_only():
    data = [{"@type": "WebSite", "name": "Site"}, recipe_node()]
    assert schema_org.extract_recipe_from_schema_org(page_with_json_ld(data)) is None


def test_non_recipe_type_is_ignored():
    assert schema_org.extract_recipe_from_schema_org(page_with_json_ld({"@type": "Article", "name": "News"})) is None


def test_recipe_type_must_match_exactly():
    assert not schema_org.is_recipe_type({"@type": "RecipeCollection"})
    assert schema_org.is_recipe_type({"@type": ["Thing", "Recipe"]})


def test_blank_name_falls_through():
    assert schema_org.extract_recipe_from_schema_org(page_with_json_ld(recipe_node(name="   "))) is None


def test_invalid_json_ld_falls_through():
    assert schema_org.extract_recipe_from_schema_org(page_with_json_ld("{not json")) is None


def test_no_json_ld_returns_none():
    soup = BeautifulSoup("<html><body><h1>Soup</h1></body></html>", "lxml")
    assert schema_org.find_json_ld(soup) is None


def test_how_to_steps_and_sections():
    instructions = [
        {"@type": "HowToStep", "text": "Chop onions."},
        "Fry them.",
        {"@type": "HowToSection", "name": "Finish", "itemListElement": [{"@type": "HowToStep", "text": "x"}]},
        {"@type": "HowToStep", "text": "  "},
    ]
    assert extract_instruction_text(instructions) == ["Chop onions.", "Fry them."]


def test_image_shapes():
    assert extract_image("https://a/1.jpg") == "https://a/1.jpg"
    assert extract_image(["https://a/1.jpg", "https://a/2.jpg"]) == "https://a/1.jpg"
    assert extract_image([{"url": "https://a/3.jpg"}]) == "https://a/3.jpg"
    assert extract_image({"@type": "ImageObject", "url": "https://a/4.jpg"}) == "https://a/4.jpg"
    assert extract_image(None) == ""
    assert extract_image({"width": 10}) == ""


def test_format_duration():
    assert format_duration("PT30M") == "30 minutes"
    assert format_duration("PT1H") == "1 hours"
    assert format_duration("PT45S") == "45 seconds"
    assert format_duration("PT1H0M") == "1 hours"
    assert format_duration("PT1H15M30S") == "1 hours, 15 minutes, and 30 seconds"
    assert format_duration("") == ""
    assert format_duration(None) == ""
    assert format_duration("about 20 minutes") == ""
