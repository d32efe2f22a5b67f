import uuid

from cookmate.models import UserPreference

from conftest import auth_headers, make_recipe, make_user


def _titles(items):
    return sorted(r["title"] for r in items)


def _set_prefs(db, user, **fields):
    fields.setdefault("allergies", [])
    fields.setdefault("cuisines", [])
    db.add(UserPreference(user_id=user.id, **fields))
    db.commit()


def test_list_filters_and_paginates(client, db_session):
    make_recipe(db_session, "Idli", meal_type="Breakfast", cuisine_type="Indian")
    make_recipe(db_session, "Dosa", meal_type="Breakfast", cuisine_type="Indian")
    make_recipe(db_session, "Pasta", meal_type="Dinner", cuisine_type="Italian")

    res = client.get("/api/v1/recipes/", params={"meal_type": "Breakfast"})
    assert res.status_code == 200
    assert res.json()["total"] == 2
    assert _titles(res.json()["items"]) == ["Dosa", "Idli"]

    res = client.get("/api/v1/recipes/", params={"meal_type": "Breakfast", "cuisine": "Italian"})
    assert res.json()["total"] == 0

    res = client.get("/api/v1/recipes/", params={"limit": 1})
    assert res.json()["total"] == 3
    assert len(res.json()["items"]) == 1


def test_list_text_search_covers_title_and_ingredients(client, db_session):
    make_recipe(db_session, "Tomato Soup", ingredients=[("tomato", "4")])
    make_recipe(db_session, "Bruschetta", ingredients=[("bread", "4 slices"), ("Tomato", "2")])
    make_recipe(db_session, "Omelette")

    res = client.get("/api/v1/recipes/", params={"search": "TOMATO"})
    assert _titles(res.json()["items"]) == ["Bruschetta", "Tomato Soup"]


def test_list_sort_by_rating(client, db_session):
    make_recipe(db_session, "Low", rating=2.0, rating_count=1)
    make_recipe(db_session, "High", rating=4.5, rating_count=2)
    res = client.get("/api/v1/recipes/", params={"sort": "rating"})
    assert [r["title"] for r in res.json()["items"]] == ["High", "Low"]


def test_ingredient_search_requires_every_ingredient(client, db_session):
    make_recipe(db_session, "Pancakes", ingredients=[("egg", "2"), ("flour", "1 cup"), ("milk", "250 ml")])
    make_recipe(db_session, "Omelette", ingredients=[("egg", "3"), ("butter", "1 tbsp")])

    res = client.get("/api/v1/recipes/search/ingredients", params={"ingredients": "egg, milk"})
    assert res.status_code == 200
    results = res.json()
    assert [r["title"] for r in results] == ["Pancakes"]
    assert results[0]["match_percentage"] == 100
    assert results[0]["missing_ingredients"] == ["flour"]


def test_ingredient_search_filters_are_and(client, db_session):
    make_recipe(db_session, "Veg Curry", ingredients=[("potato", "2")],
                dietary_preference="Veg", meal_type="Dinner", difficulty_level="Easy")
    make_recipe(db_session, "Chicken Curry", ingredients=[("potato", "1"), ("chicken", "500 g")],
                dietary_preference="Non-Veg", meal_type="Dinner", difficulty_level="Easy")

    res = client.get("/api/v1/recipes/search/ingredients", params={
        "ingredients": "potato", "dietary": "Veg", "meal_type": "Dinner,Lunch",
    })
    assert [r["title"] for r in res.json()] == ["Veg Curry"]

    res = client.get("/api/v1/recipes/search/ingredients", params={
        "ingredients": "potato", "difficulty": "Hard",
    })
    assert res.json() == []


def test_ingredient_search_excludes_allergens_for_signed_in_user(client, db_session, user):
    _set_prefs(db_session, user, allergies=["Peanuts", "None"])
    make_recipe(db_session, "Satay", ingredients=[("chicken", "1")], allergens="Peanuts, Soy")
    make_recipe(db_session, "Roast", ingredients=[("chicken", "1")], allergens=None)

    anonymous = client.get("/api/v1/recipes/search/ingredients", params={"ingredients": "chicken"})
    assert _titles(anonymous.json()) == ["Roast", "Satay"]

    signed_in = client.get(
        "/api/v1/recipes/search/ingredients",
        params={"ingredients": "chicken"},
        headers=auth_headers(user),
    )
    assert _titles(signed_in.json()) == ["Roast"]


def test_search_results_ranked_by_match(client, db_session):
    make_recipe(db_session, "Plain", ingredients=[("rice", "1 cup")], cuisine_type="Thai", rating=5.0)
    make_recipe(db_session, "Fit", ingredients=[("rice", "1 cup")], cuisine_type="Indian", rating=1.0)

    res = client.get("/api/v1/recipes/search/ingredients", params={
        "ingredients": "rice",
    })
    # same score, so the query order (rating desc) is kept
    assert [r["title"] for r in res.json()] == ["Plain", "Fit"]


def test_recommended_non_veg_admits_veg(client, db_session, user):
    make_recipe(db_session, "Paneer", dietary_preference="Veg")
    make_recipe(db_session, "Chicken", dietary_preference="Non-Veg")
    make_recipe(db_session, "Tofu", dietary_preference="Vegan")
    _set_prefs(db_session, user, diet_type="Non-Veg")

    res = client.get("/api/v1/recipes/recommended", headers=auth_headers(user))
    assert _titles(res.json()) == ["Chicken", "Paneer"]


def test_recommended_veg_admits_only_veg(client, db_session, user):
    make_recipe(db_session, "Paneer", dietary_preference="Veg")
    make_recipe(db_session, "Chicken", dietary_preference="Non-Veg")
    _set_prefs(db_session, user, diet_type="Veg")

    res = client.get("/api/v1/recipes/recommended", headers=auth_headers(user))
    assert _titles(res.json()) == ["Paneer"]


def test_recommended_combines_preferences(client, db_session, user):
    make_recipe(db_session, "Masala Dosa", dietary_preference="Veg", meal_type="Breakfast",
                cuisine_type="Indian", allergens=None)
    make_recipe(db_session, "Peanut Poha", dietary_preference="Veg", meal_type="Breakfast",
                cuisine_type="Indian", allergens="peanuts")
    make_recipe(db_session, "Dal", dietary_preference="Veg", meal_type="Dinner", cuisine_type="Indian")
    make_recipe(db_session, "Crepe", dietary_preference="Veg", meal_type="Breakfast", cuisine_type="French")
    _set_prefs(db_session, user, diet_type="Veg", meal_goal="Breakfast",
               cuisines=["Indian", "(None)"], allergies=["Peanuts"])

    res = client.get("/api/v1/recipes/recommended", headers=auth_headers(user))
    assert _titles(res.json()) == ["Masala Dosa"]


def test_recommended_without_preferences_falls_back_to_top_rated(client, db_session):
    for i in range(25):
        make_recipe(db_session, f"Recipe {i}", rating=float(i % 5))
    res = client.get("/api/v1/recipes/recommended")
    assert res.status_code == 200
    ratings = [r["rating"] for r in res.json()]
    assert len(ratings) == 20
    assert ratings == sorted(ratings, reverse=True)


def test_get_recipe_and_unknown_id(client, db_session):
    recipe = make_recipe(db_session, "Omelette")
    res = client.get(f"/api/v1/recipes/{recipe.id}")
    assert res.status_code == 200
    assert res.json()["ingredients"][0] == {"name": "egg", "quantity": "2"}
    assert res.json()["is_favorite"] is False

    assert client.get(f"/api/v1/recipes/{uuid.uuid4()}").status_code == 404


def test_favorites_toggle_and_list(client, db_session, user, headers):
    first = make_recipe(db_session, "First")
    second = make_recipe(db_session, "Second")

    res = client.post(f"/api/v1/recipes/{first.id}/favorite", headers=headers)
    assert res.json()["is_favorite"] is True
    client.post(f"/api/v1/recipes/{second.id}/favorite", headers=headers)

    res = client.get("/api/v1/recipes/favorites", headers=headers)
    assert _titles(res.json()) == ["First", "Second"]
    assert all(r["is_favorite"] for r in res.json())

    res = client.get(f"/api/v1/recipes/{first.id}", headers=headers)
    assert res.json()["is_favorite"] is True

    res = client.post(f"/api/v1/recipes/{first.id}/favorite", headers=headers)
    assert res.json()["is_favorite"] is False

    assert client.delete(f"/api/v1/recipes/{second.id}/favorite", headers=headers).status_code == 204
    assert client.delete(f"/api/v1/recipes/{second.id}/favorite", headers=headers).status_code == 204
    assert client.get("/api/v1/recipes/favorites", headers=headers).json() == []


def test_favorites_are_per_user(client, db_session, user, headers):
    other = make_user(db_session, email="other@example.com")
    recipe = make_recipe(db_session, "Shared")
    client.post(f"/api/v1/recipes/{recipe.id}/favorite", headers=headers)

    res = client.get("/api/v1/recipes/favorites", headers=auth_headers(other))
    assert res.json() == []


def test_favorite_requires_auth(client, db_session):
    recipe = make_recipe(db_session)
    assert client.post(f"/api/v1/recipes/{recipe.id}/favorite").status_code == 401


def test_list_search_treats_wildcards_literally(client, db_session):
    make_recipe(db_session, "50% Off Cake")
    make_recipe(db_session, "Apple Pie")

    res = client.get("/api/v1/recipes/", params={"search": "%"})
    assert _titles(res.json()["items"]) == ["50% Off Cake"]

    res = client.get("/api/v1/recipes/", params={"search": "_"})
    assert res.json()["total"] == 0
