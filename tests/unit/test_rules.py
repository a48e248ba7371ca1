"""Unit tests for allergen, seasonality, vegetarian and batch-cooking rules."""

from __future__ import annotations

from cookie_racho.models.recipe import ScrapedStep
from cookie_racho.normalize.allergens import ALLERGEN_RULES, detect_allergens
from cookie_racho.normalize.batch import infer_batch_friendly
from cookie_racho.normalize.seasonal import contains_non_vegetarian, infer_is_seasonal


class TestDetectAllergens:
    def test_rule_order_preserved(self) -> None:
        found = detect_allergens(["Sésame", "Farine", "Beurre", "Oeufs"])
        assert found == ["gluten", "lactose", "oeuf", "sesame"]

    def test_each_allergen_once(self) -> None:
        assert detect_allergens(["Lait", "Crème", "Fromage"]) == ["lactose"]

    def test_fish_and_shellfish(self) -> None:
        assert detect_allergens(["Filet de saumon", "Crevettes"]) == ["poisson", "crustaces"]

    def test_no_substring_match(self) -> None:
        assert detect_allergens(["Laitue", "Pâtisson"]) == []

    def test_empty(self) -> None:
        assert detect_allergens([]) == []

    def test_rule_table_is_immutable(self) -> None:
        assert isinstance(ALLERGEN_RULES, tuple)
        assert all(isinstance(keywords, tuple) for _, keywords in ALLERGEN_RULES)


class TestSeasonal:
    def test_seasonal_ingredient(self) -> None:
        assert infer_is_seasonal(["Farine", "Asperges vertes"])

    def test_not_seasonal(self) -> None:
        assert not infer_is_seasonal(["Farine", "Sucre"])


class TestNonVegetarian:
    def test_meat_detected(self) -> None:
        assert contains_non_vegetarian(["Farine", "Lardons fumés"])
        assert contains_non_vegetarian(["Bœuf haché"])

    def test_vegetable_only(self) -> None:
        assert not contains_non_vegetarian(["Courgettes", "Tomates"])

    def test_baking_tin_is_not_seafood(self) -> None:
        assert not contains_non_vegetarian(["Beurre pour le moule"])


class TestBatchFriendly:
    def test_keyword_in_description(self) -> None:
        assert infer_batch_friendly("Chili", "Se congèle très bien.", [])

    def test_keyword_in_step(self) -> None:
        steps = [ScrapedStep(description="Préparer à l’avance et réserver.")]
        assert infer_batch_friendly("Salade", "", steps)

    def test_no_keyword(self) -> None:
        steps = [ScrapedStep(description="Servir chaud.")]
        assert not infer_batch_friendly("Omelette", "Rapide.", steps)

    def test_empty(self) -> None:
        assert not infer_batch_friendly("", "", [])
