"""Constants for shopping-list aggregation.

Contains:
- The ordered supermarket section table used by the classifier
- The closed set of quantity/unit tokens stripped by the normalizer
"""

from __future__ import annotations

from typing import Final


DEFAULT_SECTION: Final[str] = "Other"

UNKNOWN_RECIPE_NAME: Final[str] = "Unknown recipe"


# =============================================================================
# Section Table
# =============================================================================
# Ordered: the first section with a matching term wins. Frozen comes first
# so "frozen peas" is not filed under Produce; spices precede produce so
# "garlic powder" is not filed as fresh garlic.

SECTION_TERMS: Final[tuple[tuple[str, tuple[str, ...]], ...]] = (
    (
        "Frozen",
        ("frozen", "ice cream", "sorbet", "puff pastry"),
    ),
    (
        "Spices & Seasonings",
        (
            "salt",
            "pepper flakes",
            "black pepper",
            "white pepper",
            "peppercorn",
            "paprika",
            "cumin",
            "cinnamon",
            "nutmeg",
            "oregano",
            "turmeric",
            "curry powder",
            "chili powder",
            "garlic powder",
            "onion powder",
            "cayenne",
            "bay leaf",
            "bay leaves",
            "dried thyme",
            "dried basil",
            "dried parsley",
            "allspice",
            "ground clove",
            "whole clove",
            "cardamom",
            "coriander seed",
            "garam masala",
            "italian seasoning",
            "seasoning",
            "vanilla extract",
            "vanilla",
        ),
    ),
    (
        "Pantry",
        (
            "flour",
            "sugar",
            "brown sugar",
            "baking powder",
            "baking soda",
            "yeast",
            "cornstarch",
            "rice",
            "pasta",
            "spaghetti",
            "noodle",
            "oats",
            "quinoa",
            "lentil",
            "chickpea",
            "bean",
            "olive oil",
            "vegetable oil",
            "oil",
            "vinegar",
            "soy sauce",
            "honey",
            "maple syrup",
            "syrup",
            "broth",
            "stock",
            "tomato paste",
            "tomato sauce",
            "canned tomatoes",
            "peanut butter",
            "mustard",
            "ketchup",
            "mayonnaise",
            "chocolate",
            "cocoa",
            "breadcrumb",
            "nut",
            "almond",
            "walnut",
            "pecan",
            "raisin",
        ),
    ),
    (
        "Meat & Seafood",
        (
            "chicken",
            "beef",
            "pork",
            "bacon",
            "sausage",
            "ham",
            "turkey",
            "lamb",
            "ground meat",
            "steak",
            "fish",
            "salmon",
            "tuna",
            "cod",
            "shrimp",
            "prawn",
            "crab",
            "scallop",
            "anchovy",
        ),
    ),
    (
        "Dairy",
        (
            "milk",
            "butter",
            "cheese",
            "parmesan",
            "mozzarella",
            "cheddar",
            "feta",
            "cream",
            "heavy cream",
            "sour cream",
            "cream cheese",
            "yogurt",
            "buttermilk",
            "egg",
            "ricotta",
        ),
    ),
    (
        "Produce",
        (
            "onion",
            "shallot",
            "garlic",
            "ginger",
            "tomato",
            "potato",
            "sweet potato",
            "carrot",
            "celery",
            "bell pepper",
            "jalapeno",
            "chili",
            "lettuce",
            "spinach",
            "kale",
            "cabbage",
            "broccoli",
            "cauliflower",
            "zucchini",
            "eggplant",
            "cucumber",
            "mushroom",
            "pea",
            "corn",
            "avocado",
            "lemon",
            "lime",
            "orange",
            "apple",
            "banana",
            "berry",
            "strawberry",
            "blueberry",
            "scallion",
            "green onion",
            "leek",
            "basil",
            "parsley",
            "cilantro",
            "mint",
            "thyme",
            "rosemary",
            "dill",
        ),
    ),
    (
        "Bakery",
        (
            "bread",
            "baguette",
            "bun",
            "roll",
            "tortilla",
            "pita",
            "croissant",
            "bagel",
        ),
    ),
    (
        "Beverages",
        ("wine", "beer", "juice", "coffee", "tea", "water", "soda"),
    ),
)


# =============================================================================
# Normalizer Tokens
# =============================================================================

UNIT_TOKENS: Final[frozenset[str]] = frozenset(
    {
        "cup",
        "cups",
        "c",
        "tablespoon",
        "tablespoons",
        "tbsp",
        "tbs",
        "tbl",
        "teaspoon",
        "teaspoons",
        "tsp",
        "ounce",
        "ounces",
        "oz",
        "fl",
        "pound",
        "pounds",
        "lb",
        "lbs",
        "gram",
        "grams",
        "g",
        "kilogram",
        "kilograms",
        "kg",
        "milliliter",
        "milliliters",
        "millilitre",
        "millilitres",
        "ml",
        "liter",
        "liters",
        "litre",
        "litres",
        "l",
        "pinch",
        "pinches",
        "dash",
        "dashes",
        "clove",
        "cloves",
        "can",
        "cans",
        "package",
        "packages",
        "pkg",
        "slice",
        "slices",
        "stick",
        "sticks",
        "piece",
        "pieces",
        "bunch",
        "bunches",
        "handful",
        "handfuls",
        "sprig",
        "sprigs",
        "quart",
        "quarts",
        "qt",
        "pint",
        "pints",
        "pt",
        "large",
        "medium",
        "small",
    }
)

ARTICLE_TOKENS: Final[frozenset[str]] = frozenset({"a", "an"})

CONNECTOR_TOKENS: Final[frozenset[str]] = frozenset({"of"})

UNICODE_FRACTIONS: Final[str] = "¼½¾⅐⅑⅒⅓⅔⅕⅖⅗⅘⅙⅚⅛⅜⅝⅞"
