"""
Static food category table.

Every category has a numeric key, an emoji, a name, the keywords used to
match upstream places to it, and the Google primary types it covers.
"""
from emoji_map.models.places_model import Category

CATEGORY_MAP: tuple[Category, ...] = (
    Category(key=1, emoji="🍕", name="pizza",
             keywords=["italian", "pepperoni", "cheese", "pasta", "calzone"],
             primaryTypes=["pizza_restaurant", "italian_restaurant"]),
    Category(key=2, emoji="🍺", name="beer",
             keywords=["brewery", "pub", "ale", "lager", "bar"],
             primaryTypes=["pub", "bar"]),
    Category(key=3, emoji="🍣", name="sushi",
             keywords=["japanese", "sashimi", "roll", "tempura", "miso"],
             primaryTypes=["sushi_restaurant", "japanese_restaurant"]),
    Category(key=4, emoji="☕", name="coffee",
             keywords=["cafe", "espresso", "latte", "pastry", "mocha"],
             primaryTypes=["coffee_shop", "cafe"]),
    Category(key=5, emoji="🍔", name="burger",
             keywords=["fries", "diner", "cheeseburger", "shake", "grill", "burger"],
             primaryTypes=["fast_food_restaurant", "hamburger_restaurant", "american_restaurant", "diner"]),
    Category(key=6, emoji="🌮", name="mexican",
             keywords=["taco", "burrito", "salsa", "guacamole", "enchilada"],
             primaryTypes=["mexican_restaurant"]),
    Category(key=7, emoji="🍜", name="ramen",
             keywords=["noodle", "broth", "japanese", "miso", "tonkotsu"],
             primaryTypes=["ramen_restaurant", "japanese_restaurant", "korean_restaurant",
                           "thai_restaurant", "vietnamese_restaurant"]),
    Category(key=8, emoji="🥗", name="salad",
             keywords=["healthy", "greens", "dressing", "veggie", "bowl"],
             primaryTypes=["vegan_restaurant", "vegetarian_restaurant"]),
    Category(key=9, emoji="🍦", name="dessert",
             keywords=["cake", "ice cream", "pastry", "sweet", "cookie", "crepe", "crepes"],
             primaryTypes=["dessert_restaurant", "ice_cream_shop"]),
    Category(key=10, emoji="🍷", name="wine",
             keywords=["vineyard", "bar", "red", "white", "tasting"],
             primaryTypes=["wine_bar"]),
    Category(key=11, emoji="🍲", name="asian_fusion",
             keywords=["thai", "vietnamese", "korean", "chinese", "noodle"],
             primaryTypes=["asian_restaurant", "thai_restaurant", "vietnamese_restaurant", "korean_restaurant"]),
    Category(key=12, emoji="🥪", name="sandwich",
             keywords=["deli", "sub", "bread", "panini", "bodega"],
             primaryTypes=["sandwich_shop", "deli"]),
    Category(key=13, emoji="🍝", name="italian",
             keywords=["pasta", "pizza", "risotto", "lasagna", "gelato"],
             primaryTypes=["italian_restaurant"]),
    Category(key=14, emoji="🥩", name="steak",
             keywords=["grill", "beef", "ribeye", "sirloin", "barbecue"],
             primaryTypes=["steak_house"]),
    Category(key=15, emoji="🍗", name="chicken",
             keywords=["fried", "grilled", "wings", "nuggets", "roast", "chick"],
             primaryTypes=["brazilian_restaurant", "fast_food_restaurant"]),
    Category(key=16, emoji="🍤", name="seafood",
             keywords=["shrimp", "fish", "crab", "lobster", "oyster"],
             primaryTypes=["seafood_restaurant", "spanish_restaurant"]),
    Category(key=17, emoji="🍛", name="indian",
             keywords=["curry", "naan", "tandoori", "biryani", "samosa"],
             primaryTypes=["indian_restaurant"]),
    Category(key=18, emoji="🥘", name="spanish",
             keywords=["paella", "tapas", "chorizo", "sangria", "churros"],
             primaryTypes=["spanish_restaurant"]),
    Category(key=19, emoji="🍱", name="japanese",
             keywords=["sushi", "ramen", "tempura", "teriyaki", "sake"],
             primaryTypes=["japanese_restaurant"]),
    Category(key=20, emoji="🥟", name="chinese",
             keywords=["dumpling", "noodle", "fried rice", "dim sum", "sweet and sour"],
             primaryTypes=["chinese_restaurant"]),
    Category(key=21, emoji="🧆", name="middle_eastern",
             keywords=["falafel", "hummus", "kebab", "shawarma", "baklava"],
             primaryTypes=["middle_eastern_restaurant", "lebanese_restaurant", "turkish_restaurant"]),
    Category(key=22, emoji="🥐", name="bakery",
             keywords=["bread", "pastry", "croissant", "cake", "muffin"],
             primaryTypes=["bakery", "french_restaurant"]),
    Category(key=23, emoji="🍨", name="ice_cream",
             keywords=["gelato", "sundae", "frozen yogurt", "sorbet", "cone"],
             primaryTypes=["ice_cream_shop"]),
    Category(key=24, emoji="🍹", name="cocktail",
             keywords=["bar", "mixology", "mojito", "martini", "margarita"],
             primaryTypes=["bar"]),
    Category(key=25, emoji="🍽️", name="place",
             keywords=["restaurant", "eatery", "diner", "cafe", "bistro"],
             primaryTypes=["restaurant", "food_court", "buffet_restaurant"]),
    Category(key=26, emoji="🥣", name="acai",
             keywords=["bowl", "berry", "healthy", "smoothie", "fruit"],
             primaryTypes=["acai_shop"]),
    Category(key=27, emoji="🍖", name="barbecue",
             keywords=["meat", "grill", "ribs", "smoke", "sauce"],
             primaryTypes=["barbecue_restaurant", "afghani_restaurant"]),
    Category(key=28, emoji="🥯", name="bagel",
             keywords=["bread", "cream cheese", "breakfast", "deli", "toasted"],
             primaryTypes=["bagel_shop"]),
    Category(key=29, emoji="🥞", name="breakfast",
             keywords=["pancakes", "eggs", "bacon", "waffles", "coffee"],
             primaryTypes=["breakfast_restaurant"]),
    Category(key=30, emoji="🍳", name="brunch",
             keywords=["eggs", "toast", "mimosa", "pancakes", "coffee"],
             primaryTypes=["brunch_restaurant"]),
    Category(key=31, emoji="🍬", name="candy",
             keywords=["sweets", "gummies", "chocolate", "lollipop", "sugar"],
             primaryTypes=["candy_store"]),
    Category(key=32, emoji="🐱", name="cat_cafe",
             keywords=["cats", "coffee", "tea", "pets", "relax"],
             primaryTypes=["cat_cafe"]),
    Category(key=33, emoji="🍫", name="chocolate",
             keywords=["cocoa", "truffles", "bars", "dessert", "sweet"],
             primaryTypes=["chocolate_shop", "chocolate_factory"]),
    Category(key=34, emoji="🍭", name="confectionery",
             keywords=["candy", "sweets", "lollipop", "fudge", "toffee", "yogurt"],
             primaryTypes=["confectionery"]),
    Category(key=35, emoji="🐶", name="dog_cafe",
             keywords=["dogs", "coffee", "tea", "pets", "relax"],
             primaryTypes=["dog_cafe"]),
    Category(key=36, emoji="🍩", name="donut",
             keywords=["doughnut", "glaze", "sprinkles", "pastry", "coffee"],
             primaryTypes=["donut_shop", "dessert_shop"]),
    Category(key=37, emoji="🍟", name="fast_food",
             keywords=["fries", "burger", "chicken", "drive-thru", "quick"],
             primaryTypes=["fast_food_restaurant"]),
    Category(key=38, emoji="🍴", name="fine_dining",
             keywords=["gourmet", "elegant", "chef", "tasting", "luxury", "fine dining"],
             primaryTypes=["fine_dining_restaurant"]),
    Category(key=39, emoji="🥙", name="mediterranean",
             keywords=["gyro", "hummus", "pita", "olives", "feta", "falafel", "kebab", "persian"],
             primaryTypes=["mediterranean_restaurant", "greek_restaurant", "lebanese_restaurant",
                           "turkish_restaurant"]),
    Category(key=40, emoji="🍚", name="asian_rice",
             keywords=["rice", "stir-fry", "curry", "sushi", "bowl"],
             primaryTypes=["indonesian_restaurant", "chinese_restaurant"]),
    Category(key=41, emoji="🥤", name="juice",
             keywords=["smoothie", "fruit", "healthy", "drink", "refresh", "tea", "tea house"],
             primaryTypes=["juice_shop", "tea_house"]),
    Category(key=42, emoji="🚚", name="delivery",
             keywords=["takeout", "food", "service", "fast", "home"],
             primaryTypes=["meal_delivery"]),
    Category(key=43, emoji="🥡", name="takeaway",
             keywords=["to-go", "food", "quick", "pickup", "box"],
             primaryTypes=["meal_takeaway"]),
    Category(key=44, emoji="🍵", name="tea",
             keywords=["herbal", "green", "black", "chai", "relax"],
             primaryTypes=["tea_house"]),
    Category(key=45, emoji="🥕", name="vegetarian",
             keywords=["veggie", "healthy", "greens", "plant-based", "salad"],
             primaryTypes=["vegetarian_restaurant"]),
)

CATEGORY_LOOKUP: dict[int, Category] = {c.key: c for c in CATEGORY_MAP}
CATEGORY_BY_NAME: dict[str, Category] = {c.name: c for c in CATEGORY_MAP}
VALID_KEYS: list[int] = [c.key for c in CATEGORY_MAP]


def get_category(key: int) -> Category | None:
    return CATEGORY_LOOKUP.get(key)


def get_valid_keys(keys) -> list[int]:
    """Known keys from ``keys`` in first-seen order, without repeats."""
    valid = []
    for key in keys:
        if key in CATEGORY_LOOKUP and key not in valid:
            valid.append(key)
    return valid
