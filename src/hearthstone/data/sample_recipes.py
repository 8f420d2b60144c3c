"""
Bundled sample recipes.

Used as the default catalog and as the last-resort fallback when the
remote catalog and its cache are both unavailable.

Breakdown:
- Breakfast (2): Avocado Toast, Shakshuka
- Lunch (2): Caesar Wrap, Pad Thai
- Dinner (4): Tikka Masala, Carbonara, Stir-Fry, Beef Bourguignon
"""

from hearthstone.models import Recipe, RecipeIngredient, RecipeStep


def _ing(name: str, amount: float, unit: str, optional: bool = False) -> RecipeIngredient:
    return RecipeIngredient(name=name, amount=amount, unit=unit, optional=optional)


def _steps(*steps: tuple[str, int | None, str | None]) -> list[RecipeStep]:
    return [
        RecipeStep(order=i, instruction=text, duration=duration, tip=tip)
        for i, (text, duration, tip) in enumerate(steps, 1)
    ]


# =============================================================================
# Breakfast
# =============================================================================

AVOCADO_TOAST = Recipe(
    id="recipe_avocado_toast",
    name="Avocado Toast with Poached Eggs",
    description="Creamy avocado on crispy sourdough topped with perfectly poached eggs",
    prep_time=5,
    cook_time=10,
    servings=2,
    difficulty="easy",
    cuisine="American",
    ingredients=[
        _ing("sourdough bread", 2, "slices"),
        _ing("ripe avocado", 1, "large"),
        _ing("eggs", 2, "large"),
        _ing("white vinegar", 1, "tbsp"),
        _ing("lime juice", 1, "tsp"),
        _ing("red pepper flakes", 0.5, "tsp", optional=True),
        _ing("salt", 0.5, "tsp"),
        _ing("black pepper", 0.25, "tsp"),
        _ing("cherry tomatoes", 4, "pieces", optional=True),
    ],
    steps=_steps(
        ("Bring a pot of water to a gentle simmer. Add white vinegar.", 3,
         "The water should have small bubbles, not a rolling boil."),
        ("Toast the sourdough bread until golden and crispy.", 3, None),
        ("Mash avocado with lime juice, salt, and pepper in a bowl.", 2,
         "Leave some chunks for texture if you prefer."),
        ("Create a gentle whirlpool in the water and slide in the eggs one at a time. "
         "Poach for 3 minutes for runny yolks.", 3,
         "Crack eggs into a small bowl first for easier sliding."),
        ("Spread mashed avocado on toast, top with poached eggs, and garnish with "
         "red pepper flakes and halved cherry tomatoes.", 2, None),
    ),
    tags=["breakfast", "healthy", "quick", "vegetarian"],
    estimated_cost=6,
)

SHAKSHUKA = Recipe(
    id="recipe_shakshuka",
    name="Shakshuka",
    description="North African poached eggs in spiced tomato sauce with peppers and onions",
    prep_time=10,
    cook_time=25,
    servings=4,
    difficulty="easy",
    cuisine="Mediterranean",
    ingredients=[
        _ing("eggs", 6, "large"),
        _ing("canned crushed tomatoes", 800, "g"),
        _ing("red bell pepper", 1, "large"),
        _ing("onion", 1, "medium"),
        _ing("garlic cloves", 4, "cloves"),
        _ing("cumin", 1, "tsp"),
        _ing("paprika", 1, "tsp"),
        _ing("cayenne pepper", 0.25, "tsp", optional=True),
        _ing("olive oil", 2, "tbsp"),
        _ing("feta cheese", 50, "g", optional=True),
        _ing("fresh parsley", 2, "tbsp", optional=True),
        _ing("crusty bread", 4, "slices"),
    ],
    steps=_steps(
        ("Heat olive oil in a large skillet over medium heat. Add diced onion and "
         "bell pepper, cook until softened.", 7, None),
        ("Add minced garlic, cumin, paprika, and cayenne. Stir for 1 minute until fragrant.", 1,
         "Toast the spices briefly to release their full flavor."),
        ("Pour in crushed tomatoes, season with salt and pepper. Simmer for 10 minutes "
         "until slightly thickened.", 10, None),
        ("Make 6 wells in the sauce and crack an egg into each well. Cover and cook "
         "until whites are set but yolks are still runny.", 6,
         "For firmer yolks, cook 1-2 minutes longer."),
        ("Crumble feta on top, garnish with fresh parsley, and serve with crusty bread.", 2,
         "Serve straight from the pan."),
    ),
    tags=["breakfast", "mediterranean", "eggs", "vegetarian", "one-pan"],
    estimated_cost=9,
)


# =============================================================================
# Lunch
# =============================================================================

CHICKEN_CAESAR_WRAP = Recipe(
    id="recipe_caesar_wrap",
    name="Grilled Chicken Caesar Wrap",
    description="Classic Caesar salad wrapped in a warm tortilla with grilled chicken",
    prep_time=15,
    cook_time=12,
    servings=2,
    difficulty="easy",
    cuisine="American",
    ingredients=[
        _ing("chicken breast", 250, "g"),
        _ing("large flour tortillas", 2, "pieces"),
        _ing("romaine lettuce", 4, "cups"),
        _ing("parmesan cheese", 50, "g"),
        _ing("Caesar dressing", 4, "tbsp"),
        _ing("olive oil", 1, "tbsp"),
        _ing("garlic powder", 0.5, "tsp"),
        _ing("black pepper", 0.5, "tsp"),
        _ing("croutons", 0.5, "cup", optional=True),
    ],
    steps=_steps(
        ("Season chicken breast with olive oil, garlic powder, salt, and pepper.", 2,
         "Pound the chicken to even thickness for more even cooking."),
        ("Grill or pan-sear chicken over medium-high heat for 5-6 minutes per side "
         "until cooked through. Let rest for 3 minutes.", 12,
         "Internal temperature should reach 165F/74C."),
        ("Slice chicken into strips. Chop romaine lettuce and toss with Caesar "
         "dressing and shaved parmesan.", 3, None),
        ("Warm tortillas in a dry pan for 30 seconds each side.", 2,
         "Warm tortillas are more pliable and won't crack when rolled."),
        ("Layer dressed salad and chicken strips on each tortilla. Add crushed "
         "croutons. Fold in sides and roll tightly.", 2, None),
    ),
    tags=["lunch", "chicken", "wrap", "quick", "american"],
    estimated_cost=8,
)

PAD_THAI = Recipe(
    id="recipe_pad_thai",
    name="Pad Thai",
    description="Classic Thai stir-fried rice noodles with shrimp, tofu, and tamarind sauce",
    prep_time=20,
    cook_time=15,
    servings=4,
    difficulty="medium",
    cuisine="Thai",
    ingredients=[
        _ing("rice noodles", 250, "g"),
        _ing("shrimp", 200, "g"),
        _ing("firm tofu", 150, "g"),
        _ing("eggs", 2, "large"),
        _ing("tamarind paste", 3, "tbsp"),
        _ing("fish sauce", 3, "tbsp"),
        _ing("palm sugar", 2, "tbsp"),
        _ing("vegetable oil", 3, "tbsp"),
        _ing("garlic cloves", 3, "cloves"),
        _ing("bean sprouts", 150, "g"),
        _ing("green onions", 3, "stalks"),
        _ing("roasted peanuts", 50, "g"),
        _ing("lime", 1, "piece"),
        _ing("dried shrimp", 2, "tbsp", optional=True),
    ],
    steps=_steps(
        ("Soak rice noodles in warm water until pliable but not soft. Drain well.", 5,
         "Do not over-soak or noodles will become mushy when cooked."),
        ("Mix tamarind paste, fish sauce, and palm sugar in a small bowl to make the sauce.", 2,
         "Adjust sweetness and saltiness to taste."),
        ("Heat oil in a wok over high heat. Fry cubed tofu until golden, then add "
         "shrimp and cook until pink. Set aside.", 5, None),
        ("Fry minced garlic until fragrant, push to the side, then scramble the eggs.", 2, None),
        ("Add drained noodles and sauce to the wok. Toss until noodles are coated and softened.", 3,
         "Add a splash of water if noodles stick."),
        ("Return tofu and shrimp to the wok. Add bean sprouts and green onions. "
         "Toss briefly to combine.", 2, None),
        ("Serve topped with crushed peanuts, extra bean sprouts, and lime wedges.", 1, None),
    ),
    tags=["lunch", "thai", "noodles", "shrimp", "wok"],
    estimated_cost=14,
)


# =============================================================================
# Dinner
# =============================================================================

CHICKEN_TIKKA_MASALA = Recipe(
    id="demo_recipe_tikka_masala",
    name="Chicken Tikka Masala",
    description="Classic Indian curry with tender chicken in creamy tomato sauce",
    prep_time=15,
    cook_time=25,
    servings=4,
    difficulty="medium",
    cuisine="Indian",
    ingredients=[
        _ing("chicken breast", 500, "g"),
        _ing("plain yogurt", 150, "g"),
        _ing("garam masala", 1, "tbsp"),
        _ing("turmeric powder", 1, "tsp"),
        _ing("cumin powder", 1, "tsp"),
        _ing("paprika", 1, "tsp"),
        _ing("salt", 1, "tsp"),
        _ing("lemon juice", 2, "tbsp"),
        _ing("butter", 30, "g"),
        _ing("olive oil", 1, "tbsp"),
        _ing("onion", 1, "large"),
        _ing("garlic cloves", 4, "cloves"),
        _ing("fresh ginger", 2, "cm"),
        _ing("tomato passata", 400, "g"),
        _ing("heavy cream", 200, "ml"),
        _ing("fresh coriander", 1, "handful", optional=True),
    ],
    steps=_steps(
        ("Cut chicken into bite-sized pieces. Mix yogurt, garam masala, turmeric, "
         "cumin, paprika, salt, and lemon juice.", 5,
         "Marinate for at least 30 minutes for best flavor."),
        ("Add chicken to marinade, ensuring all pieces are well coated. Cover and refrigerate.", 5, None),
        ("Cook marinated chicken in a hot pan until charred and cooked through. Set aside.", 10,
         "Work in batches to avoid overcrowding."),
        ("In the same pan, melt butter and cook finely diced onion until golden.", 5, None),
        ("Add minced garlic and grated ginger, stir for 1 minute until fragrant.", 1,
         "Be careful not to burn the garlic."),
        ("Pour in tomato passata and stir well. Simmer for 5 minutes.", 5, None),
        ("Reduce heat, stir in heavy cream, and return the chicken. Simmer 5 more minutes.", 5,
         "Taste and adjust salt and spices if needed."),
        ("Garnish with fresh coriander and serve hot with basmati rice or naan.", 2, None),
    ),
    tags=["curry", "chicken", "indian", "comfort-food", "date-night", "dinner"],
    estimated_cost=12,
)

PASTA_CARBONARA = Recipe(
    id="demo_recipe_carbonara",
    name="Spaghetti Carbonara",
    description="Creamy Italian pasta with crispy pancetta and parmesan",
    prep_time=10,
    cook_time=20,
    servings=2,
    difficulty="medium",
    cuisine="Italian",
    ingredients=[
        _ing("spaghetti", 200, "g"),
        _ing("pancetta or guanciale", 150, "g"),
        _ing("egg yolks", 4, "large"),
        _ing("parmesan cheese", 100, "g"),
        _ing("black pepper", 2, "tsp"),
        _ing("salt", 1, "tsp"),
        _ing("garlic clove", 1, "clove", optional=True),
    ],
    steps=_steps(
        ("Cook spaghetti in salted boiling water until al dente.", 10,
         "Reserve 1 cup of pasta water before draining!"),
        ("Cut pancetta into cubes and fry in a cold pan, increasing heat until crispy.", 8, None),
        ("Whisk egg yolks with grated parmesan and plenty of black pepper.", 2, None),
        ("Remove pan from heat. Add drained pasta to the pancetta and toss.", 1,
         "The pan must be OFF the heat for the next step."),
        ("Pour egg mixture over pasta, tossing constantly. Loosen with pasta water.", 2, None),
        ("Serve immediately with extra parmesan and black pepper.", 1, None),
    ),
    tags=["pasta", "italian", "quick", "comfort-food", "date-night", "dinner"],
    estimated_cost=8,
)

STIR_FRY_VEGETABLES = Recipe(
    id="demo_recipe_stirfry",
    name="Garlic Ginger Stir-Fry",
    description="Quick and healthy vegetable stir-fry with tofu",
    prep_time=15,
    cook_time=10,
    servings=2,
    difficulty="easy",
    cuisine="Chinese",
    ingredients=[
        _ing("firm tofu", 400, "g"),
        _ing("broccoli florets", 200, "g"),
        _ing("bell peppers", 2, "medium"),
        _ing("snap peas", 150, "g"),
        _ing("garlic cloves", 4, "cloves"),
        _ing("fresh ginger", 3, "cm"),
        _ing("soy sauce", 3, "tbsp"),
        _ing("sesame oil", 2, "tbsp"),
        _ing("vegetable oil", 2, "tbsp"),
        _ing("cornstarch", 1, "tbsp"),
        _ing("sesame seeds", 1, "tbsp", optional=True),
    ],
    steps=_steps(
        ("Press tofu, then cut into cubes. Toss with cornstarch and a pinch of salt.", 3,
         "Pressing removes excess water for crispier tofu."),
        ("Fry tofu in hot oil until golden on all sides, then set aside.", 5, None),
        ("Stir-fry garlic and ginger for 30 seconds until fragrant.", 1, None),
        ("Add broccoli and bell peppers. Stir-fry for 2-3 minutes.", 3, None),
        ("Add snap peas and tofu. Pour in soy sauce and sesame oil. Toss together.", 2, None),
        ("Serve over rice, garnished with sesame seeds.", None, None),
    ),
    tags=["vegetarian", "healthy", "quick", "asian", "weeknight", "dinner"],
    estimated_cost=10,
)

BEEF_BOURGUIGNON = Recipe(
    id="recipe_beef_bourguignon",
    name="Beef Bourguignon",
    description="Classic French braised beef stew with red wine, mushrooms, and pearl onions",
    prep_time=30,
    cook_time=180,
    servings=6,
    difficulty="hard",
    cuisine="French",
    ingredients=[
        _ing("beef chuck", 1000, "g"),
        _ing("bacon lardons", 200, "g"),
        _ing("red burgundy wine", 750, "ml"),
        _ing("beef stock", 500, "ml"),
        _ing("pearl onions", 250, "g"),
        _ing("cremini mushrooms", 250, "g"),
        _ing("carrots", 3, "medium"),
        _ing("celery stalks", 2, "pieces"),
        _ing("garlic cloves", 4, "cloves"),
        _ing("tomato paste", 2, "tbsp"),
        _ing("all-purpose flour", 3, "tbsp"),
        _ing("butter", 45, "g"),
        _ing("thyme sprigs", 4, "pieces"),
        _ing("bay leaves", 2, "pieces"),
        _ing("fresh parsley", 0.25, "cup", optional=True),
    ],
    steps=_steps(
        ("Cut beef into 2-inch cubes. Pat dry and season generously.", 5,
         "Dry beef will brown better."),
        ("Cook bacon in a Dutch oven until crispy. Remove, leaving the fat.", 8, None),
        ("Brown beef cubes on all sides in the bacon fat, in batches.", 15,
         "Don't overcrowd - this is crucial for proper browning."),
        ("Add diced carrots, celery, and minced garlic. Cook until slightly softened.", 5, None),
        ("Sprinkle flour over vegetables, stir, then add tomato paste.", 2, None),
        ("Pour in wine and stock, scraping up browned bits. Return beef and bacon. "
         "Add thyme and bay leaves.", 3, None),
        ("Cover and braise in a 325F/160C oven until the beef is tender.", 150,
         "Check occasionally and add more stock if needed."),
        ("Saute mushrooms in butter until golden, then brown the pearl onions.", 10, None),
        ("Stir mushrooms and onions into the stew. Garnish with parsley and serve.", 5, None),
    ),
    tags=["french", "beef", "stew", "wine", "comfort-food", "dinner"],
    estimated_cost=35,
)


SAMPLE_RECIPES: list[Recipe] = [
    # Breakfast
    AVOCADO_TOAST,
    SHAKSHUKA,
    # Lunch
    CHICKEN_CAESAR_WRAP,
    PAD_THAI,
    # Dinner
    CHICKEN_TIKKA_MASALA,
    PASTA_CARBONARA,
    STIR_FRY_VEGETABLES,
    BEEF_BOURGUIGNON,
]
