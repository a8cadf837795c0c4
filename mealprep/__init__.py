"""Weekly meal planner: recipes, menu generation, grocery list and prep guide."""

__version__ = "1.0.0"
