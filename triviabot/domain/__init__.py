"""Domain layer: models and interfaces shared by the game and its adapters."""
