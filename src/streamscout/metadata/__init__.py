"""TMDB access layer: settings, response models and the API client."""
