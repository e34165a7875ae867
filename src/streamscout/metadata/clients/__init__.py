"""Client implementations for the metadata APIs streamscout talks to."""

from streamscout.metadata.clients.tmdb import TMDBClient

__all__ = ["TMDBClient"]
