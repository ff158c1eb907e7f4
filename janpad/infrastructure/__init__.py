"""Infrastructure adapters shared by the Janpad services."""

from .database import MongoClientFactory, MongoSettings

__all__ = ["MongoClientFactory", "MongoSettings"]
