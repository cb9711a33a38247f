from database.repositories.base import BaseRepository
from database.repositories.alert import AlertRepository

__all__ = [
    'BaseRepository',
    'AlertRepository',
]
