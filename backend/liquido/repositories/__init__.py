"""
Repository Layer - Data Access

This layer handles all Realtime Database reads/writes and returns domain
models. Repositories hide the tree paths from business logic.
"""
from liquido.repositories.catalog_repository import CatalogRepository
from liquido.repositories.user_repository import UserRepository
from liquido.repositories.stats_repository import StatsRepository

__all__ = [
    'CatalogRepository',
    'UserRepository',
    'StatsRepository'
]
