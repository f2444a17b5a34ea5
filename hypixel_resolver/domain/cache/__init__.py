"""
Cache Domain Module

Domain-Driven Design implementation for cache management.
Contains value objects, entities, and the repository interface.
"""
