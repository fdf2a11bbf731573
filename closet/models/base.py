"""
Declarative base shared by all models.
"""
from closet.database import Base

__all__ = ["Base"]
