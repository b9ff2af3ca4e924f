"""
Base model class for all database models.

Provides common functionality for all models:
- Integer primary key (the store-assigned internal identifier)
- SQLAlchemy declarative base
- A readable repr
"""

from sqlalchemy import Column, Integer
from sqlalchemy.orm import declarative_base

# Create the declarative base for all models
Base = declarative_base()


class BaseModel(Base):
    """
    Abstract base model with common fields and methods.

    All models should inherit from this class to get:
    - id: Primary key assigned by the store on first save
    """

    __abstract__ = True

    id = Column(Integer, primary_key=True, autoincrement=True)

    def __repr__(self) -> str:
        """
        String representation of model instance.

        Returns:
            String like "ClassName(id=1)"
        """
        class_name = self.__class__.__name__
        if self.id is not None:
            return f"{class_name}(id={self.id})"
        return f"{class_name}()"
