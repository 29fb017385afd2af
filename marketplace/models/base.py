# File: marketplace/models/base.py

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    User, Offer and Bid register their tables on ``Base.metadata``.
    """
    pass
