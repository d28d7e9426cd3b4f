from sqlalchemy import Column, Integer, String, Boolean, JSON
from chatbot_blocks.database.database import Base


class Tag(Base):
    """
    Semantic label attached to blocks.

    System tags are seeded by an external bootstrap script; tenants add
    custom ones through the tag API. Names are stored upper-case.
    """
    __tablename__ = "tags"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), unique=True, nullable=False, index=True)
    description = Column(String(255), nullable=True)
    category = Column(String(50), nullable=True)
    is_custom = Column(Boolean, nullable=False, default=False)
    synonyms = Column(JSON, nullable=True)

    def __repr__(self):
        return f"<Tag(name='{self.name}')>"
