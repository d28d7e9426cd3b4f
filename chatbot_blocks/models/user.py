from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from chatbot_blocks.database.database import Base
from chatbot_blocks.utils.time import utc_now


class User(Base):
    """
    Account that owns chatbots.

    Credentials are issued and verified elsewhere; this service only needs
    the row so chatbots can reference their owner.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(190), unique=True, nullable=False, index=True)
    role_id = Column(Integer, ForeignKey("roles.id"), nullable=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    # Relationships
    role = relationship("Role", back_populates="users")
    chatbots = relationship("Chatbot", back_populates="owner", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User(email='{self.email}')>"
