from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from chatbot_blocks.database.database import Base
from chatbot_blocks.utils.time import utc_now


class Chatbot(Base):
    """
    Chatbot owned by exactly one user.

    Its id is the join point for every attached block. display_name and
    domain are not unique across tenants.
    """
    __tablename__ = "chatbots"

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    display_name = Column(String(100), nullable=False)
    domain = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    owner = relationship("User", back_populates="chatbots")

    def __repr__(self):
        return f"<Chatbot(id={self.id}, domain='{self.domain}')>"
