from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from chatbot_blocks.database.database import Base


class ContactBlock(Base):
    __tablename__ = "contact_blocks"

    entity_id = Column(Integer, ForeignKey("block_entities.entity_id", ondelete="CASCADE"), primary_key=True)
    org_name = Column(String(120), nullable=False)
    phone = Column(String(50), nullable=True)
    email = Column(String(190), nullable=True)
    address_text = Column(String(255), nullable=True)
    city = Column(String(120), nullable=True)
    country = Column(String(120), nullable=True)
    hours_text = Column(String(255), nullable=True)

    entity = relationship("BlockEntity", lazy="joined")

    @property
    def chatbot_id(self):
        return self.entity.chatbot_id

    def __repr__(self):
        return f"<ContactBlock(entity_id={self.entity_id}, org_name='{self.org_name}')>"
