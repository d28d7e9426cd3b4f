import enum
from sqlalchemy import Column, Integer, DateTime, ForeignKey, Enum, Index, JSON, text
from chatbot_blocks.database.database import Base
from chatbot_blocks.utils.time import utc_now


class BlockType(str, enum.Enum):
    CONTACT = "CONTACT"
    SCHEDULE = "SCHEDULE"
    DYNAMIC = "DYNAMIC"


class BlockEntity(Base):
    """
    Shared identity row joining a chatbot to one block instance.

    The payload tables (contact_blocks, schedule_blocks) reuse entity_id as
    their own primary key. DYNAMIC blocks have no payload table: they carry
    type_id and their field values in data. The partial unique index is the
    source of truth for the one-contact-per-chatbot rule.
    """
    __tablename__ = "block_entities"

    entity_id = Column(Integer, primary_key=True, autoincrement=True)
    chatbot_id = Column(Integer, ForeignKey("chatbots.id", ondelete="CASCADE"), nullable=False, index=True)
    block_type = Column(Enum(BlockType, name="block_type", native_enum=False, length=20), nullable=False)
    type_id = Column(Integer, ForeignKey("block_types.type_id"), nullable=True, index=True)
    data = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    __table_args__ = (
        Index(
            "uq_block_entities_contact_per_chatbot",
            "chatbot_id",
            unique=True,
            postgresql_where=text("block_type = 'CONTACT'"),
            sqlite_where=text("block_type = 'CONTACT'"),
        ),
    )

    def __repr__(self):
        return f"<BlockEntity(entity_id={self.entity_id}, block_type='{self.block_type}')>"
