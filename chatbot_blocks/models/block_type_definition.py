from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, JSON, UniqueConstraint
from chatbot_blocks.database.database import Base
from chatbot_blocks.utils.time import utc_now


class BlockTypeDefinition(Base):
    """
    User-defined block kind with a field schema.

    Rows with chatbot_id NULL and is_system set are global templates that
    every chatbot can read but none can change. Instances are BlockEntity
    rows of block_type DYNAMIC pointing here through type_id.
    """
    __tablename__ = "block_types"

    type_id = Column(Integer, primary_key=True, autoincrement=True)
    chatbot_id = Column(Integer, ForeignKey("chatbots.id", ondelete="CASCADE"), nullable=True, index=True)
    type_name = Column(String(100), nullable=False)
    description = Column(String(255), nullable=True)
    schema_definition = Column(JSON, nullable=False)
    is_system = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    __table_args__ = (
        UniqueConstraint("chatbot_id", "type_name", name="uq_block_types_chatbot_type_name"),
    )

    def __repr__(self):
        return f"<BlockTypeDefinition(type_id={self.type_id}, type_name='{self.type_name}')>"
