from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint
from chatbot_blocks.database.database import Base


class BlockEntityTag(Base):
    __tablename__ = "block_entity_tags"

    id = Column(Integer, primary_key=True, autoincrement=True)
    entity_id = Column(Integer, ForeignKey("block_entities.entity_id", ondelete="CASCADE"), nullable=False, index=True)
    tag_id = Column(Integer, ForeignKey("tags.id"), nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint("entity_id", "tag_id", name="uq_block_entity_tags_entity_tag"),
    )
