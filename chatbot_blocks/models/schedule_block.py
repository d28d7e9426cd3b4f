from sqlalchemy import Column, Integer, String, Text, Time, ForeignKey
from sqlalchemy.orm import relationship
from chatbot_blocks.database.database import Base


class ScheduleBlock(Base):
    """
    One opening-hours slot. A chatbot may have any number of them.

    open_time < close_time is enforced by the service layer, not here.
    """
    __tablename__ = "schedule_blocks"

    entity_id = Column(Integer, ForeignKey("block_entities.entity_id", ondelete="CASCADE"), primary_key=True)
    title = Column(String(120), nullable=False)
    day_of_week = Column(String(20), nullable=False)
    open_time = Column(Time, nullable=False)
    close_time = Column(Time, nullable=False)
    notes = Column(Text, nullable=True)

    entity = relationship("BlockEntity", lazy="joined")

    @property
    def chatbot_id(self):
        return self.entity.chatbot_id

    def __repr__(self):
        return f"<ScheduleBlock(entity_id={self.entity_id}, day_of_week='{self.day_of_week}')>"
