from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from app.db.session import Base

class Label(Base):
    __tablename__ = "labels"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, unique=True)
    color = Column(String, nullable=False)

    # Relationships
    tasks = relationship(
        "TaskLabel",
        back_populates="label",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
