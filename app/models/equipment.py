import datetime
import uuid

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, String, text
from sqlalchemy.orm import relationship
from app.core.database import Base

class EquipmentSetup(Base):
    __tablename__ = "equipment_setups"
    __table_args__ = (
        # At most one current setup per user
        Index(
            "uq_equipment_setups_current_per_user",
            "user_id",
            unique=True,
            sqlite_where=text("is_current = 1"),
            postgresql_where=text("is_current"),
        ),
    )

    id = Column(String, primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    forehand_rubber = Column(String, nullable=True)
    backhand_rubber = Column(String, nullable=True)
    blade = Column(String, nullable=True)
    is_current = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)

    user = relationship("User", back_populates="equipment_setups")
