from sqlalchemy import Column, Integer, String, Text, Boolean, TIMESTAMP
from sqlalchemy.sql import func, expression
from .base import Base


class CrisisContact(Base):
    __tablename__ = "crisis_contacts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    country_code = Column(String(10), nullable=False, index=True)
    country_name = Column(String(100), nullable=False)
    phone_number = Column(String(50), nullable=True)
    sms_number = Column(String(50), nullable=True)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, server_default=expression.true())
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "country_code": self.country_code,
            "country_name": self.country_name,
            "phone_number": self.phone_number,
            "sms_number": self.sms_number,
            "description": self.description,
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
