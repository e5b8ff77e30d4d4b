"""
Member model: a person who may hold seat bookings.
"""

import secrets
import string

from sqlalchemy import Column, Float, String

from studyhall.db.base import Base, TimestampMixin

_ID_ALPHABET = string.ascii_uppercase + string.digits


def new_member_id() -> str:
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))


class Member(Base, TimestampMixin):
    __tablename__ = "members"

    id = Column(String(32), primary_key=True, default=new_member_id)
    name = Column(String(255), nullable=False, index=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    default_price = Column(Float, nullable=True)

    def __repr__(self) -> str:
        return f"<Member(id={self.id}, name={self.name})>"
