from sqlalchemy import Column, Integer, String

from wiremill.db.base import Base


class DocumentSequence(Base):
    __tablename__ = "document_sequences"

    prefix = Column(String(16), primary_key=True)
    last_value = Column(Integer, nullable=False, default=0)
