from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from src.shortlinks.db.base import BaseModel


class Account(BaseModel):
    __tablename__ = "accounts"

    id = Column(String, primary_key=True)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)

    urls = relationship("UrlMapping", back_populates="owner")
