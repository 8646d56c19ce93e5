from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from newsdesk.db.base_class import Base
from newsdesk.models.news import news_tag


class Tag(Base):
    __tablename__ = "tags"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False, unique=True)
    note = Column(String(1000), nullable=True)

    # Relationships
    articles = relationship("NewsArticle", secondary=news_tag, back_populates="tags")
