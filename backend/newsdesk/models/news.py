import datetime
import enum

from sqlalchemy import Column, Integer, String, Text, DateTime, SmallInteger, ForeignKey, Table
from sqlalchemy.orm import relationship

from newsdesk.db.base_class import Base


# Association table for NewsArticle and Tag
news_tag = Table(
    "news_tag",
    Base.metadata,
    Column("news_article_id", Integer, ForeignKey("news_articles.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.id"), primary_key=True)
)


class NewsStatus(enum.IntEnum):
    INACTIVE = 0
    ACTIVE = 1


class NewsArticle(Base):
    __tablename__ = "news_articles"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(400), nullable=False)
    headline = Column(String(150), nullable=True)
    content = Column(Text, nullable=False)
    source = Column(String(400), nullable=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    status = Column(SmallInteger, nullable=False, default=NewsStatus.ACTIVE)
    created_by_id = Column(Integer, ForeignKey("system_accounts.id"), nullable=False, index=True)
    updated_by_id = Column(Integer, ForeignKey("system_accounts.id"), nullable=True)
    created_date = Column(DateTime, nullable=False, default=datetime.datetime.utcnow, index=True)
    modified_date = Column(DateTime, nullable=True, onupdate=datetime.datetime.utcnow)

    # Relationships
    category = relationship("Category", back_populates="articles")
    created_by = relationship(
        "SystemAccount", back_populates="articles_created", foreign_keys=[created_by_id]
    )
    updated_by = relationship(
        "SystemAccount", back_populates="articles_updated", foreign_keys=[updated_by_id]
    )
    tags = relationship(
        "Tag", secondary=news_tag, back_populates="articles", order_by="Tag.id"
    )
