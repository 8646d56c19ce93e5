import datetime
import enum

from sqlalchemy import Column, Integer, String, DateTime, SmallInteger
from sqlalchemy.orm import relationship

from newsdesk.db.base_class import Base


class AccountRole(enum.IntEnum):
    ADMIN = 1
    STAFF = 2
    LECTURER = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()


class SystemAccount(Base):
    __tablename__ = "system_accounts"
    # never exposed as a sort key
    unsortable_columns = ("hashed_password",)

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(256), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    role = Column(SmallInteger, nullable=False, default=AccountRole.LECTURER)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)

    # Relationships
    articles_created = relationship(
        "NewsArticle", back_populates="created_by", foreign_keys="NewsArticle.created_by_id"
    )
    articles_updated = relationship(
        "NewsArticle", back_populates="updated_by", foreign_keys="NewsArticle.updated_by_id"
    )

    @property
    def account_role(self) -> AccountRole:
        return AccountRole(self.role)
