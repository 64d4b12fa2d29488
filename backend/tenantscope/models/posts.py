from sqlalchemy import Column, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from tenantscope.core.db import Base


class Post(Base):
    __tablename__ = "posts"
    __table_args__ = (
        Index("ix_posts_tenant_id", "tenant_id"),
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    content = Column(Text, nullable=True)
    tenant_id = Column(
        Integer,
        ForeignKey("tenants.id", ondelete="RESTRICT", onupdate="CASCADE"),
        nullable=False,
    )

    tenant = relationship("Tenant", back_populates="posts", lazy="selectin")
