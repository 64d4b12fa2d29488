from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from tenantscope.core.db import Base


class Tenant(Base):
    __tablename__ = "tenants"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)

    # Deletes are left to the database so ON DELETE RESTRICT applies.
    posts = relationship("Post", back_populates="tenant", passive_deletes="all")
