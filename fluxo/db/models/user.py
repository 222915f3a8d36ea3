from sqlalchemy import Column, String, Text, Boolean, DateTime, func, Enum, Index
from fluxo.db.session import Base
from fluxo.core.roles import RoleEnum


class User(Base):
    """Profile record; credentials live in AuthIdentity under the same uid."""
    __tablename__ = "users"
    uid = Column(String(128), primary_key=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True, index=True)
    phone = Column(String(32), nullable=True)
    role = Column(Enum(RoleEnum), default=RoleEnum.USER, nullable=False)
    avatar = Column(String(1024), nullable=True)
    bio = Column(Text, nullable=True)
    blocked = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        Index('idx_user_role', 'role'),
    )
