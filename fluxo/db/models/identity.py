from sqlalchemy import Column, String, DateTime, func
from fluxo.db.session import Base


class AuthIdentity(Base):
    """
    Sign-in identity: email/password or an external provider subject.

    Created before the matching User profile; an identity without a profile
    is an orphan left behind by a failed registration.
    """
    __tablename__ = "auth_identities"
    uid = Column(String(128), primary_key=True)
    email = Column(String(255), unique=True, index=True, nullable=True)
    hashed_password = Column(String(255), nullable=True)
    provider = Column(String(32), nullable=False, default="password")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
