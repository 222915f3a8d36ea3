from sqlalchemy import Column, String, BigInteger, Enum, Index
from fluxo.db.session import Base
import enum


class RequestStatusEnum(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class OrganizerRequest(Base):
    __tablename__ = "organizer_requests"
    id = Column(String(128), primary_key=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(32), nullable=True)
    status = Column(Enum(RequestStatusEnum), default=RequestStatusEnum.PENDING, nullable=False)
    # Milliseconds since the epoch
    timestamp = Column(BigInteger, nullable=False)
    # Linked profile; empty on requests created before accounts were linked
    uid = Column(String(128), nullable=True)

    __table_args__ = (
        Index('idx_org_request_status', 'status'),
        Index('idx_org_request_timestamp', 'timestamp'),
    )
