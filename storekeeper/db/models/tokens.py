from sqlalchemy import Column, Integer, String, DateTime, Text, Index, CheckConstraint
from .base import Base, now_utc


class AccessToken(Base):
    __tablename__ = 'access_tokens'

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Owner: (realm, principal_id). No FK because the two realms live in different tables.
    realm = Column(String(16), nullable=False)
    principal_id = Column(Integer, nullable=False)

    # Token identity and secret hash (never store raw secret)
    token_id = Column(String(64), nullable=False, unique=True)
    token_hash = Column(Text, nullable=False)
    name = Column(String(100), nullable=False)

    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    last_used_at = Column(DateTime(timezone=True), nullable=True)
    expires_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index('idx_access_tokens_principal', 'realm', 'principal_id'),
        CheckConstraint("realm in ('admin','user')", name='ck_access_tokens_realm'),
    )
