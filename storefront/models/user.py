from sqlalchemy import Column, String, Boolean, DateTime

from storefront.database import Base


class User(Base):
    """
    Database model for auth service users.

    ``password`` always holds a bcrypt hash, never the plain password,
    and is never returned to clients.
    """
    __tablename__ = "users"

    id = Column(String(36), primary_key=True)
    username = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    email_verified = Column(Boolean, nullable=False, default=False)
    phone = Column(String(64), nullable=True)
    nickname = Column(String(255), nullable=False, default="")
    picture = Column(String(512), nullable=True)
    blocked = Column(Boolean, nullable=False, default=False)
    password = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
    last_login = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}')>"
