from sqlalchemy import Column, Index, String, func

from neropage.platform.db.base import BaseModel


class User(BaseModel):
    __tablename__ = "users"
    username = Column(String(100), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    __table_args__ = (Index("uq_users_username_lower", func.lower(username), unique=True),)

    def __repr__(self):
        return f"<User(id={self.id}, username={self.username})>"
