"""User model."""

from sqlalchemy import BigInteger, Column, Index, Integer, String

from src.database import Base

# BIGSERIAL on PostgreSQL; SQLite only autoincrements a plain INTEGER key
IdentityType = BigInteger().with_variant(Integer(), "sqlite")


class User(Base):
    """Player account identified by a unique username."""

    __tablename__ = "users"
    __table_args__ = (
        Index("index_users_on_username", "username", unique=True),
        {"sqlite_autoincrement": True},
    )

    id = Column(IdentityType, primary_key=True, autoincrement=True)
    username = Column(String, nullable=False)
    hashed_password = Column(String, nullable=False)

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r}>"
