"""Game model."""

from sqlalchemy import JSON, Column, Index, String
from sqlalchemy.dialects.postgresql import JSONB

from src.database import Base
from src.models.user import IdentityType

# None is stored as SQL NULL rather than the JSON literal null
GameData = JSON(none_as_null=True).with_variant(JSONB(none_as_null=True), "postgresql")


class Game(Base):
    """Named game with a free-form JSON payload."""

    __tablename__ = "games"
    __table_args__ = (
        Index("index_games_on_name", "name", unique=True),
        {"sqlite_autoincrement": True},
    )

    id = Column(IdentityType, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    data = Column(GameData, nullable=True)

    def __repr__(self) -> str:
        return f"<Game id={self.id} name={self.name!r}>"
