from datetime import datetime

from sqlalchemy import DateTime, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from config import DEFAULT_USER_ID


class Base(DeclarativeBase):
    pass


class Favorite(Base):
    """Товар, отмеченный пользователем как избранный"""
    __tablename__ = "favorites"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        "userId", String(255), nullable=False, server_default=DEFAULT_USER_ID
    )
    product_id: Mapped[str] = mapped_column("productId", String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        "createdAt", DateTime(timezone=True), server_default=func.now()
    )

    # Один пользователь не может добавить один товар дважды
    __table_args__ = (
        UniqueConstraint("userId", "productId", name="uix_favorites_user_product"),
    )

    def __repr__(self) -> str:
        return f"<Favorite user_id={self.user_id!r} product_id={self.product_id!r}>"
