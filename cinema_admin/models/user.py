from sqlalchemy import BigInteger, Boolean, ForeignKey, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from cinema_admin.db.base import Base, BigIntPK
from cinema_admin.models.mixins.timestamp import SoftDeleteMixin, TimestampMixin


PROTECTED_ROLES = ("admin", "user", "superadmin")


class Role(Base):
    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    users: Mapped[list["User"]] = relationship(back_populates="role")

    @property
    def is_protected(self) -> bool:
        return self.name in PROTECTED_ROLES


class User(Base, TimestampMixin, SoftDeleteMixin):
    # email is unique among users that have not been soft deleted
    __table_args__ = (
        Index(
            "uq_users_email_not_deleted",
            "email",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )
    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    role_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("roles.id"), index=True, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    role: Mapped["Role"] = relationship(back_populates="users")
