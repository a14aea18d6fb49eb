from enum import IntEnum

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text, text

from store_api.database import Base
from store_api.utils.enums import IntEnumType


class AccessLevel(IntEnum):
    UNCONFIRMED = 0
    REGULAR = 1
    MODERATOR = 2
    ADMIN = 3

    @property
    def label(self) -> str:
        return ACCESS_LEVEL_LABELS[self]


class Gender(IntEnum):
    MALE = 0
    FEMALE = 1
    OTHER = 2

    @property
    def label(self) -> str:
        return GENDER_LABELS[self]


class MaritalStatus(IntEnum):
    SINGLE = 0
    MARRIED = 1
    DIVORCED = 2
    WIDOWED = 3

    @property
    def label(self) -> str:
        return MARITAL_STATUS_LABELS[self]


ACCESS_LEVEL_LABELS = {
    AccessLevel.UNCONFIRMED: "Unconfirmed",
    AccessLevel.REGULAR: "Regular",
    AccessLevel.MODERATOR: "Moderator",
    AccessLevel.ADMIN: "Admin",
}

GENDER_LABELS = {
    Gender.MALE: "Male",
    Gender.FEMALE: "Female",
    Gender.OTHER: "Other",
}

MARITAL_STATUS_LABELS = {
    MaritalStatus.SINGLE: "Single",
    MaritalStatus.MARRIED: "Married",
    MaritalStatus.DIVORCED: "Divorced",
    MaritalStatus.WIDOWED: "Widowed",
}


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(450), nullable=True)
    password = Column(String, nullable=False)
    access_level = Column(
        IntEnumType(AccessLevel), nullable=False, default=AccessLevel.UNCONFIRMED, server_default="0"
    )

    __table_args__ = (
        Index(
            "ix_users_name",
            "name",
            unique=True,
            postgresql_where=text("name IS NOT NULL"),
            sqlite_where=text("name IS NOT NULL"),
        ),
    )


class UserProfile(Base):
    __tablename__ = "user_profiles"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    bio = Column(Text, nullable=True)
    birthday = Column(DateTime, nullable=True)
    gender = Column(IntEnumType(Gender), nullable=False, default=Gender.MALE, server_default="0")
    marital_status = Column(
        IntEnumType(MaritalStatus), nullable=False, default=MaritalStatus.SINGLE, server_default="0"
    )
    location = Column(String, nullable=True)
    page_preference = Column(Integer, nullable=False, default=5, server_default="5")


class ConfirmationCode(Base):
    __tablename__ = "confirmation_codes"

    id = Column(Integer, primary_key=True)
    code = Column(String(450), nullable=True)
    expiration = Column(DateTime, nullable=True)
    used = Column(Boolean, nullable=False, default=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    __table_args__ = (
        Index(
            "ix_confirmation_codes_code",
            "code",
            unique=True,
            postgresql_where=text("code IS NOT NULL"),
            sqlite_where=text("code IS NOT NULL"),
        ),
    )
