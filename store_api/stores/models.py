from enum import IntEnum

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from store_api.database import Base
from store_api.utils.enums import IntEnumType


class StoreCategory(IntEnum):
    RETAIL = 0
    GROCERY = 1
    PHARMACY = 2
    ELECTRONICS = 3
    CLOTHING = 4
    FURNITURE = 5
    OTHER = 6

    @property
    def label(self) -> str:
        return STORE_CATEGORY_LABELS[self]


STORE_CATEGORY_LABELS = {
    StoreCategory.RETAIL: "Retail",
    StoreCategory.GROCERY: "Grocery",
    StoreCategory.PHARMACY: "Pharmacy",
    StoreCategory.ELECTRONICS: "Electronics",
    StoreCategory.CLOTHING: "Clothing",
    StoreCategory.FURNITURE: "Furniture",
    StoreCategory.OTHER: "Other",
}


class Store(Base):
    __tablename__ = "stores"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    address = Column(String, nullable=True)
    city = Column(String, nullable=True)
    state = Column(String, nullable=True)
    zip_code = Column(String, nullable=True)
    country = Column(String, nullable=True)
    category = Column(IntEnumType(StoreCategory), nullable=False, default=StoreCategory.RETAIL)
    open_date = Column(DateTime, nullable=True)
    close_date = Column(DateTime, nullable=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
