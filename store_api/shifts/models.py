from sqlalchemy import Column, DateTime, ForeignKey, Integer

from store_api.database import Base


class StoreShift(Base):
    """One shift per (store, employee) pair; the pair is the primary key."""

    __tablename__ = "store_shifts"

    store_id = Column(Integer, ForeignKey("stores.id", ondelete="CASCADE"), primary_key=True, index=True)
    store_employee_id = Column(
        Integer, ForeignKey("store_employees.id", ondelete="CASCADE"), primary_key=True, index=True
    )
    start_date = Column(DateTime, nullable=True)
    end_date = Column(DateTime, nullable=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
