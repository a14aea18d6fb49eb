from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String

from store_api.database import Base
from store_api.users.models import Gender
from store_api.utils.enums import IntEnumType


class StoreEmployee(Base):
    __tablename__ = "store_employees"

    id = Column(Integer, primary_key=True)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    gender = Column(IntEnumType(Gender), nullable=False, default=Gender.MALE)
    employment_date = Column(DateTime, nullable=True)
    termination_date = Column(DateTime, nullable=True)
    salary = Column(Float, nullable=False, default=0.0)
    store_employee_role_id = Column(
        Integer, ForeignKey("store_employee_roles.id", ondelete="SET NULL"), nullable=True, index=True
    )
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
