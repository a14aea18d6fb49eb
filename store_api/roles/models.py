from sqlalchemy import BigInteger, Column, ForeignKey, Integer, String, Text

from store_api.database import Base


class StoreEmployeeRole(Base):
    __tablename__ = "store_employee_roles"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    # higher rank = more senior
    role_level = Column(BigInteger, nullable=False, default=0)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
