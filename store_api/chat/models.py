from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String, Text

from store_api.database import Base


class ChatMessage(Base):
    __tablename__ = "chat_messages"

    id = Column(Integer, primary_key=True)
    nickname = Column(String, nullable=True)
    message = Column(Text, nullable=True)
    timestamp = Column(DateTime, nullable=True, default=datetime.utcnow, index=True)
