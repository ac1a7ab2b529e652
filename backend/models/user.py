from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean
from sqlalchemy.orm import relationship
from database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)  # bcrypt hash
    name = Column(String(100), nullable=True)
    birthdate = Column(String(10), nullable=True)  # ISO date YYYY-MM-DD
    department = Column(String(100), nullable=True)
    gender = Column(String(10), nullable=True)  # male/female/other
    marital_status = Column(String(10), nullable=True)  # single/married
    bio = Column(Text, nullable=True)
    avatar = Column(Text, nullable=True)
    profile_completed = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    posts = relationship("Post", back_populates="author")

    @property
    def domain(self) -> str:
        return self.email.split("@", 1)[1] if "@" in self.email else ""
