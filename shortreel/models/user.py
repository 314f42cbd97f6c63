from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, CheckConstraint
from shortreel.database import Base


class User(Base):
    __tablename__ = "users"
    __table_args__ = (CheckConstraint("wallet >= 0", name="ck_users_wallet_non_negative"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    wallet = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
