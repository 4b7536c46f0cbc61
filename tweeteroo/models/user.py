# models/user.py
from sqlalchemy import Column, Integer, String
from tweeteroo.database import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)  # required & unique
    avatar = Column(String, nullable=False)                             # absolute URI
