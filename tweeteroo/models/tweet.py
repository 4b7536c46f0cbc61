# models/tweet.py
from sqlalchemy import Column, Integer, String, Text
from tweeteroo.database import Base


class Tweet(Base):
    __tablename__ = "tweets"
    # SQLite would otherwise hand a deleted max id to the next tweet
    __table_args__ = {"sqlite_autoincrement": True}

    # store-assigned identity, increasing with insertion order, never reused
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    # references users.username by value only
    username = Column(String, index=True, nullable=False)
    tweet = Column(Text, nullable=False)
