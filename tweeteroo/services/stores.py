# services/stores.py
"""
Store clients for the two collections.

Routes never touch the ORM directly; they receive a ``UserStore`` or
``TweetStore`` bound to the request's Session through ``Depends``.
"""
from __future__ import annotations

import enum
import logging
from typing import Iterable

from fastapi import Depends
from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tweeteroo.database import get_db
from tweeteroo.models.tweet import Tweet
from tweeteroo.models.user import User
from tweeteroo.services.errors import InvalidTweetIdError, UsernameTakenError

logger = logging.getLogger(__name__)

# largest value a 64-bit integer primary key can hold
_MAX_ID = 2**63 - 1


def parse_tweet_id(raw: str) -> int:
    """Turn the path segment into a tweet identity, or raise InvalidTweetIdError."""
    raw = (raw or "").strip()
    if not raw.isdigit() or not raw.isascii():
        raise InvalidTweetIdError(raw)
    value = int(raw)
    if value < 1 or value > _MAX_ID:
        raise InvalidTweetIdError(raw)
    return value


class UpdateOutcome(str, enum.Enum):
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"


class UserStore:
    def __init__(self, db: Session):
        self.db = db

    def get(self, username: str) -> User | None:
        return self.db.execute(
            select(User).where(User.username == username)
        ).scalar_one_or_none()

    def exists(self, username: str) -> bool:
        return self.get(username) is not None

    def create(self, username: str, avatar: str) -> User:
        user = User(username=username, avatar=avatar)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # lost the race against a concurrent sign-up
            self.db.rollback()
            logger.info("Unique constraint rejected duplicate username %s", username)
            raise UsernameTakenError(username)
        self.db.refresh(user)
        return user

    def avatars_for(self, usernames: Iterable[str]) -> dict[str, str]:
        names = set(usernames)
        if not names:
            return {}
        rows = self.db.execute(
            select(User.username, User.avatar).where(User.username.in_(names))
        ).all()
        return {username: avatar for username, avatar in rows}


class TweetStore:
    def __init__(self, db: Session, users: UserStore | None = None):
        self.db = db
        self.users = users or UserStore(db)

    def get(self, tweet_id: int) -> Tweet | None:
        return self.db.get(Tweet, tweet_id)

    def create(self, username: str, text: str) -> Tweet:
        tweet = Tweet(username=username, tweet=text)
        self.db.add(tweet)
        self.db.commit()
        self.db.refresh(tweet)
        return tweet

    def list_with_avatars(self) -> list[dict]:
        """All tweets, newest first, each with its author's avatar or None."""
        tweets = self.db.execute(select(Tweet).order_by(Tweet.id.desc())).scalars().all()
        avatars = self.users.avatars_for(t.username for t in tweets)
        return [
            {
                "_id": str(t.id),
                "username": t.username,
                "tweet": t.tweet,
                "avatar": avatars.get(t.username),
            }
            for t in tweets
        ]

    def update_text(self, tweet_id: int, username: str, text: str) -> UpdateOutcome:
        result = self.db.execute(
            update(Tweet)
            .where(Tweet.id == tweet_id, Tweet.username == username, Tweet.tweet != text)
            .values(tweet=text)
        )
        self.db.commit()
        if result.rowcount:
            return UpdateOutcome.UPDATED

        current = self.get(tweet_id)
        if current is None:
            return UpdateOutcome.NOT_FOUND
        if current.username != username:
            return UpdateOutcome.FORBIDDEN
        return UpdateOutcome.UNCHANGED

    def delete(self, tweet_id: int) -> bool:
        result = self.db.execute(delete(Tweet).where(Tweet.id == tweet_id))
        self.db.commit()
        return bool(result.rowcount)


def get_user_store(db: Session = Depends(get_db)) -> UserStore:
    return UserStore(db)


def get_tweet_store(db: Session = Depends(get_db)) -> TweetStore:
    return TweetStore(db)
