import logging

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from tweeteroo.schemas.tweet_schema import TweetBody, TweetOut
from tweeteroo.services.errors import InvalidTweetIdError
from tweeteroo.services.stores import (
    TweetStore,
    UpdateOutcome,
    UserStore,
    get_tweet_store,
    get_user_store,
    parse_tweet_id,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tweets", tags=["Tweets"])


def _not_found() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"message": "Tweet not found"}
    )


@router.post("", status_code=status.HTTP_201_CREATED)
def create_tweet(
    body: TweetBody,
    users: UserStore = Depends(get_user_store),
    tweets: TweetStore = Depends(get_tweet_store),
):
    if not users.exists(body.username):
        logger.info("Rejected tweet from unregistered user %s", body.username)
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"message": "This user is not registered. Action not authorized."}
        )

    tweet = tweets.create(body.username, body.tweet)
    logger.info("Tweet %s created by %s", tweet.id, tweet.username)
    return {"message": "Tweet created successfully"}


@router.get("", response_model=list[TweetOut])
def list_tweets(tweets: TweetStore = Depends(get_tweet_store)):
    return tweets.list_with_avatars()


@router.put("/{tweet_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_tweet(tweet_id: str, body: TweetBody, tweets: TweetStore = Depends(get_tweet_store)):
    # malformed ids and store errors are both reported as "not found"
    try:
        outcome = tweets.update_text(parse_tweet_id(tweet_id), body.username, body.tweet)
    except (InvalidTweetIdError, SQLAlchemyError) as e:
        logger.warning("Update of tweet %r failed: %s", tweet_id, e)
        return _not_found()

    if outcome is UpdateOutcome.NOT_FOUND:
        return _not_found()
    if outcome is UpdateOutcome.FORBIDDEN:
        logger.info("User %s may not edit tweet %s", body.username, tweet_id)
        return JSONResponse(
            status_code=status.HTTP_403_FORBIDDEN,
            content={"message": "Action not allowed: username does not match the original tweet"}
        )
    if outcome is UpdateOutcome.UNCHANGED:
        return Response(status_code=status.HTTP_304_NOT_MODIFIED)

    logger.info("Tweet %s updated", tweet_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{tweet_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_tweet(tweet_id: str, tweets: TweetStore = Depends(get_tweet_store)):
    try:
        deleted = tweets.delete(parse_tweet_id(tweet_id))
    except (InvalidTweetIdError, SQLAlchemyError) as e:
        logger.warning("Delete of tweet %r failed: %s", tweet_id, e)
        return _not_found()

    if not deleted:
        return _not_found()

    logger.info("Tweet %s deleted", tweet_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
