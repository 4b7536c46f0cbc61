class TweetStoreError(Exception):
    """Base class for store-level failures the routes translate to HTTP."""


class UsernameTakenError(TweetStoreError):
    def __init__(self, username: str):
        super().__init__(f"Username already exists: {username}")
        self.username = username


class InvalidTweetIdError(TweetStoreError):
    def __init__(self, raw: str):
        super().__init__(f"Not a valid tweet id: {raw!r}")
        self.raw = raw
