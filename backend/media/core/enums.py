from enum import Enum, unique


@unique
class StatusFriend(str, Enum):
    SUBSCRIPTION = "subscription"
    FRIEND = "friend"
