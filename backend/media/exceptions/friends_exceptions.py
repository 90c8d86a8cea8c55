from fastapi import status

from .base import ClientError


class EdgeNotFoundError(ClientError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, user1: int, user2: int):
        detail = f"Relationship not found. User with id {user1} is not subscribed to user with id {user2}."
        super().__init__(detail)


class EdgeAlreadyExistsError(ClientError):
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, user1: int, user2: int):
        detail = f"Relationship already exists. User with id {user1} is already subscribed to user with id {user2}."
        super().__init__(detail)


class FriendshipAlreadyExistsError(ClientError):
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, user1: int, user2: int):
        detail = f"Friendship already exists. User with id {user1} is already friends with user with id {user2}."
        super().__init__(detail)


class SelfRelationshipError(ClientError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, user_id: int):
        detail = f"User with id {user_id} cannot subscribe to themselves."
        super().__init__(detail)
