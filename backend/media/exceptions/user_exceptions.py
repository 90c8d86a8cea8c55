from fastapi import status

from .base import ClientError


class UserNotFound(ClientError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, user_id: int):
        detail = f"User with id {user_id} not found."
        super().__init__(detail)


class UserLoginNotFound(ClientError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, login: str):
        detail = f"User with login {login} not found."
        super().__init__(detail)


class UserEmailNotFound(ClientError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, email: str):
        detail = f"User with email {email} not found."
        super().__init__(detail)


class EmailAlreadyExists(ClientError):
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, email: str):
        detail = f"User with email {email} already exists."
        super().__init__(detail)


class LoginAlreadyExists(ClientError):
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, login: str):
        detail = f"User with login {login} already exists."
        super().__init__(detail)


class OneOrMoreUsersNotFound(ClientError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, user_ids: list[int]):
        detail = f"One or more users not found: {', '.join(str(user_id) for user_id in user_ids)}."
        super().__init__(detail)
