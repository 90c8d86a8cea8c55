from sqlmodel import Session, select

from media.models.user import User, UserUpdate


def get_user_by_id(*, session: Session, user_id: int) -> User | None:
    """
    Get a user by their ID.

    Parameters:
        session (Session): The database session.
        user_id (int): The ID of the user to retrieve.
    Returns:
        User | None: The user object if found, otherwise None.
    """
    return session.get(User, user_id)


def get_user_by_email(*, session: Session, email: str) -> User | None:
    """
    Get a user by their email address.

    Parameters:
        session (Session): The database session.
        email (str): The email address of the user to retrieve.
    Returns:
        User | None: The user object if found, otherwise None.
    """
    statement = select(User).where(User.email == email)
    session_user = session.exec(statement).one_or_none()
    return session_user


def get_user_by_login(*, session: Session, login: str) -> User | None:
    """
    Get a user by their login name.

    Parameters:
        session (Session): The database session.
        login (str): The login name of the user to retrieve.
    Returns:
        User | None: The user object if found, otherwise None.
    """
    statement = select(User).where(User.login == login)
    return session.exec(statement).one_or_none()


def update_user(
    *,
    session: Session,
    db_user: User,
    user_in: UserUpdate,
) -> User:
    """
    Update an existing user in the database.
    The id of db_user is never changed.

    Parameters:
        db_user (User): The user object to update.
        user_in (UserUpdate): The user update data.
    Returns:
        User: The updated user object.
    Raises:
        IntegrityError: If a user with the same email or login already exists.
    """
    user_data = user_in.model_dump(exclude_unset=True, exclude={"id"})
    db_user.sqlmodel_update(user_data)
    session.add(db_user)
    session.flush()  # Check for unique constraints
    return db_user


def delete_user(*, session: Session, db_user: User) -> None:
    session.delete(db_user)
    session.flush()
