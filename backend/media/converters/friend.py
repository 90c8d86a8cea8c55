from media.models.friend import Friend
from media.schemas.friend import FriendPublic


def to_public(edge: Friend) -> FriendPublic:
    """
    Converts a Friend edge to its public representation.

    Parameters:
        edge (Friend): The relationship edge to convert.
    Returns:
        FriendPublic: The converted edge.
    """
    return FriendPublic(**edge.model_dump())
