from playlist_remix.config import MAX_PLAYLIST_SIZE


def songs_per_member(member_count: int, max_size: int = MAX_PLAYLIST_SIZE) -> int:
    """
    Number of songs each member contributes to a refresh.

    floor(max_size / member_count); with 7 members and 30 slots that is 4,
    leaving 2 slots empty rather than favouring anyone.
    """
    if member_count < 1:
        raise ValueError(f"member_count must be at least 1, got {member_count}")
    return max_size // member_count
