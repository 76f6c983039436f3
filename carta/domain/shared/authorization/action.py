"""Authorization actions: all operations subject to access control."""

from enum import StrEnum


class Action(StrEnum):
    """Structured enum of all authorization-relevant operations."""

    # Public catalogue
    CARD_READ = "card:read"
    DECK_READ = "deck:read"
    BAN_LIST_READ = "ban_list:read"

    # Community (any signed-in user)
    DECK_CREATE = "deck:create"
    COMMENT_CREATE = "comment:create"
    VOTE_CAST = "vote:cast"

    # Ownership-scoped
    DECK_UPDATE = "deck:update"
    DECK_DELETE = "deck:delete"
    COMMENT_DELETE = "comment:delete"

    # Moderation panel
    ADMIN_PANEL_VIEW = "admin_panel:view"
    STATS_READ = "stats:read"
    COMMENT_LIST = "comment:list"
    COMMENT_MODERATE = "comment:moderate"

    # Administration
    USER_LIST = "user:list"
    USER_UPDATE = "user:update"
    ROLE_ASSIGN = "role:assign"
    BAN_LIST_UPDATE = "ban_list:update"
    CARD_CREATE = "card:create"
    CARD_UPDATE = "card:update"
    CARD_DELETE = "card:delete"
    BANNER_UPDATE = "banner:update"
    BANNER_UPLOAD = "banner:upload"
