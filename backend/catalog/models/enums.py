"""Closed value sets shared by models and forms."""
import enum


class AlbumType(str, enum.Enum):
    EP = "EP"
    LP = "LP"
    SP = "SP"
    COMPILATION = "Compilation"


class AlbumStatus(str, enum.Enum):
    IN_DEVELOPMENT = "In Development"
    RELEASED = "Released"
    REMOVED = "Removed"


class Visibility(str, enum.Enum):
    """Who may see an album or album track."""
    PUBLIC = "Public"
    VIP = "VIP"
    ADMIN = "Admin"


class StandaloneVisibility(str, enum.Enum):
    """Who may see a standalone track."""
    PUBLIC = "Public"
    PRIVATE = "Private"
    UNLISTED = "Unlisted"


class TrackStatus(str, enum.Enum):
    WIP = "WIP"
    RELEASED = "RELEASED"
    SHELVED = "SHELVED"
    B_SIDE = "B-SIDE"


class ProductionStage(str, enum.Enum):
    """Pipeline position, in order."""
    CONCEPTION = "CONCEPTION"
    DEMO = "DEMO"
    IN_SESSION = "IN SESSION"
    OUT_SESSION = "OUT SESSION"
    IN_MIX = "IN MIX"
    OUT_MIX = "OUT MIX"
    IN_MASTERING = "IN MASTERING"
    OUT_MASTERING = "OUT MASTERING"
    RELEASED = "RELEASED"
    REMOVED = "REMOVED"
    SHELVED = "SHELVED"

    @property
    def position(self) -> int:
        return list(ProductionStage).index(self)


class AppRole(str, enum.Enum):
    ADMIN = "admin"
    USER = "user"


def enum_values(enum_cls) -> list:
    """Column values for an Enum type (stores "In Development", not the member name)."""
    return [member.value for member in enum_cls]
