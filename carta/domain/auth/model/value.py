"""Value objects for the auth domain."""

from pydantic import RootModel, field_validator


class UserId(RootModel[str]):
    """Unique identifier for a User (opaque string, e.g. a CUID)."""

    @field_validator("root")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("UserId must not be blank")
        return v

    def __str__(self) -> str:
        return self.root

    def __hash__(self) -> int:
        return hash(self.root)
