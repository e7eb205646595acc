from enum import Enum


class Gender(str, Enum):
    """Gender recorded on an account."""

    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"

    @classmethod
    def values(cls) -> frozenset[str]:
        return frozenset(member.value for member in cls)
