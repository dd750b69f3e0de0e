"""Permission vocabulary shared by grants and overrides."""

from dataclasses import dataclass, replace
from enum import Enum as PyEnum


class PrivilegeFlag(str, PyEnum):
    """The three independent capabilities a page privilege can carry."""

    READ = "read"
    WRITE = "write"
    MAINTAIN = "maintain"


@dataclass(frozen=True)
class PagePrivilege:
    """
    Read/write/maintain triple for one page.

    The flags are independent; write without read is stored as given.
    """

    read: bool = False
    write: bool = False
    maintain: bool = False

    def allows(self, flag: PrivilegeFlag) -> bool:
        return getattr(self, PrivilegeFlag(flag).value)

    def toggled(self, flag: PrivilegeFlag) -> "PagePrivilege":
        """Return a copy with exactly one flag flipped."""
        name = PrivilegeFlag(flag).value
        return replace(self, **{name: not getattr(self, name)})

    def __or__(self, other: "PagePrivilege") -> "PagePrivilege":
        return PagePrivilege(
            read=self.read or other.read,
            write=self.write or other.write,
            maintain=self.maintain or other.maintain,
        )

    def to_dict(self) -> dict[str, bool]:
        return {"read": self.read, "write": self.write, "maintain": self.maintain}

    @classmethod
    def from_dict(cls, data: dict) -> "PagePrivilege":
        # Missing flags mean "not granted"
        return cls(
            read=bool(data.get("read", False)),
            write=bool(data.get("write", False)),
            maintain=bool(data.get("maintain", False)),
        )


NO_PRIVILEGE = PagePrivilege()
