"""
Capability Filter

Decides which tools of the catalog a server instance exposes.
"""

from dataclasses import dataclass
from typing import FrozenSet, Optional


def parse_tool_list(raw: Optional[str]) -> FrozenSet[str]:
    """Split a comma-separated list of tool names."""
    if not raw:
        return frozenset()
    return frozenset(part.strip() for part in raw.split(",") if part.strip())


@dataclass(frozen=True)
class FilterConfig:
    """
    Include/exclude lists plus the read-only flag.

    A non-empty include list is authoritative: only the tools it names
    are exposed and the exclude list is not consulted.
    """
    exclude: FrozenSet[str] = frozenset()
    include: FrozenSet[str] = frozenset()
    read_only: bool = False

    @classmethod
    def from_strings(
        cls,
        exclude_tools: Optional[str] = "",
        include_tools: Optional[str] = "",
        read_only: bool = False,
    ) -> "FilterConfig":
        return cls(
            exclude=parse_tool_list(exclude_tools),
            include=parse_tool_list(include_tools),
            read_only=read_only,
        )

    def is_exposed(self, name: str) -> bool:
        if self.include:
            return name in self.include
        return name not in self.exclude

    def allows(self, name: str, mutating: bool = False) -> bool:
        """Both gates: read-only mode for mutating tools, then the name lists."""
        if mutating and self.read_only:
            return False
        return self.is_exposed(name)
