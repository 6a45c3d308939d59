"""Data types flowing through changelog generation."""

from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict


MISC_GROUP = "Misc"


class Issue(BaseModel):
    """A fetched pull request, reduced to what classification needs."""

    model_config = ConfigDict(frozen=True)

    number: int
    title: str
    labels: Tuple[str, ...] = ()
    url: str = ""

    @classmethod
    def from_pull_request(cls, pr: Dict[str, Any]) -> "Issue":
        """Build an issue from pull request data returned by the client."""
        return cls(
            number=pr['number'],
            title=pr.get('title', ''),
            labels=tuple(pr.get('labels', [])),
            url=pr.get('html_url', ''),
        )


class ClassifiedEntry(BaseModel):
    """One changelog line: its group, prefix tags and backport status."""

    model_config = ConfigDict(frozen=True)

    group: Optional[str] = None
    number: int
    prefixes: Tuple[str, ...] = ()
    title: str
    questionable: bool = True

    @property
    def section(self) -> str:
        return self.group or MISC_GROUP

    @property
    def prefix_text(self) -> str:
        return "".join(f"[{prefix}]" for prefix in self.prefixes)


Section = Tuple[str, List[ClassifiedEntry]]


class Changelog(BaseModel):
    """Result of a changelog run between two commitish points."""

    base: str
    head: str
    merged_numbers: List[int] = []
    sections: List[Tuple[str, List[ClassifiedEntry]]] = []

    @property
    def is_empty(self) -> bool:
        """True when no merged pull request was found in the range."""
        return not self.merged_numbers
