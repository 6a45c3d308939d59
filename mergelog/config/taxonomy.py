"""Label taxonomy used to classify pull requests."""

from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, field_validator


class LabelRule(BaseModel):
    """Maps a raw label (or title keyword) to a canonical title."""

    model_config = ConfigDict(frozen=True)

    label: str
    title: str


def _rules(pairs: List[Tuple[str, str]]) -> Tuple[LabelRule, ...]:
    return tuple(LabelRule(label=label, title=title) for label, title in pairs)


# Order defines group display precedence
DEFAULT_GROUP_RULES = _rules([
    ("api", "New features/APIs"),
    ("area-dev-tools", "Dev-Tools"),
    ("bug", "Bugfixes"),
    ("bugfix", "Bugfixes"),
    ("fix", "Bugfixes"),
    ("fixes", "Bugfixes"),
    ("dev-tools", "Dev-Tools"),
    ("devtools", "Dev-Tools"),
])

# Order defines prefix display precedence within an entry
DEFAULT_PREFIX_RULES = _rules([
    ("breaking-change", "Breaking-Change"),
    ("os-linux", "Linux"),
    ("os-windows", "Windows"),
    ("os-macos", "macOS"),
    ("os-browser", "Browser"),
    ("os-ios", "iOS"),
    ("os-android", "Android"),
    ("area-x11", "Linux"),
    ("win32", "Windows"),
    ("win", "Windows"),
    ("osx", "macOS"),
    ("macos", "macOS"),
    ("browser", "Browser"),
    ("wasm", "Browser"),
    ("ios", "iOS"),
    ("android", "Android"),
])

DEFAULT_IGNORE_LABELS = ("wont-backport", "backported-0.9")

DEFAULT_BACKPORT_LABEL = "backported-0.10.x"


class Taxonomy(BaseModel):
    """Rule tables threaded through classification and grouping.

    Every label comparison ignores case: rule labels, ignore_labels and
    backport_label alike. A pull request carrying backport_label in any
    case ("Backported-0.10.X" too) is not flagged as questionable.
    """

    model_config = ConfigDict(frozen=True)

    group_rules: Tuple[LabelRule, ...] = DEFAULT_GROUP_RULES
    prefix_rules: Tuple[LabelRule, ...] = DEFAULT_PREFIX_RULES
    ignore_labels: Tuple[str, ...] = DEFAULT_IGNORE_LABELS
    backport_label: str = DEFAULT_BACKPORT_LABEL

    @field_validator('group_rules', 'prefix_rules')
    @classmethod
    def reject_blank_labels(cls, v):
        """A blank label would match every title."""
        for rule in v:
            if not rule.label.strip():
                raise ValueError(f"Empty label in rule for '{rule.title}'")
        return v

    @property
    def group_titles(self) -> List[str]:
        """Canonical group titles in declared order, deduplicated."""
        return _unique_titles(self.group_rules)

    @property
    def prefix_titles(self) -> List[str]:
        """Prefix titles in declared order, deduplicated."""
        return _unique_titles(self.prefix_rules)


def _unique_titles(rules) -> List[str]:
    titles = []
    for rule in rules:
        if rule.title not in titles:
            titles.append(rule.title)
    return titles
