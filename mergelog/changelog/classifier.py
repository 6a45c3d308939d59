"""Label and title based classification of pull requests."""

import re
from typing import List, Optional, Sequence, Tuple

from ..config import LabelRule, Taxonomy
from .models import ClassifiedEntry, Issue


def compile_rule(rule: LabelRule) -> re.Pattern:
    """Whole-word, case-insensitive matcher for a rule's label.

    Labels edged by symbols, such as "c++", match when not touching a
    word character.
    """
    return re.compile(rf"(?<!\w)({re.escape(rule.label)})(?!\w)", re.IGNORECASE)


class Classifier:
    """Assigns a group, prefixes and backport status to issues.

    Title patterns are compiled once per rule when the classifier is
    built, so a single instance should be reused for a whole run.
    """

    def __init__(self, taxonomy: Taxonomy):
        self.taxonomy = taxonomy
        self._group_rules = self._compile(taxonomy.group_rules)
        self._prefix_rules = self._compile(taxonomy.prefix_rules)
        self._prefix_order = taxonomy.prefix_titles
        self._ignored = {label.casefold() for label in taxonomy.ignore_labels}
        self._backport_label = taxonomy.backport_label.casefold()

    @staticmethod
    def _compile(rules: Sequence[LabelRule]) -> List[Tuple[LabelRule, re.Pattern]]:
        return [(rule, compile_rule(rule)) for rule in rules]

    @staticmethod
    def _matches(rule: LabelRule, pattern: re.Pattern, labels: Sequence[str], title: str) -> bool:
        label = rule.label.casefold()
        return label in labels or bool(pattern.search(title))

    def is_ignored(self, issue: Issue) -> bool:
        return any(label.casefold() in self._ignored for label in issue.labels)

    def prefixes_for(self, issue: Issue) -> Tuple[str, ...]:
        """Distinct prefix titles for an issue, in declared rule order."""
        labels = [label.casefold() for label in issue.labels]

        found = []
        for rule, pattern in self._prefix_rules:
            if rule.title not in found and self._matches(rule, pattern, labels, issue.title):
                found.append(rule.title)

        def order(title):
            try:
                return self._prefix_order.index(title)
            except ValueError:
                return len(self._prefix_order)

        return tuple(sorted(found, key=order))

    def group_for(self, issue: Issue) -> Optional[str]:
        """Title of the first group rule that matches, if any."""
        labels = [label.casefold() for label in issue.labels]

        for rule, pattern in self._group_rules:
            if self._matches(rule, pattern, labels, issue.title):
                return rule.title
        return None

    def classify(self, issue: Issue) -> Optional[ClassifiedEntry]:
        """Classify an issue, or return None when it carries an ignored label."""
        if self.is_ignored(issue):
            return None

        backported = any(label.casefold() == self._backport_label for label in issue.labels)

        return ClassifiedEntry(
            group=self.group_for(issue),
            number=issue.number,
            prefixes=self.prefixes_for(issue),
            title=issue.title,
            questionable=not backported,
        )


def classify_issue(issue: Issue, taxonomy: Taxonomy) -> Optional[ClassifiedEntry]:
    """Classify a single issue against a taxonomy."""
    return Classifier(taxonomy).classify(issue)
