"""
Path Matcher — compiles rule templates into cached path predicates.

Template grammar:
  "regexA&!regexB&regexC"
Atoms are joined with '&'. A leading '!' negates an atom. A template matches a
path when every positive atom is found in the path and no negated atom is.
Matching is case-insensitive.

Broken templates (empty atoms, invalid regular expressions) fail closed: they
are reported once and never match afterwards.
"""

import logging
import re
import threading
from typing import Callable, Dict, Iterable, List, Tuple

logger = logging.getLogger(__name__)

PathPredicate = Callable[[str], bool]


class TemplateError(Exception):
    """Raised when a rule template cannot be compiled."""
    pass


def _never(path: str) -> bool:
    return False


def parse_template(template: str) -> List[Tuple[bool, "re.Pattern[str]"]]:
    """Split a template into (polarity, compiled regex) pairs."""
    atoms = []
    for raw in template.split("&"):
        positive = not raw.startswith("!")
        pattern = raw if positive else raw[1:]
        if not pattern:
            raise TemplateError(f"Empty atom in template {template!r}")
        try:
            atoms.append((positive, re.compile(pattern, re.IGNORECASE)))
        except re.error as exc:
            raise TemplateError(
                f"Invalid regular expression {pattern!r} in template {template!r}: {exc}"
            ) from exc
    return atoms


class PathMatcher:
    """
    Compiled predicate cache, keyed by exact template text.
    The cache only grows with the configured template set; call clear()
    when the rule set is replaced.
    """

    def __init__(self):
        self._compiled: Dict[str, PathPredicate] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._compiled)

    def compile(self, template: str) -> PathPredicate:
        """Get (or build and cache) the predicate for a template."""
        predicate = self._compiled.get(template)
        if predicate is not None:
            return predicate

        try:
            atoms = parse_template(template)
        except TemplateError as exc:
            logger.warning("Rule template disabled: %s", exc)
            predicate = _never
        else:
            def predicate(path: str) -> bool:
                return all(
                    (regex.search(path) is not None) == positive
                    for positive, regex in atoms
                )

        with self._lock:
            return self._compiled.setdefault(template, predicate)

    def is_match(self, template: str, path: str) -> bool:
        """Blank templates never match and are never compiled."""
        if not template or template.isspace():
            return False
        return self.compile(template)(path)

    def matches_any(self, templates: Iterable[str], path: str) -> bool:
        return any(self.is_match(t, path) for t in templates)

    def clear(self) -> None:
        with self._lock:
            self._compiled.clear()
