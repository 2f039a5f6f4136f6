import logging
import re
from typing import Dict, List, Optional, Protocol, Sequence

from playwright.async_api import Error as PlaywrightError

from .errors import ExtractionError
from .models import ScrapedProfile
from .selectors import DEFAULT_RULES, ExtractionRule, RuleSet

logger = logging.getLogger(__name__)


class DomElement(Protocol):
    @property
    def text(self) -> str: ...

    def get_attribute(self, name: str) -> Optional[str]: ...


class DomQuery(Protocol):
    """The only DOM capability the extraction policy needs."""

    def query_selector(self, selector: str) -> Optional[DomElement]: ...

    def query_selector_all(self, selector: str) -> Sequence[DomElement]: ...


def first_match(dom: DomQuery, chain: ExtractionRule) -> Optional[str]:
    """Single-value policy: the first candidate that matches wins.

    A text candidate stops the chain as soon as an element is found and yields
    its trimmed text, which may be "". None means no candidate matched. An
    attribute candidate only wins if the attribute is present and non-blank.
    """
    for rule in chain:
        element = dom.query_selector(rule.selector)
        if element is None:
            continue
        if rule.attribute is None:
            return element.text.strip()
        value = element.get_attribute(rule.attribute)
        if value and value.strip():
            return value.strip()
    return None


def all_matches(dom: DomQuery, chain: ExtractionRule) -> List[str]:
    """Multi-value policy: union of every candidate's matches.

    Values are trimmed, blanks dropped, and exact duplicates kept only at
    their first position.
    """
    results: List[str] = []
    seen = set()
    for rule in chain:
        for element in dom.query_selector_all(rule.selector):
            if rule.attribute is None:
                value = element.text
            else:
                value = element.get_attribute(rule.attribute) or ""
            value = value.strip()
            if value and value not in seen:
                seen.add(value)
                results.append(value)
    return results


def digits_only(raw: Optional[str]) -> Optional[str]:
    """Reduce display text like "500+ connections" to "500"; None if no digits."""
    if raw is None:
        return None
    return re.sub(r"\D", "", raw) or None


def extract_profile(dom: DomQuery, rules: RuleSet = DEFAULT_RULES) -> ScrapedProfile:
    values: Dict[str, object] = {}
    for field, chain in rules.single.items():
        values[field] = first_match(dom, chain)
    for field, chain in rules.multi.items():
        values[field] = all_matches(dom, chain)
    if "connections" in values:
        values["connections"] = digits_only(values["connections"])
    return ScrapedProfile(**values)


class SnapshotElement:
    def __init__(self, text: str, attrs: Optional[Dict[str, Optional[str]]] = None):
        self._text = text or ""
        self._attrs = attrs or {}

    @property
    def text(self) -> str:
        return self._text

    def get_attribute(self, name: str) -> Optional[str]:
        return self._attrs.get(name)


class DomSnapshot:
    """`DomQuery` over the selector results captured from a live page.

    Selectors that were not captured behave as if they matched nothing.
    """

    def __init__(self, matches: Dict[str, List[dict]]):
        self._matches = {
            selector: [SnapshotElement(m.get("text", ""), m.get("attrs")) for m in items]
            for selector, items in matches.items()
        }

    def query_selector(self, selector: str) -> Optional[SnapshotElement]:
        items = self._matches.get(selector)
        return items[0] if items else None

    def query_selector_all(self, selector: str) -> List[SnapshotElement]:
        return list(self._matches.get(selector, []))


# Runs inside the page. An invalid selector counts as "no match" so one bad
# candidate cannot sink the whole extraction.
SNAPSHOT_SCRIPT = """
(specs) => {
  const out = {};
  for (const [selector, attrs] of specs) {
    let nodes = [];
    try {
      nodes = Array.from(document.querySelectorAll(selector));
    } catch (e) {
      nodes = [];
    }
    out[selector] = nodes.map((el) => {
      const values = {};
      for (const name of attrs) {
        values[name] = el.getAttribute(name);
      }
      return { text: el.textContent || "", attrs: values };
    });
  }
  return out;
}
"""


def snapshot_specs(rules: RuleSet) -> List[list]:
    """[[selector, [attribute, ...]], ...] for every selector in the rule set."""
    specs: Dict[str, List[str]] = {}
    for rule in rules.all_rules():
        attrs = specs.setdefault(rule.selector, [])
        if rule.attribute is not None and rule.attribute not in attrs:
            attrs.append(rule.attribute)
    return [[selector, attrs] for selector, attrs in specs.items()]


class FieldExtractor:
    """Reads every profile field from a loaded page.

    One `page.evaluate` round trip captures all candidate matches; the
    fallback policy then runs in Python against the snapshot.
    """

    def __init__(self, rules: RuleSet = DEFAULT_RULES):
        self.rules = rules
        self._specs = snapshot_specs(rules)

    async def snapshot(self, page) -> DomSnapshot:
        try:
            raw = await page.evaluate(SNAPSHOT_SCRIPT, self._specs)
        except PlaywrightError as e:
            raise ExtractionError(f"In-page query failed: {e}") from e
        if not isinstance(raw, dict):
            raise ExtractionError(f"In-page query returned {type(raw).__name__}, expected object")
        return DomSnapshot(raw)

    async def extract_all(self, session) -> ScrapedProfile:
        dom = await self.snapshot(session.page)
        profile = extract_profile(dom, self.rules)
        logger.debug(
            "Extracted name=%r skills=%d certifications=%d companies=%d education=%d",
            profile.name,
            len(profile.skills),
            len(profile.certifications),
            len(profile.companies),
            len(profile.education),
        )
        return profile

