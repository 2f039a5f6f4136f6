"""Declarative selector fallback chains for every profile field.

Each field maps to an ordered tuple of candidates, most specific / most
current markup first. Profile pages have shipped several layouts over the
years (and A/B variants at any given time), so no single query is reliable.
The chains are data: `extraction.py` decides how they are interpreted.
"""
from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Tuple


@dataclass(frozen=True)
class SelectorRule:
    """One selector candidate.

    `attribute=None` yields the element's text content; otherwise the value
    of the named attribute.
    """
    selector: str
    attribute: Optional[str] = None


ExtractionRule = Tuple[SelectorRule, ...]


def text_rules(*selectors: str) -> ExtractionRule:
    return tuple(SelectorRule(s) for s in selectors)


def attribute_rules(attribute: str, *selectors: str) -> ExtractionRule:
    return tuple(SelectorRule(s, attribute) for s in selectors)


# Single-value fields: first match wins.
SINGLE_VALUE_RULES: Dict[str, ExtractionRule] = {
    "name": text_rules(
        ".text-heading-xlarge",
        ".pv-text-details__left-panel h1",
        ".top-card-layout__title",
        ".pv-top-card--list h1",
        "h1[data-generated-suggestion-target]",
        ".ph5 h1",
        ".pv-top-card__photo + div h1",
        "[data-anonymize='person-name']",
    ),
    "title": text_rules(
        ".text-body-medium.break-words",
        ".pv-text-details__left-panel .text-body-medium",
        ".top-card-layout__headline",
        ".pv-top-card--list .text-body-medium",
        ".pv-text-details__left-panel .pv-shared-text-with-see-more",
        ".ph5 .text-body-medium",
    ),
    "location": text_rules(
        ".text-body-small.inline.t-black--light.break-words",
        ".pv-text-details__left-panel .pv-text-details__left-panel-item .text-body-small",
        ".top-card-layout__first-subline",
        ".pv-top-card--list .pv-top-card--list-bullet",
        ".ph5 .text-body-small",
    ),
    "profile_picture_url": attribute_rules(
        "src",
        ".pv-top-card-profile-picture__image",
        ".profile-photo-edit__preview",
        ".pv-top-card__photo img",
        ".photo-container img",
        ".presence-entity__image",
        "img[data-anonymize='headshot']",
        ".top-card-layout__entity-image img",
    ),
    # Raw display text such as "500+ connections"; reduced to digits later.
    "connections": text_rules(
        ".top-card-layout__headline + div a",
        ".pv-top-card--list .pv-top-card--list-bullet:last-child",
        ".pv-top-card__connections",
        ".pv-text-details__left-panel .pv-text-details__left-panel-item:last-child",
    ),
}

# Multi-value fields: union across every candidate.
MULTI_VALUE_RULES: Dict[str, ExtractionRule] = {
    "skills": text_rules(
        ".skill-entity__skill-name",
        ".pvs-skill__skill-name",
        ".skill-category-entity__skill-name",
        "[data-field='skill_name']",
        ".skill-name",
        ".pvs-list__item .mr1",
        ".skills-section .skill",
    ),
    "certifications": text_rules(
        ".certification__title",
        ".pvs-certification__title",
        ".pv-accomplishments-block .pv-accomplishments-block__title",
        "[data-field='certification_name']",
        ".certification-name",
        ".pvs-list__item .mr1",
    ),
    "companies": text_rules(
        ".experience-entity__company-name",
        ".pvs-list .pvs-entity__caption-wrapper .t-14",
        ".pv-experience-entity h3",
        "[data-field='company_name']",
        ".company-name",
        ".pvs-list__item .t-14.t-black--light",
    ),
    "education": text_rules(
        ".education-entity__school-name",
        ".pvs-list .pvs-entity__caption-wrapper .t-16",
        ".pv-education-entity h3",
        "[data-field='school_name']",
        ".school-name",
        ".pvs-list__item .t-16",
    ),
}


@dataclass(frozen=True)
class RuleSet:
    single: Dict[str, ExtractionRule]
    multi: Dict[str, ExtractionRule]

    def all_rules(self) -> Iterator[SelectorRule]:
        """Every distinct candidate across all fields, first-seen order."""
        seen = set()
        for chains in (self.single, self.multi):
            for chain in chains.values():
                for rule in chain:
                    if rule not in seen:
                        seen.add(rule)
                        yield rule


DEFAULT_RULES = RuleSet(single=SINGLE_VALUE_RULES, multi=MULTI_VALUE_RULES)
