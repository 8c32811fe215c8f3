"""Plural rule table.

Maps (locale, count) to a CLDR-style plural form tag. Rules are static and
registered once at import time.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Optional, Tuple

from infrastructure.logging import get_module_logger

logger = get_module_logger()


@dataclass(frozen=True)
class PluralRule:
    """Plural rule of one locale.

    Attributes:
        locale: Locale the rule applies to.
        forms: Ordered form tags the rule can produce.
        classify: Pure function mapping a count to one of ``forms``.
    """

    locale: str
    forms: Tuple[str, ...]
    classify: Callable[[float], str]


def _one_other(count: float) -> str:
    return "one" if count == 1 else "other"


def _french(count: float) -> str:
    return "one" if count <= 1 else "other"


def _slavic_few(count: float) -> bool:
    return 2 <= count % 10 <= 4 and not 10 <= count % 100 <= 19


def _russian(count: float) -> str:
    if count % 10 == 1 and count % 100 != 11:
        return "one"
    if _slavic_few(count):
        return "few"
    return "many"


def _polish(count: float) -> str:
    if count == 1:
        return "one"
    if _slavic_few(count):
        return "few"
    return "many"


def _arabic(count: float) -> str:
    if count == 0:
        return "zero"
    if count == 1:
        return "one"
    if count == 2:
        return "two"
    if 3 <= count % 100 <= 10:
        return "few"
    if count % 100 >= 11:
        return "many"
    return "other"


def _other(count: float) -> str:
    return "other"


PLURAL_RULES: Dict[str, PluralRule] = {
    rule.locale: rule
    for rule in (
        PluralRule("en", ("one", "other"), _one_other),
        PluralRule("es", ("one", "other"), _one_other),
        PluralRule("de", ("one", "other"), _one_other),
        PluralRule("fr", ("one", "other"), _french),
        PluralRule("ru", ("one", "few", "many"), _russian),
        PluralRule("pl", ("one", "few", "many"), _polish),
        PluralRule("ar", ("zero", "one", "two", "few", "many", "other"), _arabic),
        PluralRule("ja", ("other",), _other),
        PluralRule("zh", ("other",), _other),
    )
}


def get_plural_rule(locale: str) -> Optional[PluralRule]:
    return PLURAL_RULES.get(locale)


def classify(locale: str, count: float) -> Optional[str]:
    """Return the plural form tag for ``count``, or None for unknown locales."""
    rule = PLURAL_RULES.get(locale)
    if rule is None:
        return None
    return rule.classify(count)


def apply_pluralization(
    translation: str,
    count: float,
    locale: str,
    plural_forms: Optional[Mapping[str, str]],
    enabled: bool = True,
) -> str:
    """Select the plural form of a translation for ``count``.

    Falls back to the base translation when pluralization is disabled, no
    forms are given, the locale has no rule, or the selected form is missing.

    Args:
        translation: Base translation string.
        count: Count driving form selection.
        locale: Locale whose rule is applied.
        plural_forms: Mapping of form tag to string.
        enabled: Whether pluralization is switched on.

    Returns:
        The selected form or the base translation.
    """
    if not enabled or not plural_forms:
        return translation

    form = classify(locale, count)
    if form is None:
        logger.debug("plural_rule_not_found", locale=locale)
        return translation

    return plural_forms.get(form) or translation
