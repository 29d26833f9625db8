"""Turn assessment answers into the phrases substituted into guide text."""

from __future__ import annotations

import logging
import re
from typing import Callable, Dict, List, Optional

from painguide.models.request import AssessmentResponses

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*([A-Za-z_][A-Za-z0-9_]*)\s*\}\}")

PAIN_LOCATIONS: Dict[str, str] = {
    "back_only": "your lower back",
    "back_one_leg": "your lower back and one leg",
    "back_both_legs": "your lower back and both legs",
    "groin_thigh": "your groin or front of thigh",
}

PAIN_TRIGGERS: Dict[str, str] = {
    "bending_backward": "Extending or arching your back",
    "getting_up": "Transitional movements (sitting to standing)",
    "sitting_long": "Prolonged sitting",
    "bending_forward": "Forward bending",
    "standing_walking": "Weight-bearing activities",
}

LEG_REGIONS: Dict[str, str] = {
    "buttock_back_thigh": "your buttock and back of thigh",
    "groin_front_thigh": "your groin and front of thigh",
    "side_thigh": "the side of your thigh",
}

RELIEVING_FACTORS: Dict[str, str] = {
    "sitting_bending": "sitting or bending forward",
    "lying_down": "lying down",
    "nothing": "nothing in particular",
}

FALLBACKS: Dict[str, str] = {
    "painLocation": "the affected area",
    "numbLocation": "the affected areas",
    "radiationPattern": "the affected area",
    "painTrigger": "certain movements",
    "aggravatingFactors": "certain activities",
    "mobilityImpact": "It affects your daily activities",
    "painIntensity": "your reported pain level",
    "relievingFactors": "rest",
    "duration": "the past several weeks",
}


def interpret_pain_triggers(codes: List[str]) -> List[str]:
    return [PAIN_TRIGGERS.get(code, code) for code in codes]


def join_phrases(phrases: List[str]) -> str:
    """Join as "a, b and c"."""
    if len(phrases) <= 1:
        return "".join(phrases)
    return f"{', '.join(phrases[:-1])} and {phrases[-1]}"


def describe_intensity(score: float) -> str:
    if score >= 7:
        return "severe"
    if score >= 4:
        return "moderate"
    return "mild"


def _format_score(score: float) -> str:
    return str(int(score)) if float(score).is_integer() else f"{score:g}"


def pain_location(responses: AssessmentResponses) -> Optional[str]:
    code = responses.get("Q1")
    if code is None:
        return None
    return PAIN_LOCATIONS.get(code, FALLBACKS["painLocation"])


def numb_location(responses: AssessmentResponses) -> Optional[str]:
    if "numbness" not in responses.get_list("Q6"):
        return None
    region = responses.get("Q5")
    if region:
        return LEG_REGIONS.get(region, "your leg")
    q1 = responses.get("Q1")
    if q1 == "back_both_legs":
        return "both legs"
    if q1 == "back_one_leg":
        return "one leg"
    return None


def radiation_pattern(responses: AssessmentResponses) -> Optional[str]:
    if responses.get("Q4") == "yes":
        return "below your knee"
    region = responses.get("Q5")
    if region:
        return LEG_REGIONS.get(region, "your leg")
    return None


def pain_trigger(responses: AssessmentResponses) -> Optional[str]:
    triggers = interpret_pain_triggers(responses.get_list("Q2"))
    if not triggers:
        return None
    return join_phrases(triggers).lower()


def aggravating_factors(responses: AssessmentResponses) -> Optional[str]:
    triggers = interpret_pain_triggers(responses.get_list("Q2"))
    if not triggers:
        return None
    return ", ".join(triggers).lower()


def mobility_impact(responses: AssessmentResponses) -> Optional[str]:
    if "walking" in responses.get_list("Q6"):
        return "It affects your ability to walk distances"
    daily = responses.get_list("Q9")
    if "prolonged_standing" in daily:
        return "It affects your ability to stand for long periods"
    if "getting_dressed" in daily:
        return "It affects your ability to perform daily tasks like getting dressed"
    return None


def pain_intensity(responses: AssessmentResponses) -> Optional[str]:
    if responses.pain_score is None:
        return None
    score = responses.pain_score
    return f"{_format_score(score)}/10 ({describe_intensity(score)})"


def relieving_factors(responses: AssessmentResponses) -> Optional[str]:
    code = responses.get("Q8")
    if code is None:
        return None
    return RELIEVING_FACTORS.get(code, FALLBACKS["relievingFactors"])


def duration(responses: AssessmentResponses) -> Optional[str]:
    # The questionnaire has no duration question.
    return None


RESOLVERS: Dict[str, Callable[[AssessmentResponses], Optional[str]]] = {
    "painLocation": pain_location,
    "numbLocation": numb_location,
    "radiationPattern": radiation_pattern,
    "painTrigger": pain_trigger,
    "aggravatingFactors": aggravating_factors,
    "mobilityImpact": mobility_impact,
    "painIntensity": pain_intensity,
    "relievingFactors": relieving_factors,
    "duration": duration,
}


def resolve_values(responses: AssessmentResponses) -> Dict[str, str]:
    """Compute the substitution text for every known placeholder."""
    values: Dict[str, str] = {}
    for name, resolver in RESOLVERS.items():
        values[name] = resolver(responses) or FALLBACKS[name]
    return values


def resolve_placeholders(markdown: str, responses: AssessmentResponses | None = None) -> str:
    """Replace every ``{{name}}`` token; unknown names are dropped."""
    if not markdown:
        return ""
    values = resolve_values(responses or AssessmentResponses())
    unknown: List[str] = []

    def substitute(match: re.Match) -> str:
        name = match.group(1)
        if name in values:
            return values[name]
        unknown.append(name)
        return ""

    resolved = PLACEHOLDER_PATTERN.sub(substitute, markdown)
    if unknown:
        logger.warning("Removed unknown placeholders: %s", ", ".join(sorted(set(unknown))))
    return resolved
