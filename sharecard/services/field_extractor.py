import logging
import re
from abc import ABC, abstractmethod
from typing import Dict, Optional

from .profiles import SourceProfile

logger = logging.getLogger(__name__)

_ESCAPED_DOT = re.compile(r"\\+\.")


def clean_escaped_dots(value: Optional[str]) -> Optional[str]:
    """Collapse backslash runs before a dot (``og-img\\\\.png`` -> ``og-img.png``)"""
    if not value:
        return value
    return _ESCAPED_DOT.sub(".", value)


class FieldExtractorInterface(ABC):
    """Interface for field extraction following the Dependency Inversion Principle"""

    @abstractmethod
    def extract(self, text: str, profile: SourceProfile) -> Dict[str, str]:
        pass


class FieldExtractor(FieldExtractorInterface):
    """
    Applies a profile's pattern rules to raw text
    """

    def extract(self, text: str, profile: SourceProfile) -> Dict[str, str]:
        """
        Extract the best candidate for every field of the profile.

        For each field the first matching rule wins, except that a later rule
        flagged ``override`` replaces the earlier value when it matches too.

        Args:
            text: Raw document or configuration text
            profile: The rule table to apply

        Returns:
            Field name to trimmed value; fields without a match are absent
        """
        extracted: Dict[str, str] = {}
        for field_name, rules in profile.rules.items():
            value = None
            for rule in rules:
                if value is not None and not rule.override:
                    continue
                candidate = rule.match(text)
                if candidate is None:
                    continue
                candidate = candidate.strip()
                if candidate:
                    value = candidate

            if value is None:
                continue
            if field_name in profile.cleanup_fields:
                value = clean_escaped_dots(value)
            extracted[field_name] = value

        logger.debug(f"Extracted fields {sorted(extracted)} with profile '{profile.name}'")
        return extracted
