"""Fixed answers for product questions, checked before retrieval.

Rules are evaluated in order and the first match wins, so more specific
rules go first.
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from .messages import get_message


@dataclass(frozen=True)
class OverrideRule:
    """A predicate over the user's message and the message key it answers with."""

    name: str
    predicate: Callable[[str], bool]
    message_key: str


def keyword_predicate(*patterns: str) -> Callable[[str], bool]:
    """Match when any of the case-insensitive regex ``patterns`` occurs."""
    compiled = [re.compile(p, re.IGNORECASE) for p in patterns]

    def predicate(message: str) -> bool:
        return any(p.search(message) for p in compiled)

    return predicate


DEFAULT_RULES: tuple[OverrideRule, ...] = (
    OverrideRule(
        name="irs_submission",
        predicate=keyword_predicate(
            r"e-?file",
            r"(submit|send|file).{0,30}\birs\b",
            r"\birs\b.{0,30}(submit|send)",
            r"전자\s*신고",
            r"irs.{0,20}(제출|전송)",
            r"(제출|전송).{0,20}irs",
        ),
        message_key="irs_submission",
    ),
    OverrideRule(
        name="mobile_app",
        predicate=keyword_predicate(
            r"\bmobile app\b",
            r"\bapp store\b",
            r"\bdownload.{0,20}\bapp\b",
            r"(앱|어플).{0,10}(있|다운|설치)",
            r"모바일\s*(앱|어플)",
        ),
        message_key="mobile_app",
    ),
)


class OverridePolicy:
    """Prioritized list of canned answers placed in front of the RAG pipeline."""

    def __init__(self, rules: Sequence[OverrideRule] = DEFAULT_RULES):
        self.rules = list(rules)

    def match(self, message: str) -> Optional[OverrideRule]:
        for rule in self.rules:
            if rule.predicate(message):
                return rule
        return None

    def respond(self, message: str, language: str = "ko") -> Optional[str]:
        """Return the canned answer for ``message``, or None to fall through."""
        rule = self.match(message)
        if rule is None:
            return None
        return get_message(rule.message_key, language)
