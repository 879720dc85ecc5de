from collections.abc import Sequence
from typing import Any

from fundintake.extraction.matchers import FieldRule
from fundintake.extraction.models import ExtractionResult, FieldName
from fundintake.extraction.text import normalize_text
from fundintake.logging.logger import Log


class ExtractionEngine:
    """Runs field rules in order; first matcher with a value wins per field.

    ``run`` never raises. Non-string or blank input marks every
    unconditional rule as failed.
    """

    def __init__(self, rules: Sequence[FieldRule], name: str = "extraction") -> None:
        self._rules = tuple(rules)
        self._name = name

    @property
    def rules(self) -> tuple[FieldRule, ...]:
        return self._rules

    def run(self, raw: object) -> ExtractionResult:
        if not isinstance(raw, str) or not raw.strip():
            Log.info(f"{self._name}: empty or non-text input, nothing to parse")
            failed = frozenset(rule.field for rule in self._rules if rule.condition is None)
            return ExtractionResult(failed_to_parse=failed)

        text = normalize_text(raw)
        Log.debug(f"{self._name}: parsing {len(text)} chars")
        fields, parsed, failed = self.run_rules(text)
        Log.info(
            f"{self._name}: {len(parsed)} fields parsed, {len(failed)} failed",
            failed=sorted(field.value for field in failed),
        )
        return ExtractionResult(
            fields=fields,
            successfully_parsed=frozenset(parsed),
            failed_to_parse=frozenset(failed),
        )

    def run_rules(
        self, text: str
    ) -> tuple[dict[FieldName, Any], set[FieldName], set[FieldName]]:
        """Apply every rule to already-normalized text."""
        fields: dict[FieldName, Any] = {}
        parsed: set[FieldName] = set()
        failed: set[FieldName] = set()
        for rule in self._rules:
            if not rule.applies(fields):
                continue
            value = self._first_match(rule, text)
            if value is None:
                failed.add(rule.field)
            else:
                fields[rule.field] = value
                parsed.add(rule.field)
        return fields, parsed, failed

    def _first_match(self, rule: FieldRule, text: str) -> Any:
        for matcher in rule.matchers:
            try:
                value = matcher(text)
            except Exception as exc:  # noqa: BLE001
                Log.warning(
                    f"{self._name}: matcher {getattr(matcher, '__name__', matcher)} "
                    f"for {rule.field.value} raised {exc!r}"
                )
                continue
            Log.debug(
                f"{self._name}: {rule.field.value} <- "
                f"{getattr(matcher, '__name__', 'matcher')}: {value!r}"
            )
            if value is not None:
                return value
        return None
