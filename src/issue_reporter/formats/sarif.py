# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""SARIF 2.1.0 codec."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final

from ..features import Feature
from ..models import Issue, Report
from ..serialization import coerce_dict_sequence, coerce_extra, coerce_mapping
from ..severity import Severity, map_label
from .base import OutputKind, ParsableCodec, load_json_document, require_list
from .option_sets import JsonOptions, MessageOptions, ToolOptions, render_json

SARIF_SCHEMA: Final[str] = "https://json.schemastore.org/sarif-2.1.0.json"
SARIF_VERSION: Final[str] = "2.1.0"

_LEVELS: Final[dict[Severity, str]] = {
    Severity.ERROR: "error",
    Severity.WARNING: "warning",
    Severity.TIP: "note",
}
_SEVERITIES: Final[dict[str, Severity]] = {level: severity for severity, level in _LEVELS.items()}


def _rule(issue: Issue) -> dict[str, Any]:
    rule: dict[str, Any] = {
        "id": issue.code,
        "name": issue.code,
        "fullDescription": {"text": issue.message},
        "defaultConfiguration": {"level": _LEVELS[issue.severity]},
    }
    if issue.ref:
        rule["helpUri"] = issue.ref
    if issue.help:
        rule["help"] = {"text": issue.help}
    return rule


def _region(issue: Issue) -> dict[str, int]:
    # SARIF positions are 1-based; 0 means unknown and is left out.
    region: dict[str, int] = {}
    if issue.line > 0:
        region["startLine"] = issue.line
        region["endLine"] = issue.line
    if issue.column > 0:
        region["startColumn"] = issue.column
        region["endColumn"] = issue.column
    return region


class SarifCodec(ParsableCodec):
    """Static Analysis Results Interchange Format.

    Help text and reference links are stored once per rule, keyed by issue
    code; the first issue seen for a code defines its rule. Extra data is kept
    in each result's ``properties`` bag.
    """

    name = "sarif"
    description = "SARIF (Static Analysis Results Interchange Format) for static analysis"
    output_kind = OutputKind.JSON
    option_sets = (MessageOptions, JsonOptions, ToolOptions)

    def generate(self, report: Report) -> str:
        rules: dict[str, dict[str, Any]] = {}
        results: list[dict[str, Any]] = []
        for path, issues in report.get_issues().items():
            for issue in issues:
                rules.setdefault(issue.code, _rule(issue))
                location: dict[str, Any] = {"artifactLocation": {"uri": path}}
                region = _region(issue)
                if region:
                    location["region"] = region
                result: dict[str, Any] = {
                    "ruleId": issue.code,
                    "level": _LEVELS[issue.severity],
                    "message": {"text": issue.message},
                    "locations": [{"physicalLocation": location}],
                }
                if issue.extra:
                    result["properties"] = dict(issue.extra)
                results.append(result)

        log = {
            "$schema": SARIF_SCHEMA,
            "version": SARIF_VERSION,
            "runs": [
                {
                    "tool": {
                        "driver": {
                            "name": self.settings(ToolOptions).tool_name,
                            "rules": list(rules.values()),
                        }
                    },
                    "results": results,
                }
            ],
        }
        return render_json(log, self.settings(JsonOptions))

    def parse(self, text: str, name: str | None = None) -> Report:
        document = load_json_document(text, self.name)
        records = []
        for run in require_list(document, "runs", self.name):
            run_data = coerce_mapping(run)
            driver = coerce_mapping(coerce_mapping(run_data.get("tool")).get("driver"))
            rules = {str(rule.get("id")): rule for rule in coerce_dict_sequence(driver.get("rules"))}
            for result in coerce_dict_sequence(run_data.get("results")):
                records.append(self._parse_result(result, rules))
        return self._build_report(records, name=None, fallback=name)

    def _parse_result(self, result: Mapping[str, Any], rules: Mapping[str, Mapping[str, Any]]) -> dict[str, Any]:
        code = result.get("ruleId")
        rule = rules.get(str(code), {})
        locations = coerce_dict_sequence(result.get("locations"))
        physical = coerce_mapping(locations[0].get("physicalLocation")) if locations else {}
        region = coerce_mapping(physical.get("region"))
        return self.issue_record(
            code=code,
            severity=map_label(result.get("level"), _SEVERITIES),
            message=coerce_mapping(result.get("message")).get("text"),
            path=coerce_mapping(physical.get("artifactLocation")).get("uri"),
            line=region.get("startLine"),
            column=region.get("startColumn"),
            help=coerce_mapping(rule.get("help")).get("text"),
            ref=rule.get("helpUri"),
            extra=coerce_extra(result.get("properties")),
        )

    @classmethod
    def supports(cls) -> frozenset[Feature]:
        return frozenset(
            {
                Feature.PRESERVE_SEVERITY,
                Feature.ISSUE_LINE,
                Feature.ISSUE_COLUMN,
                Feature.ISSUE_CODE,
                Feature.ISSUE_HELP,
                Feature.ISSUE_REF,
            }
        )

    @classmethod
    def supports_extra(cls) -> frozenset[Feature]:
        return frozenset({Feature.ISSUE_EXTRA})


__all__ = ["SarifCodec"]
