"""Audit tool for event templates.

Compares the ``log_event(domain, action, ...)`` calls found in the package
source against ``irc_relay/logs/event_templates.json``.
"""

from __future__ import annotations

import argparse
import ast
import json
import sys
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from irc_relay.logs import event_catalog  # noqa: E402

PACKAGE_ROOT = PROJECT_ROOT / "irc_relay"
TEMPLATES_JSON = PACKAGE_ROOT / "logs" / "event_templates.json"


def iter_python_files(root: Path) -> Iterable[Path]:
    for path in root.rglob("*.py"):
        if path.name.startswith("."):
            continue
        yield path


def _gather_string_literals(expr: ast.AST) -> set[str]:
    """Return all string literal values contained in expr.

    Ternary (IfExp) branches are followed; anything dynamic is skipped.
    """
    out: set[str] = set()
    if isinstance(expr, ast.Constant) and isinstance(expr.value, str):
        out.add(expr.value)
    elif isinstance(expr, ast.IfExp):
        out.update(_gather_string_literals(expr.body))
        out.update(_gather_string_literals(expr.orelse))
    return out


def _extract_from_call(node: ast.Call) -> set[tuple[str, str]]:
    domain_expr: ast.AST | None = node.args[0] if node.args else None
    action_expr: ast.AST | None = node.args[1] if len(node.args) >= 2 else None
    for kw in node.keywords or []:
        if kw.arg == "domain":
            domain_expr = kw.value
        elif kw.arg == "action":
            action_expr = kw.value
    if not (
        isinstance(domain_expr, ast.Constant) and isinstance(domain_expr.value, str)
    ):
        return set()
    if action_expr is None:
        return set()
    return {(domain_expr.value, a) for a in _gather_string_literals(action_expr)}


def extract_references(paths: Iterable[Path]) -> set[tuple[str, str]]:
    """Extract (domain, action) pairs from ``*.log_event`` calls."""
    refs: set[tuple[str, str]] = set()
    for path in paths:
        try:
            tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
        except (OSError, UnicodeDecodeError, SyntaxError):
            continue
        for node in ast.walk(tree):
            if (
                isinstance(node, ast.Call)
                and isinstance(node.func, ast.Attribute)
                and node.func.attr == "log_event"
            ):
                refs.update(_extract_from_call(node))
    return refs


def load_templates_from_json(path: Path = TEMPLATES_JSON) -> set[tuple[str, str]]:
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError:
        return set()
    result: set[tuple[str, str]] = set()
    if isinstance(raw, dict):
        for domain, actions in raw.items():
            if isinstance(actions, dict):
                for action in actions:
                    result.add((domain, action))
    return result


@dataclass(slots=True)
class DiffResult:
    missing: set[tuple[str, str]]
    unused: set[tuple[str, str]]
    discrepancy: set[tuple[str, str]]


def diff(root: Path = PACKAGE_ROOT) -> DiffResult:
    event_catalog.reload_event_templates()
    code_refs = extract_references(iter_python_files(root))
    json_templates = load_templates_from_json()
    loaded_templates = set(event_catalog.EVENT_TEMPLATES.keys())
    return DiffResult(
        missing=code_refs - json_templates,
        unused=json_templates - code_refs,
        discrepancy=loaded_templates ^ json_templates,
    )


def parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Audit event templates vs code usages")
    parser.add_argument(
        "--json-output", action="store_true", help="Emit JSON diff result"
    )
    return parser.parse_args(argv)


def emit_json(d: DiffResult) -> None:
    print(
        json.dumps(
            {
                "missing": sorted(d.missing),
                "unused": sorted(d.unused),
                "discrepancy": sorted(d.discrepancy),
            },
            indent=2,
        )
    )


def emit_human(d: DiffResult) -> None:
    print("Event Template Audit Report")
    print("============================")
    for title, pairs in (
        ("Missing templates", d.missing),
        ("Unused templates", d.unused),
        ("Discrepancy between JSON and loaded templates", d.discrepancy),
    ):
        if not pairs:
            print(f"{title}: none")
            continue
        print(f"{title} ({len(pairs)}):")
        for domain, action in sorted(pairs):
            print(f"  - {domain}:{action}")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    result = diff()
    if args.json_output:
        emit_json(result)
    else:
        emit_human(result)
    return 1 if result.missing else 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
