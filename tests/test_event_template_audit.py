from __future__ import annotations

import importlib.util
import string
import sys
from pathlib import Path

from irc_relay.logs.event_catalog import EVENT_TEMPLATES

_SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "event_template_audit.py"


def _load_audit():
    spec = importlib.util.spec_from_file_location("event_template_audit", _SCRIPT)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = module
    spec.loader.exec_module(module)
    return module


def test_every_logged_event_has_a_template():
    result = _load_audit().diff()
    assert result.missing == set(), sorted(result.missing)
    assert result.discrepancy == set()


def test_no_orphan_templates():
    result = _load_audit().diff()
    assert result.unused == set(), sorted(result.unused)


def test_extract_references_follows_ternaries(tmp_path):
    src = tmp_path / "mod.py"
    src.write_text(
        "logger.log_event('irc', 'a' if x else 'b', user=u)\n"
        "self.logger.log_event(domain='slack', action='c')\n"
        "logger.log_event(dynamic, 'ignored')\n",
        encoding="utf-8",
    )
    refs = _load_audit().extract_references([src])
    assert refs == {("irc", "a"), ("irc", "b"), ("slack", "c")}


def test_templates_render_with_their_fields():
    failures = []
    for (domain, action), template in EVENT_TEMPLATES.items():
        fields = {name for _, name, _, _ in string.Formatter().parse(template) if name}
        try:
            template.format(**dict.fromkeys(fields, "x"))
        except (KeyError, IndexError, ValueError) as e:
            failures.append((domain, action, str(e)))
    assert failures == []
