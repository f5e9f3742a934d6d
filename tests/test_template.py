import datetime as dt
import re
from pathlib import Path

import pytest

from src.domain import AlertLevel, TemplateError
from src.nodes.alerts import ALERT_STATUSES
from src.nodes.template import TemplateMutatorNode, format_report_date, mutate_template

TEMPLATE_PATH = Path(__file__).resolve().parents[1] / "public" / "template.html"
DATE = dt.date(2024, 1, 1)


@pytest.fixture
def template():
    return TEMPLATE_PATH.read_text(encoding="utf-8")


def _visible_overlays(html):
    pattern = re.compile(r'<div class="([^"]*status-overlay[^"]*)" id="status-([a-z]+)">')
    return [level for classes, level in pattern.findall(html) if "hidden" not in classes.split()]


@pytest.mark.parametrize("level", list(AlertLevel))
def test_only_matching_overlay_is_visible(template, level):
    html = mutate_template(template, ALERT_STATUSES[level], DATE)

    assert _visible_overlays(html) == [level.value]


def test_mutation_is_idempotent(template):
    status = ALERT_STATUSES[AlertLevel.YELLOW]

    once = mutate_template(template, status, DATE)
    twice = mutate_template(once, status, DATE)

    assert once == twice
    assert "hidden hidden" not in twice


def test_switching_level_on_mutated_output(template):
    red = mutate_template(template, ALERT_STATUSES[AlertLevel.RED], DATE)

    calm = mutate_template(red, ALERT_STATUSES[AlertLevel.CALM], DATE)

    assert _visible_overlays(calm) == ["calm"]
    assert calm == mutate_template(template, ALERT_STATUSES[AlertLevel.CALM], DATE)


def test_date_is_replaced(template):
    html = mutate_template(template, ALERT_STATUSES[AlertLevel.RED], dt.date(2025, 7, 4))

    assert '<span class="date-text">Friday, July 4, 2025</span>' in html


def test_format_report_date():
    assert format_report_date(DATE) == "Monday, January 1, 2024"


def test_missing_overlay_is_rejected(template):
    broken = template.replace('id="status-yellow"', 'id="status-other"')

    with pytest.raises(TemplateError):
        mutate_template(broken, ALERT_STATUSES[AlertLevel.RED], DATE)


def test_missing_date_placeholder_is_rejected(template):
    broken = template.replace('class="date-text"', 'class="date"')

    with pytest.raises(TemplateError):
        mutate_template(broken, ALERT_STATUSES[AlertLevel.RED], DATE)


def test_node_writes_report_html(tmp_path):
    output = tmp_path / "index.html"
    node = TemplateMutatorNode(TEMPLATE_PATH, output, today=lambda: DATE)

    context = node.run({"alert_status": ALERT_STATUSES[AlertLevel.RED]})

    assert context["report_html_path"] == output
    assert _visible_overlays(output.read_text(encoding="utf-8")) == ["red"]


def test_node_reports_missing_template(tmp_path):
    node = TemplateMutatorNode(tmp_path / "missing.html", tmp_path / "index.html")

    with pytest.raises(TemplateError):
        node.run({"alert_status": ALERT_STATUSES[AlertLevel.RED]})
