import pytest

from src.domain import AlertLevel, ColorDetectionResult
from src.nodes.alerts import AlertClassifierNode, classify_alert


def _detection(red=0.0, yellow=0.0, threshold=0.5):
    return ColorDetectionResult(
        has_red=red >= threshold,
        has_yellow=yellow >= threshold,
        red_percentage=red,
        yellow_percentage=yellow,
        total_pixels=1000,
    )


def test_red_wins_over_yellow():
    status = classify_alert(_detection(red=12.0, yellow=40.0), threshold=0.5)

    assert status.level is AlertLevel.RED
    assert status.label == "STRONG CURRENTS"
    assert status.label_spanish == "Corrientes Fuertes"


def test_yellow_when_no_red():
    status = classify_alert(_detection(yellow=3.2), threshold=0.5)

    assert status.level is AlertLevel.YELLOW
    assert status.label == "MODERATE CURRENTS"
    assert status.label_spanish == "Corrientes Moderadas"


def test_calm_when_nothing_exceeds_threshold():
    status = classify_alert(_detection(red=0.3, yellow=0.1), threshold=0.5)

    assert status.level is AlertLevel.CALM
    assert status.label == "CALM CONDITIONS"
    assert status.label_spanish == "Condiciones Calmas"


def test_threshold_comparison_is_strict():
    assert classify_alert(_detection(red=0.5), threshold=0.5).level is AlertLevel.CALM
    assert classify_alert(_detection(red=0.51), threshold=0.5).level is AlertLevel.RED


@pytest.mark.parametrize("lang, expected", [
    ("en", "STRONG CURRENTS"),
    ("es", "Corrientes Fuertes"),
    ("ES", "Corrientes Fuertes"),
    ("fr", "STRONG CURRENTS"),
])
def test_status_payload_by_language(lang, expected):
    payload = classify_alert(_detection(red=30.0)).to_payload(lang)

    assert payload["level"] == "red"
    assert payload["label"] == expected
    assert payload["lang"] in ("en", "es")


def test_node_sets_alert_status():
    context = AlertClassifierNode(threshold=0.5).run({"color_detection": _detection(yellow=5.0)})

    assert context["alert_status"].level is AlertLevel.YELLOW
