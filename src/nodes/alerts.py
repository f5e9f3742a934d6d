"""
Derivación del nivel de alerta a partir de la detección de colores.

Es el único lugar del sistema donde se decide la precedencia
rojo > amarillo > calma.
"""
import logging
from typing import Any, Dict

from src.domain.schemas.alert import AlertLevel, AlertStatus, ColorDetectionResult
from src.nodes.base import PipelineNode

ALERT_STATUSES = {
    AlertLevel.RED: AlertStatus(
        level=AlertLevel.RED,
        label="STRONG CURRENTS",
        label_english="STRONG CURRENTS",
        label_spanish="Corrientes Fuertes",
    ),
    AlertLevel.YELLOW: AlertStatus(
        level=AlertLevel.YELLOW,
        label="MODERATE CURRENTS",
        label_english="MODERATE CURRENTS",
        label_spanish="Corrientes Moderadas",
    ),
    AlertLevel.CALM: AlertStatus(
        level=AlertLevel.CALM,
        label="CALM CONDITIONS",
        label_english="CALM CONDITIONS",
        label_spanish="Condiciones Calmas",
    ),
}


def classify_alert(detection: ColorDetectionResult, threshold: float = 0.5) -> AlertStatus:
    """
    Determina el nivel de alerta; gana la primera regla que se cumple.

    1. `red_percentage > threshold` -> rojo.
    2. `yellow_percentage > threshold` -> amarillo.
    3. En otro caso -> calma.
    """
    if detection.red_percentage > threshold:
        return ALERT_STATUSES[AlertLevel.RED]
    if detection.yellow_percentage > threshold:
        return ALERT_STATUSES[AlertLevel.YELLOW]
    return ALERT_STATUSES[AlertLevel.CALM]


class AlertClassifierNode(PipelineNode):
    def __init__(self, threshold: float = 0.5, name: str = "alert_classifier"):
        super().__init__(name)
        self.threshold = threshold

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        detection: ColorDetectionResult = self._require(context, "color_detection")
        status = classify_alert(detection, self.threshold)

        if status.level is AlertLevel.RED:
            logging.warning("[%s] 🔴 ALERTA ROJA: Detectado %.2f%% de rojo", self.name, detection.red_percentage)
        elif status.level is AlertLevel.YELLOW:
            logging.warning("[%s] 🟡 PRECAUCIÓN: Detectado %.2f%% de amarillo", self.name, detection.yellow_percentage)
        else:
            logging.info("[%s] ✅ CONDICIONES CALMAS: No se detectaron colores de advertencia", self.name)

        context["alert_status"] = status
        return context
