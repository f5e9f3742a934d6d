"""
Define los esquemas de datos de la detección de colores y del nivel de alerta
resultante.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


@dataclass(frozen=True)
class ColorDetectionResult:
    """
    Resultado del conteo de píxeles rojos y amarillos de una imagen.

    El umbral usado para calcular `has_red` y `has_yellow` no se guarda aquí;
    pertenece a la llamada de detección que produjo el resultado.

    Attributes:
        has_red (bool): `red_percentage >= umbral`.
        has_yellow (bool): `yellow_percentage >= umbral`.
        red_percentage (float): Porcentaje de píxeles rojos, en [0, 100],
            redondeado a dos decimales.
        yellow_percentage (float): Porcentaje de píxeles amarillos, en [0, 100],
            redondeado a dos decimales.
        total_pixels (int): Número de píxeles analizados.
    """
    has_red: bool
    has_yellow: bool
    red_percentage: float
    yellow_percentage: float
    total_pixels: int


class AlertLevel(str, Enum):
    RED = "red"
    YELLOW = "yellow"
    CALM = "calm"


@dataclass(frozen=True)
class AlertStatus:
    """
    Nivel de alerta con sus etiquetas en inglés y español.

    Attributes:
        level (AlertLevel): Nivel de alerta.
        label (str): Etiqueta principal del reporte (inglés).
        label_english (str): Etiqueta en inglés.
        label_spanish (str): Etiqueta en español.
    """
    level: AlertLevel
    label: str
    label_english: str
    label_spanish: str

    def label_for(self, lang: str) -> str:
        """Devuelve la etiqueta del idioma pedido; inglés para idiomas desconocidos."""
        if (lang or "").lower() == "es":
            return self.label_spanish
        return self.label_english

    def to_payload(self, lang: str = "en") -> Dict[str, Any]:
        lang = "es" if (lang or "").lower() == "es" else "en"
        return {
            "level": self.level.value,
            "label": self.label_for(lang),
            "lang": lang,
        }
