"""
Clasificación de píxeles por color sobre la imagen del pronóstico.

Reglas por píxel (canales en 0-255):
    rojo:     R > 150 y R > 1.5·G y R > 1.5·B
    amarillo: R > 150 y G > 150 y B < 150 y |R - G| <= 50

Un píxel cuenta en una sola categoría: el rojo se evalúa primero y el
amarillo solo sobre los píxeles que no resultaron rojos.
"""
import logging
from typing import Any, Dict, Tuple

import numpy as np

from src.domain.schemas.alert import ColorDetectionResult
from src.domain.schemas.image import RawImage
from src.nodes.base import PipelineNode

CHANNEL_MIN = 150
RED_RATIO = 1.5
YELLOW_MAX_RG_DIFF = 50


def _split_rgb(image: RawImage) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    pixels = image.pixels
    if pixels.ndim == 2:
        gray = pixels.astype(np.int32)
        return gray, gray, gray
    # OpenCV guarda BGR(A)
    b = pixels[..., 0].astype(np.int32)
    g = pixels[..., 1].astype(np.int32)
    r = pixels[..., 2].astype(np.int32)
    return r, g, b


def color_masks(image: RawImage) -> Tuple[np.ndarray, np.ndarray]:
    """
    Calcula las máscaras booleanas de píxeles rojos y amarillos.

    Returns:
        Tuple[np.ndarray, np.ndarray]: (mascara_roja, mascara_amarilla), ambas
        disjuntas y con la forma (alto, ancho) de la imagen.
    """
    r, g, b = _split_rgb(image)
    bright_red = r > CHANNEL_MIN

    # R > 1.5*G  <=>  2R > 3G, evita flotantes
    red = bright_red & (2 * r > 3 * g) & (2 * r > 3 * b)
    yellow = (
        ~red
        & bright_red
        & (g > CHANNEL_MIN)
        & (b < CHANNEL_MIN)
        & (np.abs(r - g) <= YELLOW_MAX_RG_DIFF)
    )
    return red, yellow


def detect_colors(image: RawImage, threshold: float = 0.5) -> ColorDetectionResult:
    """
    Cuenta los píxeles rojos y amarillos de la imagen.

    Args:
        image (RawImage): Imagen ya decodificada.
        threshold (float): Porcentaje mínimo para marcar un color como
            presente (`has_red`, `has_yellow`).

    Returns:
        ColorDetectionResult: Porcentajes redondeados a dos decimales.

    Raises:
        MissingDimensionsError: Si la imagen no tiene píxeles.
    """
    image.ensure_dimensions()
    total_pixels = image.total_pixels

    red, yellow = color_masks(image)
    red_count = int(np.count_nonzero(red))
    yellow_count = int(np.count_nonzero(yellow))

    red_percentage = round(red_count / total_pixels * 100, 2)
    yellow_percentage = round(yellow_count / total_pixels * 100, 2)

    has_red = red_percentage >= threshold
    has_yellow = yellow_percentage >= threshold

    logging.debug("Píxeles rojos: %d (%.2f%%)", red_count, red_percentage)
    logging.debug("Píxeles amarillos: %d (%.2f%%)", yellow_count, yellow_percentage)
    logging.info("Detección - Rojo: %s, Amarillo: %s", has_red, has_yellow)

    return ColorDetectionResult(
        has_red=has_red,
        has_yellow=has_yellow,
        red_percentage=red_percentage,
        yellow_percentage=yellow_percentage,
        total_pixels=total_pixels,
    )


class ColorDetectionNode(PipelineNode):
    """
    Detecta la presencia de rojo y amarillo en la imagen recortada.
    """
    def __init__(self, threshold: float = 0.5, name: str = "color_detection"):
        super().__init__(name)
        self.threshold = threshold

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        """
        Context Inputs:
            - `image` (RawImage): Imagen recortada.

        Context Outputs:
            - `color_detection` (ColorDetectionResult)
        """
        image: RawImage = self._require(context, "image")
        logging.info("[%s] Detectando colores rojo y amarillo (umbral: %.2f%%)...", self.name, self.threshold)

        detection = detect_colors(image, self.threshold)
        context["color_detection"] = detection

        logging.info("[%s] Rojo: %.2f%% | Amarillo: %.2f%% de %d píxeles.", self.name,
                     detection.red_percentage, detection.yellow_percentage, detection.total_pixels)
        return context
