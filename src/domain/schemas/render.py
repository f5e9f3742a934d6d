"""
Define los parámetros de renderizado y codificación del reporte final.
"""
from dataclasses import dataclass

OUTPUT_FORMATS = ("png", "jpeg")


@dataclass(frozen=True)
class RenderSpec:
    """
    Configuración inmutable de la captura y del reescalado del reporte.

    La captura se hace a `viewport * device_scale_factor` píxeles reales y
    luego se reescala a `target_width` manteniendo la proporción.

    Attributes:
        viewport_width (int): Ancho lógico del viewport del navegador.
        viewport_height (int): Alto lógico del viewport del navegador.
        device_scale_factor (float): Multiplicador de supermuestreo.
        target_width (int): Ancho final del reporte en píxeles.
        format (str): 'png' (sin pérdida) o 'jpeg' (con pérdida).
        jpeg_quality (int): Calidad JPEG (0-100).
        png_compression (int): Nivel de compresión PNG (0-9).
    """
    viewport_width: int = 930
    viewport_height: int = 1500
    device_scale_factor: float = 2.0
    target_width: int = 1500
    format: str = "png"
    jpeg_quality: int = 95
    png_compression: int = 6

    def __post_init__(self):
        if self.format not in OUTPUT_FORMATS:
            raise ValueError(f"Formato de salida no soportado: '{self.format}'. Use uno de {OUTPUT_FORMATS}.")
        if self.target_width <= 0:
            raise ValueError("target_width debe ser positivo.")

    @property
    def extension(self) -> str:
        return ".jpg" if self.format == "jpeg" else ".png"


@dataclass(frozen=True)
class BrowserTimeouts:
    """
    Límites de espera del motor de renderizado, en milisegundos.
    """
    launch_ms: int = 30000
    navigation_ms: int = 10000
    selector_ms: int = 10000
    element_ms: int = 3000
    grace_delay_ms: int = 500
