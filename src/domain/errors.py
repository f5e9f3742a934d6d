"""
Jerarquía de excepciones del pipeline de pronóstico.

Cada etapa del pipeline lanza una subclase de `ForecastError`. Ninguna se
reintenta dentro del pipeline: se registran con contexto y se propagan al
orquestador, que deja fallar la ejecución completa.
"""
from typing import Optional


class ForecastError(Exception):
    """Error base para cualquier fallo del pipeline de pronóstico."""


class FetchError(ForecastError):
    """
    Fallo de red o respuesta HTTP no exitosa al descargar la imagen fuente.

    Attributes:
        url (str): La URL solicitada.
        status_code (Optional[int]): Código HTTP recibido, o None si la
            petición no llegó a obtener respuesta.
    """
    def __init__(self, url: str, status_code: Optional[int] = None, reason: str = ""):
        self.url = url
        self.status_code = status_code
        self.reason = reason
        if status_code is not None:
            message = f"Error al descargar imagen: HTTP {status_code} {reason}".rstrip() + f" ({url})"
        else:
            message = f"Error de red al descargar imagen: {url} ({reason})"
        super().__init__(message)


class ImageProcessingError(ForecastError):
    """Error base para imágenes ilegibles o con geometría inválida."""


class DecodeError(ImageProcessingError):
    """Los bytes recibidos no se pudieron decodificar como imagen."""


class MissingDimensionsError(ImageProcessingError):
    """La imagen no expone ancho y alto conocidos."""


class ExtractAreaError(ImageProcessingError):
    """El área a extraer de la imagen es vacía o queda fuera de sus límites."""


class TemplateError(ForecastError):
    """La plantilla HTML no existe o no contiene las marcas esperadas."""


class RenderError(ForecastError):
    """Error base del motor de renderizado."""


class RenderLaunchError(RenderError):
    """El navegador no pudo iniciarse dentro del tiempo límite."""


class CaptureError(RenderError):
    """Se agotaron todas las estrategias de captura."""


class ResampleError(ForecastError):
    """La captura no se pudo leer, redimensionar o codificar."""
