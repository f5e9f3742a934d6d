"""
Define el contenedor de imagen decodificada que circula entre los nodos.
"""
from dataclasses import dataclass

import cv2
import numpy as np

from src.domain.errors import DecodeError, MissingDimensionsError


@dataclass(frozen=True, eq=False)
class RawImage:
    """
    Imagen decodificada en memoria, en el orden de canales de OpenCV (BGR).

    Cada etapa recibe una instancia y produce una nueva; ninguna modifica el
    array de otra etapa.

    Attributes:
        pixels (np.ndarray): Array (alto, ancho, canales) de tipo uint8.
    """
    pixels: np.ndarray

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def total_pixels(self) -> int:
        return self.width * self.height

    @classmethod
    def from_bytes(cls, data: bytes) -> "RawImage":
        """
        Decodifica bytes comprimidos (JPEG, PNG, ...) a una imagen BGR.

        Raises:
            DecodeError: Si los bytes están vacíos o OpenCV no los reconoce.
        """
        if not data:
            raise DecodeError("No se recibieron bytes de imagen para decodificar.")
        np_arr = np.frombuffer(data, np.uint8)
        image = cv2.imdecode(np_arr, cv2.IMREAD_COLOR)
        if image is None:
            raise DecodeError(f"OpenCV no pudo decodificar {len(data)} bytes de imagen.")
        return cls(image)

    def ensure_dimensions(self) -> None:
        """
        Raises:
            MissingDimensionsError: Si el array no tiene forma de imagen.
        """
        if self.pixels is None or self.pixels.ndim < 2 or 0 in self.pixels.shape[:2]:
            raise MissingDimensionsError("No se pudo obtener las dimensiones de la imagen.")

