"""
Nodos del pipeline que decodifican, recortan y guardan la imagen del
pronóstico.
"""
import logging
from pathlib import Path
from typing import Any, Dict

import cv2

from src.domain.errors import ExtractAreaError, ImageProcessingError
from src.domain.schemas.image import RawImage
from src.nodes.base import PipelineNode


def crop_image(image: RawImage, top: int, bottom: int) -> RawImage:
    """
    Elimina `top` píxeles superiores y `bottom` inferiores de la imagen.

    Extrae el rectángulo `[0, top, ancho, alto - top - bottom]`. Los márgenes
    no se ajustan: si la altura resultante no es positiva la extracción falla.

    Args:
        image (RawImage): Imagen de origen.
        top (int): Píxeles a quitar arriba.
        bottom (int): Píxeles a quitar abajo.

    Returns:
        RawImage: Nueva imagen con la altura recalculada.

    Raises:
        MissingDimensionsError: La imagen no tiene dimensiones conocidas.
        ExtractAreaError: Márgenes negativos o altura final no positiva.
    """
    image.ensure_dimensions()
    width, height = image.width, image.height
    new_height = height - top - bottom

    logging.debug("Recortando imagen: top=%dpx, bottom=%dpx", top, bottom)
    logging.debug("Dimensiones originales: %dx%d", width, height)
    logging.debug("Dimensiones finales: %dx%d", width, new_height)

    if top < 0 or bottom < 0 or new_height <= 0:
        raise ExtractAreaError(
            f"Área de extracción inválida: left=0, top={top}, width={width}, height={new_height} "
            f"sobre una imagen de {width}x{height}."
        )

    return RawImage(image.pixels[top:top + new_height, 0:width].copy())


class ForecastCropNode(PipelineNode):
    """
    Decodifica los bytes descargados y recorta cabecera y pie del gráfico.
    """
    def __init__(self, crop_top: int = 80, crop_bottom: int = 50, name: str = "forecast_crop"):
        super().__init__(name)
        self.crop_top = crop_top
        self.crop_bottom = crop_bottom

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        """
        Context Inputs:
            - `image_bytes` (bytes) o `image` (RawImage).

        Context Outputs:
            - `image` (RawImage): Imagen recortada.
            - `original_shape` (tuple): (ancho, alto) antes del recorte.
        """
        image = context.get("image")
        if image is None:
            image = RawImage.from_bytes(self._require(context, "image_bytes"))

        try:
            cropped = crop_image(image, self.crop_top, self.crop_bottom)
        except ImageProcessingError as e:
            logging.error("[%s] Error al recortar imagen: %s", self.name, e, exc_info=True)
            raise

        context["original_shape"] = (image.width, image.height)
        context["image"] = cropped
        context.pop("image_bytes", None)
        logging.info("[%s] Imagen recortada de %dx%d a %dx%d.",
                     self.name, image.width, image.height, cropped.width, cropped.height)
        return context


class ImageSaverNode(PipelineNode):
    """
    Guarda la imagen del contexto en una ruta fija del disco.
    """
    def __init__(self, output_path: Path, input_key: str = "image", name: str = "image_saver"):
        super().__init__(name)
        self.output_path = Path(output_path)
        self.input_key = input_key

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        """
        Context Outputs:
            - `image_path` (Path): Ruta donde quedó guardada la imagen.
        """
        image: RawImage = self._require(context, self.input_key)
        self.output_path.parent.mkdir(parents=True, exist_ok=True)

        logging.debug("[%s] Guardando imagen en: %s", self.name, self.output_path)
        if not cv2.imwrite(str(self.output_path), image.pixels):
            raise ImageProcessingError(f"[{self.name}] OpenCV no pudo escribir '{self.output_path}'.")

        context["image_path"] = self.output_path
        logging.info("[%s] Imagen guardada: %s", self.name, self.output_path)
        return context
