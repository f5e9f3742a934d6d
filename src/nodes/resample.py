"""
Reescalado de alta calidad de la captura del reporte.

La captura llega a `viewport * device_scale_factor` píxeles; aquí se lleva al
ancho final conservando la proporción real medida, se enfoca para compensar el
suavizado del reescalado y se codifica en el formato pedido.
"""
import logging
import os
from pathlib import Path
from typing import Any, Dict, List

import cv2
import numpy as np

from src.domain.errors import ResampleError
from src.domain.schemas.render import RenderSpec
from src.nodes.base import PipelineNode

SHARPEN_SIGMA = 1.2
SHARPEN_AMOUNT = 0.8


def compute_target_height(width: int, height: int, target_width: int) -> int:
    """Alto que conserva la proporción `width / height` al ancho `target_width`."""
    if width <= 0 or height <= 0:
        raise ResampleError(f"Dimensiones de captura inválidas: {width}x{height}")
    aspect_ratio = width / height
    return max(1, int(round(target_width / aspect_ratio)))


def sharpen(image: np.ndarray, sigma: float = SHARPEN_SIGMA, amount: float = SHARPEN_AMOUNT) -> np.ndarray:
    """Máscara de enfoque (unsharp mask): img + amount * (img - blur(img))."""
    blurred = cv2.GaussianBlur(image, (0, 0), sigma)
    return cv2.addWeighted(image, 1 + amount, blurred, -amount, 0)


def _encode_params(spec: RenderSpec) -> List[int]:
    if spec.format == "jpeg":
        return [
            cv2.IMWRITE_JPEG_QUALITY, spec.jpeg_quality,
            cv2.IMWRITE_JPEG_OPTIMIZE, 1,
            # 4:4:4, sin pérdida de color
            cv2.IMWRITE_JPEG_SAMPLING_FACTOR, cv2.IMWRITE_JPEG_SAMPLING_FACTOR_444,
        ]
    return [cv2.IMWRITE_PNG_COMPRESSION, spec.png_compression]


def resample_image(capture_path: Path, output_path: Path, spec: RenderSpec) -> Path:
    """
    Reescala la captura a `spec.target_width` y la guarda en `output_path`.

    El archivo final se reemplaza de forma atómica; los lectores ven la
    versión anterior hasta el último momento. La captura temporal se elimina
    al terminar (si ya no existe, se ignora).

    Returns:
        Path: `output_path`.

    Raises:
        ResampleError: La captura no se pudo leer o codificar.
    """
    capture_path, output_path = Path(capture_path), Path(output_path)

    image = cv2.imread(str(capture_path), cv2.IMREAD_COLOR)
    if image is None:
        raise ResampleError(f"No se pudo leer la captura '{capture_path}'.")

    captured_h, captured_w = image.shape[:2]
    target_w = spec.target_width
    target_h = compute_target_height(captured_w, captured_h, target_w)
    logging.info("Reescalando captura %dx%d a %dx%d (proporción %.4f)...",
                 captured_w, captured_h, target_w, target_h, captured_w / captured_h)

    resized = cv2.resize(image, (target_w, target_h), interpolation=cv2.INTER_LANCZOS4)
    final = sharpen(resized)

    ok, buffer = cv2.imencode(spec.extension, final, _encode_params(spec))
    if not ok:
        raise ResampleError(f"OpenCV no pudo codificar el reporte como '{spec.format}'.")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = output_path.with_name(f".{output_path.name}.tmp")
    tmp_path.write_bytes(buffer.tobytes())
    os.replace(tmp_path, output_path)

    try:
        capture_path.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        logging.warning("No se pudo eliminar la captura temporal '%s': %s", capture_path, e)

    logging.info("✅ Imagen exportada: %s (%dx%d px, %.1f KB)",
                 output_path, target_w, target_h, output_path.stat().st_size / 1024)
    return output_path


class ResampleNode(PipelineNode):
    def __init__(self, spec: RenderSpec, output_path: Path, name: str = "resample"):
        super().__init__(name)
        self.spec = spec
        self.output_path = Path(output_path)

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        """
        Context Inputs:
            - `capture_path` (Path)

        Context Outputs:
            - `output_image_path` (Path)
        """
        capture_path: Path = self._require(context, "capture_path")
        try:
            context["output_image_path"] = resample_image(capture_path, self.output_path, self.spec)
        except ResampleError as e:
            logging.error("[%s] %s", self.name, e, exc_info=True)
            raise
        context.pop("capture_path", None)
        return context
