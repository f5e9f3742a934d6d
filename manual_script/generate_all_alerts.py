"""
Script de generación manual de reportes de muestra.
Renderiza el reporte para los tres niveles de alerta a partir de imágenes
sintéticas (pasos 2 al 8 del pipeline, sin descarga).
"""
import logging
import sys
from pathlib import Path

import numpy as np

# Aseguramos que el directorio raíz esté en el path para los imports
sys.path.append(str(Path(__file__).parent.parent))

from config.settings import CROP_BOTTOM, CROP_TOP, DETECTION_THRESHOLD, PUBLIC_DIR
from src.domain import OutputPaths, RawImage
from src.nodes.alerts import AlertClassifierNode
from src.nodes.detection import ColorDetectionNode
from src.nodes.imaging import ForecastCropNode, ImageSaverNode
from src.nodes.render import ReportScreenshotNode
from src.nodes.resample import ResampleNode
from src.nodes.template import TemplateMutatorNode
from src.utils import format_summary, load_browser_timeouts, load_render_spec

OUTPUT_DIR = Path(__file__).parent.parent / "manual_script" / "results"

OCEAN = (200, 150, 50)   # BGR
RED = (50, 50, 200)
YELLOW = (50, 200, 200)


def synthetic_forecast(kind: str, width: int = 500, height: int = 310) -> RawImage:
    """Imagen de océano con una franja del color de alerta (30% rojo, 20% amarillo)."""
    pixels = np.empty((height, width, 3), dtype=np.uint8)
    pixels[:] = OCEAN
    columns = np.arange(width) % 10
    if kind == "red":
        pixels[:, columns < 3] = RED
    elif kind == "yellow":
        pixels[:, columns < 2] = YELLOW
    return RawImage(pixels)


def main():
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    logging.info(">>> Generando reportes para todos los niveles de alerta...")

    spec = load_render_spec()
    paths = OutputPaths.under(PUBLIC_DIR, spec.extension)
    OUTPUT_DIR.mkdir(exist_ok=True)

    for kind in ("red", "yellow", "calm"):
        logging.info(f"--- Nivel: {kind} ---")
        output_path = OUTPUT_DIR / f"output_{kind}{spec.extension}"

        nodes = [
            ForecastCropNode(crop_top=CROP_TOP, crop_bottom=CROP_BOTTOM, name="Crop"),
            ImageSaverNode(output_path=paths.forecast_image, name="SaveForecast"),
            ColorDetectionNode(threshold=DETECTION_THRESHOLD, name="ColorDetection"),
            AlertClassifierNode(threshold=DETECTION_THRESHOLD, name="AlertLevel"),
            TemplateMutatorNode(template_path=paths.template, output_path=paths.report_html, name="Template"),
            ReportScreenshotNode(spec=spec, capture_path=paths.capture,
                                 timeouts=load_browser_timeouts(), name="Screenshot"),
            ResampleNode(spec=spec, output_path=output_path, name="Resample"),
        ]

        # Margen extra para que el recorte conserve la imagen sintética completa
        base = synthetic_forecast(kind)
        padded = np.pad(base.pixels, ((CROP_TOP, CROP_BOTTOM), (0, 0), (0, 0)), mode="edge")
        context = {"image": RawImage(padded)}

        try:
            for node in nodes:
                context = node.run(context)
            print(format_summary(context["color_detection"], context["alert_status"]))
            logging.info(f"✅ Guardado: {context['output_image_path']}")
        except Exception as e:
            logging.error(f"❌ Fallo al generar el nivel {kind}: {e}", exc_info=True)

    logging.info(">>> Generación finalizada.")


if __name__ == "__main__":
    main()
