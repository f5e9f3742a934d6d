"""
Punto de entrada del pipeline para los consumidores externos: ejecuta una
generación y empaqueta el contexto final en un `ForecastResult`.
"""
import logging
from typing import Optional

import httpx

from config import settings
from src.domain import ForecastResult, OutputPaths
from src.pipeline import ForecastPipeline
from src.utils import (format_execution_times, format_summary,
                       load_browser_timeouts, load_output_paths,
                       load_render_spec)


class ForecastService:
    def __init__(self, pipeline: ForecastPipeline, paths: OutputPaths):
        self.pipeline = pipeline
        self.paths = paths
        self.logger = logging.getLogger(__name__)

    @classmethod
    def from_settings(cls, http_client: Optional[httpx.Client] = None) -> "ForecastService":
        spec = load_render_spec()
        paths = load_output_paths(spec)
        pipeline = ForecastPipeline.build(
            image_url=settings.FORECAST_IMAGE_URL,
            paths=paths,
            spec=spec,
            timeouts=load_browser_timeouts(),
            crop_top=settings.CROP_TOP,
            crop_bottom=settings.CROP_BOTTOM,
            threshold=settings.DETECTION_THRESHOLD,
            fetch_timeout=settings.FETCH_TIMEOUT,
            executable_path=settings.BROWSER_EXECUTABLE_PATH,
            http_client=http_client,
        )
        return cls(pipeline, paths)

    @property
    def output_image_path(self):
        return self.paths.output_image

    def get_forecast(self) -> ForecastResult:
        """
        Descarga, clasifica y renderiza el pronóstico actual.

        Raises:
            ForecastError: Cualquier fallo de una etapa; no hay resultado
                parcial.
        """
        self.logger.info("Iniciando obtención de forecast...")
        try:
            context = self.pipeline.run()
        except Exception as e:
            self.logger.error("Error al obtener forecast: %s", e, exc_info=True)
            raise

        result = ForecastResult(
            image_processed=True,
            image_path=context["image_path"],
            color_detection=context["color_detection"],
            alert_status=context["alert_status"],
            output_image_path=context["output_image_path"],
        )

        self.logger.info("Forecast obtenido y procesado exitosamente.")
        self.logger.info("\n%s", format_summary(result.color_detection, result.alert_status))
        self.logger.debug("\n%s", format_execution_times(context["run_id"], context["execution_times"]))
        return result
