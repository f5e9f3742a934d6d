"""
Define el pipeline principal del pronóstico, que orquesta la secuencia de
pasos de procesamiento.
"""
import logging
import time
from typing import Any, Dict, List, Optional

import httpx

from src.domain import BrowserTimeouts, OutputPaths, RenderSpec
from src.nodes.acquisition import ForecastDownloaderNode
from src.nodes.alerts import AlertClassifierNode
from src.nodes.base import PipelineNode
from src.nodes.detection import ColorDetectionNode
from src.nodes.imaging import ForecastCropNode, ImageSaverNode
from src.nodes.render import ReportScreenshotNode
from src.nodes.resample import ResampleNode
from src.nodes.template import TemplateMutatorNode


class ForecastPipeline:
    """
    Orquesta la secuencia descarga -> recorte -> clasificación -> plantilla ->
    captura -> reescalado.

    Las etapas se ejecutan estrictamente en orden porque cada una depende de la
    salida de la anterior. Cualquier fallo corta la ejecución: no existe un
    resultado parcial.
    """
    def __init__(self, nodes: List[PipelineNode]):
        self.nodes = nodes
        logging.info("Pipeline de pronóstico construido con %d nodos.", len(self.nodes))

    @classmethod
    def build(
        cls,
        image_url: str,
        paths: OutputPaths,
        spec: RenderSpec,
        timeouts: BrowserTimeouts = BrowserTimeouts(),
        crop_top: int = 80,
        crop_bottom: int = 50,
        threshold: float = 0.5,
        fetch_timeout: float = 30.0,
        executable_path: Optional[str] = None,
        http_client: Optional[httpx.Client] = None,
    ) -> "ForecastPipeline":
        """
        Construye la secuencia estándar de nodos. El orden de la lista define el
        flujo de ejecución.
        """
        return cls([
            # 1. Descargar la imagen publicada del pronóstico.
            ForecastDownloaderNode(url=image_url, client=http_client, timeout=fetch_timeout,
                                   name="Downloader"),
            # 2. Decodificar y recortar cabecera y pie del gráfico.
            ForecastCropNode(crop_top=crop_top, crop_bottom=crop_bottom, name="Crop"),
            # 3. Guardar la imagen recortada; la plantilla la referencia.
            ImageSaverNode(output_path=paths.forecast_image, name="SaveForecast"),
            # 4. Contar píxeles rojos y amarillos.
            ColorDetectionNode(threshold=threshold, name="ColorDetection"),
            # 5. Derivar el nivel de alerta.
            AlertClassifierNode(threshold=threshold, name="AlertLevel"),
            # 6. Preparar el HTML del reporte.
            TemplateMutatorNode(template_path=paths.template, output_path=paths.report_html,
                                name="Template"),
            # 7. Renderizar y capturar el reporte.
            ReportScreenshotNode(spec=spec, capture_path=paths.capture, timeouts=timeouts,
                                 executable_path=executable_path, name="Screenshot"),
            # 8. Reescalar, enfocar y codificar el reporte final.
            ResampleNode(spec=spec, output_path=paths.output_image, name="Resample"),
        ])

    def run(self, initial_context: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Ejecuta la secuencia completa de nodos sobre un contexto.

        Args:
            initial_context (Optional[Dict[str, Any]]): Contexto inicial; puede
                traer `image_url` para sustituir la URL configurada.

        Returns:
            Dict[str, Any]: El contexto final con los resultados de todos los
            nodos y sus tiempos de ejecución.

        Raises:
            ForecastError: Si cualquier nodo falla, la excepción se propaga.
        """
        context = dict(initial_context or {})
        context["execution_times"] = {}

        run_id = context.setdefault("run_id", f"forecast_{int(time.time())}")
        logging.info(">>> Iniciando ejecución: %s", run_id)

        total_start_time = time.perf_counter()

        for node in self.nodes:
            node_start_time = time.perf_counter()
            try:
                context = node.run(context)
                context["execution_times"][node.name] = time.perf_counter() - node_start_time
            except Exception as e:
                logging.error("!!! Error en nodo '%s' (Ejecución: %s): %s", node.name, run_id, e)
                raise

        total_duration = time.perf_counter() - total_start_time
        context["execution_times"]["total_pipeline"] = total_duration

        logging.info("<<< Ejecución %s finalizada en %.4f segundos.", run_id, total_duration)
        return context
