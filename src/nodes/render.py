"""
Nodo que renderiza el HTML del reporte en un navegador headless y captura el
bloque principal como PNG.
"""
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from src.domain.errors import RenderError
from src.domain.schemas.render import BrowserTimeouts, RenderSpec
from src.nodes.base import PipelineNode
from src.render.session import RenderSession

WAIT_SELECTOR = ".map-workflow"
TARGET_SELECTOR = ".bg-gradient-primary"


class ReportScreenshotNode(PipelineNode):
    """
    Lanza una sesión de navegador por ejecución, carga el HTML generado y
    captura el elemento del reporte. La sesión se cierra siempre, también
    cuando la captura falla.
    """
    def __init__(
        self,
        spec: RenderSpec,
        capture_path: Path,
        timeouts: BrowserTimeouts = BrowserTimeouts(),
        executable_path: Optional[str] = None,
        wait_selector: str = WAIT_SELECTOR,
        target_selector: str = TARGET_SELECTOR,
        session_factory: Callable[..., RenderSession] = RenderSession,
        name: str = "report_screenshot"
    ):
        """
        Args:
            spec (RenderSpec): Viewport y factor de escala de la captura.
            capture_path (Path): Archivo temporal de la captura cruda.
            timeouts (BrowserTimeouts): Límites de espera del navegador.
            executable_path (Optional[str]): Chromium explícito, si existe.
            wait_selector (str): Elemento que indica que el layout está listo.
            target_selector (str): Elemento a capturar.
            session_factory: Constructor de la sesión; se sustituye en tests.
            name (str): Nombre del nodo.
        """
        super().__init__(name)
        self.spec = spec
        self.capture_path = Path(capture_path)
        self.timeouts = timeouts
        self.executable_path = executable_path
        self.wait_selector = wait_selector
        self.target_selector = target_selector
        self.session_factory = session_factory

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        """
        Context Inputs:
            - `report_html_path` (Path)

        Context Outputs:
            - `capture_path` (Path): Captura cruda a `viewport * escala`.
            - `capture_strategy` (str): Estrategia de captura usada.
        """
        html_path: Path = self._require(context, "report_html_path")
        logging.info("[%s] Exportando HTML a imagen (viewport %dx%d, escala %sx)...", self.name,
                     self.spec.viewport_width, self.spec.viewport_height, self.spec.device_scale_factor)

        try:
            with self.session_factory(self.spec, self.timeouts, self.executable_path) as session:
                session.load(html_path, self.wait_selector)
                strategy = session.capture(self.target_selector, self.capture_path)
        except RenderError as e:
            logging.error("[%s] Error al renderizar el reporte: %s", self.name, e, exc_info=True)
            raise

        context["capture_path"] = self.capture_path
        context["capture_strategy"] = strategy
        return context
