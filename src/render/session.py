"""
Ciclo de vida del navegador headless que renderiza el reporte.

Una `RenderSession` cubre una sola ejecución:

    IDLE -> LAUNCHING -> READY -> LOADED -> CAPTURED -> TORN_DOWN

Cualquier fallo antes de CAPTURED deja la sesión en FAILED.

El cierre (página, contexto, navegador y driver, en ese orden) se ejecuta en
todos los caminos de salida. Los fallos del cierre se registran y no se
propagan, para no ocultar el error real de la ejecución.
"""
import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Iterable, List, Optional, Sequence

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from src.domain.errors import RenderError, RenderLaunchError
from src.domain.schemas.render import BrowserTimeouts, RenderSpec
from src.render.capture import (CaptureStrategy, capture_with_fallbacks,
                                default_strategies)

# Flags para servidores con poca RAM y sin GPU
LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--disable-software-rasterizer",
    "--disable-extensions",
    "--disable-background-networking",
    "--disable-sync",
    "--disable-translate",
    "--disable-default-apps",
    "--no-first-run",
    "--no-zygote",
    "--js-flags=--max-old-space-size=128",
    "--disable-accelerated-2d-canvas",
    "--disable-background-timer-throttling",
    "--disable-backgrounding-occluded-windows",
    "--disable-renderer-backgrounding",
    "--disable-features=TranslateUI",
    "--disable-breakpad",
    "--disable-crash-reporter",
    "--disable-notifications",
    "--disable-hang-monitor",
    "--noerrdialogs",
    "--no-pings",
    "--mute-audio",
]

KNOWN_BROWSER_PATHS = [
    "/usr/bin/google-chrome-stable",
    "/usr/bin/google-chrome",
    "/usr/bin/chromium-browser",
    "/usr/bin/chromium",
]


def find_browser_executable(explicit: Optional[str] = None,
                            candidates: Iterable[str] = KNOWN_BROWSER_PATHS) -> Optional[str]:
    """
    Busca un Chrome/Chromium instalado en el sistema.

    Returns:
        Optional[str]: La primera ruta existente, o None para usar el Chromium
        que trae Playwright.
    """
    paths: List[str] = [p for p in (explicit, os.getenv("PLAYWRIGHT_EXECUTABLE_PATH")) if p]
    paths.extend(candidates)
    for path in paths:
        if os.path.isfile(path):
            return path
    return None


class RenderState(Enum):
    IDLE = "idle"
    LAUNCHING = "launching"
    READY = "ready"
    LOADED = "loaded"
    CAPTURED = "captured"
    TORN_DOWN = "torn_down"
    FAILED = "failed"


class RenderSession:
    """
    Navegador aislado con un contexto y una página, para renderizar y capturar
    un HTML local.

    Se usa como context manager:

        with RenderSession(spec, timeouts) as session:
            session.load(html_path, ".map-workflow")
            session.capture(".bg-gradient-primary", capture_path)

    Attributes:
        state (RenderState): Estado actual de la sesión.
    """
    def __init__(
        self,
        spec: RenderSpec,
        timeouts: BrowserTimeouts = BrowserTimeouts(),
        executable_path: Optional[str] = None,
        playwright_factory: Callable[[], Any] = sync_playwright,
    ):
        self.spec = spec
        self.timeouts = timeouts
        self.executable_path = executable_path
        self.playwright_factory = playwright_factory
        self.logger = logging.getLogger(__name__)
        self.state = RenderState.IDLE

        self._playwright = None
        self._browser = None
        self._context = None
        self._page = None

    def __enter__(self) -> "RenderSession":
        self.launch()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc is not None and self.state is not RenderState.FAILED:
            self.logger.error("Sesión de renderizado interrumpida en estado '%s': %s", self.state.value, exc)
            self.state = RenderState.FAILED
        self.close()
        return False

    @property
    def page(self) -> Any:
        if self._page is None:
            raise RenderError("La página del navegador no está inicializada.")
        return self._page

    def launch(self) -> None:
        """
        Inicia el navegador y crea el contexto y la página.

        Raises:
            RenderLaunchError: El navegador no inició en `timeouts.launch_ms`.
            RenderError: No se pudo crear el contexto o la página.
        """
        self.state = RenderState.LAUNCHING
        executable = find_browser_executable(self.executable_path)
        launch_options = {
            "headless": True,
            "args": LAUNCH_ARGS,
            "timeout": self.timeouts.launch_ms,
        }
        if executable:
            launch_options["executable_path"] = executable
            self.logger.info("Usando navegador: %s", executable)

        self.logger.info("Iniciando Chromium (límite %d ms)...", self.timeouts.launch_ms)
        try:
            self._playwright = self.playwright_factory().start()
            self._browser = self._playwright.chromium.launch(**launch_options)
        except PlaywrightError as e:
            self._fail()
            raise RenderLaunchError(
                f"No se pudo iniciar Chromium en {self.timeouts.launch_ms} ms: {e}"
            ) from e

        try:
            self._context = self._browser.new_context(
                viewport={"width": self.spec.viewport_width, "height": self.spec.viewport_height},
                device_scale_factor=self.spec.device_scale_factor,
            )
            self._page = self._context.new_page()
        except PlaywrightError as e:
            self._fail()
            raise RenderError(f"No se pudo crear la página en Chromium: {e}") from e

        self.state = RenderState.READY
        self.logger.info("Chromium listo (viewport %dx%d @%sx).", self.spec.viewport_width,
                         self.spec.viewport_height, self.spec.device_scale_factor)

    def load(self, html_path: Path, wait_selector: str) -> None:
        """
        Abre el HTML local y espera a que aparezca `wait_selector`.

        Tras la espera aplica `timeouts.grace_delay_ms` para que terminen de
        cargar las imágenes de fondo referenciadas por la plantilla.

        Raises:
            RenderError: Fallo de navegación o el selector no apareció a tiempo.
        """
        url = Path(html_path).resolve().as_uri()
        self.logger.info("Cargando plantilla: %s", url)
        try:
            self.page.goto(url, wait_until="domcontentloaded", timeout=self.timeouts.navigation_ms)
            self.page.wait_for_selector(wait_selector, timeout=self.timeouts.selector_ms)
            self.page.wait_for_timeout(self.timeouts.grace_delay_ms)
        except PlaywrightError as e:
            self._fail()
            raise RenderError(f"No se pudo cargar '{url}' o no apareció '{wait_selector}': {e}") from e
        self.state = RenderState.LOADED

    def capture(self, selector: str, output_path: Path,
                strategies: Optional[Sequence[CaptureStrategy]] = None) -> str:
        """
        Captura `selector` en `output_path` con la cadena de estrategias.

        Returns:
            str: Nombre de la estrategia que tuvo éxito.

        Raises:
            CaptureError: Todas las estrategias fallaron.
        """
        if strategies is None:
            strategies = default_strategies(self.timeouts.element_ms)
        try:
            strategy = capture_with_fallbacks(self.page, selector, output_path, strategies)
        except RenderError:
            self._fail()
            raise
        self.state = RenderState.CAPTURED
        return strategy

    def close(self) -> None:
        """Cierra página, contexto, navegador y driver, en ese orden."""
        for label, resource, closer in (
            ("página", self._page, "close"),
            ("contexto", self._context, "close"),
            ("navegador", self._browser, "close"),
            ("driver de Playwright", self._playwright, "stop"),
        ):
            if resource is None:
                continue
            try:
                getattr(resource, closer)()
            except Exception as e:
                self.logger.warning("Error al cerrar %s (ignorado): %s", label, e)

        self._page = self._context = self._browser = self._playwright = None
        if self.state is not RenderState.FAILED:
            self.state = RenderState.TORN_DOWN
        self.logger.info("Chromium cerrado.")

    def _fail(self) -> None:
        self.state = RenderState.FAILED
        self.close()
