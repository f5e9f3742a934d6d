"""
Estrategias de captura del elemento principal del reporte.

Se prueban en orden y la primera que escribe el archivo gana:

1. `VisibleElementCapture`: captura del elemento esperando que sea visible.
2. `ElementHandleCapture`: captura a través del handle del elemento, sin la
   espera de visibilidad del locator.
3. `FullPageCapture`: captura de la página completa.
"""
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, List, Sequence

from playwright.sync_api import Error as PlaywrightError

from src.domain.errors import CaptureError


class CaptureStrategy(ABC):
    name: str = "capture"

    @abstractmethod
    def capture(self, page: Any, selector: str, path: Path) -> bool:
        """
        Intenta escribir la captura en `path`.

        Returns:
            bool: True si la captura quedó escrita, False si la estrategia no
            aplica o falló.
        """
        pass


class VisibleElementCapture(CaptureStrategy):
    name = "element"

    def __init__(self, timeout_ms: int = 3000):
        self.timeout_ms = timeout_ms

    def capture(self, page: Any, selector: str, path: Path) -> bool:
        try:
            page.locator(selector).first.screenshot(path=str(path), type="png", timeout=self.timeout_ms)
            return True
        except PlaywrightError as e:
            logging.warning("Elemento '%s' no visible en %d ms: %s", selector, self.timeout_ms, e)
            return False


class ElementHandleCapture(CaptureStrategy):
    name = "element_handle"

    def __init__(self, timeout_ms: int = 3000):
        self.timeout_ms = timeout_ms

    def capture(self, page: Any, selector: str, path: Path) -> bool:
        handle = page.query_selector(selector)
        if handle is None:
            logging.warning("No existe ningún elemento para '%s'.", selector)
            return False
        try:
            handle.screenshot(path=str(path), type="png", timeout=self.timeout_ms)
            return True
        except PlaywrightError as e:
            logging.warning("Captura por handle de '%s' fallida: %s", selector, e)
            return False
        finally:
            try:
                handle.dispose()
            except PlaywrightError:
                pass


class FullPageCapture(CaptureStrategy):
    name = "full_page"

    def capture(self, page: Any, selector: str, path: Path) -> bool:
        try:
            page.screenshot(path=str(path), type="png", full_page=True)
            return True
        except PlaywrightError as e:
            logging.error("Captura de página completa fallida: %s", e)
            return False


def default_strategies(element_timeout_ms: int = 3000) -> List[CaptureStrategy]:
    return [
        VisibleElementCapture(element_timeout_ms),
        ElementHandleCapture(element_timeout_ms),
        FullPageCapture(),
    ]


def capture_with_fallbacks(page: Any, selector: str, path: Path,
                           strategies: Sequence[CaptureStrategy]) -> str:
    """
    Ejecuta las estrategias en orden hasta que una tenga éxito.

    Returns:
        str: Nombre de la estrategia que produjo la captura.

    Raises:
        CaptureError: Ninguna estrategia pudo capturar.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    for strategy in strategies:
        if strategy.capture(page, selector, path):
            logging.info("Captura '%s' guardada con la estrategia '%s': %s", selector, strategy.name, path)
            return strategy.name

    tried = ", ".join(s.name for s in strategies) or "ninguna"
    raise CaptureError(f"No se pudo capturar '{selector}' (estrategias probadas: {tried}).")
