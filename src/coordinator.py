"""
Coordinación de generaciones concurrentes del reporte.

El HTML generado, la captura temporal y el reporte final son rutas fijas
compartidas por todas las ejecuciones, así que solo puede haber una generación
en curso. Quien llega mientras otra está en marcha espera su resultado en vez
de lanzar una segunda (single-flight).
"""
import logging
import threading
import time
from concurrent.futures import Future
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from src.domain import ForecastResult


class GenerationCoordinator:
    """
    Guarda la generación en curso, la ruta canónica del reporte y el último
    resultado.

    Se inyecta tanto en el disparador periódico como en el consumidor HTTP de
    estado, que así comparten la misma generación.

    Attributes:
        output_path (Path): Ruta canónica del reporte final.
        cache_seconds (float): Antigüedad máxima del último resultado para que
            `current_status` lo reutilice.
    """
    def __init__(
        self,
        generate_fn: Callable[[], ForecastResult],
        output_path: Path,
        cache_seconds: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.generate_fn = generate_fn
        self.output_path = Path(output_path)
        self.cache_seconds = cache_seconds
        self.clock = clock
        self.logger = logging.getLogger(__name__)

        self._lock = threading.Lock()
        self._inflight: Optional[Future] = None
        self._last_result: Optional[ForecastResult] = None
        self._last_generated_at: Optional[float] = None

    def generate(self) -> ForecastResult:
        """
        Ejecuta una generación, o se une a la que ya está en curso.

        Returns:
            ForecastResult: El resultado de la generación (el mismo objeto para
            todos los que esperaban).

        Raises:
            ForecastError: El error de la generación, también para quienes
                esperaban.
        """
        with self._lock:
            future = self._inflight
            is_leader = future is None
            if is_leader:
                future = Future()
                self._inflight = future

        if not is_leader:
            self.logger.info("⏳ Generación ya en curso; esperando su resultado...")
            return future.result()

        try:
            result = self.generate_fn()
        except BaseException as e:
            future.set_exception(e)
            raise
        else:
            with self._lock:
                self._last_result = result
                self._last_generated_at = self.clock()
            future.set_result(result)
            return result
        finally:
            with self._lock:
                self._inflight = None

    def get_or_generate(self) -> Path:
        """Devuelve el reporte existente o lo genera si todavía no existe."""
        if self.output_path.exists():
            return self.output_path
        self.logger.info("No existe reporte en '%s'; generando...", self.output_path)
        return Path(self.generate().output_image_path)

    def current_status(self) -> ForecastResult:
        """
        Devuelve el último resultado si es reciente; si no, genera uno nuevo.
        """
        with self._lock:
            result, generated_at = self._last_result, self._last_generated_at
        if result is not None and self.clock() - generated_at < self.cache_seconds:
            return result
        return self.generate()

    def status_payload(self, lang: str = "en") -> Dict[str, Any]:
        return self.current_status().alert_status.to_payload(lang)

    def expire(self) -> None:
        """Fuerza que la próxima consulta de estado regenere el reporte."""
        with self._lock:
            self._last_generated_at = None
            self._last_result = None
