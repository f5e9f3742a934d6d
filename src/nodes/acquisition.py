"""
Nodo del pipeline responsable de descargar la imagen del pronóstico.

La descarga no se reintenta aquí: si la fuente falla, la ejecución falla y el
reintento (si lo hay) corresponde a quien disparó el pipeline.
"""
import logging
from typing import Any, Dict, Optional

import httpx

from src.domain.errors import FetchError
from src.nodes.base import PipelineNode


def fetch_image(url: str, client: Optional[httpx.Client] = None, timeout: float = 30.0) -> bytes:
    """
    Descarga los bytes de una imagen mediante HTTP(S) GET.

    Args:
        url (str): URL de la imagen.
        client (Optional[httpx.Client]): Cliente reutilizable. Si es None se
            crea uno temporal.
        timeout (float): Segundos máximos de espera.

    Returns:
        bytes: El cuerpo de la respuesta.

    Raises:
        FetchError: Respuesta no 2xx o fallo de red.
    """
    owns_client = client is None
    if owns_client:
        client = httpx.Client(follow_redirects=True, timeout=timeout)

    try:
        response = client.get(url)
        response.raise_for_status()
        return response.content
    except httpx.HTTPStatusError as e:
        raise FetchError(url, e.response.status_code, e.response.reason_phrase) from e
    except httpx.HTTPError as e:
        raise FetchError(url, reason=str(e) or type(e).__name__) from e
    finally:
        if owns_client:
            client.close()


class ForecastDownloaderNode(PipelineNode):
    """
    Descarga la imagen del pronóstico desde la URL configurada.
    """
    def __init__(
        self,
        url: str,
        client: Optional[httpx.Client] = None,
        timeout: float = 30.0,
        output_key: str = "image_bytes",
        name: str = "forecast_downloader"
    ):
        """
        Args:
            url (str): URL de la imagen publicada del pronóstico.
            client (Optional[httpx.Client]): Cliente HTTP compartido; si es
                None cada ejecución abre y cierra el suyo.
            timeout (float): Segundos máximos por descarga.
            output_key (str): Clave del contexto donde se guardan los bytes.
            name (str): Nombre del nodo.
        """
        super().__init__(name)
        self.url = url
        self.client = client
        self.timeout = timeout
        self.output_key = output_key

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        """
        Context Outputs:
            - `context[self.output_key]` (bytes): Imagen comprimida descargada.
            - `image_url` (str): La URL usada.
        """
        url = context.get("image_url") or self.url
        logging.info("[%s] Descargando imagen de: %s", self.name, url)

        try:
            image_bytes = fetch_image(url, client=self.client, timeout=self.timeout)
        except FetchError as e:
            logging.error("[%s] %s", self.name, e, exc_info=True)
            raise

        context[self.output_key] = image_bytes
        context["image_url"] = url
        logging.info("[%s] Descarga completada (%.1f KB).", self.name, len(image_bytes) / 1024)
        return context
