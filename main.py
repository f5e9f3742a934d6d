import json
import logging
import sys

from config.settings import FORECAST_IMAGE_URL, LOG_LEVEL, STATUS_CACHE_SECONDS
from src.coordinator import GenerationCoordinator
from src.domain import ForecastError
from src.service import ForecastService

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


if __name__ == "__main__":
    logging.info(">>> Iniciando generación del reporte de corrientes...")

    if not FORECAST_IMAGE_URL:
        logging.error("La variable de entorno 'forecast_image_url' no está definida. No se puede continuar.")
        sys.exit(1)

    lang = sys.argv[1] if len(sys.argv) > 1 else "en"

    try:
        service = ForecastService.from_settings()
        coordinator = GenerationCoordinator(
            generate_fn=service.get_forecast,
            output_path=service.output_image_path,
            cache_seconds=STATUS_CACHE_SECONDS,
        )
        result = coordinator.generate()

        print(json.dumps(coordinator.status_payload(lang), ensure_ascii=False))
        logging.info("Reporte final: %s", result.output_image_path)

    except KeyboardInterrupt:
        logging.warning("\nInterrupción manual detectada. Finalizando...")
        sys.exit(130)

    except ForecastError as e:
        logging.critical(f"La generación del reporte falló: {e}")
        sys.exit(1)

    except Exception as e:
        logging.critical(f"Error fatal inesperado: {e}", exc_info=True)
        sys.exit(1)
