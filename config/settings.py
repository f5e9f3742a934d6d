import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

ROOT_DIR = Path(__file__).resolve().parents[1]

FORECAST_IMAGE_URL = os.getenv("forecast_image_url", "https://www.weather.gov/images/sju/ghwo/RipRiskDay1.jpg")
FETCH_TIMEOUT = float(os.getenv("fetch_timeout", "30"))

CROP_TOP = int(os.getenv("crop_top", "80"))
CROP_BOTTOM = int(os.getenv("crop_bottom", "50"))

DETECTION_THRESHOLD = float(os.getenv("detection_threshold", "0.5"))

TARGET_WIDTH = int(os.getenv("target_width", "1500"))
OUTPUT_FORMAT = os.getenv("output_format", "png").lower()
JPEG_QUALITY = int(os.getenv("jpeg_quality", "95"))
PNG_COMPRESSION = int(os.getenv("png_compression", "6"))

VIEWPORT_WIDTH = int(os.getenv("viewport_width", "930"))
VIEWPORT_HEIGHT = int(os.getenv("viewport_height", "1500"))
DEVICE_SCALE_FACTOR = float(os.getenv("device_scale_factor", "2"))

LAUNCH_TIMEOUT_MS = int(os.getenv("launch_timeout_ms", "30000"))
NAVIGATION_TIMEOUT_MS = int(os.getenv("navigation_timeout_ms", "10000"))
SELECTOR_TIMEOUT_MS = int(os.getenv("selector_timeout_ms", "10000"))
ELEMENT_TIMEOUT_MS = int(os.getenv("element_timeout_ms", "3000"))
GRACE_DELAY_MS = int(os.getenv("grace_delay_ms", "500"))
BROWSER_EXECUTABLE_PATH = os.getenv("browser_executable_path")

PUBLIC_DIR = Path(os.getenv("public_dir", str(ROOT_DIR / "public")))
STATUS_CACHE_SECONDS = float(os.getenv("status_cache_seconds", "300"))

LOG_LEVEL = os.getenv("log_level", "INFO").upper()
