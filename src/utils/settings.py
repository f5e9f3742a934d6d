from config import settings
from src.domain import BrowserTimeouts, OutputPaths, RenderSpec


def load_render_spec() -> RenderSpec:
    return RenderSpec(
        viewport_width=settings.VIEWPORT_WIDTH,
        viewport_height=settings.VIEWPORT_HEIGHT,
        device_scale_factor=settings.DEVICE_SCALE_FACTOR,
        target_width=settings.TARGET_WIDTH,
        format=settings.OUTPUT_FORMAT,
        jpeg_quality=settings.JPEG_QUALITY,
        png_compression=settings.PNG_COMPRESSION,
    )


def load_browser_timeouts() -> BrowserTimeouts:
    return BrowserTimeouts(
        launch_ms=settings.LAUNCH_TIMEOUT_MS,
        navigation_ms=settings.NAVIGATION_TIMEOUT_MS,
        selector_ms=settings.SELECTOR_TIMEOUT_MS,
        element_ms=settings.ELEMENT_TIMEOUT_MS,
        grace_delay_ms=settings.GRACE_DELAY_MS,
    )


def load_output_paths(spec: RenderSpec) -> OutputPaths:
    return OutputPaths.under(settings.PUBLIC_DIR, spec.extension)
