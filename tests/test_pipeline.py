import shutil
from pathlib import Path

import cv2
import httpx
import numpy as np
import pytest

from src.domain import (AlertLevel, BrowserTimeouts, FetchError, OutputPaths,
                        RenderSpec)
from src.nodes.render import ReportScreenshotNode
from src.pipeline import ForecastPipeline
from src.render.session import RenderSession
from src.service import ForecastService
from tests.fakes import RED, FakePage, FakePlaywright, striped_image

TEMPLATE_PATH = Path(__file__).resolve().parents[1] / "public" / "template.html"


def _forecast_png(color=None, stripes=0, top=80, bottom=50):
    body = striped_image(500, 310, color, stripes)
    padded = np.pad(body, ((top, bottom), (0, 0), (0, 0)), mode="edge")
    ok, buffer = cv2.imencode(".png", padded)
    assert ok
    return buffer.tobytes()


@pytest.fixture
def paths(tmp_path):
    paths = OutputPaths.under(tmp_path / "public")
    paths.template.parent.mkdir(parents=True)
    shutil.copy(TEMPLATE_PATH, paths.template)
    return paths


def _pipeline(paths, image_bytes, driver=None, status=200):
    client = httpx.Client(transport=httpx.MockTransport(
        lambda request: httpx.Response(status, content=image_bytes)))
    pipeline = ForecastPipeline.build(
        image_url="https://forecast.example/RipRiskDay1.jpg",
        paths=paths,
        spec=RenderSpec(target_width=1500),
        http_client=client,
    )
    driver = driver or FakePlaywright(FakePage([], capture_size=(1860, 3000)))

    def session_factory(spec, timeouts, executable_path):
        return RenderSession(spec, timeouts, executable_path, playwright_factory=driver)

    for node in pipeline.nodes:
        if isinstance(node, ReportScreenshotNode):
            node.session_factory = session_factory
    return pipeline, driver


def test_build_orders_nodes():
    pipeline = ForecastPipeline.build("https://x", OutputPaths.under(Path("/tmp/p")), RenderSpec(),
                                      BrowserTimeouts())

    assert [n.name for n in pipeline.nodes] == [
        "Downloader", "Crop", "SaveForecast", "ColorDetection",
        "AlertLevel", "Template", "Screenshot", "Resample",
    ]


def test_red_forecast_end_to_end(paths):
    pipeline, driver = _pipeline(paths, _forecast_png(RED, stripes=3))

    result = ForecastService(pipeline, paths).get_forecast()

    assert result.image_processed is True
    assert result.color_detection.has_red is True
    assert result.color_detection.red_percentage == pytest.approx(30.0)
    assert result.alert_status.level is AlertLevel.RED
    assert result.alert_status.label == "STRONG CURRENTS"
    assert result.image_path == paths.forecast_image
    assert cv2.imread(str(paths.forecast_image)).shape[:2] == (310, 500)
    assert 'status-overlay" id="status-red"' in paths.report_html.read_text(encoding="utf-8")
    assert result.output_image_path == paths.output_image
    assert cv2.imread(str(paths.output_image)).shape[:2] == (2419, 1500)
    assert not paths.capture.exists()
    assert driver.log[-1] == "playwright.stop"


def test_calm_forecast_end_to_end(paths):
    pipeline, _ = _pipeline(paths, _forecast_png())

    result = ForecastService(pipeline, paths).get_forecast()

    assert result.color_detection.has_red is False
    assert result.color_detection.has_yellow is False
    assert result.alert_status.level is AlertLevel.CALM
    assert result.alert_status.label == "CALM CONDITIONS"


def test_fetch_failure_aborts_run(paths):
    pipeline, driver = _pipeline(paths, b"", status=503)

    with pytest.raises(FetchError):
        ForecastService(pipeline, paths).get_forecast()

    assert driver.log == []
    assert not paths.output_image.exists()


def test_pipeline_records_execution_times(paths):
    pipeline, _ = _pipeline(paths, _forecast_png())

    context = pipeline.run({"run_id": "test"})

    assert set(context["execution_times"]) == {n.name for n in pipeline.nodes} | {"total_pipeline"}
