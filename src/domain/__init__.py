from src.domain.errors import (CaptureError, DecodeError, ExtractAreaError,
                               FetchError, ForecastError, ImageProcessingError,
                               MissingDimensionsError, RenderError,
                               RenderLaunchError, ResampleError, TemplateError)
from src.domain.schemas.alert import (AlertLevel, AlertStatus,
                                      ColorDetectionResult)
from src.domain.schemas.forecast import ForecastResult, OutputPaths
from src.domain.schemas.image import RawImage
from src.domain.schemas.render import BrowserTimeouts, RenderSpec
