from src.utils.settings import (load_browser_timeouts, load_output_paths,
                                load_render_spec)
from src.utils.summary import format_execution_times, format_summary
