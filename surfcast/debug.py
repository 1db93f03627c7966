# ABOUTME: Debug logging helper gated by the DEBUG environment variable
# ABOUTME: Prints component-tagged trace lines to stdout when debugging is enabled

from surfcast.config import Config


def debug_log(message: str, component: str = "APP") -> None:
    """Print a tagged debug line when Config.DEBUG is on."""
    if Config.DEBUG:
        print(f"[{component}] {message}", flush=True)
