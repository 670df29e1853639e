"""buildeta: live progress estimation for incremental builds.

Turns periodic snapshots of build bookkeeping into a status line such as
``1m25s (15%)``, predicting the time remaining and the share of work done:
  - Pull-based stream engine with fold, latch and branch combinators
  - Decayed online ratio estimates for the work rate and unknown rules
  - Background display driver with a stop token and Starting/Finished bookends
  - Titlebar, ``shake-progress`` helper and Rich console sinks
  - Env-driven settings (BUILDETA_*) and a Typer CLI
"""

__version__ = "0.1.0"
__description__ = "Live time-remaining estimates for incremental builds"

from buildeta.core.driver import (
    ProgressDisplay,
    progress_display,
    progress_display_tester,
)
from buildeta.display.program import progress_program
from buildeta.display.simple import progress_simple
from buildeta.display.titlebar import progress_titlebar
from buildeta.models.progress import Progress

__all__ = [
    "Progress",
    "ProgressDisplay",
    "progress_display",
    "progress_display_tester",
    "progress_program",
    "progress_simple",
    "progress_titlebar",
    "__version__",
]
