"""Report JSX component and prop usage across a codebase."""

__version__ = "0.1.0"

from .models import (  # noqa: E402
    DYNAMIC,
    SPREAD_PROP_NAME,
    Analysis,
    ComponentFact,
    LineRecord,
    ParseErrorRecord,
    PropFact,
    SourceLocation,
)
from .options import AnalyzeOptions, InvalidOptionsError, ReportFacet  # noqa: E402
from .orchestrator import Orchestrator, analyze  # noqa: E402
from .sorting import SortPolicy  # noqa: E402
from .syntax import UnsupportedSyntax  # noqa: E402

__all__ = [
    "Analysis",
    "AnalyzeOptions",
    "ComponentFact",
    "DYNAMIC",
    "InvalidOptionsError",
    "LineRecord",
    "Orchestrator",
    "ParseErrorRecord",
    "PropFact",
    "ReportFacet",
    "SPREAD_PROP_NAME",
    "SortPolicy",
    "SourceLocation",
    "UnsupportedSyntax",
    "analyze",
    "__version__",
]
