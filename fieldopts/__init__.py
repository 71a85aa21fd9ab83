__title__ = 'fieldopts'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.0.0"

from .config import *
from .declarations import *
from .descriptors import *
from .faults import *
from .formatting import *
from .kinds import *
from .logs import *
from .options import *
from .parser import *
from .registry import *
from .tokens import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

# Placeholder, modified by dynamic-versioning.
version_info = VersionInfo(0, 0, 0, "final", 0, "")

__all__ = (
    "__title__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the declarations
__all__ += declarations.__all__  # type: ignore[attr-defined]
# Load the exposed API of the value kinds
__all__ += kinds.__all__  # type: ignore[attr-defined]
# Load the exposed API of the configuration
__all__ += config.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
# Load the exposed API of the options facade
__all__ += options.__all__  # type: ignore[attr-defined]
# Load the exposed API of the building blocks
__all__ += descriptors.__all__ + registry.__all__ + parser.__all__  # type: ignore[attr-defined]
__all__ += tokens.__all__ + formatting.__all__ + logs.__all__  # type: ignore[attr-defined]
