__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'optional'
__author__ = 'Eiko Reishin (影皇嶺臣)'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.0.0"

from .codecs import *
from .container import *
from .faults import *
from .reference import *
from .serialization import *

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
    "__path__",
    "__title__",
    "__author__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the container
__all__ += container.__all__  # type: ignore[attr-defined]
# Load the exposed API of the references
__all__ += reference.__all__  # type: ignore[attr-defined]
# Load the exposed API of the codecs
__all__ += codecs.__all__  # type: ignore[attr-defined]
# Load the exposed API of the serialization adapter
__all__ += tuple(name for name in serialization.__all__ if name not in codecs.__all__)  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
