__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'parley'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.1.0"

# Bound before the star imports: the registry() factory shadows its module name.
from . import config as _config
from . import definitions as _definitions
from . import faults as _faults
from . import fields as _fields
from . import registry as _registry
from . import results as _results

from .config import *
from .definitions import *
from .faults import *
from .fields import *
from .registry import *
from .results import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

# Placeholder, modified by dynamic-versioning.
version_info = VersionInfo(0, 1, 0, "final", 0, "")

__all__ = (
    "__path__",
    "__title__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the configuration
__all__ += _config.__all__
# Load the exposed API of the definitions
__all__ += _definitions.__all__
# Load the exposed API of the faults
__all__ += _faults.__all__
# Load the exposed API of the fields
__all__ += _fields.__all__
# Load the exposed API of the registry
__all__ += _registry.__all__
# Load the exposed API of the results
__all__ += _results.__all__
