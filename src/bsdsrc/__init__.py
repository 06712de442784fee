"""bsdsrc - An object oriented interface to building FreeBSD from source."""

from .config import SourceConfig as SourceConfig
from .errors import BuildError as BuildError
from .errors import ErrorCode as ErrorCode
from .runner import Invocation as Invocation
from .runner import ProcessResult as ProcessResult
from .runner import Runner as Runner
from .runner import SubprocessRunner as SubprocessRunner
from .session import BuildResult as BuildResult
from .session import BuildSession as BuildSession
from .targets import Target as Target
from .targets import target as target
