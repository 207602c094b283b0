"""GEM controller optimizer — tuned T2 controller settings for GEM low-speed EVs."""

from gem_optimizer.config.request import OptimizationInput
from gem_optimizer.config.trip import TripData
from gem_optimizer.engine.catalog import get_factory_defaults, get_function_descriptions, sanitize_baseline
from gem_optimizer.engine.orchestrator import optimize
from gem_optimizer.errors import IncompatibleVersionError, OptimizerError
from gem_optimizer.export import ConfigurationEnvelope, export_configuration, import_configuration
from gem_optimizer.models.results import OptimizationResult
from gem_optimizer.models.trip import TripOptimizationResult
from gem_optimizer.trip.orchestrator import optimize_for_trip

__version__ = "1.0.0"

__all__ = [
    "OptimizationInput",
    "TripData",
    "get_factory_defaults",
    "get_function_descriptions",
    "sanitize_baseline",
    "optimize",
    "optimize_for_trip",
    "IncompatibleVersionError",
    "OptimizerError",
    "ConfigurationEnvelope",
    "export_configuration",
    "import_configuration",
    "OptimizationResult",
    "TripOptimizationResult",
]
