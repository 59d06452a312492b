"""
FARS Reports Package (Imperative Shell)

Orchestrates data loading, plot generation, and file output.
No analysis logic lives here — this package calls the functional core
(src/fars/analysis/) and plotting (src/fars/plotting/) via the data
package (src/fars/data/).

Modules:
    generators: map_state / build_state_map and the ReportGenerator class
                that writes summary CSVs and state map HTML files.
"""

from .generators import (
    InvalidStateError,
    ReportGenerator,
    build_state_map,
    map_state,
)

__all__ = [
    'InvalidStateError',
    'ReportGenerator',
    'build_state_map',
    'map_state',
]
