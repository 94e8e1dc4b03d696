# __init__.py for load_db package
# Only import modules, not symbols; region_db depends on regions.aggregator,
# which in turn imports download (and through it unzipper).
from . import unzipper
