"""Shared constants for identifier resolution, quantization and output."""

# Census shapefile exports carry the block identifier under one of these
# keys (2010 and 2020 vintages), in priority order.
KNOWN_ID_KEYS = ('GEOID10', 'GEOID20')
ID_KEY_PREFIX = 'GEOID'

COORDINATE_SCALE = 1_000_000
COORDINATE_LIMIT = 180.0

MAX_INTERNED_ID = 2 ** 32 - 1

DEFAULT_DELIMITER = ','
DEFAULT_N_JOBS = -1
DEFAULT_BACKEND = 'loky'
SUPPORTED_BACKENDS = ('loky', 'threading', 'multiprocessing', 'sequential')

GEOJSON_SUFFIXES = ('.geojson', '.json')

FRAME_REGION_COL = 'region_id'
FRAME_NEIGHBOR_COL = 'neighbor_id'
