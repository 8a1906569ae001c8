"""
Configuration constants for Image Duplicate Checker.

This module contains the built-in defaults:
- Image extensions that qualify a file for scanning
- Directory names that are never descended into
- Hashing and concurrency limits
"""

# Default image extensions (lowercase, with leading dot)
IMAGE_EXTENSIONS = frozenset({
    '.png', '.jpg', '.jpeg', '.gif', '.bmp', '.webp',
})

# Directory names skipped by every candidate source
EXCLUDED_DIR_NAMES = frozenset({'node_modules'})

# Entries starting with this prefix are skipped by the recursive walk
HIDDEN_PREFIX = '.'

# Content fingerprint settings
HASH_ALGORITHM = 'md5'
HASH_CHUNK_SIZE = 65536

# Number of files hashed concurrently during a scan
DEFAULT_WORKERS = 8
MAX_WORKERS = 32

# How search paths are interpreted:
#   'roots'    - each entry is a literal subdirectory joined to the workspace
#                root (default: search paths are folders, not globs)
#   'patterns' - each entry is a glob pattern resolved against the workspace
#                root; only used when a scan asks for it
# Empty search paths mean a recursive walk of the workspace roots in both modes.
SEARCH_MODES = ('roots', 'patterns')
DEFAULT_SEARCH_MODE = 'roots'

# Pending progress messages kept before new ones are dropped
PROGRESS_QUEUE_SIZE = 256

# Seconds a finished scan waits for the progress sink to catch up; messages
# still pending after that are discarded
PROGRESS_FLUSH_TIMEOUT = 0.2

# Web GUI
DEFAULT_PORT = 5000
