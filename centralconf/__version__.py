"""Version information for centralconf."""

# Semantic versioning: MAJOR.MINOR.PATCH
# MAJOR: Breaking changes to the snapshot accessor or wire handling
# MINOR: New dynamic options or features, backward compatible
# PATCH: Bug fixes, backward compatible

__version__ = "0.3.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Version history:
# 0.3.0 - Status API and CLI
#         - GET /api/v1/config and /api/v1/config/central (read-only)
#         - centralconf show / fetch / run commands
#         - Field-level update hooks (log level switch)
# 0.2.0 - Data-driven dynamic option registry
#         - Per-key fail-soft parsing (bad values dropped, rest applied)
#         - Cache-Control max-age floor (5s) and invalid-value fallback (5min)
# 0.1.0 - Initial release
#         - Conditional polling with ETag / If-None-Match
#         - Layered snapshot over static configuration
