"""
Defines Prometheus metrics for monitoring iNode MSD decoding.

Counters are registered on the default prometheus_client registry, so an
embedding application exposes them with its own exporter.
"""

from prometheus_client import Counter

MSD_DECODES = Counter(
    "inode_msd_decodes_total", "Total successfully decoded iNode MSD payloads", ["model"]
)
MSD_DECODE_ERRORS = Counter(
    "inode_msd_decode_errors_total", "Total iNode MSD decode errors", ["reason"]
)
MSD_LOOKUP_MISSES = Counter(
    "inode_msd_lookup_misses_total", "Total MSD payloads with no registered iNode device model"
)
MSD_FALLBACK_DECODES = Counter(
    "inode_msd_fallback_decodes_total",
    "Total MSD payloads handed to the previously installed decoder",
)
