"""
tests

Test suite for the inode-msd-decoder project.

Covers the field decoders, the device model registry and host adapter, the direct
decode entry points, the record models, configuration and metrics.
"""
