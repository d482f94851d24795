import importlib.metadata

try:
    VERSION = importlib.metadata.version("inode-msd-decoder")
except importlib.metadata.PackageNotFoundError:
    # Fallback for when the package is not installed (e.g., during development tests)
    VERSION = "0.0.0-dev"
