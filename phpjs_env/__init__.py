"""phpjs-dev-environment — bootstrap a PHP + Node.js development toolchain."""

__version__ = "0.1.0"
