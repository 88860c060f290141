"""Generate unikernel application manifests as C source from JSON, with the
JSON reader, UTF-8 and calendar helpers it is built on."""

__version__ = "0.1.0"