"""Package version, shared by packaging metadata and the demo's ``--version`` output."""

__version__ = "0.1.0"

# Shown by ``argflags-demo --version``
__version_display__ = f"v{__version__}"
